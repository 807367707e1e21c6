# -*- coding: utf-8 -*-
"""
models.py — data records shared by the engine

Fields are plain values so every record converts to a JSON-ready dict
(``to_dict``) and back (``from_dict``); storage is the caller's job.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .lexicon import DEFAULT_DIMENSION
from .semantics import SemanticTags

__all__ = [
    "SCORE_PER_EVIDENCE",
    "MAX_SCORE",
    "Signal",
    "Strength",
    "Concept",
    "Insight",
    "Chamber",
]

SCORE_PER_EVIDENCE = 10
MAX_SCORE = 100


@dataclass(frozen=True)
class Signal:
    id: str
    timestamp: str
    subject_id: str
    topic_id: str
    text: str


@dataclass
class Strength:
    evidence_count: int = 1

    @property
    def total_score(self) -> int:
        return min(MAX_SCORE, self.evidence_count * SCORE_PER_EVIDENCE)

    def to_dict(self) -> Dict[str, int]:
        return {"evidence_count": self.evidence_count, "total_score": self.total_score}


@dataclass
class Concept:
    key: str
    count: int = 0
    examples: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "count": self.count, "examples": list(self.examples)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Concept":
        return cls(
            key=str(data.get("key") or ""),
            count=int(data.get("count") or 0),
            examples=list(data.get("examples") or []),
        )


def _evidence_count(value: Any) -> int:
    """Persisted counts below 1, missing or non-numeric load as 1."""
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        return 1


@dataclass
class Insight:
    id: str
    subject_id: str
    topic_id: str
    title: str
    summary: str
    strength: Strength
    first_seen: str
    last_updated: str
    semantic: Optional[SemanticTags] = None
    dimensions: List[str] = field(default_factory=lambda: [DEFAULT_DIMENSION])
    concepts: Optional[List[Concept]] = None
    lifecycle: Optional[str] = None

    def with_lifecycle(self, stage: str) -> "Insight":
        """Return a detached copy tagged with ``stage``; ``self`` is untouched."""
        return replace(
            self,
            strength=Strength(self.strength.evidence_count),
            dimensions=list(self.dimensions),
            concepts=[replace(c, examples=list(c.examples)) for c in self.concepts] if self.concepts is not None else None,
            semantic=replace(self.semantic) if self.semantic is not None else None,
            lifecycle=stage,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "subject_id": self.subject_id,
            "topic_id": self.topic_id,
            "title": self.title,
            "summary": self.summary,
            "strength": self.strength.to_dict(),
            "first_seen": self.first_seen,
            "last_updated": self.last_updated,
            "semantic": self.semantic.to_dict() if self.semantic is not None else None,
            "dimensions": list(self.dimensions),
        }
        if self.concepts is not None:
            data["concepts"] = [c.to_dict() for c in self.concepts]
        if self.lifecycle is not None:
            data["lifecycle"] = self.lifecycle
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Insight":
        strength = data.get("strength") or {}
        concepts = data.get("concepts")
        first_seen = str(data.get("first_seen") or "")
        return cls(
            id=str(data.get("id") or ""),
            subject_id=str(data.get("subject_id") or ""),
            topic_id=str(data.get("topic_id") or ""),
            title=str(data.get("title") or ""),
            summary=str(data.get("summary") or ""),
            strength=Strength(_evidence_count(strength.get("evidence_count"))),
            first_seen=first_seen,
            last_updated=str(data.get("last_updated") or first_seen),
            semantic=SemanticTags.from_dict(data.get("semantic")),
            dimensions=list(data.get("dimensions") or [DEFAULT_DIMENSION]),
            concepts=[Concept.from_dict(c) for c in concepts if c] if concepts is not None else None,
            lifecycle=data.get("lifecycle"),
        )


@dataclass
class Chamber:
    insights: List[Insight] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"insights": [ins.to_dict() for ins in self.insights]}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Chamber":
        rows = (data or {}).get("insights") or []
        return cls(insights=[Insight.from_dict(r) for r in rows])
