# -*- coding: utf-8 -*-
"""
semantics.py — rule-based semantic tagging of a single text

Each axis is an ordered rule chain over lowercase substring matches.
The order of the checks below is the contract: later rules may override
earlier ones (modality) or are skipped once an earlier rule matched
(intensity, frequency, tempo, meta).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional

from . import lexicon as lx

__all__ = ["SemanticTags", "SemanticClassifier"]


@dataclass
class SemanticTags:
    intensity: str = "medium"
    frequency: str = "unknown"
    valence: str = "neutral"
    modality: str = "neutral"
    subject_type: str = "diffuse"
    time_ref: str = "now"
    tempo: str = "unknown"
    meta: str = "none"
    has_contrast: bool = False
    has_absolute: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["SemanticTags"]:
        if data is None:
            return None
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)


def _contains_any(lower: str, words: Iterable[str]) -> bool:
    return any(w in lower for w in words)


def _count_hits(lower: str, words: Iterable[str]) -> int:
    return sum(1 for w in words if w in lower)


class SemanticClassifier:
    def classify(self, text: Optional[str]) -> SemanticTags:
        lower = (text or "").lower()
        return SemanticTags(
            intensity=self._intensity(lower),
            frequency=self._frequency(lower),
            valence=self._valence(lower),
            modality=self._modality(lower),
            subject_type=self._subject_type(lower),
            time_ref=self._time_ref(lower),
            tempo=self._tempo(lower),
            meta=self._meta(lower),
            has_contrast=_contains_any(lower, lx.CONTRAST_MARKERS),
            has_absolute=_contains_any(lower, lx.ABSOLUTE_MARKERS),
        )

    # ---------------------------
    # Axes
    # ---------------------------
    @staticmethod
    def _intensity(lower: str) -> str:
        if _contains_any(lower, lx.HIGH_INTENSITY):
            return "high"
        if _contains_any(lower, lx.LOW_INTENSITY):
            return "low"
        return "medium"

    @staticmethod
    def _frequency(lower: str) -> str:
        if _contains_any(lower, lx.FREQUENCY_ALWAYS):
            return "always"
        if _contains_any(lower, lx.FREQUENCY_OFTEN):
            return "often"
        if _contains_any(lower, lx.FREQUENCY_RARE):
            return "rare"
        return "unknown"

    @staticmethod
    def _modality(lower: str) -> str:
        modality = "neutral"
        if _contains_any(lower, lx.MODALITY_OBLIGATION):
            modality = "obligation"
        elif _contains_any(lower, lx.MODALITY_POSSIBILITY):
            modality = "possibility"
        # obstruction wins over both
        if _contains_any(lower, lx.MODALITY_OBSTRUCTION):
            modality = "obstruction"
        return modality

    @staticmethod
    def _time_ref(lower: str) -> str:
        refs: List[str] = []
        if _contains_any(lower, lx.TIME_NOW):
            refs.append("now")
        if _contains_any(lower, lx.TIME_PAST):
            refs.append("past")
        if _contains_any(lower, lx.TIME_FUTURE):
            refs.append("future")
        if not refs:
            return "now"
        if len(refs) == 1:
            return refs[0]
        return "mixed"

    @staticmethod
    def _subject_type(lower: str) -> str:
        if lx.SELF_RE.search(lower):
            return "self"
        if lx.OTHER_RE.search(lower):
            return "other"
        return "diffuse"

    @staticmethod
    def _valence(lower: str) -> str:
        pos = _count_hits(lower, lx.POSITIVE_WORDS)
        neg = _count_hits(lower, lx.NEGATIVE_WORDS)
        if pos > neg and pos > 0:
            return "positive"
        if neg > pos and neg > 0:
            return "negative"
        if pos > 0 and neg > 0:
            return "mixed"
        return "neutral"

    @staticmethod
    def _tempo(lower: str) -> str:
        if _contains_any(lower, lx.TEMPO_SUDDEN):
            return "sudden"
        if _contains_any(lower, lx.TEMPO_GRADUAL):
            return "gradual"
        if _contains_any(lower, lx.TEMPO_SLOW):
            return "slow"
        return "unknown"

    @staticmethod
    def _meta(lower: str) -> str:
        if _contains_any(lower, lx.META_WORDS):
            return "meta"
        if _contains_any(lower, lx.UNCERTAIN_WORDS):
            return "uncertain"
        return "none"
