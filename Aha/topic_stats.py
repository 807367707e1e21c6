# -*- coding: utf-8 -*-
"""
topic_stats.py — per-topic readiness metrics

Public API
----------
- class TopicStatsCalculator:
    - compute(chamber, subject_id, topic_id) -> TopicStats
    - density(insights) -> int            (lexical diversity, 0–100)
    - saturation(insights) -> int         (amount + variety, 0–100)
    - artifact_type(saturation, density) -> "short" | "list" | "path" | "article"
    - semantic_counts(insights) -> SemanticCounts
    - dimension_summary(insights) -> Dict[str, int]
    - topics_overview(chamber) -> List[TopicStats]

Everything is recomputed from the Chamber on each call; nothing is cached.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .chamber import InsightChamber
from .config import AhaConfig
from .lexicon import DIMENSION_KEYWORDS
from .models import Chamber, Insight
from .text import Tokenizer
from .utils import clamp, round_half_up

__all__ = [
    "TopicStats",
    "SemanticCounts",
    "TopicStatsCalculator",
    "artifact_type",
    "compute_topic_stats",
    "compute_semantic_counts",
    "compute_dimension_summary",
    "topics_overview",
]

logger = logging.getLogger(__name__)


@dataclass
class TopicStats:
    topic_id: str
    subject_id: str
    insight_saturation: int = 0
    concept_density: int = 0
    artifact_type: str = "short"
    insight_count: int = 0
    user_phase: Optional[str] = None  # supplied externally, never computed here

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _bucket(*labels: str) -> Dict[str, int]:
    return {label: 0 for label in labels}


@dataclass
class SemanticCounts:
    frequency: Dict[str, int] = field(default_factory=lambda: _bucket("unknown", "rare", "often", "always"))
    valence: Dict[str, int] = field(default_factory=lambda: _bucket("negative", "positive", "mixed", "neutral"))
    modality: Dict[str, int] = field(default_factory=lambda: _bucket("obligation", "possibility", "obstruction", "neutral"))
    time_ref: Dict[str, int] = field(default_factory=lambda: _bucket("now", "past", "future", "mixed"))
    tempo: Dict[str, int] = field(default_factory=lambda: _bucket("unknown", "sudden", "gradual", "slow"))
    meta: Dict[str, int] = field(default_factory=lambda: _bucket("none", "meta", "uncertain"))
    contrast_count: int = 0
    absolute_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Bucket used when an insight lacks a value (or has an unknown one) for an axis
_FALLBACK_BUCKET = {
    "frequency": "unknown",
    "valence": "neutral",
    "modality": "neutral",
    "time_ref": "mixed",
    "tempo": "unknown",
    "meta": "none",
}


def artifact_type(saturation: float, density: float) -> str:
    """Ordered decision table; the first matching row wins."""
    if saturation < 30 and density < 30:
        return "short"
    if 30 <= saturation < 60 and density < 60:
        return "list"
    if 30 <= saturation < 60 and density >= 60:
        return "path"
    if saturation >= 60 and density >= 60:
        return "article"
    if saturation >= 60 and density < 60:
        return "path"
    return "short"


class TopicStatsCalculator:
    def __init__(self, tokenizer: Optional[Tokenizer] = None, config: Optional[AhaConfig] = None):
        self.tokenizer = tokenizer or Tokenizer()
        self.config = config or AhaConfig()

    def compute(self, chamber: Chamber, subject_id: str, topic_id: str) -> TopicStats:
        insights = InsightChamber.insights_for_topic(chamber, subject_id, topic_id)
        return self.stats_for(insights, subject_id, topic_id)

    def stats_for(self, insights: Sequence[Insight], subject_id: str, topic_id: str) -> TopicStats:
        saturation = self.saturation(insights)
        density = self.density(insights)
        stats = TopicStats(
            topic_id=topic_id,
            subject_id=subject_id,
            insight_saturation=saturation,
            concept_density=density,
            artifact_type=artifact_type(saturation, density),
            insight_count=len(insights),
        )
        logger.debug("Stats %s/%s: %s", subject_id, topic_id, stats)
        return stats

    def density(self, insights: Sequence[Insight]) -> int:
        combined = " ".join(f"{ins.title}. {ins.summary}" for ins in insights)
        tokens = self.tokenizer.content_tokens(combined)
        if not tokens:
            return 0
        raw = len(set(tokens)) / len(tokens)
        normalized = clamp(raw / self.config.stats.density_reference, 0.0, 1.0)
        return round_half_up(normalized * 100)

    def saturation(self, insights: Sequence[Insight]) -> int:
        n = len(insights)
        if n == 0:
            return 0
        cfg = self.config.stats
        base = min(cfg.base_max_insights, n) * cfg.base_per_insight

        dims_seen = set()
        time_seen = set()
        valence_seen = set()
        for ins in insights:
            dims_seen.update(ins.dimensions or [])
            if ins.semantic is not None:
                if ins.semantic.time_ref:
                    time_seen.add(ins.semantic.time_ref)
                if ins.semantic.valence:
                    valence_seen.add(ins.semantic.valence)

        dim_bonus = min(len(dims_seen), cfg.dimension_cap) * cfg.dimension_bonus
        time_bonus = min(len(time_seen), cfg.time_cap) * cfg.time_bonus
        val_bonus = min(len(valence_seen), cfg.valence_cap) * cfg.valence_bonus

        return int(clamp(base + dim_bonus + time_bonus + val_bonus, 0, 100))

    # ---------------------------
    # Summaries
    # ---------------------------
    @staticmethod
    def semantic_counts(insights: Sequence[Insight]) -> SemanticCounts:
        counts = SemanticCounts()
        for ins in insights:
            sem = ins.semantic
            for axis, fallback in _FALLBACK_BUCKET.items():
                bucket: Dict[str, int] = getattr(counts, axis)
                value = getattr(sem, axis, None) if sem is not None else None
                key = value if value in bucket else fallback
                bucket[key] += 1
            if sem is not None and sem.has_contrast:
                counts.contrast_count += 1
            if sem is not None and sem.has_absolute:
                counts.absolute_count += 1
        return counts

    @staticmethod
    def dimension_summary(insights: Sequence[Insight]) -> Dict[str, int]:
        counts = {label: 0 for label in DIMENSION_KEYWORDS}
        for ins in insights:
            for d in ins.dimensions or []:
                if d in counts:
                    counts[d] += 1
        return counts

    def topics_overview(self, chamber: Chamber) -> List[TopicStats]:
        """Stats for every (subject, topic) pair, in order of first appearance."""
        keys: Dict[tuple, None] = {}
        for ins in chamber.insights:
            keys.setdefault((ins.subject_id, ins.topic_id), None)
        return [self.compute(chamber, subject_id, topic_id) for subject_id, topic_id in keys]


# -------------------------------------------------------------
# Module-level API over a default calculator
# -------------------------------------------------------------
_default_calculator = TopicStatsCalculator()


def compute_topic_stats(chamber: Chamber, subject_id: str, topic_id: str) -> TopicStats:
    return _default_calculator.compute(chamber, subject_id, topic_id)


def compute_semantic_counts(insights: Sequence[Insight]) -> SemanticCounts:
    return TopicStatsCalculator.semantic_counts(insights)


def compute_dimension_summary(insights: Sequence[Insight]) -> Dict[str, int]:
    return TopicStatsCalculator.dimension_summary(insights)


def topics_overview(chamber: Chamber) -> List[TopicStats]:
    return _default_calculator.topics_overview(chamber)
