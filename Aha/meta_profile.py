# -*- coding: utf-8 -*-
"""
meta_profile.py — cross-topic picture of one subject

Responsibilities
----------------
- Lifecycle stage per insight (new → growing → mature → integrated).
- Global semantic profile: average saturation, summed modality/valence
  counts, phase tallies, pressure and negativity indices.
- Cross-topic pattern detection (cross_pressure, cross_exploration,
  stuck_cluster).
- Concept index over the optional ``concepts`` carried by insights.

Topic phases are not derived here. They come from an outside collaborator
as a ``{topic_id: phase}`` mapping; topics without one count as
``exploration``.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .chamber import InsightChamber
from .config import AhaConfig
from .lexicon import PHASE_ALIASES, PHASES
from .models import Chamber, Insight
from .topic_stats import SemanticCounts, TopicStats, TopicStatsCalculator
from .utils import as_utc, days_between, parse_iso, utc_now

__all__ = [
    "TopicProfile",
    "GlobalProfile",
    "CrossTopicPattern",
    "ConceptEntry",
    "MetaProfile",
    "MetaProfileBuilder",
    "normalize_phase",
    "build_meta_profile",
]

logger = logging.getLogger(__name__)

DEFAULT_PHASE = "exploration"


def normalize_phase(phase: Optional[str]) -> Optional[str]:
    if phase is None:
        return None
    key = phase.strip().lower()
    return PHASE_ALIASES.get(key, key)


@dataclass
class TopicProfile:
    topic_id: str
    stats: TopicStats
    semantic_counts: SemanticCounts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topic_id": self.topic_id,
            "stats": self.stats.to_dict(),
            "semantic_counts": self.semantic_counts.to_dict(),
        }


@dataclass
class GlobalProfile:
    avg_saturation: float = 0.0
    modality: Dict[str, int] = field(default_factory=lambda: {"obligation": 0, "possibility": 0, "obstruction": 0, "neutral": 0})
    valence: Dict[str, int] = field(default_factory=lambda: {"negative": 0, "positive": 0, "mixed": 0, "neutral": 0})
    phases: Dict[str, int] = field(default_factory=lambda: {p: 0 for p in PHASES})
    pressure_index: float = 0.0
    negativity_index: float = 0.0
    stuck_topics: int = 0
    integration_topics: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CrossTopicPattern:
    id: str
    type: str
    description: str
    topics: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ConceptEntry:
    key: str
    total_count: int
    topic_count: int
    topics: List[str]
    examples: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MetaProfile:
    subject_id: str
    topics: List[TopicProfile] = field(default_factory=list)
    global_profile: GlobalProfile = field(default_factory=GlobalProfile)
    patterns: List[CrossTopicPattern] = field(default_factory=list)
    insights: List[Insight] = field(default_factory=list)
    concepts: List[ConceptEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subject_id": self.subject_id,
            "topics": [t.to_dict() for t in self.topics],
            "global": self.global_profile.to_dict(),
            "patterns": [p.to_dict() for p in self.patterns],
            "insights": [ins.to_dict() for ins in self.insights],
            "concepts": [c.to_dict() for c in self.concepts],
        }


class MetaProfileBuilder:
    def __init__(self, calculator: Optional[TopicStatsCalculator] = None, config: Optional[AhaConfig] = None):
        self.config = config or AhaConfig()
        self.calculator = calculator or TopicStatsCalculator(config=self.config)

    # ---------------------------
    # Lifecycle
    # ---------------------------
    def lifecycle(self, insight: Insight, now: Optional[datetime] = None) -> str:
        now = as_utc(now or utc_now())
        cfg = self.config.lifecycle
        first = parse_iso(insight.first_seen)
        last = parse_iso(insight.last_updated) or first

        age_days = days_between(first, now)
        recency_days = days_between(last, now)
        evidence = insight.strength.evidence_count if insight.strength else 0

        status = "new"
        if evidence >= cfg.growing_min_evidence and age_days > cfg.growing_min_age_days:
            status = "growing"
        if evidence >= cfg.mature_min_evidence and age_days > cfg.mature_min_age_days:
            status = "mature"
        if status == "mature" and recency_days > cfg.integrated_min_idle_days:
            status = "integrated"
        return status

    def enrich_with_lifecycle(self, chamber: Chamber, subject_id: str, now: Optional[datetime] = None) -> List[Insight]:
        now = as_utc(now or utc_now())
        return [
            ins.with_lifecycle(self.lifecycle(ins, now))
            for ins in chamber.insights
            if ins.subject_id == subject_id
        ]

    # ---------------------------
    # Global profile
    # ---------------------------
    @staticmethod
    def global_profile(topic_profiles: Sequence[TopicProfile]) -> GlobalProfile:
        profile = GlobalProfile()
        if not topic_profiles:
            return profile

        sum_saturation = 0.0
        for tp in topic_profiles:
            sum_saturation += tp.stats.insight_saturation or 0
            for key, value in tp.semantic_counts.modality.items():
                profile.modality[key] = profile.modality.get(key, 0) + value
            for key, value in tp.semantic_counts.valence.items():
                profile.valence[key] = profile.valence.get(key, 0) + value

            phase = normalize_phase(tp.stats.user_phase) or DEFAULT_PHASE
            if phase in profile.phases:
                profile.phases[phase] += 1

        mod = profile.modality
        val = profile.valence
        profile.avg_saturation = sum_saturation / len(topic_profiles)
        profile.pressure_index = (mod["obligation"] + mod["obstruction"]) / max(1, mod["possibility"] + mod["neutral"])
        profile.negativity_index = val["negative"] / max(1, val["positive"] + val["mixed"] + val["neutral"])
        profile.stuck_topics = profile.phases["stuck"]
        profile.integration_topics = profile.phases["integration"]
        return profile

    # ---------------------------
    # Patterns
    # ---------------------------
    def cross_topic_patterns(
        self, topic_profiles: Sequence[TopicProfile], global_profile: GlobalProfile
    ) -> List[CrossTopicPattern]:
        cfg = self.config.patterns
        patterns: List[CrossTopicPattern] = []

        def topics_in(*phases: str) -> List[str]:
            return [tp.topic_id for tp in topic_profiles if normalize_phase(tp.stats.user_phase) in phases]

        if global_profile.pressure_index > cfg.high_pressure:
            pressed = topics_in("press", "stuck")
            if len(pressed) >= cfg.min_topics:
                patterns.append(CrossTopicPattern(
                    id="cross_pressure",
                    type="global_pattern",
                    description="Strong must/should/obstruction pattern across several topics.",
                    topics=pressed,
                ))

        if global_profile.pressure_index < cfg.low_pressure and global_profile.negativity_index < cfg.low_negativity:
            exploring = topics_in("exploration", "integration")
            if len(exploring) >= cfg.min_topics:
                patterns.append(CrossTopicPattern(
                    id="cross_exploration",
                    type="global_pattern",
                    description="Exploratory, open pattern across several topics.",
                    topics=exploring,
                ))

        stuck = topics_in("stuck")
        if len(stuck) >= cfg.min_topics:
            patterns.append(CrossTopicPattern(
                id="stuck_cluster",
                type="cluster",
                description="Several topics are in a stuck phase at the same time.",
                topics=stuck,
            ))

        logger.debug("Detected patterns: %s", [p.id for p in patterns])
        return patterns

    # ---------------------------
    # Concept index
    # ---------------------------
    def concept_index(self, insights: Sequence[Insight]) -> List[ConceptEntry]:
        max_examples = self.config.concepts.max_examples
        index: Dict[str, Dict[str, Any]] = {}

        for ins in insights:
            if ins is None or not ins.concepts:
                continue
            for c in ins.concepts:
                if c is None or not c.key:
                    continue
                entry = index.setdefault(c.key, {"total_count": 0, "topics": {}, "examples": {}})
                entry["total_count"] += c.count or 0
                if ins.topic_id:
                    entry["topics"].setdefault(ins.topic_id, None)
                for ex in c.examples or []:
                    if len(entry["examples"]) < max_examples:
                        entry["examples"].setdefault(ex, None)

        entries = [
            ConceptEntry(
                key=key,
                total_count=e["total_count"],
                topic_count=len(e["topics"]),
                topics=list(e["topics"]),
                examples=list(e["examples"]),
            )
            for key, e in index.items()
        ]
        entries.sort(key=lambda e: e.total_count, reverse=True)
        return entries

    # ---------------------------
    # Composition
    # ---------------------------
    def topic_profiles(
        self, chamber: Chamber, subject_id: str, phases: Optional[Mapping[str, str]] = None
    ) -> List[TopicProfile]:
        phases = phases or {}
        profiles: List[TopicProfile] = []
        for topic_id in InsightChamber.topics_for_subject(chamber, subject_id):
            insights = InsightChamber.insights_for_topic(chamber, subject_id, topic_id)
            stats = self.calculator.stats_for(insights, subject_id, topic_id)
            stats.user_phase = phases.get(topic_id)
            profiles.append(TopicProfile(
                topic_id=topic_id,
                stats=stats,
                semantic_counts=self.calculator.semantic_counts(insights),
            ))
        return profiles

    def build(
        self,
        chamber: Chamber,
        subject_id: str,
        phases: Optional[Mapping[str, str]] = None,
        now: Optional[datetime] = None,
    ) -> MetaProfile:
        topic_profiles = self.topic_profiles(chamber, subject_id, phases)
        global_profile = self.global_profile(topic_profiles)
        patterns = self.cross_topic_patterns(topic_profiles, global_profile)
        enriched = self.enrich_with_lifecycle(chamber, subject_id, now)
        return MetaProfile(
            subject_id=subject_id,
            topics=topic_profiles,
            global_profile=global_profile,
            patterns=patterns,
            insights=enriched,
            concepts=self.concept_index(enriched),
        )


_default_builder = MetaProfileBuilder()


def build_meta_profile(
    chamber: Chamber,
    subject_id: str,
    phases: Optional[Mapping[str, str]] = None,
    now: Optional[datetime] = None,
) -> MetaProfile:
    return _default_builder.build(chamber, subject_id, phases, now)
