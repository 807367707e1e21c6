# -*- coding: utf-8 -*-
"""
chamber.py — signal ingestion into the insight collection

A signal either reinforces the most similar existing insight of the same
(subject, topic) or becomes a new insight. The Chamber passed in is
mutated in place and returned; nothing is ever removed from it.

Ingestion is not synchronised. Callers that ingest concurrently into the
same (subject, topic) must serialise those calls themselves.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .config import AhaConfig
from .dimensions import DimensionClassifier
from .models import Chamber, Insight, Signal, Strength
from .semantics import SemanticClassifier
from .text import SimilarityScorer, Tokenizer, make_title, split_into_sentences
from .utils import new_id, utc_now_iso

__all__ = [
    "InsightChamber",
    "create_empty_chamber",
    "create_signal",
    "ingest",
    "insights_for_topic",
    "topics_for_subject",
]

logger = logging.getLogger(__name__)


class InsightChamber:
    def __init__(
        self,
        scorer: Optional[SimilarityScorer] = None,
        semantics: Optional[SemanticClassifier] = None,
        dimensions: Optional[DimensionClassifier] = None,
        config: Optional[AhaConfig] = None,
    ):
        self.config = config or AhaConfig()
        self.scorer = scorer or SimilarityScorer(Tokenizer())
        self.semantics = semantics or SemanticClassifier()
        self.dimensions = dimensions or DimensionClassifier()

    # ---------------------------
    # Construction
    # ---------------------------
    @staticmethod
    def create_empty_chamber() -> Chamber:
        return Chamber()

    @staticmethod
    def create_signal(text: Optional[str], subject_id: str, topic_id: str, timestamp: Optional[str] = None) -> Signal:
        return Signal(
            id=new_id("sig"),
            timestamp=timestamp or utc_now_iso(),
            subject_id=subject_id,
            topic_id=topic_id,
            text=(text or "").strip(),
        )

    def create_insight(self, signal: Signal) -> Insight:
        text = signal.text or ""
        return Insight(
            id=new_id("ins"),
            subject_id=signal.subject_id,
            topic_id=signal.topic_id,
            title=make_title(text, self.config.chamber.title_max_words),
            summary=text,
            strength=Strength(evidence_count=1),
            first_seen=signal.timestamp,
            last_updated=signal.timestamp,
            semantic=self.semantics.classify(text),
            dimensions=self.dimensions.classify(text),
        )

    # ---------------------------
    # Ingestion
    # ---------------------------
    def ingest(self, chamber: Chamber, signal: Signal) -> Chamber:
        candidates = self.insights_for_topic(chamber, signal.subject_id, signal.topic_id)

        best: Optional[Insight] = None
        best_sim = 0.0
        for ins in candidates:
            sim = self.scorer.score(signal.text, ins.summary)
            if sim > best_sim:
                best_sim = sim
                best = ins

        if best is not None and best_sim >= self.config.chamber.similarity_threshold:
            self.reinforce(best, signal)
            logger.debug("Reinforced %s (sim=%.3f, evidence=%d)", best.id, best_sim, best.strength.evidence_count)
        else:
            insight = self.create_insight(signal)
            chamber.insights.append(insight)
            logger.debug("Created %s for %s/%s (best sim=%.3f)", insight.id, signal.subject_id, signal.topic_id, best_sim)
        return chamber

    @staticmethod
    def reinforce(insight: Insight, signal: Signal) -> None:
        insight.strength.evidence_count += 1
        insight.last_updated = signal.timestamp

    def ingest_message(
        self,
        chamber: Chamber,
        text: Optional[str],
        subject_id: str,
        topic_id: str,
        timestamp: Optional[str] = None,
    ) -> Chamber:
        """Split a message into sentences and ingest each one as its own signal."""
        for sentence in split_into_sentences(text, self.config.chamber.sentence_min_length):
            self.ingest(chamber, self.create_signal(sentence, subject_id, topic_id, timestamp))
        return chamber

    # ---------------------------
    # Queries
    # ---------------------------
    @staticmethod
    def insights_for_topic(chamber: Chamber, subject_id: str, topic_id: str) -> List[Insight]:
        return [ins for ins in chamber.insights if ins.subject_id == subject_id and ins.topic_id == topic_id]

    @staticmethod
    def topics_for_subject(chamber: Chamber, subject_id: str) -> List[str]:
        """Topic ids of ``subject_id`` in order of first appearance."""
        seen: Dict[str, None] = {}
        for ins in chamber.insights:
            if ins.subject_id == subject_id and ins.topic_id:
                seen.setdefault(ins.topic_id, None)
        return list(seen)


# -------------------------------------------------------------
# Module-level API over a default engine
# -------------------------------------------------------------
_default_chamber = InsightChamber()


def create_empty_chamber() -> Chamber:
    return Chamber()


def create_signal(text: Optional[str], subject_id: str, topic_id: str, timestamp: Optional[str] = None) -> Signal:
    return InsightChamber.create_signal(text, subject_id, topic_id, timestamp)


def ingest(chamber: Chamber, signal: Signal) -> Chamber:
    return _default_chamber.ingest(chamber, signal)


def insights_for_topic(chamber: Chamber, subject_id: str, topic_id: str) -> List[Insight]:
    return InsightChamber.insights_for_topic(chamber, subject_id, topic_id)


def topics_for_subject(chamber: Chamber, subject_id: str) -> List[str]:
    return InsightChamber.topics_for_subject(chamber, subject_id)
