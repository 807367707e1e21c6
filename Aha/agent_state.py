"""
agent_state.py — payload for the external narrative generator

The generator (an LLM-backed service outside this package) receives one
JSON object per topic. This module only assembles that object; it never
calls the service.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from .artifacts import synthesis_text
from .chamber import InsightChamber
from .meta_profile import MetaProfile
from .models import Chamber
from .topic_stats import TopicStatsCalculator

__all__ = ["build_agent_state"]


def build_agent_state(
    chamber: Chamber,
    subject_id: str,
    topic_id: str,
    meta_profile: Optional[MetaProfile] = None,
    field_profile: Optional[Dict[str, Any]] = None,
    user_phase: Optional[str] = None,
    top_n: int = 5,
    calculator: Optional[TopicStatsCalculator] = None,
) -> Dict[str, Any]:
    calculator = calculator or TopicStatsCalculator()
    insights = InsightChamber.insights_for_topic(chamber, subject_id, topic_id)
    stats = calculator.stats_for(insights, subject_id, topic_id)
    stats.user_phase = user_phase

    strongest = sorted(insights, key=lambda ins: ins.strength.total_score, reverse=True)[:top_n]

    return {
        "subject_id": subject_id,
        "topic_id": topic_id,
        "topic_stats": stats.to_dict(),
        "topic_semantics": calculator.semantic_counts(insights).to_dict(),
        "topic_dimensions": calculator.dimension_summary(insights),
        "topic_narrative": synthesis_text(insights, topic_id),
        "top_insights": [ins.to_dict() for ins in strongest],
        "meta_profile": meta_profile.to_dict() if meta_profile is not None else None,
        "field_profile": field_profile,
    }
