from __future__ import annotations

from typing import List, Optional, Sequence

from .models import Insight
from .topic_stats import TopicStats

__all__ = ["path_steps", "synthesis_text", "article_draft"]


def path_steps(insights: Sequence[Insight], max_steps: int = 5) -> List[str]:
    """Numbered steps, oldest insight first."""
    if not insights:
        return ["No insights to build a path from yet."]
    ordered = sorted(insights, key=lambda ins: ins.first_seen)
    return [f"{i}. {ins.summary}" for i, ins in enumerate(ordered[:max_steps], start=1)]


def synthesis_text(insights: Sequence[Insight], topic_id: str) -> str:
    if not insights:
        return "No insights to synthesise yet."
    bullets = "\n".join(f"- {ins.summary}" for ins in insights)
    return f"Synthesis for topic {topic_id}:\n{bullets}"


def article_draft(insights: Sequence[Insight], stats: TopicStats, topic_id: Optional[str] = None, top_n: int = 5) -> str:
    if not insights:
        return "No insights to draft an article from yet."
    topic_id = topic_id or stats.topic_id
    intro = (
        f"Article draft for topic {topic_id} (based on {stats.insight_count} insights, "
        f"saturation {stats.insight_saturation}/100, concept density {stats.concept_density}/100):\n\n"
    )
    strongest = sorted(insights, key=lambda ins: ins.strength.total_score, reverse=True)[:top_n]
    body = "\n".join(f"{i}) {ins.summary}" for i, ins in enumerate(strongest, start=1))
    outro = "\n\n→ This is a raw draft. It can be rewritten into flowing text later."
    return intro + body + outro
