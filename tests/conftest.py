from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from Aha.models import Concept, Insight, Strength
from Aha.semantics import SemanticTags


@pytest.fixture
def make_insight():
    counter = {"n": 0}

    def _make(
        summary="jeg er alltid stressa på jobb",
        subject_id="u1",
        topic_id="jobb",
        evidence=1,
        first_seen="2026-01-01T00:00:00+00:00",
        last_updated=None,
        semantic=None,
        dimensions=None,
        concepts=None,
    ):
        counter["n"] += 1
        return Insight(
            id=f"ins_test_{counter['n']}",
            subject_id=subject_id,
            topic_id=topic_id,
            title=summary,
            summary=summary,
            strength=Strength(evidence_count=evidence),
            first_seen=first_seen,
            last_updated=last_updated or first_seen,
            semantic=semantic if semantic is not None else SemanticTags(),
            dimensions=dimensions or ["thought"],
            concepts=[Concept(**c) for c in concepts] if concepts is not None else None,
        )

    return _make
