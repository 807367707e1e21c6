from datetime import datetime, timedelta, timezone

import pytest

from Aha.chamber import create_empty_chamber, create_signal, ingest
from Aha.meta_profile import (
    GlobalProfile,
    MetaProfileBuilder,
    TopicProfile,
    build_meta_profile,
    normalize_phase,
)
from Aha.topic_stats import SemanticCounts, TopicStats

NOW = datetime(2026, 2, 1, tzinfo=timezone.utc)


def _ago(days: float) -> str:
    return (NOW - timedelta(days=days)).isoformat()


def _profile(topic_id, phase=None, modality=None, valence=None, saturation=0):
    counts = SemanticCounts()
    counts.modality.update(modality or {})
    counts.valence.update(valence or {})
    stats = TopicStats(topic_id=topic_id, subject_id="u1", insight_saturation=saturation, user_phase=phase)
    return TopicProfile(topic_id=topic_id, stats=stats, semantic_counts=counts)


@pytest.fixture
def builder():
    return MetaProfileBuilder()


# ---------------------------
# Lifecycle
# ---------------------------
@pytest.mark.parametrize("evidence,age,idle,expected", [
    (1, 30, 30, "new"),
    (2, 1, 1, "new"),        # age must exceed one day
    (2, 2, 0, "growing"),
    (3, 30, 20, "growing"),  # never mature, so never integrated
    (4, 7, 0, "growing"),    # age must exceed seven days
    (4, 8, 1, "mature"),
    (4, 30, 14, "mature"),   # idle must exceed fourteen days
    (4, 30, 20, "integrated"),
])
def test_lifecycle_stages(builder, make_insight, evidence, age, idle, expected):
    ins = make_insight(evidence=evidence, first_seen=_ago(age), last_updated=_ago(idle))
    assert builder.lifecycle(ins, NOW) == expected


def test_lifecycle_with_unparseable_timestamps_is_new(builder, make_insight):
    ins = make_insight(evidence=9, first_seen="not a date")
    assert builder.lifecycle(ins, NOW) == "new"


def test_lifecycle_accepts_naive_and_z_timestamps(builder, make_insight):
    naive = make_insight(evidence=4, first_seen="2026-01-01T00:00:00", last_updated="2026-01-31T00:00:00")
    zulu = make_insight(evidence=4, first_seen="2026-01-01T00:00:00Z", last_updated="2026-01-01T00:00:00Z")
    assert builder.lifecycle(naive, NOW) == "mature"
    assert builder.lifecycle(zulu, NOW) == "integrated"


# ---------------------------
# Global profile
# ---------------------------
def test_global_profile_empty_is_all_zero(builder):
    profile = builder.global_profile([])
    assert profile == GlobalProfile()
    assert profile.to_dict() == {
        "avg_saturation": 0.0,
        "modality": {"obligation": 0, "possibility": 0, "obstruction": 0, "neutral": 0},
        "valence": {"negative": 0, "positive": 0, "mixed": 0, "neutral": 0},
        "phases": {"exploration": 0, "pattern": 0, "press": 0, "stuck": 0, "integration": 0},
        "pressure_index": 0.0,
        "negativity_index": 0.0,
        "stuck_topics": 0,
        "integration_topics": 0,
    }


def test_global_profile_aggregates(builder):
    profiles = [
        _profile("jobb", "press", {"obligation": 3, "neutral": 1}, {"negative": 3, "neutral": 1}, saturation=40),
        _profile("søvn", "fastlåst", {"obstruction": 1, "possibility": 1}, {"positive": 1, "negative": 1}, saturation=20),
        _profile("venner", None, {"neutral": 2}, {"positive": 2}, saturation=30),
        _profile("hobby", "integrasjon"),
        _profile("annet", "something-else"),
    ]
    g = builder.global_profile(profiles)
    assert g.avg_saturation == 90 / 5
    assert g.modality == {"obligation": 3, "possibility": 1, "obstruction": 1, "neutral": 3}
    assert g.valence == {"negative": 4, "positive": 3, "mixed": 0, "neutral": 1}
    assert g.phases == {"exploration": 1, "pattern": 0, "press": 1, "stuck": 1, "integration": 1}
    assert g.pressure_index == 4 / 4
    assert g.negativity_index == 4 / 4
    assert g.stuck_topics == 1
    assert g.integration_topics == 1


def test_normalize_phase():
    assert normalize_phase("fastlåst") == "stuck"
    assert normalize_phase(" Utforskning ") == "exploration"
    assert normalize_phase("press") == "press"
    assert normalize_phase(None) is None


# ---------------------------
# Patterns
# ---------------------------
def _pattern_ids(builder, profiles):
    return [p.id for p in builder.cross_topic_patterns(profiles, builder.global_profile(profiles))]


def test_cross_pressure_fires_above_threshold(builder):
    profiles = [
        _profile("jobb", "press", {"obligation": 7, "possibility": 5}),
        _profile("søvn", "fastlåst"),
    ]
    patterns = builder.cross_topic_patterns(profiles, builder.global_profile(profiles))
    assert [p.id for p in patterns] == ["cross_pressure"]
    assert patterns[0].type == "global_pattern"
    assert patterns[0].topics == ["jobb", "søvn"]


def test_cross_pressure_threshold_is_strict(builder):
    profiles = [
        _profile("jobb", "press", {"obligation": 6, "possibility": 5}),
        _profile("søvn", "press"),
    ]
    assert builder.global_profile(profiles).pressure_index == 1.2
    assert _pattern_ids(builder, profiles) == []


def test_cross_pressure_needs_two_topics(builder):
    profiles = [
        _profile("jobb", "press", {"obligation": 9, "possibility": 1}),
        _profile("søvn", "exploration"),
    ]
    assert _pattern_ids(builder, profiles) == []


def test_stuck_cluster_cofires_with_cross_pressure(builder):
    profiles = [
        _profile("jobb", "stuck", {"obstruction": 5}),
        _profile("søvn", "fastlåst"),
    ]
    patterns = builder.cross_topic_patterns(profiles, builder.global_profile(profiles))
    assert [p.id for p in patterns] == ["cross_pressure", "stuck_cluster"]
    assert patterns[1].type == "cluster"


def test_stuck_cluster_without_pressure(builder):
    profiles = [_profile("jobb", "stuck"), _profile("søvn", "stuck")]
    assert _pattern_ids(builder, profiles) == ["stuck_cluster"]


def test_cross_exploration_fires_when_calm(builder):
    profiles = [
        _profile("venner", "exploration", {"neutral": 3}, {"positive": 2}),
        _profile("hobby", "integrasjon"),
    ]
    patterns = builder.cross_topic_patterns(profiles, builder.global_profile(profiles))
    assert [p.id for p in patterns] == ["cross_exploration"]
    assert patterns[0].topics == ["venner", "hobby"]


def test_cross_exploration_ignores_topics_without_explicit_phase(builder):
    profiles = [_profile("venner"), _profile("hobby")]
    assert _pattern_ids(builder, profiles) == []


def test_cross_exploration_thresholds_are_strict(builder):
    pressure_at_limit = [
        _profile("venner", "exploration", {"obligation": 4, "possibility": 5}),
        _profile("hobby", "exploration"),
    ]
    assert builder.global_profile(pressure_at_limit).pressure_index == 0.8
    assert _pattern_ids(builder, pressure_at_limit) == []

    negativity_at_limit = [
        _profile("venner", "exploration", {"neutral": 1}, {"negative": 7, "positive": 10}),
        _profile("hobby", "exploration"),
    ]
    assert builder.global_profile(negativity_at_limit).negativity_index == 0.7
    assert _pattern_ids(builder, negativity_at_limit) == []


# ---------------------------
# Concept index
# ---------------------------
def test_concept_index_accumulates_and_sorts(builder, make_insight):
    insights = [
        make_insight(topic_id="jobb", concepts=[{"key": "stress", "count": 3, "examples": ["a", "b"]}]),
        make_insight(topic_id="søvn", concepts=[
            {"key": "stress", "count": 2, "examples": ["b", "c"]},
            {"key": "søvn", "count": 4, "examples": ["x"]},
        ]),
        make_insight(topic_id="jobb"),
        make_insight(topic_id="jobb", concepts=[{"key": "", "count": 99}]),
    ]
    index = builder.concept_index(insights)
    assert [(e.key, e.total_count) for e in index] == [("stress", 5), ("søvn", 4)]
    assert index[0].topics == ["jobb", "søvn"]
    assert index[0].topic_count == 2
    assert index[0].examples == ["a", "b", "c"]


def test_concept_index_caps_examples(builder, make_insight):
    examples = [f"ex{i}" for i in range(15)]
    insights = [
        make_insight(concepts=[{"key": "stress", "count": 1, "examples": examples[:8]}]),
        make_insight(concepts=[{"key": "stress", "count": 1, "examples": examples[8:]}]),
    ]
    entry = builder.concept_index(insights)[0]
    assert entry.examples == examples[:10]


# ---------------------------
# Whole profile
# ---------------------------
def test_meta_profile_for_unknown_subject_is_empty():
    chamber = create_empty_chamber()
    ingest(chamber, create_signal("jeg er alltid stressa på jobb", "u1", "jobb"))
    profile = build_meta_profile(chamber, "nobody", now=NOW)
    assert profile.topics == []
    assert profile.global_profile == GlobalProfile()
    assert profile.patterns == []
    assert profile.insights == []
    assert profile.concepts == []


def test_meta_profile_composes_and_leaves_chamber_untouched():
    chamber = create_empty_chamber()
    for text, topic, ts in [
        ("jeg er alltid stressa på jobb", "jobb", _ago(20)),
        ("jeg er alltid stressa på jobb", "jobb", _ago(19)),
        ("jeg må svare sjefen før lunsj", "jobb", _ago(3)),
        ("jeg sover dårlig og er sliten", "søvn", _ago(2)),
        ("helt annen bruker", "jobb", _ago(1)),
    ]:
        subject = "u2" if text == "helt annen bruker" else "u1"
        ingest(chamber, create_signal(text, subject, topic, ts))
    snapshot = chamber.to_dict()

    profile = build_meta_profile(chamber, "u1", phases={"jobb": "press"}, now=NOW)

    assert [t.topic_id for t in profile.topics] == ["jobb", "søvn"]
    assert profile.topics[0].stats.user_phase == "press"
    assert profile.topics[0].stats.insight_count == 2
    assert profile.topics[1].stats.user_phase is None
    assert profile.global_profile.phases["press"] == 1
    assert profile.global_profile.phases["exploration"] == 1
    assert [ins.lifecycle for ins in profile.insights] == ["growing", "new", "new"]

    profile.insights[0].strength.evidence_count = 50
    assert chamber.to_dict() == snapshot
    assert all(ins.lifecycle is None for ins in chamber.insights)


def test_meta_profile_is_pure_and_serialisable():
    chamber = create_empty_chamber()
    ingest(chamber, create_signal("jeg er alltid stressa på jobb", "u1", "jobb", _ago(3)))
    ingest(chamber, create_signal("jeg sover dårlig og er sliten", "u1", "søvn", _ago(2)))

    first = build_meta_profile(chamber, "u1", now=NOW).to_dict()
    second = build_meta_profile(chamber, "u1", now=NOW).to_dict()
    assert first == second
    assert set(first) == {"subject_id", "topics", "global", "patterns", "insights", "concepts"}
    assert first["insights"][0]["lifecycle"] == "new"


def test_naive_now_is_taken_as_utc(builder, make_insight):
    naive_now = NOW.replace(tzinfo=None)
    ins = make_insight(evidence=4, first_seen=_ago(30), last_updated=_ago(20))
    assert builder.lifecycle(ins, naive_now) == "integrated"

    chamber = create_empty_chamber()
    ingest(chamber, create_signal("jeg er alltid stressa på jobb", "u1", "jobb", _ago(3)))
    ingest(chamber, create_signal("jeg er alltid stressa på jobb", "u1", "jobb", _ago(2)))
    profile = build_meta_profile(chamber, "u1", now=naive_now)
    assert profile.to_dict() == build_meta_profile(chamber, "u1", now=NOW).to_dict()
    assert profile.insights[0].lifecycle == "growing"
