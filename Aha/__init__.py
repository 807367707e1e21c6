# Aha package - insight chamber, topic stats and meta profiles
from .config import AhaConfig
from .models import Chamber, Concept, Insight, Signal, Strength
from .semantics import SemanticClassifier, SemanticTags
from .dimensions import DimensionClassifier
from .text import SimilarityScorer, Tokenizer, make_title, split_into_sentences
from .chamber import (
    InsightChamber,
    create_empty_chamber,
    create_signal,
    ingest,
    insights_for_topic,
    topics_for_subject,
)
from .topic_stats import (
    SemanticCounts,
    TopicStats,
    TopicStatsCalculator,
    artifact_type,
    compute_dimension_summary,
    compute_semantic_counts,
    compute_topic_stats,
    topics_overview,
)
from .meta_profile import (
    ConceptEntry,
    CrossTopicPattern,
    GlobalProfile,
    MetaProfile,
    MetaProfileBuilder,
    TopicProfile,
    build_meta_profile,
)
from .artifacts import article_draft, path_steps, synthesis_text
from .agent_state import build_agent_state
