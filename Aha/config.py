from __future__ import annotations

import os
from typing import Any, Dict

import yaml
from pydantic import BaseModel, Field


class ChamberConfig(BaseModel):
    similarity_threshold: float = Field(default=0.5, description="Min Jaccard score to reinforce instead of create")
    title_max_words: int = Field(default=10)
    sentence_min_length: int = Field(default=15, description="Shorter sentence fragments are not ingested")


class StatsConfig(BaseModel):
    density_reference: float = Field(default=0.25, description="Raw unique/total ratio that maps to density 100")
    base_per_insight: int = Field(default=7)
    base_max_insights: int = Field(default=10)
    dimension_bonus: int = Field(default=4)
    dimension_cap: int = Field(default=5)
    time_bonus: int = Field(default=3)
    time_cap: int = Field(default=3)
    valence_bonus: int = Field(default=1)
    valence_cap: int = Field(default=4)


class LifecycleConfig(BaseModel):
    growing_min_evidence: int = Field(default=2)
    growing_min_age_days: float = Field(default=1)
    mature_min_evidence: int = Field(default=4)
    mature_min_age_days: float = Field(default=7)
    integrated_min_idle_days: float = Field(default=14)


class PatternConfig(BaseModel):
    high_pressure: float = Field(default=1.2, description="pressure_index must exceed this for cross_pressure")
    low_pressure: float = Field(default=0.8, description="pressure_index must stay below this for cross_exploration")
    low_negativity: float = Field(default=0.7)
    min_topics: int = Field(default=2)


class ConceptConfig(BaseModel):
    max_examples: int = Field(default=10)


class ArtifactConfig(BaseModel):
    path_max_steps: int = Field(default=5)
    article_top_n: int = Field(default=5)


class AhaConfig(BaseModel):
    chamber: ChamberConfig = Field(default_factory=ChamberConfig)
    stats: StatsConfig = Field(default_factory=StatsConfig)
    lifecycle: LifecycleConfig = Field(default_factory=LifecycleConfig)
    patterns: PatternConfig = Field(default_factory=PatternConfig)
    concepts: ConceptConfig = Field(default_factory=ConceptConfig)
    artifacts: ArtifactConfig = Field(default_factory=ArtifactConfig)
    log_level: str = Field(default="WARNING")

    @classmethod
    def from_file(cls, path: str = os.path.join("configs", "aha.yaml")) -> "AhaConfig":
        with open(path, "r", encoding="utf-8") as f:
            data: Dict[str, Any] = yaml.safe_load(f) or {}

        return cls(
            chamber=ChamberConfig(**(data.get("chamber") or {})),
            stats=StatsConfig(**(data.get("stats") or {})),
            lifecycle=LifecycleConfig(**(data.get("lifecycle") or {})),
            patterns=PatternConfig(**(data.get("patterns") or {})),
            concepts=ConceptConfig(**(data.get("concepts") or {})),
            artifacts=ArtifactConfig(**(data.get("artifacts") or {})),
            log_level=str(data.get("log_level") or "WARNING"),
        )
