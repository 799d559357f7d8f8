"""Configuration models and YAML loader for the recommendation engine."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from career_reco.llm import available_providers

CandidateKind = Literal["course", "job"]


class SourceConfig(BaseModel):
    """A single catalog connector entry."""

    name: str
    type: str
    kind: CandidateKind
    enabled: bool = True
    endpoint: str | None = None
    api_key_env: str | None = None
    timeout_s: float = Field(default=8.0, gt=0.0)
    priority: int = 0
    params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("name", "type")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "source name and type must not be empty"
            raise ValueError(msg)
        return v.strip()


class AggregatorConfig(BaseModel):
    """Fan-out limits shared by every connector."""

    per_source_timeout_s: float = Field(default=8.0, gt=0.0)
    per_source_limit: int = Field(default=10, ge=1, le=100)
    request_deadline_s: float | None = Field(default=None, gt=0.0)
    max_candidates: int = Field(default=50, ge=1)


class ExtractorConfig(BaseModel):
    """Weight tiers and size bound for profile-derived queries."""

    max_terms: int = Field(default=12, ge=1)
    high_weight: int = Field(default=30, ge=0)
    medium_weight: int = Field(default=20, ge=0)
    low_weight: int = Field(default=10, ge=0)

    @model_validator(mode="after")
    def tiers_ordered(self) -> "ExtractorConfig":
        if not self.high_weight >= self.medium_weight >= self.low_weight:
            msg = "weights must satisfy high_weight >= medium_weight >= low_weight"
            raise ValueError(msg)
        return self


class RankingConfig(BaseModel):
    """Relevance ranking settings for one candidate kind."""

    semantic_enabled: bool = False
    llm_provider: str = "gemini"
    llm_model: str | None = None
    timeout_s: float = Field(default=30.0, gt=0.0)
    max_candidates: int = Field(default=50, ge=1)
    description_chars: int = Field(default=200, ge=0)
    top_n: int = Field(default=3, ge=1)

    @field_validator("llm_provider")
    @classmethod
    def known_provider(cls, v: str) -> str:
        if v not in available_providers():
            valid = ", ".join(available_providers())
            msg = f"Unknown LLM provider '{v}'. Available: {valid}"
            raise ValueError(msg)
        return v


class RankingSettings(BaseModel):
    """Course and job rankers are tuned independently."""

    courses: RankingConfig = Field(default_factory=RankingConfig)
    jobs: RankingConfig = Field(default_factory=RankingConfig)

    def for_kind(self, kind: CandidateKind) -> RankingConfig:
        return self.courses if kind == "course" else self.jobs


class FallbackCatalogConfig(BaseModel):
    """Static catalog used when every configured source comes back empty."""

    enabled: bool = True
    limit: int = Field(default=20, ge=1)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    sources: list[SourceConfig] = Field(default_factory=list)
    aggregator: AggregatorConfig = Field(default_factory=AggregatorConfig)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    ranking: RankingSettings = Field(default_factory=RankingSettings)
    fallback_catalog: FallbackCatalogConfig = Field(default_factory=FallbackCatalogConfig)

    @field_validator("sources")
    @classmethod
    def unique_source_names(cls, v: list[SourceConfig]) -> list[SourceConfig]:
        names = [s.name for s in v]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            msg = f"duplicate source names: {', '.join(duplicates)}"
            raise ValueError(msg)
        return v

    def sources_for(self, kind: CandidateKind) -> list[SourceConfig]:
        """Sources of one kind in priority order (ties keep declaration order)."""
        matching = [s for s in self.sources if s.kind == kind]
        return sorted(matching, key=lambda s: s.priority)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
