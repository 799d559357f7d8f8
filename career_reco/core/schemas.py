"""Core data models for the recommendation engine."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from career_reco.core.config import CandidateKind

# Used by connectors when the profile produced no terms at all.
DEFAULT_SEARCH_TEXT = "professional development"


class WeightedTerm(BaseModel):
    """A normalized search term and the weight of its strongest provenance."""

    model_config = ConfigDict(frozen=True)

    term: str
    weight: int = Field(ge=0)


class Query(BaseModel):
    """Per-request search query derived from a UserProfile."""

    model_config = ConfigDict(frozen=True)

    keywords: tuple[WeightedTerm, ...] = ()
    raw_text: str = ""
    region: str = ""
    experience_level: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.keywords

    @property
    def search_text(self) -> str:
        """Free text for sources that only accept a query string."""
        return self.raw_text or DEFAULT_SEARCH_TEXT


class RawItem(BaseModel):
    """Source-specific payload, tagged with the connector that produced it."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    schema_name: str
    payload: dict[str, Any]


class Candidate(BaseModel):
    """A normalized course or job listing.

    Frozen: score and rank live on the ScoredCandidate wrapper.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    kind: CandidateKind
    title: str
    provider: str = ""
    category: str = "General"
    skills: tuple[str, ...] = ()
    description: str = ""
    level: str = ""
    location: str = ""
    url: str = ""
    raw: RawItem | None = None


class ScoredCandidate(BaseModel):
    """Wrapper that pairs a frozen Candidate with its relevance score and rank."""

    model_config = ConfigDict(frozen=True)

    candidate: Candidate
    score: float = Field(default=0.0, ge=0.0, le=100.0)
    score_source: Literal["semantic", "fallback"] = "fallback"
    rank: int = Field(default=0, ge=0)
    rationale: str = ""


class Recommendations(BaseModel):
    """The engine's output, handed to whatever stores or displays it."""

    courses: list[ScoredCandidate] = Field(default_factory=list)
    jobs: list[ScoredCandidate] = Field(default_factory=list)

    @property
    def courses_degraded(self) -> bool:
        return any(s.score_source == "fallback" for s in self.courses)

    @property
    def jobs_degraded(self) -> bool:
        return any(s.score_source == "fallback" for s in self.jobs)
