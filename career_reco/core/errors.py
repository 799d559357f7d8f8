"""Error taxonomy for the recommendation engine.

Source errors are recovered inside the aggregator (the source contributes
nothing). SemanticScoreInvalid is recovered inside the ranker (fallback tier).
NoCandidatesAvailable is the only error surfaced to callers; they should show
an empty state, not a failure.
"""


class RecommendationError(Exception):
    """Base class for every engine error."""


class SourceError(RecommendationError):
    """A catalog connector failed to produce results."""

    def __init__(self, source_id: str, message: str) -> None:
        super().__init__(f"[{source_id}] {message}")
        self.source_id = source_id


class SourceUnavailable(SourceError):
    """Timeout, network failure, 5xx, or missing credentials."""


class SourceRateLimited(SourceError):
    """The catalog answered HTTP 429."""


class SourceInvalidResponse(SourceError):
    """The catalog answered with something that is not the expected JSON shape."""


class NormalizationError(ValueError):
    """A raw item cannot be mapped to a Candidate (no title or no id)."""


class SemanticScoreInvalid(RecommendationError):
    """The semantic scorer failed or returned output that did not validate."""


class NoCandidatesAvailable(RecommendationError):
    """Neither the configured sources nor the fallback catalog returned anything."""
