"""Two-tier relevance ranking: semantic scorer first, keyword scorer as fallback.

The fallback tier is used when the semantic tier is disabled or its result is
discarded. The tiers are never mixed within one list; every ScoredCandidate
records which tier produced it.
"""

import logging

from career_reco.core.config import ExtractorConfig, RankingConfig
from career_reco.core.errors import SemanticScoreInvalid
from career_reco.core.schemas import Candidate, ScoredCandidate
from career_reco.llm import get_provider
from career_reco.llm.base import LLMProvider
from career_reco.pipeline.llm_scorer import SemanticScorer
from career_reco.pipeline.scorer import score_candidates
from career_reco.profile.extractor import extract_query
from career_reco.profile.schema import UserProfile

logger = logging.getLogger(__name__)


def assign_ranks(scored: list[ScoredCandidate]) -> list[ScoredCandidate]:
    """Order by score descending (stable) and number ranks 1..n without gaps."""
    ordered = sorted(scored, key=lambda s: s.score, reverse=True)
    return [s.model_copy(update={"rank": i}) for i, s in enumerate(ordered, start=1)]


class RelevanceRanker:
    """Ranks candidates of one kind against a profile.

    Usage::

        ranker = RelevanceRanker(settings.ranking.courses, settings.extractor)
        ranked = await ranker.rank(candidates, profile)
    """

    def __init__(
        self,
        config: RankingConfig,
        extractor_config: ExtractorConfig | None = None,
        provider: LLMProvider | None = None,
    ) -> None:
        self._config = config
        self._extractor_config = extractor_config or ExtractorConfig()
        self._scorer: SemanticScorer | None = None
        if config.semantic_enabled:
            self._scorer = SemanticScorer(provider or get_provider(config.llm_provider), config)

    @property
    def semantic_enabled(self) -> bool:
        return self._scorer is not None

    async def rank(
        self,
        candidates: list[Candidate],
        profile: UserProfile,
    ) -> list[ScoredCandidate]:
        """Score and order candidates; ties keep input order."""
        if not candidates:
            return []

        if self._scorer is not None:
            try:
                scores = await self._scorer.score(candidates, profile)
            except SemanticScoreInvalid:
                logger.warning(
                    "Semantic scoring discarded - using keyword fallback", exc_info=True,
                )
            else:
                return assign_ranks(self._semantic_results(candidates, scores))

        query = extract_query(profile, self._extractor_config)
        return assign_ranks(score_candidates(candidates, query))

    @staticmethod
    def _semantic_results(
        candidates: list[Candidate],
        scores: dict[str, tuple[float, str]],
    ) -> list[ScoredCandidate]:
        results = []
        for c in candidates:
            # Ids the model left out (or never saw) rank last within this tier
            score, rationale = scores.get(c.id, (0.0, ""))
            results.append(
                ScoredCandidate(
                    candidate=c, score=score, score_source="semantic", rationale=rationale,
                ),
            )
        return results
