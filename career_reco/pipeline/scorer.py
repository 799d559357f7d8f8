"""Deterministic keyword-overlap scoring (the fallback tier).

score = sum of the weights of query terms found, case-insensitively, as a
substring of title + description + category. Clamped to 0-100. Term weights
come from the extractor tiers (30 / 20 / 10 by default), which keeps this
scale directionally comparable with the semantic tier.
"""

import logging

from career_reco.core.schemas import Candidate, Query, ScoredCandidate

logger = logging.getLogger(__name__)

MAX_SCORE = 100.0


def _haystack(candidate: Candidate) -> str:
    return f"{candidate.title} {candidate.description} {candidate.category}".lower()


def score_candidate(candidate: Candidate, query: Query) -> ScoredCandidate:
    """Score a single candidate against the query terms.

    Returns:
        ScoredCandidate with score_source 'fallback' and rank 0 (unranked).
    """
    text = _haystack(candidate)
    score = 0.0
    for kw in query.keywords:
        if kw.term and kw.term in text:
            score += kw.weight

    score = max(0.0, min(MAX_SCORE, score))
    return ScoredCandidate(candidate=candidate, score=score, score_source="fallback")


def score_candidates(candidates: list[Candidate], query: Query) -> list[ScoredCandidate]:
    """Score a batch, keeping input order (ranking happens afterwards)."""
    scored = [score_candidate(c, query) for c in candidates]
    logger.debug("Fallback-scored %d candidates", len(scored))
    return scored
