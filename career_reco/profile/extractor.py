"""Turn a UserProfile into a weighted search Query.

Weight tiers by provenance:
  high   - dream job, specialization
  medium - field experience, technical skills
  low    - career goal, desired fields, interests

Pure function: no I/O, never raises. An empty profile yields an empty Query.
"""

import logging

from career_reco.core.config import ExtractorConfig
from career_reco.core.schemas import Query, WeightedTerm
from career_reco.profile.schema import UserProfile

logger = logging.getLogger(__name__)


def normalize_term(term: str) -> str:
    """Collapse whitespace and lower-case a term."""
    return " ".join(term.split()).lower()


def _collect_terms(profile: UserProfile, config: ExtractorConfig) -> list[tuple[str, int]]:
    """Raw (term, weight) pairs in field priority order."""
    terms: list[tuple[str, int]] = []

    for text in (profile.dream_job, profile.specialization):
        terms.append((text, config.high_weight))

    for item in (*profile.field_experience, *profile.technical_skills):
        terms.append((item, config.medium_weight))

    terms.append((profile.career_goal, config.low_weight))
    for item in (*profile.desired_fields, *profile.interests):
        terms.append((item, config.low_weight))

    return terms


def extract_query(profile: UserProfile, config: ExtractorConfig | None = None) -> Query:
    """Build the Query for one recommendation request.

    Duplicate terms (case-insensitive) keep their first-seen position and the
    highest weight any of their occurrences carried. raw_text lists terms by
    weight descending (ties keep first-seen order), capped at max_terms.
    """
    config = config or ExtractorConfig()

    weights: dict[str, int] = {}
    for text, weight in _collect_terms(profile, config):
        term = normalize_term(text)
        if not term:
            continue
        # dict preserves first insertion order; only the weight is raised
        if weight > weights.get(term, -1):
            weights[term] = weight

    keywords = tuple(WeightedTerm(term=t, weight=w) for t, w in weights.items())
    by_weight = sorted(keywords, key=lambda k: k.weight, reverse=True)
    raw_text = " ".join(k.term for k in by_weight[: config.max_terms])

    query = Query(
        keywords=keywords,
        raw_text=raw_text,
        region=profile.region,
        experience_level=profile.experience_level or profile.experience,
    )
    logger.debug("Extracted %d terms: %r", len(keywords), raw_text)
    return query
