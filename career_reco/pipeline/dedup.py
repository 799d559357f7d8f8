"""Collapse candidates that describe the same real-world listing."""

import logging

from career_reco.core.schemas import Candidate

logger = logging.getLogger(__name__)


def dedupe_key(candidate: Candidate) -> str:
    """Identity of a listing across sources: normalized title and provider."""
    return f"{candidate.title.strip().lower()}|{candidate.provider.strip().lower()}"


def dedupe(candidates: list[Candidate]) -> list[Candidate]:
    """Keep the first occurrence of each title+provider pair, in input order."""
    seen: set[str] = set()
    result: list[Candidate] = []
    for c in candidates:
        key = dedupe_key(c)
        if key not in seen:
            seen.add(key)
            result.append(c)
    removed = len(candidates) - len(result)
    if removed:
        logger.debug("dedupe: removed %d duplicates", removed)
    return result
