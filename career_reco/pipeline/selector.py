"""Top-N selection over a ranked list."""

from career_reco.core.schemas import ScoredCandidate

DEFAULT_TOP_N = 3


def select_top_n(scored: list[ScoredCandidate], n: int = DEFAULT_TOP_N) -> list[ScoredCandidate]:
    """Return the n best candidates, ranks renumbered 1..k.

    Sort is by score descending and stable, so equal scores keep their input
    order. Fewer than n candidates returns all of them; n <= 0 returns [].
    """
    if n <= 0:
        return []
    ordered = sorted(scored, key=lambda s: s.score, reverse=True)[:n]
    return [s.model_copy(update={"rank": i}) for i, s in enumerate(ordered, start=1)]
