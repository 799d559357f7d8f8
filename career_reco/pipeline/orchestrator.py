"""Orchestrator: wires extractor, aggregator, normalizer, ranker, and selector.

Data flow, per candidate kind:
  1. Profile -> Query
  2. Aggregate raw items from that kind's connectors
  3. Normalize + dedupe
  4. No usable candidates? -> static catalog fallback collaborator
  5. Rank (semantic, else keyword fallback)
  6. Select top N
"""

import asyncio
import json
import logging

from career_reco.core.config import CandidateKind, Settings
from career_reco.core.errors import NoCandidatesAvailable
from career_reco.core.schemas import Candidate, Query, Recommendations, ScoredCandidate
from career_reco.llm.base import LLMProvider
from career_reco.pipeline.aggregator import aggregate
from career_reco.pipeline.dedup import dedupe
from career_reco.pipeline.normalizer import normalize_all
from career_reco.pipeline.ranker import RelevanceRanker
from career_reco.pipeline.selector import select_top_n
from career_reco.profile.extractor import extract_query
from career_reco.profile.schema import UserProfile
from career_reco.sources import build_connectors
from career_reco.sources.base import SourceConnector
from career_reco.sources.static_catalog import fallback_connector

logger = logging.getLogger(__name__)

_KINDS: tuple[CandidateKind, ...] = ("course", "job")


class RecommendationEngine:
    """Builds course and job recommendations for a profile.

    Connectors, rankers, and fallback catalogs default to what settings
    describe; any of them can be injected (tests, custom sources).
    """

    def __init__(
        self,
        settings: Settings,
        *,
        connectors: dict[CandidateKind, list[SourceConnector]] | None = None,
        rankers: dict[CandidateKind, RelevanceRanker] | None = None,
        fallbacks: dict[CandidateKind, SourceConnector | None] | None = None,
        provider: LLMProvider | None = None,
    ) -> None:
        self._settings = settings
        self._connectors = connectors or {
            kind: build_connectors(settings.sources_for(kind)) for kind in _KINDS
        }
        self._rankers = rankers or {
            kind: RelevanceRanker(
                settings.ranking.for_kind(kind), settings.extractor, provider,
            )
            for kind in _KINDS
        }
        if fallbacks is not None:
            self._fallbacks = fallbacks
        elif settings.fallback_catalog.enabled:
            self._fallbacks = {kind: fallback_connector(kind) for kind in _KINDS}
        else:
            self._fallbacks = {kind: None for kind in _KINDS}

    def connectors_for(self, kind: CandidateKind) -> list[SourceConnector]:
        return list(self._connectors.get(kind, []))

    async def _fetch(self, kind: CandidateKind, query: Query) -> list[Candidate]:
        """Usable candidates from live sources, else from the static catalog."""
        agg = self._settings.aggregator
        raw_items = await aggregate(
            query,
            self.connectors_for(kind),
            agg.per_source_limit,
            timeout_s=agg.per_source_timeout_s,
            deadline_s=agg.request_deadline_s,
        )
        candidates = dedupe(normalize_all(raw_items))
        if candidates:
            return candidates

        fallback = self._fallbacks.get(kind)
        if fallback is None:
            return []
        logger.info(
            "No usable %s items from live sources (%d raw) - using static catalog",
            kind, len(raw_items),
        )
        raw_items = await fallback.search(query, self._settings.fallback_catalog.limit)
        return dedupe(normalize_all(raw_items))

    async def recommend_kind(
        self,
        kind: CandidateKind,
        profile: UserProfile,
    ) -> list[ScoredCandidate]:
        """Run the full pipeline for one candidate kind.

        Raises:
            NoCandidatesAvailable: Live sources and the fallback catalog are all empty.
        """
        query = extract_query(profile, self._settings.extractor)
        if query.is_empty:
            logger.info("Profile has no search terms - using default search text")
        logger.info("Recommending %ss for query '%s'", kind, query.search_text)

        fetched = await self._fetch(kind, query)
        candidates = fetched[: self._settings.aggregator.max_candidates]
        if not candidates:
            msg = f"no {kind} candidates available"
            raise NoCandidatesAvailable(msg)

        ranked = await self._rankers[kind].rank(candidates, profile)
        top_n = self._settings.ranking.for_kind(kind).top_n
        selected = select_top_n(ranked, top_n)

        logger.info(
            "%s: %d fetched, %d candidates, %d selected (%s)",
            kind, len(fetched), len(candidates), len(selected),
            selected[0].score_source if selected else "none",
        )
        return selected

    async def recommend(self, profile: UserProfile) -> Recommendations:
        """Recommend courses and jobs; the two pipelines run concurrently.

        A kind with no candidates comes back as an empty list.

        Raises:
            NoCandidatesAvailable: Neither kind produced any candidate.
        """
        results = await asyncio.gather(
            *(self.recommend_kind(kind, profile) for kind in _KINDS),
            return_exceptions=True,
        )

        lists: dict[CandidateKind, list[ScoredCandidate]] = {}
        for kind, result in zip(_KINDS, results):
            if isinstance(result, NoCandidatesAvailable):
                logger.info("No %s candidates available", kind)
                lists[kind] = []
            elif isinstance(result, BaseException):
                raise result
            else:
                lists[kind] = result

        if not lists["course"] and not lists["job"]:
            msg = "no course or job candidates available"
            raise NoCandidatesAvailable(msg)
        return Recommendations(courses=lists["course"], jobs=lists["job"])


def export_recommendations_json(recs: Recommendations) -> str:
    """Export recommendations as a JSON string."""
    data = {}
    for key, items in (("courses", recs.courses), ("jobs", recs.jobs)):
        data[key] = [
            {
                "rank": s.rank,
                "score": s.score,
                "score_source": s.score_source,
                "rationale": s.rationale,
                "id": s.candidate.id,
                "title": s.candidate.title,
                "provider": s.candidate.provider,
                "category": s.candidate.category,
                "skills": list(s.candidate.skills),
                "level": s.candidate.level,
                "location": s.candidate.location,
                "url": s.candidate.url,
            }
            for s in items
        ]
    return json.dumps(data, indent=2)
