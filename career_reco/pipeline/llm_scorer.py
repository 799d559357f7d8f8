"""Semantic relevance scoring through an LLM (the primary tier).

One request per ranking call carries the profile summary and every candidate
(id, title, short description). The response is validated strictly: the
exact {"scores": [{"id", "score", "rationale"}]} shape, integer scores in
0-100, only known ids, no id twice. Any violation, provider error, or
timeout raises SemanticScoreInvalid and nothing from the call is used.
"""

import asyncio
import json
import logging

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from career_reco.core.config import RankingConfig
from career_reco.core.errors import SemanticScoreInvalid
from career_reco.core.schemas import Candidate
from career_reco.llm.base import LLMProvider, parse_json_response
from career_reco.profile.schema import UserProfile

logger = logging.getLogger(__name__)

_SCORING_SYSTEM_PROMPT = (
    "You are an expert career advisor ranking learning and job opportunities "
    "for one person.\n\n"
    "You receive a JSON object with the person's profileSummary and a list of "
    "candidates (id, title, shortDescription). Score how well each candidate "
    "fits the person on a 0-100 scale:\n"
    "  90-100: Directly supports their dream job or specialization\n"
    "  70-89:  Builds on their field experience or technical skills\n"
    "  40-69:  Related to their career goal or desired fields\n"
    "  0-39:   Little or no connection to the profile\n\n"
    "Consider their experience level and region. Score at most maxCandidates "
    "candidates and use only ids from the input.\n\n"
    "Return ONLY a JSON object (no markdown, no explanation):\n"
    '{"scores": [{"id": "<candidate id>", "score": <integer 0-100>, '
    '"rationale": "<one sentence>"}]}'
)


class SemanticScore(BaseModel):
    """One scored id in a semantic scorer response."""

    model_config = ConfigDict(extra="forbid")

    id: StrictStr
    score: StrictInt = Field(ge=0, le=100)
    rationale: StrictStr


class SemanticScoreResponse(BaseModel):
    """The full expected response body."""

    model_config = ConfigDict(extra="forbid")

    scores: list[SemanticScore]


def _short_description(candidate: Candidate, max_chars: int) -> str:
    text = candidate.description or ", ".join(candidate.skills)
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + "..."


def build_request(
    candidates: list[Candidate],
    profile: UserProfile,
    config: RankingConfig,
) -> dict:
    """The structured request body sent to the scorer."""
    return {
        "profileSummary": profile.summary(),
        "candidates": [
            {
                "id": c.id,
                "title": c.title,
                "shortDescription": _short_description(c, config.description_chars),
            }
            for c in candidates[: config.max_candidates]
        ],
        "maxCandidates": config.max_candidates,
    }


def parse_scores(raw_text: str, known_ids: set[str]) -> dict[str, tuple[float, str]]:
    """Validate a scorer response and return {id: (score, rationale)}.

    Raises:
        SemanticScoreInvalid: On any parse or validation failure.
    """
    try:
        data = parse_json_response(raw_text)
    except ValueError as e:
        raise SemanticScoreInvalid(str(e)) from e

    try:
        response = SemanticScoreResponse.model_validate(data)
    except ValidationError as e:
        msg = f"Semantic scorer response failed validation: {e.error_count()} errors"
        raise SemanticScoreInvalid(msg) from e

    result: dict[str, tuple[float, str]] = {}
    for item in response.scores:
        if item.id not in known_ids:
            msg = f"Semantic scorer referenced unknown id '{item.id}'"
            raise SemanticScoreInvalid(msg)
        if item.id in result:
            msg = f"Semantic scorer scored id '{item.id}' more than once"
            raise SemanticScoreInvalid(msg)
        result[item.id] = (float(item.score), item.rationale)
    return result


class SemanticScorer:
    """Scores a candidate list in one LLM call, or raises SemanticScoreInvalid."""

    def __init__(self, provider: LLMProvider, config: RankingConfig) -> None:
        self._provider = provider
        self._config = config

    async def score(
        self,
        candidates: list[Candidate],
        profile: UserProfile,
    ) -> dict[str, tuple[float, str]]:
        """Return {candidate id: (score, rationale)} for the ids the model scored.

        Raises:
            SemanticScoreInvalid: Provider error, timeout, or invalid output.
        """
        request = build_request(candidates, profile, self._config)
        known_ids = {c["id"] for c in request["candidates"]}
        prompt = json.dumps(request, ensure_ascii=False)

        try:
            raw = await asyncio.wait_for(
                self._provider.complete(
                    prompt, model=self._config.llm_model, system=_SCORING_SYSTEM_PROMPT,
                ),
                timeout=self._config.timeout_s,
            )
        except asyncio.TimeoutError as e:
            msg = f"Semantic scorer timed out after {self._config.timeout_s}s"
            raise SemanticScoreInvalid(msg) from e
        except Exception as e:
            msg = f"Semantic scorer call failed: {e}"
            raise SemanticScoreInvalid(msg) from e

        scores = parse_scores(raw, known_ids)
        logger.info(
            "Semantic scorer scored %d of %d candidates", len(scores), len(known_ids),
        )
        return scores
