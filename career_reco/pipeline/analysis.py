"""Per-item personalized analysis of a recommended course or job.

Asks the LLM for a structured write-up; on any failure returns a
deterministic analysis built from the keyword scorer instead.
"""

import asyncio
import json
import logging
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from career_reco.core.config import ExtractorConfig
from career_reco.core.schemas import Candidate
from career_reco.llm.base import LLMProvider, parse_json_response
from career_reco.pipeline.scorer import score_candidate
from career_reco.profile.extractor import extract_query
from career_reco.profile.schema import UserProfile

logger = logging.getLogger(__name__)

_ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert career advisor. Analyze one course or job for one person "
    "and be honest: if it is not a good match, say why.\n\n"
    "Return ONLY a JSON object (no markdown, no explanation) with these fields:\n"
    '- summary (string): 2-3 sentences on what the item offers\n'
    "- personalizedRecommendation (string): why it is or is not good for this person\n"
    "- relevanceScore (integer 0-100)\n"
    "- keyBenefits (list[str]): 3-5 personal benefits\n"
    "- skillsGained (list[str]): skills that align with their goals\n"
    "- careerProgression (string): how it fits their path to the dream job\n"
    "- honestAssessment (string): whether it is worth their time and why"
)


class CandidateAnalysis(BaseModel):
    """Structured analysis of one candidate for one profile."""

    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(alias="itemId")
    kind: Literal["course", "job"]
    summary: str
    personalized_recommendation: str = Field(alias="personalizedRecommendation")
    relevance_score: int = Field(alias="relevanceScore", ge=0, le=100)
    key_benefits: list[str] = Field(default_factory=list, alias="keyBenefits")
    skills_gained: list[str] = Field(default_factory=list, alias="skillsGained")
    career_progression: str = Field(default="", alias="careerProgression")
    honest_assessment: str = Field(default="", alias="honestAssessment")
    source: Literal["semantic", "fallback"] = "semantic"
    analyzed_at: datetime = Field(default_factory=datetime.now, alias="analyzedAt")


def _build_prompt(candidate: Candidate, profile: UserProfile) -> str:
    item = {
        "kind": candidate.kind,
        "title": candidate.title,
        "provider": candidate.provider or "not provided",
        "description": candidate.description or "No description available",
        "level": candidate.level or "not specified",
        "skills": list(candidate.skills),
        "category": candidate.category,
    }
    if candidate.kind == "job":
        item["location"] = candidate.location or "not specified"
    return (
        f"ITEM\n{json.dumps(item, ensure_ascii=False, indent=2)}\n\n"
        f"PROFILE\n{profile.summary()}\n"
    )


def fallback_analysis(
    candidate: Candidate,
    profile: UserProfile,
    extractor_config: ExtractorConfig | None = None,
) -> CandidateAnalysis:
    """Deterministic analysis used when the LLM is unavailable."""
    query = extract_query(profile, extractor_config)
    score = score_candidate(candidate, query).score
    background = ", ".join(profile.field_experience) or "your field"
    description = candidate.description[:100] or "More details are in the full description."
    return CandidateAnalysis(
        item_id=candidate.id,
        kind=candidate.kind,
        summary=f"This {candidate.kind} covers {candidate.title}. {description}",
        personalized_recommendation=(
            f"This {candidate.kind} may be relevant to your career goals. Review the full "
            f"details to see if it aligns with your background in {background}."
        ),
        relevance_score=round(score),
        key_benefits=["Professional development", "Skill enhancement", "Career advancement"],
        skills_gained=list(candidate.skills[:3]) or ["Various professional skills"],
        career_progression="This could contribute to your overall professional development.",
        honest_assessment="A detailed analysis is not available right now.",
        source="fallback",
    )


async def analyze_candidate(
    candidate: Candidate,
    profile: UserProfile,
    provider: LLMProvider | None,
    *,
    model: str | None = None,
    timeout_s: float = 30.0,
    extractor_config: ExtractorConfig | None = None,
) -> CandidateAnalysis:
    """Analyze one candidate, falling back to a deterministic analysis on failure."""
    if provider is None:
        return fallback_analysis(candidate, profile, extractor_config)

    try:
        raw = await asyncio.wait_for(
            provider.complete(
                _build_prompt(candidate, profile), model=model, system=_ANALYSIS_SYSTEM_PROMPT,
            ),
            timeout=timeout_s,
        )
        data = parse_json_response(raw)
        if not isinstance(data, dict):
            msg = "analysis response is not a JSON object"
            raise ValueError(msg)
        data.update({"itemId": candidate.id, "kind": candidate.kind, "source": "semantic"})
        return CandidateAnalysis.model_validate(data)
    except Exception:
        logger.warning(
            "Analysis failed for '%s' (%s) - using fallback analysis",
            candidate.title,
            candidate.id,
            exc_info=True,
        )
    return fallback_analysis(candidate, profile, extractor_config)
