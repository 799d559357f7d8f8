"""Map each source's raw payload into the canonical Candidate shape.

One mapping function per schema. Missing optional fields get defaults;
items without a title or a native id are rejected, never mapped to an
empty Candidate.
"""

import logging
from collections.abc import Callable
from typing import Any

from career_reco.core.config import CandidateKind
from career_reco.core.errors import NormalizationError
from career_reco.core.schemas import Candidate, RawItem
from career_reco.profile.schema import to_string_list

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General"

# Mapper output: dict of Candidate fields, plus "native_id"
Mapper = Callable[[dict[str, Any]], dict[str, Any]]


def _text(value: Any) -> str:
    if value is None:
        return ""
    return " ".join(str(value).split())


def _first(items: Any, key: str | None = None) -> Any:
    """First element of a list (optionally a key of it), or None."""
    if not isinstance(items, list) or not items:
        return None
    head = items[0]
    if key is None:
        return head
    return head.get(key) if isinstance(head, dict) else None


def _udemy(p: dict[str, Any]) -> dict[str, Any]:
    return {
        "native_id": p.get("id"),
        "kind": "course",
        "title": p.get("title"),
        "provider": "Udemy",
        "category": p.get("category"),
        "skills": p.get("what_you_will_learn"),
        "description": p.get("description"),
        "level": p.get("level"),
        "url": p.get("url"),
    }


def _coursera(p: dict[str, Any]) -> dict[str, Any]:
    slug = p.get("slug")
    return {
        "native_id": slug,
        "kind": "course",
        "title": p.get("name"),
        "provider": "Coursera",
        "category": _first(p.get("domainTypes"), "name"),
        "skills": p.get("skills"),
        "description": p.get("description"),
        "level": p.get("level"),
        "url": f"https://coursera.org/learn/{slug}" if slug else "",
    }


def _edx(p: dict[str, Any]) -> dict[str, Any]:
    about = p.get("course_about_url")
    return {
        "native_id": p.get("course_id"),
        "kind": "course",
        "title": p.get("name"),
        "provider": "edX",
        "category": _first(p.get("subjects")),
        "skills": p.get("subjects"),
        "description": p.get("short_description"),
        "level": p.get("level_type"),
        "url": f"https://courses.edx.org{about}" if about else "",
    }


def _classcentral(p: dict[str, Any]) -> dict[str, Any]:
    return {
        "native_id": p.get("id"),
        "kind": "course",
        "title": p.get("name"),
        "provider": p.get("provider") or "Class Central",
        "category": p.get("subject"),
        "skills": p.get("tags"),
        "description": p.get("description"),
        "level": p.get("level"),
        "url": p.get("url"),
    }


def _indeed(p: dict[str, Any]) -> dict[str, Any]:
    return {
        "native_id": p.get("job_id"),
        "kind": "job",
        "title": p.get("job_title"),
        "provider": p.get("company_name"),
        "category": p.get("job_category"),
        "skills": p.get("job_required_skills"),
        "description": p.get("job_description"),
        "level": p.get("job_experience_level"),
        "location": p.get("job_location"),
        "url": p.get("job_apply_link"),
    }


def _linkedin(p: dict[str, Any]) -> dict[str, Any]:
    return {
        "native_id": p.get("jobId"),
        "kind": "job",
        "title": p.get("title"),
        "provider": p.get("company"),
        "category": _first(p.get("industries")),
        "skills": p.get("skills"),
        "description": p.get("description"),
        "level": p.get("seniorityLevel"),
        "location": p.get("location"),
        "url": p.get("jobUrl"),
    }


def _jobsapi(p: dict[str, Any]) -> dict[str, Any]:
    return {
        "native_id": p.get("jobId") or p.get("id"),
        "kind": "job",
        "title": p.get("title"),
        "provider": p.get("company"),
        "category": p.get("jobFamily"),
        "skills": p.get("requiredSkills"),
        "description": p.get("description"),
        "level": p.get("experienceLevel"),
        "location": p.get("location"),
        "url": _first(p.get("jobProviders"), "url"),
    }


def _static(p: dict[str, Any]) -> dict[str, Any]:
    return {
        "native_id": p.get("id"),
        "kind": p.get("kind"),
        "title": p.get("title"),
        "provider": p.get("provider"),
        "category": p.get("category"),
        "skills": p.get("skills"),
        "description": p.get("description"),
        "level": p.get("level"),
        "location": p.get("location"),
        "url": p.get("url"),
    }


_MAPPERS: dict[str, Mapper] = {
    "udemy": _udemy,
    "coursera": _coursera,
    "edx": _edx,
    "classcentral": _classcentral,
    "indeed": _indeed,
    "linkedin": _linkedin,
    "jobsapi": _jobsapi,
    "static": _static,
}


def normalize(raw: RawItem) -> Candidate:
    """Map one RawItem to a Candidate.

    Raises:
        NormalizationError: Unknown schema, missing title, or missing native id.
    """
    mapper = _MAPPERS.get(raw.schema_name)
    if mapper is None:
        msg = f"no mapping for schema '{raw.schema_name}'"
        raise NormalizationError(msg)

    fields = mapper(raw.payload)
    native_id = _text(fields.get("native_id"))
    title = _text(fields.get("title"))
    if not native_id:
        msg = f"{raw.source_id} item has no id"
        raise NormalizationError(msg)
    if not title:
        msg = f"{raw.source_id} item {native_id} has no title"
        raise NormalizationError(msg)

    kind: CandidateKind = "job" if fields.get("kind") == "job" else "course"
    return Candidate(
        id=f"{raw.source_id}:{native_id}",
        kind=kind,
        title=title,
        provider=_text(fields.get("provider")),
        category=_text(fields.get("category")) or DEFAULT_CATEGORY,
        skills=tuple(to_string_list(fields.get("skills"))),
        description=_text(fields.get("description")),
        level=_text(fields.get("level")),
        location=_text(fields.get("location")) if kind == "job" else "",
        url=_text(fields.get("url")),
        raw=raw,
    )


def normalize_all(raws: list[RawItem]) -> list[Candidate]:
    """Normalize a batch, dropping (and logging) items that cannot be mapped."""
    candidates: list[Candidate] = []
    for raw in raws:
        try:
            candidates.append(normalize(raw))
        except NormalizationError as e:
            logger.debug("Dropping raw item from %s: %s", raw.source_id, e)
    dropped = len(raws) - len(candidates)
    if dropped:
        logger.info("Normalizer dropped %d of %d items", dropped, len(raws))
    return candidates
