"""UserProfile model: a read-only snapshot of the questionnaire answers."""

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

_LIST_FIELDS = (
    "interests",
    "field_experience",
    "desired_fields",
    "technical_skills",
    "remote_countries",
)
_TEXT_FIELDS = (
    "dream_job",
    "specialization",
    "career_goal",
    "region",
    "experience_level",
    "employment_status",
    "experience",
    "university",
)


def to_string_list(value: Any) -> list[str]:
    """Coerce a loosely typed answer into an ordered, de-duplicated list.

    Accepts None, a string (comma separated values are split), a list or
    tuple of strings, or a keyed object used as a set ({"Design": true}).
    Keys mapped to a falsy value are dropped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    elif isinstance(value, Mapping):
        items = [k for k, selected in value.items() if selected]
    elif isinstance(value, Iterable):
        items = value
    else:
        items = [value]

    result: list[str] = []
    seen: set[str] = set()
    for item in items:
        if item is None:
            continue
        text = " ".join(str(item).split())
        if text and text.lower() not in seen:
            seen.add(text.lower())
            result.append(text)
    return result


class UserProfile(BaseModel):
    """Profile answers with every field optional.

    Field names follow Python style; the stored camelCase keys are accepted
    as aliases so a raw Profile Store record validates as-is.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dream_job: str = Field(default="", alias="dreamJob")
    specialization: str = ""
    career_goal: str = Field(default="", alias="careerGoal")
    interests: list[str] = Field(default_factory=list)
    field_experience: list[str] = Field(default_factory=list, alias="fieldExperience")
    desired_fields: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("desiredFields", "desiredField", "desired_fields"),
    )
    technical_skills: list[str] = Field(default_factory=list, alias="technicalSkills")
    region: str = ""
    experience_level: str = Field(default="", alias="experienceLevel")
    employment_status: str = Field(default="", alias="employmentStatus")
    experience: str = ""
    university: str = ""
    remote_countries: list[str] = Field(default_factory=list, alias="remoteCountries")

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def coerce_list(cls, v: Any) -> list[str]:
        return to_string_list(v)

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, str):
            return " ".join(v.split())
        # Some answers were stored as single-choice lists
        return ", ".join(to_string_list(v))

    def summary(self) -> str:
        """Plain-text profile description for the semantic scorer."""
        lines = [
            f"Dream job: {self.dream_job or 'not specified'}",
            f"Specialization: {self.specialization or 'not specified'}",
            f"Career goal: {self.career_goal or 'not specified'}",
            f"Field experience: {', '.join(self.field_experience) or 'none'}",
            f"Desired fields: {', '.join(self.desired_fields) or 'none'}",
            f"Technical skills: {', '.join(self.technical_skills) or 'none'}",
            f"Interests: {', '.join(self.interests) or 'none'}",
            f"Experience level: {self.experience_level or self.experience or 'not specified'}",
            f"Employment status: {self.employment_status or 'not specified'}",
            f"Region: {self.region or 'not specified'}",
        ]
        if self.remote_countries:
            lines.append(f"Remote work countries: {', '.join(self.remote_countries)}")
        return "\n".join(lines)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "UserProfile":
        """Load a profile snapshot from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Profile file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)

    @classmethod
    def from_json(cls, path: str | Path) -> "UserProfile":
        """Load a profile snapshot exported as JSON."""
        path = Path(path)
        if not path.exists():
            msg = f"Profile file not found: {path}"
            raise FileNotFoundError(msg)
        return cls.model_validate(json.loads(path.read_text() or "{}"))

    @classmethod
    def load(cls, path: str | Path) -> "UserProfile":
        """Load a profile, choosing the parser from the file extension."""
        if Path(path).suffix.lower() == ".json":
            return cls.from_json(path)
        return cls.from_yaml(path)
