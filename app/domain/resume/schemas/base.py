import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _LenientModel(BaseModel):
    """Base for shapes the language model fills in

    Unknown keys are kept, numbers are accepted where text is expected and
    null values fall back to the field default.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


def _as_text(value: Any) -> Any:
    """Flatten list and object values the model put where text belongs"""
    if isinstance(value, list):
        return ", ".join(str(_as_text(v)) for v in value if v is not None and v != "")
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool):
        return str(value).lower()
    return value


def _as_text_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None and not isinstance(v, (dict, list))]
    return []


class Contact(_LenientModel):
    """Candidate contact details"""

    email: str = ""
    location: str = ""

    @field_validator("email", "location", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return _as_text(v)


class CandidateProfile(BaseModel):
    """Normalized generation request, alive for one request only"""

    name: str = ""
    contact: Contact = Field(default_factory=Contact)
    resume_text: str = ""
    detected_languages: list[str] = Field(default_factory=list)
    target_role: str = ""
    tone: str = ""
    repo_count: int = 0


class SkillEntry(_LenientModel):
    skill: str = ""
    level: str | None = None
    description: str = ""

    @field_validator("skill", "level", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return _as_text(v)


class ProjectEntry(_LenientModel):
    name: str = ""
    short_desc: str = ""
    tech: list[str] = Field(default_factory=list)
    bullets: list[str] = Field(default_factory=list)
    url: str = ""

    @field_validator("tech", "bullets", mode="before")
    @classmethod
    def coerce_text_list(cls, v: Any) -> list:
        return _as_text_list(v)

    @field_validator("name", "short_desc", "url", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return _as_text(v)


class ExperienceEntry(_LenientModel):
    role: str = ""
    company: str = ""
    dates: str = ""
    bullets: list[str] = Field(default_factory=list)

    @field_validator("bullets", mode="before")
    @classmethod
    def coerce_text_list(cls, v: Any) -> list:
        return _as_text_list(v)

    @field_validator("role", "company", "dates", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return _as_text(v)


class EducationEntry(_LenientModel):
    degree: str = ""
    school: str = ""
    year: str = ""

    @field_validator("degree", "school", "year", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return _as_text(v)


class GenerationResult(_LenientModel):
    """Resume produced by the model or by the fallback generator"""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True, frozen=True)

    name: str = ""
    contact: Contact = Field(default_factory=Contact)
    summary: str = ""
    skills: list[SkillEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    is_fallback: bool = False


class AnalysisProject(BaseModel):
    name: str
    details: str = ""


class AnalysisResult(BaseModel):
    """Profile analysis returned to the profile page"""

    summary: str = ""
    skills: list[str] = Field(default_factory=list)
    projects: list[AnalysisProject] = Field(default_factory=list)
    is_fallback: bool = False
    raw: dict | None = None
