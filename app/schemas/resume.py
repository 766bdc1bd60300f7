from __future__ import annotations

from typing import Any, Literal, get_origin

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_missing(cls, value: Any, info) -> Any:
        # null from the form layer means "empty", never "absent"
        if value is not None:
            return value
        field = cls.model_fields.get(info.field_name)
        if field is None:
            return value
        if get_origin(field.annotation) is list:
            return []
        if field.annotation is str:
            return ""
        return value


class ExperienceEntry(_CamelModel):
    id: str = ""
    title: str = ""
    company: str = ""
    duration: str = ""
    bullets: list[str] = Field(default_factory=list)


class ProjectEntry(_CamelModel):
    id: str = ""
    name: str = ""
    description: str = ""
    bullets: list[str] = Field(default_factory=list)


class EducationEntry(_CamelModel):
    id: str = ""
    degree: str = ""
    institution: str = ""
    year: str = ""


class ResumeDraft(_CamelModel):
    full_name: str = ""
    job_title: str = ""
    phone: str = ""
    email: str = ""
    linkedin: str = ""
    location: str = ""
    summary: str = ""
    skills: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)


class FlatResume(_CamelModel):
    """Single-page builder form state; bullets are newline-separated text."""

    full_name: str = ""
    phone: str = ""
    email: str = ""
    linkedin: str = ""
    degree: str = ""
    college: str = ""
    year: str = ""
    programming_languages: str = ""
    frameworks_libraries: str = ""
    tools_platforms: str = ""
    databases: str = ""
    soft_skills: str = ""
    experience: str = ""
    projects: str = ""
    certifications: str = ""
    career_objective: str = ""


# Fields the LLM is allowed to rewrite; everything else is copied through.
FLAT_ENHANCEABLE_FIELDS: tuple[str, ...] = (
    "career_objective",
    "experience",
    "projects",
    "programming_languages",
    "frameworks_libraries",
    "tools_platforms",
    "databases",
    "soft_skills",
    "certifications",
)


class EnhancementChange(_CamelModel):
    field: str
    before: str
    after: str


class EnhanceResponse(_CamelModel):
    draft: ResumeDraft
    changes: list[EnhancementChange] = Field(default_factory=list)


class AIEnhanceRequest(_CamelModel):
    content: FlatResume


class AIEnhanceResponse(_CamelModel):
    result: FlatResume
    source: Literal["llm", "rules"]
