from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SourceType = Literal["txt", "pdf", "docx"]


class BreakdownItem(BaseModel):
    label: str
    score: int = Field(ge=0)
    max: int = Field(ge=0)


class ATSReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    score: int = Field(ge=0, le=100)
    breakdown: list[BreakdownItem]
    suggestions: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list, max_length=8)


class AnalyzeRequest(BaseModel):
    text: str = Field(default="", max_length=100000)


class ExtractTextResponse(BaseModel):
    filename: str
    source_type: SourceType
    text: str
    characters: int = Field(ge=0)
    page_count: int | None = None
    warnings: list[str] = Field(default_factory=list)


class AnalyzeFileResponse(BaseModel):
    extraction: ExtractTextResponse
    report: ATSReport
