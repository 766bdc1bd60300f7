from __future__ import annotations

import logging
from typing import Any

from app.features import diff_drafts, enhance_flat_resume, enhance_resume
from app.schemas.resume import (
    FLAT_ENHANCEABLE_FIELDS,
    AIEnhanceResponse,
    EnhanceResponse,
    FlatResume,
    ResumeDraft,
)
from app.services.enhance_llm import EnhanceLLMError, enhance_resume_json, strict_llm_mode

logger = logging.getLogger(__name__)


def run_rule_enhance(draft: ResumeDraft) -> EnhanceResponse:
    enhanced = enhance_resume(draft)
    return EnhanceResponse(draft=enhanced, changes=diff_drafts(draft, enhanced))


def merge_llm_fields(original: FlatResume, enhanced: dict[str, Any]) -> FlatResume:
    """Take each enhanceable field from the model reply only if it is a non-empty string."""
    updates: dict[str, str] = {}
    for field_name in FLAT_ENHANCEABLE_FIELDS:
        alias = FlatResume.model_fields[field_name].alias or field_name
        value = enhanced.get(alias, enhanced.get(field_name))
        if isinstance(value, str) and value.strip():
            updates[field_name] = value.strip()
    return original.model_copy(update=updates)


def run_ai_enhance(content: FlatResume) -> AIEnhanceResponse:
    payload = content.model_dump(by_alias=True)
    try:
        enhanced = enhance_resume_json(payload)
    except EnhanceLLMError as exc:
        if strict_llm_mode():
            raise
        logger.info("resume_ai_enhance_fallback reason=%s", exc.code)
        return AIEnhanceResponse(result=enhance_flat_resume(content), source="rules")

    return AIEnhanceResponse(result=merge_llm_fields(content, enhanced), source="llm")
