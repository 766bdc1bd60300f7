from __future__ import annotations

import json
import logging
import os
import re
import time
from functools import lru_cache
from typing import Any

from openai import APIStatusError, OpenAI, RateLimitError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a professional resume writing expert. You produce ATS-optimized, concise, recruiter-ready resume content.

RULES:
- No emojis, decorative symbols, or special characters.
- Use clean, professional English.
- Keep content concise; fresher resumes must fit 1 page.
- Use consistent past tense for completed work, present tense for current roles.
- Never invent employers, dates, metrics or certifications that are not in the input.
- Never use generic phrases like "seeking a challenging position" or "hardworking individual".

You will receive a JSON object with the user's raw resume data and must return an enhanced JSON object."""

USER_PROMPT_TEMPLATE = """Enhance this resume data. Return ONLY a valid JSON object with these exact keys:

{{
  "careerObjective": "...",
  "experience": "...",
  "projects": "...",
  "programmingLanguages": "...",
  "frameworksLibraries": "...",
  "toolsPlatforms": "...",
  "databases": "...",
  "softSkills": "...",
  "certifications": "..."
}}

INSTRUCTIONS FOR EACH FIELD:

careerObjective: a 3-4 line results-oriented professional summary without first-person pronouns.
experience: one bullet per line, each starting with a strong action verb (Developed, Implemented, Optimized, Designed, Led, Automated, Architected, Streamlined).
projects: one project per line, "Project Title - brief description using technologies X, Y. Key contribution: outcome."
programmingLanguages, frameworksLibraries, toolsPlatforms, databases, softSkills: deduplicated, comma-separated. Empty string if none.
certifications: one per line, "Certificate Name | Issuing Organization | Year"; omit missing parts.

Here is the user's raw resume data:
{resume_json}
"""

_CODE_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


class EnhanceLLMError(RuntimeError):
    def __init__(self, message: str, *, code: str = "llm_unavailable"):
        super().__init__(message)
        self.code = code


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def enhance_llm_enabled() -> bool:
    if not _env_bool("AI_ENHANCE_ENABLED", True):
        return False
    provider = (os.getenv("AI_PROVIDER") or "openai").strip().lower()
    if provider != "openai":
        return False
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    if not api_key or _looks_like_placeholder(api_key):
        return False
    return True


def strict_llm_mode() -> bool:
    return _env_bool("AI_ENHANCE_STRICT", False)


@lru_cache(maxsize=1)
def _client() -> OpenAI:
    return OpenAI(
        api_key=(os.getenv("OPENAI_API_KEY") or "").strip(),
        base_url=(os.getenv("OPENAI_BASE_URL") or None),
        timeout=float(os.getenv("AI_ENHANCE_TIMEOUT_S", "20")),
        max_retries=int(os.getenv("OPENAI_MAX_RETRIES", "2")),
    )


def _model() -> str:
    return (os.getenv("AI_MODEL") or os.getenv("OPENAI_MODEL") or "gpt-4o-mini").strip()


def build_user_prompt(resume_data: dict[str, Any]) -> str:
    return USER_PROMPT_TEMPLATE.format(resume_json=json.dumps(resume_data, indent=2, ensure_ascii=False))


def parse_json_content(content: str) -> dict[str, Any]:
    """Parse a model reply that may wrap its JSON in a markdown code fence."""
    text = content.strip()
    match = _CODE_FENCE.search(text)
    if match:
        text = match.group(1).strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise EnhanceLLMError("AI returned invalid format. Please try again.", code="llm_invalid") from exc
    if not isinstance(parsed, dict):
        raise EnhanceLLMError("AI returned invalid format. Please try again.", code="llm_invalid")
    return parsed


def json_completion(
    *,
    system_prompt: str,
    user_prompt: str,
    temperature: float = 0.4,
    max_output_tokens: int = 1200,
) -> dict[str, Any]:
    if not enhance_llm_enabled():
        raise EnhanceLLMError("AI service is not configured.", code="llm_disabled")

    started = time.perf_counter()
    try:
        response = _client().chat.completions.create(
            model=_model(),
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            response_format={"type": "json_object"},
            max_tokens=max_output_tokens,
        )
    except RateLimitError as exc:
        raise EnhanceLLMError("AI rate limit exceeded. Please try again in a moment.", code="llm_rate_limited") from exc
    except APIStatusError as exc:
        if exc.status_code == 402:
            raise EnhanceLLMError("AI credits exhausted. Please add credits to continue.", code="llm_quota") from exc
        logger.warning("enhance_llm_status_error model=%s status=%s", _model(), exc.status_code)
        raise EnhanceLLMError("AI enhancement failed.") from exc
    except Exception as exc:  # noqa: BLE001 - SDK raises many transport errors
        logger.warning("enhance_llm_failed model=%s prompt_len=%s: %s", _model(), len(user_prompt), exc)
        raise EnhanceLLMError("AI enhancement failed.") from exc

    content = response.choices[0].message.content if response.choices else ""
    latency_ms = int((time.perf_counter() - started) * 1000)
    if not content:
        logger.warning("enhance_llm_empty model=%s latency_ms=%s", _model(), latency_ms)
        raise EnhanceLLMError("AI returned an empty response. Please try again.", code="llm_invalid")

    parsed = parse_json_content(content)
    logger.info("enhance_llm_success model=%s latency_ms=%s keys=%s", _model(), latency_ms, len(parsed))
    return parsed


def enhance_resume_json(resume_data: dict[str, Any]) -> dict[str, Any]:
    return json_completion(system_prompt=SYSTEM_PROMPT, user_prompt=build_user_prompt(resume_data))
