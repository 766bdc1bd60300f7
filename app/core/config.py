from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer, got '{raw}'.") from exc


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got '{raw}'.") from exc


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    ats_min_text_chars: int
    max_upload_bytes: int
    razorpay_key_id: str | None
    razorpay_key_secret: str | None
    razorpay_api_base: str
    razorpay_timeout_s: float
    download_token_secret: str
    payment_amount: int
    payment_currency: str


settings = Settings(
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
            "http://localhost:3000",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX", r"^https:\/\/[a-z0-9-]+-.*\.vercel\.app$"),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    ats_min_text_chars=_get_env_int("ATS_MIN_TEXT_CHARS", 20),
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
    razorpay_key_id=_get_env("RAZORPAY_KEY_ID"),
    razorpay_key_secret=_get_env("RAZORPAY_KEY_SECRET"),
    razorpay_api_base=_get_env("RAZORPAY_API_BASE", "https://api.razorpay.com/v1") or "https://api.razorpay.com/v1",
    razorpay_timeout_s=_get_env_float("RAZORPAY_TIMEOUT_S", 10.0),
    download_token_secret=_get_env("DOWNLOAD_TOKEN_SECRET", "dev-download-token-secret") or "dev-download-token-secret",
    payment_amount=_get_env_int("PAYMENT_AMOUNT", 4900),
    payment_currency=_get_env("PAYMENT_CURRENCY", "INR") or "INR",
)

if settings.ats_min_text_chars < 0:
    raise RuntimeError("ATS_MIN_TEXT_CHARS must not be negative.")

if settings.max_upload_bytes <= 0:
    raise RuntimeError("MAX_UPLOAD_BYTES must be a positive number of bytes.")

if settings.razorpay_timeout_s <= 0:
    raise RuntimeError("RAZORPAY_TIMEOUT_S must be a positive number of seconds.")
