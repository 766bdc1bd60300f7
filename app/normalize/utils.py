from __future__ import annotations

import math
import re

_LEAD_GLYPHS = "-•·"
_LEAD_GLYPH_PATTERN = re.compile(rf"^[\s{re.escape(_LEAD_GLYPHS)}]+")
_FLAT_BULLET_PATTERN = re.compile(r"^[-•*]\s*")
_DASHES_AND_COLONS = re.compile(r"[-‐‑‒–—―:]")
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_line(line: str) -> str:
    return _WHITESPACE_RUN.sub(" ", line).strip()


def strip_lead_glyphs(text: str) -> str:
    """Drop leading bullet glyphs (-, •, ·) and surrounding whitespace."""
    return _LEAD_GLYPH_PATTERN.sub("", text).strip()


def split_flat_bullets(text: str) -> list[str]:
    """Split a multi-line form field into bullet strings, skipping blank lines."""
    lines = (_FLAT_BULLET_PATTERN.sub("", line.strip()).strip() for line in text.split("\n"))
    return [line for line in lines if line]


def normalize_ats_text(text: str) -> str:
    lowered = text.lower()
    spaced = _DASHES_AND_COLONS.sub(" ", lowered)
    return normalize_line(spaced)


def round_half_up(value: float) -> int:
    # Matches Math.round: halves go up, unlike Python's banker's rounding.
    return int(math.floor(value + 0.5))


def capitalize_first(text: str) -> str:
    if not text:
        return text
    return text[0].upper() + text[1:]


def lower_first(text: str) -> str:
    if not text:
        return text
    return text[0].lower() + text[1:]
