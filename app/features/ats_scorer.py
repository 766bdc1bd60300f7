from __future__ import annotations

import re
from dataclasses import dataclass

from app.features.vocabulary import (
    ATS_CATEGORIES,
    ATS_KEYWORD_SATURATION,
    ATS_KEYWORDS,
    ATS_MISSING_KEYWORDS_LIMIT,
    ATS_SENTENCE_SATURATION,
    ATS_SKILL_TOKEN_SATURATION,
    SECTION_SYNONYMS,
)
from app.normalize.utils import normalize_ats_text, round_half_up
from app.schemas.ats import ATSReport, BreakdownItem

_BULLET_GLYPH = re.compile(r"[•\-*]")
_DIGIT = re.compile(r"\d")
_TOKEN_SPLIT = re.compile(r"[\s,;]+")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")

SUGGEST_BULLETS = "Use bullet points for better readability"
SUGGEST_KEYWORDS = "Add more industry-relevant keywords"
SUGGEST_SENTENCES = "Add more descriptive sentences"
SUGGEST_NUMBERS = "Include quantified achievements (numbers, percentages)"


@dataclass(frozen=True)
class _Signals:
    found_sections: tuple[str, ...]
    missing_sections: tuple[str, ...]
    found_keywords: tuple[str, ...]
    missing_keywords: tuple[str, ...]
    distinct_tokens: int
    has_bullets: bool
    has_line_breaks: bool
    has_numbers: bool
    sentence_count: int


def _collect_signals(raw_text: str) -> _Signals:
    normalized = normalize_ats_text(raw_text)

    found_sections: list[str] = []
    missing_sections: list[str] = []
    for section, synonyms in SECTION_SYNONYMS:
        if any(phrase in normalized for phrase in synonyms):
            found_sections.append(section)
        else:
            missing_sections.append(section)

    found_keywords = tuple(k for k in ATS_KEYWORDS if k in normalized)
    missing_keywords = tuple(k for k in ATS_KEYWORDS if k not in normalized)

    tokens = {token for token in _TOKEN_SPLIT.split(normalized) if len(token) > 2}
    sentences = [part for part in _SENTENCE_SPLIT.split(raw_text) if len(part.strip()) > 3]

    return _Signals(
        found_sections=tuple(found_sections),
        missing_sections=tuple(missing_sections),
        found_keywords=found_keywords,
        missing_keywords=missing_keywords,
        distinct_tokens=len(tokens),
        has_bullets=bool(_BULLET_GLYPH.search(raw_text)),
        has_line_breaks=len(raw_text.split("\n")) > 5,
        has_numbers=bool(_DIGIT.search(raw_text)),
        sentence_count=len(sentences),
    )


def _category_scores(signals: _Signals) -> dict[str, int]:
    maxima = dict(ATS_CATEGORIES)
    section_max = maxima["Section Completeness"]
    keyword_max = maxima["Keyword Density"]
    skills_max = maxima["Skills Match"]
    grammar_max = maxima["Grammar Quality"]
    format_step = maxima["Formatting"] // 3

    return {
        "Skills Match": min(
            skills_max,
            round_half_up(skills_max * signals.distinct_tokens / ATS_SKILL_TOKEN_SATURATION),
        ),
        "Keyword Density": min(
            keyword_max,
            round_half_up(keyword_max * len(signals.found_keywords) / ATS_KEYWORD_SATURATION),
        ),
        "Section Completeness": round_half_up(
            section_max * len(signals.found_sections) / len(SECTION_SYNONYMS)
        ),
        "Formatting": format_step
        * sum((signals.has_bullets, signals.has_line_breaks, signals.has_numbers)),
        "Grammar Quality": min(
            grammar_max,
            round_half_up(grammar_max * signals.sentence_count / ATS_SENTENCE_SATURATION),
        ),
    }


def _suggestions(signals: _Signals) -> list[str]:
    suggestions: list[str] = []
    if signals.missing_sections:
        suggestions.append(f"Add missing sections: {', '.join(signals.missing_sections)}")
    if not signals.has_bullets:
        suggestions.append(SUGGEST_BULLETS)
    if len(signals.found_keywords) < 5:
        suggestions.append(SUGGEST_KEYWORDS)
    if signals.sentence_count < 5:
        suggestions.append(SUGGEST_SENTENCES)
    if not signals.has_numbers:
        suggestions.append(SUGGEST_NUMBERS)
    return suggestions


def analyze_ats(raw_text: str) -> ATSReport:
    """Score raw resume text against generic ATS heuristics (0-100).

    Section, keyword and vocabulary checks run on lower-cased text with
    dashes and colons flattened to spaces; bullet, line-break, digit and
    sentence checks look at the original text.
    """
    signals = _collect_signals(raw_text)
    scores = _category_scores(signals)
    breakdown = [BreakdownItem(label=label, score=scores[label], max=maximum) for label, maximum in ATS_CATEGORIES]
    total = sum(item.score for item in breakdown)

    return ATSReport(
        score=min(100, total),
        breakdown=breakdown,
        suggestions=_suggestions(signals),
        missing_keywords=list(signals.missing_keywords[:ATS_MISSING_KEYWORDS_LIMIT]),
    )
