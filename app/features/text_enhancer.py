"""Rule-based rewrite of resume summary and bullet text.

Everything here is a pure function of its input. The action-verb rotation
counter is threaded explicitly through ``enhance_resume`` so concurrent calls
on different drafts never share state.

Re-applying ``enhance_resume`` to its own output is not guaranteed to be a
no-op: a rewritten bullet that still opens with a weak phrase after a prior
pass is rewritten again.
"""

from __future__ import annotations

import re

from app.features.vocabulary import (
    ACTION_VERBS,
    BULLET_MAX_WORDS,
    BULLET_TRUNCATE_WORDS,
    TRAILING_STOPWORDS,
    WEAK_LEAD_INS,
)
from app.normalize.utils import (
    capitalize_first,
    lower_first,
    normalize_line,
    split_flat_bullets,
    strip_lead_glyphs,
)
from app.schemas.resume import (
    EnhancementChange,
    ExperienceEntry,
    FlatResume,
    ProjectEntry,
    ResumeDraft,
)

_I_AM = re.compile(r"\bI am\b", re.IGNORECASE)
_I_HAVE = re.compile(r"\bI have\b", re.IGNORECASE)
_PRONOUN_I = re.compile(r"\bI\b")
_POSSESSIVE_MY = re.compile(r"\bmy\b", re.IGNORECASE)
_ACTION_VERBS_LOWER = frozenset(verb.lower() for verb in ACTION_VERBS)


def pick_verb(index: int) -> str:
    return ACTION_VERBS[index % len(ACTION_VERBS)]


def _match_weak_lead_in(text: str) -> str | None:
    lowered = text.lower()
    for phrase in WEAK_LEAD_INS:
        if lowered.startswith(phrase):
            return phrase
    return None


def _prepend_verb(verb: str, rest: str) -> str:
    rest = lower_first(rest.strip())
    return f"{verb} {rest}" if rest else verb


def _cap_length(text: str) -> str:
    words = text.split()
    if len(words) <= BULLET_MAX_WORDS:
        return text
    words = words[:BULLET_TRUNCATE_WORDS]
    if words[-1].lower() in TRAILING_STOPWORDS:
        words = words[:-1]
    return " ".join(words)


def enhance_bullet(bullet: str, verb_index: int) -> str:
    if not bullet.strip():
        return bullet

    text = strip_lead_glyphs(bullet)
    if not text:
        # glyph-only bullet still terminates like any other line
        return "."

    weak = _match_weak_lead_in(text)
    if weak is not None:
        text = _prepend_verb(pick_verb(verb_index), text[len(weak):])
    else:
        first_word = text.split()[0]
        if first_word.lower() not in _ACTION_VERBS_LOWER:
            text = _prepend_verb(pick_verb(verb_index), text)

    text = _cap_length(text)
    if not text.endswith("."):
        text += "."
    return capitalize_first(text)


def enhance_summary(summary: str) -> str:
    if not summary.strip():
        return summary

    text = _I_AM.sub("A professional", summary.strip())
    text = _I_HAVE.sub("Possesses", text)
    text = _PRONOUN_I.sub("", text)
    text = _POSSESSIVE_MY.sub("", text)
    text = normalize_line(text)
    if not text.endswith("."):
        text += "."
    return text


def _enhance_bullets(bullets: list[str], verb_index: int) -> tuple[list[str], int]:
    enhanced: list[str] = []
    for bullet in bullets:
        if bullet.strip():
            enhanced.append(enhance_bullet(bullet, verb_index))
            verb_index += 1
        else:
            enhanced.append(bullet)
    return enhanced, verb_index


def enhance_resume(draft: ResumeDraft) -> ResumeDraft:
    verb_index = 0

    experience: list[ExperienceEntry] = []
    for entry in draft.experience:
        bullets, verb_index = _enhance_bullets(entry.bullets, verb_index)
        experience.append(entry.model_copy(update={"bullets": bullets}, deep=True))

    projects: list[ProjectEntry] = []
    for entry in draft.projects:
        bullets, verb_index = _enhance_bullets(entry.bullets, verb_index)
        projects.append(entry.model_copy(update={"bullets": bullets}, deep=True))

    return draft.model_copy(
        update={
            "summary": enhance_summary(draft.summary),
            "experience": experience,
            "projects": projects,
        },
        deep=True,
    )


def enhance_flat_resume(flat: FlatResume) -> FlatResume:
    """Apply the same rules to the single-page builder payload.

    Multi-line ``experience`` and ``projects`` fields are rewritten line by
    line with one shared verb counter; blank lines are dropped.
    """
    verb_index = 0
    updates: dict[str, str] = {"career_objective": enhance_summary(flat.career_objective)}
    for field in ("experience", "projects"):
        bullets, verb_index = _enhance_bullets(split_flat_bullets(getattr(flat, field)), verb_index)
        updates[field] = "\n".join(bullets)
    return flat.model_copy(update=updates)


def _bullet_changes(prefix: str, before: list[str], after: list[str]) -> list[EnhancementChange]:
    changes: list[EnhancementChange] = []
    for index, new_text in enumerate(after):
        old_text = before[index] if index < len(before) else ""
        if new_text != old_text and new_text.strip():
            changes.append(
                EnhancementChange(field=f"{prefix}.bullets[{index}]", before=old_text, after=new_text)
            )
    return changes


def diff_drafts(original: ResumeDraft, enhanced: ResumeDraft) -> list[EnhancementChange]:
    changes: list[EnhancementChange] = []
    if original.summary != enhanced.summary and enhanced.summary.strip():
        changes.append(EnhancementChange(field="summary", before=original.summary, after=enhanced.summary))

    groups = (
        ("experience", original.experience, enhanced.experience),
        ("projects", original.projects, enhanced.projects),
    )
    for name, before_entries, after_entries in groups:
        for index, after_entry in enumerate(after_entries):
            before_bullets = before_entries[index].bullets if index < len(before_entries) else []
            key = after_entry.id or str(index)
            changes.extend(_bullet_changes(f"{name}[{key}]", before_bullets, after_entry.bullets))
    return changes
