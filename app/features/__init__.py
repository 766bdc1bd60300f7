from .ats_scorer import analyze_ats
from .text_enhancer import (
    diff_drafts,
    enhance_bullet,
    enhance_flat_resume,
    enhance_resume,
    enhance_summary,
    pick_verb,
)

__all__ = [
    "analyze_ats",
    "diff_drafts",
    "enhance_bullet",
    "enhance_flat_resume",
    "enhance_resume",
    "enhance_summary",
    "pick_verb",
]
