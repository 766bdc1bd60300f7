from __future__ import annotations

# Ordered lookup tables for the rule-based enhancer and the ATS scorer.
# Order matters: verb rotation indexes ACTION_VERBS, and the first matching
# entry of WEAK_LEAD_INS wins.

ACTION_VERBS: tuple[str, ...] = (
    "Spearheaded",
    "Engineered",
    "Architected",
    "Optimized",
    "Delivered",
    "Implemented",
    "Streamlined",
    "Developed",
    "Orchestrated",
    "Accelerated",
    "Designed",
    "Led",
    "Built",
    "Automated",
    "Reduced",
    "Increased",
    "Launched",
    "Transformed",
    "Drove",
    "Executed",
    "Resolved",
    "Elevated",
)

WEAK_LEAD_INS: tuple[str, ...] = (
    "worked on",
    "helped with",
    "was responsible for",
    "assisted in",
    "participated in",
    "involved in",
    "did",
    "made",
    "used",
    "handled",
    "managed to",
    "was part of",
    "contributed to",
)

TRAILING_STOPWORDS: frozenset[str] = frozenset(
    {"the", "a", "an", "in", "on", "at", "to", "for", "of", "with", "and", "or"}
)

BULLET_MAX_WORDS = 22
BULLET_TRUNCATE_WORDS = 20

# Canonical section -> phrases that count as that section being present.
SECTION_SYNONYMS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("education", ("education", "academic background", "qualifications")),
    ("skills", ("skills", "technical skills", "core competencies")),
    ("experience", ("experience", "work experience", "internship", "employment history")),
    ("projects", ("projects", "personal projects", "academic projects")),
    ("objective", ("objective", "career objective", "professional summary")),
    ("certifications", ("certifications", "certification", "certificates", "licenses")),
)

ATS_KEYWORDS: tuple[str, ...] = (
    "python",
    "java",
    "javascript",
    "react",
    "sql",
    "html",
    "css",
    "git",
    "communication",
    "teamwork",
    "leadership",
    "problem solving",
    "machine learning",
    "data",
    "api",
    "database",
    "cloud",
    "agile",
)

ATS_KEYWORD_SATURATION = 8
ATS_SKILL_TOKEN_SATURATION = 40
ATS_SENTENCE_SATURATION = 10
ATS_MISSING_KEYWORDS_LIMIT = 8

# (label, max) in report order; maxima sum to 100.
ATS_CATEGORIES: tuple[tuple[str, int], ...] = (
    ("Skills Match", 30),
    ("Keyword Density", 25),
    ("Section Completeness", 20),
    ("Formatting", 15),
    ("Grammar Quality", 10),
)
