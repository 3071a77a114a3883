"""
Configuration for the resume ATS analysis engine.
Adjust weights, caps and thresholds here.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Overall score weights (must sum to 1.0)
SCORE_WEIGHTS = {
    "keyword_match": 0.45,
    "format_compatibility": 0.20,
    "section_completeness": 0.15,
    "content_quality": 0.20,
}

# Extraction caps
MAX_EXTRACTED_KEYWORDS = 25
MAX_REQUIRED_SKILLS = 15
MAX_KEYWORD_LENGTH = 40
MAX_KEYWORD_WORDS = 4
MAX_ACRONYM_LENGTH = 15

# Defaults when a posting has no recognizable title or company
DEFAULT_JOB_TITLE = "Position"
DEFAULT_COMPANY_NAME = "Company"

# Keyword matcher
MIN_MATCH_KEYWORD_LENGTH = 3
MAX_MATCHED_COMPETENCIES = 6
MAX_MISSING_COMPETENCIES = 4
MAX_SUGGESTED_COMPETENCIES = 10

# Keyword match scoring
REQUIRED_SKILL_WEIGHT = 2
KEYWORD_WEIGHT = 1
PARTIAL_MATCH_CREDIT = 0.5
PARTIAL_MATCH_MIN_LENGTH = 4
COMPETENCY_BONUS = 5
COMPETENCY_BONUS_MIN_MATCHES = 4

# Format compatibility deductions
FORMAT_PENALTIES = {
    "dashes": 8,
    "missing_sections": 12,
    "special_chars_some": 4,
    "special_chars_many": 8,
    "dates": 5,
    "contact": 5,
}
FORMAT_SKILL_CATEGORY_BONUS = 5
SPECIAL_CHAR_THRESHOLDS = (10, 20)

# Section completeness
SECTION_COUNT = 6
LINK_BONUS = 2
BULLET_DENSITY_BONUS = 3
BULLET_DENSITY_TARGET = 4

# Content quality tiers: (threshold, points)
STRONG_VERB_TIERS = {"excellent": (0.8, 10), "good": (0.6, 5), "poor": (0.4, -15)}
WEAK_VERB_TIERS = {"high": (0.3, -10), "some": (0.15, -5)}
METRICS_TIERS = {"excellent": (0.6, 10), "good": (0.4, 5), "poor": (0.2, -12)}
KEYWORD_TIERS = {"excellent": (0.7, 8), "good": (0.5, 4), "poor": (0.3, -8)}
BULLET_LENGTH_RANGE = (80, 180)
SHORT_BULLET_LENGTH = 50
LONG_BULLET_LENGTH = 250

# Suggestions
MAX_SUGGESTIONS = 6
MAX_BULLETS_PER_ROLE = 8
LONG_RESUME_WORDS = 900
SHORT_RESUME_WORDS = 300

# Web server
HOST = os.environ.get("RESUME_ATS_HOST", "0.0.0.0")
PORT = _get_env_int("RESUME_ATS_PORT", 8000)
LOG_LEVEL = os.environ.get("RESUME_ATS_LOG_LEVEL", "INFO").upper()
