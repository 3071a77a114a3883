"""
Keyword matcher.
Partitions job keywords into matched/missing against a resume and derives a
short list of suggested core competencies.
"""

import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Dict, List

from . import config
from .extractor import JobDescription
from .resume import Resume, flatten_resume
from .text_utils import capitalize_with_acronyms

logger = logging.getLogger(__name__)


YEARS_FRAGMENT = re.compile(r'\d+\s*(years?|yrs?|\+)')
YEARS_OF_EXPERIENCE = re.compile(r'years?\s*(of\s*)?(experience|exp)')
EXPERIENCE_PHRASE = re.compile(r'experience')
NUMBER_ONLY = re.compile(r'^\d+$')
FUNCTION_WORDS = frozenset({
    'the', 'and', 'or', 'for', 'with', 'from', 'into', 'this', 'that',
    'have', 'has', 'will', 'can', 'may', 'must', 'should',
})
# Soft skills and generic qualities are never core competencies (prefix match)
SOFT_SKILL_PREFIX = re.compile(
    r'^(communication|leadership|teamwork|collaborat|problem|analysis|thinking|creative|'
    r'flexible|time|detail|self|motivated|hard|soft|skill|innovation|creativity|adaptability|'
    r'resilience|integrity|professionalism|accountability|ownership|initiative|proactive|'
    r'organized|mentoring|coaching|negotiation|presentation|influence|persuasion|diplomacy|'
    r'empathy|patience)'
)
GENERIC_COMPETENCIES = frozenset({
    'development', 'programming', 'coding', 'software', 'excel', 'word', 'powerpoint',
    'outlook', 'manufacturing', 'automation', 'safety', 'maintenance', 'reliability',
    'environmental', 'diversity', 'inclusion', 'procurement', 'logistics', 'operations',
    'compensation', 'qualification', 'recruiting', 'benefits',
})


@dataclass
class KeywordAnalysis:
    """Keyword coverage of a resume against a job description."""
    all_keywords: List[str] = field(default_factory=list)
    matched_keywords: List[str] = field(default_factory=list)
    missing_keywords: List[str] = field(default_factory=list)
    suggested_competencies: List[str] = field(default_factory=list)

    @property
    def coverage(self) -> float:
        if not self.all_keywords:
            return 0.0
        return len(self.matched_keywords) / len(self.all_keywords)

    def to_dict(self) -> Dict:
        return asdict(self)


def is_valid_competency(keyword: str) -> bool:
    """Keep only genuine technical/professional competencies."""
    lower = keyword.lower().strip()

    if YEARS_FRAGMENT.search(lower) or YEARS_OF_EXPERIENCE.search(lower):
        return False
    if EXPERIENCE_PHRASE.search(lower) or NUMBER_ONLY.match(lower):
        return False
    if len(lower) < 4 or lower in FUNCTION_WORDS:
        return False
    if SOFT_SKILL_PREFIX.match(lower):
        return False
    return lower not in GENERIC_COMPETENCIES


def analyze_keywords(resume: Resume, job_description: JobDescription) -> KeywordAnalysis:
    """Match job keywords against the flattened resume text.

    Matching is plain substring containment, so "sql" is found inside
    "postgresql".
    """
    resume_text = flatten_resume(resume).lower()
    all_keywords = [
        kw for kw in job_description.all_keywords()
        if len(kw) >= config.MIN_MATCH_KEYWORD_LENGTH
    ]

    matched = [kw for kw in all_keywords if kw in resume_text]
    missing = [kw for kw in all_keywords if kw not in resume_text]

    suggested = (
        [kw for kw in matched if is_valid_competency(kw)][:config.MAX_MATCHED_COMPETENCIES]
        + [kw for kw in missing if is_valid_competency(kw)][:config.MAX_MISSING_COMPETENCIES]
    )
    suggested = [capitalize_with_acronyms(kw) for kw in suggested[:config.MAX_SUGGESTED_COMPETENCIES]]

    logger.debug("Keyword match: %d of %d keywords found", len(matched), len(all_keywords))

    return KeywordAnalysis(
        all_keywords=all_keywords,
        matched_keywords=matched,
        missing_keywords=missing,
        suggested_competencies=suggested,
    )
