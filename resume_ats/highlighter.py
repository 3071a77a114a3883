"""
Keyword highlighter.
Wraps impact verbs, metrics and job keywords in resume bullets with <strong>
tags for rendering.
"""

import re
from dataclasses import replace
from typing import List

from .extractor import JobDescription
from .resume import Resume

IMPACT_VERBS = (
    'achieved', 'accelerated', 'accomplished', 'administered', 'advanced',
    'boosted', 'built', 'championed', 'collaborated', 'consolidated',
    'created', 'decreased', 'delivered', 'designed', 'developed',
    'directed', 'drove', 'eliminated', 'engineered', 'enhanced',
    'established', 'exceeded', 'executed', 'expanded', 'generated',
    'grew', 'implemented', 'improved', 'increased', 'initiated',
    'introduced', 'launched', 'led', 'managed', 'maximized',
    'mentored', 'negotiated', 'optimized', 'orchestrated', 'outperformed',
    'pioneered', 'produced', 'reduced', 'reengineered', 'restructured',
    'revamped', 'scaled', 'simplified', 'spearheaded', 'streamlined',
    'strengthened', 'succeeded', 'surpassed', 'transformed', 'tripled',
)

_VERB_PATTERNS = [
    re.compile(r'(^|[.;]\s*)(' + verb + r')\b', re.IGNORECASE) for verb in IMPACT_VERBS
]

METRIC_PATTERNS = (
    re.compile(r'\d+%'),
    re.compile(r'\$[\d,.]+[KMB]?', re.IGNORECASE),
    re.compile(r'\d+x', re.IGNORECASE),
    re.compile(r'\d+\+'),
    re.compile(r'\b\d{2,}[+]?\s*(users?|customers?|clients?|employees?|teams?|projects?|accounts?)', re.IGNORECASE),
)

MAX_HIGHLIGHTED_KEYWORDS = 15
MIN_HIGHLIGHT_LENGTH = 5

_TAG = re.compile(r'(<[^>]*>)')


def _sub_outside_tags(pattern: re.Pattern, repl: str, text: str) -> str:
    """Apply a substitution to the text between tags, leaving the tags intact."""
    parts = _TAG.split(text)
    return ''.join(
        part if index % 2 else pattern.sub(repl, part)
        for index, part in enumerate(parts)
    )


def bold_keywords_in_text(text: str, job_keywords: List[str]) -> str:
    """Bold impact verbs, metrics and significant job keywords in one string."""
    result = text

    for pattern in _VERB_PATTERNS:
        result = pattern.sub(r'\1<strong>\2</strong>', result)

    for pattern in METRIC_PATTERNS:
        result = _sub_outside_tags(pattern, r'<strong>\g<0></strong>', result)

    significant = [k for k in job_keywords if len(k) >= MIN_HIGHLIGHT_LENGTH]
    for keyword in significant[:MAX_HIGHLIGHTED_KEYWORDS]:
        pattern = re.compile(r'\b(' + re.escape(keyword) + r')\b', re.IGNORECASE)
        result = _sub_outside_tags(pattern, r'<strong>\1</strong>', result)

    result = result.replace('<strong><strong>', '<strong>')
    result = result.replace('</strong></strong>', '</strong>')
    return result


def highlight_keywords(resume: Resume, job_description: JobDescription) -> Resume:
    """Return a copy of the resume with highlighted bullets and summary."""
    job_keywords = [
        k for k in job_description.extracted_keywords + job_description.required_skills
        if len(k) > 3
    ]

    experience = [
        replace(exp, bullets=[bold_keywords_in_text(b, job_keywords) for b in exp.bullets])
        for exp in resume.experience
    ]
    summary = bold_keywords_in_text(resume.summary, job_keywords) if resume.summary else resume.summary

    return replace(resume, experience=experience, summary=summary)
