"""
ATS compatibility scorer.
Computes keyword match, format compatibility, section completeness and
content quality sub-scores, combines them into an overall score and builds a
ranked list of suggestions.
"""

import logging
import re
from dataclasses import asdict, dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List

from . import config
from .extractor import JobDescription
from .resume import Resume, flatten_resume
from .text_utils import capitalize_with_acronyms, has_dashes, strip_html_tags

logger = logging.getLogger(__name__)


STRONG_ACTION_VERBS = (
    'achieved', 'analyzed', 'architected', 'automated', 'built', 'collaborated',
    'configured', 'created', 'decreased', 'delivered', 'deployed', 'designed',
    'developed', 'drove', 'enabled', 'engineered', 'enhanced', 'established',
    'executed', 'expanded', 'grew', 'implemented', 'improved', 'increased',
    'integrated', 'launched', 'led', 'maintained', 'managed', 'mentored',
    'migrated', 'modernized', 'optimized', 'orchestrated', 'partnered',
    'pioneered', 'reduced', 'refactored', 'restructured', 'scaled',
    'simplified', 'solved', 'streamlined', 'strengthened', 'transformed',
    'upgraded',
)

WEAK_VERBS = (
    'assisted', 'helped', 'worked', 'was', 'had', 'got', 'did',
    'made', 'used', 'tried', 'participated', 'involved', 'responsible',
)

# Openers called out by the weak-verb suggestion
WEAK_OPENERS = ('assisted', 'helped', 'worked', 'was responsible', 'participated')

METRIC_PATTERNS = (
    re.compile(r'\d+%'),  # Percentages
    re.compile(r'\d+\+'),  # Plus numbers
    re.compile(r'\$[\d,]+'),  # Dollar amounts
    re.compile(r'\d+x', re.IGNORECASE),  # Multipliers
    re.compile(r'\d+\s*(million|billion|thousand|hundred|k|m|b)', re.IGNORECASE),  # Large numbers
    re.compile(r'\d+\s*(users?|customers?|clients?|team|people|members?)', re.IGNORECASE),  # People
    re.compile(r'\d+\s*(requests?|transactions?|queries?|calls?)', re.IGNORECASE),  # Volume
    re.compile(r'\d+\s*(hours?|days?|weeks?|months?)', re.IGNORECASE),  # Time savings
    re.compile(r'\d+\s*(projects?|features?|applications?|systems?)', re.IGNORECASE),  # Project counts
    re.compile(r'top\s*\d+', re.IGNORECASE),  # Rankings
    re.compile(r'\d+\s*per\s*(second|minute|hour|day)', re.IGNORECASE),  # Rates
)
SUGGESTION_METRIC_PATTERN = re.compile(r'\d+%|\$[\d,]+|\d+x|\d+\s*(million|thousand|users?|customers?)', re.IGNORECASE)

SPECIAL_CHARS = re.compile(r'''[^\w\s.,;:()\-'"/&@#$%+]''', re.ASCII)
PHONE_PATTERN = re.compile(r'[\d\-()\s]{10,}')
LEADERSHIP_MENTIONS = ('leadership', 'manage team', 'lead team')
LEADERSHIP_VERBS = ('led', 'managed', 'mentored')


@dataclass
class ATSScore:
    """ATS compatibility report."""
    overall: int = 0
    keyword_match: int = 0
    format_compatibility: int = 0
    section_completeness: int = 0
    content_quality: int = 0
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)


def round_half_up(value: float) -> int:
    """Round .5 away from zero; float noise below 1e-9 is ignored."""
    return int(Decimal(repr(round(value, 9))).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def clamp(value: float, low: int = 0, high: int = 100) -> float:
    return max(low, min(value, high))


def combine_scores(keyword_match: int, format_compatibility: int,
                   section_completeness: int, content_quality: int) -> int:
    """Weighted overall score from the four sub-scores."""
    weights = config.SCORE_WEIGHTS
    total = (
        keyword_match * weights["keyword_match"]
        + format_compatibility * weights["format_compatibility"]
        + section_completeness * weights["section_completeness"]
        + content_quality * weights["content_quality"]
    )
    return round_half_up(total)


def _first_word(bullet: str) -> str:
    words = strip_html_tags(bullet).lower().split()
    return words[0] if words else ""


def _has_metric(bullet: str) -> bool:
    return any(pattern.search(bullet) for pattern in METRIC_PATTERNS)


def _average_bullets(resume: Resume) -> float:
    total = sum(len(exp.bullets) for exp in resume.experience)
    return total / max(len(resume.experience), 1)


def _tier(ratio: float, tiers: Dict[str, tuple]) -> int:
    """Points for a ratio: bonus at or above the good tiers, penalty below the poor one."""
    for key in ("excellent", "good"):
        threshold, points = tiers[key]
        if ratio >= threshold:
            return points
    threshold, points = tiers["poor"]
    return points if ratio < threshold else 0


class ATSScorer:
    """Score a resume against a job description."""

    def __init__(self, resume: Resume, job_description: JobDescription):
        self.resume = resume
        self.job = job_description
        self.resume_text = flatten_resume(resume)
        self.resume_text_lower = self.resume_text.lower()
        self.required_skills = [s.lower() for s in job_description.required_skills]
        self.job_keywords = [k.lower() for k in job_description.extracted_keywords + job_description.required_skills]

    def score(self) -> ATSScore:
        """Compute the full report."""
        keyword_match = self.calculate_keyword_match()
        format_compatibility = self.calculate_format_compatibility()
        section_completeness = self.calculate_section_completeness()
        content_quality = self.calculate_content_quality()

        overall = combine_scores(keyword_match, format_compatibility, section_completeness, content_quality)
        logger.debug(
            "ATS scores: overall=%d keyword=%d format=%d sections=%d content=%d",
            overall, keyword_match, format_compatibility, section_completeness, content_quality,
        )

        return ATSScore(
            overall=overall,
            keyword_match=keyword_match,
            format_compatibility=format_compatibility,
            section_completeness=section_completeness,
            content_quality=content_quality,
            suggestions=self.generate_suggestions(
                keyword_match, format_compatibility, section_completeness, content_quality
            ),
        )

    def weighted_keywords(self) -> List[tuple]:
        """(keyword, weight) pairs: required skills first, each keyword counted once."""
        weighted = []
        seen = set()
        for keyword in self.required_skills:
            if keyword not in seen:
                seen.add(keyword)
                weighted.append((keyword, config.REQUIRED_SKILL_WEIGHT))
        for keyword in self.job.extracted_keywords:
            keyword = keyword.lower()
            if keyword not in seen:
                seen.add(keyword)
                weighted.append((keyword, config.KEYWORD_WEIGHT))
        return weighted

    def calculate_keyword_match(self) -> int:
        weighted = self.weighted_keywords()
        if not weighted:
            return 100

        keywords = [kw for kw, _ in weighted]
        total_score = 0.0
        max_score = 0

        for keyword, weight in weighted:
            max_score += weight
            if keyword in self.resume_text_lower:
                total_score += weight
            elif len(keyword) >= config.PARTIAL_MATCH_MIN_LENGTH:
                # e.g. "python" credited through "python 3" being present
                partial = any(
                    other != keyword
                    and (other in keyword or keyword in other)
                    and other in self.resume_text_lower
                    for other in keywords
                )
                if partial:
                    total_score += weight * config.PARTIAL_MATCH_CREDIT

        percentage = total_score / max_score * 100

        if self.resume.core_competencies:
            competencies_text = ' '.join(self.resume.core_competencies).lower()
            hits = sum(1 for kw in keywords if kw in competencies_text)
            if hits >= config.COMPETENCY_BONUS_MIN_MATCHES:
                percentage = min(percentage + config.COMPETENCY_BONUS, 100)

        return int(clamp(round_half_up(percentage)))

    def calculate_format_compatibility(self) -> int:
        penalties = config.FORMAT_PENALTIES
        resume = self.resume
        score = 100

        if has_dashes(self.resume_text):
            score -= penalties["dashes"]

        if not (resume.experience and resume.education and resume.skills):
            score -= penalties["missing_sections"]

        if resume.skill_categories:
            score += config.FORMAT_SKILL_CATEGORY_BONUS

        special_count = len(SPECIAL_CHARS.findall(self.resume_text))
        some, many = config.SPECIAL_CHAR_THRESHOLDS
        if special_count > many:
            score -= penalties["special_chars_many"]
        elif special_count > some:
            score -= penalties["special_chars_some"]

        if any(not exp.end_date and not exp.current for exp in resume.experience):
            score -= penalties["dates"]

        has_contact = '@' in resume.personal.email and PHONE_PATTERN.search(resume.personal.phone)
        if not has_contact:
            score -= penalties["contact"]

        return int(clamp(score))

    def calculate_section_completeness(self) -> int:
        resume = self.resume
        personal = resume.personal
        points = 100 / config.SECTION_COUNT
        score = 0.0

        if personal.name and personal.email and personal.phone:
            score += points
            if personal.linkedin:
                score += config.LINK_BONUS
        elif personal.name and (personal.email or personal.phone):
            score += points * 0.6

        summary_length = len(resume.summary)
        if summary_length >= 150:
            score += points
        elif summary_length >= 100:
            score += points * 0.8
        elif summary_length >= 50:
            score += points * 0.5

        roles = len(resume.experience)
        if roles >= 3:
            score += points
        elif roles == 2:
            score += points * 0.85
        elif roles == 1:
            score += points * 0.6

        if _average_bullets(resume) >= config.BULLET_DENSITY_TARGET:
            score += config.BULLET_DENSITY_BONUS

        if resume.education:
            score += points

        skills = len(resume.skills)
        if skills >= 10:
            score += points
        elif skills >= 5:
            score += points * 0.7
        elif skills >= 3:
            score += points * 0.5

        competencies = len(resume.core_competencies or [])
        if competencies >= 5:
            score += points
        elif competencies >= 3:
            score += points * 0.6

        return min(round_half_up(score), 100)

    def calculate_content_quality(self) -> int:
        resume = self.resume
        score = 100
        bonus = 0

        bullets = resume.all_bullets()
        total = len(bullets)
        strong = weak = with_metrics = with_keywords = 0

        for bullet in bullets:
            first_word = _first_word(bullet)
            bullet_lower = bullet.lower()

            if first_word and any(first_word.startswith(verb) for verb in STRONG_ACTION_VERBS):
                strong += 1
            if first_word and any(first_word.startswith(verb) for verb in WEAK_VERBS):
                weak += 1
            if _has_metric(bullet):
                with_metrics += 1
            if any(kw in bullet_lower for kw in self.job_keywords):
                with_keywords += 1

        if total:
            score += _tier(strong / total, config.STRONG_VERB_TIERS)
            score += _tier(with_metrics / total, config.METRICS_TIERS)
            score += _tier(with_keywords / total, config.KEYWORD_TIERS)

            weak_ratio = weak / total
            high_threshold, high_penalty = config.WEAK_VERB_TIERS["high"]
            some_threshold, some_penalty = config.WEAK_VERB_TIERS["some"]
            if weak_ratio > high_threshold:
                score += high_penalty
            elif weak_ratio > some_threshold:
                score += some_penalty

        lengths = [len(strip_html_tags(bullet)) for bullet in bullets]
        average_length = sum(lengths) / len(lengths) if lengths else 0
        low, high = config.BULLET_LENGTH_RANGE
        if low <= average_length <= high:
            bonus += 5
        elif average_length < config.SHORT_BULLET_LENGTH:
            score -= 8
        elif average_length > config.LONG_BULLET_LENGTH:
            score -= 5

        if resume.summary:
            summary_lower = resume.summary.lower()
            if sum(1 for kw in self.job_keywords if kw in summary_lower) >= 3:
                bonus += 5

        # Keywords near the top of the resume weigh more with ATS ranking
        above_the_fold = self._above_the_fold()
        top_keywords = self._top_keywords()[:10]
        found = sum(1 for kw in top_keywords if kw in above_the_fold)
        if found >= 5:
            bonus += 10
        elif found >= 3:
            bonus += 5

        return int(clamp(score + bonus))

    def _above_the_fold(self) -> str:
        first_role = self.resume.experience[0].bullets if self.resume.experience else []
        return ' '.join([self.resume.summary] + list(first_role)).lower()

    def _top_keywords(self) -> List[str]:
        seen = []
        for keyword in self.job.required_skills + self.job.extracted_keywords:
            keyword = keyword.lower()
            if keyword not in seen:
                seen.append(keyword)
        return seen

    def _missing_required(self, limit: int) -> List[str]:
        return [s for s in self.required_skills if s not in self.resume_text_lower][:limit]

    def generate_suggestions(self, keyword_match: int, format_compatibility: int,
                             section_completeness: int, content_quality: int) -> List[str]:
        """Rule-ordered remediation tips, most specific first."""
        resume = self.resume
        suggestions: List[str] = []

        if keyword_match < 85:
            missing = self._missing_required(5)
            if missing:
                suggestions.append(
                    "Add these missing keywords from the job description: "
                    + ', '.join(capitalize_with_acronyms(k) for k in missing)
                )

        if keyword_match < 70:
            suggestions.append(
                "Your keyword match is low. Consider reframing bullet points to include "
                "more job description terminology"
            )

        if format_compatibility < 95 and has_dashes(self.resume_text):
            suggestions.append(
                "Replace em dashes (—) and en dashes (–) with hyphens (-) for better ATS parsing"
            )

        if section_completeness < 85:
            if len(resume.summary) < 100:
                suggestions.append(
                    "Add a compelling professional summary (150+ characters) that highlights "
                    "your fit for this role"
                )
            if len(resume.core_competencies or []) < 5:
                suggestions.append("Add 5-8 core competencies that match the job requirements")
            if _average_bullets(resume) < config.BULLET_DENSITY_TARGET:
                suggestions.append("Add more bullet points to each role (aim for 4-6 per position)")

        if content_quality < 85:
            bullets = resume.all_bullets()
            if any(bullet.lower().startswith(WEAK_OPENERS) for bullet in bullets):
                suggestions.append(
                    "Replace weak verbs (assisted, helped, worked) with strong action verbs "
                    "(achieved, implemented, delivered)"
                )
            with_metrics = sum(1 for bullet in bullets if SUGGESTION_METRIC_PATTERN.search(bullet))
            if bullets and with_metrics / len(bullets) < 0.4:
                suggestions.append(
                    "Add quantifiable metrics to more bullet points (%, $, numbers) to "
                    "demonstrate impact"
                )

        job_text = self.job.text.lower()
        if any(phrase in job_text for phrase in LEADERSHIP_MENTIONS) and not any(
            verb in self.resume_text_lower for verb in LEADERSHIP_VERBS
        ):
            suggestions.append(
                "Highlight leadership experience: team size, mentoring, cross-functional collaboration"
            )

        missing_priority = self._missing_required(3)
        if missing_priority and len(suggestions) < 5:
            suggestions.append(
                "Consider incorporating these terms naturally: "
                + ', '.join(capitalize_with_acronyms(k) for k in missing_priority)
            )

        top_required = self.required_skills[:5]
        above_the_fold = self._above_the_fold()
        found_in_top = sum(1 for kw in top_required if kw in above_the_fold)
        if len(top_required) >= 3 and found_in_top < 3:
            suggestions.append(
                "Add 3-5 key skills from the job description into your summary and most recent "
                "role - ATS systems weight the top of your resume more heavily"
            )

        for exp in resume.experience:
            if len(exp.bullets) > config.MAX_BULLETS_PER_ROLE:
                suggestions.append(
                    f'"{exp.title}" has {len(exp.bullets)} bullets - consider trimming to 5-6 for '
                    "recent roles, 3-4 for older. Long sections can be truncated by ATS"
                )

        if len(resume.experience) >= 2 and len(resume.experience[0].bullets) < len(resume.experience[1].bullets):
            suggestions.append(
                "Your most recent role has fewer bullets than an older role - expand your latest "
                "position, recruiters and ATS focus on recent experience"
            )

        words = len(self.resume_text.split())
        if words > config.LONG_RESUME_WORDS:
            suggestions.append(
                f"Your resume is lengthy (~{round_half_up(words / 100) * 100} words). Most ATS systems "
                "parse 1-2 pages best. Consider trimming older roles to 3 bullets each"
            )
        elif words < config.SHORT_RESUME_WORDS:
            suggestions.append(
                f"Your resume is very short (~{words} words). Add more detail to experience "
                "bullets to improve keyword density"
            )

        return suggestions[:config.MAX_SUGGESTIONS]


def analyze_ats_compatibility(resume: Resume, job_description: JobDescription) -> ATSScore:
    """Convenience function to score a resume against a job description."""
    return ATSScorer(resume, job_description).score()
