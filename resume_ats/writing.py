"""
Writing pattern analysis for resume bullets.
Flags uniform bullet lengths, formulaic verb-result bullets and stock phrases
that make generated resumes read as machine-written.
"""

import math
import re
from dataclasses import asdict, dataclass, field
from typing import Dict, List

from .resume import Resume
from .scorer import round_half_up
from .text_utils import strip_html_tags


RESULT_ENDING = re.compile(
    r'(?:resulting in|achieving|saving|reducing|increasing|improving|leading to|generating|'
    r'driving|cutting|growing|boosting)\s+.*\d',
    re.IGNORECASE,
)
PAST_TENSE_OPENER = re.compile(
    r'^[A-Z][a-z]+(?:ed|ted|ied|ned|led|zed|sed|ged|red|ked|ded|ped|med|fed|ved|wed|yed|xed)\s'
)

AI_TELLS = (
    'spearheaded', 'orchestrated', 'pioneered', 'leveraged',
    'synergy', 'paradigm', 'cutting-edge', 'best-in-class',
    'unparalleled', 'robust solutions', 'innovative solutions',
    'strategic initiatives', 'dynamic environment', 'thought leadership',
    'comprehensive understanding', 'harnessed', 'championed',
    'revolutionized', 'architected', 'catalyzed', 'holistic approach',
    'seamlessly', 'instrumental in', 'pivotal role', 'proactively',
)


@dataclass
class HumanWritingAnalysis:
    structure_variation: int = 50
    sentence_length_variation: int = 50
    formulaic_bullet_percentage: int = 0
    ai_tells_found: List[str] = field(default_factory=list)
    overall_human_score: int = 50

    def to_dict(self) -> Dict:
        return asdict(self)


def analyze_human_writing(resume: Resume) -> HumanWritingAnalysis:
    """Score how varied and natural the experience and project bullets read."""
    bullets = [bullet for exp in resume.experience for bullet in exp.bullets]
    for project in resume.projects or []:
        bullets.extend(project.bullets)
    bullets = [strip_html_tags(bullet) for bullet in bullets]

    if not bullets:
        return HumanWritingAnalysis()

    # Coefficient of variation of bullet length; people vary more than models
    lengths = [len(bullet) for bullet in bullets]
    mean = sum(lengths) / len(lengths)
    std_dev = math.sqrt(sum((length - mean) ** 2 for length in lengths) / len(lengths))
    cv = std_dev / mean * 100 if mean > 0 else 0
    sentence_length_variation = min(100, round_half_up(cv * 3))

    formulaic = sum(
        1 for bullet in bullets
        if PAST_TENSE_OPENER.search(bullet) and RESULT_ENDING.search(bullet)
    )
    formulaic_percentage = round_half_up(formulaic / len(bullets) * 100)

    text = ' '.join(bullets).lower()
    tells = [tell for tell in AI_TELLS if tell in text]

    starters = [bullet.split()[0].lower() if bullet.split() else "" for bullet in bullets]
    repeats = sum(1 for prev, cur in zip(starters, starters[1:]) if prev == cur)
    structure_variation = round_half_up(100 - repeats / max(len(starters) - 1, 1) * 100)

    tell_score = 100 if not tells else max(0, 100 - len(tells) * 20)
    overall = round_half_up(
        sentence_length_variation * 0.25
        + (100 - formulaic_percentage) * 0.35
        + structure_variation * 0.20
        + tell_score * 0.20
    )

    return HumanWritingAnalysis(
        structure_variation=structure_variation,
        sentence_length_variation=sentence_length_variation,
        formulaic_bullet_percentage=formulaic_percentage,
        ai_tells_found=tells,
        overall_human_score=overall,
    )
