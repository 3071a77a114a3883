"""
Resume ATS Analyzer

Deterministic job-posting keyword extraction, resume keyword matching and
ATS compatibility scoring for tailored resumes.
"""

from .extractor import extract_job_description, JobDescription, JobDescriptionExtractor
from .matcher import analyze_keywords, KeywordAnalysis
from .resume import clean_resume, flatten_resume, Resume, ResumeFormatError
from .scorer import analyze_ats_compatibility, ATSScore, ATSScorer
from .highlighter import highlight_keywords
from .writing import analyze_human_writing, HumanWritingAnalysis

__version__ = "1.0.0"
__all__ = [
    "extract_job_description",
    "analyze_keywords",
    "analyze_ats_compatibility",
    "flatten_resume",
    "clean_resume",
    "highlight_keywords",
    "analyze_human_writing",
    "JobDescription",
    "KeywordAnalysis",
    "ATSScore",
    "Resume",
    "ResumeFormatError",
    "HumanWritingAnalysis",
    "JobDescriptionExtractor",
    "ATSScorer",
]
