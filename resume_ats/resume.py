"""
Structured resume records and the resume text flattener.
Resumes arrive as JSON dictionaries (camelCase or snake_case keys) from the
storage/UI layer and are read-only to the analysis engine.
"""

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Optional

from .text_utils import clean_text


class ResumeFormatError(ValueError):
    """Raised when a resume dictionary has a section of the wrong type."""


@dataclass
class PersonalInfo:
    """Contact block of a resume."""
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: Optional[str] = None


@dataclass
class ExperienceItem:
    """A single role."""
    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    bullets: List[str] = field(default_factory=list)
    id: str = ""


@dataclass
class EducationItem:
    """A degree entry."""
    degree: str = ""
    institution: str = ""
    graduation_date: str = ""
    location: Optional[str] = None
    gpa: Optional[str] = None
    id: str = ""


@dataclass
class ProjectItem:
    """A project entry."""
    name: str = ""
    description: str = ""
    bullets: List[str] = field(default_factory=list)
    link: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    id: str = ""


@dataclass
class SkillCategory:
    category: str = ""
    skills: List[str] = field(default_factory=list)


@dataclass
class Resume:
    """Complete structured resume."""
    personal: PersonalInfo = field(default_factory=PersonalInfo)
    summary: str = ""
    experience: List[ExperienceItem] = field(default_factory=list)
    education: List[EducationItem] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    certifications: List[str] = field(default_factory=list)
    projects: Optional[List[ProjectItem]] = None
    skill_categories: Optional[List[SkillCategory]] = None
    core_competencies: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Resume":
        """Build a resume from a JSON dictionary.

        Missing sections become empty lists and None entries are dropped, so
        the analysis code never sees a null bullet, skill or certification.
        """
        if not isinstance(data, dict):
            raise ResumeFormatError("Resume must be a JSON object")

        personal = _section(data, "personal", dict) or {}
        projects = _section(data, "projects", list)
        categories = _section(data, "skill_categories", list, "skillCategories")
        competencies = _section(data, "core_competencies", list, "coreCompetencies")

        return cls(
            personal=PersonalInfo(
                name=_text(personal, "name"),
                email=_text(personal, "email"),
                phone=_text(personal, "phone"),
                location=_text(personal, "location"),
                linkedin=_optional_text(personal, "linkedin") or _optional_text(personal, "link"),
            ),
            summary=_text(data, "summary"),
            experience=[
                ExperienceItem(
                    title=_text(item, "title"),
                    company=_text(item, "company"),
                    location=_text(item, "location"),
                    start_date=_text(item, "start_date", "startDate"),
                    end_date=_text(item, "end_date", "endDate"),
                    current=item.get("current") is True,
                    bullets=_strings(item, "bullets"),
                    id=_text(item, "id"),
                )
                for item in _entries(data, "experience")
            ],
            education=[
                EducationItem(
                    degree=_text(item, "degree"),
                    institution=_text(item, "institution"),
                    graduation_date=_text(item, "graduation_date", "graduationDate"),
                    location=_optional_text(item, "location"),
                    gpa=_optional_text(item, "gpa"),
                    id=_text(item, "id"),
                )
                for item in _entries(data, "education")
            ],
            skills=_strings(data, "skills"),
            certifications=_strings(data, "certifications"),
            projects=None if projects is None else [
                ProjectItem(
                    name=_text(item, "name"),
                    description=_text(item, "description"),
                    bullets=_strings(item, "bullets"),
                    link=_optional_text(item, "link"),
                    start_date=_optional_text(item, "start_date", "startDate"),
                    end_date=_optional_text(item, "end_date", "endDate"),
                    id=_text(item, "id"),
                )
                for item in _entries(data, "projects")
            ],
            skill_categories=None if categories is None else [
                SkillCategory(category=_text(item, "category"), skills=_strings(item, "skills"))
                for item in _entries(data, "skill_categories", "skillCategories")
            ],
            core_competencies=None if competencies is None else _strings(
                data, "core_competencies", "coreCompetencies"
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def all_bullets(self) -> List[str]:
        """Experience bullets in resume order."""
        return [bullet for exp in self.experience for bullet in exp.bullets]


def _lookup(data: Dict[str, Any], key: str, alias: Optional[str] = None) -> Any:
    if key in data:
        return data[key]
    if alias and alias in data:
        return data[alias]
    return None


def _section(data: Dict[str, Any], key: str, kind: type, alias: Optional[str] = None) -> Any:
    value = _lookup(data, key, alias)
    if value is None:
        return None
    if not isinstance(value, kind):
        raise ResumeFormatError(f"Resume field '{key}' must be a {kind.__name__}")
    return value


def _entries(data: Dict[str, Any], key: str, alias: Optional[str] = None) -> List[Dict[str, Any]]:
    value = _section(data, key, list, alias) or []
    entries = []
    for item in value:
        if item is None:
            continue
        if not isinstance(item, dict):
            raise ResumeFormatError(f"Entries of '{key}' must be objects")
        entries.append(item)
    return entries


def _text(data: Dict[str, Any], key: str, alias: Optional[str] = None) -> str:
    value = _lookup(data, key, alias)
    return "" if value is None else str(value)


def _optional_text(data: Dict[str, Any], key: str, alias: Optional[str] = None) -> Optional[str]:
    value = _lookup(data, key, alias)
    return None if value in (None, "") else str(value)


def _strings(data: Dict[str, Any], key: str, alias: Optional[str] = None) -> List[str]:
    value = _section(data, key, list, alias) or []
    return [str(item) for item in value if item is not None]


def flatten_resume(resume: Resume) -> str:
    """Serialize a resume into one space-joined string for keyword search."""
    parts: List[str] = [resume.personal.name, resume.summary]

    for exp in resume.experience:
        parts.append(exp.title)
        parts.append(exp.company)
        parts.extend(exp.bullets)

    for edu in resume.education:
        parts.append(edu.degree)
        parts.append(edu.institution)

    for project in resume.projects or []:
        parts.append(project.name)
        parts.append(project.description)
        parts.extend(project.bullets)

    parts.extend(resume.skills)

    for category in resume.skill_categories or []:
        parts.append(category.category)
        parts.extend(category.skills)

    parts.extend(resume.core_competencies or [])
    parts.extend(resume.certifications)

    return ' '.join(parts)


def clean_resume(resume: Resume) -> Resume:
    """Copy of the resume with dashes replaced and acronym casing fixed in its text fields."""
    return replace(
        resume,
        summary=clean_text(resume.summary),
        experience=[
            replace(
                exp,
                title=clean_text(exp.title),
                company=clean_text(exp.company),
                bullets=[clean_text(b) for b in exp.bullets],
            )
            for exp in resume.experience
        ],
        education=[
            replace(edu, degree=clean_text(edu.degree), institution=clean_text(edu.institution))
            for edu in resume.education
        ],
        projects=None if resume.projects is None else [
            replace(
                project,
                name=clean_text(project.name),
                description=clean_text(project.description),
                bullets=[clean_text(b) for b in project.bullets],
            )
            for project in resume.projects
        ],
        skills=[clean_text(s) for s in resume.skills],
        skill_categories=None if resume.skill_categories is None else [
            replace(
                category,
                category=clean_text(category.category),
                skills=[clean_text(s) for s in category.skills],
            )
            for category in resume.skill_categories
        ],
    )
