"""
Canonical Content Data Structures

Defines the single reconciled résumé shape consumed by every template variant.
Instances are built once per request by the normalizer and never persisted.

Alias properties (responsibilities, institution, relevant_coursework, skills)
expose the historically-used field names so older renderers keep working, but
each concept is stored under exactly one canonical attribute.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class ProjectOrigin(str, Enum):
    """Who authored a project entry."""

    USER = "user"
    GENERATED = "generated"


# Categories taken wholesale from one source (user profile wins when non-empty)
RECORD_CATEGORIES = ("certifications", "awards", "languages", "publications")


@dataclass
class ContactInfo:
    """
    Contact details shown in the document header.

    Attributes:
        email: Email address
        phone: Phone number
        location: City/region
        website: Personal site or portfolio URL
        links: Additional profile links (LinkedIn, GitHub, ...)
    """

    email: str = ""
    phone: str = ""
    location: str = ""
    website: str = ""
    links: List[str] = field(default_factory=list)

    @property
    def fields(self) -> List[str]:
        """Non-empty contact values in display order."""
        values = [self.email, self.phone, self.location, self.website, *self.links]
        return [value for value in values if value]


@dataclass
class ExperienceEntry:
    """
    Work experience entry.

    Attributes:
        title: Job title
        company: Employer name
        location: Job location
        start_date: Free-form start date
        end_date: Free-form end date (empty means ongoing)
        bullets: Accomplishment bullets, never empty strings
        website: Optional employer/product URL
    """

    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    bullets: List[str] = field(default_factory=list)
    website: str = ""

    @property
    def responsibilities(self) -> List[str]:
        return self.bullets

    @property
    def date_range(self) -> str:
        """Display range; an open-ended entry ends in 'Present'."""
        if not self.start_date and not self.end_date:
            return ""
        if not self.start_date:
            return self.end_date
        return f"{self.start_date} - {self.end_date or 'Present'}"


@dataclass
class EducationEntry:
    """Education entry (school, degree, field of study, year, coursework)."""

    school: str = ""
    degree: str = ""
    field: str = ""
    year: str = ""
    coursework: List[str] = dataclasses.field(default_factory=list)

    @property
    def institution(self) -> str:
        return self.school

    @property
    def relevant_coursework(self) -> List[str]:
        return self.coursework


@dataclass
class ProjectEntry:
    """
    Project entry. The name is the case-insensitive merge key.

    Attributes:
        name: Project name
        description: Description lines
        technologies: Technologies used
        origin: USER or GENERATED
        link: Optional project URL
    """

    name: str = ""
    description: List[str] = field(default_factory=list)
    technologies: List[str] = field(default_factory=list)
    origin: ProjectOrigin = ProjectOrigin.GENERATED
    link: str = ""

    @property
    def skills(self) -> List[str]:
        return self.technologies


@dataclass
class CanonicalContent:
    """
    Unified résumé payload.

    Loosely-typed record categories (certifications, awards, languages,
    publications) are lists of plain dicts with whitespace-normalized values.
    """

    summary: str = ""
    contact: ContactInfo = field(default_factory=ContactInfo)
    experiences: List[ExperienceEntry] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    education: List[EducationEntry] = field(default_factory=list)
    projects: List[ProjectEntry] = field(default_factory=list)
    certifications: List[Dict[str, Any]] = field(default_factory=list)
    awards: List[Dict[str, Any]] = field(default_factory=list)
    languages: List[Dict[str, Any]] = field(default_factory=list)
    publications: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def has_extras(self) -> bool:
        return any(getattr(self, category) for category in RECORD_CATEGORIES)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to the JSON-like input shape, with alias keys populated.

        Feeding the result back through normalize_content() reproduces this
        content (projects come back tagged by the origin they carry).
        """
        return {
            "summary": self.summary,
            "email": self.contact.email,
            "phone": self.contact.phone,
            "location": self.contact.location,
            "website": self.contact.website,
            "links": list(self.contact.links),
            "experiences": [
                {
                    "title": exp.title,
                    "company": exp.company,
                    "location": exp.location,
                    "startDate": exp.start_date,
                    "endDate": exp.end_date,
                    "bullets": list(exp.bullets),
                    "responsibilities": list(exp.bullets),
                    "website": exp.website,
                }
                for exp in self.experiences
            ],
            "skills": list(self.skills),
            "education": [
                {
                    "school": edu.school,
                    "institution": edu.school,
                    "degree": edu.degree,
                    "field": edu.field,
                    "year": edu.year,
                    "coursework": list(edu.coursework),
                    "relevantCoursework": list(edu.coursework),
                }
                for edu in self.education
            ],
            "projects": [
                {
                    "name": proj.name,
                    "description": list(proj.description),
                    "technologies": list(proj.technologies),
                    "skills": list(proj.technologies),
                    "origin": proj.origin.value,
                    "link": proj.link,
                }
                for proj in self.projects
            ],
            **{category: [dict(r) for r in getattr(self, category)] for category in RECORD_CATEGORIES},
        }
