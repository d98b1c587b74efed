"""
Content Context

Responsibilities:
- Reconciles AI-generated content and user profiles into CanonicalContent
- Normalizes whitespace, field names and scalar-or-list fields
- Enforces the all-or-nothing rule for record categories
- Merges user and generated projects

Owns: CanonicalContent and its construction
Never: Decides layout, spacing or which sections a template shows
"""

from dossier.contexts.content.content_data_structures import (
    CanonicalContent,
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    ProjectOrigin,
)
from dossier.contexts.content.merger import merge_projects
from dossier.contexts.content.normalizer import normalize_content

__all__ = [
    "normalize_content",
    "merge_projects",
    "CanonicalContent",
    "ContactInfo",
    "EducationEntry",
    "ExperienceEntry",
    "ProjectEntry",
    "ProjectOrigin",
]
