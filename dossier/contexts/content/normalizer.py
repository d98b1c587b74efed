"""
Content Normalization and Canonicalization

Reconciles the two content shapes that reach the pipeline (AI-generated
content and the user profile) into one CanonicalContent.

Operations, applied once at the boundary:
  1. Collapse whitespace in every leaf string and drop empty entries
  2. Reconcile historically different field names into one canonical name
  3. Coerce scalar-or-sequence fields into sequences
  4. Take record categories (certifications, awards, languages, publications)
     wholesale from the user profile when it has any entries, else from AI
  5. Merge user and AI projects (see merger.py)

The normalizer is total: unexpected shapes degrade to empty values and are
logged at DEBUG level, never raised.
"""

from typing import Any, Dict, List, Mapping, Optional

from dossier.contexts.content.content_data_structures import (
    RECORD_CATEGORIES,
    CanonicalContent,
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    ProjectOrigin,
)
from dossier.contexts.content.logger import _log_debug, log_normalization_summary
from dossier.contexts.content.merger import merge_projects
from dossier.utils.text_processing import (
    casefold_key,
    clean_string_list,
    coerce_list,
    collapse_whitespace,
    first_present,
)

# Canonical name -> accepted field names, in priority order
SECTION_ALIASES = {
    "summary": ("summary", "professionalSummary", "objective"),
    "experiences": ("experiences", "experience"),
    "skills": ("skills",),
    "education": ("education",),
    "projects": ("projects",),
}

EXPERIENCE_ALIASES = {
    "title": ("title", "jobTitle"),
    "company": ("company", "companyName"),
    "location": ("location",),
    "start_date": ("startDate", "start_date"),
    "end_date": ("endDate", "end_date"),
    "bullets": ("bullets", "responsibilities"),
    "website": ("website",),
}

EDUCATION_ALIASES = {
    "school": ("school", "institution"),
    "degree": ("degree",),
    "field": ("field", "fieldOfStudy"),
    "year": ("year", "graduationYear"),
    "coursework": ("coursework", "relevantCoursework"),
}

PROJECT_ALIASES = {
    "name": ("name",),
    "description": ("description",),
    "technologies": ("technologies", "skills"),
    "link": ("link", "url"),
}

CONTACT_ALIASES = {
    "email": ("email",),
    "phone": ("phone",),
    "location": ("location",),
    "website": ("website",),
    "links": ("links",),
}

# Key used when a record arrives as a bare string instead of a mapping
RECORD_PRIMARY_KEY = {
    "certifications": "name",
    "awards": "name",
    "languages": "language",
    "publications": "title",
}


def _as_mapping(value: Any, context: str) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    if value is not None:
        _log_debug(f"{context}: expected a mapping, got {type(value).__name__}; using empty")
    return {}


def _field(record: Mapping[str, Any], aliases: Dict[str, tuple], name: str) -> Any:
    return first_present(record, aliases[name])


def _text(record: Mapping[str, Any], aliases: Dict[str, tuple], name: str) -> str:
    return collapse_whitespace(_field(record, aliases, name))


def _strings(record: Mapping[str, Any], aliases: Dict[str, tuple], name: str) -> List[str]:
    return clean_string_list(_field(record, aliases, name))


def _entries(raw: Mapping[str, Any], section: str) -> List[Any]:
    value = first_present(raw, SECTION_ALIASES[section])
    if value is not None and not isinstance(value, (list, tuple)):
        _log_debug(f"'{section}' arrived as {type(value).__name__}; coerced to a list")
    return coerce_list(value)


# ============================================================================
# Entity normalizers
# ============================================================================


def normalize_experience(raw: Any) -> Optional[ExperienceEntry]:
    """Normalize one experience record, or None if it carries nothing."""
    record = _as_mapping(raw, "experience")
    entry = ExperienceEntry(
        title=_text(record, EXPERIENCE_ALIASES, "title"),
        company=_text(record, EXPERIENCE_ALIASES, "company"),
        location=_text(record, EXPERIENCE_ALIASES, "location"),
        start_date=_text(record, EXPERIENCE_ALIASES, "start_date"),
        end_date=_text(record, EXPERIENCE_ALIASES, "end_date"),
        bullets=_strings(record, EXPERIENCE_ALIASES, "bullets"),
        website=_text(record, EXPERIENCE_ALIASES, "website"),
    )
    if not (entry.title or entry.company or entry.bullets):
        return None
    return entry


def normalize_education(raw: Any) -> Optional[EducationEntry]:
    """Normalize one education record, or None if it has neither school nor degree."""
    record = _as_mapping(raw, "education")
    entry = EducationEntry(
        school=_text(record, EDUCATION_ALIASES, "school"),
        degree=_text(record, EDUCATION_ALIASES, "degree"),
        field=_text(record, EDUCATION_ALIASES, "field"),
        year=_text(record, EDUCATION_ALIASES, "year"),
        coursework=_strings(record, EDUCATION_ALIASES, "coursework"),
    )
    if not (entry.school or entry.degree):
        return None
    return entry


def normalize_project(raw: Any, origin: ProjectOrigin) -> ProjectEntry:
    """Normalize one project record. Nameless projects are kept; the merger decides."""
    record = _as_mapping(raw, "project")
    return ProjectEntry(
        name=_text(record, PROJECT_ALIASES, "name"),
        description=_strings(record, PROJECT_ALIASES, "description"),
        technologies=_strings(record, PROJECT_ALIASES, "technologies"),
        origin=origin,
        link=_text(record, PROJECT_ALIASES, "link"),
    )


def normalize_skills(raw: Any) -> List[str]:
    """
    Normalize a skills field into a flat, de-duplicated list.

    Accepts a list of strings, a list of {"name": ...} records, or a mapping of
    category -> skills. Duplicates are detected after whitespace normalization
    and case folding; the first spelling wins.
    """
    if isinstance(raw, Mapping):
        _log_debug("skills arrived as a category mapping; flattened")
        flattened: List[Any] = []
        for values in raw.values():
            flattened.extend(coerce_list(values))
        raw = flattened

    skills: List[str] = []
    seen = set()
    for item in coerce_list(raw):
        if isinstance(item, Mapping):
            item = first_present(item, ("name", "skill"))
        skill = collapse_whitespace(item)
        key = skill.casefold()
        if not skill or key in seen:
            continue
        seen.add(key)
        skills.append(skill)
    return skills


def _normalize_record_value(value: Any) -> Any:
    # Strings inside lists that collapse to nothing are dropped; everything
    # else keeps its shape and type
    if isinstance(value, str):
        return collapse_whitespace(value)
    if isinstance(value, Mapping):
        return {key: _normalize_record_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        items = (_normalize_record_value(item) for item in value)
        return [item for item in items if item != ""]
    return value


def normalize_record(raw: Any, category: str) -> Optional[Dict[str, Any]]:
    """
    Normalize a loosely-typed record (certification, award, language, publication).

    Strings are whitespace-collapsed at every depth; nested mappings and lists
    keep their structure and non-string scalars pass through unchanged. A bare
    string becomes a one-key record.
    """
    if isinstance(raw, str):
        text = collapse_whitespace(raw)
        return {RECORD_PRIMARY_KEY[category]: text} if text else None
    if not isinstance(raw, Mapping):
        _log_debug(f"{category}: dropped {type(raw).__name__} entry")
        return None

    record: Dict[str, Any] = _normalize_record_value(raw)
    if not any(value for value in record.values()):
        return None
    return record


def normalize_records(raw: Any, category: str) -> List[Dict[str, Any]]:
    records = (normalize_record(item, category) for item in coerce_list(raw))
    return [record for record in records if record is not None]


def normalize_contact(user_profile: Mapping[str, Any], ai_content: Mapping[str, Any]) -> ContactInfo:
    """Contact fields from the user profile, falling back to the AI content."""

    def pick(name: str) -> Any:
        value = _field(user_profile, CONTACT_ALIASES, name)
        return value if value is not None else _field(ai_content, CONTACT_ALIASES, name)

    return ContactInfo(
        email=collapse_whitespace(pick("email")),
        phone=collapse_whitespace(pick("phone")),
        location=collapse_whitespace(pick("location")),
        website=collapse_whitespace(pick("website")),
        links=clean_string_list(pick("links")),
    )


# ============================================================================
# Orchestration
# ============================================================================


def _section_source(ai: Mapping[str, Any], user: Mapping[str, Any], section: str) -> List[Any]:
    """AI entries for a core section, or the user's when the AI supplied none."""
    entries = _entries(ai, section)
    if entries:
        return entries
    return _entries(user, section)


def _carry_over_websites(
    experiences: List[Optional[ExperienceEntry]], user_experiences: List[Optional[ExperienceEntry]]
) -> None:
    """
    Give each AI experience the website of the user experience at the same raw
    index. Both lists are unfiltered, so dropped entries keep their slots.
    """
    for experience, user_experience in zip(experiences, user_experiences):
        if experience is None or user_experience is None:
            continue
        if not experience.website:
            experience.website = user_experience.website


def _is_user_tagged(raw: Any) -> bool:
    return isinstance(raw, Mapping) and casefold_key(raw.get("origin")) == ProjectOrigin.USER.value


def normalize_content(ai_content: Any, user_profile: Any) -> CanonicalContent:
    """
    Build CanonicalContent from raw AI output and a raw user profile.

    Core sections (summary, experiences, skills, education) come from the AI
    content, falling back to the user profile when the AI supplied nothing.
    Record categories follow the all-or-nothing rule. Projects are merged with
    user entries first.

    Args:
        ai_content: JSON-like mapping produced by the content generator
        user_profile: JSON-like mapping supplied by the user

    Returns:
        CanonicalContent (never raises on malformed input)

    Example:
        >>> normalize_content({"summary": "  Hi   there  "}, {}).summary
        'Hi there'
    """
    ai = _as_mapping(ai_content, "aiContent")
    user = _as_mapping(user_profile, "userProfile")

    summary = collapse_whitespace(
        first_present(ai, SECTION_ALIASES["summary"])
        or first_present(user, SECTION_ALIASES["summary"])
    )

    raw_experiences = [normalize_experience(raw) for raw in _section_source(ai, user, "experiences")]
    user_experiences = [normalize_experience(raw) for raw in _entries(user, "experiences")]
    _carry_over_websites(raw_experiences, user_experiences)
    experiences = [entry for entry in raw_experiences if entry is not None]

    skills = normalize_skills(first_present(ai, SECTION_ALIASES["skills"]))
    if not skills:
        skills = normalize_skills(first_present(user, SECTION_ALIASES["skills"]))

    education = [
        entry
        for entry in (normalize_education(raw) for raw in _section_source(ai, user, "education"))
        if entry is not None
    ]

    # Canonical payloads fed back in carry origin tags on their projects
    ai_raw_projects = _entries(ai, "projects")
    user_projects = [normalize_project(raw, ProjectOrigin.USER) for raw in _entries(user, "projects")]
    user_projects += [
        normalize_project(raw, ProjectOrigin.USER) for raw in ai_raw_projects if _is_user_tagged(raw)
    ]
    ai_projects = [
        normalize_project(raw, ProjectOrigin.GENERATED)
        for raw in ai_raw_projects
        if not _is_user_tagged(raw)
    ]
    projects = merge_projects(user_projects, ai_projects)

    records = {}
    for category in RECORD_CATEGORIES:
        user_entries = coerce_list(user.get(category))
        if user_entries:
            records[category] = normalize_records(user_entries, category)
            _log_debug(f"{category}: taken from user profile ({len(user_entries)} entries)")
        else:
            records[category] = normalize_records(ai.get(category), category)

    content = CanonicalContent(
        summary=summary,
        contact=normalize_contact(user, ai),
        experiences=experiences,
        skills=skills,
        education=education,
        projects=projects,
        **records,
    )
    log_normalization_summary(content)
    return content
