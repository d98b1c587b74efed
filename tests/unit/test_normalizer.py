"""Unit tests for content normalization."""

import pytest

from dossier.contexts.content import (
    CanonicalContent,
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ProjectOrigin,
    normalize_content,
)
from dossier.contexts.content.normalizer import normalize_record, normalize_skills


def sample_ai_content():
    return {
        "professionalSummary": "  Backend   engineer\n focused on  data ",
        "experience": [
            {
                "jobTitle": " Senior  Engineer ",
                "companyName": "Planet Express",
                "location": "New New York",
                "startDate": "2021",
                "responsibilities": ["  Shipped  things ", "", "   ", "Led a team"],
            }
        ],
        "skills": ["Python", " python ", "SQL", "  Rust  "],
        "education": [
            {
                "institution": "Mars University",
                "degree": "BSc",
                "fieldOfStudy": "Physics",
                "graduationYear": 2015,
                "relevantCoursework": "Quantum Mechanics",
            }
        ],
        "projects": [{"name": "tracker", "skills": ["Go"]}, {"name": "Other"}],
        "certifications": [{"name": "AI cert"}],
        "email": "ai@example.com",
    }


def sample_user_profile():
    return {
        "fullName": "Philip Fry",
        "email": " fry@planetexpress.com ",
        "phone": "555-0100",
        "links": ["github.com/fry", ""],
        "experiences": [{"title": "Delivery Boy", "website": "planetexpress.com"}],
        "projects": [{"name": "Tracker", "technologies": ["Python"]}],
        "certifications": [{"name": "  Delivery   License ", "issuer": "DOOP"}],
    }


@pytest.mark.unit
def test_summary_whitespace_collapsed():
    """Runs of whitespace collapse to one space and ends are trimmed."""
    content = normalize_content({"summary": "  Hi   there  "}, {})
    assert content.summary == "Hi there"


@pytest.mark.unit
def test_field_aliases_reconciled():
    """Historical field names are read into a single canonical attribute."""
    content = normalize_content(sample_ai_content(), sample_user_profile())

    exp = content.experiences[0]
    assert exp.title == "Senior Engineer"
    assert exp.company == "Planet Express"
    assert exp.bullets == ["Shipped things", "Led a team"]
    assert exp.responsibilities == exp.bullets

    edu = content.education[0]
    assert edu.school == "Mars University"
    assert edu.institution == "Mars University"
    assert edu.field == "Physics"
    assert edu.year == "2015"
    assert edu.coursework == ["Quantum Mechanics"]
    assert edu.relevant_coursework == ["Quantum Mechanics"]


@pytest.mark.unit
def test_canonical_name_wins_over_alias():
    """When both names are present the canonical one is read first."""
    content = normalize_content(
        {"experiences": [{"title": "T", "bullets": ["canonical"], "responsibilities": ["alias"]}]},
        {},
    )
    assert content.experiences[0].bullets == ["canonical"]


@pytest.mark.unit
def test_empty_canonical_falls_back_to_alias():
    content = normalize_content(
        {"education": [{"school": "   ", "institution": "MIT", "coursework": []}]}, {}
    )
    assert content.education[0].school == "MIT"


@pytest.mark.unit
def test_scalar_fields_coerced_to_lists():
    content = normalize_content(
        {"experiences": {"title": "Engineer", "bullets": "Did one thing"}}, {}
    )
    assert len(content.experiences) == 1
    assert content.experiences[0].bullets == ["Did one thing"]


@pytest.mark.unit
def test_missing_end_date_renders_present():
    content = normalize_content(
        {"experiences": [{"title": "Engineer", "startDate": "2020"}]}, {}
    )
    assert content.experiences[0].date_range == "2020 - Present"


@pytest.mark.unit
def test_skills_deduplicated_case_insensitively():
    content = normalize_content(sample_ai_content(), {})
    assert content.skills == ["Python", "SQL", "Rust"]


@pytest.mark.unit
def test_skills_category_mapping_flattened():
    skills = normalize_skills({"Languages": ["Python", "Go"], "Tools": "Docker"})
    assert skills == ["Python", "Go", "Docker"]


@pytest.mark.unit
def test_skills_records_read_by_name():
    assert normalize_skills([{"name": " Kubernetes "}, "kubernetes", None]) == ["Kubernetes"]


@pytest.mark.unit
def test_core_sections_fall_back_to_user_profile():
    """AI content without experiences uses the user's experiences."""
    content = normalize_content({"summary": "x"}, sample_user_profile())
    assert [exp.title for exp in content.experiences] == ["Delivery Boy"]


@pytest.mark.unit
def test_website_carried_over_by_index():
    content = normalize_content(sample_ai_content(), sample_user_profile())
    assert content.experiences[0].website == "planetexpress.com"


@pytest.mark.unit
def test_user_certifications_taken_wholesale():
    """A non-empty user category replaces the AI category entirely."""
    content = normalize_content(sample_ai_content(), sample_user_profile())
    assert content.certifications == [{"name": "Delivery License", "issuer": "DOOP"}]


@pytest.mark.unit
def test_clean_user_certifications_equal_input_exactly():
    user_certs = [{"name": "CKA", "issuer": "CNCF", "year": 2023}]
    content = normalize_content(
        {"certifications": [{"name": "Other"}]}, {"certifications": user_certs}
    )
    assert content.certifications == user_certs


@pytest.mark.unit
def test_empty_user_category_uses_ai():
    content = normalize_content(sample_ai_content(), {"certifications": []})
    assert content.certifications == [{"name": "AI cert"}]


@pytest.mark.unit
def test_bare_string_record_promoted():
    assert normalize_record("  Spanish ", "languages") == {"language": "Spanish"}
    assert normalize_record(42, "awards") is None


@pytest.mark.unit
def test_projects_merged_user_first():
    content = normalize_content(sample_ai_content(), sample_user_profile())

    assert [(p.name, p.origin) for p in content.projects] == [
        ("Tracker", ProjectOrigin.USER),
        ("Other", ProjectOrigin.GENERATED),
    ]
    assert content.projects[0].technologies == ["Python"]


@pytest.mark.unit
def test_contact_from_user_with_ai_fallback():
    content = normalize_content(sample_ai_content(), sample_user_profile())
    assert content.contact == ContactInfo(
        email="fry@planetexpress.com",
        phone="555-0100",
        links=["github.com/fry"],
    )

    content = normalize_content(sample_ai_content(), {})
    assert content.contact.email == "ai@example.com"


@pytest.mark.unit
@pytest.mark.parametrize("ai_content", [None, "garbage", 42, ["a", "b"]])
def test_malformed_input_degrades_to_empty(ai_content):
    """Normalization never raises on unexpected shapes."""
    content = normalize_content(ai_content, None)
    assert content == CanonicalContent()


@pytest.mark.unit
def test_unusable_entries_dropped():
    content = normalize_content(
        {
            "experiences": [None, "text", {"location": "Nowhere"}, {"company": "Mom Corp"}],
            "education": [{"field": "Math"}, {"degree": "PhD"}],
        },
        {},
    )
    assert content.experiences == [ExperienceEntry(company="Mom Corp")]
    assert [edu.degree for edu in content.education] == ["PhD"]


@pytest.mark.unit
def test_normalization_is_idempotent():
    """Feeding canonical output back in reproduces the same content."""
    first = normalize_content(sample_ai_content(), sample_user_profile())
    second = normalize_content(first.to_dict(), {})
    assert second == first


@pytest.mark.unit
def test_to_dict_populates_aliases():
    data = normalize_content(sample_ai_content(), sample_user_profile()).to_dict()

    exp = data["experiences"][0]
    assert exp["bullets"] == exp["responsibilities"]
    edu = data["education"][0]
    assert edu["school"] == edu["institution"]
    assert edu["coursework"] == edu["relevantCoursework"]
    project = data["projects"][0]
    assert project["technologies"] == project["skills"]
    assert project["origin"] == "user"


@pytest.mark.unit
def test_education_entry_keeps_field_attribute():
    entry = EducationEntry(field="Physics", coursework=["QM"])

    assert entry.field == "Physics"
    assert entry.relevant_coursework == ["QM"]
    assert EducationEntry().coursework == []


@pytest.mark.unit
def test_nested_record_values_keep_structure():
    """Nested mappings and numbers inside user records come through untouched."""
    user_certs = [{"name": "AWS SA", "tags": [{"level": "pro"}], "years": [2020, 2023]}]
    content = normalize_content({}, {"certifications": user_certs})
    assert content.certifications == user_certs


@pytest.mark.unit
def test_nested_record_strings_collapsed():
    record = normalize_record(
        {"name": " AWS  SA ", "tags": [{"level": "  pro "}, "  ", "cloud"]}, "certifications"
    )
    assert record == {"name": "AWS SA", "tags": [{"level": "pro"}, "cloud"]}


@pytest.mark.unit
def test_website_carry_over_skips_dropped_entries():
    """Websites pair by raw position even when an AI entry is dropped."""
    content = normalize_content(
        {"experiences": [{"location": "Nowhere"}, {"title": "Captain"}]},
        {
            "experiences": [
                {"title": "Delivery Boy", "website": "planetexpress.com"},
                {"title": "Captain", "website": "nimbus.mil"},
            ]
        },
    )
    assert [(exp.title, exp.website) for exp in content.experiences] == [("Captain", "nimbus.mil")]
