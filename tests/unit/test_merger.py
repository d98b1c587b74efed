"""Unit tests for project merging."""

import pytest

from dossier.contexts.content import ProjectEntry, ProjectOrigin, merge_projects


def user(name, **kwargs):
    return ProjectEntry(name=name, origin=ProjectOrigin.USER, **kwargs)


def generated(name, **kwargs):
    return ProjectEntry(name=name, origin=ProjectOrigin.GENERATED, **kwargs)


@pytest.mark.unit
def test_user_project_wins_case_insensitive_collision():
    merged = merge_projects([user("Tracker")], [generated("tracker"), generated("Other")])

    assert [(p.name, p.origin) for p in merged] == [
        ("Tracker", ProjectOrigin.USER),
        ("Other", ProjectOrigin.GENERATED),
    ]


@pytest.mark.unit
def test_collision_ignores_surrounding_whitespace():
    merged = merge_projects([user("Mars  Rover")], [generated(" mars rover ")])
    assert [p.name for p in merged] == ["Mars  Rover"]


@pytest.mark.unit
def test_user_order_preserved_and_first():
    merged = merge_projects(
        [user("B"), user("A")],
        [generated("C"), generated("A")],
    )
    assert [p.name for p in merged] == ["B", "A", "C"]


@pytest.mark.unit
def test_nameless_generated_project_discarded():
    merged = merge_projects([], [generated(""), generated("Kept")])
    assert [p.name for p in merged] == ["Kept"]


@pytest.mark.unit
def test_generated_duplicates_first_occurrence_wins():
    first = generated("Bot", description=["first"])
    merged = merge_projects([], [first, generated("BOT", description=["second"])])
    assert merged == [first]


@pytest.mark.unit
def test_every_user_name_appears_once():
    user_projects = [user("Alpha"), user("Beta")]
    ai_projects = [generated("alpha"), generated("BETA"), generated("Gamma"), generated("beta")]

    merged = merge_projects(user_projects, ai_projects)
    keys = [p.name.casefold() for p in merged]

    assert keys.count("alpha") == 1
    assert keys.count("beta") == 1
    assert merged[:2] == user_projects


@pytest.mark.unit
def test_merge_is_deterministic():
    user_projects = [user("One")]
    ai_projects = [generated("Two"), generated("one"), generated("Three")]
    assert merge_projects(user_projects, ai_projects) == merge_projects(user_projects, ai_projects)
