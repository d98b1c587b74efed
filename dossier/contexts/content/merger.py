"""
Project merging.

User-authored projects always win: they are kept in their original order, and
AI projects are appended only when their name does not collide
(case-insensitively, whitespace-trimmed) with a name already present.
"""

from typing import Iterable, List

from dossier.contexts.content.content_data_structures import ProjectEntry
from dossier.contexts.content.logger import _log_debug
from dossier.utils.text_processing import casefold_key


def merge_projects(
    user_projects: Iterable[ProjectEntry], ai_projects: Iterable[ProjectEntry]
) -> List[ProjectEntry]:
    """
    Combine user and AI projects in a single pass.

    - User projects: all included, stable order, first
    - AI projects: dropped when nameless or when the name was already seen
      (among user projects or earlier AI projects)

    Args:
        user_projects: Normalized user projects
        ai_projects: Normalized AI projects

    Returns:
        Merged list, user projects followed by unique AI projects

    Example:
        >>> merged = merge_projects([ProjectEntry(name="Tracker")],
        ...                         [ProjectEntry(name="tracker"), ProjectEntry(name="Other")])
        >>> [p.name for p in merged]
        ['Tracker', 'Other']
    """
    merged = list(user_projects)
    seen = {casefold_key(project.name) for project in merged if project.name}

    for project in ai_projects:
        key = casefold_key(project.name)
        if not key:
            _log_debug("Discarded generated project without a name")
            continue
        if key in seen:
            _log_debug(f"Dropped duplicate generated project '{project.name}'")
            continue
        seen.add(key)
        merged.append(project)

    return merged
