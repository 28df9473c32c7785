"""Query filtering over scanned projects."""

from __future__ import annotations

from collections.abc import Iterable

from quick_proj.domain.models import Project


def filter_projects(projects: Iterable[Project], query: str) -> list[Project]:
    """Keep projects whose name or path contains every whitespace-separated term.

    Matching is case-insensitive. A blank query keeps everything. Input
    order is preserved.
    """
    terms = query.lower().split()
    if not terms:
        return list(projects)

    matched = []
    for project in projects:
        name = project.name.lower()
        path = str(project.path).lower()
        if all(term in name or term in path for term in terms):
            matched.append(project)
    return matched
