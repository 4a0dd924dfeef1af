from __future__ import annotations

from collections.abc import Iterable

from .models import Commit


def merge_timeline(per_repo: Iterable[list[Commit]], sort: str = "desc") -> list[Commit]:
    """
    Concatenate per-repository commit lists and order them by date.

    Dates are compared as ISO 8601 strings. The sort is stable, so equal dates
    keep repository order (and git's order within a repository); descending is
    the ascending result reversed. Nothing is deduplicated.
    """
    commits: list[Commit] = []
    for chunk in per_repo:
        commits.extend(chunk)
    commits.sort(key=lambda c: c.date)
    if sort == "desc":
        commits.reverse()
    return commits
