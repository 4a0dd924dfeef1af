from __future__ import annotations

import os
import re
from pathlib import Path

from .models import Commit

NO_COMMITS_MESSAGE = "No commits found for the specified author."

TABLE_HEADERS = ("Date", "Repo", "Hash", "Title", "Description")
TABLE_MIN_WIDTHS = {"Date": 10, "Repo": 10, "Hash": 7, "Title": 5, "Description": 11}
MD_ALIGN = (":-", ":-", ":-:", ":-", ":-")

_WS = re.compile(r"\s+")


def relative_repo(repo: str, root: Path | str) -> str:
    try:
        rel = os.path.relpath(repo, str(root))
    except ValueError:
        return repo
    if rel == ".":
        return repo
    return rel


def format_commit(c: Commit, root: Path | str) -> str:
    lines = [f"{c.date}  [{relative_repo(c.repo, root)}]  {c.short_hash}  {c.subject}"]
    body = c.body.strip()
    if body:
        for line in re.split(r"\r?\n", body):
            lines.append(f"    {line}" if line.strip() else "")
    return "\n".join(lines)


def render_plain(commits: list[Commit], root: Path | str) -> str:
    if not commits:
        return NO_COMMITS_MESSAGE
    return "\n\n".join(format_commit(c, root) for c in commits)


def table_rows(commits: list[Commit], root: Path | str) -> list[dict[str, str]]:
    return [
        {
            "Date": c.date,
            "Repo": relative_repo(c.repo, root),
            "Hash": c.short_hash,
            "Title": c.subject,
            "Description": _WS.sub(" ", c.body.strip()),
        }
        for c in commits
    ]


def column_widths(rows: list[dict[str, str]]) -> dict[str, int]:
    widths: dict[str, int] = {}
    for h in TABLE_HEADERS:
        widths[h] = max([TABLE_MIN_WIDTHS[h], len(h), *(len(r[h]) for r in rows)])
    return widths


def render_table(commits: list[Commit], root: Path | str) -> str:
    rows = table_rows(commits, root)
    if not rows:
        return NO_COMMITS_MESSAGE

    widths = column_widths(rows)

    def row_line(values: dict[str, str]) -> str:
        return "| " + " | ".join(values[h].ljust(widths[h]) for h in TABLE_HEADERS) + " |"

    total = sum(widths[h] + 3 for h in TABLE_HEADERS) + 1
    lines = [row_line({h: h for h in TABLE_HEADERS}), "-" * total]
    lines.extend(row_line(r) for r in rows)
    return "\n".join(lines)


def render_md(commits: list[Commit], root: Path | str) -> str:
    rows = table_rows(commits, root)
    if not rows:
        return NO_COMMITS_MESSAGE

    lines = [
        "| " + " | ".join(TABLE_HEADERS) + " |",
        "| " + " | ".join(MD_ALIGN) + " |",
    ]
    for r in rows:
        lines.append("| " + " | ".join(r[h] for h in TABLE_HEADERS) + " |")
    return "\n".join(lines)


def render(commits: list[Commit], root: Path | str, fmt: str = "plain") -> str:
    if fmt == "table":
        return render_table(commits, root)
    if fmt == "md":
        return render_md(commits, root)
    return render_plain(commits, root)
