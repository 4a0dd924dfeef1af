from __future__ import annotations

import subprocess
from pathlib import Path

from .git import run_git
from .models import Commit, RepoHistory
from .periods import normalize_date_bound

FIELD_SEP = "\x1f"
RECORD_SEP = "\x1e"

# hash, author date, subject, body; unit separator between fields, record separator after each commit
LOG_PRETTY = "%H%x1f%ad%x1f%s%x1f%b%x1e"


def build_log_args(author: str, since: str | None = None, until: str | None = None) -> list[str]:
    args = ["log"]
    if author:
        args.append(f"--author={author}")
    args.extend(["--date=iso-strict", f"--pretty=format:{LOG_PRETTY}"])
    since = normalize_date_bound(since)
    until = normalize_date_bound(until)
    if since:
        args.append(f"--since={since}")
    if until:
        args.append(f"--until={until}")
    return args


def parse_log_output(repo: str, output: str) -> list[Commit]:
    if not output:
        return []
    commits: list[Commit] = []
    for rec in output.split(RECORD_SEP):
        if not rec.strip():
            continue
        parts = rec.split(FIELD_SEP, 3)
        parts += [""] * (4 - len(parts))
        sha, date, subject, body = parts
        # format: separates entries with a newline, which lands in front of the next hash
        sha = sha.strip()
        date = date.strip()
        if not sha or not date:
            continue
        commits.append(Commit(repo=repo, hash=sha, date=date, subject=subject, body=body.rstrip()))
    return commits


def collect_commits(
    repo: Path,
    author: str,
    since: str | None = None,
    until: str | None = None,
    *,
    timeout_s: int = 300,
) -> RepoHistory:
    repo_str = str(repo)
    args = build_log_args(author, since, until)
    try:
        code, out, err = run_git(args, cwd=repo, timeout_s=timeout_s)
    except subprocess.TimeoutExpired:
        return RepoHistory(repo=repo_str, commits=[], errors=[f"git log timed out after {timeout_s}s"])
    except OSError as e:
        return RepoHistory(repo=repo_str, commits=[], errors=[f"failed to run git: {e}"])

    if code != 0:
        msg = err.strip() or f"git log exited with status {code}"
        return RepoHistory(repo=repo_str, commits=[], errors=[msg])
    return RepoHistory(repo=repo_str, commits=parse_log_output(repo_str, out), errors=[])
