from __future__ import annotations

import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .aggregate import merge_timeline
from .config import TimelineConfig
from .git import discover_git_roots
from .history import collect_commits
from .identity import author_label
from .models import Commit, RepoHistory
from .periods import describe_range
from .render import render


def collect_histories(repos: list[Path], cfg: TimelineConfig) -> list[RepoHistory]:
    """Run git log in every repo on a bounded pool; results keep the order of `repos`."""
    if not repos:
        return []
    with ThreadPoolExecutor(max_workers=max(1, cfg.jobs)) as ex:
        futs = [
            ex.submit(collect_commits, repo, cfg.email, cfg.since, cfg.until, timeout_s=cfg.timeout_s)
            for repo in repos
        ]
        return [f.result() for f in futs]


def build_timeline(cfg: TimelineConfig) -> list[Commit]:
    root = cfg.root.resolve()
    print(f"Scanning for git repos under: {root}", file=sys.stderr)
    repos = discover_git_roots(root, cfg.max_depth, cfg.exclude_dirnames, jobs=cfg.jobs)
    print(
        f"Found {len(repos)} repos. Collecting commits for {author_label(cfg.email, cfg.name)}"
        f"{describe_range(cfg.since, cfg.until)}...",
        file=sys.stderr,
    )

    histories = collect_histories(repos, cfg)
    for h in histories:
        for e in h.errors:
            print(f"[git log error] {h.repo}: {e}", file=sys.stderr)

    return merge_timeline((h.commits for h in histories), cfg.sort)


def run_timeline(cfg: TimelineConfig) -> int:
    if not cfg.email:
        print("Warning: no author email configured or found in git config; showing commits by all authors.", file=sys.stderr)
    commits = build_timeline(cfg)
    print(render(commits, cfg.root.resolve(), cfg.format))
    return 0
