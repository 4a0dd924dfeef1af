from __future__ import annotations

import os
import stat
import subprocess
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

IGNORED_DIRNAMES = frozenset(
    {
        ".git",
        "node_modules",
        "dist",
        "build",
        ".next",
        "out",
        "target",
        "vendor",
        ".venv",
        ".direnv",
    }
)


def run_git(args: list[str], cwd: Path, timeout_s: int = 300) -> tuple[int, str, str]:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout_s,
    )
    return proc.returncode, proc.stdout, proc.stderr


def is_git_repo(path: Path) -> bool:
    """
    True when `path/.git` is a directory, or a file holding a `gitdir:` pointer
    (worktrees, submodules). Symlinks are not followed; any I/O error means no.
    """
    dot_git = path / ".git"
    try:
        st = os.lstat(dot_git)
        if stat.S_ISDIR(st.st_mode):
            return True
        if stat.S_ISREG(st.st_mode):
            return "gitdir:" in dot_git.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False
    return False


def _is_real_dir(path: Path) -> bool:
    try:
        return stat.S_ISDIR(os.lstat(path).st_mode)
    except OSError:
        return False


def _scan_dir(path: Path, exclude_dirnames: frozenset[str]) -> tuple[bool, list[Path]]:
    if is_git_repo(path):
        return True, []
    try:
        names = sorted(os.listdir(path))
    except OSError:
        return False, []
    children = [path / name for name in names if name not in exclude_dirnames and _is_real_dir(path / name)]
    return False, children


def discover_git_roots(
    root: Path,
    max_depth: int,
    exclude_dirnames: frozenset[str] | set[str] = IGNORED_DIRNAMES,
    *,
    jobs: int = 8,
) -> list[Path]:
    if not _is_real_dir(root):
        return []

    excluded = frozenset(exclude_dirnames) | {".git"}
    roots: list[Path] = []
    frontier = [root]
    depth = 0
    with ThreadPoolExecutor(max_workers=max(1, jobs)) as ex:
        while frontier and depth <= max_depth:
            next_frontier: list[Path] = []
            for path, (is_repo, children) in zip(frontier, ex.map(lambda p: _scan_dir(p, excluded), frontier)):
                if is_repo:
                    roots.append(path)
                else:
                    next_frontier.extend(children)
            frontier = next_frontier
            depth += 1
    return roots


def get_global_identity() -> tuple[str, str]:
    email = ""
    name = ""
    try:
        code, out, _ = run_git(["config", "--global", "--get", "user.email"], cwd=Path.cwd(), timeout_s=30)
        if code == 0:
            email = out.strip()
        code, out, _ = run_git(["config", "--global", "--get", "user.name"], cwd=Path.cwd(), timeout_s=30)
        if code == 0:
            name = out.strip()
    except (OSError, subprocess.TimeoutExpired):
        return "", ""
    return email, name
