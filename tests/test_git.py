from __future__ import annotations

import os
from pathlib import Path

import pytest

from git_timeline import git as git_mod
from git_timeline.git import discover_git_roots, is_git_repo


def _make_repo(path: Path) -> Path:
    (path / ".git").mkdir(parents=True)
    return path


def test_is_git_repo_dir_and_gitdir_file(tmp_path: Path) -> None:
    plain = tmp_path / "plain"
    plain.mkdir()
    assert is_git_repo(plain) is False

    assert is_git_repo(_make_repo(tmp_path / "repo")) is True

    worktree = tmp_path / "worktree"
    worktree.mkdir()
    (worktree / ".git").write_text("gitdir: ../worktrees/foo\n", encoding="utf-8")
    assert is_git_repo(worktree) is True

    bogus = tmp_path / "bogus"
    bogus.mkdir()
    (bogus / ".git").write_text("not a pointer\n", encoding="utf-8")
    assert is_git_repo(bogus) is False


def test_discover_stops_at_repo_boundary(tmp_path: Path) -> None:
    outer = _make_repo(tmp_path / "work" / "outer")
    _make_repo(outer / "packages" / "inner")
    other = _make_repo(tmp_path / "other")

    roots = discover_git_roots(tmp_path, max_depth=6)

    assert sorted(roots) == sorted([outer, other])
    for a in roots:
        for b in roots:
            if a != b:
                assert b not in a.parents


def test_discover_root_is_repo(tmp_path: Path) -> None:
    _make_repo(tmp_path)
    _make_repo(tmp_path / "nested")
    assert discover_git_roots(tmp_path, max_depth=6) == [tmp_path]


def test_discover_max_depth_zero(tmp_path: Path) -> None:
    _make_repo(tmp_path / "child")
    assert discover_git_roots(tmp_path, max_depth=0) == []

    _make_repo(tmp_path / "self")
    assert discover_git_roots(tmp_path / "self", max_depth=0) == [tmp_path / "self"]


def test_discover_depth_limit(tmp_path: Path) -> None:
    repo = _make_repo(tmp_path / "a" / "b")
    assert discover_git_roots(tmp_path, max_depth=1) == []
    assert discover_git_roots(tmp_path, max_depth=2) == [repo]


def test_discover_skips_ignored_dirs(tmp_path: Path) -> None:
    _make_repo(tmp_path / "node_modules" / "dep")
    _make_repo(tmp_path / "vendor" / "lib")
    _make_repo(tmp_path / ".venv" / "src" / "pkg")
    kept = _make_repo(tmp_path / "src" / "app")
    assert discover_git_roots(tmp_path, max_depth=6) == [kept]


def test_discover_custom_exclude_dirnames(tmp_path: Path) -> None:
    _make_repo(tmp_path / "archive" / "old")
    kept = _make_repo(tmp_path / "node_modules" / "dep")
    assert discover_git_roots(tmp_path, max_depth=6, exclude_dirnames={"archive"}) == [kept]


def test_discover_missing_or_file_root(tmp_path: Path) -> None:
    assert discover_git_roots(tmp_path / "missing", max_depth=6) == []
    f = tmp_path / "file.txt"
    f.write_text("x", encoding="utf-8")
    assert discover_git_roots(f, max_depth=6) == []


def test_discover_does_not_follow_symlinks(tmp_path: Path) -> None:
    real = _make_repo(tmp_path / "real")
    (tmp_path / "scan").mkdir()
    os.symlink(real, tmp_path / "scan" / "link", target_is_directory=True)
    assert discover_git_roots(tmp_path / "scan", max_depth=6) == []


def test_discover_order_is_deterministic(tmp_path: Path) -> None:
    for name in ["c", "a", "b"]:
        _make_repo(tmp_path / name)
    _make_repo(tmp_path / "group" / "z")
    roots = discover_git_roots(tmp_path, max_depth=6, jobs=3)
    assert [p.relative_to(tmp_path).as_posix() for p in roots] == ["a", "b", "c", "group/z"]


def test_discover_skips_unlistable_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    kept = _make_repo(tmp_path / "open" / "repo")
    _make_repo(tmp_path / "locked" / "repo")
    sibling = _make_repo(tmp_path / "sibling")
    real_listdir = os.listdir

    def listdir(path):  # type: ignore[no-untyped-def]
        if Path(path).name == "locked":
            raise PermissionError(13, "Permission denied", str(path))
        return real_listdir(path)

    monkeypatch.setattr(git_mod.os, "listdir", listdir)

    assert discover_git_roots(tmp_path, max_depth=6) == [sibling, kept]


def test_unreadable_gitdir_file_is_not_a_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    wt = tmp_path / "worktree"
    wt.mkdir()
    (wt / ".git").write_text("gitdir: ../worktrees/foo\n", encoding="utf-8")
    other = _make_repo(tmp_path / "other")

    def read_text(self: Path, *args: object, **kwargs: object) -> str:
        raise OSError(5, "Input/output error", str(self))

    monkeypatch.setattr(Path, "read_text", read_text)

    assert is_git_repo(wt) is False
    assert discover_git_roots(tmp_path, max_depth=6) == [other]
