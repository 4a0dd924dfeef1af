from __future__ import annotations

import argparse
import dataclasses
import datetime as dt
import sys
from pathlib import Path

from .completion import DEFAULT_CMD_NAME, SHELLS, generate_completion
from .config import FORMAT_CHOICES, SORT_CHOICES, TimelineConfig, config_from_file, load_config
from .git import get_global_identity
from .periods import last_month_period
from .run import run_timeline


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return n


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=DEFAULT_CMD_NAME,
        description="Show a single commit timeline for one author across every git repo under a folder.",
    )
    parser.add_argument("--root", type=Path, default=None, help="Root folder to search for git repositories (default: .).")
    parser.add_argument(
        "--email",
        "--author",
        dest="email",
        type=str,
        default=None,
        help="Author to match, passed to `git log --author` (default: git config user.email).",
    )
    parser.add_argument("--name", type=str, default=None, help="Author name (informational; not used for filtering).")
    parser.add_argument("--sort", choices=SORT_CHOICES, default=None, help="Sort by commit date (default: desc).")
    parser.add_argument("--max-depth", type=_positive_int, default=None, help="Maximum directory depth to traverse (default: 6).")
    parser.add_argument("--since", type=str, default=None, help="Only include commits on/after this date (e.g. 2025-09-01).")
    parser.add_argument("--until", type=str, default=None, help="Only include commits on/before this date (e.g. 2025-10-01).")
    parser.add_argument(
        "--last-month",
        action="store_true",
        help="Set --since/--until to the previous calendar month (first day inclusive, first day of this month exclusive).",
    )
    parser.add_argument(
        "--format",
        choices=FORMAT_CHOICES,
        default=None,
        help="Output format: plain, table (terminal table) or md (Markdown table). Default: plain.",
    )
    parser.add_argument("--jobs", type=_positive_int, default=None, help="Parallel directory scans and git jobs.")
    parser.add_argument("--timeout", type=_positive_int, default=None, help="Timeout for each git call in seconds (default: 300).")
    parser.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json.")
    parser.add_argument("--generate-completion", choices=SHELLS, default=None, help="Print a shell completion script and exit.")
    parser.add_argument("--cmd-name", type=str, default=DEFAULT_CMD_NAME, help="Command name used inside the completion script.")
    return parser


def build_config(args: argparse.Namespace, *, today: dt.date | None = None) -> TimelineConfig:
    cfg = config_from_file(load_config(args.config))

    changes: dict[str, object] = {}
    if args.root is not None:
        changes["root"] = args.root
    if args.email is not None:
        changes["email"] = args.email.strip()
    if args.name is not None:
        changes["name"] = args.name.strip()
    if args.sort is not None:
        changes["sort"] = args.sort
    if args.max_depth is not None:
        changes["max_depth"] = args.max_depth
    if args.format is not None:
        changes["format"] = args.format
    if args.jobs is not None:
        changes["jobs"] = args.jobs
    if args.timeout is not None:
        changes["timeout_s"] = args.timeout
    if args.since:
        changes["since"] = args.since
    if args.until:
        changes["until"] = args.until
    if args.last_month:
        period = last_month_period(today)
        changes["since"] = period.start_iso
        changes["until"] = period.until_bound
    cfg = dataclasses.replace(cfg, **changes)

    if not cfg.email:
        email, name = get_global_identity()
        cfg = dataclasses.replace(cfg, email=email, name=cfg.name or name)
    return dataclasses.replace(cfg, root=cfg.root.expanduser().resolve())


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.generate_completion:
        print(generate_completion(args.generate_completion, args.cmd_name))
        return 0

    return run_timeline(build_config(args))

