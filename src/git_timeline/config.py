from __future__ import annotations

import dataclasses
import json
import os
from pathlib import Path

from .git import IGNORED_DIRNAMES

SORT_CHOICES = ("asc", "desc")
FORMAT_CHOICES = ("plain", "table", "md")


def default_jobs() -> int:
    return max(1, min(8, (os.cpu_count() or 4)))


@dataclasses.dataclass(frozen=True)
class TimelineConfig:
    root: Path = Path(".")
    email: str = ""
    name: str = ""
    sort: str = "desc"
    max_depth: int = 6
    since: str | None = None
    until: str | None = None
    format: str = "plain"
    jobs: int = dataclasses.field(default_factory=default_jobs)
    timeout_s: int = 300
    exclude_dirnames: frozenset[str] = IGNORED_DIRNAMES


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    data = json.loads(config_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a JSON object")
    return data


def _positive_int(value: object, default: int) -> int:
    try:
        n = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


def _choice(value: object, choices: tuple[str, ...], default: str) -> str:
    s = str(value or "").strip().lower()
    return s if s in choices else default


def config_from_file(data: dict, base: TimelineConfig | None = None) -> TimelineConfig:
    """
    Overlay the recognised keys of a config.json dict on `base`. Unknown keys
    are ignored and invalid values keep the base value.
    """
    if base is None:
        base = TimelineConfig()
    changes: dict[str, object] = {}
    if str(data.get("root", "") or "").strip():
        changes["root"] = Path(str(data["root"])).expanduser()
    if str(data.get("email", "") or "").strip():
        changes["email"] = str(data["email"]).strip()
    if str(data.get("name", "") or "").strip():
        changes["name"] = str(data["name"]).strip()
    if "sort" in data:
        changes["sort"] = _choice(data.get("sort"), SORT_CHOICES, base.sort)
    if "format" in data:
        changes["format"] = _choice(data.get("format"), FORMAT_CHOICES, base.format)
    if "max_depth" in data:
        changes["max_depth"] = _positive_int(data.get("max_depth"), base.max_depth)
    if "jobs" in data:
        changes["jobs"] = _positive_int(data.get("jobs"), base.jobs)
    if "timeout_s" in data:
        changes["timeout_s"] = _positive_int(data.get("timeout_s"), base.timeout_s)
    if isinstance(data.get("exclude_dirnames"), list) and data.get("exclude_dirnames"):
        changes["exclude_dirnames"] = frozenset(str(d) for d in data["exclude_dirnames"] if str(d).strip())
    return dataclasses.replace(base, **changes)
