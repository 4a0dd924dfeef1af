from __future__ import annotations

import dataclasses
import datetime as dt
import re

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclasses.dataclass(frozen=True)
class Period:
    start: dt.date  # inclusive
    end: dt.date  # exclusive

    @property
    def start_iso(self) -> str:
        return self.start.isoformat()

    @property
    def until_bound(self) -> str:
        # git --until is inclusive; stop one second short of the exclusive end
        last = dt.datetime.combine(self.end, dt.time()) - dt.timedelta(seconds=1)
        return last.isoformat()


def last_month_period(today: dt.date | None = None) -> Period:
    if today is None:
        today = dt.date.today()
    end = dt.date(today.year, today.month, 1)
    if end.month == 1:
        start = dt.date(end.year - 1, 12, 1)
    else:
        start = dt.date(end.year, end.month - 1, 1)
    return Period(start=start, end=end)


def normalize_date_bound(value: str | None) -> str | None:
    """
    Pin bare YYYY-MM-DD bounds to local midnight. git fills a missing time of
    day with the current time, which makes date-only ranges drift between runs.
    Anything else is left for git's own date parser.
    """
    s = (value or "").strip()
    if not s:
        return None
    if _DATE_ONLY.match(s):
        try:
            dt.date.fromisoformat(s)
        except ValueError:
            return s
        return f"{s}T00:00:00"
    return s


def describe_range(since: str | None, until: str | None) -> str:
    if not since and not until:
        return ""
    return f" (range: {since or '-'} .. {until or '-'})"
