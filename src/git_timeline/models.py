from __future__ import annotations

import dataclasses

SHORT_HASH_LEN = 7


@dataclasses.dataclass(frozen=True)
class Commit:
    repo: str  # absolute repo path
    hash: str
    date: str  # ISO 8601 with offset, e.g. 2025-09-10T09:00:00+07:00
    subject: str = ""
    body: str = ""

    @property
    def short_hash(self) -> str:
        return self.hash[:SHORT_HASH_LEN]


@dataclasses.dataclass
class RepoHistory:
    repo: str
    commits: list[Commit]
    errors: list[str]
