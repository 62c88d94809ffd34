from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class SyncSpec:
    source: Path
    destination: Path
    excluded_names: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "source", Path(self.source))
        object.__setattr__(self, "destination", Path(self.destination))
        object.__setattr__(self, "excluded_names", frozenset(self.excluded_names))


@dataclass
class SyncStats:
    removed: int = 0
    copied: int = 0


class BranchStatus(str, Enum):
    TRACKED = "tracked"
    UNTRACKED = "untracked"
    QUERY_FAILED = "query_failed"


@dataclass(frozen=True)
class BranchState:
    """Version-control state of an installed destination.

    Only ``TRACKED`` carries a branch name. ``UNTRACKED`` and ``QUERY_FAILED``
    both mean there is nothing to guard; they differ only in what gets logged.
    """

    status: BranchStatus
    branch: str | None = None

    @classmethod
    def tracked(cls, branch: str) -> BranchState:
        return cls(BranchStatus.TRACKED, branch)

    @classmethod
    def untracked(cls) -> BranchState:
        return cls(BranchStatus.UNTRACKED)

    @classmethod
    def query_failed(cls) -> BranchState:
        return cls(BranchStatus.QUERY_FAILED)
