from __future__ import annotations

from pathlib import Path
from typing import Sequence


class MarketplaceSyncError(Exception):
    """Base class for failures that abort a sync run."""


class ConfigError(MarketplaceSyncError):
    pass


class GuardRejected(MarketplaceSyncError):
    def __init__(self, branch: str, stable_branch: str) -> None:
        super().__init__(f"Installed plugin is on branch {branch!r}, expected {stable_branch!r}")
        self.branch = branch
        self.stable_branch = stable_branch


class VersionReadError(MarketplaceSyncError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to read plugin version from {path}: {reason}")
        self.path = path


class MirrorError(MarketplaceSyncError):
    def __init__(self, source: Path, destination: Path, reason: str) -> None:
        super().__init__(f"Sync {source} -> {destination} failed: {reason}")
        self.source = source
        self.destination = destination


class DependencyInstallError(MarketplaceSyncError):
    def __init__(self, command: Sequence[str], returncode: int | None, reason: str = "") -> None:
        detail = reason or f"exit status {returncode}"
        super().__init__(f"{' '.join(command)} failed: {detail}")
        self.command = list(command)
        self.returncode = returncode
