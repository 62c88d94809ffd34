from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .errors import GuardRejected
from .models import BranchState, BranchStatus

logger = logging.getLogger(__name__)


def _git(cwd: Path, *args: str, timeout: float) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        timeout=timeout,
    )
    return result.stdout.strip()


def read_branch_state(destination: Path, timeout: float = 10.0) -> BranchState:
    if not (destination / ".git").exists():
        logger.debug("No git metadata in %s", destination)
        return BranchState.untracked()

    try:
        branch = _git(destination, "rev-parse", "--abbrev-ref", "HEAD", timeout=timeout)
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("Branch query failed in %s: %s", destination, exc)
        return BranchState.query_failed()

    if not branch:
        return BranchState.query_failed()
    return BranchState.tracked(branch)


def check_branch(state: BranchState, stable_branch: str, force: bool = False) -> None:
    if state.status is not BranchStatus.TRACKED or state.branch is None:
        return
    if state.branch == stable_branch:
        return
    if force:
        logger.warning(
            "Installed plugin is on branch %s; overwriting because --force was given",
            state.branch,
        )
        return
    raise GuardRejected(state.branch, stable_branch)


def format_rejection(error: GuardRejected, ui_url: str) -> str:
    lines = [
        "",
        f"WARNING: Installed plugin is on beta branch: {error.branch}",
        "Syncing would overwrite beta code.",
        "",
        "Options:",
        f"  1. Use UI at {ui_url} to update beta",
        f"  2. Switch to {error.stable_branch} in UI first, then run sync",
        "  3. Force sync: sync-marketplace --force",
        "",
    ]
    return "\n".join(lines)
