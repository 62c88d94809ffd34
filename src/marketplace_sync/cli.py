from __future__ import annotations

import argparse
import logging
from typing import Sequence

from .config import CACHE_EXCLUDES, MARKETPLACE_EXCLUDES, SyncConfig, load_config
from .errors import GuardRejected, MarketplaceSyncError
from .guard import check_branch, format_rejection, read_branch_state
from .installer import run_dependency_install
from .manifest import read_plugin_version
from .mirror import sync_tree
from .models import BranchStatus, SyncSpec
from .notify import trigger_worker_restart

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Log level set to %s", level.lower())


def _guard(config: SyncConfig, force: bool) -> None:
    state = read_branch_state(config.marketplace_path, timeout=config.git_timeout_seconds)
    if state.status is BranchStatus.QUERY_FAILED:
        logger.info("Could not determine branch of %s; continuing", config.marketplace_path)
    elif state.status is BranchStatus.TRACKED:
        logger.info("Installed plugin is on branch %s", state.branch)
    check_branch(state, config.stable_branch, force=force)


def _run(config: SyncConfig) -> None:
    logger.info("Syncing to marketplace %s", config.marketplace_path)
    sync_tree(SyncSpec(config.source_root, config.marketplace_path, MARKETPLACE_EXCLUDES))

    run_dependency_install(config.marketplace_path, config.install_command)

    version = read_plugin_version(config.manifest_path)
    cache_path = config.cache_base_path / version
    logger.info("Syncing to cache folder (version %s)", version)
    sync_tree(SyncSpec(config.plugin_source, cache_path, CACHE_EXCLUDES))

    logger.info("Sync complete")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="sync-marketplace",
        description="Sync the plugin source tree into the local marketplace and cache",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Sync even if the installed plugin is not on the stable branch",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config()
    except MarketplaceSyncError as exc:
        logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
        logger.error("%s", exc)
        return 1
    _setup_logging(config.log_level)
    logger.info(
        "Starting sync source=%s force=%s stable_branch=%s",
        config.source_root,
        args.force,
        config.stable_branch,
    )

    try:
        _guard(config, args.force)
    except GuardRejected as exc:
        print(format_rejection(exc, config.ui_url))
        return 1

    try:
        _run(config)
    except MarketplaceSyncError as exc:
        logger.error("Sync failed: %s", exc)
        return 1

    trigger_worker_restart(config.restart_url, timeout=config.restart_timeout_seconds)
    return 0
