from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from .errors import MirrorError
from .models import SyncSpec, SyncStats

logger = logging.getLogger(__name__)


def _is_real_dir(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()


def _remove(path: Path) -> None:
    if _is_real_dir(path):
        shutil.rmtree(path)
    else:
        path.unlink()


def _scan(directory: Path) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as it:
        return sorted(it, key=lambda entry: entry.name)


def _prune(source: Path, destination: Path, excluded: frozenset[str], stats: SyncStats) -> None:
    if not destination.is_dir():
        return

    for entry in _scan(destination):
        if entry.name in excluded:
            continue
        dest_path = Path(entry.path)
        src_path = source / entry.name

        if not os.path.lexists(src_path):
            logger.debug("Removing %s", dest_path)
            _remove(dest_path)
            stats.removed += 1
            continue

        if entry.is_dir(follow_symlinks=False) and _is_real_dir(src_path):
            _prune(src_path, dest_path, excluded, stats)


def _copy(source: Path, destination: Path, excluded: frozenset[str], stats: SyncStats) -> None:
    for entry in _scan(source):
        if entry.name in excluded:
            continue
        src_path = Path(entry.path)
        target = destination / entry.name

        if entry.is_symlink():
            if os.path.lexists(target):
                _remove(target)
            os.symlink(os.readlink(src_path), target)
            stats.copied += 1
        elif entry.is_dir():
            if os.path.lexists(target) and not _is_real_dir(target):
                _remove(target)
            target.mkdir(exist_ok=True)
            _copy(src_path, target, excluded, stats)
            shutil.copystat(src_path, target)
        else:
            if os.path.lexists(target) and (target.is_symlink() or target.is_dir()):
                _remove(target)
            logger.debug("Copying %s -> %s", src_path, target)
            shutil.copy2(src_path, target)
            stats.copied += 1


def sync_tree(spec: SyncSpec) -> SyncStats:
    """Make ``spec.destination`` a mirror of ``spec.source``.

    Runs two passes: prune removes destination entries with no counterpart in
    the source, then copy writes every source entry over the destination.
    Entries whose base name is in ``spec.excluded_names`` are skipped by both
    passes at every depth, so they are neither deleted from nor written to the
    destination. The source root itself is always copied.
    """
    source, destination = spec.source, spec.destination
    if not source.is_dir():
        raise MirrorError(source, destination, "source is not a directory")

    stats = SyncStats()
    try:
        destination.mkdir(parents=True, exist_ok=True)
        _prune(source, destination, spec.excluded_names, stats)
        _copy(source, destination, spec.excluded_names, stats)
    except OSError as exc:
        raise MirrorError(source, destination, str(exc)) from exc

    logger.info(
        "Synced %s -> %s (%d copied, %d removed)",
        source,
        destination,
        stats.copied,
        stats.removed,
    )
    return stats
