from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from .errors import DependencyInstallError

logger = logging.getLogger(__name__)


def run_dependency_install(cwd: Path, command: Sequence[str] = ("npm", "install")) -> None:
    logger.info("Running %s in %s", " ".join(command), cwd)
    try:
        result = subprocess.run(list(command), cwd=cwd, check=False)
    except OSError as exc:
        raise DependencyInstallError(command, None, str(exc)) from exc
    if result.returncode != 0:
        raise DependencyInstallError(command, result.returncode)
