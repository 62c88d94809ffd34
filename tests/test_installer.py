import sys
from pathlib import Path

import pytest

from marketplace_sync.errors import DependencyInstallError
from marketplace_sync.installer import run_dependency_install


def test_install_runs_in_destination(tmp_path: Path) -> None:
    script = "import pathlib; pathlib.Path('installed.txt').write_text('ok')"

    run_dependency_install(tmp_path, [sys.executable, "-c", script])

    assert (tmp_path / "installed.txt").read_text() == "ok"


def test_install_non_zero_exit_raises(tmp_path: Path) -> None:
    with pytest.raises(DependencyInstallError) as excinfo:
        run_dependency_install(tmp_path, [sys.executable, "-c", "raise SystemExit(3)"])

    assert excinfo.value.returncode == 3


def test_install_missing_command_raises(tmp_path: Path) -> None:
    with pytest.raises(DependencyInstallError) as excinfo:
        run_dependency_install(tmp_path, ["definitely-not-a-real-installer-binary"])

    assert excinfo.value.returncode is None
