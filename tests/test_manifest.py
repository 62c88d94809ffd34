import json
from pathlib import Path

import pytest

from marketplace_sync.errors import VersionReadError
from marketplace_sync.manifest import read_plugin_version


def test_reads_version(tmp_path: Path) -> None:
    manifest = tmp_path / "plugin.json"
    manifest.write_text(json.dumps({"name": "claude-mem", "version": "6.5.0"}), encoding="utf-8")

    assert read_plugin_version(manifest) == "6.5.0"


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        json.dumps({"name": "claude-mem"}),
        json.dumps({"version": 6}),
        json.dumps({"version": "  "}),
    ],
)
def test_malformed_manifest_raises(tmp_path: Path, content: str) -> None:
    manifest = tmp_path / "plugin.json"
    manifest.write_text(content, encoding="utf-8")

    with pytest.raises(VersionReadError) as excinfo:
        read_plugin_version(manifest)
    assert excinfo.value.path == manifest


def test_missing_manifest_raises(tmp_path: Path) -> None:
    with pytest.raises(VersionReadError):
        read_plugin_version(tmp_path / "missing.json")
