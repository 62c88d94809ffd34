from __future__ import annotations

import json
from pathlib import Path

from .errors import VersionReadError


def read_plugin_version(manifest_path: Path) -> str:
    try:
        content = manifest_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise VersionReadError(manifest_path, exc.strerror or str(exc)) from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise VersionReadError(manifest_path, f"invalid JSON ({exc.msg})") from exc

    if not isinstance(data, dict):
        raise VersionReadError(manifest_path, "expected a JSON object")
    version = data.get("version")
    if not isinstance(version, str) or not version.strip():
        raise VersionReadError(manifest_path, "missing version field")
    return version.strip()
