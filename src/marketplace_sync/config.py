from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit, urlunsplit

from .errors import ConfigError

DEFAULT_MARKETPLACE = "thedotmack"
DEFAULT_PLUGIN = "claude-mem"
DEFAULT_WORKER_URL = "http://127.0.0.1:37777"
RESTART_PATH = "/api/admin/restart"

MARKETPLACE_EXCLUDES = frozenset({".git", ".mcp.json"})
CACHE_EXCLUDES = frozenset({".git"})
PLUGIN_SUBDIR = "plugin"
MANIFEST_RELPATH = Path(".claude-plugin") / "plugin.json"


@dataclass(frozen=True)
class SyncConfig:
    source_root: Path
    plugins_home: Path
    marketplace: str
    plugin: str
    stable_branch: str
    install_command: tuple[str, ...]
    worker_url: str
    restart_timeout_seconds: float
    git_timeout_seconds: float
    log_level: str

    @property
    def marketplace_path(self) -> Path:
        return self.plugins_home / "marketplaces" / self.marketplace

    @property
    def cache_base_path(self) -> Path:
        return self.plugins_home / "cache" / self.marketplace / self.plugin

    @property
    def plugin_source(self) -> Path:
        return self.source_root / PLUGIN_SUBDIR

    @property
    def manifest_path(self) -> Path:
        return self.plugin_source / MANIFEST_RELPATH

    @property
    def restart_url(self) -> str:
        return self.worker_url.rstrip("/") + RESTART_PATH

    @property
    def ui_url(self) -> str:
        parts = urlsplit(self.worker_url)
        if parts.hostname == "127.0.0.1":
            netloc = "localhost" if parts.port is None else f"localhost:{parts.port}"
            parts = parts._replace(netloc=netloc)
        return urlunsplit(parts).rstrip("/")


def _env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def _env_command(name: str, default: str) -> tuple[str, ...]:
    raw = _env(name, default)
    try:
        command = tuple(shlex.split(raw))
    except ValueError as exc:
        raise ConfigError(f"{name} is not a valid command line: {exc}") from exc
    if not command:
        raise ConfigError(f"{name} must not be empty")
    return command


def _env_url(name: str, default: str) -> str:
    raw = _env(name, default)
    try:
        parts = urlsplit(raw)
        parts.port  # raises on a malformed or out-of-range port
    except ValueError as exc:
        raise ConfigError(f"{name} is not a valid URL: {exc}") from exc
    if parts.scheme not in ("http", "https"):
        raise ConfigError(f"{name} must be an http(s) URL, got {raw!r}")
    if not parts.hostname:
        raise ConfigError(f"{name} must include a host, got {raw!r}")
    return raw


def load_config() -> SyncConfig:
    source_root = Path(_env("MARKETPLACE_SYNC_SOURCE", os.getcwd())).expanduser().resolve()
    plugins_home = Path(
        _env("MARKETPLACE_SYNC_PLUGINS_HOME", str(Path.home() / ".claude" / "plugins"))
    ).expanduser()

    return SyncConfig(
        source_root=source_root,
        plugins_home=plugins_home,
        marketplace=_env("MARKETPLACE_SYNC_MARKETPLACE", DEFAULT_MARKETPLACE),
        plugin=_env("MARKETPLACE_SYNC_PLUGIN", DEFAULT_PLUGIN),
        stable_branch=_env("MARKETPLACE_SYNC_STABLE_BRANCH", "main"),
        install_command=_env_command("MARKETPLACE_SYNC_INSTALL_COMMAND", "npm install"),
        worker_url=_env_url("MARKETPLACE_SYNC_WORKER_URL", DEFAULT_WORKER_URL),
        restart_timeout_seconds=_env_float("MARKETPLACE_SYNC_RESTART_TIMEOUT", 2.0),
        git_timeout_seconds=_env_float("MARKETPLACE_SYNC_GIT_TIMEOUT", 10.0),
        log_level=_env("LOG_LEVEL", "info"),
    )
