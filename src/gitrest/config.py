"""Configuration management for gitrest.

Reads and writes TOML config at ~/.config/gitrest/config.toml. The
GITREST_URL, GITREST_TOKEN, GITREST_PROJECT and GITREST_METHOD_OVERRIDE
environment variables take precedence over the file.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import tomli_w

CONFIG_DIR = Path.home() / ".config" / "gitrest"
CONFIG_PATH = CONFIG_DIR / "config.toml"
PROJECT_FILE = ".gitrest"


@dataclass
class ServerConfig:
    url: str = ""
    token: str = ""
    auth_scheme: str = "basic"
    timeout: float = 30.0
    method_override: bool = True


@dataclass
class DefaultsConfig:
    project: str = ""


@dataclass
class UIConfig:
    max_rows: int = 50


@dataclass
class GitRestConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _apply_env(config: GitRestConfig) -> GitRestConfig:
    config.server.url = os.environ.get("GITREST_URL", config.server.url)
    config.server.token = os.environ.get("GITREST_TOKEN", config.server.token)
    config.defaults.project = os.environ.get("GITREST_PROJECT", config.defaults.project)
    override = os.environ.get("GITREST_METHOD_OVERRIDE")
    if override:
        config.server.method_override = override.lower() in ("1", "true", "yes")
    return config


def _read_toml(path: Path) -> dict | None:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return None


def load_config(apply_env: bool = True) -> GitRestConfig:
    """Load config from TOML file, returning defaults if missing or corrupt.

    Pass ``apply_env=False`` to get the file alone, e.g. before saving it
    back, so values that only exist in the environment are not written.
    """
    data = _read_toml(CONFIG_PATH) if CONFIG_PATH.exists() else None
    if data is None:
        config = GitRestConfig()
        return _apply_env(config) if apply_env else config

    server_data = data.get("server", {})
    defaults_data = data.get("defaults", {})
    ui_data = data.get("ui", {})

    config = GitRestConfig(
        server=ServerConfig(
            url=server_data.get("url", ""),
            token=server_data.get("token", ""),
            auth_scheme=server_data.get("auth_scheme", "basic"),
            timeout=float(server_data.get("timeout", 30.0)),
            method_override=bool(server_data.get("method_override", True)),
        ),
        defaults=DefaultsConfig(
            project=defaults_data.get("project", ""),
        ),
        ui=UIConfig(
            max_rows=int(ui_data.get("max_rows", 50)),
        ),
    )
    return _apply_env(config) if apply_env else config


def save_config(config: GitRestConfig) -> None:
    """Write config to TOML file."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    os.chmod(CONFIG_DIR, 0o700)

    data = {
        "server": {
            "url": config.server.url,
            "token": config.server.token,
            "auth_scheme": config.server.auth_scheme,
            "timeout": config.server.timeout,
            "method_override": config.server.method_override,
        },
        "defaults": {
            "project": config.defaults.project,
        },
        "ui": {
            "max_rows": config.ui.max_rows,
        },
    }

    with open(CONFIG_PATH, "wb") as f:
        tomli_w.dump(data, f)
    os.chmod(CONFIG_PATH, 0o600)


@dataclass
class ProjectConfig:
    project: str | None = None
    repository: str | None = None


def load_project_config() -> ProjectConfig:
    """Load per-checkout settings from .gitrest in the current directory."""
    path = Path.cwd() / PROJECT_FILE
    if not path.exists():
        return ProjectConfig()
    data = _read_toml(path)
    if data is None:
        return ProjectConfig()
    return ProjectConfig(
        project=data.get("project"),
        repository=data.get("repository"),
    )


def save_project_config(config: ProjectConfig) -> None:
    """Write .gitrest in the current directory, removing it when empty."""
    path = Path.cwd() / PROJECT_FILE
    data = {
        key: value
        for key, value in (("project", config.project), ("repository", config.repository))
        if value is not None
    }
    if not data:
        if path.exists():
            path.unlink()
        return
    with open(path, "wb") as f:
        tomli_w.dump(data, f)


def has_credentials() -> bool:
    """Quick check if a server URL and token are configured."""
    config = load_config()
    return bool(config.server.url and config.server.token)
