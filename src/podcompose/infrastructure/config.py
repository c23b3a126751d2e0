"""Configuration defaults, .env parsing, and settings file loading."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from podcompose.runtime.errors import ConfigError

DEFAULT_PODMAN_PATH: str = "podman"
DEFAULT_PROJECT_LABEL: str = "io.podman.compose.project"
SETTINGS_FILE: str = "podcompose.yaml"

# Environment variable -> Settings field
ENV_KEYS: dict[str, str] = {
    "PODCOMPOSE_PODMAN_PATH": "podman_path",
    "PODCOMPOSE_DRY_RUN": "dry_run",
    "PODCOMPOSE_PROJECT": "project_name",
    "PODCOMPOSE_PROJECT_LABEL": "project_label",
}


def read_env_file(keys: list[str]) -> dict[str, str]:
    """Parse .env file and return values for requested keys.

    Does NOT load into os.environ. Callers decide what to do with values,
    and child processes such as podman never inherit them.
    """
    env_file = Path.cwd() / ".env"
    try:
        content = env_file.read_text()
    except OSError:
        return {}

    result: dict[str, str] = {}
    wanted = set(keys)

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        eq_idx = trimmed.find("=")
        if eq_idx == -1:
            continue
        key = trimmed[:eq_idx].strip()
        if key not in wanted:
            continue
        value = trimmed[eq_idx + 1 :].strip()
        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
        if value:
            result[key] = value

    return result


class Settings(BaseModel):
    podman_path: str = DEFAULT_PODMAN_PATH
    dry_run: bool = False
    project_name: str = ""
    project_label: str = DEFAULT_PROJECT_LABEL


def _read_settings_file(path: Path) -> dict[str, object]:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise ConfigError(f"Cannot read settings file {path}: {err}") from err

    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as err:
        raise ConfigError(f"Invalid settings file {path}: {err}") from err

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    return raw


def load_settings(path: Path | None = None) -> Settings:
    """Resolve settings from defaults, a YAML file, .env and the environment.

    Later sources win. Without an explicit ``path`` the file is looked up as
    ``podcompose.yaml`` in the current directory and skipped when absent; an
    explicit path that does not exist is an error.
    """
    raw: dict[str, object] = {}

    if path is not None:
        if not path.exists():
            raise ConfigError(f"Settings file not found: {path}")
        raw.update(_read_settings_file(path))
    else:
        default_path = Path.cwd() / SETTINGS_FILE
        if default_path.exists():
            raw.update(_read_settings_file(default_path))

    env_config = read_env_file(list(ENV_KEYS))
    for env_key, field in ENV_KEYS.items():
        value = os.environ.get(env_key) or env_config.get(env_key)
        if value:
            raw[field] = value

    try:
        return Settings.model_validate(raw)
    except ValidationError as err:
        raise ConfigError(f"Invalid settings: {err}") from err
