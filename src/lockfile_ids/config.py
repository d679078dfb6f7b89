"""Reader settings.

Settings are read from a JSON file whose path is given explicitly or through the
``LOCKFILE_IDS_CONFIG`` environment variable. Without either, the defaults for
npm packages published on npmjs are used. The file is validated against
``SETTINGS_SCHEMA`` before any value is read from it.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

CONFIG_PATH_ENV_VAR = "LOCKFILE_IDS_CONFIG"

SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "contentType": {"type": "string", "minLength": 1, "pattern": "^[^/]+$"},
        "source": {"type": "string", "minLength": 1, "pattern": "^[^/]+$"},
        "packagesKey": {"type": "string", "minLength": 1},
    },
    "additionalProperties": False,
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Values stamped onto every id and where to find the package keys."""

    content_type: str = "npm"
    source: str = "npmjs"
    packages_key: str = "packages"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        defaults = cls()
        return cls(
            content_type=data.get("contentType", defaults.content_type),
            source=data.get("source", defaults.source),
            packages_key=data.get("packagesKey", defaults.packages_key),
        )


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Return the explicit path, then the env var path, else None."""
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings.

    Raises:
        ConfigError: If the file cannot be read or does not match the schema.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return Settings()

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    validator = Draft202012Validator(SETTINGS_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        raise ConfigError(
            f"Configuration file {config_path} is invalid:\n" + _format_errors(errors)
        )

    return Settings.from_dict(data)
