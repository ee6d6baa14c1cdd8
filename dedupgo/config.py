"""Application configuration stored as YAML."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

_DEFAULT_EXCLUDES = ("*.tmp", "*.temp", "node_modules", ".git")

_STRING_FIELDS = ("hash_algorithm", "min_size", "output_format")
_LIST_FIELDS = ("exclude_patterns", "include_types")
_BOOL_FIELDS = ("dry_run", "use_trash")


@dataclass
class Config:
    """Scanner and output settings."""

    hash_algorithm: str = "md5"
    min_size: str = "0"
    exclude_patterns: list[str] = field(default_factory=lambda: list(_DEFAULT_EXCLUDES))
    include_types: list[str] = field(default_factory=list)
    dry_run: bool = True
    output_format: str = "txt"
    use_trash: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Return the settings keyed by their YAML names."""
        return {
            f.name: list(value) if isinstance(value := getattr(self, f.name), list) else value
            for f in fields(self)
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Config":
        """Build a config from defaults overridden by the keys in ``data``.

        Unknown keys are ignored; values of the wrong type raise ``ValueError``.
        """
        config = cls()
        if data is None:
            return config
        if not isinstance(data, dict):
            raise ValueError("configuration must be a mapping")
        for key, value in data.items():
            if key in _STRING_FIELDS:
                setattr(config, key, _as_string(key, value))
            elif key in _LIST_FIELDS:
                setattr(config, key, _as_string_list(key, value))
            elif key in _BOOL_FIELDS:
                setattr(config, key, _as_bool(key, value))
        return config


def _as_string(key: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"{key}: expected a string, got {value!r}")
    return str(value)


def _as_string_list(key: str, value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{key}: expected a list, got {value!r}")
    return [_as_string(key, item) for item in value]


def _as_bool(key: str, value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"{key}: expected a boolean, got {value!r}")
    return value


def default_config() -> Config:
    """Return the default configuration."""
    return Config()


def default_config_path() -> Path:
    """Return the per-user config file location.

    Raises ``RuntimeError`` when the home directory cannot be determined.
    """
    return Path.home() / ".config" / "dedupgo" / "config.yaml"


def load_config(path: str | os.PathLike[str] | None = None) -> Config:
    """Load configuration from ``path`` or the per-user default location.

    A missing file yields the defaults; unreadable or malformed files raise.
    """
    if not path:
        try:
            path = default_config_path()
        except RuntimeError:
            return default_config()

    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return default_config()

    return Config.from_dict(yaml.safe_load(text))


def save_config(config: Config, path: str | os.PathLike[str] | None = None) -> None:
    """Write ``config`` as YAML to ``path`` or the per-user default location."""
    if not path:
        target = default_config_path()
        target.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
    else:
        target = Path(path)
    target.write_text(
        yaml.safe_dump(config.to_dict(), sort_keys=False, allow_unicode=True),
        encoding="utf-8",
    )