"""YAML config loader.

Loads the Config document from a YAML file. The YAML schema mirrors the
domain model — no mapping magic needed.

Schema:
  root_paths: [path, ...]        (optional, defaults to [])
  editor: string | null          (optional)
  max_depth: non-negative int    (optional, defaults to 4)
  project_markers: [string, ...] (optional, priority order)
  exclude_dirs: [string, ...]    (optional)

A missing file is not an error: the built-in defaults apply until the
first ``save_config``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, TypeVar

import click
import yaml

from quick_proj.config.defaults import (
    APP_NAME,
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG,
)
from quick_proj.domain.errors import ConfigError
from quick_proj.domain.models import Config

logger = logging.getLogger(__name__)

T = TypeVar("T")

_KNOWN_KEYS = frozenset({"root_paths", "editor", "max_depth", "project_markers", "exclude_dirs"})


def default_config_path() -> Path:
    """Return $QUICK_PROJ_CONFIG, or config.yml in the per-user app dir."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path(click.get_app_dir(APP_NAME)) / CONFIG_FILE_NAME


def load_config(path: Path | None = None) -> Config:
    """Load the Config from a YAML file.

    Raises:
        ConfigError: if the file can't be read or is structurally invalid.
    """
    if path is None:
        path = default_config_path()

    if not path.exists():
        logger.debug("No config at %s, using defaults", path)
        return DEFAULT_CONFIG

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as err:
        raise ConfigError(path, f"Cannot read config file: {err.strerror or err}") from err
    except yaml.YAMLError as err:
        raise ConfigError(path, f"Invalid YAML: {err}") from err

    return _parse_config(data or {}, source=path)


def _parse_config(data: Any, source: Path) -> Config:
    if not isinstance(data, dict):
        raise ConfigError(source, "Config must be a mapping of settings")

    for key in data.keys() - _KNOWN_KEYS:
        logger.debug("Ignoring unknown config key '%s' in %s", key, source)

    root_paths = _dedupe(
        tuple(Path(p).expanduser() for p in _string_list(data, "root_paths", (), source))
    )

    editor = data.get("editor")
    if editor is not None and not isinstance(editor, str):
        raise ConfigError(source, f"'editor' must be a string, got {type(editor).__name__}")
    if editor is not None:
        editor = editor.strip() or None

    max_depth = data.get("max_depth", DEFAULT_CONFIG.max_depth)
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        raise ConfigError(source, f"'max_depth' must be an integer, got {max_depth!r}")
    if max_depth < 0:
        raise ConfigError(source, f"'max_depth' must be non-negative, got {max_depth}")

    markers = _string_list(data, "project_markers", DEFAULT_CONFIG.project_markers, source)
    excludes = _string_list(data, "exclude_dirs", DEFAULT_CONFIG.exclude_dirs, source)

    return Config(
        root_paths=root_paths,
        editor=editor,
        max_depth=max_depth,
        project_markers=_dedupe(markers),
        exclude_dirs=_dedupe(excludes),
    )


def _string_list(
    data: dict[str, Any], key: str, default: tuple[str, ...], source: Path
) -> tuple[str, ...]:
    if key not in data or data[key] is None:
        return default

    raw = data[key]
    if not isinstance(raw, list):
        raise ConfigError(source, f"'{key}' must be a list, got {type(raw).__name__}")

    values = []
    for item in raw:
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(source, f"Invalid entry {item!r} in '{key}'")
        values.append(item.strip())
    return tuple(values)


def _dedupe(values: tuple[T, ...]) -> tuple[T, ...]:
    # First occurrence wins, so marker priority survives.
    return tuple(dict.fromkeys(values))
