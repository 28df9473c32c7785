"""Config writer — persist the Config document and edit its root paths.

Edits are pure: each helper returns a new Config plus whether anything
changed, and the caller decides when to ``save_config``.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from quick_proj.config.loader import default_config_path
from quick_proj.domain.errors import ConfigError
from quick_proj.domain.models import Config


def save_config(config: Config, path: Path | None = None) -> Path:
    """Write the config as YAML, creating parent directories. Returns the path.

    Raises:
        ConfigError: if the file can't be written.
    """
    if path is None:
        path = default_config_path()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                config_to_dict(config),
                f,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            )
    except OSError as err:
        raise ConfigError(path, f"Cannot write config file: {err.strerror or err}") from err
    return path


def add_root_path(config: Config, path: Path) -> tuple[Config, bool]:
    """Register ``path`` (canonicalised). Returns (config, added).

    Raises:
        ValueError: if the path doesn't exist or isn't a directory.
    """
    expanded = path.expanduser()
    try:
        canonical = expanded.resolve(strict=True)
    except (OSError, RuntimeError) as err:
        raise ValueError(f"Path does not exist or is not accessible: {expanded}") from err
    if not canonical.is_dir():
        raise ValueError(f"Not a directory: {canonical}")

    if canonical in config.root_paths:
        return config, False
    return replace(config, root_paths=(*config.root_paths, canonical)), True


def remove_root_path(config: Config, path: Path) -> tuple[Config, bool]:
    """Unregister ``path``. Returns (config, removed).

    The path is compared in canonical form when it still exists, so a
    deleted directory can still be removed by the path it was added under.
    """
    expanded = path.expanduser()
    try:
        target = expanded.resolve(strict=True)
    except (OSError, RuntimeError):
        target = expanded.absolute()

    remaining = tuple(p for p in config.root_paths if p != target)
    if len(remaining) == len(config.root_paths):
        return config, False
    return replace(config, root_paths=remaining), True


def set_editor(config: Config, editor: str) -> Config:
    """Return a Config with ``editor`` as the preferred editor."""
    editor = editor.strip()
    if not editor:
        raise ValueError("Editor must not be empty")
    return replace(config, editor=editor)


def config_to_dict(config: Config) -> dict[str, Any]:
    return {
        "root_paths": [str(p) for p in config.root_paths],
        "editor": config.editor,
        "max_depth": config.max_depth,
        "project_markers": list(config.project_markers),
        "exclude_dirs": list(config.exclude_dirs),
    }
