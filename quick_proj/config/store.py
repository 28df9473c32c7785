"""File-backed ConfigStore."""

from __future__ import annotations

from pathlib import Path

from quick_proj.config.loader import default_config_path, load_config
from quick_proj.config.writer import save_config
from quick_proj.domain.models import Config


class YamlConfigStore:
    """ConfigStore over a single YAML file."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path if path is not None else default_config_path()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Config:
        return load_config(self._path)

    def save(self, config: Config) -> Path:
        return save_config(config, self._path)
