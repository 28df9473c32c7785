"""Built-in configuration defaults.

Cover the common language ecosystems without requiring any user
configuration. Users can override every list in their config file.
"""

from __future__ import annotations

from quick_proj.domain.models import Config

APP_NAME = "quick-proj"

CONFIG_FILE_NAME = "config.yml"

CONFIG_ENV_VAR = "QUICK_PROJ_CONFIG"

DEFAULT_MAX_DEPTH = 4

# Priority order: the first marker present in a directory wins.
DEFAULT_PROJECT_MARKERS: tuple[str, ...] = (
    ".git",
    "Cargo.toml",
    "package.json",
    "go.mod",
    "pyproject.toml",
    "setup.py",
    "pom.xml",
    "build.gradle",
    "Makefile",
    "CMakeLists.txt",
    "composer.json",
    "Gemfile",
    "mix.exs",
    "deno.json",
)

DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (
    "node_modules",
    "target",
    ".venv",
    "venv",
    "__pycache__",
    ".cache",
    "dist",
    "build",
    ".next",
    ".nuxt",
    "vendor",
)

DEFAULT_CONFIG = Config(
    root_paths=(),
    editor=None,
    max_depth=DEFAULT_MAX_DEPTH,
    project_markers=DEFAULT_PROJECT_MARKERS,
    exclude_dirs=DEFAULT_EXCLUDE_DIRS,
)
