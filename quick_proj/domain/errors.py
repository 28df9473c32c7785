"""Domain error taxonomy.

Directory-level read failures are absorbed inside the scanner and never
surface as exceptions; everything a user might need to act on lives here.
"""

from __future__ import annotations

from pathlib import Path


class QuickProjError(Exception):
    """Base class for all quick-proj errors."""


class ConfigError(QuickProjError):
    """The configuration file is unreadable or malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason} (config: {path})")


class ScanError(QuickProjError):
    """A configured root path could not be scanned.

    Recorded per root in ScanResult.errors; never aborts the overall scan.
    """

    def __init__(self, root: Path, reason: str) -> None:
        self.root = root
        self.reason = reason
        super().__init__(f"{root}: {reason}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScanError):
            return NotImplemented
        return (self.root, self.reason) == (other.root, other.reason)

    def __hash__(self) -> int:
        return hash((self.root, self.reason))


class LaunchError(QuickProjError):
    """The editor binary was not found or failed to start."""

    def __init__(self, command: list[str], reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to launch '{' '.join(command)}': {reason}")
