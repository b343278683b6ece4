from __future__ import annotations

from pathlib import Path


class AntigError(Exception):
    """Base class for every failure reported by antig."""


class ConfigurationError(AntigError):
    """Invocation rejected before anything was written."""


class CopyIOError(AntigError):
    def __init__(self, message: str, *paths: Path) -> None:
        super().__init__(message)
        self.paths = paths
