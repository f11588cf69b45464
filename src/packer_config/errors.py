from __future__ import annotations

from pathlib import Path
from typing import Optional


class ConfigError(Exception):
    """Base class for configuration loading failures."""


class DecodeError(ConfigError):
    def __init__(self, message: str, *, source: Optional[Path] = None) -> None:
        self.source = source
        if source is not None:
            message = f"{message} (source={source})"
        super().__init__(message)


class ConfigFileError(ConfigError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Unable to read config file {path}: {reason}")


class DirectoryReadError(ConfigError):
    """A plugin directory marked as required could not be listed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Unable to read required plugin directory {path}: {reason}")
