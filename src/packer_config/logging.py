from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

LOG_ENV_VAR = "PACKER_LOG"
LOG_PATH_ENV_VAR = "PACKER_LOG_PATH"

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class FileRotationSettings(BaseModel):
    """Daily rotation, mapped onto TimedRotatingFileHandler."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    backup_count: int = 5


class FileLoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str
    rotation: FileRotationSettings = Field(default_factory=FileRotationSettings)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    level: str = "WARNING"
    file: Optional[FileLoggingSettings] = None


def _is_truthy(value: str) -> bool:
    return value.strip().lower() not in ("", "0", "false", "no", "off")


def logging_settings_from_env(environ: Mapping[str, str]) -> LoggingSettings:
    """PACKER_LOG enables debug output; PACKER_LOG_PATH additionally writes to a file."""
    enabled = _is_truthy(environ.get(LOG_ENV_VAR, ""))
    log_path = environ.get(LOG_PATH_ENV_VAR, "").strip()
    file_settings = FileLoggingSettings(path=log_path) if enabled and log_path else None
    return LoggingSettings(level="DEBUG" if enabled else "WARNING", file=file_settings)


def init_logging(settings: LoggingSettings) -> None:
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {settings.level}")

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)

    formatter = logging.Formatter(_FORMAT)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if settings.file is not None:
        path = Path(settings.file.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            path,
            when="midnight",
            backupCount=settings.file.rotation.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
