from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple, Union

from packer_config.errors import DirectoryReadError

logger = logging.getLogger(__name__)

DEFAULT_TOOL_NAME = "packer"
DEFAULT_EXE_SUFFIX = ".exe" if os.name == "nt" else ""


class PluginCategory(enum.Enum):
    """Plugin kinds, declared in filename match precedence order."""

    BUILDER = "builder"
    PROVISIONER = "provisioner"
    POST_PROCESSOR = "post-processor"

    def prefix(self, tool_name: str) -> str:
        return f"{tool_name}-{self.value}-"


@dataclass(frozen=True, slots=True)
class DiscoveredPlugin:
    category: PluginCategory
    name: str
    path: str


@dataclass(frozen=True, slots=True)
class PluginDirectory:
    path: Path
    required: bool = False


DirectoryLike = Union[PluginDirectory, str, os.PathLike]


def _as_plugin_directory(value: DirectoryLike) -> PluginDirectory:
    if isinstance(value, PluginDirectory):
        return value
    return PluginDirectory(path=Path(value))


class PluginDiscoverer:
    def __init__(self, *, tool_name: str = DEFAULT_TOOL_NAME, exe_suffix: str = DEFAULT_EXE_SUFFIX) -> None:
        if not tool_name:
            raise ValueError("tool_name must not be empty")
        self.tool_name = tool_name
        self.exe_suffix = exe_suffix
        self._prefixes: Tuple[Tuple[PluginCategory, str], ...] = tuple(
            (category, category.prefix(tool_name)) for category in PluginCategory
        )

    def classify(self, filename: str) -> Optional[Tuple[PluginCategory, str]]:
        """
        Match a filename against the plugin naming convention.

        Returns the category and plugin name, or None when the filename is not a
        plugin or the derived name is empty. When an executable suffix is set,
        only filenames ending in it qualify.
        """
        for category, prefix in self._prefixes:
            if not filename.startswith(prefix):
                continue
            name = filename[len(prefix) :]
            suffix = self.exe_suffix
            if suffix:
                if not name.lower().endswith(suffix.lower()):
                    return None
                name = name[: -len(suffix)]
            if not name:
                return None
            return category, name
        return None

    def discover(self, directories: Iterable[DirectoryLike]) -> list[DiscoveredPlugin]:
        """
        Scan directories in the given order and return every plugin found.

        Results keep directory order, so the first directory to provide a name
        comes first. Unreadable optional directories contribute nothing; an
        unreadable required directory raises DirectoryReadError.
        """
        found: list[DiscoveredPlugin] = []
        for value in directories:
            directory = _as_plugin_directory(value)
            found.extend(self._scan_directory(directory))
        logger.debug("plugins.discover_done tool=%s found=%d", self.tool_name, len(found))
        return found

    def _scan_directory(self, directory: PluginDirectory) -> Sequence[DiscoveredPlugin]:
        base = directory.path.absolute()
        try:
            with os.scandir(base) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            if directory.required:
                raise DirectoryReadError(base, e.strerror or str(e)) from e
            if isinstance(e, FileNotFoundError):
                logger.debug("plugins.dir_missing path=%s", base)
            else:
                logger.warning("plugins.dir_unreadable path=%s error=%s", base, e)
            return ()

        results: list[DiscoveredPlugin] = []
        for entry in entries:
            if entry.is_dir():
                continue
            match = self.classify(entry.name)
            if match is None:
                logger.debug("plugins.entry_skipped path=%s", entry.path)
                continue
            category, name = match
            results.append(DiscoveredPlugin(category=category, name=name, path=str(base / entry.name)))
        logger.debug("plugins.dir_scanned path=%s found=%d", base, len(results))
        return results
