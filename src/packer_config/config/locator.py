"""
Resolution of the config file path and of the plugin search directories.

All functions take the environment as an explicit mapping. Nothing here reads
or mutates the live process environment.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from packer_config.plugins.discovery import PluginDirectory

CONFIG_ENV_VAR = "PACKER_CONFIG"
CONFIG_DIR_ENV_VAR = "PACKER_CONFIG_DIR"
PLUGIN_PATH_ENV_VAR = "PACKER_PLUGIN_PATH"


def _is_windows(platform: Optional[str]) -> bool:
    return (platform or os.name) == "nt"


def _user_base_dir(environ: Mapping[str, str], home: Optional[Path], platform: Optional[str]) -> Path:
    if _is_windows(platform):
        appdata = environ.get("APPDATA")
        if appdata:
            return Path(appdata)
    return home if home is not None else Path.home()


def resolve_config_path(
    environ: Mapping[str, str],
    *,
    home: Optional[Path] = None,
    platform: Optional[str] = None,
) -> Path:
    override = environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    base = _user_base_dir(environ, home, platform)
    if _is_windows(platform):
        return base / "packer.config"
    return base / ".packerconfig"


def resolve_config_dir(
    environ: Mapping[str, str],
    *,
    home: Optional[Path] = None,
    platform: Optional[str] = None,
) -> Path:
    override = environ.get(CONFIG_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()
    base = _user_base_dir(environ, home, platform)
    if _is_windows(platform):
        return base / "packer.d"
    return base / ".packer.d"


def plugin_directories(
    environ: Mapping[str, str],
    *,
    config_path: Path,
    executable: Optional[str] = None,
    cwd: Optional[str] = None,
    home: Optional[Path] = None,
    platform: Optional[str] = None,
) -> list[PluginDirectory]:
    """
    Build the ordered plugin search list.

    Order: executable directory, PACKER_PLUGIN_PATH entries, the config dir's
    plugins folder, the config file's directory, the working directory. Entries
    from PACKER_PLUGIN_PATH are required; the rest are optional. A path listed
    twice keeps its first position and is required if any occurrence is.
    """
    candidates: list[PluginDirectory] = []
    if executable:
        candidates.append(PluginDirectory(Path(executable).parent))

    for raw in environ.get(PLUGIN_PATH_ENV_VAR, "").split(os.pathsep):
        raw = raw.strip()
        if raw:
            candidates.append(PluginDirectory(Path(raw).expanduser(), required=True))

    candidates.append(PluginDirectory(resolve_config_dir(environ, home=home, platform=platform) / "plugins"))
    candidates.append(PluginDirectory(config_path.parent))
    if cwd:
        candidates.append(PluginDirectory(Path(cwd)))

    ordered: dict[str, PluginDirectory] = {}
    for candidate in candidates:
        key = os.path.normpath(str(candidate.path))
        existing = ordered.get(key)
        if existing is None:
            ordered[key] = candidate
        elif candidate.required and not existing.required:
            ordered[key] = PluginDirectory(existing.path, required=True)
    return list(ordered.values())
