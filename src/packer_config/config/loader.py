from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from packer_config.config.locator import plugin_directories, resolve_config_path
from packer_config.config.models import Configuration, ConfigLoadRequest
from packer_config.errors import ConfigFileError, DecodeError
from packer_config.plugins.discovery import PluginDiscoverer
from packer_config.plugins.mapping import PluginMapping
from packer_config.plugins.merge import merge_external_components

logger = logging.getLogger(__name__)


def _format_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "<root>"
        problems.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(problems)


def _config_key_lookup() -> dict[str, str]:
    lookup: dict[str, str] = {}
    for name, field in Configuration.model_fields.items():
        key = field.alias or name
        lookup[key.lower()] = key
        lookup.setdefault(name.lower(), key)
    return lookup


_CONFIG_KEYS = _config_key_lookup()
_MAPPING_KEYS = frozenset(
    field.alias or name for name, field in Configuration.model_fields.items() if field.annotation is PluginMapping
)


def _normalize_keys(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Match top-level keys case-insensitively and apply null values.

    A null plugin map clears that map; a null scalar is ignored. When two keys
    fold to the same field, the later one wins.
    """
    normalized: dict[str, Any] = {}
    for key, value in raw.items():
        canonical = _CONFIG_KEYS.get(key.lower())
        if canonical is None:
            continue
        if value is None:
            if canonical in _MAPPING_KEYS:
                normalized.pop(canonical, None)
            continue
        normalized[canonical] = value
    return normalized


def decode_config(data: Union[bytes, str], *, source: Optional[Path] = None) -> Configuration:
    """Parse JSON config content. Raises DecodeError on malformed input or wrong value types."""
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Config is not valid UTF-8: {e}", source=source) from e

    if not data.strip():
        return Configuration()

    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Config is not valid JSON: {e}", source=source) from e

    if not isinstance(raw, dict):
        raise DecodeError(f"Top-level config must be a JSON object, got: {type(raw).__name__}", source=source)

    try:
        return Configuration.model_validate(_normalize_keys(raw))
    except ValidationError as e:
        raise DecodeError(f"Invalid config: {_format_validation_error(e)}", source=source) from e


def _read_config_file(path: Path) -> Optional[bytes]:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise ConfigFileError(path, e.strerror or str(e)) from e


class JsonConfigLoader:
    def load(self, request: ConfigLoadRequest = ConfigLoadRequest()) -> Configuration:
        if request.config_path:
            config_path = Path(request.config_path).expanduser()
        else:
            config_path = resolve_config_path(request.environ)

        data = _read_config_file(config_path)
        if data is None:
            logger.debug("config.file_missing path=%s", config_path)
            config = Configuration()
        else:
            config = decode_config(data, source=config_path)
            logger.debug("config.file_loaded path=%s", config_path)

        if not request.discover_plugins:
            return config

        directories = plugin_directories(
            request.environ,
            config_path=config_path,
            executable=request.executable,
            cwd=request.cwd,
        )
        merge_external_components(config, directories, discoverer=PluginDiscoverer(tool_name=request.tool_name))
        return config
