"""Startup configuration loading and external plugin discovery."""

from packer_config.config import ConfigLoadRequest, Configuration, JsonConfigLoader, decode_config
from packer_config.errors import ConfigError, ConfigFileError, DecodeError, DirectoryReadError
from packer_config.plugins import (
    DiscoveredPlugin,
    PluginCategory,
    PluginDirectory,
    PluginDiscoverer,
    PluginMapping,
    merge_external_components,
)

__all__ = [
    "ConfigError",
    "ConfigFileError",
    "ConfigLoadRequest",
    "Configuration",
    "DecodeError",
    "DirectoryReadError",
    "DiscoveredPlugin",
    "JsonConfigLoader",
    "PluginCategory",
    "PluginDirectory",
    "PluginDiscoverer",
    "PluginMapping",
    "decode_config",
    "merge_external_components",
]
