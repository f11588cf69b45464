"""External plugin discovery and precedence-preserving merge."""

from packer_config.plugins.discovery import DiscoveredPlugin, PluginCategory, PluginDirectory, PluginDiscoverer
from packer_config.plugins.mapping import PluginMapping
from packer_config.plugins.merge import MergeReport, merge_external_components

__all__ = [
    "DiscoveredPlugin",
    "MergeReport",
    "PluginCategory",
    "PluginDirectory",
    "PluginDiscoverer",
    "PluginMapping",
    "merge_external_components",
]
