from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional

from packer_config.plugins.discovery import DirectoryLike, DiscoveredPlugin, PluginDiscoverer

if TYPE_CHECKING:
    from packer_config.config.models import Configuration

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MergeReport:
    added: list[DiscoveredPlugin] = field(default_factory=list)
    skipped: list[DiscoveredPlugin] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added)


def merge_external_components(
    cfg: Configuration,
    directories: Iterable[DirectoryLike],
    *,
    discoverer: Optional[PluginDiscoverer] = None,
) -> MergeReport:
    """
    Fold plugins found on disk into the configuration's plugin mappings.

    Existing bindings, explicit or discovered earlier, are never replaced.
    Discovery completes before any mapping is touched, so a DirectoryReadError
    leaves the configuration unchanged.
    """
    discoverer = discoverer or PluginDiscoverer()
    discovered = discoverer.discover(directories)

    report = MergeReport()
    for plugin in discovered:
        mapping = cfg.mapping_for(plugin.category)
        if mapping.set_if_absent(plugin.name, plugin.path):
            report.added.append(plugin)
            logger.debug(
                "plugins.bound category=%s name=%s path=%s", plugin.category.value, plugin.name, plugin.path
            )
        else:
            report.skipped.append(plugin)
            logger.debug(
                "plugins.already_bound category=%s name=%s existing=%s ignored=%s",
                plugin.category.value,
                plugin.name,
                mapping.get(plugin.name),
                plugin.path,
            )

    logger.info("plugins.merge_done added=%d skipped=%d", len(report.added), len(report.skipped))
    return report
