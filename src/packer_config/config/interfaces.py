from __future__ import annotations

from typing import Protocol

from packer_config.config.models import Configuration, ConfigLoadRequest


class ConfigLoader(Protocol):
    """
    Loads the effective startup configuration.

    Implementations resolve the config file, decode it, and fold discovered
    plugins into it without replacing any explicit plugin entry.
    """

    def load(self, request: ConfigLoadRequest = ConfigLoadRequest()) -> Configuration:
        ...
