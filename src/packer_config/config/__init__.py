"""Config file resolution, decoding, and loading."""

from packer_config.config.interfaces import ConfigLoader
from packer_config.config.loader import JsonConfigLoader, decode_config
from packer_config.config.models import ConfigLoadRequest, Configuration

__all__ = ["ConfigLoadRequest", "ConfigLoader", "Configuration", "JsonConfigLoader", "decode_config"]
