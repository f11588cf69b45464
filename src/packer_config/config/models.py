from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt

from packer_config.plugins.discovery import DEFAULT_TOOL_NAME, PluginCategory
from packer_config.plugins.mapping import PluginMapping


class Configuration(BaseModel):
    """
    User configuration for the plugin host, as read from the JSON config file.

    Created once at startup, extended by plugin discovery, then treated as
    read-only. Unknown top-level keys are ignored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    plugin_min_port: StrictInt = Field(default=0, alias="PluginMinPort")
    plugin_max_port: StrictInt = Field(default=0, alias="PluginMaxPort")
    disable_checkpoint: StrictBool = False
    disable_checkpoint_signature: StrictBool = False

    builders: PluginMapping = Field(default_factory=PluginMapping)
    provisioners: PluginMapping = Field(default_factory=PluginMapping)
    post_processors: PluginMapping = Field(default_factory=PluginMapping, alias="post-processors")

    def mapping_for(self, category: PluginCategory) -> PluginMapping:
        if category is PluginCategory.BUILDER:
            return self.builders
        if category is PluginCategory.PROVISIONER:
            return self.provisioners
        return self.post_processors

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True, slots=True)
class ConfigLoadRequest:
    """
    Inputs for a configuration loader.

    The environment is passed explicitly so that loading never depends on the
    live process environment.
    """

    config_path: Optional[str] = None
    environ: Mapping[str, str] = field(default_factory=dict)
    executable: Optional[str] = None
    cwd: Optional[str] = None
    discover_plugins: bool = True
    tool_name: str = DEFAULT_TOOL_NAME
