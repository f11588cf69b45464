from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, ItemsView, Iterator, KeysView, Optional, ValuesView

from pydantic import Field, RootModel, StrictStr


class PluginMapping(RootModel[Dict[StrictStr, StrictStr]]):
    """
    Name to executable path registry for one plugin category.

    Bindings are insert-only: once a name is present it keeps its path for the
    lifetime of the mapping. Iteration follows insertion order.
    """

    root: Dict[StrictStr, StrictStr] = Field(default_factory=dict)

    def has(self, name: str) -> bool:
        return name in self.root

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.root.get(name, default)

    def set_if_absent(self, name: str, path: str) -> bool:
        """Bind `name` to `path` unless already bound. Returns True when inserted."""
        if name in self.root:
            return False
        self.root[name] = path
        return True

    def names(self) -> list[str]:
        return list(self.root)

    def keys(self) -> KeysView[str]:
        return self.root.keys()

    def values(self) -> ValuesView[str]:
        return self.root.values()

    def items(self) -> ItemsView[str, str]:
        return self.root.items()

    def __contains__(self, name: object) -> bool:
        return name in self.root

    def __getitem__(self, name: str) -> str:
        return self.root[name]

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)


Mapping.register(PluginMapping)
