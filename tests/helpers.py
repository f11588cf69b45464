from __future__ import annotations

from pathlib import Path


def touch(directory: Path, *names: str) -> list[str]:
    paths = []
    for name in names:
        path = directory / name
        path.write_bytes(b"")
        paths.append(str(path))
    return paths
