"""A source driver that reads migrations from a virtual file system."""

from __future__ import annotations

from schemamigrate.source import driver as _registry
from schemamigrate.source.httpfs import PartialDriver


class VFS(PartialDriver, _registry.Driver):
    """Migrations kept in a virtual file system with rooted paths."""

    def __init__(self) -> None:
        super().__init__()
        self.fs = None
        self.path = ""

    def open(self, url: str) -> _registry.Driver:
        raise RuntimeError("godoc-vfs sources cannot be opened from a URL; use with_instance")


def with_instance(fs, search_path: str) -> VFS:
    """Return a driver over ``fs`` searching ``search_path``, by default ``/``."""
    vfs = VFS()
    vfs.fs = fs
    vfs.path = search_path or "/"
    vfs.init(fs, vfs.path)
    return vfs


_registry.register("godoc-vfs", VFS())