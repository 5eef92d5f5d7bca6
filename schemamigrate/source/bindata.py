"""A source driver over named assets served by a lookup function."""

from __future__ import annotations

import errno
import io
from dataclasses import dataclass, field
from typing import BinaryIO, Callable

from schemamigrate.source.driver import Driver, register
from schemamigrate.source.migration import Migration, Migrations
from schemamigrate.source.parse import parse

AssetFunc = Callable[[str], bytes]


@dataclass
class AssetSource:
    """Asset names and the function that returns an asset's contents."""

    names: list[str] = field(default_factory=list)
    asset_func: AssetFunc | None = None


def resource(names, asset_func: AssetFunc) -> AssetSource:
    """Wrap ``names`` and ``asset_func`` into an :class:`AssetSource`."""
    return AssetSource(names=list(names), asset_func=asset_func)


class Bindata(Driver):
    """Migrations kept as named assets."""

    def __init__(self, asset_source: AssetSource | None = None) -> None:
        self.path = "<go-bindata>"
        self.asset_source = asset_source
        self.migrations = Migrations()
        self.closed = False

    def open(self, url: str) -> Driver:
        raise ValueError("go-bindata sources cannot be opened from a URL; use with_instance")

    def close(self) -> None:
        """Mark the driver closed; assets hold no other resources."""
        self.closed = True

    def _present(self, value, op: str):
        if value is None:
            raise FileNotFoundError(errno.ENOENT, f"{op}: file does not exist", self.path)
        return value

    def first(self) -> int:
        return self._present(self.migrations.first(), "first")

    def prev(self, version: int) -> int:
        return self._present(self.migrations.prev(version), f"prev for version {version}")

    def next(self, version: int) -> int:
        return self._present(self.migrations.next(version), f"next for version {version}")

    def read_up(self, version: int) -> tuple[BinaryIO, str]:
        return self._asset(self.migrations.up(version), version)

    def read_down(self, version: int) -> tuple[BinaryIO, str]:
        return self._asset(self.migrations.down(version), version)

    def _asset(self, found: Migration | None, version: int) -> tuple[BinaryIO, str]:
        m = self._present(found, f"read version {version}")
        return io.BytesIO(self.asset_source.asset_func(m.raw)), m.identifier


def with_instance(instance: AssetSource) -> Bindata:
    """Return a driver over the assets of ``instance``."""
    if not isinstance(instance, AssetSource):
        raise TypeError("expects AssetSource")
    bindata = Bindata(instance)
    for name in instance.names:
        try:
            m = parse(name)
        except ValueError:
            continue
        if not bindata.migrations.append(m):
            raise ValueError(f"unable to parse file {name}")
    return bindata


register("go-bindata", Bindata())