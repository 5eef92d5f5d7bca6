"""An in-memory source driver whose migrations are set directly."""

from __future__ import annotations

import errno
import io
from dataclasses import dataclass
from typing import Any, BinaryIO

from schemamigrate.source.driver import Driver, register
from schemamigrate.source.migration import Migration, Migrations


@dataclass
class Config:
    """Configuration of a stub source; it has no settings."""


class Stub(Driver):
    """A source whose ``migrations`` are filled in by the caller.

    The body of a migration read from a stub is its identifier.
    """

    def __init__(
        self,
        url: str = "",
        instance: Any = None,
        migrations: Migrations | None = None,
        config: Config | None = None,
    ) -> None:
        self.url = url
        self.instance = instance
        self.migrations = migrations if migrations is not None else Migrations()
        self.config = config
        self.closed = False

    def open(self, url: str) -> "Stub":
        return Stub(url=url, migrations=Migrations(), config=Config())

    def close(self) -> None:
        """Mark the stub closed; it holds no other resources."""
        self.closed = True

    def _existing(self, value, op: str):
        if value is None:
            raise FileNotFoundError(errno.ENOENT, f"{op}: file does not exist", self.url)
        return value

    def first(self) -> int:
        return self._existing(self.migrations.first(), "first")

    def prev(self, version: int) -> int:
        return self._existing(self.migrations.prev(version), f"prev for version {version}")

    def next(self, version: int) -> int:
        return self._existing(self.migrations.next(version), f"next for version {version}")

    def read_up(self, version: int) -> tuple[BinaryIO, str]:
        return self._identifier_body(self.migrations.up(version), version, "up")

    def read_down(self, version: int) -> tuple[BinaryIO, str]:
        return self._identifier_body(self.migrations.down(version), version, "down")

    def _identifier_body(
        self, found: Migration | None, version: int, word: str
    ) -> tuple[BinaryIO, str]:
        m = self._existing(found, f"read {word} version {version}")
        return io.BytesIO(m.identifier.encode()), f"{version}.{word}.stub"


def with_instance(instance: Any, config: Config | None) -> Stub:
    """Return an empty stub source holding ``instance`` and ``config``."""
    return Stub(instance=instance, migrations=Migrations(), config=config)


register("stub", Stub())