"""A source driver over file systems addressed with rooted, web-style paths.

Paths given to the driver are cleaned as a web server would clean them:
``""``, ``"/"`` and ``"."`` all name the root, and ``".."`` cannot leave it.
The file system itself is any object with ``open(name)`` and
``read_dir(name)`` taking relative, slash-separated names.
"""

from __future__ import annotations

import errno
import posixpath
from typing import BinaryIO

from schemamigrate.source.driver import Driver, DuplicateMigrationError
from schemamigrate.source.migration import Migration, Migrations
from schemamigrate.source.parse import parse


def _clean(name: str) -> str:
    return posixpath.normpath("/" + name).lstrip("/") or "."


class PartialDriver:
    """Everything of a source driver over a file system except ``open``."""

    def __init__(self) -> None:
        self._migrations = Migrations()
        self._fs = None
        self._path = ""
        self.closed = False

    def init(self, fs, path: str) -> None:
        """Load the migrations found in directory ``path`` of ``fs``."""
        migrations = Migrations()
        for entry in fs.read_dir(_clean(path)):
            if entry.is_dir():
                continue
            try:
                m = parse(entry.name)
            except ValueError:
                continue
            if not migrations.append(m):
                raise DuplicateMigrationError(m, entry.name)
        self._fs = fs
        self._path = path
        self._migrations = migrations

    def close(self) -> None:
        """Mark the driver closed; the file system itself is left open."""
        self.closed = True

    def _known(self, value, op: str):
        if value is None:
            raise FileNotFoundError(errno.ENOENT, f"{op}: file does not exist", self._path)
        return value

    def first(self) -> int:
        return self._known(self._migrations.first(), "first")

    def prev(self, version: int) -> int:
        return self._known(self._migrations.prev(version), f"prev for version {version}")

    def next(self, version: int) -> int:
        return self._known(self._migrations.next(version), f"next for version {version}")

    def read_up(self, version: int) -> tuple[BinaryIO, str]:
        m = self._known(self._migrations.up(version), f"read up for version {version}")
        return self._body(m)

    def read_down(self, version: int) -> tuple[BinaryIO, str]:
        m = self._known(self._migrations.down(version), f"read down for version {version}")
        return self._body(m)

    def _body(self, m: Migration) -> tuple[BinaryIO, str]:
        name = posixpath.join(self._path, m.raw)
        try:
            return self._fs.open(_clean(name)), m.identifier
        except OSError as exc:
            if exc.filename is not None:
                raise
            raise OSError(exc.errno, f"open: {exc.strerror or exc}", name) from exc


class HTTPFSDriver(PartialDriver, Driver):
    """A source driver over a file system with web-style paths."""

    def open(self, url: str) -> Driver:
        raise RuntimeError("Open() cannot be called on the httpfs passthrough driver")


def new(fs, path: str) -> HTTPFSDriver:
    """Return a driver reading the migrations in ``path`` of ``fs``."""
    driver = HTTPFSDriver()
    driver.init(fs, path)
    return driver