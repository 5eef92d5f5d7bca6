"""A source driver that reads migrations from a file system object.

A file system is any object with ``open(name)`` returning a binary file and
``read_dir(name)`` returning entries that have a ``name`` attribute and an
``is_dir()`` method. Names are slash-separated and relative, ``"."`` being
the root. Drivers built here cannot be opened from a URL.
"""

from __future__ import annotations

import errno
import io
import os
import posixpath
from dataclasses import dataclass
from typing import BinaryIO, Mapping

from schemamigrate.source.driver import Driver, DuplicateMigrationError
from schemamigrate.source.migration import Migrations
from schemamigrate.source.parse import parse


def _valid_path(name: str) -> bool:
    if name == ".":
        return True
    if not name or name.startswith("/") or name.endswith("/"):
        return False
    return all(part not in ("", ".", "..") for part in name.split("/"))


def _invalid(name: str) -> OSError:
    return OSError(errno.EINVAL, "invalid argument", name)


def _not_exist(op: str, path: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, f"{op}: file does not exist", path)


def _join(directory: str, name: str) -> str:
    return posixpath.normpath(posixpath.join(directory, name))


class DirFS:
    """A file system rooted at a directory on disk."""

    def __init__(self, root: str | os.PathLike) -> None:
        self.root = os.fspath(root)

    def _real(self, name: str) -> str:
        if not _valid_path(name):
            raise _invalid(name)
        if name == ".":
            return self.root
        return os.path.join(self.root, *name.split("/"))

    def open(self, name: str) -> BinaryIO:
        """Open the file ``name`` for binary reading."""
        return open(self._real(name), "rb")

    def read_dir(self, name: str) -> list[os.DirEntry]:
        """Return the entries of directory ``name`` sorted by name."""
        with os.scandir(self._real(name)) as entries:
            return sorted(entries, key=lambda entry: entry.name)


@dataclass(frozen=True)
class _MapEntry:
    name: str
    directory: bool

    def is_dir(self) -> bool:
        return self.directory


class MapFS:
    """An in-memory file system built from a mapping of paths to contents."""

    def __init__(self, files: Mapping[str, bytes | str]) -> None:
        self.files: dict[str, bytes] = {}
        for name, data in files.items():
            if name == "." or not _valid_path(name):
                raise ValueError(f"invalid file name {name!r}")
            self.files[name] = data.encode() if isinstance(data, str) else bytes(data)
        self._dirs = {"."}
        for name in self.files:
            parent = posixpath.dirname(name)
            while parent:
                self._dirs.add(parent)
                parent = posixpath.dirname(parent)

    def open(self, name: str) -> BinaryIO:
        """Open the file ``name`` for binary reading."""
        if not _valid_path(name):
            raise _invalid(name)
        if name in self.files:
            return io.BytesIO(self.files[name])
        if name in self._dirs:
            raise IsADirectoryError(errno.EISDIR, "is a directory", name)
        raise FileNotFoundError(errno.ENOENT, "file does not exist", name)

    def read_dir(self, name: str) -> list[_MapEntry]:
        """Return the entries of directory ``name`` sorted by name."""
        if not _valid_path(name):
            raise _invalid(name)
        if name in self.files:
            raise NotADirectoryError(errno.ENOTDIR, "not a directory", name)
        if name not in self._dirs:
            raise FileNotFoundError(errno.ENOENT, "file does not exist", name)
        prefix = "" if name == "." else name + "/"
        children: dict[str, bool] = {}
        for path in self.files:
            if path.startswith(prefix):
                head, sep, _ = path[len(prefix):].partition("/")
                children[head] = children.get(head, False) or bool(sep)
        return [_MapEntry(child, is_dir) for child, is_dir in sorted(children.items())]


class PartialDriver:
    """Everything of a source driver over a file system except ``open``."""

    def __init__(self) -> None:
        self._migrations = Migrations()
        self._fsys = None
        self._path = ""

    def init(self, fsys, path: str) -> None:
        """Load the migrations found in directory ``path`` of ``fsys``."""
        migrations = Migrations()
        for entry in fsys.read_dir(path):
            if entry.is_dir():
                continue
            try:
                m = parse(entry.name)
            except ValueError:
                continue
            if not migrations.append(m):
                raise DuplicateMigrationError(m, entry.name)
        self._fsys = fsys
        self._path = path
        self._migrations = migrations

    def close(self) -> None:
        """Close the file system if it can be closed."""
        close = getattr(self._fsys, "close", None)
        if callable(close):
            close()

    def first(self) -> int:
        version = self._migrations.first()
        if version is None:
            raise _not_exist("first", self._path)
        return version

    def prev(self, version: int) -> int:
        found = self._migrations.prev(version)
        if found is None:
            raise _not_exist(f"prev for version {version}", self._path)
        return found

    def next(self, version: int) -> int:
        found = self._migrations.next(version)
        if found is None:
            raise _not_exist(f"next for version {version}", self._path)
        return found

    def read_up(self, version: int) -> tuple[BinaryIO, str]:
        m = self._migrations.up(version)
        if m is None:
            raise _not_exist(f"read up for version {version}", self._path)
        return self._open(_join(self._path, m.raw)), m.identifier

    def read_down(self, version: int) -> tuple[BinaryIO, str]:
        m = self._migrations.down(version)
        if m is None:
            raise _not_exist(f"read down for version {version}", self._path)
        return self._open(_join(self._path, m.raw)), m.identifier

    def _open(self, name: str) -> BinaryIO:
        try:
            return self._fsys.open(name)
        except OSError as exc:
            if exc.filename is not None:
                raise
            raise OSError(exc.errno, f"open: {exc.strerror or exc}", name) from exc


class IOFSDriver(PartialDriver, Driver):
    """A source driver over a file system object."""

    def open(self, url: str) -> Driver:
        raise RuntimeError("Open() cannot be called on the iofs passthrough driver")


def new(fsys, path: str) -> IOFSDriver:
    """Return a driver reading the migrations in ``path`` of ``fsys``."""
    driver = IOFSDriver()
    driver.init(fsys, path)
    return driver