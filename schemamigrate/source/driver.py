"""The source driver interface and the registry of source drivers."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import BinaryIO
from urllib.parse import urlsplit

from schemamigrate.source.migration import Migration

_drivers_lock = threading.RLock()
_drivers: dict[str, "Driver"] = {}


class Driver(ABC):
    """A read-only source of migrations.

    Methods that find nothing raise :class:`FileNotFoundError`.
    """

    @abstractmethod
    def open(self, url: str) -> "Driver":
        """Return a new driver configured from ``url``."""

    @abstractmethod
    def close(self) -> None:
        """Release the underlying source."""

    @abstractmethod
    def first(self) -> int:
        """Return the first available version."""

    @abstractmethod
    def prev(self, version: int) -> int:
        """Return the version before ``version``."""

    @abstractmethod
    def next(self, version: int) -> int:
        """Return the version after ``version``."""

    @abstractmethod
    def read_up(self, version: int) -> tuple[BinaryIO, str]:
        """Return the unread up body of ``version`` and its identifier."""

    @abstractmethod
    def read_down(self, version: int) -> tuple[BinaryIO, str]:
        """Return the unread down body of ``version`` and its identifier."""


class DuplicateMigrationError(Exception):
    """Raised when two files describe the same version and direction."""

    def __init__(self, migration: Migration, file_name: str) -> None:
        self.migration = migration
        self.file_name = file_name
        super().__init__(f"duplicate migration file: {file_name}")


def register(name: str, driver: Driver) -> None:
    """Register ``driver`` under the URL scheme ``name``."""
    if driver is None:
        raise ValueError("Register driver is nil")
    with _drivers_lock:
        if name in _drivers:
            raise ValueError(f"Register called twice for driver {name}")
        _drivers[name] = driver


def open_source(url: str) -> Driver:
    """Open the source at ``url`` with the driver registered for its scheme."""
    scheme = urlsplit(url).scheme
    if not scheme:
        raise ValueError("source driver: invalid URL scheme")
    with _drivers_lock:
        driver = _drivers.get(scheme)
    if driver is None:
        raise ValueError(f"source driver: unknown driver '{scheme}' (forgotten import?)")
    return driver.open(url)


def list_drivers() -> list[str]:
    """Return the names of the registered drivers, sorted."""
    with _drivers_lock:
        return sorted(_drivers)