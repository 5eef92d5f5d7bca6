"""A source driver that reads migrations from an S3 bucket.

The client is any object with the ``list_objects(Bucket=, Prefix=,
Delimiter=)`` and ``get_object(Bucket=, Key=)`` calls of the usual S3 client,
returning ``{"Contents": [{"Key": ...}]}`` and ``{"Body": stream}``.
"""

from __future__ import annotations

import errno
import os
import posixpath
from dataclasses import dataclass
from typing import Any, BinaryIO
from urllib.parse import urlsplit

from schemamigrate.source.driver import Driver, register
from schemamigrate.source.migration import Migration, Migrations
from schemamigrate.source.parse import parse


def _not_exist() -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT))


@dataclass
class Config:
    """Bucket and key prefix where the migrations live."""

    bucket: str = ""
    prefix: str = ""


def parse_uri(uri: str) -> Config:
    """Return the configuration named by an ``s3://bucket/prefix`` URI."""
    parts = urlsplit(uri)
    prefix = parts.path.strip("/")
    if prefix:
        prefix += "/"
    return Config(bucket=parts.netloc.rpartition("@")[2], prefix=prefix)


class S3Driver(Driver):
    """Migrations stored as objects under a prefix of a bucket."""

    def __init__(self, s3client: Any = None, config: Config | None = None) -> None:
        self.s3client = s3client
        self.config = config if config is not None else Config()
        self.migrations = Migrations()
        self.closed = False

    def open(self, url: str) -> "S3Driver":
        if self.s3client is None:
            raise ValueError("s3 source needs a client; use with_instance")
        return with_instance(self.s3client, parse_uri(url))

    def _load_migrations(self) -> None:
        output = self.s3client.list_objects(
            Bucket=self.config.bucket,
            Prefix=self.config.prefix,
            Delimiter="/",
        )
        for obj in output.get("Contents") or []:
            key = obj["Key"]
            try:
                m = parse(posixpath.basename(key))
            except ValueError:
                continue
            if not self.migrations.append(m):
                raise ValueError(f"unable to parse file {key}")

    def close(self) -> None:
        """Mark the driver closed; the client stays owned by the caller."""
        self.closed = True

    def first(self) -> int:
        version = self.migrations.first()
        if version is None:
            raise _not_exist()
        return version

    def prev(self, version: int) -> int:
        found = self.migrations.prev(version)
        if found is None:
            raise _not_exist()
        return found

    def next(self, version: int) -> int:
        found = self.migrations.next(version)
        if found is None:
            raise _not_exist()
        return found

    def read_up(self, version: int) -> tuple[BinaryIO, str]:
        m = self.migrations.up(version)
        if m is None:
            raise _not_exist()
        return self._open(m)

    def read_down(self, version: int) -> tuple[BinaryIO, str]:
        m = self.migrations.down(version)
        if m is None:
            raise _not_exist()
        return self._open(m)

    def _open(self, m: Migration) -> tuple[BinaryIO, str]:
        key = posixpath.normpath(posixpath.join(self.config.prefix, m.raw))
        obj = self.s3client.get_object(Bucket=self.config.bucket, Key=key)
        return obj["Body"], m.identifier


def with_instance(s3client: Any, config: Config) -> S3Driver:
    """Return a driver listing the migrations of ``config`` through ``s3client``."""
    driver = S3Driver(s3client, config)
    driver._load_migrations()
    return driver


register("s3", S3Driver())