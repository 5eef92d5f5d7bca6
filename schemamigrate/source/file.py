"""A source driver that reads migrations from a local directory."""

from __future__ import annotations

import os
from urllib.parse import unquote, urlsplit

from schemamigrate.source.driver import Driver, register
from schemamigrate.source.iofs import DirFS, PartialDriver


class File(PartialDriver, Driver):
    """Migrations in a directory given by a ``file://`` URL."""

    def __init__(self, url: str = "", path: str = "") -> None:
        super().__init__()
        self.url = url
        self.path = path

    def open(self, url: str) -> "File":
        path = parse_url(url)
        driver = File(url, path)
        driver.init(DirFS(path), ".")
        return driver


def parse_url(url: str) -> str:
    """Return the absolute directory named by ``url``.

    Host and path are joined so that ``file://./dir`` and ``file://dir`` are
    relative; an empty location means the current directory.
    """
    parts = urlsplit(url)
    host = parts.netloc.rpartition("@")[2]
    path = unquote(host + parts.path)
    if not path:
        return os.getcwd()
    if not path.startswith("/"):
        return os.path.abspath(path)
    return path


register("file", File())