"""A migration as it is scheduled and run against a database."""

from __future__ import annotations

import io
import queue
import threading
from datetime import datetime
from typing import BinaryIO

#: In-memory buffer size in bytes for every pre-read migration.
DEFAULT_BUFFER_SIZE = 100000

_EOF = object()


class _Pipe:
    """A synchronous in-memory pipe between one writer and one reader."""

    def __init__(self) -> None:
        self._chunks: queue.Queue = queue.Queue(maxsize=1)
        self._closed = threading.Event()

    def _put(self, item: object) -> bool:
        while not self._closed.is_set():
            try:
                self._chunks.put(item, timeout=0.05)
                return True
            except queue.Full:
                continue
        return False

    def write(self, data: bytes) -> None:
        if not data:
            return
        if self._closed.is_set() or not self._put(bytes(data)):
            raise BrokenPipeError("read side of pipe closed")

    def finish(self, error: BaseException | None = None) -> None:
        self._put(error if error is not None else _EOF)

    def close_reader(self) -> None:
        self._closed.set()

    def get(self) -> object:
        return self._chunks.get()


class _PipeReader(io.RawIOBase):
    """The reading end of a :class:`_Pipe`."""

    def __init__(self, pipe: _Pipe) -> None:
        super().__init__()
        self._pipe = pipe
        self._pending = memoryview(b"")
        self._eof = False

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        while not self._pending:
            if self._eof:
                return 0
            item = self._pipe.get()
            if item is _EOF:
                self._eof = True
                return 0
            if isinstance(item, BaseException):
                self._eof = True
                raise item
            self._pending = memoryview(item)
        n = min(len(buffer), len(self._pending))
        buffer[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n

    def close(self) -> None:
        self._pipe.close_reader()
        super().close()


class Migration:
    """A single migration step from ``version`` to ``target_version``.

    A migration without a body is a nil migration: the version is applied
    with an empty body. A ``target_version`` of -1 stands for the nil version.
    """

    def __init__(
        self,
        body: BinaryIO | None,
        identifier: str,
        version: int,
        target_version: int,
    ) -> None:
        now = datetime.now()
        self.identifier = identifier
        self.version = version
        self.target_version = target_version
        self.body = body
        self.buffered_body: io.RawIOBase | None = None
        self.buffer_size = 0
        self.scheduled = now
        self.started_buffering: datetime | None = None
        self.finished_buffering: datetime | None = None
        self.finished_reading: datetime | None = None
        self.bytes_read = 0
        self._pipe: _Pipe | None = None

        if body is None:
            if not identifier:
                self.identifier = "<empty>"
            self.started_buffering = now
            self.finished_buffering = now
            self.finished_reading = now
            return

        self._pipe = _Pipe()
        self.buffer_size = DEFAULT_BUFFER_SIZE
        self.buffered_body = _PipeReader(self._pipe)

    def __str__(self) -> str:
        return f"{self.identifier} [{self.version}=>{self.target_version}]"

    def log_string(self) -> str:
        """Describe this migration for humans."""
        direction = "d" if self.target_version < self.version else "u"
        return f"{self.version}/{direction} {self.identifier}"

    def buffer(self) -> None:
        """Stream the body into ``buffered_body``.

        Blocks until the reader has taken the data; run it in its own thread.
        """
        if self.body is None or self._pipe is None:
            return

        self.started_buffering = datetime.now()
        total = 0
        try:
            chunk = self.body.read(self.buffer_size)
            self.finished_buffering = datetime.now()
            while chunk:
                self._pipe.write(chunk)
                total += len(chunk)
                chunk = self.body.read(self.buffer_size)
        except BaseException as exc:
            self._pipe.finish(exc)
            raise

        self.finished_reading = datetime.now()
        self.bytes_read = total
        self._pipe.finish()
        self.body.close()