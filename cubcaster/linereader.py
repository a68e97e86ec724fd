"""Read a stream one line at a time through a fixed-size read buffer.

Lines keep their trailing newline; the last line of a stream may lack one.
Both text and binary streams are supported: the lines have the type the
stream's ``read`` returns.
"""

from __future__ import annotations

from typing import IO, AnyStr, Dict, Generic, Iterator, Optional

__all__ = ["LineReader", "ReaderPool", "read_lines"]

DEFAULT_BUFFER_SIZE = 1


def _check_size(buffer_size: int) -> None:
    if isinstance(buffer_size, bool) or not isinstance(buffer_size, int):
        raise TypeError("buffer size must be an int")
    if buffer_size <= 0:
        raise ValueError("buffer size must be positive")


class LineReader(Generic[AnyStr]):
    """Hands out the lines of one stream, keeping unread data between calls."""

    def __init__(self, stream: IO[AnyStr], buffer_size: int = DEFAULT_BUFFER_SIZE):
        _check_size(buffer_size)
        self._stream = stream
        self._buffer_size = buffer_size
        self._pending: Optional[AnyStr] = None
        self._sep: Optional[AnyStr] = None

    def _fill(self) -> None:
        while True:
            if self._pending and self._sep in self._pending:
                return
            try:
                chunk = self._stream.read(self._buffer_size)
            except OSError:
                self._pending = None
                raise
            if not chunk:
                return
            if self._sep is None:
                self._sep = b"\n" if isinstance(chunk, (bytes, bytearray)) else "\n"
            self._pending = chunk if self._pending is None else self._pending + chunk
            if self._sep in chunk:
                return

    def read_line(self) -> Optional[AnyStr]:
        """Return the next line, or None once the stream is exhausted."""
        self._fill()
        pending = self._pending
        if not pending:
            self._pending = None
            return None
        cut = pending.find(self._sep)
        if cut < 0:
            self._pending = None
            return pending
        self._pending = pending[cut + 1 :]
        return pending[: cut + 1]

    def __iter__(self) -> Iterator[AnyStr]:
        while True:
            line = self.read_line()
            if line is None:
                return
            yield line


class ReaderPool:
    """Reads lines from several streams, keeping a separate buffer for each."""

    def __init__(self, buffer_size: int = DEFAULT_BUFFER_SIZE):
        _check_size(buffer_size)
        self._buffer_size = buffer_size
        self._readers: Dict[int, LineReader] = {}

    def read_line(self, stream: IO[AnyStr]) -> Optional[AnyStr]:
        """Return the next line of ``stream``, or None once it is exhausted."""
        key = id(stream)
        reader = self._readers.get(key)
        if reader is None or reader._stream is not stream:
            reader = LineReader(stream, self._buffer_size)
            self._readers[key] = reader
        try:
            line = reader.read_line()
        except OSError:
            del self._readers[key]
            raise
        if line is None:
            del self._readers[key]
        return line


def read_lines(
    stream: IO[AnyStr], buffer_size: int = DEFAULT_BUFFER_SIZE
) -> Iterator[AnyStr]:
    """Yield every line of ``stream`` in order."""
    return iter(LineReader(stream, buffer_size))