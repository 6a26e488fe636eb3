"""Line reader with bounded look-ahead and one-line pushback."""

from __future__ import annotations

import re
from typing import TextIO

from .errors import StreamError

LINE_END = re.compile(r"\r\n|\r|\n")


class LineReader:
    """Read lines from a text stream, allowing a prefix peek and a single unread.

    Characters returned by :meth:`peek` stay buffered and are handed out again
    by :meth:`readline`, so peeking never consumes input. Line terminators are
    removed from every returned line.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._buffer = ""
        self._pushback: str | None = None

    def __enter__(self) -> "LineReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _read(self, method: str, *args: int) -> str:
        try:
            return getattr(self._stream, method)(*args)
        except (OSError, UnicodeDecodeError) as exc:
            raise StreamError(f"Failed reading topic stream: {exc}") from exc

    def peek(self, size: int) -> str:
        """Return up to ``size`` characters ahead without consuming them."""
        if self._pushback is not None:
            raise RuntimeError("Cannot peek while a line is pushed back.")
        while len(self._buffer) < size:
            chunk = self._read("read", size - len(self._buffer))
            if not chunk:
                break
            self._buffer += chunk
        return self._buffer[:size]

    def readline(self) -> str | None:
        """Return the next line without its terminator, or ``None`` at end of stream."""
        if self._pushback is not None:
            line, self._pushback = self._pushback, None
            return line

        match = LINE_END.search(self._buffer)
        if match is not None and match.end() < len(self._buffer):
            raw, self._buffer = self._buffer[: match.end()], self._buffer[match.end() :]
        elif match is not None and match.group() != "\r":
            raw, self._buffer = self._buffer, ""
        elif match is not None:
            # a trailing "\r" may be the first half of "\r\n"
            following = self._read("read", 1)
            if following == "\n":
                raw, self._buffer = self._buffer + following, ""
            else:
                raw, self._buffer = self._buffer, following
        else:
            raw, self._buffer = self._buffer + self._read("readline"), ""

        if not raw:
            return None
        if raw.endswith("\n"):
            raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
        return raw

    def unread(self, line: str) -> None:
        """Push ``line`` back so the next :meth:`readline` returns it."""
        if self._pushback is not None:
            raise RuntimeError("Only one line of pushback is supported.")
        self._pushback = line

    def scan(self, prefix: str) -> str | None:
        """Discard lines until one starts with ``prefix`` and return that line."""
        while True:
            line = self.readline()
            if line is None:
                return None
            if line.startswith(prefix):
                return line

    def collect_until(self, prefix: str) -> list[str] | None:
        """Gather lines up to (excluding) one starting with ``prefix``.

        Returns ``None`` when the stream ends before the marker is seen.
        """
        lines: list[str] = []
        while True:
            line = self.readline()
            if line is None:
                return None
            if line.startswith(prefix):
                return lines
            lines.append(line)

    def close(self) -> None:
        self._buffer = ""
        self._pushback = None
        self._stream.close()
