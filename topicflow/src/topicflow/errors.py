"""Exceptions raised while reading CLEF topic files."""

from __future__ import annotations


class TopicParseError(ValueError):
    """Base class for every failure raised by the topic parser."""


class FormatError(TopicParseError):
    """Raised when no language-coded title tag appears in the leading window."""


class IdentifierError(TopicParseError):
    """Raised when a ``<num>`` line carries no digits."""

    def __init__(self, line: str) -> None:
        super().__init__(f"Invalid topic identifier in line: {line!r}")
        self.line = line


class StreamError(TopicParseError):
    """Raised when the underlying stream fails while being read."""
