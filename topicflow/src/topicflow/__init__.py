"""TopicFlow: CLEF topic extraction and vector retrieval."""

from .clef import detect_language, parse, read_topics
from .errors import FormatError, IdentifierError, StreamError, TopicParseError
from .line_reader import LineReader
from .schemas.topics import TopicCollection, TopicRecord

__all__ = [
    "FormatError",
    "IdentifierError",
    "LineReader",
    "StreamError",
    "TopicCollection",
    "TopicParseError",
    "TopicRecord",
    "detect_language",
    "parse",
    "read_topics",
]
