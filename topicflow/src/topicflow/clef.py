"""Topic reader for CLEF SGML topic files.

CLEF topics use start and end tags, and the field tags carry the language code
of the file (``<EN-title>``, ``<RU-desc>`` and so on). The code is discovered
once from the head of the file and reused for every tag lookup. Fields sit on
a single line except the narrative, which may run until ``</top>``.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TextIO

from loguru import logger

from .errors import FormatError, IdentifierError
from .line_reader import LineReader
from .schemas.topics import TopicCollection, TopicRecord

PEEK_WINDOW = 1000
DEFAULT_ENCODING = "utf-8"

TOPIC_START = "<top"
TOPIC_END = "</top>"
NUM_OPEN = "<num>"
NUM_CLOSE = "</num>"

LANGUAGE_PATTERN = re.compile(r"<([A-Z]{2})-title>")
NON_DIGITS = re.compile(r"[^0-9]")


def _after_tag(line: str) -> str:
    return line[line.find(">") + 1 :]


def _clean(text: str, closing_tag: str) -> str:
    return text.replace(closing_tag, "").strip()


def detect_language(reader: LineReader, window: int = PEEK_WINDOW) -> str:
    """Return the two-letter language code from the first ``window`` characters."""
    match = LANGUAGE_PATTERN.search(reader.peek(window))
    if match is None:
        raise FormatError("Cannot find field like <EN-title>")
    return match.group(1)


class _Truncated(Exception):
    """Stream ended inside a topic."""


class _TopicScanner:
    """Per-parse state: the reader and the tag names for one language."""

    def __init__(self, reader: LineReader, lang: str) -> None:
        self.reader = reader
        self.lang = lang
        self.title_tag = f"<{lang}-title>"
        self.desc_tag = f"<{lang}-desc>"
        self.narr_tag = f"<{lang}-narr>"
        self.field_pattern = re.compile(rf"<{lang}-([\w-]+)>")

    def _closing(self, name: str) -> str:
        return f"</{self.lang}-{name}>"

    def _expect(self, prefix: str) -> str:
        line = self.reader.scan(prefix)
        if line is None:
            raise _Truncated(prefix)
        return line

    def read_identifier(self) -> int:
        line = self._expect(NUM_OPEN)
        digits = NON_DIGITS.sub("", _clean(_after_tag(line), NUM_CLOSE))
        if not digits:
            raise IdentifierError(line)
        return int(digits)

    def read_title(self) -> str:
        return _clean(_after_tag(self._expect(self.title_tag)), self._closing("title"))

    def read_auxiliary(self) -> dict[str, str]:
        fields: dict[str, str] = {}
        while True:
            line = self.reader.readline()
            if line is None:
                raise _Truncated(self.desc_tag)
            if line.startswith(self.desc_tag):
                self.reader.unread(line)
                return fields
            match = self.field_pattern.search(line)
            if match is None:
                continue
            name = match.group(1)
            value = line.replace(f"<{self.lang}-{name}>", "", 1)
            fields[name] = _clean(value, self._closing(name))

    def read_description(self) -> str:
        return _clean(_after_tag(self._expect(self.desc_tag)), self._closing("desc"))

    def read_narrative(self) -> str:
        closing = self._closing("narr")
        line = self._expect(self.narr_tag)
        opening_rest = line[line.find(self.narr_tag) + len(self.narr_tag) :]
        if closing in opening_rest:
            return opening_rest[: opening_rest.find(closing)].strip()

        body = self.reader.collect_until(TOPIC_END)
        if body is None:
            raise _Truncated(TOPIC_END)
        pieces = (piece.strip() for piece in [opening_rest, *body])
        return _clean(" ".join(piece for piece in pieces if piece), closing)

    def read_topic(self) -> TopicRecord:
        topic_id = self.read_identifier()
        title = self.read_title()
        fields = self.read_auxiliary()
        fields["title"] = title
        fields["description"] = self.read_description()
        fields["narrative"] = self.read_narrative()
        return TopicRecord(topic_id=topic_id, fields=fields)


def parse(stream: TextIO) -> TopicCollection:
    """Parse every topic in ``stream`` and close it.

    A topic cut short by the end of the stream is dropped and the topics read
    before it are returned. A repeated id replaces the earlier topic.
    """
    topics = TopicCollection()
    with LineReader(stream) as reader:
        lang = detect_language(reader)
        logger.debug("clef:language | lang={}", lang)
        scanner = _TopicScanner(reader, lang)

        while reader.scan(TOPIC_START) is not None:
            try:
                record = scanner.read_topic()
            except _Truncated as exc:
                logger.warning(
                    "clef:truncated | expected={} | topics_kept={}", exc.args[0], len(topics)
                )
                break
            if topics._put(record):
                logger.warning("clef:duplicate_id | topic_id={}", record.topic_id)

    logger.debug("clef:parsed | topics={}", len(topics))
    return topics


def read_topics(path: str | Path, encoding: str = DEFAULT_ENCODING) -> TopicCollection:
    """Open ``path`` and parse its topics."""
    logger.info("clef:read | path={}", path)
    return parse(Path(path).open("r", encoding=encoding))
