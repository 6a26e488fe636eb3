"""Schemas for CLEF topic records."""

from __future__ import annotations

from bisect import insort
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TopicRecord(BaseModel):
    """One topic: a numeric identifier plus its named text fields."""

    model_config = ConfigDict(frozen=True)

    topic_id: int = Field(..., description="Numeric topic identifier taken from the <num> line.")
    fields: dict[str, str] = Field(
        default_factory=dict,
        description="Field name to text; always holds title, description and narrative.",
    )

    @property
    def title(self) -> str:
        return self.fields.get("title", "")

    @property
    def description(self) -> str:
        return self.fields.get("description", "")

    @property
    def narrative(self) -> str:
        return self.fields.get("narrative", "")

    def __getitem__(self, name: str) -> str:
        return self.fields[name]

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.fields.get(name, default)


class TopicCollection(Mapping[int, TopicRecord]):
    """Topics keyed by id, always iterated in ascending id order."""

    def __init__(self, records: Mapping[int, TopicRecord] | None = None) -> None:
        self._records: dict[int, TopicRecord] = {}
        self._order: list[int] = []
        for record in (records or {}).values():
            self._put(record)

    def _put(self, record: TopicRecord) -> bool:
        """Store ``record``; return ``True`` when it replaced an existing id."""
        replaced = record.topic_id in self._records
        if not replaced:
            insort(self._order, record.topic_id)
        self._records[record.topic_id] = record
        return replaced

    def __getitem__(self, topic_id: int) -> TopicRecord:
        return self._records[topic_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"TopicCollection(ids={self._order!r})"

    def first_key(self) -> int:
        if not self._order:
            raise KeyError("Topic collection is empty.")
        return self._order[0]

    def last_key(self) -> int:
        if not self._order:
            raise KeyError("Topic collection is empty.")
        return self._order[-1]

    def to_rows(self) -> Iterator[dict[str, Any]]:
        """Yield one flat JSON-ready row per topic in id order."""
        for topic_id in self._order:
            yield {"topic_id": topic_id, **self._records[topic_id].fields}
