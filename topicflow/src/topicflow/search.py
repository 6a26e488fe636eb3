"""Nearest-neighbour search over vectors and TREC run output."""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol

import numpy as np
from loguru import logger

from .vectors import normalize, read_topic_vectors

DEFAULT_DEPTH = 10
DEFAULT_TAG = "TopicFlow-ANN"


class IndexQueryService(Protocol):
    """Anything that ranks stored documents against a query."""

    def search(self, query: Any, depth: int) -> list[tuple[str, float]]:  # pragma: no cover - structural typing
        """Return up to ``depth`` ``(doc_id, score)`` pairs, best first."""


class VectorIndex:
    """Exhaustive cosine-similarity index over unit-length document vectors."""

    def __init__(self, vectors: Mapping[str, np.ndarray]) -> None:
        self.doc_ids = list(vectors)
        if self.doc_ids:
            self._matrix = np.vstack([normalize(np.asarray(vectors[key], dtype=np.float32)) for key in self.doc_ids])
        else:
            self._matrix = np.zeros((0, 0), dtype=np.float32)

    @classmethod
    def from_file(cls, path: str | Path) -> "VectorIndex":
        return cls(read_topic_vectors(path))

    def __len__(self) -> int:
        return len(self.doc_ids)

    @property
    def dimension(self) -> int:
        return int(self._matrix.shape[1]) if self._matrix.size else 0

    def search(self, query: np.ndarray, depth: int = DEFAULT_DEPTH) -> list[tuple[str, float]]:
        if not self.doc_ids or depth <= 0:
            return []

        vector = normalize(np.asarray(query, dtype=np.float32))
        if vector.shape[0] != self.dimension:
            raise ValueError(
                f"Query has dimension {vector.shape[0]} but the index holds {self.dimension}."
            )

        scores = self._matrix @ vector
        # stable sort keeps document order among equal scores
        order = np.argsort(-scores, kind="stable")[:depth]
        return [(self.doc_ids[idx], float(scores[idx])) for idx in order]


def format_run_line(topic_id: object, doc_id: str, rank: int, score: float, tag: str = DEFAULT_TAG) -> str:
    """Render one TREC run line: ``topic Q0 doc rank score tag``."""
    return f"{topic_id} Q0 {doc_id} {rank} {score:.6f} {tag}"


def run_search(
    queries: Iterable[tuple[object, Any]],
    service: IndexQueryService,
    output_path: Path,
    depth: int = DEFAULT_DEPTH,
    tag: str = DEFAULT_TAG,
) -> int:
    """Search every query and write the ranked results as a TREC run file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    written = 0
    start = time.perf_counter()
    with output_path.open("w", encoding="utf-8", newline="\n") as handle:
        for topic_id, query in queries:
            for rank, (doc_id, score) in enumerate(service.search(query, depth), start=1):
                handle.write(format_run_line(topic_id, doc_id, rank, score, tag))
                handle.write("\n")
                written += 1

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("search:done | lines={} | elapsed_ms={:.0f}", written, elapsed_ms)
    return written
