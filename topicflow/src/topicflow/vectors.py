"""Read topic and document vectors from whitespace-separated side files."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from loguru import logger


def normalize(vector: np.ndarray) -> np.ndarray:
    """Scale ``vector`` to unit L2 norm; a zero vector is returned unchanged."""
    norm = float(np.linalg.norm(vector))
    if norm == 0.0:
        return vector
    return vector / norm


def read_topic_vectors(path: str | Path) -> dict[str, np.ndarray]:
    """Load ``key v1 v2 ...`` lines into unit-length float32 vectors.

    Lines with fewer than two values after the key are skipped. Keys keep file
    order; a repeated key keeps its first position and its last vector.
    """
    vectors: dict[str, np.ndarray] = {}
    skipped = 0
    with Path(path).open("r", encoding="utf-8") as handle:
        for line in handle:
            parts = line.split()
            if len(parts) <= 2:
                skipped += 1
                continue
            vector = np.asarray([float(value) for value in parts[1:]], dtype=np.float32)
            vectors[parts[0]] = normalize(vector)

    logger.debug("vectors:read | path={} | vectors={} | skipped={}", path, len(vectors), skipped)
    return vectors
