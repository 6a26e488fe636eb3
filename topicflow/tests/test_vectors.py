"""Tests for vector side-file loading."""

from pathlib import Path

import numpy as np

from topicflow.vectors import normalize, read_topic_vectors


def test_read_topic_vectors_normalises_and_skips_short_lines(tmp_path: Path) -> None:
    path = tmp_path / "topics.txt"
    path.write_text("q1 3 4\nq2 1\n\nq3 0 0 2\n")

    vectors = read_topic_vectors(path)

    assert list(vectors) == ["q1", "q3"]
    np.testing.assert_allclose(vectors["q1"], [0.6, 0.8], rtol=1e-6)
    np.testing.assert_allclose(vectors["q3"], [0.0, 0.0, 1.0], rtol=1e-6)
    assert vectors["q1"].dtype == np.float32


def test_normalize_leaves_zero_vector() -> None:
    vector = np.zeros(3, dtype=np.float32)

    np.testing.assert_array_equal(normalize(vector), vector)
