"""Tests for the vector index and run output."""

from pathlib import Path

import numpy as np
import pytest

from topicflow.search import VectorIndex, format_run_line, run_search


def _index() -> VectorIndex:
    return VectorIndex(
        {
            "d1": np.asarray([1.0, 0.0], dtype=np.float32),
            "d2": np.asarray([0.0, 1.0], dtype=np.float32),
            "d3": np.asarray([1.0, 1.0], dtype=np.float32),
        }
    )


def test_search_ranks_by_cosine_similarity() -> None:
    results = _index().search(np.asarray([2.0, 0.1]), depth=3)

    assert [doc_id for doc_id, _ in results] == ["d1", "d3", "d2"]
    assert results[0][1] == pytest.approx(0.99875, rel=1e-3)


def test_search_respects_depth_and_ties() -> None:
    results = _index().search(np.asarray([1.0, 1.0]), depth=2)

    assert results[0][0] == "d3"
    assert results[1][0] == "d1"
    assert len(results) == 2


def test_empty_index_returns_nothing() -> None:
    index = VectorIndex({})

    assert len(index) == 0
    assert index.search(np.asarray([1.0, 0.0])) == []


def test_dimension_mismatch_raises() -> None:
    with pytest.raises(ValueError):
        _index().search(np.asarray([1.0, 0.0, 0.0]))


def test_format_run_line() -> None:
    assert format_run_line(7, "doc-1", 1, 0.5, "tag") == "7 Q0 doc-1 1 0.500000 tag"


def test_run_search_writes_ranked_lines(tmp_path: Path) -> None:
    output_path = tmp_path / "runs" / "run.txt"
    queries = [("q1", np.asarray([1.0, 0.0])), ("q2", np.asarray([0.0, 1.0]))]

    written = run_search(queries, _index(), output_path, depth=2, tag="test")

    lines = output_path.read_text().splitlines()
    assert written == 4
    assert lines[0].startswith("q1 Q0 d1 1 1.000000 test")
    assert [line.split()[3] for line in lines] == ["1", "2", "1", "2"]
    assert lines[2].split()[:3] == ["q2", "Q0", "d2"]


def test_vector_index_from_file(tmp_path: Path) -> None:
    path = tmp_path / "docs.txt"
    path.write_text("a 1 0\nb 0 1\n")

    index = VectorIndex.from_file(path)

    assert index.dimension == 2
    assert index.search(np.asarray([0.0, 3.0]), depth=1)[0][0] == "b"
