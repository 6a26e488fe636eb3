"""Tests for JSONL helpers."""

from pathlib import Path

from topicflow.io_utils import read_jsonl, write_jsonl


def test_write_and_read_jsonl(tmp_path: Path) -> None:
    target = tmp_path / "artifacts" / "topics.jsonl"
    payload = [{"topic_id": 1, "title": "simple test"}, {"topic_id": 2, "title": "другой"}]

    count = write_jsonl(target, payload)

    assert count == 2
    assert read_jsonl(target) == payload


def test_read_jsonl_ignores_blank_lines(tmp_path: Path) -> None:
    target = tmp_path / "data.jsonl"
    target.write_text('{"topic_id": 1}\n\n{"topic_id": 2}\n')

    assert read_jsonl(target) == [{"topic_id": 1}, {"topic_id": 2}]
