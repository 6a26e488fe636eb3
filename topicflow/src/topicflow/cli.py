"""Typer CLI entry points for TopicFlow."""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from loguru import logger

from .clef import DEFAULT_ENCODING, read_topics
from .errors import TopicParseError
from .io_utils import write_jsonl
from .search import DEFAULT_DEPTH, DEFAULT_TAG, VectorIndex, run_search
from .vectors import read_topic_vectors

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = PROJECT_ROOT / "data"
TOPICS_DIR = DATA_DIR / "topics"
VECTORS_DIR = DATA_DIR / "vectors"
RUNS_DIR = DATA_DIR / "runs"

DEFAULT_TOPICS = TOPICS_DIR / "topics.clef"
DEFAULT_TOPICS_JSONL = TOPICS_DIR / "topics.jsonl"
DEFAULT_INDEX_VECTORS = VECTORS_DIR / "documents.txt"
DEFAULT_TOPIC_VECTORS = VECTORS_DIR / "topics.txt"
DEFAULT_RUN = RUNS_DIR / "run.txt"

DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVEL_CHOICES = [
    "TRACE",
    "DEBUG",
    "INFO",
    "SUCCESS",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

app = typer.Typer(help="TopicFlow: CLEF topic extraction and retrieval CLI.")


def configure_logger(level: str = DEFAULT_LOG_LEVEL) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        enqueue=False,
        colorize=True,
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level:<8}</level> | {message}",
    )


def _validate_log_level(value: str) -> str:
    if value.upper() not in LOG_LEVEL_CHOICES:
        raise typer.BadParameter(f"Choose one of: {', '.join(LOG_LEVEL_CHOICES)}.")
    return value.upper()


@app.callback()
def main(
    log_level: str = typer.Option(
        DEFAULT_LOG_LEVEL,
        "--log-level",
        callback=_validate_log_level,
        help="Log verbosity (TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL).",
    ),
) -> None:
    """TopicFlow: CLEF topic extraction and retrieval CLI."""
    configure_logger(log_level)
    logger.debug("cli:start | log_level={}", log_level)


@app.command("topics")
def topics_cli(
    input_path: Path = typer.Option(
        DEFAULT_TOPICS,
        "--input",
        "-i",
        exists=True,
        readable=True,
        dir_okay=False,
        resolve_path=True,
        help="CLEF SGML topic file.",
    ),
    output_path: Path = typer.Option(
        DEFAULT_TOPICS_JSONL,
        "--output",
        "-o",
        resolve_path=True,
        help="Destination JSONL file, one row per topic.",
    ),
    encoding: str = typer.Option(DEFAULT_ENCODING, "--encoding", help="Text encoding of the topic file."),
) -> None:
    """Extract topics from a CLEF topic file."""
    try:
        topics = read_topics(input_path, encoding=encoding)
        count = write_jsonl(output_path, topics.to_rows())
    except (TopicParseError, OSError) as exc:
        logger.error("topics:failed | path={} | error={}", input_path, exc)
        typer.echo(f"Failed to extract topics from {input_path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Wrote {count} topics to {output_path}")


@app.command("search")
def search_cli(
    index_path: Path = typer.Option(
        DEFAULT_INDEX_VECTORS,
        "--index",
        "-x",
        exists=True,
        readable=True,
        dir_okay=False,
        resolve_path=True,
        help="Document vectors, one 'doc_id v1 v2 ...' line per document.",
    ),
    topics_path: Path = typer.Option(
        DEFAULT_TOPIC_VECTORS,
        "--topics",
        "-t",
        exists=True,
        readable=True,
        dir_okay=False,
        resolve_path=True,
        help="Topic vectors, one 'topic_id v1 v2 ...' line per topic.",
    ),
    output_path: Path = typer.Option(
        DEFAULT_RUN,
        "--output",
        "-o",
        resolve_path=True,
        help="Destination TREC run file.",
    ),
    depth: int = typer.Option(DEFAULT_DEPTH, "--depth", "-d", min=1, help="Retrieval depth per topic."),
    tag: str = typer.Option(DEFAULT_TAG, "--tag", help="Run tag written in the last column."),
) -> None:
    """Rank documents for every topic vector and write a TREC run."""
    try:
        logger.info("search:index | path={}", index_path)
        index = VectorIndex.from_file(index_path)
        logger.info("search:topics | path={}", topics_path)
        queries = read_topic_vectors(topics_path)
        written = run_search(queries.items(), index, output_path, depth=depth, tag=tag)
    except (ValueError, OSError) as exc:
        logger.error("search:failed | error={}", exc)
        typer.echo(f"Search failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Wrote {written} run lines for {len(queries)} topics to {output_path}")


def run() -> None:
    """Entrypoint when invoking via `python -m`."""
    app()


if __name__ == "__main__":
    run()
