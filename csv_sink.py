"""CSV file sink for the analysis tables."""

from __future__ import annotations

import csv
import logging
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable

from models import Article, FrequencyRecord, KwicMatch, SentimentRecord, WordCount

OUTPUT_DIR = os.getenv("OUTPUT_DIR", "analysis_outputs")

ARTICLES_FILENAME = "articles.csv"
KWIC_FILENAME = "kwic.csv"
FREQUENCY_FILENAME = "pejorative_frequency.csv"
WORD_FREQ_FILENAME = "word_frequency.csv"
SENTIMENT_FILENAME = "sentiment.csv"

LOGGER = logging.getLogger(__name__)

ARTICLE_COLUMNS = ["doi", "year", "title", "abstract"]

KWIC_COLUMNS = [
    "year",
    "doi",
    "keyword",
    "left_context",
    "right_context",
    "sentence",
]

FREQUENCY_COLUMNS = ["year", "pejorative_hits", "total_docs", "freq_per_doc"]

WORD_FREQ_COLUMNS = ["year", "word", "count", "total_words", "share"]

SENTIMENT_COLUMNS = [
    "year",
    "total_docs",
    "positive_words",
    "negative_words",
    "sentiment_sum",
    "mean_sentiment",
]


def write_rows(path: str | Path, columns: list[str], rows: Iterable[dict[str, Any]]) -> int:
    """Write a header plus ``rows`` to ``path``, replacing any existing file.

    Returns the number of data rows written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow({key: _as_cell(value) for key, value in row.items()})
            count += 1

    LOGGER.info("Wrote %s rows to %s", count, path)
    return count


def write_articles(path: str | Path, articles: Iterable[Article]) -> int:
    return write_rows(path, ARTICLE_COLUMNS, (asdict(a) for a in articles))


def write_kwic(path: str | Path, matches: Iterable[KwicMatch]) -> int:
    return write_rows(path, KWIC_COLUMNS, (asdict(m) for m in matches))


def write_frequency(path: str | Path, records: Iterable[FrequencyRecord]) -> int:
    return write_rows(path, FREQUENCY_COLUMNS, (asdict(r) for r in records))


def write_word_freq(path: str | Path, records: Iterable[WordCount]) -> int:
    return write_rows(path, WORD_FREQ_COLUMNS, (asdict(r) for r in records))


def write_sentiment(path: str | Path, records: Iterable[SentimentRecord]) -> int:
    return write_rows(path, SENTIMENT_COLUMNS, (asdict(r) for r in records))


def load_articles(path: str | Path) -> list[Article]:
    """Read an articles CSV written by write_articles.

    A blank or non-numeric year becomes None; the article is still kept.
    """
    path = Path(path)
    articles: list[Article] = []
    with path.open(newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            articles.append(
                Article(
                    doi=(row.get("doi") or "").strip(),
                    title=row.get("title") or "",
                    abstract=row.get("abstract") or "",
                    year=_parse_year(row.get("year")),
                )
            )

    LOGGER.info("Loaded %s articles from %s", len(articles), path)
    return articles


def _parse_year(raw: str | None) -> int | None:
    value = (raw or "").strip()
    try:
        return int(value)
    except ValueError:
        return None


def _as_cell(value: Any) -> Any:
    """None becomes an empty cell; floats are rounded to 6 places."""
    if value is None:
        return ""
    if isinstance(value, float):
        return round(value, 6)
    return value
