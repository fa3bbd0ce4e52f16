"""Word frequency over publication years."""

from __future__ import annotations

import logging
import re
from collections import Counter, defaultdict
from typing import AbstractSet, Iterable

from kwic import normalize_text
from models import Article, WordCount

LOGGER = logging.getLogger(__name__)

# Words of Unicode letters; inner apostrophes and hyphens are kept ("well-being").
_WORD_RE = re.compile(r"[^\W\d_]+(?:['\-][^\W\d_]+)*")


def tokenize(title: str | None, abstract: str | None = None) -> list[str]:
    """Lower-case word tokens of title and abstract (digits and punctuation dropped)."""
    return _WORD_RE.findall(normalize_text(title, abstract))


def word_frequency_by_year(
    articles: Iterable[Article],
    stop_words: AbstractSet[str],
    top_n: int | None = None,
) -> list[WordCount]:
    """Count non-stop-word tokens per year.

    Rows are ordered by year, then by descending count, then alphabetically.
    ``share`` is the word's count over all counted tokens of that year.
    With ``top_n``, only the N most frequent words of each year are kept.
    """
    counts: dict[int, Counter[str]] = defaultdict(Counter)
    for article in articles:
        if article.year is None:
            continue
        tokens = tokenize(article.title, article.abstract)
        counts[article.year].update(tok for tok in tokens if tok not in stop_words)

    rows: list[WordCount] = []
    for year in sorted(counts):
        counter = counts[year]
        total_words = sum(counter.values())
        ranked = sorted(counter.items(), key=lambda item: (-item[1], item[0]))
        if top_n is not None:
            ranked = ranked[:top_n]
        rows.extend(
            WordCount(
                year=year,
                word=word,
                count=count,
                total_words=total_words,
                share=count / total_words,
            )
            for word, count in ranked
        )

    LOGGER.info("Word frequency: years=%s rows=%s top_n=%s", len(counts), len(rows), top_n)
    return rows
