"""Year-keyed aggregation of documents and pejorative KWIC hits."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable

from models import Article, FrequencyRecord, KwicMatch

LOGGER = logging.getLogger(__name__)


def count_docs_by_year(articles: Iterable[Article]) -> Counter[int]:
    """Count articles per publication year; yearless articles are skipped."""
    return Counter(article.year for article in articles if article.year is not None)


def count_hits_by_year(matches: Iterable[KwicMatch]) -> Counter[int]:
    """Count KWIC matches per year; matches without a year are skipped."""
    return Counter(match.year for match in matches if match.year is not None)


def pejorative_frequency(
    articles: Iterable[Article], matches: Iterable[KwicMatch]
) -> list[FrequencyRecord]:
    """Join per-year hit counts onto per-year document counts.

    Every year with at least one article gets a record, with zero hits when
    nothing matched. A year with hits but no documents raises
    ZeroDivisionError: matches must come from the same article set.
    """
    docs = count_docs_by_year(articles)
    hits = count_hits_by_year(matches)

    records = []
    for year in sorted(set(docs) | set(hits)):
        total_docs = docs.get(year, 0)
        pejorative_hits = hits.get(year, 0)
        records.append(
            FrequencyRecord(
                year=year,
                pejorative_hits=pejorative_hits,
                total_docs=total_docs,
                freq_per_doc=pejorative_hits / total_docs,
            )
        )

    LOGGER.info(
        "Pejorative frequency: years=%s total_docs=%s total_hits=%s",
        len(records),
        sum(docs.values()),
        sum(hits.values()),
    )
    return records
