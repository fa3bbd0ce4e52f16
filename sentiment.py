"""Lexicon-based sentiment scoring of abstracts over publication years."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Mapping

from models import Article, SentimentRecord
from word_freq import tokenize

LOGGER = logging.getLogger(__name__)


def score_text(
    text: str, lexicon: Mapping[str, int], abstract: str | None = None
) -> tuple[int, int, int]:
    """Return ``(score_sum, positive_words, negative_words)`` for ``text``.

    ``abstract``, when given, is scored together with ``text`` as its title.

    Tokens missing from the lexicon, or scored 0, do not count either way.
    """
    total = positive = negative = 0
    for token in tokenize(text, abstract):
        score = lexicon.get(token, 0)
        total += score
        if score > 0:
            positive += 1
        elif score < 0:
            negative += 1
    return total, positive, negative


def sentiment_by_year(
    articles: Iterable[Article], lexicon: Mapping[str, int]
) -> list[SentimentRecord]:
    """Aggregate article sentiment per year; yearless articles are skipped."""
    # year -> [docs, positive, negative, score_sum]
    totals: dict[int, list[int]] = defaultdict(lambda: [0, 0, 0, 0])
    for article in articles:
        if article.year is None:
            continue
        score, positive, negative = score_text(
            article.title, lexicon, abstract=article.abstract
        )
        bucket = totals[article.year]
        bucket[0] += 1
        bucket[1] += positive
        bucket[2] += negative
        bucket[3] += score

    records = [
        SentimentRecord(
            year=year,
            total_docs=docs,
            positive_words=positive,
            negative_words=negative,
            sentiment_sum=score_sum,
            mean_sentiment=score_sum / docs,
        )
        for year, (docs, positive, negative, score_sum) in sorted(totals.items())
    ]
    LOGGER.info("Sentiment: years=%s lexicon_size=%s", len(records), len(lexicon))
    return records
