"""Topical pre-filter and DOI deduplication (no network calls)."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable

from models import Article


@lru_cache(maxsize=1024)
def term_pattern(term: str) -> re.Pattern[str]:
    """Return a case-insensitive whole-word pattern for ``term``.

    Terms are escaped, so metacharacters such as ``+`` or ``(`` match
    literally. Lookarounds are used instead of ``\\b`` so that terms which
    start or end with punctuation are still delimited correctly.
    """
    return re.compile(rf"(?<!\w){re.escape(term.strip())}(?!\w)", re.IGNORECASE)


def contains_term(text: str, term: str) -> bool:
    """Return True if ``term`` occurs in ``text`` as a whole word."""
    if not term.strip():
        return False
    return term_pattern(term).search(text or "") is not None


def matches_search_terms(article: Article, terms: Iterable[str]) -> bool:
    """Return True if the article's title or abstract mentions any search term.

    An empty term list keeps every article.
    """
    terms = [t for t in terms if t and t.strip()]
    if not terms:
        return True

    text = f"{article.title} {article.abstract or ''}"
    return any(contains_term(text, term) for term in terms)


def dedupe_by_doi(articles: Iterable[Article]) -> list[Article]:
    """Drop repeated DOIs (case-insensitive), keeping the first occurrence.

    Articles without a DOI cannot be compared and are always kept.
    """
    seen: set[str] = set()
    unique: list[Article] = []
    for article in articles:
        key = article.doi.strip().lower()
        if key and key in seen:
            continue
        if key:
            seen.add(key)
        unique.append(article)
    return unique
