"""Crossref REST API ingestion helpers."""

from __future__ import annotations

import logging
import os
from typing import Any, Iterable

import requests

from filters import dedupe_by_doi
from models import Article

CROSSREF_WORKS_API_URL = "https://api.crossref.org/works"
REQUEST_TIMEOUT_SECONDS = 30
_DEFAULT_ROWS = 100
_DEFAULT_MAX_RESULTS = 1000
_SELECT_FIELDS = "DOI,title,abstract,issued,published-print,published-online"

# Date fields tried in order when deriving the publication year.
_DATE_FIELDS = ("issued", "published-print", "published-online")

LOGGER = logging.getLogger(__name__)


def fetch_articles(
    queries: Iterable[str],
    from_year: int | None = None,
    until_year: int | None = None,
    max_results: int | None = None,
) -> list[Article]:
    """Fetch journal articles with abstracts for each bibliographic query.

    Each query is paged with Crossref's deep-paging cursor until the results
    run out or ``max_results`` is reached. A failing query is logged and
    skipped; the remaining queries still run. Articles are deduplicated by
    DOI across queries, first occurrence wins.

    Args:
        queries: Free-text bibliographic queries, one request series each.
        from_year: Optional inclusive lower bound on the publication year.
        until_year: Optional inclusive upper bound on the publication year.
        max_results: Per-query cap. Reads CROSSREF_MAX_RESULTS env var if not
            supplied; defaults to 1000.
    """
    if max_results is None:
        max_results = int(os.environ.get("CROSSREF_MAX_RESULTS", _DEFAULT_MAX_RESULTS))

    collected: list[Article] = []
    failed = 0
    for query in queries:
        try:
            articles = _fetch_query(query, from_year, until_year, max_results)
        except (requests.RequestException, ValueError, RuntimeError) as exc:
            failed += 1
            LOGGER.warning("Crossref fetch: query=%r failed, skipping: %s", query, exc)
            continue

        LOGGER.info("Crossref fetch: query=%r returned=%s", query, len(articles))
        collected.extend(articles)

    articles = dedupe_by_doi(collected)
    LOGGER.info(
        "Crossref fetch: raw_count=%s unique=%s failed_queries=%s max_results=%s",
        len(collected),
        len(articles),
        failed,
        max_results,
    )
    return articles


def _fetch_query(
    query: str,
    from_year: int | None,
    until_year: int | None,
    max_results: int,
) -> list[Article]:
    rows = int(os.environ.get("CROSSREF_ROWS", _DEFAULT_ROWS))
    params: dict[str, Any] = {
        "query.bibliographic": query,
        "filter": _build_filter(from_year, until_year),
        "rows": min(rows, max_results) if max_results > 0 else rows,
        "select": _SELECT_FIELDS,
    }

    cursor = "*"
    articles: list[Article] = []
    while len(articles) < max_results:
        response = requests.get(
            CROSSREF_WORKS_API_URL,
            params={**params, "cursor": cursor},
            headers=_request_headers(),
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        payload = response.json()

        page = _parse_works_payload(payload)
        if not page:
            break
        articles.extend(page)

        next_cursor = payload.get("message", {}).get("next-cursor")
        if not next_cursor or next_cursor == cursor:
            break
        cursor = next_cursor

    return articles[:max_results]


def _build_filter(from_year: int | None, until_year: int | None) -> str:
    parts = ["type:journal-article", "has-abstract:true"]
    if from_year is not None:
        parts.append(f"from-pub-date:{from_year}-01-01")
    if until_year is not None:
        parts.append(f"until-pub-date:{until_year}-12-31")
    return ",".join(parts)


def _request_headers() -> dict[str, str]:
    mailto = os.environ.get("CROSSREF_MAILTO", "").strip()
    agent = "kwic-trends/0.1"
    if mailto:
        agent = f"{agent} (mailto:{mailto})"
    return {"User-Agent": agent}


def _parse_works_payload(payload: Any) -> list[Article]:
    """Parse a Crossref /works response into Article records."""
    if not isinstance(payload, dict) or not isinstance(payload.get("message"), dict):
        raise RuntimeError("Unexpected Crossref payload shape: expected a 'message' object")

    items = payload["message"].get("items") or []
    if not isinstance(items, list):
        raise RuntimeError("Unexpected Crossref payload shape: 'items' is not a list")

    parsed: list[Article] = []
    for item in items:
        if not isinstance(item, dict):
            continue

        doi = _as_str(item.get("DOI"))
        if not doi:
            continue

        parsed.append(
            Article(
                doi=doi,
                title=_first_str(item.get("title")) or "",
                abstract=_as_str(item.get("abstract")) or "",
                year=_parse_year(item),
            )
        )

    return parsed


def _parse_year(item: dict[str, Any]) -> int | None:
    """Return the publication year from Crossref date-parts, or None."""
    for field in _DATE_FIELDS:
        block = item.get(field)
        if not isinstance(block, dict):
            continue
        parts = block.get("date-parts")
        if not (isinstance(parts, list) and parts and isinstance(parts[0], list) and parts[0]):
            continue
        year = _as_year(parts[0][0])
        if year is not None:
            return year
    return None


def _as_year(value: Any) -> int | None:
    # Crossref occasionally sends years as strings, or [[null]] for unknown dates.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _first_str(value: Any) -> str | None:
    if isinstance(value, list):
        return next((s for s in (_as_str(v) for v in value) if s), None)
    return _as_str(value)


def _as_str(value: Any) -> str | None:
    return value.strip() if isinstance(value, str) and value.strip() else None
