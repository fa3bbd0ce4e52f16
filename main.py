"""CLI entrypoint for the pejorative-term trend analysis."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

import csv_sink
from aggregate import pejorative_frequency
from crossref_feed import fetch_articles
from filters import dedupe_by_doi, matches_search_terms
from kwic import KwicExtractor
from lexicons import (
    DEFAULT_PEJORATIVE_TERMS,
    DEFAULT_SENTIMENT,
    DEFAULT_STOP_WORDS,
    LexiconError,
    build_kwic_config,
    load_sentiment_lexicon,
    load_stop_words,
    load_terms,
)
from models import Article
from sentiment import sentiment_by_year
from word_freq import word_frequency_by_year


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(
        description="Fetch journal abstracts and track pejorative terms, word use and sentiment over time"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--query",
        action="append",
        help="Crossref bibliographic query (repeatable, one request series each)",
    )
    source.add_argument(
        "--input-csv",
        default=None,
        help="Analyse a previously written articles.csv instead of querying Crossref",
    )
    parser.add_argument(
        "--search-term",
        action="append",
        default=None,
        help="Topical filter term (repeatable). Defaults to the --query values.",
    )
    parser.add_argument("--from-year", type=int, default=None, help="Earliest publication year")
    parser.add_argument("--until-year", type=int, default=None, help="Latest publication year")
    parser.add_argument(
        "--max-results",
        type=int,
        default=None,
        help="Maximum articles per query (default: CROSSREF_MAX_RESULTS or 1000)",
    )
    parser.add_argument(
        "--out-dir",
        default=None,
        help="Directory for CSV outputs (default: OUTPUT_DIR or analysis_outputs)",
    )
    parser.add_argument("--terms", default=None, help="Pejorative term list, one per line")
    parser.add_argument("--sentiment-lexicon", default=None, help="word,score sentiment lexicon")
    parser.add_argument("--stop-words", default=None, help="Stop word list, one per line")
    parser.add_argument(
        "--all-matches",
        action="store_true",
        help=(
            "Emit one KWIC row per matched term in a sentence. By default only the "
            "first term per sentence is kept, which under-counts sentences with "
            "several pejorative terms."
        ),
    )
    parser.add_argument(
        "--top-words",
        type=int,
        default=50,
        help="Words kept per year in word_frequency.csv (0 keeps all)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch and filter only; log counts without writing CSVs",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _path_option(cli_value: str | None, env_var: str) -> str | None:
    return cli_value or os.getenv(env_var) or None


def collect_articles(args: argparse.Namespace) -> list[Article]:
    """Load articles from the cached CSV or from Crossref, then filter them."""
    if args.input_csv:
        articles = csv_sink.load_articles(args.input_csv)
    else:
        articles = fetch_articles(
            args.query,
            from_year=args.from_year,
            until_year=args.until_year,
            max_results=args.max_results,
        )

    articles = dedupe_by_doi(articles)
    search_terms = args.search_term if args.search_term is not None else (args.query or [])
    topical = [a for a in articles if matches_search_terms(a, search_terms)]
    logging.info(
        "Topical filter: total=%s kept=%s dropped=%s terms=%s",
        len(articles),
        len(topical),
        len(articles) - len(topical),
        len(search_terms),
    )

    yearless = sum(1 for a in topical if a.year is None)
    if yearless:
        logging.warning(
            "%s articles have no parsable year; they are kept for KWIC but left out of yearly tables",
            yearless,
        )
    return topical


def run(args: argparse.Namespace) -> None:
    """Run one full analysis pass."""
    terms_path = _path_option(args.terms, "PEJORATIVE_TERMS_PATH")
    sentiment_path = _path_option(args.sentiment_lexicon, "SENTIMENT_LEXICON_PATH")
    stop_words_path = _path_option(args.stop_words, "STOP_WORDS_PATH")

    terms = load_terms(terms_path) if terms_path else DEFAULT_PEJORATIVE_TERMS
    sentiment_lexicon = (
        load_sentiment_lexicon(sentiment_path) if sentiment_path else DEFAULT_SENTIMENT
    )
    stop_words = load_stop_words(stop_words_path) if stop_words_path else DEFAULT_STOP_WORDS
    config = build_kwic_config(terms, first_match_only=not args.all_matches)

    articles = collect_articles(args)
    logging.info("Analysing %s articles", len(articles))

    if args.dry_run:
        logging.info("[dry-run] Would analyse %s articles; no files written", len(articles))
        return

    matches = KwicExtractor(config).extract(articles)
    frequency = pejorative_frequency(articles, matches)
    top_n = args.top_words if args.top_words and args.top_words > 0 else None
    words = word_frequency_by_year(articles, stop_words, top_n=top_n)
    sentiment = sentiment_by_year(articles, sentiment_lexicon)

    out_dir = Path(args.out_dir or os.getenv("OUTPUT_DIR") or csv_sink.OUTPUT_DIR)
    if not args.input_csv:
        csv_sink.write_articles(out_dir / csv_sink.ARTICLES_FILENAME, articles)
    csv_sink.write_kwic(out_dir / csv_sink.KWIC_FILENAME, matches)
    csv_sink.write_frequency(out_dir / csv_sink.FREQUENCY_FILENAME, frequency)
    csv_sink.write_word_freq(out_dir / csv_sink.WORD_FREQ_FILENAME, words)
    csv_sink.write_sentiment(out_dir / csv_sink.SENTIMENT_FILENAME, sentiment)

    logging.info(
        "Run complete. articles=%s matches=%s years=%s out_dir=%s",
        len(articles),
        len(matches),
        len(frequency),
        out_dir,
    )


def main(argv: list[str] | None = None) -> None:
    """Initialize config and execute the analysis."""
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        run(args)
    except LexiconError as exc:
        logging.error("Lexicon error: %s", exc)
        sys.exit(2)


if __name__ == "__main__":
    main()
