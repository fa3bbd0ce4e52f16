"""Shared typed models for the analysis run."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Article:
    """Normalized journal article record, keyed by DOI."""

    doi: str
    title: str
    abstract: str
    year: int | None = None


@dataclass(frozen=True, slots=True)
class KwicConfig:
    """Immutable matching configuration handed to the KWIC extractor.

    ``first_match_only`` keeps a single match per sentence (the earliest
    term), which under-counts sentences that carry several lexicon terms.
    """

    terms: tuple[str, ...]
    first_match_only: bool = True


@dataclass(frozen=True, slots=True)
class KwicMatch:
    """One keyword occurrence with the sentence split around it.

    ``keyword`` is the lexicon entry as written while ``sentence`` is
    lower-cased, so with a mixed-case lexicon the context split rebuilds the
    sentence only up to case.
    """

    year: int | None
    keyword: str
    sentence: str
    left_context: str
    right_context: str
    doi: str = ""


@dataclass(frozen=True, slots=True)
class FrequencyRecord:
    year: int
    pejorative_hits: int
    total_docs: int
    freq_per_doc: float


@dataclass(frozen=True, slots=True)
class WordCount:
    year: int
    word: str
    count: int
    total_words: int
    share: float


@dataclass(frozen=True, slots=True)
class SentimentRecord:
    year: int
    total_docs: int
    positive_words: int
    negative_words: int
    sentiment_sum: int
    mean_sentiment: float
