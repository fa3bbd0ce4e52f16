"""Keyword-in-context extraction over article titles and abstracts.

Pipeline per article:

  normalize_text   title + abstract, lower-cased, markup stripped, whitespace collapsed
  split_sentences  Punkt sentence segmentation (abbreviation-aware, lazy)
  match_terms      whole-word lexicon matching per sentence
  split_context    left / right context around the first keyword occurrence

The extractor never touches the network or the filesystem; it consumes an
in-memory article sequence and yields KwicMatch records in article-then-
sentence order.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from typing import Iterable, Iterator, Sequence

from nltk.tokenize.punkt import _ORTHO_BEG_LC, PunktParameters, PunktSentenceTokenizer

from filters import term_pattern
from models import Article, KwicConfig, KwicMatch

LOGGER = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

# Abbreviations common in scholarly abstracts, stored the way Punkt expects
# them: lower-case, without the final period.
_ABBREVIATIONS: frozenset[str] = frozenset({
    "al", "approx", "ca", "cf", "e.g", "eds", "eq", "eqs", "esp", "etc",
    "fig", "figs", "i.e", "incl", "pp", "resp", "viz", "vol", "vols", "vs",
})


def _build_sentence_tokenizer() -> PunktSentenceTokenizer:
    params = PunktParameters()
    params.abbrev_types = set(_ABBREVIATIONS)
    # Every word counts as seen lower-case at a sentence start, so a lower-case
    # word after "2019." or "a." does not cancel the break.
    params.ortho_context = defaultdict(lambda: _ORTHO_BEG_LC)
    return PunktSentenceTokenizer(params)


_SENTENCE_TOKENIZER = _build_sentence_tokenizer()


def normalize_text(title: str | None, abstract: str | None = None) -> str:
    """Join title and abstract and reduce them to plain lower-case text.

    Angle-bracket tags (JATS/HTML markup in Crossref abstracts) become a
    space. Applying this to already-normalized text returns it unchanged.
    """
    if abstract is None:
        text = title or ""
    else:
        text = f"{title or ''} {abstract}"
    text = _TAG_RE.sub(" ", text.lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def split_sentences(text: str) -> Iterator[str]:
    """Yield the sentences of ``text`` in order, skipping empty ones."""
    if not text:
        return
    for start, end in _SENTENCE_TOKENIZER.span_tokenize(text):
        sentence = text[start:end].strip()
        if sentence:
            yield sentence


def match_terms(sentence: str, terms: Sequence[str]) -> list[str]:
    """Return the lexicon terms found in ``sentence`` as whole words.

    Terms are ordered by the position of their first occurrence; terms that
    start at the same position keep their lexicon order.
    """
    found: list[tuple[int, int, str]] = []
    for index, term in enumerate(terms):
        if not term.strip():
            continue
        match = term_pattern(term).search(sentence)
        if match is not None:
            found.append((match.start(), index, term))
    found.sort()
    return [term for _, _, term in found]


def split_context(sentence: str, keyword: str) -> tuple[str, str]:
    """Split ``sentence`` around the first whole-word occurrence of ``keyword``.

    Raises:
        ValueError: if the keyword does not occur in the sentence.
    """
    match = term_pattern(keyword).search(sentence)
    if match is None:
        raise ValueError(f"keyword {keyword!r} not found in sentence")
    return sentence[: match.start()].strip(), sentence[match.end():].strip()


class KwicExtractor:
    """Extract KWIC matches for a fixed lexicon configuration."""

    def __init__(self, config: KwicConfig) -> None:
        self.config = config

    def match_sentence(
        self, sentence: str, year: int | None = None, doi: str = ""
    ) -> list[KwicMatch]:
        """Return the matches for one already-normalized sentence."""
        keywords = match_terms(sentence, self.config.terms)
        if self.config.first_match_only:
            keywords = keywords[:1]

        matches = []
        for keyword in keywords:
            left, right = split_context(sentence, keyword)
            matches.append(
                KwicMatch(
                    year=year,
                    keyword=keyword,
                    sentence=sentence,
                    left_context=left,
                    right_context=right,
                    doi=doi,
                )
            )
        return matches

    def iter_matches(self, articles: Iterable[Article]) -> Iterator[KwicMatch]:
        """Yield matches for every article, in article-then-sentence order."""
        if not self.config.terms:
            return
        for article in articles:
            text = normalize_text(article.title, article.abstract)
            for sentence in split_sentences(text):
                yield from self.match_sentence(sentence, year=article.year, doi=article.doi)

    def extract(self, articles: Sequence[Article]) -> list[KwicMatch]:
        matches = list(self.iter_matches(articles))
        LOGGER.info(
            "KWIC: articles=%s terms=%s first_match_only=%s matches=%s",
            len(articles),
            len(self.config.terms),
            self.config.first_match_only,
            len(matches),
        )
        return matches
