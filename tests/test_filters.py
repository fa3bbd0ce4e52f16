import pytest

from filters import contains_term, dedupe_by_doi, matches_search_terms, term_pattern
from models import Article


def _article(title: str, abstract: str = "", doi: str = "10.1000/test") -> Article:
    return Article(doi=doi, title=title, abstract=abstract, year=2021)


@pytest.mark.parametrize("text, term, expected", [
    ("Sexual minority health", "sexual minority", True),
    ("Bisexuality in adolescence", "sexuality", False),
    ("SEXUALITY and identity", "sexuality", True),
    ("gender-diverse youth", "gender", True),
    ("a transgender sample", "gender", False),
    ("results (n=12) were mixed", "(n=12)", True),
    ("anything", "   ", False),
])
def test_contains_term(text: str, term: str, expected: bool) -> None:
    assert contains_term(text, term) is expected


def test_term_pattern_is_cached() -> None:
    assert term_pattern("abnormal") is term_pattern("abnormal")


def test_search_term_in_title() -> None:
    assert matches_search_terms(_article("Homosexuality in Primates"), ["homosexuality"]) is True


def test_search_term_in_abstract_only() -> None:
    article = _article("Field Notes", abstract="We observed homosexuality in several species.")
    assert matches_search_terms(article, ["homosexuality"]) is True


def test_no_search_term_match_returns_false() -> None:
    article = _article("Coral Reef Ecology", abstract="Reef fish counts over a decade.")
    assert matches_search_terms(article, ["homosexuality", "same-sex behaviour"]) is False


@pytest.mark.parametrize("terms", [[], ["", "  "]])
def test_empty_search_terms_keep_everything(terms: list[str]) -> None:
    assert matches_search_terms(_article("Anything"), terms) is True


def test_dedupe_by_doi_keeps_first_case_insensitive() -> None:
    articles = [
        _article("First", doi="10.1000/ABC"),
        _article("Second", doi="10.1000/xyz"),
        _article("Duplicate", doi="10.1000/abc"),
    ]

    unique = dedupe_by_doi(articles)

    assert [a.title for a in unique] == ["First", "Second"]


def test_dedupe_keeps_articles_without_doi() -> None:
    articles = [_article("A", doi=""), _article("B", doi="")]
    assert len(dedupe_by_doi(articles)) == 2
