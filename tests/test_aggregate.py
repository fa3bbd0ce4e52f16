import pytest

from aggregate import count_docs_by_year, count_hits_by_year, pejorative_frequency
from kwic import KwicExtractor
from models import Article, KwicConfig, KwicMatch

ARTICLES = [
    Article(doi="10.1/a", title="", abstract="an abnormal trait. a deviant act.", year=2019),
    Article(doi="10.1/b", title="", abstract="a neutral description.", year=2019),
    Article(doi="10.1/c", title="", abstract="nothing pejorative here.", year=2020),
    Article(doi="10.1/d", title="", abstract="an abnormal case.", year=2021),
    Article(doi="10.1/e", title="", abstract="a deviant trait, n.d. edition.", year=None),
]


@pytest.fixture()
def matches() -> list[KwicMatch]:
    return KwicExtractor(KwicConfig(terms=("abnormal", "deviant"))).extract(ARTICLES)


def test_count_docs_by_year_skips_yearless() -> None:
    assert count_docs_by_year(ARTICLES) == {2019: 2, 2020: 1, 2021: 1}


def test_count_hits_by_year_skips_yearless(matches: list[KwicMatch]) -> None:
    assert any(m.year is None for m in matches)
    assert count_hits_by_year(matches) == {2019: 2, 2021: 1}


def test_pejorative_frequency_outer_join(matches: list[KwicMatch]) -> None:
    records = pejorative_frequency(ARTICLES, matches)

    assert [(r.year, r.pejorative_hits, r.total_docs) for r in records] == [
        (2019, 2, 2),
        (2020, 0, 1),
        (2021, 1, 1),
    ]
    assert records[0].freq_per_doc == pytest.approx(1.0)
    assert records[1].freq_per_doc == 0.0


def test_hits_per_year_equal_match_counts(matches: list[KwicMatch]) -> None:
    records = pejorative_frequency(ARTICLES, matches)
    for record in records:
        assert record.pejorative_hits == sum(1 for m in matches if m.year == record.year)


def test_frequency_times_docs_reproduces_total_hits(matches: list[KwicMatch]) -> None:
    records = pejorative_frequency(ARTICLES, matches)
    total_hits = sum(1 for m in matches if m.year is not None)
    assert sum(round(r.freq_per_doc * r.total_docs) for r in records) == total_hits


def test_years_only_appear_with_articles() -> None:
    records = pejorative_frequency(ARTICLES, [])
    assert 2022 not in {r.year for r in records}
    assert [r.year for r in records] == [2019, 2020, 2021]


def test_empty_inputs_give_no_records() -> None:
    assert pejorative_frequency([], []) == []


def test_hits_without_documents_raise() -> None:
    stray = KwicMatch(
        year=1999,
        keyword="abnormal",
        sentence="abnormal",
        left_context="",
        right_context="",
    )
    with pytest.raises(ZeroDivisionError):
        pejorative_frequency(ARTICLES, [stray])
