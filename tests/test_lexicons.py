from pathlib import Path

import pytest

from lexicons import (
    DEFAULT_PEJORATIVE_TERMS,
    LexiconError,
    build_kwic_config,
    load_sentiment_lexicon,
    load_stop_words,
    load_terms,
)


def test_load_terms_skips_comments_blanks_and_duplicates(tmp_path: Path) -> None:
    path = tmp_path / "terms.txt"
    path.write_text(
        "# pathologizing vocabulary\n"
        "abnormal\n"
        "\n"
        "biological   anomaly\n"
        "Abnormal\n"
        "  deviant  \n",
        encoding="utf-8",
    )

    assert load_terms(path) == ("abnormal", "biological anomaly", "deviant")


def test_load_terms_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(LexiconError):
        load_terms(tmp_path / "missing.txt")


def test_load_stop_words_lowercases(tmp_path: Path) -> None:
    path = tmp_path / "stop.txt"
    path.write_text("The\nAND\nof\n", encoding="utf-8")
    assert load_stop_words(path) == frozenset({"the", "and", "of"})


def test_load_sentiment_lexicon_csv_with_header(tmp_path: Path) -> None:
    path = tmp_path / "afinn.csv"
    path.write_text("word,score\nGood,3\nbad,-3\n# comment\n\n", encoding="utf-8")
    assert load_sentiment_lexicon(path) == {"good": 3, "bad": -3}


def test_load_sentiment_lexicon_header_after_comment(tmp_path: Path) -> None:
    path = tmp_path / "afinn.csv"
    path.write_text("# AFINN subset\nword,score\ngood,3\n", encoding="utf-8")
    assert load_sentiment_lexicon(path) == {"good": 3}


def test_load_sentiment_lexicon_tab_separated(tmp_path: Path) -> None:
    path = tmp_path / "afinn.tsv"
    path.write_text("well-being\t2\nstigma\t-2\n", encoding="utf-8")
    assert load_sentiment_lexicon(path) == {"well-being": 2, "stigma": -2}


@pytest.mark.parametrize("content, line", [
    ("good,3\nbad,worse\n", 2),
    ("good,3\nbad\n", 2),
    ("good,3,extra\n", 1),
])
def test_load_sentiment_lexicon_malformed_rows(tmp_path: Path, content: str, line: int) -> None:
    path = tmp_path / "bad.csv"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(LexiconError, match=f":{line}:"):
        load_sentiment_lexicon(path)


def test_build_kwic_config_keeps_order_and_flag() -> None:
    config = build_kwic_config(["deviant", "abnormal", "deviant"], first_match_only=False)
    assert config.terms == ("deviant", "abnormal")
    assert config.first_match_only is False


def test_build_kwic_config_empty_lexicon_is_allowed() -> None:
    config = build_kwic_config([])
    assert config.terms == ()
    assert config.first_match_only is True


def test_default_lexicon_has_scenario_terms() -> None:
    assert "abnormal" in DEFAULT_PEJORATIVE_TERMS
    assert "biological anomaly" in DEFAULT_PEJORATIVE_TERMS
    assert len(set(DEFAULT_PEJORATIVE_TERMS)) == len(DEFAULT_PEJORATIVE_TERMS)
