"""Static term tables: pejorative lexicon, stop words and sentiment scores.

All three tables ship with built-in defaults and can be replaced by files:

  terms / stop words  — one entry per line, ``#`` comments and blanks ignored.
  sentiment lexicon   — ``word,score`` (or tab-separated) rows, integer scores
                        in the AFINN style (negative = unfavourable).
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable

from models import KwicConfig

LOGGER = logging.getLogger(__name__)


class LexiconError(ValueError):
    """Raised when a lexicon file cannot be parsed."""


# Pathologizing vocabulary searched for in abstracts. Order matters: with
# first-match-only extraction, a term listed earlier wins a tie at the same
# position in a sentence.
DEFAULT_PEJORATIVE_TERMS: tuple[str, ...] = (
    "abnormal",
    "abnormality",
    "abnormalities",
    "anomaly",
    "anomalous",
    "biological anomaly",
    "aberrant",
    "aberration",
    "deviant",
    "deviance",
    "deviation",
    "disorder",
    "disordered",
    "defect",
    "defective",
    "pathological",
    "pathology",
    "dysfunction",
    "dysfunctional",
    "maladaptive",
    "unnatural",
    "perversion",
    "perverse",
    "degenerate",
    "degeneracy",
    "inferior",
    "primitive",
    "freak",
    "handicap",
    "affliction",
)

DEFAULT_STOP_WORDS: frozenset[str] = frozenset({
    "a", "about", "above", "after", "again", "against", "all", "also", "am",
    "among", "an", "and", "any", "are", "as", "at", "be", "because", "been",
    "before", "being", "below", "between", "both", "but", "by", "can", "could",
    "did", "do", "does", "doing", "down", "during", "each", "either", "et",
    "few", "for", "from", "further", "had", "has", "have", "having", "he",
    "her", "here", "hers", "herself", "him", "himself", "his", "how", "however",
    "i", "if", "in", "into", "is", "it", "its", "itself", "may", "me", "might",
    "more", "most", "must", "my", "myself", "no", "nor", "not", "of", "off",
    "on", "once", "only", "or", "other", "our", "ours", "ourselves", "out",
    "over", "own", "same", "she", "should", "so", "some", "such", "than",
    "that", "the", "their", "theirs", "them", "themselves", "then", "there",
    "these", "they", "this", "those", "through", "thus", "to", "too", "under",
    "until", "up", "upon", "us", "very", "was", "we", "were", "what", "when",
    "where", "whether", "which", "while", "who", "whom", "why", "will", "with",
    "within", "without", "would", "you", "your", "yours", "yourself",
    "yourselves", "al", "using", "used", "use", "based", "study", "studies",
    "results", "paper", "article",
})

DEFAULT_SENTIMENT: dict[str, int] = {
    # negative
    "abnormal": -2,
    "aberrant": -2,
    "anomaly": -1,
    "bad": -3,
    "burden": -2,
    "concern": -1,
    "crisis": -3,
    "damage": -3,
    "danger": -2,
    "dangerous": -2,
    "death": -2,
    "decline": -1,
    "defect": -2,
    "defective": -2,
    "deficit": -2,
    "degenerate": -2,
    "deviant": -2,
    "difficult": -1,
    "disease": -1,
    "disorder": -2,
    "distress": -2,
    "dysfunction": -2,
    "fail": -2,
    "failure": -2,
    "fear": -2,
    "harm": -2,
    "harmful": -2,
    "hostile": -2,
    "inferior": -2,
    "loss": -3,
    "pathological": -2,
    "poor": -2,
    "problem": -2,
    "risk": -2,
    "severe": -2,
    "stigma": -2,
    "stress": -1,
    "suffering": -2,
    "threat": -2,
    "unnatural": -2,
    "violence": -3,
    "weak": -2,
    "worse": -3,
    # positive
    "acceptance": 1,
    "benefit": 2,
    "beneficial": 2,
    "best": 3,
    "diverse": 2,
    "diversity": 2,
    "effective": 2,
    "good": 3,
    "healthy": 2,
    "help": 2,
    "improve": 2,
    "improved": 2,
    "inclusive": 2,
    "natural": 1,
    "normal": 1,
    "positive": 2,
    "resilience": 2,
    "resilient": 2,
    "strength": 2,
    "strong": 2,
    "success": 2,
    "successful": 3,
    "support": 2,
    "supportive": 2,
    "well-being": 2,
    "wellbeing": 2,
}


def load_terms(path: str | Path) -> tuple[str, ...]:
    """Read an ordered term list, dropping comments, blanks and duplicates."""
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LexiconError(f"Cannot read term list {file_path}: {exc}") from exc

    terms = _unique_terms(
        line.strip() for line in text.splitlines() if not line.lstrip().startswith("#")
    )
    LOGGER.info("Loaded %s terms from %s", len(terms), file_path)
    return terms


def load_stop_words(path: str | Path) -> frozenset[str]:
    return frozenset(term.lower() for term in load_terms(path))


def load_sentiment_lexicon(path: str | Path) -> dict[str, int]:
    """Read ``word,score`` rows into a mapping of lower-cased word to score.

    The first data row is taken as a header when its score column is not
    numeric, even if comment lines precede it. Any other
    row that cannot be parsed raises LexiconError naming the line.
    """
    file_path = Path(path)
    try:
        lines = file_path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise LexiconError(f"Cannot read sentiment lexicon {file_path}: {exc}") from exc

    lexicon: dict[str, int] = {}
    first_row = True
    for lineno, line in enumerate(lines, start=1):
        if not line.strip() or line.lstrip().startswith("#"):
            continue

        delimiter = "\t" if "\t" in line else ","
        row = next(csv.reader([line], delimiter=delimiter))
        if len(row) != 2 or not row[0].strip():
            raise LexiconError(f"{file_path}:{lineno}: expected 'word,score', got {line!r}")

        word, raw_score = row[0].strip().lower(), row[1].strip()
        try:
            score = int(raw_score)
        except ValueError:
            if first_row:
                first_row = False
                continue  # header
            raise LexiconError(
                f"{file_path}:{lineno}: score {raw_score!r} is not an integer"
            ) from None
        lexicon[word] = score
        first_row = False

    LOGGER.info("Loaded %s sentiment entries from %s", len(lexicon), file_path)
    return lexicon


def build_kwic_config(terms: Iterable[str], first_match_only: bool = True) -> KwicConfig:
    """Build the extractor configuration from a term list.

    An empty lexicon is allowed; the extractor then emits no matches.
    """
    unique = _unique_terms(terms)
    if not unique:
        LOGGER.warning("Pejorative lexicon is empty; no KWIC matches will be produced")
    return KwicConfig(terms=unique, first_match_only=first_match_only)


def _unique_terms(terms: Iterable[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    unique: list[str] = []
    for term in terms:
        term = " ".join(term.split())
        if not term or term.lower() in seen:
            continue
        seen.add(term.lower())
        unique.append(term)
    return tuple(unique)
