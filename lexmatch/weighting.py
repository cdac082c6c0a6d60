from __future__ import annotations

"""
Vocabulary construction and term weighting.

A "corpus" here is never persisted: it is the handful of tokenized
documents taking part in one scoring call (two for a pairwise match,
N+1 for a corpus-wide search, the distinct titles for aggregate
ranking).  Weighted vectors are sparse ``dict[str, float]`` maps that
only carry the tokens of their own document.

Two weighting schemes share the :class:`WeightingScheme` protocol:

* :class:`TfidfWeighting` - term frequency times inverse document
  frequency.  The default smooths idf so that terms shared by both
  documents of a pairwise corpus still carry weight.
* :class:`BinaryWeighting` - 1.0 for every distinct token present.
"""

import math
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Protocol, Sequence, Set

from .config import SCHEME_BINARY, SCHEME_TFIDF, SCHEME_TFIDF_RAW

Vector = Dict[str, float]
Corpus = Sequence[Sequence[str]]


def vocabulary(corpus: Corpus) -> Set[str]:
    """Return the distinct tokens across every document of ``corpus``."""
    vocab: Set[str] = set()
    for tokens in corpus:
        vocab.update(tokens)
    return vocab


def term_frequency(tokens: Sequence[str]) -> Vector:
    """
    Relative frequency of each token in one document.

    Values sum to 1.0 for a non-empty sequence.  An empty sequence
    yields an empty mapping rather than a division by zero.
    """
    total = len(tokens)
    if total == 0:
        return {}
    counts = Counter(tokens)
    return {term: count / total for term, count in counts.items()}


def document_frequency(corpus: Corpus) -> Dict[str, int]:
    """Number of documents in ``corpus`` containing each token at least once."""
    df: Counter = Counter()
    for tokens in corpus:
        df.update(set(tokens))
    return dict(df)


def inverse_document_frequency(corpus: Corpus, smooth: bool = False) -> Vector:
    """
    idf for every token observed in ``corpus``.

    With ``smooth=False`` this is ``ln(N / df)``: a token present in
    every document weighs 0.  With ``smooth=True`` the
    ``ln((1 + N) / (1 + df)) + 1`` variant is used, which keeps
    ubiquitous terms at weight 1.
    """
    total_docs = len(corpus)
    idf: Vector = {}
    for term, df in document_frequency(corpus).items():
        if smooth:
            idf[term] = math.log((1 + total_docs) / (1 + df)) + 1.0
        else:
            idf[term] = math.log(total_docs / df)
    return idf


def vectorize(tf: Vector, idf: Vector) -> Vector:
    """Multiply each term frequency by its idf weight (missing idf counts as 0)."""
    return {term: freq * idf.get(term, 0.0) for term, freq in tf.items()}


# ---------------------------
# Weighting schemes
# ---------------------------

class WeightingScheme(Protocol):
    """Turns a tokenized corpus into one weighted vector per document."""

    name: str

    def weigh(self, corpus: Corpus) -> List[Vector]:
        ...


@dataclass(frozen=True)
class TfidfWeighting:
    """tf x idf over the supplied corpus."""

    smooth_idf: bool = True
    name: str = SCHEME_TFIDF

    def weigh(self, corpus: Corpus) -> List[Vector]:
        idf = inverse_document_frequency(corpus, smooth=self.smooth_idf)
        return [vectorize(term_frequency(tokens), idf) for tokens in corpus]


@dataclass(frozen=True)
class BinaryWeighting:
    """Presence/absence vectors: 1.0 for each distinct token in a document."""

    name: str = SCHEME_BINARY

    def weigh(self, corpus: Corpus) -> List[Vector]:
        return [dict.fromkeys(tokens, 1.0) for tokens in corpus]


_SCHEME_FACTORIES: Dict[str, Callable[[], WeightingScheme]] = {
    SCHEME_TFIDF: lambda: TfidfWeighting(),
    SCHEME_TFIDF_RAW: lambda: TfidfWeighting(smooth_idf=False, name=SCHEME_TFIDF_RAW),
    SCHEME_BINARY: lambda: BinaryWeighting(),
}


def get_scheme(key: str) -> WeightingScheme:
    try:
        factory = _SCHEME_FACTORIES[key]
    except KeyError as exc:
        raise ValueError(f"Unknown weighting scheme '{key}'") from exc
    return factory()


def available_schemes() -> Iterable[str]:
    return _SCHEME_FACTORIES.keys()
