from __future__ import annotations

"""
Pairwise matching: one query document against one candidate document.

The pairwise corpus is exactly the two documents being compared, so
idf is recomputed for every call.  Scores are labelled with fixed
quality tiers for "how well does this certificate match this target"
style checks.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from loguru import logger

from .config import DEFAULT_SCHEME, QUALITY_IRRELEVANT, QUALITY_THRESHOLDS
from .normalize import tokenize
from .similarity import cosine_similarity
from .weighting import WeightingScheme, get_scheme


@dataclass(frozen=True)
class MatchResult:
    score: float
    quality: str


def resolve_scheme(scheme: Optional[WeightingScheme | str] = None) -> WeightingScheme:
    """Accept a scheme instance, a registry key, or ``None`` for the default."""
    if scheme is None:
        return get_scheme(DEFAULT_SCHEME)
    if isinstance(scheme, str):
        return get_scheme(scheme)
    return scheme


def score_tokens(
    query_tokens: Sequence[str],
    candidate_tokens: Sequence[str],
    scheme: Optional[WeightingScheme | str] = None,
) -> float:
    """Score two already tokenized documents over their 2-document corpus."""
    if not query_tokens or not candidate_tokens:
        return 0.0
    query_vec, candidate_vec = resolve_scheme(scheme).weigh([query_tokens, candidate_tokens])
    return cosine_similarity(query_vec, candidate_vec)


def score(query: str, candidate: str, scheme: Optional[WeightingScheme | str] = None) -> float:
    """
    Similarity of ``candidate`` to ``query`` in [0, 1].

    Empty or token-free input scores 0.0.  The result is symmetric in
    its two text arguments.
    """
    return score_tokens(tokenize(query), tokenize(candidate), scheme)


def classify(value: float) -> str:
    """Map a score onto its quality tier."""
    for threshold, label in QUALITY_THRESHOLDS:
        if value >= threshold:
            return label
    return QUALITY_IRRELEVANT


def match(query: str, candidate: str, scheme: Optional[WeightingScheme | str] = None) -> MatchResult:
    """Score a pair and attach its quality tier."""
    value = score(query, candidate, scheme)
    quality = classify(value)
    logger.debug("Pairwise match score={:.4f} quality={}", value, quality)
    return MatchResult(score=value, quality=quality)
