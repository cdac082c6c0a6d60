from __future__ import annotations

"""
Multi-candidate ranking built on top of the pairwise scorer.

Three call patterns live here:

* :func:`rank` - score N candidates against one query, drop zero
  scores, sort, truncate.  idf is either recomputed per pair (the
  default, identical to calling :func:`~lexmatch.scoring.score` N
  times) or computed once over the query plus every candidate.
* :func:`rank_with_recurrence` - aggregate ranking of short repeated
  documents (certificate titles), blending a TF-IDF relevance score
  with how often the same text recurs across records.
* :func:`rank_titles` / :func:`suggest_skills` - thin conveniences for
  the dashboard title ranking and certificate skill suggestions.

Scoring one candidate never depends on another, so the map step of
:func:`rank` may run on a thread pool; sorting and truncation always
happen afterwards on the caller's thread.
"""

import math
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Generic, Hashable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from loguru import logger

from .config import (
    DEFAULT_IDF_SCOPE,
    DEFAULT_LIMIT,
    IDF_SCOPE_CORPUS,
    IDF_SCOPE_PAIR,
    IDF_SCOPES,
    RECURRENCE_WEIGHT,
    RELEVANCE_WEIGHT,
    SKILL_SUGGESTION_LIMIT,
)
from .normalize import tokenize
from .scoring import resolve_scheme, score_tokens
from .similarity import cosine_similarity
from .weighting import WeightingScheme, inverse_document_frequency, term_frequency, vectorize

IdT = TypeVar("IdT", bound=Hashable)


@dataclass(frozen=True)
class RankedItem(Generic[IdT]):
    id: IdT
    score: float


@dataclass(frozen=True)
class RecurrenceItem:
    text: str
    score: float
    occurrences: int
    relevance: float


def _check_limit(limit: int) -> None:
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")


def _score_candidates(
    query_tokens: List[str],
    candidate_tokens: List[List[str]],
    scheme: WeightingScheme,
    idf_scope: str,
    max_workers: Optional[int],
) -> List[float]:
    """Map step: one score per candidate, in input order."""
    if not query_tokens:
        return [0.0] * len(candidate_tokens)

    if idf_scope == IDF_SCOPE_CORPUS:
        vectors = scheme.weigh([query_tokens] + candidate_tokens)
        query_vec = vectors[0]
        return [cosine_similarity(query_vec, vec) for vec in vectors[1:]]

    def _pair(tokens: List[str]) -> float:
        return score_tokens(query_tokens, tokens, scheme)

    if max_workers and max_workers > 1 and len(candidate_tokens) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(_pair, candidate_tokens))
    return [_pair(tokens) for tokens in candidate_tokens]


def rank(
    query: str,
    candidates: Iterable[Tuple[IdT, str]],
    limit: int = DEFAULT_LIMIT,
    *,
    scheme: Optional[WeightingScheme | str] = None,
    idf_scope: str = DEFAULT_IDF_SCOPE,
    max_workers: Optional[int] = None,
) -> List[RankedItem[IdT]]:
    """
    Rank ``(id, text)`` candidates by similarity to ``query``.

    Candidates scoring exactly 0 are discarded.  The result is sorted by
    descending score (ties keep their input order) and holds at most
    ``limit`` entries.
    """
    _check_limit(limit)
    if idf_scope not in IDF_SCOPES:
        raise ValueError(f"Unknown idf scope '{idf_scope}'; expected one of {IDF_SCOPES}")
    weighting = resolve_scheme(scheme)

    pairs = list(candidates)
    query_tokens = tokenize(query)
    candidate_tokens = [tokenize(text) for _, text in pairs]
    scores = _score_candidates(query_tokens, candidate_tokens, weighting, idf_scope, max_workers)

    scored = [(pos, cid, s) for pos, ((cid, _), s) in enumerate(zip(pairs, scores)) if s > 0]
    scored.sort(key=lambda x: (-x[2], x[0]))
    ranked = [RankedItem(id=cid, score=s) for _, cid, s in scored[:limit]]
    logger.debug(
        "Ranked {} of {} candidates (scheme={}, idf_scope={}, limit={})",
        len(ranked),
        len(pairs),
        weighting.name,
        idf_scope,
        limit,
    )
    return ranked


# ---------------------------
# Recurrence-weighted aggregate ranking
# ---------------------------

def _group_key(text: str) -> str:
    return text.strip().lower()


def combine_recurrence(relevance: float, occurrences: int) -> float:
    """Blend lexical relevance with the log-damped recurrence count."""
    return relevance * RELEVANCE_WEIGHT + math.log(1 + occurrences) * RECURRENCE_WEIGHT


def rank_with_recurrence(
    documents: Iterable[Tuple[str, int]],
    limit: int = DEFAULT_LIMIT,
) -> List[RecurrenceItem]:
    """
    Rank distinct short documents by relevance plus recurrence.

    ``documents`` holds ``(text, occurrence_count)`` rows.  Rows whose
    text is equal ignoring case and surrounding whitespace form one
    group that keeps the first spelling seen.  Rows repeating the exact
    same spelling describe the same records, so that spelling counts
    once with its largest count; the group count is the sum over its
    distinct spellings.  Groups without any token are excluded.

    Relevance is the sum of tf x idf over the document's tokens, with
    idf computed across the distinct documents.  The final score is
    ``relevance * 0.6 + ln(1 + occurrences) * 0.4``.
    """
    _check_limit(limit)
    display: Dict[str, str] = {}
    spellings: Dict[str, Dict[str, int]] = {}
    for text, occurrences in documents:
        if occurrences < 0:
            raise ValueError(f"occurrence count must be >= 0, got {occurrences} for {text!r}")
        key = _group_key(text or "")
        if not key:
            continue
        spelling = text.strip()
        display.setdefault(key, spelling)
        counts = spellings.setdefault(key, {})
        counts[spelling] = max(counts.get(spelling, 0), int(occurrences))

    entries = []
    for key, text in display.items():
        tokens = tokenize(text)
        if tokens:
            entries.append((text, sum(spellings[key].values()), tokens))

    idf = inverse_document_frequency([tokens for _, _, tokens in entries])
    results: List[Tuple[int, RecurrenceItem]] = []
    for pos, (display, occurrences, tokens) in enumerate(entries):
        relevance = sum(vectorize(term_frequency(tokens), idf).values())
        item = RecurrenceItem(
            text=display,
            score=combine_recurrence(relevance, occurrences),
            occurrences=occurrences,
            relevance=relevance,
        )
        results.append((pos, item))

    results.sort(key=lambda x: (-x[1].score, x[0]))
    ranked = [item for _, item in results[:limit]]
    logger.debug("Recurrence ranking: {} distinct documents, returned {}", len(entries), len(ranked))
    return ranked


def count_titles(titles: Iterable[Optional[str]]) -> List[Tuple[str, int]]:
    """
    Collapse raw record titles into ``(first spelling, record count)`` rows.

    Blank and missing titles are skipped.
    """
    counts: Counter = Counter()
    display: Dict[str, str] = {}
    for title in titles:
        if not title or not title.strip():
            continue
        key = _group_key(title)
        counts[key] += 1
        display.setdefault(key, title.strip())
    return [(display[key], counts[key]) for key in display]


def rank_titles(titles: Iterable[Optional[str]], limit: int = DEFAULT_LIMIT) -> List[RecurrenceItem]:
    """Rank raw record titles (one per record) by relevance plus recurrence."""
    return rank_with_recurrence(count_titles(titles), limit=limit)


# ---------------------------
# Skill suggestions
# ---------------------------

def suggest_skills(
    text: str,
    skill_names: Sequence[str],
    limit: int = SKILL_SUGGESTION_LIMIT,
    *,
    scheme: Optional[WeightingScheme | str] = None,
) -> List[str]:
    """
    Suggest catalogue skills for a certificate's text.

    Each skill name is scored pairwise against ``text``; skills with no
    lexical overlap are dropped and the best ``limit`` names returned.
    """
    ranked = rank(
        text,
        list(enumerate(skill_names)),
        limit=limit,
        scheme=scheme,
        idf_scope=IDF_SCOPE_PAIR,
    )
    return [skill_names[item.id] for item in ranked]
