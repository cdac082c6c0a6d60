"""
Lightweight lexical relevance engine.

Relates free-text documents (profiles, certificate titles, task
descriptions, search queries) through tokenization, TF-IDF weighting
and cosine similarity, and ranks candidates on top of that.  Every
call is self-contained: vocabularies and idf tables are built from the
documents of that call and discarded afterwards.  There are no
side-effects on import.
"""
from __future__ import annotations

from .normalize import basic_clean, detokenize, strip_diacritics, tokenize
from .profiles import CandidateProfile, ProfileMatch, build_candidate_text, certificate_label, search_candidates
from .ranking import (
    RankedItem,
    RecurrenceItem,
    count_titles,
    rank,
    rank_titles,
    rank_with_recurrence,
    suggest_skills,
)
from .scoring import MatchResult, classify, match, score
from .similarity import cosine_similarity
from .weighting import (
    BinaryWeighting,
    TfidfWeighting,
    WeightingScheme,
    available_schemes,
    get_scheme,
    inverse_document_frequency,
    term_frequency,
    vectorize,
    vocabulary,
)

__all__ = [
    "BinaryWeighting",
    "CandidateProfile",
    "MatchResult",
    "ProfileMatch",
    "RankedItem",
    "RecurrenceItem",
    "TfidfWeighting",
    "WeightingScheme",
    "available_schemes",
    "basic_clean",
    "build_candidate_text",
    "certificate_label",
    "classify",
    "cosine_similarity",
    "count_titles",
    "detokenize",
    "get_scheme",
    "inverse_document_frequency",
    "match",
    "rank",
    "rank_titles",
    "rank_with_recurrence",
    "score",
    "search_candidates",
    "strip_diacritics",
    "suggest_skills",
    "term_frequency",
    "tokenize",
    "vectorize",
    "vocabulary",
]
