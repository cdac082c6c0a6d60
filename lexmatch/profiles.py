from __future__ import annotations

"""
Candidate text assembly for people search.

A person is described by several structured fields (name, area,
seniority, career goals, skills, certificates).  For lexical matching
they are flattened into one synthetic text blob, which is then ranked
against the recruiter's query with :func:`lexmatch.ranking.rank`.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from loguru import logger

from .config import CERTIFICATE_LABEL_SEPARATOR, DEFAULT_IDF_SCOPE, DEFAULT_LIMIT
from .normalize import basic_clean
from .ranking import rank
from .weighting import WeightingScheme


@dataclass
class CandidateProfile:
    user_id: str
    full_name: Optional[str] = None
    area: Optional[str] = None
    seniority: Optional[str] = None
    career_goals: Optional[str] = None
    skills: List[str] = field(default_factory=list)
    certificates: List[str] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.full_name or self.user_id


@dataclass(frozen=True)
class ProfileMatch:
    profile: CandidateProfile
    score: float


def dedup_preserve_order(values: Iterable[Optional[str]]) -> List[str]:
    """Drop blanks and repeats while keeping first-seen order."""
    seen = set()
    out: List[str] = []
    for value in values:
        if not value or value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


def certificate_label(title: Optional[str], issuer: Optional[str]) -> str:
    """``"title • issuer"`` when both are known, otherwise whichever is present."""
    title = (title or "").strip()
    issuer = (issuer or "").strip()
    if title and issuer:
        return f"{title}{CERTIFICATE_LABEL_SEPARATOR}{issuer}"
    return title or issuer


def build_candidate_text(profile: CandidateProfile) -> str:
    """
    Concatenate a profile's fields into the text blob used for matching.

    Order: name, area, seniority, career goals, skill names, certificate
    labels.  Missing fields are skipped; each field is cleaned with
    :func:`~lexmatch.normalize.basic_clean`.
    """
    parts: List[str] = [
        basic_clean(profile.display_name),
        basic_clean(profile.area),
        basic_clean(profile.seniority),
        basic_clean(profile.career_goals),
    ]
    skills = dedup_preserve_order(profile.skills)
    if skills:
        parts.append(basic_clean(" ".join(skills)))
    certificates = dedup_preserve_order(profile.certificates)
    if certificates:
        parts.append(basic_clean(" ".join(certificates)))
    return " ".join(p for p in parts if p)


def search_candidates(
    query: str,
    profiles: Sequence[CandidateProfile],
    limit: int = DEFAULT_LIMIT,
    *,
    scheme: Optional[WeightingScheme | str] = None,
    idf_scope: str = DEFAULT_IDF_SCOPE,
) -> List[ProfileMatch]:
    """
    Rank profiles against a free-text recruiter query.

    A blank query returns no results.  Profiles with no lexical overlap
    are dropped.
    """
    query = basic_clean(query)
    if not query:
        return []
    candidates = [(pos, build_candidate_text(p)) for pos, p in enumerate(profiles)]
    ranked = rank(query, candidates, limit=limit, scheme=scheme, idf_scope=idf_scope)
    logger.info("Candidate search matched {} of {} profiles", len(ranked), len(profiles))
    return [ProfileMatch(profile=profiles[item.id], score=item.score) for item in ranked]
