from __future__ import annotations
"""
Configuration for the lexmatch relevance engine.
"""

import os
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

# Tokenization
# Minimum token length kept by the tokenizer.  1 keeps short but meaningful
# terms such as "ia", "ux" or "bi".
DEFAULT_MIN_TOKEN_LENGTH = 1
MIN_TOKEN_LENGTH = int(os.getenv("LEXMATCH_MIN_TOKEN_LENGTH", str(DEFAULT_MIN_TOKEN_LENGTH)))

# Text processing
MAX_INPUT_CHARS = int(os.getenv("LEXMATCH_MAX_INPUT_CHARS", "20000"))

# Weighting
SCHEME_TFIDF = "tfidf"
SCHEME_TFIDF_RAW = "tfidf-raw"
SCHEME_BINARY = "binary"
DEFAULT_SCHEME = os.getenv("LEXMATCH_DEFAULT_SCHEME", SCHEME_TFIDF)

# IDF scope for multi-candidate search
IDF_SCOPE_PAIR = "pair"
IDF_SCOPE_CORPUS = "corpus"
IDF_SCOPES = (IDF_SCOPE_PAIR, IDF_SCOPE_CORPUS)
DEFAULT_IDF_SCOPE = os.getenv("LEXMATCH_IDF_SCOPE", IDF_SCOPE_PAIR)

# Quality tiers (policy constants, highest first)
QUALITY_EXCELLENT = "excellent"
QUALITY_STRONG = "strong"
QUALITY_GOOD = "good"
QUALITY_WEAK = "weak"
QUALITY_IRRELEVANT = "irrelevant"
QUALITY_THRESHOLDS: List[Tuple[float, str]] = [
    (0.85, QUALITY_EXCELLENT),
    (0.70, QUALITY_STRONG),
    (0.55, QUALITY_GOOD),
    (0.35, QUALITY_WEAK),
]

# Recurrence blend
RELEVANCE_WEIGHT = 0.6
RECURRENCE_WEIGHT = 0.4

# Result policy
DEFAULT_LIMIT = 10
SKILL_SUGGESTION_LIMIT = 5
CERTIFICATE_LABEL_SEPARATOR = " • "


# Pydantic schemas
class MatchRequest(BaseModel):
    certificate_text: Optional[str] = None
    target_text: Optional[str] = None


class MatchResponse(BaseModel):
    success: bool
    score: float = Field(ge=0.0, le=1.0)
    match_quality: str


class TaskItem(BaseModel):
    id: str
    text: str = ""


class TaskMatchRequest(BaseModel):
    user_profile: str = ""
    tasks: List[TaskItem] = Field(default_factory=list)
    limit: Optional[int] = Field(default=None, ge=0)


class ScoredId(BaseModel):
    id: str
    score: float


class TaskMatchResponse(BaseModel):
    matches: List[ScoredId]


class ProfileItem(BaseModel):
    user_id: str
    full_name: Optional[str] = None
    area: Optional[str] = None
    seniority: Optional[str] = None
    career_goals: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    certificates: List[str] = Field(default_factory=list)


class SearchRequest(BaseModel):
    query: str = ""
    profiles: List[ProfileItem] = Field(default_factory=list)
    limit: int = Field(default=DEFAULT_LIMIT, ge=0)


class SearchResult(BaseModel):
    user_id: str
    full_name: str
    area: Optional[str] = None
    seniority: Optional[str] = None
    skills: List[str]
    certificates: List[str]
    score: float


class SearchResponse(BaseModel):
    query: str
    results: List[SearchResult]


class TitleRankingRequest(BaseModel):
    titles: List[Optional[str]] = Field(default_factory=list)
    limit: int = Field(default=DEFAULT_LIMIT, ge=0)


class RankedTitle(BaseModel):
    titulo: str
    tfidf: float
    occurrences: int = Field(ge=1)


class TitleRankingResponse(BaseModel):
    ranked: List[RankedTitle]


class SkillSuggestRequest(BaseModel):
    text: str = ""
    skills: List[str] = Field(default_factory=list)
    limit: int = Field(default=SKILL_SUGGESTION_LIMIT, ge=0)


class SkillSuggestResponse(BaseModel):
    skills: List[str]


class HealthResponse(BaseModel):
    status: str
