from __future__ import annotations

"""
FastAPI adapter exposing the matching engine over HTTP.

The surrounding application owns persistence: every endpoint receives
the already fetched texts/records in the request body and returns
scores or ranked lists.  Nothing is cached between requests.
"""

from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .config import (
    HealthResponse,
    MatchRequest,
    MatchResponse,
    RankedTitle,
    ScoredId,
    SearchRequest,
    SearchResponse,
    SearchResult,
    SkillSuggestRequest,
    SkillSuggestResponse,
    TaskMatchRequest,
    TaskMatchResponse,
    TitleRankingRequest,
    TitleRankingResponse,
)
from .normalize import basic_clean
from .profiles import CandidateProfile, search_candidates
from .ranking import rank, rank_titles, suggest_skills
from .scoring import match

# Certificates listed per search hit
MAX_CERTIFICATES_PER_RESULT = 5

app = FastAPI(title="lexmatch")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


@app.post("/match", response_model=MatchResponse)
def match_certificate(req: MatchRequest) -> MatchResponse:
    certificate_text = basic_clean(req.certificate_text)
    target_text = basic_clean(req.target_text)
    if not certificate_text or not target_text:
        raise HTTPException(
            status_code=400,
            detail="Invalid parameters: send certificate_text and target_text in the request body.",
        )
    result = match(certificate_text, target_text)
    logger.info("Certificate match score={:.4f} quality={}", result.score, result.quality)
    return MatchResponse(success=True, score=result.score, match_quality=result.quality)


@app.post("/match/tasks", response_model=TaskMatchResponse)
def match_tasks(req: TaskMatchRequest) -> TaskMatchResponse:
    limit = len(req.tasks) if req.limit is None else req.limit
    ranked = rank(
        basic_clean(req.user_profile),
        [(task.id, basic_clean(task.text)) for task in req.tasks],
        limit=limit,
    )
    return TaskMatchResponse(matches=[ScoredId(id=item.id, score=item.score) for item in ranked])


@app.post("/search", response_model=SearchResponse)
def search(req: SearchRequest) -> SearchResponse:
    query = req.query.strip()
    if not query:
        return SearchResponse(query=query, results=[])
    profiles = [
        CandidateProfile(
            user_id=p.user_id,
            full_name=p.full_name,
            area=p.area,
            seniority=p.seniority,
            career_goals=p.career_goals,
            skills=list(p.skills),
            certificates=list(p.certificates),
        )
        for p in req.profiles
    ]
    try:
        matches = search_candidates(query, profiles, limit=req.limit)
    except Exception as e:
        logger.exception("Candidate search failed: {}", e)
        raise HTTPException(status_code=500, detail="Internal error while searching candidates") from e
    results: List[SearchResult] = [
        SearchResult(
            user_id=m.profile.user_id,
            full_name=m.profile.display_name,
            area=m.profile.area,
            seniority=m.profile.seniority,
            skills=m.profile.skills,
            certificates=m.profile.certificates[:MAX_CERTIFICATES_PER_RESULT],
            score=m.score,
        )
        for m in matches
    ]
    logger.info("Search '{}' returned {} results", query, len(results))
    return SearchResponse(query=query, results=results)


@app.post("/certificates/ranking", response_model=TitleRankingResponse)
def certificate_ranking(req: TitleRankingRequest) -> TitleRankingResponse:
    try:
        ranked = rank_titles(req.titles, limit=req.limit)
    except Exception as e:
        logger.exception("Certificate ranking failed: {}", e)
        raise HTTPException(status_code=500, detail="Internal error while ranking certificates") from e
    return TitleRankingResponse(
        ranked=[
            RankedTitle(titulo=item.text, tfidf=item.score, occurrences=item.occurrences)
            for item in ranked
        ]
    )


@app.post("/skills/suggest", response_model=SkillSuggestResponse)
def skills_suggest(req: SkillSuggestRequest) -> SkillSuggestResponse:
    text = basic_clean(req.text)
    if not text:
        return SkillSuggestResponse(skills=[])
    return SkillSuggestResponse(skills=suggest_skills(text, req.skills, limit=req.limit))
