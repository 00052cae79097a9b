from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.orm import Session

from talent_match.database import get_db
from talent_match.deps import get_matcher
from talent_match.schemas.match import MatchOut, MatchRunResponse
from talent_match.services.matcher import JobMatcher
from talent_match.services.repository import CandidateStore, JobStore, MatchStore


router = APIRouter()
candidates = CandidateStore()
jobs = JobStore()
matches = MatchStore()


@router.post("/match", response_model=MatchRunResponse)
def run_matching(
    db: Session = Depends(get_db),
    matcher: JobMatcher = Depends(get_matcher),
) -> MatchRunResponse:
    # Concurrent runs are not serialized; the last replace_all wins.
    all_candidates = candidates.list_all(db)
    open_jobs = jobs.list_open(db)
    logger.info(f"Starting matching cycle: {len(all_candidates)} candidates, {len(open_jobs)} open jobs")

    results = matcher.run_matching_cycle(all_candidates, open_jobs)
    match_count = matches.replace_all(db, results)
    return MatchRunResponse(match_count=match_count)


@router.get("/matches", response_model=list[MatchOut])
def list_matches(db: Session = Depends(get_db)) -> list[dict[str, Any]]:
    return matches.list_with_names(db)
