from __future__ import annotations

from datetime import datetime

from pydantic import Field

from talent_match.schemas.base import CamelModel


class MatchOut(CamelModel):
    id: int
    candidate_id: int = Field(alias="userId")
    job_id: int
    compatibility_score: float
    reasoning: str | None = None
    matched_at: datetime | None = None
    candidate_name: str | None = Field(default=None, alias="userName")
    job_title: str | None = None


class MatchRunResponse(CamelModel):
    success: bool = True
    match_count: int
