from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from talent_match.errors import InsufficientInput, MalformedAIResponse
from talent_match.models.job import JOB_STATUS_OPEN
from talent_match.services.ai_client import AICompletionClient
from talent_match.services.prompts import render_match_prompt


_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
_DECODER = json.JSONDecoder()


@dataclass(frozen=True)
class MatchResult:
    candidate_id: int
    job_id: int
    score: float
    reasoning: str | None = None


class SuggestedMatch(BaseModel):
    job_id: int = Field(alias="jobId")
    score: float = Field(ge=0, le=100)
    reasoning: str | None = None


def extract_json_object(text: str) -> dict[str, Any]:
    """Decode the first JSON object in ``text``, looking inside a code fence when there is one.

    Decoding starts at the first ``{`` and stops at its balancing ``}``, so
    prose before or after the object is ignored.
    """
    if not text or not text.strip():
        raise MalformedAIResponse("Empty response from AI service")

    fenced = _FENCE_RE.search(text)
    body = fenced.group(1) if fenced and "{" in fenced.group(1) else text

    start = body.find("{")
    if start < 0:
        raise MalformedAIResponse("No valid JSON found in response")
    try:
        payload, _ = _DECODER.raw_decode(body, start)
    except json.JSONDecodeError as exc:
        raise MalformedAIResponse(f"Invalid JSON in response: {exc.msg}") from exc
    return payload


def parse_match_response(text: str) -> list[SuggestedMatch]:
    """Validate each suggested match on its own; entries that fail are logged and dropped."""
    payload = extract_json_object(text)
    entries = payload.get("matches") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        raise MalformedAIResponse('Response has no "matches" list')

    suggestions: list[SuggestedMatch] = []
    for position, entry in enumerate(entries):
        try:
            suggestions.append(SuggestedMatch.model_validate(entry))
        except ValidationError:
            logger.warning(f"Dropping invalid match entry {position}: {entry!r}")
    return suggestions


class JobMatcher:
    """Scores every eligible candidate against the open jobs, one AI call per candidate."""

    def __init__(self, ai_client: AICompletionClient) -> None:
        self.ai_client = ai_client

    @staticmethod
    def is_matchable(candidate: Any) -> bool:
        return bool((candidate.cv_text or "").strip() or (candidate.skills or "").strip())

    def build_prompt(self, candidate: Any, jobs: list[Any]) -> str:
        return render_match_prompt(candidate, jobs)

    def match_candidate(self, candidate: Any, jobs: list[Any]) -> list[MatchResult]:
        raw = self.ai_client.complete(self.build_prompt(candidate, jobs))
        suggestions = parse_match_response(raw)

        known_ids = {job.id for job in jobs}
        seen: set[int] = set()
        results: list[MatchResult] = []
        for suggestion in suggestions:
            if suggestion.job_id not in known_ids:
                logger.warning(f"Dropping match for candidate {candidate.id}: unknown job id {suggestion.job_id}")
                continue
            if suggestion.job_id in seen:
                continue
            seen.add(suggestion.job_id)
            results.append(
                MatchResult(
                    candidate_id=candidate.id,
                    job_id=suggestion.job_id,
                    score=suggestion.score,
                    reasoning=suggestion.reasoning,
                )
            )
        return results

    def run_matching_cycle(self, candidates: list[Any], open_jobs: list[Any]) -> list[MatchResult]:
        jobs = [job for job in open_jobs if (job.status or JOB_STATUS_OPEN) == JOB_STATUS_OPEN]
        if not candidates or not jobs:
            raise InsufficientInput("No users or jobs to match")

        results: list[MatchResult] = []
        for candidate in candidates:
            if not self.is_matchable(candidate):
                logger.debug(f"Skipping candidate {candidate.id}: no CV text or skills")
                continue
            try:
                candidate_results = self.match_candidate(candidate, jobs)
            except MalformedAIResponse as exc:
                logger.warning(f"Skipping candidate {candidate.id}: {exc}")
                continue
            logger.info(f"Candidate {candidate.id} matched {len(candidate_results)} of {len(jobs)} jobs")
            results.extend(candidate_results)

        logger.info(f"Matching cycle produced {len(results)} matches for {len(candidates)} candidates")
        return results
