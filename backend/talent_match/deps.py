from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from talent_match.config import settings
from talent_match.services.ai_client import AICompletionClient
from talent_match.services.cv_extractor import CVTextExtractor
from talent_match.services.matcher import JobMatcher
from talent_match.services.object_store import CVObjectStore


@lru_cache
def get_object_store() -> CVObjectStore:
    return CVObjectStore.from_settings(settings)


@lru_cache
def get_text_extractor() -> CVTextExtractor:
    return CVTextExtractor()


@lru_cache
def get_ai_client() -> AICompletionClient:
    return AICompletionClient(settings)


def get_matcher(ai_client: AICompletionClient = Depends(get_ai_client)) -> JobMatcher:
    return JobMatcher(ai_client)
