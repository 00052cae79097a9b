"""
Chat-completion client for the external matching model.

Talks to any OpenAI-compatible endpoint; the default configuration points at
Gemini's compatibility layer.
"""

from __future__ import annotations

from loguru import logger
from openai import OpenAI

from talent_match.config import Settings, settings as default_settings
from talent_match.services.prompts import SYSTEM_PROMPT


class AICompletionClient:
    """Sends one prompt, returns the model's raw text."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or default_settings
        self._client: OpenAI | None = None

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.settings.ai_api_key:
                raise RuntimeError("AI service API key is not configured (set AI_API_KEY)")
            self._client = OpenAI(
                api_key=self.settings.ai_api_key,
                base_url=self.settings.ai_base_url or None,
                timeout=self.settings.ai_timeout_seconds,
                max_retries=0,
            )
        return self._client

    def complete(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.settings.ai_model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.settings.ai_temperature,
        )
        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.warning("AI service returned an empty completion")
            return ""
        return content
