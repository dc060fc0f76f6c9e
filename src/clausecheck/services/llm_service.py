"""
LLM service for plain-language clause explanations.

Supports Claude (Anthropic) and GPT-4o (OpenAI) with automatic fallback.
"""

import json
from functools import lru_cache
from typing import Any

import structlog
from anthropic import Anthropic
from openai import OpenAI
from tenacity import retry, stop_after_attempt, wait_exponential

from clausecheck.config import get_settings

logger = structlog.get_logger(__name__)


class LLMService:
    """LLM service with primary + fallback providers and retry logic."""

    def __init__(self):
        settings = get_settings()
        self.settings = settings

        self._anthropic: Anthropic | None = None
        self._openai: OpenAI | None = None

        if settings.anthropic_api_key:
            self._anthropic = Anthropic(api_key=settings.anthropic_api_key)
        if settings.openai_api_key:
            self._openai = OpenAI(api_key=settings.openai_api_key)

        self.primary_provider = settings.primary_llm_provider
        self.primary_model = settings.primary_llm_model
        self.fallback_provider = settings.fallback_llm_provider
        self.fallback_model = settings.fallback_llm_model

    @property
    def available(self) -> bool:
        """Whether any provider client is configured."""
        return self._anthropic is not None or self._openai is not None

    def health_check(self) -> dict[str, bool]:
        """Report which providers are configured."""
        return {
            "anthropic": self._anthropic is not None,
            "openai": self._openai is not None,
        }

    # =========================================================================
    # Core LLM Calls
    # =========================================================================

    def _model_for(self, provider: str) -> str:
        return self.primary_model if provider == self.primary_provider else self.fallback_model

    @retry(stop=stop_after_attempt(3), wait=wait_exponential(multiplier=1, min=2, max=10))
    def _call_anthropic(
        self, system_prompt: str, user_prompt: str, max_tokens: int | None = None
    ) -> str:
        if self._anthropic is None:
            raise ValueError("Anthropic client not configured. Set ANTHROPIC_API_KEY.")
        response = self._anthropic.messages.create(
            model=self._model_for("anthropic"),
            max_tokens=max_tokens or self.settings.llm_max_tokens,
            temperature=self.settings.llm_temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        return response.content[0].text

    @retry(stop=stop_after_attempt(3), wait=wait_exponential(multiplier=1, min=2, max=10))
    def _call_openai(
        self, system_prompt: str, user_prompt: str, max_tokens: int | None = None
    ) -> str:
        if self._openai is None:
            raise ValueError("OpenAI client not configured. Set OPENAI_API_KEY.")
        response = self._openai.chat.completions.create(
            model=self._model_for("openai"),
            max_tokens=max_tokens or self.settings.llm_max_tokens,
            temperature=self.settings.llm_temperature,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        return response.choices[0].message.content or ""

    def _call(self, provider: str, system_prompt: str, user_prompt: str, max_tokens: int | None):
        if provider == "anthropic" and self._anthropic:
            return self._call_anthropic(system_prompt, user_prompt, max_tokens)
        if provider == "openai" and self._openai:
            return self._call_openai(system_prompt, user_prompt, max_tokens)
        return None

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int | None = None,
        use_fallback: bool = True,
    ) -> tuple[str, str]:
        """Generate LLM response with automatic fallback. Returns (text, model_used)."""
        try:
            text = self._call(self.primary_provider, system_prompt, user_prompt, max_tokens)
            if text is not None:
                return text, self.primary_model
        except Exception as e:
            logger.warning(
                "primary_llm_failed",
                provider=self.primary_provider,
                error=str(e),
            )
            if not use_fallback:
                raise

        try:
            text = self._call(self.fallback_provider, system_prompt, user_prompt, max_tokens)
            if text is not None:
                return text, self.fallback_model
        except Exception as e:
            logger.error(
                "fallback_llm_failed",
                provider=self.fallback_provider,
                error=str(e),
            )
            raise

        raise ValueError("No LLM provider available. Set ANTHROPIC_API_KEY or OPENAI_API_KEY.")

    def parse_json(self, text: str) -> Any:
        """Extract JSON from LLM response text."""
        if "```json" in text:
            start = text.find("```json") + 7
            end = text.find("```", start)
            text = text[start:end].strip()
        elif "```" in text:
            start = text.find("```") + 3
            end = text.find("```", start)
            text = text[start:end].strip()

        try:
            return json.loads(text)
        except json.JSONDecodeError:
            start = text.find("{")
            end = text.rfind("}") + 1
            if start >= 0 and end > start:
                try:
                    return json.loads(text[start:end])
                except json.JSONDecodeError:
                    return None
            return None


@lru_cache()
def get_llm_service() -> LLMService:
    """Get cached LLM service instance."""
    return LLMService()
