"""Unified LLM client — tries OpenAI first, falls back to Anthropic."""

import logging
from typing import Protocol

import anthropic
import openai
from openai import AsyncOpenAI

from tripmatch.config import get_settings
from tripmatch.exceptions import LLMConfigurationError, LLMRateLimitError, LLMUnavailableError

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    async def complete(
        self,
        system: str,
        user: str,
        *,
        max_tokens: int = 1000,
        temperature: float = 0,
        json_mode: bool = False,
    ) -> str: ...


class LLMClient:
    """Unified async LLM client with OpenAI primary + Anthropic fallback.

    Credentials are read on every call, so rotating a key needs no restart.
    Each provider gets a single attempt (SDK retries are disabled).
    """

    async def complete(
        self,
        system: str,
        user: str,
        *,
        max_tokens: int = 1000,
        temperature: float = 0,
        json_mode: bool = False,
    ) -> str:
        """Get a completion from the best available LLM.

        Args:
            system: System prompt
            user: User message
            max_tokens: Max output tokens
            temperature: Sampling temperature
            json_mode: If True, force JSON output (OpenAI response_format)

        Returns:
            Raw text response from the LLM.

        Raises:
            LLMConfigurationError if no provider has a key.
            LLMRateLimitError if every provider failed and one of them rate-limited us.
            LLMUnavailableError if every provider failed otherwise.
        """
        config = get_settings()
        if not config.openai_api_key and not config.anthropic_api_key:
            logger.error("No LLM API key configured (OPENAI_API_KEY / ANTHROPIC_API_KEY)")
            raise LLMConfigurationError()

        errors = []
        rate_limited = False

        # Try OpenAI first
        if config.openai_api_key:
            try:
                client = AsyncOpenAI(api_key=config.openai_api_key, max_retries=0)
                kwargs: dict = {
                    "model": config.openai_model,
                    "max_tokens": max_tokens,
                    "temperature": temperature,
                    "messages": [
                        {"role": "system", "content": system},
                        {"role": "user", "content": user},
                    ],
                }
                if json_mode:
                    kwargs["response_format"] = {"type": "json_object"}
                response = await client.chat.completions.create(**kwargs)
                return (response.choices[0].message.content or "").strip()
            except openai.RateLimitError as e:
                rate_limited = True
                errors.append(f"OpenAI: {e}")
                logger.warning(f"OpenAI rate-limited us: {e}")
            except Exception as e:
                errors.append(f"OpenAI: {e}")
                logger.warning(f"OpenAI failed: {e}")

        # Fallback to Anthropic
        if config.anthropic_api_key:
            try:
                client = anthropic.AsyncAnthropic(api_key=config.anthropic_api_key, max_retries=0)
                response = await client.messages.create(
                    model=config.anthropic_model,
                    max_tokens=max_tokens,
                    temperature=temperature,
                    system=system,
                    messages=[{"role": "user", "content": user}],
                )
                return response.content[0].text.strip()
            except anthropic.RateLimitError as e:
                rate_limited = True
                errors.append(f"Anthropic: {e}")
                logger.warning(f"Anthropic rate-limited us: {e}")
            except Exception as e:
                errors.append(f"Anthropic: {e}")
                logger.warning(f"Anthropic failed: {e}")

        detail = "; ".join(errors)
        logger.error(f"All LLM providers failed: {detail}")
        if rate_limited:
            raise LLMRateLimitError()
        raise LLMUnavailableError()


# Singleton
llm_client = LLMClient()
