"""Search orchestrator — runs one free-text travel search end to end.

    rate limit -> validate -> cache -> keyword shortcut
        -> LLM (with deadline) -> validate reply -> budget re-filter
        -> hint if empty -> cache

Every failure leaves as a ``SearchError`` subclass. Only successful responses
are cached, empty-with-hint ones included.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import ValidationError

from tripmatch.config import settings
from tripmatch.data.inventory import Inventory, inventory as default_inventory
from tripmatch.exceptions import (
    InvalidQueryError,
    LLMTimeoutError,
    RateLimitExceededError,
    SearchCancelledError,
)
from tripmatch.schemas.search import Match, SearchRequest, SearchResponse
from tripmatch.services.budget_parser import Budget, extract_budget
from tripmatch.services.cache_service import CacheService, normalize_query
from tripmatch.services.hint_service import build_hint
from tripmatch.services.keyword_matcher import try_match
from tripmatch.services.llm_client import CompletionClient, llm_client
from tripmatch.services.prompt_builder import build_system_prompt
from tripmatch.services.rate_limiter import RateLimiter
from tripmatch.services.response_validator import validate_llm_reply

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Please describe the kind of trip you're looking for."


class SearchOrchestrator:
    """Coordinates validation, caching, the LLM call and result shaping.

    The cache and rate limiter are owned per instance so tests can pass in
    fresh ones with a fake clock.
    """

    def __init__(
        self,
        llm: CompletionClient = llm_client,
        cache: CacheService | None = None,
        rate_limiter: RateLimiter | None = None,
        inventory: Inventory = default_inventory,
        timeout_seconds: float = settings.llm_timeout_seconds,
        max_query_length: int = settings.max_query_length,
    ):
        self.llm = llm
        self.cache = cache if cache is not None else CacheService()
        self.rate_limiter = rate_limiter if rate_limiter is not None else RateLimiter()
        self.inventory = inventory
        self.timeout_seconds = timeout_seconds
        self.max_query_length = max_query_length

    def validate_query(self, body: Any) -> str:
        """Return the trimmed query from a request body or raise InvalidQueryError."""
        try:
            request = SearchRequest.model_validate(body)
        except ValidationError:
            raise InvalidQueryError() from None

        query = request.query.strip()
        if not query:
            raise InvalidQueryError(EMPTY_QUERY_MESSAGE)
        if len(query) > self.max_query_length:
            raise InvalidQueryError(f"Please keep your description to {self.max_query_length} characters or fewer.")
        return query

    async def search(
        self,
        client_id: str,
        body: Any,
        is_disconnected: Callable[[], Awaitable[bool]] | None = None,
    ) -> SearchResponse:
        """
        Run a search for a raw request body on behalf of ``client_id``.

        ``is_disconnected`` is polled once after the LLM call; if the client
        has gone, the result is dropped instead of cached.
        """
        start_time = time.monotonic()

        # Quota is consumed before validation, so rejected bodies count too
        if not self.rate_limiter.check_and_consume(client_id):
            raise RateLimitExceededError()

        query = self.validate_query(body)

        cached = self.cache.get(query)
        if cached is not None:
            logger.info(f"Cache hit for {normalize_query(query)!r}")
            return cached

        budget = extract_budget(query)

        shortcut = try_match(normalize_query(query), self.inventory)
        if shortcut is not None:
            response = self._finalize(query, budget, shortcut)
            self.cache.set(query, response)
            return response

        matches = await self._ask_llm(query, budget)

        if is_disconnected is not None and await is_disconnected():
            logger.info(f"Client disconnected, discarding result for {normalize_query(query)!r}")
            raise SearchCancelledError()

        response = self._finalize(query, budget, matches)
        self.cache.set(query, response)

        elapsed = int((time.monotonic() - start_time) * 1000)
        logger.info(
            f"Search {normalize_query(query)!r}: {len(response.matches)} matches "
            f"(budget={budget}) in {elapsed}ms"
        )
        return response

    async def _ask_llm(self, query: str, budget: Budget) -> list[Match]:
        system = build_system_prompt(budget, self.inventory)
        try:
            raw = await asyncio.wait_for(
                self.llm.complete(
                    system=system,
                    user=query,
                    max_tokens=settings.llm_max_tokens,
                    temperature=settings.llm_temperature,
                    json_mode=True,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(f"LLM call exceeded {self.timeout_seconds}s for {normalize_query(query)!r}")
            raise LLMTimeoutError() from None
        return validate_llm_reply(raw, self.inventory)

    def _apply_budget(self, matches: list[Match], budget: Budget) -> list[Match]:
        """Drop matches whose inventory price breaks the budget, and repeated ids."""
        kept = []
        seen: set[int] = set()
        for match in matches:
            item = self.inventory.get(match.id)
            if item is None or item.id in seen:
                continue
            seen.add(item.id)
            if not budget.allows(item.price):
                logger.info(f"Dropping item {item.id} (${item.price}): outside budget {budget}")
                continue
            kept.append(match)
        return kept

    def _finalize(self, query: str, budget: Budget, matches: list[Match]) -> SearchResponse:
        matches = self._apply_budget(matches, budget)
        if matches:
            return SearchResponse(matches=matches)
        return SearchResponse(matches=[], hint=build_hint(query, budget, self.inventory))


# Singleton
search_orchestrator = SearchOrchestrator()
