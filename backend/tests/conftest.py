"""Shared fixtures: fake clock, stub LLM, and an isolated search pipeline."""

import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from tripmatch.data.inventory import inventory as default_inventory
from tripmatch.services.cache_service import CacheService
from tripmatch.services.rate_limiter import RateLimiter
from tripmatch.services.search_orchestrator import SearchOrchestrator


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubLLM:
    """Stands in for the LLM client and records every call."""

    def __init__(self, reply: str | dict = '{"matches": []}', delay: float = 0.0, error: Exception | None = None):
        self.reply = reply
        self.delay = delay
        self.error = error
        self.calls: list[dict] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def complete(self, system, user, *, max_tokens=1000, temperature=0, json_mode=False):
        self.calls.append({"system": system, "user": user, "temperature": temperature, "json_mode": json_mode})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if isinstance(self.reply, dict):
            return json.dumps(self.reply)
        return self.reply


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def stub_llm() -> StubLLM:
    return StubLLM()


@pytest.fixture
def make_orchestrator(clock):
    """Build an orchestrator on fresh stores sharing the fake clock."""

    def _make(llm: StubLLM, inventory=default_inventory, timeout_seconds: float = 1.0) -> SearchOrchestrator:
        return SearchOrchestrator(
            llm=llm,
            cache=CacheService(ttl=300, clock=clock),
            rate_limiter=RateLimiter(limit=10, window_seconds=60, clock=clock),
            inventory=inventory,
            timeout_seconds=timeout_seconds,
        )

    return _make


@pytest.fixture
def orchestrator(make_orchestrator, stub_llm) -> SearchOrchestrator:
    return make_orchestrator(stub_llm)


@pytest.fixture
def client(orchestrator):
    from tripmatch.main import app
    from tripmatch.routers.search import get_search_orchestrator

    app.dependency_overrides[get_search_orchestrator] = lambda: orchestrator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def client_for():
    """Build a TestClient wired to a specific orchestrator."""
    from tripmatch.main import app
    from tripmatch.routers.search import get_search_orchestrator

    def _client(orchestrator: SearchOrchestrator) -> TestClient:
        app.dependency_overrides[get_search_orchestrator] = lambda: orchestrator
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()
