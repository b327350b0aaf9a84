"""Search router — free-text travel search over the inventory."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from tripmatch.exceptions import SearchError
from tripmatch.services.rate_limiter import UNKNOWN_CLIENT
from tripmatch.services.search_orchestrator import SearchOrchestrator, search_orchestrator

logger = logging.getLogger(__name__)

router = APIRouter()


def get_search_orchestrator() -> SearchOrchestrator:
    return search_orchestrator


def get_client_id(request: Request) -> str:
    """Best-effort client identity for rate limiting."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return UNKNOWN_CLIENT


@router.post("")
async def search(
    request: Request,
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator),
):
    """Match a free-text trip description to inventory items."""
    # Body is read by hand so rate limiting runs before validation
    try:
        body = await request.json()
    except ValueError:
        body = None

    try:
        result = await orchestrator.search(
            get_client_id(request),
            body,
            is_disconnected=request.is_disconnected,
        )
    except SearchError:
        raise
    except Exception as e:
        logger.exception(f"Search failed unexpectedly: {e}")
        raise SearchError() from e

    return JSONResponse(content=result.to_body())
