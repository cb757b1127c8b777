from fastapi import APIRouter, Depends

from chunk_inspector.api.dependencies import get_context
from chunk_inspector.api.schemas import HealthResponse, ReadinessResponse
from chunk_inspector.core.context import InspectorContext

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


@router.get("/healthz/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe: is the process alive?"""
    return HealthResponse()


@router.get("/healthz/ready", response_model=ReadinessResponse)
async def readiness(ctx: InspectorContext = Depends(get_context)) -> ReadinessResponse:
    """Readiness probe: reports chunk cache occupancy."""
    return ReadinessResponse(cache_entries=len(ctx.cache), cache_bytes=ctx.cache.total_bytes)
