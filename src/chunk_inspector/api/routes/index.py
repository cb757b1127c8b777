from fastapi import APIRouter, Depends, Query

from chunk_inspector.api.dependencies import get_context
from chunk_inspector.api.schemas import ChunkListRequest
from chunk_inspector.core.context import InspectorContext
from chunk_inspector.core.query import load_chunk_list as _load_chunk_list
from chunk_inspector.core.query import load_index as _load_index
from chunk_inspector.models import IndexSummary

router = APIRouter(tags=["index"])


@router.get("/index", response_model=IndexSummary)
async def index(
    path: str = Query(..., min_length=1, description="Index file, dataset directory or raw chunk."),
    ctx: InspectorContext = Depends(get_context),
) -> IndexSummary:
    return await _load_index(ctx, path.strip())


@router.post("/chunks", response_model=IndexSummary)
async def chunks(
    body: ChunkListRequest,
    ctx: InspectorContext = Depends(get_context),
) -> IndexSummary:
    """Summarize an explicit selection of chunk files."""
    return await _load_chunk_list(ctx, body.paths)
