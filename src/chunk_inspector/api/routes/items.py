from fastapi import APIRouter, Depends, Query

from chunk_inspector.api.dependencies import get_context
from chunk_inspector.core.context import InspectorContext
from chunk_inspector.core.query import list_chunk_items as _list_chunk_items
from chunk_inspector.models import ItemMeta

router = APIRouter(tags=["items"])


@router.get("/items", response_model=list[ItemMeta])
async def items(
    index_path: str = Query(..., alias="indexPath"),
    chunk: str = Query(...),
    ctx: InspectorContext = Depends(get_context),
) -> list[ItemMeta]:
    return await _list_chunk_items(ctx, index_path, chunk)
