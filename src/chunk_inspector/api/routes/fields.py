from fastapi import APIRouter, Depends, Query

from chunk_inspector.api.dependencies import get_context
from chunk_inspector.api.schemas import FieldRequest
from chunk_inspector.core.context import InspectorContext
from chunk_inspector.core.query import open_leaf as _open_leaf
from chunk_inspector.core.query import peek_field as _peek_field
from chunk_inspector.models import FieldPreview, LeafExport

router = APIRouter(prefix="/fields", tags=["fields"])


@router.get("/preview", response_model=FieldPreview)
async def preview(
    index_path: str = Query(..., alias="indexPath"),
    chunk: str = Query(...),
    item: int = Query(..., ge=0),
    field: int = Query(..., ge=0),
    ctx: InspectorContext = Depends(get_context),
) -> FieldPreview:
    """Capped preview of one field: text, hex snippet and guessed extension."""
    return await _peek_field(ctx, index_path, chunk, item, field)


@router.post("/open", response_model=LeafExport)
async def open_field(
    body: FieldRequest,
    ctx: InspectorContext = Depends(get_context),
) -> LeafExport:
    """Export one field in full and hand it to the default application."""
    return await _open_leaf(ctx, body.index_path, body.chunk_filename, body.item_index, body.field_index)
