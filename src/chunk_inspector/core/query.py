from collections.abc import Sequence

from chunk_inspector.core import operations
from chunk_inspector.core.context import InspectorContext
from chunk_inspector.models import FieldPreview, IndexSummary, ItemMeta, LeafExport


async def load_index(ctx: InspectorContext, index_path: str) -> IndexSummary:
    return await ctx.run(operations.load_index, index_path)


async def load_chunk_list(ctx: InspectorContext, paths: Sequence[str]) -> IndexSummary:
    return await ctx.run(operations.load_chunk_list, list(paths))


async def list_chunk_items(ctx: InspectorContext, index_path: str, chunk_filename: str) -> list[ItemMeta]:
    return await ctx.run(operations.list_chunk_items, index_path, chunk_filename, ctx.cache)


async def peek_field(
    ctx: InspectorContext,
    index_path: str,
    chunk_filename: str,
    item_index: int,
    field_index: int,
) -> FieldPreview:
    return await ctx.run(
        operations.peek_field,
        index_path,
        chunk_filename,
        item_index,
        field_index,
        ctx.cache,
        preview_bytes=ctx.settings.preview_bytes,
    )


async def open_leaf(
    ctx: InspectorContext,
    index_path: str,
    chunk_filename: str,
    item_index: int,
    field_index: int,
) -> LeafExport:
    return await ctx.run(
        operations.open_leaf,
        index_path,
        chunk_filename,
        item_index,
        field_index,
        ctx.cache,
        ctx.launcher,
        ctx.settings.export_dir,
    )
