"""FastMCP server exposing chunk-inspector tools."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from chunk_inspector.core.context import InspectorContext
from chunk_inspector.core.query import list_chunk_items as _list_chunk_items
from chunk_inspector.core.query import load_chunk_list as _load_chunk_list
from chunk_inspector.core.query import load_index as _load_index
from chunk_inspector.core.query import open_leaf as _open_leaf
from chunk_inspector.core.query import peek_field as _peek_field
from chunk_inspector.errors import InspectorError


def _error(exc: InspectorError) -> str:
    return f"Error: {exc.code}: {exc.message}"


def create_mcp_server(ctx: InspectorContext) -> FastMCP:
    """Create a FastMCP server wired to the given inspector context."""

    mcp = FastMCP("chunk-inspector", instructions="Inspect chunked, indexed binary datasets.")

    @mcp.tool()
    async def load_index(path: str) -> dict[str, Any] | str:
        """Load a dataset index from an index file, directory or raw chunk."""
        try:
            summary = await _load_index(ctx, path)
        except InspectorError as exc:
            return _error(exc)
        return summary.model_dump(mode="json", by_alias=True)

    @mcp.tool()
    async def load_chunk_list(paths: list[str]) -> dict[str, Any] | str:
        """Summarize an explicit list of chunk files."""
        try:
            summary = await _load_chunk_list(ctx, paths)
        except InspectorError as exc:
            return _error(exc)
        return summary.model_dump(mode="json", by_alias=True)

    @mcp.tool()
    async def list_chunk_items(index_path: str, chunk_filename: str) -> list[dict[str, Any]] | str:
        """List the items of a chunk with their per-field sizes."""
        try:
            items = await _list_chunk_items(ctx, index_path, chunk_filename)
        except InspectorError as exc:
            return _error(exc)
        return [item.model_dump(mode="json", by_alias=True) for item in items]

    @mcp.tool()
    async def peek_field(
        index_path: str, chunk_filename: str, item_index: int, field_index: int
    ) -> dict[str, Any] | str:
        """Preview one field: text, hex snippet, guessed extension and true size."""
        try:
            preview = await _peek_field(ctx, index_path, chunk_filename, item_index, field_index)
        except InspectorError as exc:
            return _error(exc)
        return preview.model_dump(mode="json", by_alias=True)

    @mcp.tool()
    async def open_leaf(index_path: str, chunk_filename: str, item_index: int, field_index: int) -> str:
        """Export one field to a temp file and open it with the default application."""
        try:
            export = await _open_leaf(ctx, index_path, chunk_filename, item_index, field_index)
        except InspectorError as exc:
            return _error(exc)
        return export.describe()

    return mcp
