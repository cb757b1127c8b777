import asyncio
import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Annotated, TypeVar

import typer
from pydantic import BaseModel

from chunk_inspector.cli.render import console, render_items, render_preview, render_summary
from chunk_inspector.core.context import InspectorContext
from chunk_inspector.core.preferences import read_last_index, save_last_index
from chunk_inspector.core.query import list_chunk_items as _list_chunk_items
from chunk_inspector.core.query import load_chunk_list as _load_chunk_list
from chunk_inspector.core.query import load_index as _load_index
from chunk_inspector.core.query import open_leaf as _open_leaf
from chunk_inspector.core.query import peek_field as _peek_field
from chunk_inspector.core.resolver import classify_source
from chunk_inspector.errors import InspectorError
from chunk_inspector.models import IndexSummary
from chunk_inspector.settings import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

JsonOption = Annotated[bool, typer.Option("--json", help="Print the raw JSON response.")]


def _get_context() -> InspectorContext:
    return InspectorContext()


def _run(query: Callable[[InspectorContext], Awaitable[T]]) -> T:
    """Run one query against a fresh context, turning inspection errors into exit code 1."""
    ctx = _get_context()

    async def _go() -> T:
        try:
            return await query(ctx)
        finally:
            ctx.close()

    try:
        return asyncio.run(_go())
    except InspectorError as exc:
        console.print(f"[red]{exc.code}:[/red] {exc.message}")
        raise typer.Exit(1) from exc


def _print_json(payload: BaseModel | Sequence[BaseModel]) -> None:
    if not isinstance(payload, BaseModel):
        data = [p.model_dump(mode="json", by_alias=True) for p in payload]
    else:
        data = payload.model_dump(mode="json", by_alias=True)
    console.print_json(json.dumps(data))


def _show_summary(summary: IndexSummary, as_json: bool) -> None:
    if as_json:
        _print_json(summary)
    else:
        render_summary(summary)


def index(
    path: Annotated[str | None, typer.Argument(help="Index file, dataset directory or raw chunk.")] = None,
    as_json: JsonOption = False,
) -> None:
    """Load a dataset index. Without PATH, reload the last index opened."""
    settings = get_settings()
    target = path or read_last_index(settings.state_file)
    if not target:
        console.print("[red]Provide an index path to load.[/red]")
        raise typer.Exit(1)
    summary = _run(lambda ctx: _load_index(ctx, target.strip()))
    try:
        save_last_index(settings.state_file, target.strip())
    except OSError as exc:
        logger.warning("Could not remember last index in %s: %s", settings.state_file, exc)
    _show_summary(summary, as_json)


def chunks(
    paths: Annotated[list[str], typer.Argument(help="Chunk files to inspect.")],
    as_json: JsonOption = False,
) -> None:
    """Summarize an explicit list of chunk files."""
    summary = _run(lambda ctx: _load_chunk_list(ctx, paths))
    _show_summary(summary, as_json)


def load(
    paths: Annotated[list[str], typer.Argument(help="An index path or one or more chunk files.")],
    as_json: JsonOption = False,
) -> None:
    """Load whatever was given: an index, or a selection of chunks."""
    try:
        selection = classify_source(paths)
    except InspectorError as exc:
        console.print(f"[red]{exc.code}:[/red] {exc.message}")
        raise typer.Exit(1) from exc
    if selection.kind == "index":
        index(selection.paths[0], as_json=as_json)
    else:
        chunks(list(selection.paths), as_json=as_json)


def items(
    index_path: Annotated[str, typer.Argument(help="Index path as returned by 'index'.")],
    chunk: Annotated[str, typer.Argument(help="Chunk filename.")],
    as_json: JsonOption = False,
) -> None:
    """List the items of one chunk with their field sizes."""
    result = _run(lambda ctx: _list_chunk_items(ctx, index_path, chunk))
    if as_json:
        _print_json(result)
    else:
        render_items(result)


def peek(
    index_path: Annotated[str, typer.Argument(help="Index path as returned by 'index'.")],
    chunk: Annotated[str, typer.Argument(help="Chunk filename.")],
    item: Annotated[int, typer.Argument(min=0, help="Item index.")],
    field: Annotated[int, typer.Argument(min=0, help="Field index.")],
    as_json: JsonOption = False,
) -> None:
    """Preview one field."""
    preview = _run(lambda ctx: _peek_field(ctx, index_path, chunk, item, field))
    if as_json:
        _print_json(preview)
    else:
        render_preview(preview)


def open_field(
    index_path: Annotated[str, typer.Argument(help="Index path as returned by 'index'.")],
    chunk: Annotated[str, typer.Argument(help="Chunk filename.")],
    item: Annotated[int, typer.Argument(min=0, help="Item index.")],
    field: Annotated[int, typer.Argument(min=0, help="Field index.")],
) -> None:
    """Export one field to a temp file and open it with the default application."""
    export = _run(lambda ctx: _open_leaf(ctx, index_path, chunk, item, field))
    console.print(f"[green]Opened[/green] {export.describe()}")
