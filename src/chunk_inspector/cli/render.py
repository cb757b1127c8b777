from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.table import Table

from chunk_inspector.models import FieldPreview, IndexSummary, ItemMeta

console = Console()

_UNITS = ("B", "KB", "MB", "GB")


def format_bytes(value: float) -> str:
    """Human-readable size: ``512 B``, ``1.5 KB``, ``12 MB``."""
    idx = 0
    while value >= 1024 and idx < len(_UNITS) - 1:
        value /= 1024
        idx += 1
    return f"{value:.0f} {_UNITS[idx]}" if value >= 10 else f"{value:.1f} {_UNITS[idx]}"


def render_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def render_summary(summary: IndexSummary) -> None:
    console.print(f"[bold]Index[/bold]  {summary.index_path}")
    console.print(f"[bold]Root[/bold]   {summary.root_dir}")
    console.print(f"[bold]Format[/bold] {' · '.join(summary.data_format) or 'n/a'}")
    console.print(f"[bold]Compression[/bold] {summary.compression or 'none'}")
    console.print(f"[bold]Total[/bold]  {format_bytes(summary.total_bytes)}")
    render_table(
        ["filename", "items", "size", "dim", "exists"],
        [
            (c.filename, c.chunk_size, format_bytes(c.chunk_bytes), "" if c.dim is None else c.dim, c.exists)
            for c in summary.chunks
        ],
    )


def render_items(items: Sequence[ItemMeta]) -> None:
    render_table(
        ["item", "size", "fields"],
        [
            (item.item_index, format_bytes(item.total_bytes), ", ".join(format_bytes(f.size) for f in item.fields))
            for item in items
        ],
    )


def render_preview(preview: FieldPreview) -> None:
    console.print(f"[bold]Size[/bold]      {format_bytes(preview.size)} ({preview.size} bytes)")
    console.print(f"[bold]Extension[/bold] {preview.guessed_ext or 'unknown'}")
    if preview.preview_text is not None:
        console.print(preview.preview_text, markup=False, highlight=False)
    else:
        console.print(f"[bold]Hex[/bold]       {preview.hex_snippet}")
