"""Blocking implementations of the inspection queries.

Each function is one self-contained unit of work: it resolves the dataset
afresh, touches only the files it needs and returns a view model. The async
wrappers in ``chunk_inspector.core.query`` run these on a worker pool.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from chunk_inspector.core.access import load_chunk_access
from chunk_inspector.core.cache import ChunkCache
from chunk_inspector.core.decoder import list_items
from chunk_inspector.core.extract import build_preview, export_name, read_field
from chunk_inspector.core.ports.launcher import Launcher
from chunk_inspector.core.resolver import DatasetDescription, describe_chunk_list, resolve_dataset
from chunk_inspector.core.sniff import guess_extension
from chunk_inspector.errors import translate_os_errors
from chunk_inspector.models import ChunkSummary, FieldPreview, IndexSummary, ItemMeta, LeafExport
from chunk_inspector.settings import PREVIEW_BYTES

logger = logging.getLogger(__name__)


def _summarize(
    description: DatasetDescription,
    chunk_paths: dict[str, Path] | None = None,
) -> IndexSummary:
    chunk_paths = chunk_paths or {}
    summaries = []
    for record in description.chunks:
        full = chunk_paths.get(record.filename, description.root_dir / record.filename)
        summaries.append(
            ChunkSummary(
                filename=record.filename,
                path=str(full),
                chunk_size=record.chunk_size,
                chunk_bytes=record.chunk_bytes,
                dim=record.dim,
                exists=full.exists(),
            )
        )
    return IndexSummary(
        index_path=str(description.source),
        root_dir=str(description.root_dir),
        data_format=description.data_format,
        compression=description.config.compression,
        chunk_size=description.config.chunk_size,
        chunk_bytes=description.config.chunk_bytes,
        config_raw=description.config_raw,
        chunks=summaries,
    )


def _format_token(description: DatasetDescription, field_index: int) -> str | None:
    data_format = description.data_format
    return data_format[field_index] if 0 <= field_index < len(data_format) else None


@translate_os_errors
def load_index(index_path: str) -> IndexSummary:
    return _summarize(resolve_dataset(Path(index_path)))


@translate_os_errors
def load_chunk_list(paths: Sequence[str]) -> IndexSummary:
    description, listed = describe_chunk_list(paths)
    return _summarize(description, listed)


@translate_os_errors
def list_chunk_items(index_path: str, chunk_filename: str, cache: ChunkCache) -> list[ItemMeta]:
    description = resolve_dataset(Path(index_path))
    access = load_chunk_access(description, chunk_filename, cache)
    return list_items(access, description.field_count)


@translate_os_errors
def peek_field(
    index_path: str,
    chunk_filename: str,
    item_index: int,
    field_index: int,
    cache: ChunkCache,
    preview_bytes: int = PREVIEW_BYTES,
) -> FieldPreview:
    description = resolve_dataset(Path(index_path))
    access = load_chunk_access(description, chunk_filename, cache)
    data, size = read_field(access, item_index, field_index, description.field_count, limit=preview_bytes)
    return build_preview(data, size, _format_token(description, field_index))


@translate_os_errors
def open_leaf(
    index_path: str,
    chunk_filename: str,
    item_index: int,
    field_index: int,
    cache: ChunkCache,
    launcher: Launcher,
    export_dir: Path,
) -> LeafExport:
    description = resolve_dataset(Path(index_path))
    access = load_chunk_access(description, chunk_filename, cache)
    data, size = read_field(access, item_index, field_index, description.field_count)
    ext = guess_extension(_format_token(description, field_index), data) or "bin"

    export_dir.mkdir(parents=True, exist_ok=True)
    out = export_dir / export_name(chunk_filename, item_index, field_index, ext)
    out.write_bytes(data)
    logger.info("Exported item %d field %d of %s to %s", item_index, field_index, chunk_filename, out)
    launcher.launch(out)
    return LeafExport(path=str(out), size=size)
