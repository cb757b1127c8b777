from __future__ import annotations

from chunk_inspector.core.access import ChunkAccess
from chunk_inspector.core.decoder import item_range, parse_offsets, read_field_sizes
from chunk_inspector.core.sniff import guess_extension
from chunk_inspector.errors import InvalidRequest, MalformedChunk
from chunk_inspector.models import FieldPreview

PREVIEW_CHARS = 400
HEX_SNIPPET_BYTES = 48


def read_field(
    access: ChunkAccess,
    item_index: int,
    field_index: int,
    field_count: int,
    limit: int | None = None,
) -> tuple[bytes, int]:
    """Read one field of one item.

    Returns the bytes read (capped at ``limit`` when given) together with the
    field's full declared size.
    """
    if limit is not None and limit < 0:
        raise InvalidRequest(f"read limit must not be negative, got {limit}")
    num_items, offsets = parse_offsets(access)
    if item_index < 0 or item_index >= num_items:
        raise InvalidRequest("item index out of range")
    start, end = item_range(offsets, item_index)
    sizes = read_field_sizes(access, start, end, field_count)
    if field_index < 0 or field_index >= len(sizes):
        raise InvalidRequest("field index out of range")

    cursor = start + field_count * 4 + sum(sizes[:field_index])
    size = sizes[field_index]
    if cursor + size > end:
        raise MalformedChunk(f"field {field_index} of item {item_index} overruns the item")
    wanted = size if limit is None else min(limit, size)
    return access.read_exact_at(cursor, wanted), size


def build_preview(data: bytes, size: int, token: str | None) -> FieldPreview:
    try:
        text: str | None = data.decode("utf-8")
    except UnicodeDecodeError:
        text = None
    return FieldPreview(
        preview_text=text[:PREVIEW_CHARS] if text is not None else None,
        hex_snippet=data[:HEX_SNIPPET_BYTES].hex(),
        guessed_ext=guess_extension(token, data),
        is_binary=text is None,
        size=size,
    )


def sanitize(name: str) -> str:
    return "".join(c if c.isascii() and c.isalnum() else "-" for c in name)


def export_name(chunk_filename: str, item_index: int, field_index: int, ext: str) -> str:
    return f"{sanitize(chunk_filename)}-i{item_index}-f{field_index}.{ext}"
