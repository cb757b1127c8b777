"""Structural layout shared by every chunk.

A chunk starts with a little-endian u32 item count N followed by N + 1 u32
offsets. Item ``i`` spans ``offsets[i]..offsets[i + 1]`` and opens with one
u32 size per declared field, followed by the field payloads in order.
"""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING

from chunk_inspector.errors import MalformedChunk
from chunk_inspector.models import FieldMeta, ItemMeta

if TYPE_CHECKING:
    from chunk_inspector.core.access import ChunkAccess

_U32 = struct.Struct("<I")


def read_le_u32(buf: bytes) -> int:
    if len(buf) != 4:
        raise MalformedChunk(f"expected 4 bytes, got {len(buf)}")
    value: int = _U32.unpack(buf)[0]
    return value


def parse_offsets(access: ChunkAccess) -> tuple[int, list[int]]:
    num_items = read_le_u32(access.read_exact_at(0, 4))
    table = access.read_exact_at(4, (num_items + 1) * 4)
    offsets = [read_le_u32(table[pos : pos + 4]) for pos in range(0, len(table), 4)]
    return num_items, offsets


def item_range(offsets: list[int], item_index: int) -> tuple[int, int]:
    start = offsets[item_index]
    end = offsets[item_index + 1]
    if end < start:
        raise MalformedChunk(f"item {item_index} ends at {end} before it starts at {start}")
    return start, end


def read_field_sizes(access: ChunkAccess, start: int, end: int, field_count: int) -> list[int]:
    if field_count == 0:
        return []
    header_len = field_count * 4
    if start + header_len > end:
        raise MalformedChunk(f"field header of {header_len} bytes overruns item at {start}..{end}")
    head = access.read_exact_at(start, header_len)
    return [read_le_u32(head[pos : pos + 4]) for pos in range(0, header_len, 4)]


def list_items(access: ChunkAccess, field_count: int) -> list[ItemMeta]:
    num_items, offsets = parse_offsets(access)
    items: list[ItemMeta] = []
    for item_index in range(num_items):
        start, end = item_range(offsets, item_index)
        sizes = read_field_sizes(access, start, end, field_count)
        items.append(
            ItemMeta(
                item_index=item_index,
                total_bytes=end - start,
                fields=[FieldMeta(field_index=idx, size=size) for idx, size in enumerate(sizes)],
            )
        )
    return items
