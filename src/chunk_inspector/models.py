from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# --- Index document (as written next to the chunks) ---


class IndexConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    compression: str | None = None
    chunk_size: int | None = None
    chunk_bytes: int | None = None
    data_format: list[str] | None = None
    data_spec: str | None = None


class ChunkRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    filename: str
    chunk_bytes: int
    chunk_size: int
    dim: int | None = None


class IndexDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    chunks: list[ChunkRecord]
    config: IndexConfig


# --- Response view models ---


class ViewModel(BaseModel):
    """Serialized with camelCase keys; constructible with field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChunkSummary(ViewModel):
    filename: str
    path: str
    chunk_size: int
    chunk_bytes: int
    dim: int | None = None
    exists: bool


class IndexSummary(ViewModel):
    index_path: str
    root_dir: str
    data_format: list[str]
    compression: str | None = None
    chunk_size: int | None = None
    chunk_bytes: int | None = None
    config_raw: Any = None
    chunks: list[ChunkSummary]

    @property
    def total_bytes(self) -> int:
        return sum(c.chunk_bytes for c in self.chunks)


class FieldMeta(ViewModel):
    field_index: int
    size: int


class ItemMeta(ViewModel):
    item_index: int
    total_bytes: int
    fields: list[FieldMeta]


class FieldPreview(ViewModel):
    preview_text: str | None = None
    hex_snippet: str
    guessed_ext: str | None = None
    is_binary: bool
    size: int


class LeafExport(ViewModel):
    path: str
    size: int

    def describe(self) -> str:
        return f"{self.path} ({self.size} bytes)"
