"""Byte-addressable views over a single chunk file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

import zstandard

from chunk_inspector.core.cache import ChunkCache
from chunk_inspector.core.resolver import DatasetDescription
from chunk_inspector.errors import InvalidRequest, MalformedChunk, MissingPath, UnsupportedCompression

logger = logging.getLogger(__name__)

_UNCOMPRESSED = ("", "none")


@dataclass(frozen=True)
class FileChunk:
    """Uncompressed chunk on disk; every read opens the file afresh."""

    path: Path

    def read_exact_at(self, offset: int, length: int) -> bytes:
        with self.path.open("rb") as fh:
            fh.seek(offset)
            data = fh.read(length)
        if len(data) != length:
            raise MalformedChunk(f"read past end of chunk: {length} bytes at offset {offset}")
        return data


@dataclass(frozen=True)
class MemoryChunk:
    """Fully decompressed chunk; ``data`` may be shared through the cache."""

    data: bytes

    def read_exact_at(self, offset: int, length: int) -> bytes:
        end = offset + length
        if offset < 0 or length < 0 or end > len(self.data):
            raise MalformedChunk(f"read past end of chunk: {length} bytes at offset {offset}")
        return self.data[offset:end]


ChunkAccess: TypeAlias = FileChunk | MemoryChunk


def decompress_chunk(path: Path) -> bytes:
    with path.open("rb") as fh:
        try:
            return zstandard.ZstdDecompressor().stream_reader(fh).read()
        except zstandard.ZstdError as exc:
            raise InvalidRequest(f"decompressing chunk: {exc}") from exc


def load_chunk_access(description: DatasetDescription, chunk_filename: str, cache: ChunkCache) -> ChunkAccess:
    chunk_path = description.root_dir / chunk_filename
    if not chunk_path.exists():
        raise MissingPath(str(chunk_path))

    compression = (description.config.compression or "").lower()
    if compression in _UNCOMPRESSED:
        return FileChunk(chunk_path)
    if compression != "zstd":
        raise UnsupportedCompression(description.config.compression or compression)

    key = str(chunk_path)
    cached = cache.fetch(key)
    if cached is not None:
        return MemoryChunk(cached)
    data = decompress_chunk(chunk_path)
    logger.info("Decompressed %s (%d bytes)", chunk_path, len(data))
    cache.store(key, data)
    return MemoryChunk(data)
