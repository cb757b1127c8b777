"""Locate and parse dataset metadata from whatever path the caller has.

A path may name an index document (plain or zstd-compressed JSON), a
directory holding one, a single raw chunk, or, through
``describe_chunk_list``, an explicit selection of chunk files.
"""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import zstandard
from pydantic import ValidationError

from chunk_inspector.core.decoder import read_le_u32
from chunk_inspector.errors import InvalidRequest, MalformedChunk, MissingPath
from chunk_inspector.models import ChunkRecord, IndexConfig, IndexDocument

logger = logging.getLogger(__name__)

INDEX_CANDIDATES = (
    "index.json",
    "index.json.zstd",
    "index.json.zst",
    "0.index.json",
    "0.index.json.zstd",
    "0.index.json.zst",
)
_INDEX_SUFFIXES = (".json", ".json.zstd", ".json.zst")
_CHUNK_SUFFIXES = (".bin", ".zst")
_ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"


@dataclass
class DatasetDescription:
    root_dir: Path
    source: Path
    config: IndexConfig
    config_raw: Any
    chunks: list[ChunkRecord] = field(default_factory=list)

    @property
    def data_format(self) -> list[str]:
        return list(self.config.data_format or [])

    @property
    def field_count(self) -> int:
        return len(self.config.data_format or [])


@dataclass(frozen=True)
class SourceSelection:
    kind: Literal["index", "chunks"]
    paths: tuple[str, ...]


# ---------------------------------------------------------------------------
# Path classification and index discovery
# ---------------------------------------------------------------------------


def _is_index_name(name: str) -> bool:
    return name.endswith(".index.json") or ".index.json." in name


def is_chunk_path(path: Path) -> bool:
    if _is_index_name(path.name) or path.name in INDEX_CANDIDATES:
        return False
    return path.suffix.lower() in _CHUNK_SUFFIXES or ".bin" in path.name


def classify_source(paths: Sequence[str]) -> SourceSelection:
    """Decide whether a user selection is an index load or a chunk-list load."""
    if not paths:
        raise InvalidRequest("no paths provided")
    if len(paths) > 1:
        return SourceSelection(kind="chunks", paths=tuple(paths))
    first = paths[0]
    if is_chunk_path(Path(first)):
        return SourceSelection(kind="chunks", paths=(first,))
    return SourceSelection(kind="index", paths=(first,))


def search_index(directory: Path) -> Path | None:
    """Fixed candidate names first, then the first ``*.index.json*`` match."""
    for name in INDEX_CANDIDATES:
        candidate = directory / name
        if candidate.exists():
            return candidate
    try:
        globbed = sorted(p for p in directory.iterdir() if _is_index_name(p.name))
    except OSError:
        return None
    return globbed[0] if globbed else None


def find_neighbor_index(chunk_path: Path) -> Path | None:
    return search_index(chunk_path.parent)


def resolve_index_path(path: Path) -> Path:
    if path.is_file():
        return path
    if path.is_dir():
        found = search_index(path)
        if found is not None:
            return found
        raise MissingPath(str(path))
    candidates = [path]
    if path.name:
        candidates += [path.with_suffix(suffix) for suffix in _INDEX_SUFFIXES]
        candidates += [path.parent / f"{path.stem}{suffix}" for suffix in _INDEX_SUFFIXES]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    raise MissingPath(str(path))


# ---------------------------------------------------------------------------
# Index documents
# ---------------------------------------------------------------------------


def read_index_text(path: Path) -> str:
    raw = path.read_bytes()
    if "zst" in path.suffix.lower():
        try:
            raw = zstandard.ZstdDecompressor().stream_reader(io.BytesIO(raw)).read()
        except zstandard.ZstdError as exc:
            raise InvalidRequest(f"decompressing {path.name}: {exc}") from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidRequest(f"{path.name} is not valid UTF-8: {exc}") from exc


def parse_index_file(path: Path) -> DatasetDescription:
    content = read_index_text(path)
    try:
        payload = json.loads(content)
        document = IndexDocument.model_validate(payload)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise InvalidRequest(f"index.json parse error: {exc}") from exc
    logger.info("Loaded index %s (%d chunks)", path, len(document.chunks))
    return DatasetDescription(
        root_dir=path.parent,
        source=path,
        config=document.config,
        config_raw=payload["config"],
        chunks=document.chunks,
    )


# ---------------------------------------------------------------------------
# Raw chunks
# ---------------------------------------------------------------------------


def _read_exact(stream: Any, length: int) -> bytes:
    data = b""
    while len(data) < length:
        block = stream.read(length - len(data))
        if not block:
            break
        data += block
    if len(data) != length:
        raise MalformedChunk(f"chunk header truncated: wanted {length} bytes, got {len(data)}")
    return data


def read_chunk_header(path: Path) -> tuple[int, bool]:
    """Return ``(item_count, zstd_compressed)`` from a chunk's own header.

    The offset table is read as well so a truncated header fails here.
    """
    with path.open("rb") as fh:
        compressed = fh.read(4) == _ZSTD_MAGIC
        fh.seek(0)
        stream: Any = fh
        if compressed:
            stream = zstandard.ZstdDecompressor().stream_reader(fh)
        try:
            num_items = read_le_u32(_read_exact(stream, 4))
            _read_exact(stream, (num_items + 1) * 4)
        except zstandard.ZstdError as exc:
            raise InvalidRequest(f"decompressing chunk: {exc}") from exc
    return num_items, compressed


def describe_chunk_file(path: Path) -> DatasetDescription:
    """Synthesize a single-chunk description when no index is available."""
    if not path.is_file():
        raise MissingPath(str(path))
    num_items, compressed = read_chunk_header(path)
    size = path.stat().st_size
    chunk_size = max(num_items, 1)
    config = IndexConfig(
        compression="zstd" if compressed else None,
        chunk_size=chunk_size,
        chunk_bytes=size,
        data_format=["bytes"],
    )
    return DatasetDescription(
        root_dir=path.parent,
        source=path,
        config=config,
        config_raw=config.model_dump(),
        chunks=[ChunkRecord(filename=path.name, chunk_bytes=size, chunk_size=chunk_size)],
    )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def resolve_dataset(path: Path) -> DatasetDescription:
    if is_chunk_path(path):
        neighbor = find_neighbor_index(path)
        if neighbor is not None:
            return resolve_dataset(neighbor)
        return describe_chunk_file(path)
    return parse_index_file(resolve_index_path(path))


def describe_chunk_list(paths: Sequence[str]) -> tuple[DatasetDescription, dict[str, Path]]:
    """Describe an explicit selection of chunk files.

    Returns the description plus the filename -> listed path mapping, in the
    order the paths were given.
    """
    if not paths:
        raise InvalidRequest("no chunk paths provided")
    selected: dict[str, Path] = {}
    for raw in paths:
        chunk_path = Path(raw)
        selected.setdefault(chunk_path.name, chunk_path)

    first = Path(paths[0])
    index_path = find_neighbor_index(first)
    records: list[ChunkRecord] = []
    if index_path is not None:
        parsed = parse_index_file(index_path)
        config = parsed.config
        if config.data_format is None:
            config = config.model_copy(update={"data_format": ["bytes"]})
        records = [c for c in parsed.chunks if c.filename in selected]
        description = DatasetDescription(
            root_dir=parsed.root_dir,
            source=index_path,
            config=config,
            config_raw=parsed.config_raw,
        )
    else:
        config = IndexConfig(data_format=["bytes"])
        description = DatasetDescription(
            root_dir=first.parent,
            source=first,
            config=config,
            config_raw={"source": "multi-bin", "data_format": ["bytes"]},
        )

    covered = {c.filename for c in records}
    for name, chunk_path in selected.items():
        if name in covered:
            continue
        num_items, _ = read_chunk_header(chunk_path)
        records.append(
            ChunkRecord(filename=name, chunk_bytes=chunk_path.stat().st_size, chunk_size=max(num_items, 1))
        )
    description.chunks = records
    return description, selected
