"""Shared fixtures and helpers for tests."""

from __future__ import annotations

import json
import struct
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import pytest
import zstandard

from chunk_inspector.core.cache import ChunkCache
from chunk_inspector.core.context import InspectorContext
from chunk_inspector.settings import Settings

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Chunk and index builders
# ---------------------------------------------------------------------------


def build_item(fields: Sequence[bytes]) -> bytes:
    """Field-size header followed by the payloads."""
    header = b"".join(struct.pack("<I", len(f)) for f in fields)
    return header + b"".join(fields)


def build_chunk(items: Sequence[bytes]) -> bytes:
    """Item count, offset table, then the raw item bytes."""
    table_end = 4 + 4 * (len(items) + 1)
    offsets = [table_end]
    for item in items:
        offsets.append(offsets[-1] + len(item))
    head = struct.pack("<I", len(items)) + b"".join(struct.pack("<I", o) for o in offsets)
    return head + b"".join(items)


def build_field_chunk(items: Sequence[Sequence[bytes]]) -> bytes:
    return build_chunk([build_item(fields) for fields in items])


def compress(data: bytes) -> bytes:
    return zstandard.ZstdCompressor().compress(data)


def write_index(
    directory: Path,
    chunks: Sequence[tuple[str, bytes, int]],
    config: dict[str, Any],
    name: str = "index.json",
) -> Path:
    """Write an index document describing ``(filename, chunk_bytes, items)`` entries."""
    document = {
        "chunks": [
            {"filename": filename, "chunk_bytes": len(data), "chunk_size": count, "dim": None}
            for filename, data, count in chunks
        ],
        "config": config,
    }
    payload = json.dumps(document).encode("utf-8")
    if "zst" in name:
        payload = compress(payload)
    path = directory / name
    path.write_bytes(payload)
    return path


class RecordingLauncher:
    def __init__(self) -> None:
        self.launched: list[Path] = []

    def launch(self, path: Path) -> None:
        self.launched.append(path)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------

DATA_FORMAT = ["str", "bytes"]

ITEMS_0 = [
    [b"hello", b"RIFF\x24\x00\x00\x00WAVEfmt "],
    [b"caption two", b"\x80\x81\x82\x83"],
    [b"", b"fLaC\x00\x00\x00\x22"],
]
ITEMS_1 = [
    [b"only item", b"ID3\x04\x00"],
]


@pytest.fixture
def dataset_dir(tmp_path: Path) -> Path:
    """Uncompressed two-chunk dataset with ``str`` and ``bytes`` fields."""
    root = tmp_path / "plain"
    root.mkdir()
    chunk_0 = build_field_chunk(ITEMS_0)
    chunk_1 = build_field_chunk(ITEMS_1)
    (root / "chunk-0-0.bin").write_bytes(chunk_0)
    (root / "chunk-0-1.bin").write_bytes(chunk_1)
    write_index(
        root,
        [("chunk-0-0.bin", chunk_0, len(ITEMS_0)), ("chunk-0-1.bin", chunk_1, len(ITEMS_1))],
        {"compression": None, "chunk_size": 3, "chunk_bytes": 1 << 20, "data_format": DATA_FORMAT},
    )
    return root


@pytest.fixture
def zstd_dataset_dir(tmp_path: Path) -> Path:
    """zstd-compressed dataset whose only index is ``0.index.json.zst``."""
    root = tmp_path / "compressed"
    root.mkdir()
    raw = build_field_chunk(ITEMS_0)
    (root / "chunk-0-0.bin.zstd").write_bytes(compress(raw))
    write_index(
        root,
        [("chunk-0-0.bin.zstd", raw, len(ITEMS_0)), ("chunk-0-9.bin.zstd", raw, 1)],
        {"compression": "zstd", "chunk_size": 3, "data_format": DATA_FORMAT, "item_loader": "PyTreeLoader"},
        name="0.index.json.zst",
    )
    return root


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def inspector_ctx(tmp_path: Path, launcher: RecordingLauncher) -> Iterator[InspectorContext]:
    settings = Settings(export_dir=tmp_path / "exports", state_file=tmp_path / "state.json")
    ctx = InspectorContext(settings=settings, cache=ChunkCache(), launcher=launcher)
    yield ctx
    ctx.close()
