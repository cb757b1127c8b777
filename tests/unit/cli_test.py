"""Tests for the Typer CLI commands."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from chunk_inspector.cli.app import app
from chunk_inspector.cli.render import format_bytes
from chunk_inspector.core.cache import ChunkCache
from chunk_inspector.core.context import InspectorContext
from chunk_inspector.core.preferences import read_last_index
from chunk_inspector.settings import Settings
from tests.conftest import RecordingLauncher

runner = CliRunner()


@pytest.fixture
def state_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "state" / "state.json"
    monkeypatch.setenv("CHUNK_INSPECTOR_STATE_FILE", str(path))
    return path


@pytest.fixture
def make_context(tmp_path: Path, launcher: RecordingLauncher) -> Callable[[], InspectorContext]:
    def _make() -> InspectorContext:
        settings = Settings(export_dir=tmp_path / "exports", state_file=tmp_path / "unused.json")
        return InspectorContext(settings=settings, cache=ChunkCache(), launcher=launcher)

    return _make


@pytest.mark.parametrize(
    "args",
    [[], ["index"], ["chunks"], ["load"], ["items"], ["peek"], ["open"], ["serve"]],
    ids=["root", "index", "chunks", "load", "items", "peek", "open", "serve"],
)
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0, "0.0 B"), (512, "512 B"), (1536, "1.5 KB"), (12 * 1024 * 1024, "12 MB")],
)
def test_format_bytes(value: int, expected: str) -> None:
    assert format_bytes(value) == expected


class TestIndexCommand:
    def test_renders_summary_and_remembers_path(
        self, dataset_dir: Path, state_file: Path, make_context: Callable[[], InspectorContext]
    ) -> None:
        with patch("chunk_inspector.cli.commands._get_context", side_effect=make_context):
            result = runner.invoke(app, ["index", str(dataset_dir)])
        assert result.exit_code == 0, result.output
        assert "chunk-0-0.bin" in result.output
        assert read_last_index(state_file) == str(dataset_dir)

    def test_reloads_last_index(
        self, dataset_dir: Path, state_file: Path, make_context: Callable[[], InspectorContext]
    ) -> None:
        with patch("chunk_inspector.cli.commands._get_context", side_effect=make_context):
            runner.invoke(app, ["index", str(dataset_dir)])
            result = runner.invoke(app, ["index", "--json"])
        assert result.exit_code == 0, result.output
        assert '"chunkSize"' in result.output

    def test_without_path_or_history(self, state_file: Path) -> None:
        result = runner.invoke(app, ["index"])
        assert result.exit_code == 1
        assert "Provide an index path" in result.output

    def test_unwritable_state_does_not_fail_the_load(
        self, dataset_dir: Path, state_file: Path, make_context: Callable[[], InspectorContext]
    ) -> None:
        with (
            patch("chunk_inspector.cli.commands._get_context", side_effect=make_context),
            patch("chunk_inspector.cli.commands.save_last_index", side_effect=PermissionError("read-only")),
        ):
            result = runner.invoke(app, ["index", str(dataset_dir)])
        assert result.exit_code == 0, result.output
        assert "chunk-0-0.bin" in result.output

    def test_failure_is_not_remembered(
        self, tmp_path: Path, state_file: Path, make_context: Callable[[], InspectorContext]
    ) -> None:
        with patch("chunk_inspector.cli.commands._get_context", side_effect=make_context):
            result = runner.invoke(app, ["index", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Missing:" in result.output
        assert read_last_index(state_file) is None


class TestLoadCommand:
    def test_single_chunk_goes_through_chunk_list(
        self, dataset_dir: Path, state_file: Path, make_context: Callable[[], InspectorContext]
    ) -> None:
        with patch("chunk_inspector.cli.commands._get_context", side_effect=make_context):
            result = runner.invoke(app, ["load", str(dataset_dir / "chunk-0-1.bin")])
        assert result.exit_code == 0, result.output
        assert "chunk-0-1.bin" in result.output
        assert "chunk-0-0.bin" not in result.output
        assert read_last_index(state_file) is None

    def test_directory_goes_through_index(
        self, dataset_dir: Path, state_file: Path, make_context: Callable[[], InspectorContext]
    ) -> None:
        with patch("chunk_inspector.cli.commands._get_context", side_effect=make_context):
            result = runner.invoke(app, ["load", str(dataset_dir)])
        assert result.exit_code == 0, result.output
        assert read_last_index(state_file) == str(dataset_dir)


class TestChunkCommands:
    def test_chunks(self, dataset_dir: Path, make_context: Callable[[], InspectorContext]) -> None:
        with patch("chunk_inspector.cli.commands._get_context", side_effect=make_context):
            result = runner.invoke(
                app, ["chunks", str(dataset_dir / "chunk-0-0.bin"), str(dataset_dir / "chunk-0-1.bin")]
            )
        assert result.exit_code == 0, result.output
        assert "(2 rows)" in result.output

    def test_items(self, dataset_dir: Path, make_context: Callable[[], InspectorContext]) -> None:
        with patch("chunk_inspector.cli.commands._get_context", side_effect=make_context):
            result = runner.invoke(app, ["items", str(dataset_dir), "chunk-0-0.bin"])
        assert result.exit_code == 0, result.output
        assert "(3 rows)" in result.output

    def test_items_json(self, dataset_dir: Path, make_context: Callable[[], InspectorContext]) -> None:
        with patch("chunk_inspector.cli.commands._get_context", side_effect=make_context):
            result = runner.invoke(app, ["items", str(dataset_dir), "chunk-0-0.bin", "--json"])
        assert result.exit_code == 0, result.output
        assert '"itemIndex"' in result.output
        assert '"totalBytes": 29' in result.output

    def test_peek_text(self, dataset_dir: Path, make_context: Callable[[], InspectorContext]) -> None:
        with patch("chunk_inspector.cli.commands._get_context", side_effect=make_context):
            result = runner.invoke(app, ["peek", str(dataset_dir), "chunk-0-0.bin", "1", "0"])
        assert result.exit_code == 0, result.output
        assert "caption two" in result.output
        assert "txt" in result.output

    def test_peek_binary_shows_hex(self, dataset_dir: Path, make_context: Callable[[], InspectorContext]) -> None:
        with patch("chunk_inspector.cli.commands._get_context", side_effect=make_context):
            result = runner.invoke(app, ["peek", str(dataset_dir), "chunk-0-0.bin", "1", "1"])
        assert result.exit_code == 0, result.output
        assert "80818283" in result.output

    def test_peek_out_of_range(self, dataset_dir: Path, make_context: Callable[[], InspectorContext]) -> None:
        with patch("chunk_inspector.cli.commands._get_context", side_effect=make_context):
            result = runner.invoke(app, ["peek", str(dataset_dir), "chunk-0-0.bin", "5", "0"])
        assert result.exit_code == 1
        assert "Invalid:" in result.output

    def test_open(
        self,
        dataset_dir: Path,
        launcher: RecordingLauncher,
        make_context: Callable[[], InspectorContext],
    ) -> None:
        with patch("chunk_inspector.cli.commands._get_context", side_effect=make_context):
            result = runner.invoke(app, ["open", str(dataset_dir), "chunk-0-0.bin", "2", "1"])
        assert result.exit_code == 0, result.output
        assert "Opened" in result.output
        assert [p.name for p in launcher.launched] == ["chunk-0-0-bin-i2-f1.flac"]
