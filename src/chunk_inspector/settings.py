import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

import typer

APP_NAME = "chunk-inspector"

PREVIEW_BYTES = 2048
MAX_CACHE_ENTRY_BYTES = 128 * 1024 * 1024


def _env_optional_int(name: str) -> int | None:
    """Positive integer from the environment, or ``None`` when unset or blank."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value}")
    return value


def _env_int(name: str, default: int) -> int:
    value = _env_optional_int(name)
    return default if value is None else value


@dataclass(frozen=True)
class Settings:
    preview_bytes: int = PREVIEW_BYTES
    cache_max_entry_bytes: int = MAX_CACHE_ENTRY_BYTES
    cache_capacity_bytes: int | None = None
    export_dir: Path = Path(tempfile.gettempdir()) / APP_NAME
    workers: int | None = None
    state_file: Path = Path(typer.get_app_dir(APP_NAME)) / "state.json"

    @classmethod
    def from_env(cls) -> "Settings":
        export_dir = os.getenv("CHUNK_INSPECTOR_EXPORT_DIR")
        state_file = os.getenv("CHUNK_INSPECTOR_STATE_FILE")
        defaults = cls()
        return cls(
            preview_bytes=_env_int("CHUNK_INSPECTOR_PREVIEW_BYTES", PREVIEW_BYTES),
            cache_max_entry_bytes=_env_int("CHUNK_INSPECTOR_CACHE_MAX_ENTRY_BYTES", MAX_CACHE_ENTRY_BYTES),
            cache_capacity_bytes=_env_optional_int("CHUNK_INSPECTOR_CACHE_CAPACITY_BYTES"),
            export_dir=Path(export_dir) if export_dir else defaults.export_dir,
            workers=_env_optional_int("CHUNK_INSPECTOR_WORKERS"),
            state_file=Path(state_file) if state_file else defaults.state_file,
        )


def get_settings() -> Settings:
    return Settings.from_env()
