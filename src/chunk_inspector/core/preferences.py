"""Small persisted state: the last index path that loaded successfully."""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_LAST_INDEX_KEY = "last_index"


def _read_state(state_file: Path) -> dict[str, str]:
    try:
        payload = json.loads(state_file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable state file %s: %s", state_file, exc)
        return {}
    return payload if isinstance(payload, dict) else {}


def save_last_index(state_file: Path, index_path: str) -> None:
    state = _read_state(state_file)
    state[_LAST_INDEX_KEY] = index_path
    state_file.parent.mkdir(parents=True, exist_ok=True)
    state_file.write_text(json.dumps(state, indent=2), encoding="utf-8")


def read_last_index(state_file: Path) -> str | None:
    value = _read_state(state_file).get(_LAST_INDEX_KEY)
    return value if isinstance(value, str) and value else None
