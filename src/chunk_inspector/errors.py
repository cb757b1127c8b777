"""Error kinds surfaced by inspection queries.

Every failure is an ``InspectorError`` subclass carrying a stable ``code`` tag,
so surfaces can render a ``{"code": ..., "message": ...}`` payload without
knowing the concrete class.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")


class InspectorError(Exception):
    code = "Error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class InvalidRequest(InspectorError):
    """Malformed request or metadata: bad JSON, out-of-range item or field."""

    code = "Invalid"


class MissingPath(InspectorError):
    code = "Missing"


class UnsupportedCompression(InspectorError):
    code = "UnsupportedCompression"


class MalformedChunk(InspectorError):
    """Offset table or item layout is corrupt or truncated."""

    code = "MalformedChunk"

    def __init__(self, message: str = "malformed chunk") -> None:
        super().__init__(message)


class IoFailure(InspectorError):
    code = "Io"


class TaskFailure(InspectorError):
    code = "Task"


class OpenFailure(InspectorError):
    code = "Open"


def translate_os_errors(func: Callable[P, R]) -> Callable[P, R]:
    """Re-raise filesystem ``OSError`` as ``MissingPath`` / ``IoFailure``."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except FileNotFoundError as exc:
            raise MissingPath(str(exc.filename or exc)) from exc
        except OSError as exc:
            raise IoFailure(str(exc)) from exc

    return wrapper
