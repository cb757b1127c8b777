"""Map inspection errors onto HTTP responses."""

from __future__ import annotations

from typing import cast

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.types import ExceptionHandler

from chunk_inspector.errors import (
    InspectorError,
    InvalidRequest,
    IoFailure,
    MalformedChunk,
    MissingPath,
    OpenFailure,
    TaskFailure,
    UnsupportedCompression,
)

_STATUS_BY_ERROR: dict[type[InspectorError], int] = {
    InvalidRequest: 400,
    MissingPath: 404,
    UnsupportedCompression: 415,
    MalformedChunk: 422,
    IoFailure: 500,
    TaskFailure: 500,
    OpenFailure: 502,
}


def status_for(exc: InspectorError) -> int:
    for error_type, code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return code
    return 500


async def inspector_error_handler(_request: Request, exc: InspectorError) -> JSONResponse:
    return JSONResponse(status_code=status_for(exc), content=exc.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InspectorError, cast(ExceptionHandler, inspector_error_handler))
