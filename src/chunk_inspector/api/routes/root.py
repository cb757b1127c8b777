from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from chunk_inspector import __version__

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root discovery endpoint listing the inspection routes."""
    return {
        "meta": {
            "title": "Chunk Inspector API",
            "description": "Inspect chunked, indexed binary datasets.",
            "version": __version__,
        },
        "links": {
            "self": "/",
            "index": "/index",
            "chunks": "/chunks",
            "items": "/items",
            "preview": "/fields/preview",
            "open": "/fields/open",
            "openapi": "/openapi.json",
            "docs": "/docs",
        },
    }
