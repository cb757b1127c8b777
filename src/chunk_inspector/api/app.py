from __future__ import annotations

from fastapi import FastAPI

from chunk_inspector import __version__
from chunk_inspector.api.errors import register_error_handlers
from chunk_inspector.api.lifespan import lifespan
from chunk_inspector.api.routes.fields import router as fields_router
from chunk_inspector.api.routes.health import router as health_router
from chunk_inspector.api.routes.index import router as index_router
from chunk_inspector.api.routes.items import router as items_router
from chunk_inspector.api.routes.root import router as root_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Chunk Inspector API",
        description="Inspect chunked, indexed binary datasets.",
        version=__version__,
        lifespan=lifespan,
    )

    register_error_handlers(app)

    app.include_router(root_router, include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)
    app.include_router(index_router)
    app.include_router(items_router)
    app.include_router(fields_router)

    return app
