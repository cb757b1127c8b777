from __future__ import annotations

from collections.abc import AsyncIterator

from chunk_inspector.core.context import InspectorContext

_context: InspectorContext | None = None


async def get_context() -> AsyncIterator[InspectorContext]:
    """Yield the shared ``InspectorContext``, creating it lazily on first call."""
    global _context  # noqa: PLW0603
    if _context is None:
        _context = InspectorContext()
    yield _context


async def shutdown_context() -> None:
    global _context  # noqa: PLW0603
    if _context is not None:
        _context.close()
        _context = None
