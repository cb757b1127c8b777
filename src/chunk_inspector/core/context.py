from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

from chunk_inspector.core.cache import ChunkCache
from chunk_inspector.core.ports.launcher import Launcher
from chunk_inspector.errors import InspectorError, TaskFailure
from chunk_inspector.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InspectorContext:
    """Process-lifetime state shared by every query: settings, cache, launcher, worker pool."""

    def __init__(
        self,
        settings: Settings | None = None,
        cache: ChunkCache | None = None,
        launcher: Launcher | None = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self.cache = cache or ChunkCache(
            max_entry_bytes=self.settings.cache_max_entry_bytes,
            capacity_bytes=self.settings.cache_capacity_bytes,
        )
        if launcher is None:
            from chunk_inspector.launcher.typer_adapter import TyperLauncher

            launcher = TyperLauncher()
        self.launcher = launcher
        self._executor = ThreadPoolExecutor(max_workers=self.settings.workers, thread_name_prefix="chunk-inspector")

    async def run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a blocking query on the worker pool and wait for its result."""
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(self._executor, functools.partial(func, *args, **kwargs))
        except InspectorError:
            raise
        except Exception as exc:
            logger.exception("Worker failed running %s", getattr(func, "__name__", func))
            raise TaskFailure(str(exc)) from exc

    def close(self) -> None:
        self._executor.shutdown(wait=True)
