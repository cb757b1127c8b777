from __future__ import annotations

import logging
from pathlib import Path

import typer

from chunk_inspector.errors import OpenFailure

logger = logging.getLogger(__name__)


class TyperLauncher:
    """Open exported files with the desktop's default application.

    Implements the ``Launcher`` protocol.
    """

    def launch(self, path: Path) -> None:
        try:
            status = typer.launch(str(path))
        except OSError as exc:
            raise OpenFailure(str(exc)) from exc
        if status != 0:
            raise OpenFailure(f"default application exited with status {status} for {path}")
        logger.info("Launched default viewer for %s", path)
