from pathlib import Path
from typing import Protocol


class Launcher(Protocol):
    def launch(self, path: Path) -> None: ...
