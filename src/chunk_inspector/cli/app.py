import logging
import os

import typer

from chunk_inspector.cli.commands import chunks, index, items, load, open_field, peek
from chunk_inspector.cli.serve import serve_app

app = typer.Typer(
    name="chunk-inspector",
    help="Chunk Inspector CLI: inspect chunked, indexed binary datasets.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


app.command("index")(index)
app.command("chunks")(chunks)
app.command("load")(load)
app.command("items")(items)
app.command("peek")(peek)
app.command("open")(open_field)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
