import typer
from rich.console import Console

serve_app = typer.Typer(help="Start servers.")
# stdout belongs to the MCP stdio transport
console = Console(stderr=True)


@serve_app.command("api")
def api(
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Start the FastAPI REST API server."""
    import uvicorn

    from chunk_inspector.api.app import create_app

    app = create_app()
    console.print(f"[green]Starting API server on {host}:{port}[/green]")
    uvicorn.run(app, host=host, port=port)


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
) -> None:
    """Start the MCP server."""
    from chunk_inspector.core.context import InspectorContext
    from chunk_inspector.mcp.server import create_mcp_server

    ctx = InspectorContext()
    server = create_mcp_server(ctx)
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    try:
        server.run(transport=transport)  # type: ignore[arg-type]
    finally:
        ctx.close()
