import os

import click


@click.group()
def main() -> None:
    """reqboard - project board service (workspaces, boards, groups, requests)."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from REQBOARD_HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Bind port (default: from REQBOARD_PORT or 8000).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
@click.option("--no-seed", is_flag=True, default=False, help="Start with an empty store instead of demo data.")
def serve(host: str | None, port: int | None, reload: bool, no_seed: bool) -> None:
    """Start the board API server."""
    import uvicorn

    from reqboard.server.settings import get_settings

    if no_seed:
        # Read by the app lifespan, which may run in a reloader subprocess.
        os.environ["REQBOARD_SEED_DEMO_DATA"] = "false"
        get_settings.cache_clear()

    settings = get_settings()

    uvicorn.run(
        "reqboard.server.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


if __name__ == "__main__":
    main()
