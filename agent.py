"""hn-intel CLI -- serve the paid Hacker News agent or call it locally."""

from __future__ import annotations

import asyncio
import json
import logging

import click
import httpx

from hnintel.config import settings
from hnintel.entrypoints import ENTRYPOINTS, get_entrypoint, invoke as run_entrypoint


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


@click.group()
def cli():
    """hn-intel -- Hacker News intelligence behind priced entrypoints.

        \b
        agent.py serve              # Run the HTTP agent (PORT, default 3000)
        agent.py entrypoints        # List entrypoints and prices
        agent.py invoke top -l 5    # Call one entrypoint against the live API
    """


@cli.command()
@click.option("--host", default=None, help="Interface to bind (default from HOST).")
@click.option("--port", default=None, type=int, help="Port to listen on (default from PORT).")
@click.option("--log-level", default=None, help="Logging level (default from LOG_LEVEL).")
def serve(host, port, log_level):
    """Run the HTTP agent with uvicorn."""
    import uvicorn

    from hnintel.app import create_app

    level = log_level or settings.log_level
    _setup_logging(level)
    port = port or settings.port
    click.echo(f"HN Intel Agent running on port {port}")
    uvicorn.run(create_app(settings), host=host or settings.host, port=port, log_level=level.lower())


@cli.command("entrypoints")
def list_entrypoints():
    """Show every entrypoint with its price."""
    for ep in ENTRYPOINTS:
        price = "free" if ep.free else f"{ep.price:>5}"
        click.echo(f"  {ep.key:<10} {price:>5}  {ep.description}")


@cli.command()
@click.argument("key")
@click.option("--limit", "-l", default=None, type=int, help="Number of stories (top/new/best/trending).")
@click.option("--id", "item_id", default=None, type=int, help="Story ID (story).")
def invoke(key, limit, item_id):
    """Run one entrypoint locally and print its JSON output."""
    entrypoint = get_entrypoint(key)
    if entrypoint is None:
        raise click.BadParameter(f"unknown entrypoint '{key}'", param_hint="KEY")

    _setup_logging(settings.log_level)
    payload = {}
    if limit is not None:
        payload["limit"] = limit
    if item_id is not None:
        payload["id"] = item_id

    async def _run():
        async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
            return await run_entrypoint(client, entrypoint, payload)

    output = asyncio.run(_run())
    click.echo(json.dumps(output, indent=2))


if __name__ == "__main__":
    cli()
