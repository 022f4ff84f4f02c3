"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog
import typer
from rich.console import Console

from kvcache_core.config.settings import Settings
from kvcache_core.constants import NIL_DISPLAY
from kvcache_core.exceptions import TransportError
from kvcache_infra.cache.client import CacheClient
from kvcache_infra.cache.factory import create_cache_client
from kvcache_infra.observability import (
    bind_command_context,
    clear_command_context,
    configure_logging,
)

app = typer.Typer(
    name="kvcache",
    help="Read and write a remote key-value cache",
)
console = Console()
logger = structlog.get_logger()

T = TypeVar("T")

# Key read by `ping` to force a round trip; its value is ignored.
PING_PROBE_KEY = "kvcache:ping"


@app.command()
def ping(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Report whether the cache server is reachable."""
    settings = _load_settings(verbose)
    bind_command_context("ping")
    try:
        alive = asyncio.run(_with_client(settings, _probe))
    finally:
        clear_command_context()

    if alive:
        console.print("[bold green]alive[/bold green]")
        return
    console.print("[red]not alive[/red]")
    raise typer.Exit(code=1)


@app.command()
def get(
    key: str = typer.Argument(..., help="Key to read"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Print the value stored under KEY."""
    settings = _load_settings(verbose)
    value = _run(settings, "get", key, lambda client: client.get(key))
    if value is None:
        console.print(NIL_DISPLAY)
        raise typer.Exit(code=1)
    typer.echo(value)


@app.command("set")
def set_(
    key: str = typer.Argument(..., help="Key to write"),
    value: str = typer.Argument(..., help="Value to store"),
    ttl: int | None = typer.Option(
        None, "--ttl", help="Expiry in seconds (defaults to KVCACHE_DEFAULT_TTL_SECONDS)"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Store VALUE under KEY with an expiry."""
    settings = _load_settings(verbose)
    duration = ttl if ttl is not None else settings.default_ttl_seconds
    _run(settings, "set", key, lambda client: client.set(key, value, duration))
    console.print(f"[green]OK[/green] [dim](expires in {duration}s)[/dim]")


@app.command("del")
def del_(
    key: str = typer.Argument(..., help="Key to delete"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Delete KEY; a missing key is not an error."""
    settings = _load_settings(verbose)
    _run(settings, "del", key, lambda client: client.delete(key))
    console.print("[green]OK[/green]")


@app.command()
def version() -> None:
    """Show version."""
    console.print("kvcache v0.1.0")


def _load_settings(verbose: bool) -> Settings:
    settings = Settings()
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)
    return settings


def _run(
    settings: Settings,
    command: str,
    key: str,
    action: Callable[[CacheClient], Awaitable[T]],
) -> T:
    """Run one request against a fresh client, turning transport failures into exit 1."""
    bind_command_context(command, key)
    try:
        return asyncio.run(_with_client(settings, action))
    except TransportError as exc:
        logger.debug("cli_request_failed", error=str(exc))
        console.print(f"[red]Error:[/red] {exc}", highlight=False)
        raise typer.Exit(code=1) from exc
    finally:
        clear_command_context()


async def _with_client(
    settings: Settings,
    action: Callable[[CacheClient], Awaitable[T]],
) -> T:
    client = create_cache_client(settings)
    try:
        return await action(client)
    finally:
        await client.close()


async def _probe(client: CacheClient) -> bool:
    """Force a round trip so the transport reports its state, then read liveness."""
    try:
        await client.get(PING_PROBE_KEY)
    except TransportError:
        return False
    return client.is_alive()


if __name__ == "__main__":
    app()
