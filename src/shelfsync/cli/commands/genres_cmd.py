# ABOUTME: The `shelfsync genres` command listing the distinct genres in the catalog.
# ABOUTME: Genres appear in the order their first book appears in the collection.

import asyncio
from typing import Any

import click
from rich.console import Console

from shelfsync.cli.options import open_session, store_options

console = Console()


async def _genres(ctx_obj: dict[str, Any] | None, base_url: str, timeout: float,
                  max_retries: int) -> list[str] | None:
    session = open_session(ctx_obj, base_url, timeout, max_retries, console)
    try:
        await session.records()
    finally:
        await session.aclose()
    if session.error is not None:
        return None
    return session.genres()


@click.command("genres")
@store_options
@click.pass_obj
def genres(ctx_obj: dict[str, Any] | None, base_url: str, timeout: float,
           max_retries: int) -> None:
    """List the genres present in the catalog."""
    names = asyncio.run(_genres(ctx_obj, base_url, timeout, max_retries))
    if names is None:
        raise SystemExit(1)

    if not names:
        console.print("[yellow]No genres in the catalog.[/yellow]")
        return
    for name in names:
        console.print(name)
