# ABOUTME: The `shelfsync rm` command for deleting a book from the remote catalog.
# ABOUTME: Asks for confirmation with the book's title unless --yes is given.

import asyncio
from typing import Any

import click
from rich.console import Console

from shelfsync.cli.options import open_session, store_options
from shelfsync.errors import StoreError

console = Console()


async def _rm(ctx_obj: dict[str, Any] | None, base_url: str, timeout: float,
              max_retries: int, book_id: str, yes: bool) -> bool | None:
    session = open_session(ctx_obj, base_url, timeout, max_retries, console)
    try:
        await session.records()
        if session.error is not None:
            raise session.error
        record = session.find(book_id)
        if record is None:
            return None
        prompt = f'Delete "{record.title}" by {record.author}? This cannot be undone.'
        if not yes and not click.confirm(prompt, default=False):
            return False
        await session.mutations.delete(record.id)
        return True
    finally:
        await session.aclose()


@click.command("rm")
@click.argument("book_id")
@store_options
@click.option("--yes", "-y", is_flag=True, help="Delete without asking for confirmation.")
@click.pass_obj
def rm(ctx_obj: dict[str, Any] | None, book_id: str, base_url: str, timeout: float,
       max_retries: int, yes: bool) -> None:
    """Delete a book from the catalog."""
    try:
        deleted = asyncio.run(_rm(ctx_obj, base_url, timeout, max_retries, book_id, yes))
    except StoreError as exc:
        raise SystemExit(1) from exc

    if deleted is None:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)
    if not deleted:
        console.print("[dim]Cancelled.[/dim]")
