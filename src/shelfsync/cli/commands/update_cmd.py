# ABOUTME: The `shelfsync update` command for editing a book in the remote catalog.
# ABOUTME: Merges the given options onto the current record and sends the full field set.

import asyncio
from typing import Any

import click
from rich.console import Console

from shelfsync.catalog.types import BookRecord, BookStatus
from shelfsync.cli.options import field_options, open_session, store_options
from shelfsync.errors import StoreError

console = Console()


async def _update(ctx_obj: dict[str, Any] | None, base_url: str, timeout: float,
                  max_retries: int, book_id: str, changes: dict[str, Any]) -> BookRecord | None:
    session = open_session(ctx_obj, base_url, timeout, max_retries, console)
    try:
        await session.records()
        if session.error is not None:
            raise session.error
        current = session.find(book_id)
        if current is None:
            return None
        fields = current.fields.merged(**changes)
        return await session.mutations.update(current.id, fields)
    finally:
        await session.aclose()


@click.command("update")
@click.argument("book_id")
@store_options
@field_options(required=False)
@click.pass_obj
def update(
    ctx_obj: dict[str, Any] | None,
    book_id: str,
    base_url: str,
    timeout: float,
    max_retries: int,
    **changes: Any,
) -> None:
    """Update fields of an existing book."""
    if all(value is None for value in changes.values()):
        console.print("[yellow]Nothing to update.[/yellow]")
        return
    if changes["status"] is not None:
        changes["status"] = BookStatus(changes["status"])

    try:
        record = asyncio.run(
            _update(ctx_obj, base_url, timeout, max_retries, book_id, changes)
        )
    except StoreError as exc:
        raise SystemExit(1) from exc

    if record is None:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)
    console.print(f"Updated [bold]{record.title}[/bold].")
