# ABOUTME: The `shelfsync add` command for creating a book in the remote catalog.
# ABOUTME: Sends the fields to the store, which assigns the new book's id.

import asyncio
from typing import Any

import click
from rich.console import Console

from shelfsync.catalog.types import BookFields, BookRecord, BookStatus
from shelfsync.cli.options import field_options, open_session, store_options
from shelfsync.errors import StoreError

console = Console()


async def _add(ctx_obj: dict[str, Any] | None, base_url: str, timeout: float,
               max_retries: int, fields: BookFields) -> BookRecord:
    session = open_session(ctx_obj, base_url, timeout, max_retries, console)
    try:
        return await session.mutations.add(fields)
    finally:
        await session.aclose()


@click.command("add")
@store_options
@field_options(required=True)
@click.pass_obj
def add(
    ctx_obj: dict[str, Any] | None,
    base_url: str,
    timeout: float,
    max_retries: int,
    title: str,
    author: str,
    genre: str,
    published_year: int,
    status: str,
    cover_image: str | None,
    description: str | None,
) -> None:
    """Add a new book to the catalog."""
    fields = BookFields(
        title=title,
        author=author,
        genre=genre,
        published_year=published_year,
        status=BookStatus(status),
        cover_image=cover_image,
        description=description,
    )
    try:
        record = asyncio.run(_add(ctx_obj, base_url, timeout, max_retries, fields))
    except StoreError as exc:
        raise SystemExit(1) from exc

    console.print(f"Added [bold]{record.title}[/bold] with id [cyan]{record.id}[/cyan].")
