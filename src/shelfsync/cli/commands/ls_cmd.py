# ABOUTME: The `shelfsync ls` command for browsing the catalog.
# ABOUTME: Searches, filters, and paginates the collection, shown as a Rich table or grid.

import asyncio
from typing import Any

import click
from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from shelfsync.catalog.types import BookRecord, BookStatus
from shelfsync.cli.options import STATUS_CHOICE, open_session, store_options
from shelfsync.config import ENV_ROWS_PER_PAGE
from shelfsync.view.engine import DerivedView
from shelfsync.view.state import (
    ViewMode,
    set_genre_filter,
    set_page,
    set_search_term,
    set_status_filter,
    set_view_mode,
)

console = Console()


def _status_markup(status: BookStatus) -> str:
    color = "green" if status is BookStatus.AVAILABLE else "yellow"
    return f"[{color}]{status.value}[/{color}]"


def _render_table(records: tuple[BookRecord, ...]) -> None:
    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Genre")
    table.add_column("Year", width=5)
    table.add_column("Status")

    for record in records:
        fields = record.fields
        table.add_row(
            str(record.id),
            fields.title,
            fields.author,
            fields.genre,
            str(fields.published_year),
            _status_markup(fields.status),
        )
    console.print(table)


def _render_grid(records: tuple[BookRecord, ...]) -> None:
    panels = []
    for record in records:
        fields = record.fields
        body = f"{fields.author}\n[dim]{fields.genre} · {fields.published_year}[/dim]\n"
        body += _status_markup(fields.status)
        if fields.description:
            body += f"\n\n{fields.description}"
        panels.append(Panel(body, title=f"[bold]{fields.title}[/bold]", width=36))
    console.print(Columns(panels))


def _render(view: DerivedView, mode: ViewMode) -> None:
    if mode is ViewMode.GRID:
        _render_grid(view.page_items)
    else:
        _render_table(view.page_items)
    console.print(f"\n[dim]{view.total_filtered} book(s) found[/dim]")
    if view.total_pages > 1:
        console.print(f"[dim]Page {view.page + 1} of {view.total_pages}[/dim]")


async def _ls(
    ctx_obj: dict[str, Any] | None,
    base_url: str,
    timeout: float,
    max_retries: int,
    search: str,
    genre: str | None,
    status: str | None,
    page: int,
    rows: int | None,
    view_mode: str,
) -> bool:
    session = open_session(ctx_obj, base_url, timeout, max_retries, console, rows)
    try:
        session.apply(set_search_term, search)
        session.apply(set_genre_filter, genre)
        session.apply(set_status_filter, status)
        session.apply(set_view_mode, view_mode)
        session.apply(set_page, page - 1)
        view = await session.refresh()
    finally:
        await session.aclose()

    if session.error is not None:
        console.print(f"[dim]Is the book server running at {base_url}?[/dim]")
        return False

    if view.total_filtered == 0:
        if session.state.has_filters:
            console.print("[yellow]No books match the current filters.[/yellow]")
        else:
            console.print("[yellow]No books in the catalog.[/yellow]")
        return True

    if not view.page_items:
        console.print(
            f"[yellow]Page {page} is out of range ({view.total_pages} page(s)).[/yellow]"
        )
        return True

    _render(view, session.state.view_mode)
    return True


@click.command("ls")
@store_options
@click.option("--search", "-s", default="", help="Match title or author (case-insensitive).")
@click.option("--genre", default=None, help="Show only this genre.")
@click.option("--status", type=STATUS_CHOICE, default=None, help="Show only this status.")
@click.option("--page", type=click.IntRange(min=1), default=1, show_default=True,
              help="Page number, starting at 1.")
@click.option("--rows", type=click.IntRange(min=1), default=None, envvar=ENV_ROWS_PER_PAGE,
              help="Books per page (default 10).")
@click.option("--view", "view_mode", type=click.Choice([m.value for m in ViewMode]),
              default=ViewMode.TABLE.value, show_default=True, help="Display layout.")
@click.pass_obj
def ls(
    ctx_obj: dict[str, Any] | None,
    base_url: str,
    timeout: float,
    max_retries: int,
    search: str,
    genre: str | None,
    status: str | None,
    page: int,
    rows: int | None,
    view_mode: str,
) -> None:
    """List books in the catalog, one page at a time."""
    ok = asyncio.run(_ls(ctx_obj, base_url, timeout, max_retries, search, genre, status,
                         page, rows, view_mode))
    if not ok:
        raise SystemExit(1)
