# ABOUTME: Shared Click options and session helpers for shelfsync CLI commands.
# ABOUTME: Provides the --base-url/--timeout/--retries flags and book field options.

from dataclasses import replace
from typing import Any, Callable

import click
from rich.console import Console

from shelfsync.catalog.types import BookStatus
from shelfsync.config import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    ENV_BASE_URL,
    ENV_MAX_RETRIES,
    ENV_TIMEOUT,
    StoreConfig,
)
from shelfsync.session import CatalogSession
from shelfsync.sync.notify import Outcome

STATUS_CHOICE = click.Choice([s.value for s in BookStatus])


def store_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the connection options shared by every command."""
    func = click.option(
        "--retries",
        "max_retries",
        type=click.IntRange(0, 1),
        default=DEFAULT_MAX_RETRIES,
        envvar=ENV_MAX_RETRIES,
        show_default=True,
        help="Retry a failed request once on transport errors.",
    )(func)
    func = click.option(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        envvar=ENV_TIMEOUT,
        show_default=True,
        help="Request timeout in seconds.",
    )(func)
    func = click.option(
        "--base-url",
        default=DEFAULT_BASE_URL,
        envvar=ENV_BASE_URL,
        show_default=True,
        help="Base URL of the book collection server.",
    )(func)
    return func


def field_options(required: bool) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Attach the book field options; required for add, optional for update."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        options = [
            click.option("--description", default=None, help="Short description."),
            click.option("--cover", "cover_image", default=None, help="Cover image URL."),
            click.option(
                "--status",
                type=STATUS_CHOICE,
                default=BookStatus.AVAILABLE.value if required else None,
                help="Circulation status.",
            ),
            click.option("--year", "published_year", type=int, required=required,
                         help="Year of publication."),
            click.option("--genre", required=required, help="Genre."),
            click.option("--author", required=required, help="Author."),
            click.option("--title", required=required, help="Title."),
        ]
        for option in options:
            func = option(func)
        return func

    return decorator


def open_session(
    ctx_obj: dict[str, Any] | None,
    base_url: str,
    timeout: float,
    max_retries: int,
    console: Console,
    rows_per_page: int | None = None,
) -> CatalogSession:
    """Build a CatalogSession whose outcomes are printed to the console."""
    config = StoreConfig(base_url=base_url, timeout=timeout, max_retries=max_retries)
    if rows_per_page is not None:
        config = replace(config, rows_per_page=rows_per_page)
    transport = (ctx_obj or {}).get("transport")
    return CatalogSession.from_config(
        config, notifier=ConsoleNotifier(console), transport=transport
    )


class ConsoleNotifier:
    """Prints fetch and mutation outcomes with Rich. Successful fetches stay quiet."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def notify(self, outcome: Outcome) -> None:
        if outcome.success:
            if outcome.action != "fetch":
                self._console.print(f"[green]{outcome.message}[/green]")
            return
        self._console.print(f"[red]{outcome.message} ({outcome.reason}): {outcome.error}[/red]")
