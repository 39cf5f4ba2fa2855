# ABOUTME: CLI package for shelfsync, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click

from shelfsync.cli.commands import add_cmd, genres_cmd, ls_cmd, rm_cmd, update_cmd


@click.group()
@click.version_option(package_name="shelfsync")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """shelfsync - browse and edit a remote book catalog."""
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


cli.add_command(ls_cmd.ls)
cli.add_command(genres_cmd.genres)
cli.add_command(add_cmd.add)
cli.add_command(update_cmd.update)
cli.add_command(rm_cmd.rm)
