"""Main CLI entry point."""

import click
from ledgerly.database.factories import create_sqlite_database
from ledgerly.logging_setup import configure_logging

# Import and register all commands at module level
from ledgerly.cli.commands import (
    ingest,
    transaction,
    category,
    group,
    tag,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERLY_DB_PATH environment variable)",
    envvar="LEDGERLY_DB_PATH",
)
@click.option(
    "--log-level",
    help="Log level name, e.g. DEBUG or WARNING (overrides LEDGERLY_LOG_LEVEL)",
    envvar="LEDGERLY_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Ledgerly - personal finance transaction tracker.

    Merge Mint and EveryDollar exports into one categorized transaction
    history, then browse, tag and split it.
    """
    ctx.ensure_object(dict)

    try:
        configure_logging(log_level)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level")

    # Open the database only when running a command, not for --help
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
ingest.register_commands(cli)
transaction.register_commands(cli)
category.register_commands(cli)
group.register_commands(cli)
tag.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
