"""Main CLI entry point."""

import click
from offerbook.database.factories import create_database
from offerbook.domain.errors import PersistenceError
from offerbook.utils.local_store import LocalStore
from offerbook.utils.logging_config import configure_logging

# Import and register all commands at module level
from offerbook.cli.commands import (
    entry,
    donor,
    code,
    record,
    budget,
    sync,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides OFFERBOOK_DB_PATH environment variable)",
    envvar="OFFERBOOK_DB_PATH",
)
@click.option(
    "--database-url",
    help="SQLAlchemy URL of a hosted database (overrides --db-path)",
    envvar="OFFERBOOK_DATABASE_URL",
)
@click.option(
    "--state-dir",
    type=click.Path(file_okay=False),
    help="Directory for staged entries and sync state (defaults to ~/.offerbook)",
    envvar="OFFERBOOK_STATE_DIR",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, database_url: str | None, state_dir: str | None, verbose: bool):
    """Offerbook - Church offering bookkeeping.

    Stage the week's offerings, commit them in one batch, keep donors,
    codes and budgets up to date, and mirror new records to a spreadsheet.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            db = create_database(database_url=database_url, database_path=db_path)
        except PersistenceError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["store"] = LocalStore(state_dir)
        ctx.call_on_close(db.disconnect)


# Register all commands
entry.register_commands(cli)
donor.register_commands(cli)
code.register_commands(cli)
record.register_commands(cli)
budget.register_commands(cli)
sync.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
