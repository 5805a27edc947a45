"""Main CLI entry point."""

import click
from bulkledger.database.factories import create_sqlite_database
from bulkledger.utils.logger import setup_logging

# Import and register all commands at module level
from bulkledger.cli.commands import entry, party, transaction


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BULKLEDGER_DB_PATH environment variable)",
    envvar="BULKLEDGER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (overrides BULKLEDGER_LOG_LEVEL environment variable)",
    envvar="BULKLEDGER_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Bulkledger - ledger shorthand to party balances.

    Type one entry per line ("1. 23500", "Alok Sal 30493",
    "PendalKarigar SV2029 73173 GR 302 GST") and post them against parties
    and staff while keeping every party's running balance consistent.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
entry.register_commands(cli)
party.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
