"""Main CLI entry point."""

import logging

import click
from washbook.database.factories import create_database
from washbook.domain.events import EventBus
from washbook.notifications import LoggingNotifier, register_notification_handlers

# Import and register all commands at module level
from washbook.cli.commands import (
    appointment,
    coins,
    offer,
    referral,
    service,
    support,
    user,
    vendor,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides WASHBOOK_DB_PATH environment variable)",
    envvar="WASHBOOK_DB_PATH",
)
@click.option(
    "--db-url",
    help="SQLAlchemy database URL; takes precedence over --db-path",
    envvar="WASHBOOK_DB_URL",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="WASHBOOK_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, db_url: str | None, log_level: str):
    """Washbook - Car wash booking marketplace.

    Manage customers, vendors and their services, book appointments and
    track the coins customers earn and redeem.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=db_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)

        events = EventBus()
        register_notification_handlers(events, LoggingNotifier())

        ctx.obj["db"] = db
        ctx.obj["events"] = events


# Register all commands
user.register_commands(cli)
vendor.register_commands(cli)
service.register_commands(cli)
offer.register_commands(cli)
appointment.register_commands(cli)
coins.register_commands(cli)
referral.register_commands(cli)
support.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
