"""paramguard CLI entry point."""

import logging

import click


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level for paramguard loggers.",
)
def cli(log_level: str):
    """paramguard: declarative parameter validation CLI."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from paramguard.cli.check_cmd import check, lint, rules  # noqa: E402

cli.add_command(check)
cli.add_command(lint)
cli.add_command(rules)
