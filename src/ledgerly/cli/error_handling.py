"""CLI error handling helpers."""

from decimal import Decimal

import click

from ledgerly.domain.errors import DomainError
from ledgerly.utils.date_parser import parse_date
from ledgerly.utils.normalize import parse_amount


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def parse_date_or_exit(ctx: click.Context, value: str, label: str = "date"):
    """Parse a CLI date argument, exiting with an error message if invalid."""
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def parse_amount_or_exit(ctx: click.Context, value: str, label: str = "amount") -> Decimal:
    """Parse a CLI amount argument, exiting with an error message if invalid."""
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)
