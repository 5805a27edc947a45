"""CLI error handling helpers."""

from datetime import date
from typing import Optional

import click

from bulkledger.domain.errors import DomainError
from bulkledger.utils.date_parser import parse_date


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def parse_date_or_exit(ctx: click.Context, value: Optional[str]) -> date:
    """Parse a --date option, defaulting to today, or exit with a CLI error."""
    if value is None:
        return date.today()
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)
