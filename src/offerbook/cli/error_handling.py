"""CLI error handling and formatting helpers."""

from decimal import Decimal

import click

from offerbook.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def format_amount(amount: Decimal) -> str:
    """Format an amount with grouping and two decimals."""
    return f"{amount:,.2f}"


def format_percent(value: float | None) -> str:
    """Format a percentage, or '-' when undefined."""
    if value is None:
        return "-"
    return f"{value:.1f}%"
