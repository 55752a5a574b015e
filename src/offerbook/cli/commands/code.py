"""Offering type (code) commands."""

import click
from offerbook.cli.error_handling import handle_domain_error
from offerbook.domain.errors import DomainError
from offerbook.domain.offering_type import OfferingTypeService


@click.group()
def code_group():
    """Manage offering types."""
    pass


@code_group.command("list")
@click.pass_context
def list_codes(ctx):
    """List active offering types."""
    service = OfferingTypeService(ctx.obj["db"])
    types = service.list_types()
    if not types:
        click.echo("No offering types found.")
        return

    click.echo("\nOffering types:")
    click.echo("-" * 60)
    for t in types:
        category = f" | {t.category}" if t.category else ""
        click.echo(f"{t.code:>6s} | {t.label}{category}")


@code_group.command("save")
@click.argument("code")
@click.argument("label")
@click.option("--category", help="Budget category this code rolls up into")
@click.option("--description", help="Description")
@click.pass_context
def save_code(ctx, code: str, label: str, category: str | None, description: str | None):
    """Create or update an offering type.

    Examples:
        offerbook code save 11 "Tithe" --category "General"
        offerbook code save 29 "Thanksgiving"
    """
    service = OfferingTypeService(ctx.obj["db"])
    try:
        saved = service.save_type(code=code, label=label, category=category, description=description)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Saved offering type {saved.code} '{saved.label}'")


def register_commands(cli):
    """Register code commands with main CLI."""
    cli.add_command(code_group, name="code")
