"""Donor management commands."""

import click
from offerbook.cli.error_handling import handle_domain_error
from offerbook.domain.donor import DonorService
from offerbook.domain.errors import DomainError


@click.group()
def donor_group():
    """Manage donors."""
    pass


@donor_group.command("add")
@click.argument("name")
@click.option("--number", "offering_number", help="Offering number")
@click.option("--note", help="Note")
@click.option("--phone", help="Phone number")
@click.option("--email", help="Email address")
@click.option("--address", help="Postal address")
@click.pass_context
def add_donor(ctx, name: str, offering_number, note, phone, email, address):
    """Register a donor.

    Examples:
        offerbook donor add "Kim Yongjun" --number 122
        offerbook donor add "Visitor"
    """
    service = DonorService(ctx.obj["db"])
    try:
        donor = service.save_donor(
            name=name,
            offering_number=offering_number,
            note=note,
            phone=phone,
            email=email,
            address=address,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created donor '{donor.name}' (ID: {donor.id})")


@donor_group.command("list")
@click.option("--search", help="Filter by name or offering number")
@click.pass_context
def list_donors(ctx, search: str | None):
    """List active donors by offering number."""
    service = DonorService(ctx.obj["db"])
    donors = service.search(search) if search else service.list_donors()
    if not donors:
        click.echo("No donors found.")
        return

    click.echo("\nDonors:")
    click.echo("-" * 60)
    for d in donors:
        number = d.offering_number or "-"
        note = f" | {d.note}" if d.note else ""
        click.echo(f"ID: {d.id:4d} | No. {number:>6s} | {d.name}{note}")


@donor_group.command("edit")
@click.argument("donor_id", type=int)
@click.option("--name", help="New name")
@click.option("--number", "offering_number", help="New offering number ('' clears it)")
@click.option("--note", help="New note")
@click.option("--phone", help="New phone number")
@click.option("--email", help="New email address")
@click.option("--address", help="New postal address")
@click.pass_context
def edit_donor(ctx, donor_id: int, name, offering_number, note, phone, email, address):
    """Update a donor's details."""
    service = DonorService(ctx.obj["db"])
    current = service.get_donor(donor_id)
    if current is None:
        click.echo(f"Error: Donor {donor_id} not found", err=True)
        ctx.exit(1)

    try:
        donor = service.save_donor(
            name=name if name is not None else current.name,
            offering_number=offering_number,
            note=note,
            phone=phone,
            email=email,
            address=address,
            donor_id=donor_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated donor '{donor.name}' (ID: {donor.id})")


@donor_group.command("deactivate")
@click.argument("donor_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def deactivate_donor(ctx, donor_id: int, yes: bool):
    """Deactivate a donor. Past records keep the donor's name."""
    service = DonorService(ctx.obj["db"])
    donor = service.get_donor(donor_id)
    if donor is None:
        click.echo(f"Error: Donor {donor_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Deactivate donor '{donor.name}' (ID: {donor_id})?"):
        click.echo("Cancelled.")
        return

    try:
        service.deactivate_donor(donor_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated donor '{donor.name}'")


def register_commands(cli):
    """Register donor commands with main CLI."""
    cli.add_command(donor_group, name="donor")
