"""Committed record commands."""

import click
from offerbook.cli.error_handling import format_amount, handle_domain_error
from offerbook.domain.errors import DomainError
from offerbook.domain.record import SORT_KEYS, RecordService
from offerbook.domain.sync import SyncMarker
from offerbook.utils.amount_parser import parse_amount
from offerbook.utils.date_parser import parse_date


@click.group()
def record_group():
    """Browse, edit and delete committed records."""
    pass


@record_group.command("list")
@click.option("--year", type=int, help="Only records of this year")
@click.option("--month", type=click.IntRange(1, 12), help="Only records of this month (requires --year)")
@click.option("--search", help="Match donor name, offering number or note")
@click.option("--sort", "sort_key", type=click.Choice(SORT_KEYS), default="date", show_default=True)
@click.option("--asc", is_flag=True, help="Sort ascending")
@click.option("--limit", type=int, help="Show at most this many records")
@click.pass_context
def list_records(ctx, year, month, search, sort_key, asc, limit):
    """List committed records (newest first by default)."""
    store = ctx.obj["store"]
    marker = SyncMarker(store)
    service = RecordService(ctx.obj["db"], marker)

    try:
        records = service.list_records(
            year=year, month=month, search=search, sort_key=sort_key, descending=not asc, limit=limit
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not records:
        click.echo("No records found.")
        return

    pending = marker.pending_ids()
    click.echo(f"\nRecords ({len(records)}):")
    click.echo("-" * 90)
    for r in records:
        flag = "*" if r.id in pending else " "
        number = r.offering_number or "-"
        note = f" ({r.note})" if r.note else ""
        click.echo(
            f"{flag}{r.id:6d} | {r.date} | {r.code:>4s} {r.label:16s} | "
            f"No. {number:>5s} {r.donor_name:16s} | {format_amount(r.amount):>12s}{note}"
        )
    if pending & {r.id for r in records}:
        click.echo("* awaiting spreadsheet sync")


@record_group.command("edit")
@click.argument("record_id", type=int)
@click.option("--date", "date_str", help="New date")
@click.option("--code", help="New offering type code")
@click.option("--amount", help="New amount")
@click.option("--note", help="New note")
@click.option("--name", "donor_name", help="New donor display name")
@click.option("--number", "offering_number", help="New offering number ('' clears it)")
@click.pass_context
def edit_record(ctx, record_id, date_str, code, amount, note, donor_name, offering_number):
    """Edit a committed record."""
    service = RecordService(ctx.obj["db"], SyncMarker(ctx.obj["store"]))

    new_date = None
    if date_str:
        try:
            new_date = parse_date(date_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    new_amount = None
    if amount is not None:
        try:
            new_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        updated = service.update_record(
            record_id,
            date=new_date,
            code=code,
            amount=new_amount,
            note=note,
            donor_name=donor_name,
            offering_number=offering_number,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated record {updated.id}")
    click.echo(f"  Date: {updated.date}")
    click.echo(f"  Code: {updated.code} {updated.label}")
    click.echo(f"  Amount: {format_amount(updated.amount)}")
    click.echo(f"  Donor: {updated.donor_name}")


@record_group.command("delete")
@click.argument("record_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_record(ctx, record_id: int, yes: bool):
    """Permanently delete a committed record."""
    service = RecordService(ctx.obj["db"], SyncMarker(ctx.obj["store"]))
    record = service.get_record(record_id)
    if record is None:
        click.echo(f"Error: Record {record_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Delete record {record_id} ({record.date}, {record.donor_name}, "
        f"{format_amount(record.amount)})? This cannot be undone."
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_record(record_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted record {record_id}")


def register_commands(cli):
    """Register record commands with main CLI."""
    cli.add_command(record_group, name="record")
