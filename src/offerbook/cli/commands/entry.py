"""Offering entry commands: stage, review and commit a batch."""

import click
from offerbook.cli.error_handling import format_amount, handle_domain_error
from offerbook.domain.commit import CommitEngine
from offerbook.domain.donor import DonorService
from offerbook.domain.errors import DomainError
from offerbook.domain.ledger import PendingLedger
from offerbook.domain.offering_type import OfferingTypeService
from offerbook.domain.sync import SyncMarker
from offerbook.utils.date_parser import most_recent_sunday, parse_date
from offerbook.utils.donor_resolver import resolve_donor


def _describe_donor(item) -> str:
    if item.offering_number:
        return f"[{item.offering_number}] {item.donor_name}"
    return item.donor_name


@click.group()
def entry_group():
    """Stage offerings and commit them in one batch."""
    pass


@entry_group.command("add")
@click.option("--code", required=True, help="Offering type code (e.g. 11)")
@click.option("--amount", required=True, help="Amount (e.g. 250 or 1,250.50)")
@click.option(
    "--donor",
    "donor_ref",
    default="",
    help="Offering number, #ID or exact name. Unknown text is kept as a free-text name.",
)
@click.option("--note", default="", help="Note shown next to the donor")
@click.pass_context
def add_entry(ctx, code: str, amount: str, donor_ref: str, note: str):
    """Stage one offering.

    Examples:
        offerbook entry add --code 11 --amount 250 --donor 122
        offerbook entry add --code 29 --amount 100 --donor "Kim" --note "New year"
        offerbook entry add --code 22 --amount 50
    """
    db = ctx.obj["db"]
    ledger = PendingLedger(ctx.obj["store"])

    try:
        offering_type = OfferingTypeService(db).require_type(code)
        donor = resolve_donor(DonorService(db), donor_ref) if donor_ref else None
        item = ledger.add_item(
            code=offering_type.code,
            label=offering_type.label,
            amount=amount,
            note=note,
            donor=donor,
            typed_name=donor_ref,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Staged {item.id}: {item.code} {item.label} {format_amount(item.amount)} "
        f"from {_describe_donor(item)}"
    )
    click.echo(f"Pending: {len(ledger)} entries, total {format_amount(ledger.grand_total())}")


@entry_group.command("list")
@click.pass_context
def list_entries(ctx):
    """List staged entries, newest first."""
    ledger = PendingLedger(ctx.obj["store"])

    items = ledger.items(newest_first=True)
    if not items:
        click.echo("No pending entries.")
        return

    click.echo(f"\nPending entries ({len(items)}):")
    click.echo("-" * 80)
    for item in items:
        note = f" ({item.note})" if item.note else ""
        click.echo(
            f"{item.id} | {item.code:>4s} {item.label:16s} | "
            f"{format_amount(item.amount):>12s} | {_describe_donor(item)}{note}"
        )
    click.echo("-" * 80)
    click.echo(f"Total: {format_amount(ledger.grand_total())}")


@entry_group.command("remove")
@click.argument("item_id")
@click.pass_context
def remove_entry(ctx, item_id: str):
    """Remove a staged entry by its ID."""
    ledger = PendingLedger(ctx.obj["store"])
    before = len(ledger)
    ledger.remove_item(item_id)
    if len(ledger) == before:
        click.echo(f"No pending entry {item_id}; nothing removed.")
    else:
        click.echo(f"Removed {item_id}")


@entry_group.command("amount")
@click.argument("item_id")
@click.argument("amount")
@click.pass_context
def set_entry_amount(ctx, item_id: str, amount: str):
    """Change a staged entry's amount.

    Characters other than digits and '.' are ignored; unreadable input
    sets the amount to 0.
    """
    ledger = PendingLedger(ctx.obj["store"])
    ledger.update_item_amount(item_id, amount)
    item = ledger.get_item(item_id)
    if item is None:
        click.echo(f"No pending entry {item_id}; nothing changed.")
        return
    click.echo(f"{item_id} amount is now {format_amount(item.amount)}")


@entry_group.command("summary")
@click.pass_context
def summarize_entries(ctx):
    """Show staged totals per offering code."""
    ledger = PendingLedger(ctx.obj["store"])

    summaries = ledger.summarize_by_category()
    if not summaries:
        click.echo("No pending entries.")
        return

    for summary in summaries:
        click.echo(f"{summary.code} {summary.label}: {format_amount(summary.total)}")
        click.echo(f"    {', '.join(summary.contributors)}")
    click.echo(f"Total: {format_amount(ledger.grand_total())}")


@entry_group.command("commit")
@click.option(
    "--date",
    "date_str",
    help="Offering date (YYYY-MM-DD or 'last sunday'); defaults to the most recent Sunday",
)
@click.pass_context
def commit_entries(ctx, date_str: str | None):
    """Commit every staged entry as one batch."""
    db = ctx.obj["db"]
    store = ctx.obj["store"]
    ledger = PendingLedger(store)
    marker = SyncMarker(store)

    if date_str:
        try:
            entry_date = parse_date(date_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)
    else:
        entry_date = most_recent_sunday()

    if entry_date.weekday() != 6:
        click.echo(f"Warning: {entry_date.isoformat()} is not a Sunday.", err=True)

    engine = CommitEngine(db, ledger, marker)
    try:
        ids = engine.commit(entry_date)
    except DomainError as e:
        click.echo("Pending entries were kept; fix the problem and commit again.", err=True)
        handle_domain_error(ctx, e)

    click.echo(f"Committed {len(ids)} records for {entry_date.isoformat()}")
    click.echo(f"{len(marker.pending_ids())} records awaiting spreadsheet sync")


@entry_group.command("clear")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_entries(ctx, yes: bool):
    """Discard every staged entry."""
    ledger = PendingLedger(ctx.obj["store"])
    if not ledger:
        click.echo("No pending entries.")
        return
    if not yes and not click.confirm(f"Discard {len(ledger)} pending entries?"):
        click.echo("Cancelled.")
        return
    ledger.clear()
    click.echo("Pending entries discarded.")


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
