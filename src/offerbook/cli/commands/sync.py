"""Spreadsheet sync commands."""

import click
from offerbook.cli.error_handling import handle_domain_error
from offerbook.domain.errors import DomainError
from offerbook.domain.sync import SheetSettings, SheetSync, SyncMarker


@click.group()
def sync_group():
    """Mirror committed records to the external spreadsheet."""
    pass


@sync_group.command("status")
@click.pass_context
def sync_status(ctx):
    """Show how many records await sync and where they will go."""
    store = ctx.obj["store"]
    marker = SyncMarker(store)
    settings = SheetSettings(ctx.obj["db"], store)

    pending = marker.pending_ids()
    url = settings.get_url()
    click.echo(f"Records awaiting sync: {len(pending)}")
    click.echo(f"Webhook URL: {url or '(not configured)'}")


@sync_group.command("url")
@click.argument("url", required=False)
@click.pass_context
def sync_url(ctx, url: str | None):
    """Show or set the spreadsheet webhook URL."""
    settings = SheetSettings(ctx.obj["db"], ctx.obj["store"])
    if url is None:
        current = settings.get_url()
        click.echo(current or "(not configured)")
        return

    try:
        saved = settings.set_url(url)
    except DomainError as e:
        click.echo("The URL was cached locally but could not be saved to the database.", err=True)
        handle_domain_error(ctx, e)
    click.echo(f"Webhook URL set to {saved}")


@sync_group.command("run")
@click.pass_context
def sync_run(ctx):
    """Send every record awaiting sync to the spreadsheet."""
    db = ctx.obj["db"]
    store = ctx.obj["store"]
    marker = SyncMarker(store)

    with SheetSync(db, marker, SheetSettings(db, store)) as sheet_sync:
        try:
            result = sheet_sync.sync()
        except DomainError as e:
            handle_domain_error(ctx, e)

    click.echo(f"Sent {result.sent} records to the spreadsheet (HTTP {result.status_code}).")
    click.echo("Delivery is unconfirmed: check the spreadsheet to make sure the rows arrived.")


def register_commands(cli):
    """Register sync commands with main CLI."""
    cli.add_command(sync_group, name="sync")
