"""Report commands."""

import click
from offerbook.cli.error_handling import format_amount, handle_domain_error
from offerbook.domain.errors import DomainError
from offerbook.domain.reports import ReportService
from offerbook.utils.date_parser import parse_date


@click.group()
def report_group():
    """Offering reports."""
    pass


@report_group.command("day")
@click.argument("day")
@click.pass_context
def day_report(ctx, day: str):
    """Per-code totals for one offering date (e.g. 'last sunday')."""
    try:
        report_date = parse_date(day)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    service = ReportService(ctx.obj["db"])
    try:
        summaries = service.day_summary(report_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not summaries:
        click.echo(f"No offerings recorded on {report_date}.")
        return

    click.echo(f"\nOfferings on {report_date}")
    click.echo("-" * 60)
    for summary in summaries:
        click.echo(f"{summary.code} {summary.label}: {format_amount(summary.total)}")
        click.echo(f"    {', '.join(summary.contributors)}")
    total = sum(s.total for s in summaries)
    click.echo("-" * 60)
    click.echo(f"Total: {format_amount(total)}")


@report_group.command("month")
@click.argument("year", type=int)
@click.argument("month", type=click.IntRange(1, 12))
@click.pass_context
def month_report(ctx, year: int, month: int):
    """Month total against last month and last year, with per-code shares."""
    service = ReportService(ctx.obj["db"])
    try:
        comparison = service.monthly_comparison(year, month)
        breakdown = service.month_breakdown(year, month)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{year}-{month:02d}: {format_amount(comparison.current_total)}")
    click.echo(
        f"  vs previous month: {format_amount(comparison.mom_diff)} ({comparison.mom_percent:+.1f}%)"
    )
    click.echo(
        f"  vs {year - 1}-{month:02d}: {format_amount(comparison.yoy_diff)} ({comparison.yoy_percent:+.1f}%)"
    )
    for item in breakdown:
        click.echo(
            f"    {item.code:>4s} {item.label:16s} {format_amount(item.total):>12s} "
            f"{item.count:4d} gifts {item.share_percent:5.1f}%"
        )


@report_group.command("trend")
@click.argument("year", type=int)
@click.pass_context
def trend_report(ctx, year: int):
    """Monthly totals for a year next to the year before."""
    service = ReportService(ctx.obj["db"])
    try:
        trend = service.year_trend(year)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{'Month':>5s} {year:>14d} {year - 1:>14d}")
    for index, (current, previous) in enumerate(zip(trend.current, trend.previous), start=1):
        click.echo(f"{index:5d} {format_amount(current):>14s} {format_amount(previous):>14s}")
    click.echo(f"{'Total':>5s} {format_amount(trend.current_total):>14s} {format_amount(trend.previous_total):>14s}")
    click.echo(f"Growth: {trend.growth_percent:+.1f}%")
    click.echo(f"Best month: {trend.best_month}")
    click.echo(f"Monthly average: {format_amount(trend.monthly_average)}")


@report_group.command("donor")
@click.argument("offering_number")
@click.option("--year", type=int, help="Only this year")
@click.pass_context
def donor_report(ctx, offering_number: str, year: int | None):
    """Giving history of one offering number."""
    service = ReportService(ctx.obj["db"])
    try:
        history = service.donor_history(offering_number, year=year)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not history:
        click.echo(f"No offerings found for No. {offering_number}.")
        return

    for h in history:
        click.echo(f"{h.year}-{h.month:02d}-{h.day:02d} {h.code:>4s} {format_amount(h.total):>12s}")
    total = sum(h.total for h in history)
    click.echo(f"Total: {format_amount(total)}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
