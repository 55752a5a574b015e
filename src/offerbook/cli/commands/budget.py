"""Budget commands."""

import click
from offerbook.cli.error_handling import format_amount, format_percent, handle_domain_error
from offerbook.domain.budget import BudgetService
from offerbook.domain.errors import DomainError
from offerbook.utils.amount_parser import parse_amount


@click.group()
def budget_group():
    """Set budgets and compare them with actual offerings."""
    pass


@budget_group.command("set")
@click.argument("year", type=int)
@click.argument("code")
@click.argument("amount")
@click.option("--note", help="Note for this budget line")
@click.pass_context
def set_budget(ctx, year: int, code: str, amount: str, note: str | None):
    """Set the budget of one offering code for a year.

    Examples:
        offerbook budget set 2025 11 120,000
    """
    service = BudgetService(ctx.obj["db"])
    try:
        budget = service.set_budget(year=year, code=code, amount=parse_amount(amount), note=note)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Budget {budget.year} {budget.code}: {format_amount(budget.amount)}")


@budget_group.command("show")
@click.argument("year", type=int)
@click.pass_context
def show_budget(ctx, year: int):
    """Show budget against actual per category and code."""
    service = BudgetService(ctx.obj["db"])
    try:
        report = service.budget_vs_actual(year)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not report.categories:
        click.echo("No offering types found.")
        return

    click.echo(f"\nBudget {year}")
    click.echo("-" * 72)
    for category in report.categories:
        click.echo(
            f"{category.category}: budget {format_amount(category.budget)}, "
            f"actual {format_amount(category.actual)} ({format_percent(category.percent)})"
        )
        for line in category.lines:
            note = f" | {line.note}" if line.note else ""
            click.echo(
                f"    {line.code:>4s} {line.label:16s} {format_amount(line.budget):>12s} "
                f"{format_amount(line.actual):>12s} {format_percent(line.percent):>7s}{note}"
            )
    click.echo("-" * 72)
    click.echo(
        f"Total: budget {format_amount(report.total_budget)}, "
        f"actual {format_amount(report.total_actual)} ({format_percent(report.percent)})"
    )


@budget_group.command("progress")
@click.argument("year", type=int)
@click.pass_context
def budget_progress(ctx, year: int):
    """Show year-to-date achievement per category."""
    service = BudgetService(ctx.obj["db"])
    try:
        progress = service.category_progress(year)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not progress:
        click.echo("No budgets or offerings for this year.")
        return

    for p in progress:
        click.echo(
            f"{p.category:20s} {format_amount(p.actual):>12s} / {format_amount(p.budget):>12s} "
            f"{format_percent(p.percent):>7s}"
        )


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
