"""Journal commands for PropJournal CLI.

Handles logging trading days and payouts, the statistics dashboard,
entry history and chart data.
"""

from typing import Optional

import click
from rich.columns import Columns
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

console = Console()


def _get_session(ctx: click.Context, with_coach: bool = True):
    """Open the journal for the loaded config."""
    from propjournal.session import open_session

    return open_session(ctx.obj["config"], with_coach=with_coach)


def format_money(value: float, signed: bool = False) -> str:
    """Format a dollar amount, e.g. "$1,250.00" or "+$1,250.00"."""
    sign = "-" if value < 0 else ("+" if signed and value > 0 else "")
    return f"{sign}${abs(value):,.2f}"


def _pnl_markup(value: float) -> str:
    color = "green" if value >= 0 else "red"
    return f"[{color}]{format_money(value, signed=True)}[/{color}]"


def _entry_amount_markup(entry) -> str:
    if entry.is_payout:
        return f"[yellow]-{format_money(entry.payout_amount or 0.0)}[/yellow]"
    return _pnl_markup(entry.pnl)


def _bar(value: float, scale: float, width: int = 20) -> str:
    """Horizontal bar proportional to |value| / scale."""
    if scale <= 0:
        return ""
    length = max(1, round(abs(value) / scale * width)) if value else 0
    color = "green" if value >= 0 else "red"
    return f"[{color}]{'█' * length}[/{color}]"


def _stat_card(title: str, value: str, sub_value: str = "") -> Panel:
    body = f"[bold]{value}[/bold]"
    if sub_value:
        body += f"\n[dim]{sub_value}[/dim]"
    return Panel(body, title=f"[cyan]{title}[/cyan]", border_style="dim", expand=True)


def render_stats(stats, profit_goal: float) -> Group:
    """Build the dashboard renderable from a statistics snapshot."""
    from propjournal.stats.series import (
        days_until_summer,
        is_goal_reached,
        remaining_to_goal,
    )

    cards = Columns([
        _stat_card("Account Balance", format_money(stats.current_balance)),
        _stat_card(
            "Cumulative P/L",
            _pnl_markup(stats.cumulative_pnl),
            "In Profit" if stats.cumulative_pnl >= 0 else "Drawdown",
        ),
        _stat_card("Daily Average", _pnl_markup(stats.daily_average)),
        _stat_card(
            "Win Rate",
            f"{stats.win_rate:.1f}%",
            f"Best Streak: {stats.best_streak} | Worst: {stats.worst_streak}",
        ),
        _stat_card("Summer Countdown", f"{days_until_summer()} days"),
    ], expand=True)

    reached = is_goal_reached(stats, profit_goal)
    goal_lines = [
        f"[bold]{format_money(stats.total_payouts)}[/bold] of {format_money(profit_goal)} withdrawn "
        f"({stats.profit_goal_progress:.1f}%)",
        ProgressBar(total=100, completed=stats.profit_goal_progress, width=50),
    ]
    if reached:
        goal_lines.append("[green]Congratulations, you made it.[/green]")
    else:
        goal_lines.append(
            f"[dim]Remaining payouts needed:[/dim] {format_money(remaining_to_goal(stats, profit_goal))}"
        )
        if stats.projected_days_to_goal:
            goal_lines.append(
                f"[dim]~{stats.projected_days_to_goal} trading days to goal at current pace[/dim]"
            )

    goal_panel = Panel(
        Group(*goal_lines),
        title="[bold cyan]Payout Goal[/bold cyan]",
        border_style="green" if reached else "cyan",
    )
    return Group(cards, goal_panel)


def render_celebration(profit_goal: float) -> Panel:
    return Panel(
        f"[bold]You hit {format_money(profit_goal)} in payouts![/bold]\n\n"
        "Time to go get that Mustang.",
        title="[bold yellow]GOAL REACHED[/bold yellow]",
        border_style="yellow",
    )


def _log_entry(
    ctx: click.Context,
    amount: str,
    entry_date: Optional[str],
    notes: Optional[str],
    setup: Optional[str],
    is_payout: bool,
    no_coach: bool,
) -> None:
    """Validate input, append it and show the refreshed dashboard."""
    from propjournal.cli.coach import render_analysis
    from propjournal.journal.entries import make_request

    try:
        request = make_request(
            amount,
            entry_date=entry_date,
            is_payout=is_payout,
            notes=notes,
            setup=setup,
        )
    except ValueError as e:
        console.print(Panel(
            f"[red]{escape(str(e))}[/red]",
            title="[bold red]Invalid Entry[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    session = _get_session(ctx, with_coach=not no_coach)
    config = session.config

    update = session.add_entry(request, analyze=False)

    entry = update.entry
    kind = "Payout" if entry.is_payout else "Trading day"
    console.print(
        f"[green]Logged[/green] {kind} {entry.date.isoformat()}: {_entry_amount_markup(entry)}"
    )

    if update.celebrate:
        console.print(render_celebration(config.profit_goal))

    console.print(render_stats(update.stats, config.profit_goal))

    if session.coach_available:
        with console.status("[dim]Coach is reviewing your journal...[/dim]"):
            analysis = session.update_analysis()
    else:
        analysis = session.update_analysis()

    if analysis is not None:
        console.print(render_analysis(analysis))


@click.command(name="log", context_settings={"ignore_unknown_options": True})
@click.argument("amount")
@click.option("--date", "entry_date", type=str, default=None, help="Date (YYYY-MM-DD). Defaults to today.")
@click.option("--notes", type=str, default=None, help="Notes for the day.")
@click.option("--setup", type=str, default=None, help="Setup or strategy tag.")
@click.option("--no-coach", is_flag=True, default=False, help="Skip the AI coach.")
@click.pass_context
def log(
    ctx: click.Context,
    amount: str,
    entry_date: Optional[str],
    notes: Optional[str],
    setup: Optional[str],
    no_coach: bool,
) -> None:
    """Log a trading day's net P/L.

    \b
    Examples:
      propjournal log 350
      propjournal log -120 --notes "Revenge traded"
      propjournal log 500 --date 2024-06-03 --setup ORB
    """
    _log_entry(ctx, amount, entry_date, notes, setup, is_payout=False, no_coach=no_coach)


@click.command(name="payout", context_settings={"ignore_unknown_options": True})
@click.argument("amount")
@click.option("--date", "entry_date", type=str, default=None, help="Date (YYYY-MM-DD). Defaults to today.")
@click.option("--notes", type=str, default=None, help="Notes for the payout.")
@click.option("--no-coach", is_flag=True, default=False, help="Skip the AI coach.")
@click.pass_context
def payout(
    ctx: click.Context,
    amount: str,
    entry_date: Optional[str],
    notes: Optional[str],
    no_coach: bool,
) -> None:
    """Log a withdrawal from the funded account.

    The amount is always recorded as a positive withdrawal.

    \b
    Examples:
      propjournal payout 2000
      propjournal payout 1500 --date 2024-06-28
    """
    _log_entry(ctx, amount, entry_date, notes, None, is_payout=True, no_coach=no_coach)


@click.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show the performance dashboard.

    Balance, cumulative P/L, daily average, win rate, streaks and
    progress toward the payout goal.
    """
    session = _get_session(ctx, with_coach=False)
    console.print(render_stats(session.stats, session.config.profit_goal))

    if not session.entries:
        console.print("\n[dim]No entries yet. Log one with [cyan]propjournal log AMOUNT[/cyan].[/dim]")


@click.command()
@click.option("--limit", type=int, default=20, help="Number of entries to show.")
@click.pass_context
def history(ctx: click.Context, limit: int) -> None:
    """Show journal entries, newest first.

    \b
    Examples:
      propjournal history
      propjournal history --limit 5
    """
    from propjournal.stats.series import recent_activity

    session = _get_session(ctx, with_coach=False)
    entries = recent_activity(session.entries, limit=limit)

    if not entries:
        console.print(Panel(
            "[dim]No journal entries found[/dim]",
            title="[bold]Recent Activity[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Recent Activity",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("Type", justify="center")
    table.add_column("Amount", justify="right")
    table.add_column("Setup", style="dim")
    table.add_column("Notes", max_width=40)

    for entry in entries:
        table.add_row(
            entry.date.isoformat(),
            "[yellow]Payout[/yellow]" if entry.is_payout else "Trade",
            _entry_amount_markup(entry),
            escape(entry.setup or "-"),
            escape(entry.notes or "-"),
        )

    console.print(table)
    console.print(f"\n[bold]Showing:[/bold] {len(entries)} of {len(session.entries)} entries")


@click.command()
@click.option(
    "--kind",
    type=click.Choice(["cumulative", "payouts", "daily"]),
    default="cumulative",
    help="Which series to chart.",
)
@click.option("--days", type=int, default=14, help="Trading days for the daily chart.")
@click.pass_context
def chart(ctx: click.Context, kind: str, days: int) -> None:
    """Chart cumulative P/L, payouts or recent daily P/L.

    \b
    Examples:
      propjournal chart
      propjournal chart --kind payouts
      propjournal chart --kind daily --days 10
    """
    from propjournal.stats.series import (
        cumulative_series,
        daily_bars,
        gradient_offset,
        payout_series,
    )

    session = _get_session(ctx, with_coach=False)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")

    if kind == "cumulative":
        series = cumulative_series(session.entries)
        table.title = "Cumulative P/L"
        table.add_column("Daily", justify="right")
        table.add_column("Running", justify="right")
        table.add_column("")
        scale = max((abs(point["value"]) for point in series), default=0.0)
        for point in series:
            table.add_row(
                point["date"].isoformat(),
                _pnl_markup(point["daily"]),
                _pnl_markup(point["value"]),
                _bar(point["value"], scale),
            )
        footer = f"[dim]Range above zero: {gradient_offset(series) * 100:.0f}%[/dim]"
    elif kind == "payouts":
        series = payout_series(session.entries)
        table.title = "Payouts"
        table.add_column("Amount", justify="right")
        table.add_column("Total", justify="right")
        table.add_column("")
        scale = max((point["value"] for point in series), default=0.0)
        for point in series:
            table.add_row(
                point["date"].isoformat(),
                f"[yellow]{format_money(point['amount'])}[/yellow]",
                format_money(point["value"]),
                f"[yellow]{'█' * (round(point['value'] / scale * 20) if scale else 0)}[/yellow]",
            )
        footer = ""
    else:
        series = daily_bars(session.entries, limit=days)
        table.title = f"Daily P/L (last {days} trading days)"
        table.add_column("P/L", justify="right")
        table.add_column("")
        scale = max((abs(entry.pnl) for entry in series), default=0.0)
        for entry in series:
            table.add_row(entry.date.isoformat(), _pnl_markup(entry.pnl), _bar(entry.pnl, scale))
        footer = ""

    if not series:
        console.print(Panel(
            "[dim]Nothing to chart yet[/dim]",
            title=f"[bold]{table.title}[/bold]",
            border_style="dim",
        ))
        return

    console.print(table)
    if footer:
        console.print(footer)
