"""AI coach commands for PropJournal CLI."""

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console()


def render_analysis(analysis) -> Panel:
    """Build the coach panel for an analysis."""
    vibe = analysis.vibe_report
    rating = (
        f"{vibe.momentum_rating}/10" if vibe.momentum_rating is not None else "Waiting for data"
    )

    text = (
        f"[bold]Stoke Meter:[/bold]      {escape(vibe.stoke_meter)}\n"
        f"[bold]Mustang Progress:[/bold] {escape(vibe.mustang_progress)}\n"
        f"[bold]Momentum:[/bold]         {rating}\n"
        f"{'─' * 40}\n"
        f"[green]\"{escape(vibe.hype_line)}\"[/green]\n"
        f"[yellow]\"{escape(vibe.reality_check)}\"[/yellow]\n\n"
        f"{escape(analysis.coach_insights)}\n\n"
        f"[bold cyan]Next Focus:[/bold cyan] {escape(analysis.next_focus)}"
    )

    return Panel(
        text,
        title="[bold magenta]Coach's Corner[/bold magenta]",
        border_style="magenta",
    )


@click.command()
@click.option(
    "--refresh",
    is_flag=True,
    default=False,
    help="Ask the AI coach for a fresh analysis.",
)
@click.pass_context
def coach(ctx: click.Context, refresh: bool) -> None:
    """Show the AI coaching report.

    The report is refreshed automatically after each entry when an
    OpenAI key is configured. Use --refresh to regenerate it now.

    \b
    Examples:
      propjournal coach
      propjournal coach --refresh
    """
    from propjournal.session import open_session

    session = open_session(ctx.obj["config"], with_coach=refresh)

    if refresh:
        if not session.coach_available:
            console.print(Panel(
                "[yellow]AI coach is not configured.[/yellow]\n\n"
                "Set [cyan]OPENAI_API_KEY[/cyan] or add a key under "
                "\\[openai] in the config file.",
                title="[bold yellow]Coach Unavailable[/bold yellow]",
                border_style="yellow",
            ))
        elif not session.entries:
            console.print("[dim]Log some entries first.[/dim]")
        else:
            with console.status("[dim]Coach is reviewing your journal...[/dim]"):
                result = session.refresh_analysis()
            if result is None:
                console.print("[red]Coach analysis failed; showing the previous report.[/red]")

    if session.analysis is None:
        console.print(Panel(
            "[dim]Waiting for data...[/dim]",
            title="[bold magenta]Coach's Corner[/bold magenta]",
            border_style="dim",
        ))
        return

    console.print(render_analysis(session.analysis))
