"""Setup commands for PropJournal CLI."""

import click
from rich.console import Console
from rich.panel import Panel

console = Console()


@click.command()
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config.")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Create a template configuration file.

    \b
    Examples:
      propjournal init
      propjournal --config ./journal.toml init --force
    """
    from propjournal.config import create_template_config

    path = ctx.obj["config_path"]

    if path.exists() and not force:
        console.print(Panel(
            f"Config already exists at [cyan]{path}[/cyan]\n\n"
            "Use [cyan]--force[/cyan] to overwrite it.",
            title="[bold yellow]Config Exists[/bold yellow]",
            border_style="yellow",
        ))
        return

    written = create_template_config(path)
    console.print(Panel(
        f"Config written to [cyan]{written}[/cyan]\n\n"
        "[dim]Set account size and payout goal under \\[account].\n"
        "Add an OpenAI key under \\[openai] (or export OPENAI_API_KEY)\n"
        "to enable the AI coach.[/dim]",
        title="[bold green]Config Created[/bold green]",
        border_style="green",
    ))
