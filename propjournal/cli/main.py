"""Main CLI entry point for PropJournal.

This module provides the main click group and lazy loading
for heavy imports to improve startup time.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when they are actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "init": "propjournal.cli.setup",
    "log": "propjournal.cli.journal",
    "payout": "propjournal.cli.journal",
    "history": "propjournal.cli.journal",
    "stats": "propjournal.cli.journal",
    "chart": "propjournal.cli.journal",
    "coach": "propjournal.cli.coach",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="propjournal")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/propjournal/config.toml).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show info logs.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """PropJournal - track a funded trading account from the terminal.

    Log daily P/L and payouts, watch your streaks and progress toward
    the payout goal, and get an optional AI coaching report.

    \b
    Quick Start:
      propjournal init             # Create a config file
      propjournal log 350          # Log today's net P/L
      propjournal payout 2000      # Log a withdrawal
      propjournal stats            # Dashboard
    """
    from propjournal.config import get_config_path, load_config
    from propjournal.log import setup_logging

    ctx.ensure_object(dict)
    path = config_path or get_config_path()
    config = load_config(path)
    setup_logging("INFO" if verbose else config.log_level)

    ctx.obj["config_path"] = path
    ctx.obj["config"] = config


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
