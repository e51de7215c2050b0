"""Command-line interface for The Shit."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from theshit import __version__
from theshit.config import Settings
from theshit.core import Corrector
from theshit.errors import TheShitError
from theshit.rules.base import Command
from theshit.rules.dispatcher import Dispatcher
from theshit.shell.history import get_last_command

console = Console()

ALIAS_TEMPLATE = "alias {name}='theshit fix \"$(fc -ln -1)\"'"


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.group()
@click.version_option(__version__, prog_name="The Shit")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """The Shit - fix the command that just failed."""
    settings = Settings.from_env()
    if debug:
        settings.debug = True
    _configure_logging(settings.debug)
    console.no_color = settings.no_colors

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@click.option("--yeah", "-y", "--hard", "yes", is_flag=True, help="Run the fix without asking")
@click.option("--recursive", "-r", is_flag=True, help="Keep fixing while the fix itself fails")
@click.argument("command", nargs=-1)
@click.pass_context
def fix(ctx: click.Context, yes: bool, recursive: bool, command: tuple[str, ...]) -> None:
    """Correct COMMAND, or the last command in shell history."""
    settings: Settings = ctx.obj["settings"]

    script = " ".join(command).strip()
    if not script:
        try:
            script = get_last_command(settings.shell, settings.home, limit=settings.history_limit)
        except TheShitError as e:
            console.print(f"[red]{e}[/red]")
            sys.exit(1)

    ask = settings.require_confirmation and not yes

    def confirm(correction: str) -> bool:
        console.print(f"[bold green]{correction}[/bold green]")
        if not ask:
            return True
        return click.confirm("Run it?", default=True)

    corrector = Corrector(settings)
    attempts = corrector.fix(script, confirm=confirm, recursive=recursive)

    if not attempts:
        console.print("[yellow]No shit to fix![/yellow]")
        return

    last = attempts[-1]
    if last.returncode not in (None, 0):
        sys.exit(last.returncode)


@cli.command()
@click.option("--name", default="shit", help="Alias name")
def alias(name: str) -> None:
    """Print the shell alias that invokes the fixer."""
    click.echo(ALIAS_TEMPLATE.format(name=name))


@cli.command()
@click.pass_context
def list_rules(ctx: click.Context) -> None:
    """List correction rules in evaluation order."""
    dispatcher = Dispatcher.from_settings(ctx.obj["settings"])

    table = Table(title="Correction Rules")
    table.add_column("#", style="dim")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Priority", style="yellow")
    table.add_column("Enabled", style="green")
    table.add_column("Description", style="white")

    for position, rule in enumerate(dispatcher.list_rules(), 1):
        table.add_row(
            str(position),
            rule.name,
            str(rule.priority),
            "yes" if rule.enabled else "no",
            rule.description,
        )

    console.print(table)


@cli.command()
@click.option("--output", "-o", default="", help="Output the command produced")
@click.argument("command")
@click.pass_context
def explain(ctx: click.Context, output: str, command: str) -> None:
    """Show which rule would correct COMMAND without running anything."""
    dispatcher = Dispatcher.from_settings(ctx.obj["settings"])
    result = dispatcher.explain(Command(command, output))

    console.print(Panel.fit(f"Command: {command}"))

    table = Table(title="Dispatch Result")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Rule Matched", result["rule_matched"] or "none")
    for i, correction in enumerate(result["corrections"], 1):
        table.add_row(f"Correction {i}", correction)
    console.print(table)

    shadowed = result["all_matching_rules"][1:]
    if shadowed:
        console.print("\n[yellow]Also matching (shadowed):[/yellow]")
        for rule in shadowed:
            console.print(f"  - {rule['name']} (priority {rule['priority']})")


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
