"""CLI interface for slashdeck using Typer."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from slashdeck.core.context import SharedContext
from slashdeck.core.definition import Kind
from slashdeck.core.exceptions import DefError
from slashdeck.utils.config import Config
from slashdeck.utils.logging import setup_logging

app = typer.Typer(
    name="slashdeck",
    help="Slashdeck: load, validate and run plugin commands and agents",
    no_args_is_help=True,
    add_completion=True,
)

# Rendered prompts are printed verbatim, so no :emoji: codes either
console = Console(soft_wrap=True, emoji=False)
err_console = Console(stderr=True, soft_wrap=True, emoji=False)


def load_config_callback(ctx: typer.Context, root: str):
    """Load configuration and store the shared context."""
    if ctx.resilient_parsing:
        return root

    root_path = Path(root).resolve()

    if not root_path.is_dir():
        err_console.print(f"[red]Plugin root not found: {escape(str(root_path))}[/red]")
        raise typer.Exit(1)

    try:
        cfg = Config.load(root_path)
    except Exception as e:
        err_console.print(f"[red]Error loading config: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    ctx.obj["context"] = SharedContext(cfg)
    return root


@app.callback()
def main(
    ctx: typer.Context,
    root: str = typer.Option(
        ".",
        "--root",
        "-r",
        help="Path to the plugin directory",
        callback=load_config_callback,
    ),
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log to the console")
    ] = False,
) -> None:
    """
    Slashdeck: registry of slash commands and agents.

    The plugin directory holds commands/, agents/ and the manifest.
    Optional settings are read from slashdeck.yaml in that directory.
    """
    if ctx.resilient_parsing:
        return
    try:
        setup_logging(ctx.obj["config"], console_output=verbose)
    except OSError as e:
        err_console.print(f"[red]Cannot set up logging: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _load_registry(ctx: typer.Context):
    context: SharedContext = ctx.obj["context"]
    try:
        return context.registry
    except DefError as e:
        err_console.print(f"[red]Failed to load registry: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command("list")
def list_definitions(
    ctx: typer.Context,
    kind: Annotated[
        Kind | None,
        typer.Option("--kind", "-k", help="Only list this kind"),
    ] = None,
) -> None:
    """List commands and agents, grouped by category."""
    registry = _load_registry(ctx)
    kinds = [kind] if kind else list(Kind)

    for k in kinds:
        definitions = registry.list(k)
        table = Table(title=f"{k.value.capitalize()}s ({len(definitions)})")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Category", style="magenta")
        table.add_column("Description")
        table.add_column("Model", style="green")

        for definition in sorted(
            definitions, key=lambda d: (d.category or "", d.identifier)
        ):
            name = definition.identifier
            if k is Kind.COMMAND:
                name = f"{ctx.obj['config'].command_marker}{name}"
                if definition.argument_hint:
                    name = f"{name} {definition.argument_hint}"
            table.add_row(
                escape(name),
                escape(definition.category or ""),
                escape(definition.description),
                escape(definition.model_hint or ""),
            )
        console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    kind: Annotated[Kind, typer.Argument(help="command or agent")],
    identifier: Annotated[str, typer.Argument(help="Identifier to show")],
) -> None:
    """Show the metadata and template of one definition."""
    registry = _load_registry(ctx)

    try:
        definition = registry.get(kind, identifier)
    except DefError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold cyan]{kind.value.capitalize()}: {definition.identifier}[/bold cyan]")
    console.print(f"Description: {escape(definition.description)}")
    if definition.category:
        console.print(f"Category: {escape(definition.category)}")
    if definition.model_hint:
        console.print(f"Model: {escape(definition.model_hint)}")
    if definition.color_hint:
        console.print(f"Color: {escape(definition.color_hint)}")
    if definition.argument_hint:
        console.print(f"Arguments: {escape(definition.argument_hint)}")
    if definition.tools:
        console.print(f"Tools: {escape(', '.join(definition.tools))}")
    console.print(f"Source: {escape(str(definition.source_path))}")
    console.print(f"Takes arguments: {'yes' if definition.takes_arguments else 'no'}")
    console.print()
    console.print(definition.body, markup=False, highlight=False)


@app.command()
def run(
    ctx: typer.Context,
    invocation: Annotated[
        str, typer.Argument(help='Invocation, e.g. "/api-new create a user endpoint"')
    ],
    kind: Annotated[
        Kind, typer.Option("--kind", "-k", help="Resolve against this kind")
    ] = Kind.COMMAND,
) -> None:
    """Resolve an invocation and print the rendered prompt."""
    _load_registry(ctx)
    context: SharedContext = ctx.obj["context"]

    result = context.resolver.execute(kind, invocation)
    if not result.ok:
        err_console.print(f"[red]{escape(str(result.error))}[/red]")
        raise typer.Exit(1)

    console.print(result.text, markup=False, highlight=False)


@app.command()
def validate(
    ctx: typer.Context,
) -> None:
    """Load the plugin and report whether it is consistent."""
    registry = _load_registry(ctx)

    label = registry.name or ctx.obj["config"].root.name
    console.print(
        f"[green]OK[/green] {label}: "
        f"{registry.count(Kind.COMMAND)} commands, "
        f"{registry.count(Kind.AGENT)} agents"
    )


if __name__ == "__main__":
    app()
