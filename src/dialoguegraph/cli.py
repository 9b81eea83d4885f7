"""CLI for inspecting a dialogue node collection.

Reads a JSON list of nodes and runs the graph queries against it:
listing, search, reverse links and integrity checks.
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .constants import DEFAULT_FILE_NAME, FILE_ENV_VAR, PREVIEW_TEXT_LIMIT
from .exceptions import DialogueGraphError
from .search import filter_updated_since
from .snapshot import GraphSnapshot, load_snapshot
from .timeutil import format_age, parse_since
from .utils import plural, sort_by

console = Console()


def _preview(text: str | None) -> str:
    text = (text or "").replace("\n", " ")
    if len(text) > PREVIEW_TEXT_LIMIT:
        return text[:PREVIEW_TEXT_LIMIT - 3] + "..."
    return text


def _load(ctx: click.Context) -> GraphSnapshot:
    try:
        return load_snapshot(ctx.obj["file"])
    except DialogueGraphError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(2)


def _find(snapshot: GraphSnapshot, ref: str):
    try:
        return snapshot.find(ref)
    except DialogueGraphError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.option(
    "--file", "file_path",
    envvar=FILE_ENV_VAR,
    type=click.Path(path_type=Path),
    default=DEFAULT_FILE_NAME,
    show_default=True,
    help="JSON file holding the node collection",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, file_path, verbose):
    """Dialoguegraph - query a dialogue tree's nodes and links."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    ctx.obj["file"] = file_path


@cli.command("list")
@click.option("--since", help="Only nodes updated since, e.g. '2 days ago' or 2025-01-15")
@click.pass_context
def list_nodes(ctx, since):
    """List nodes sorted by name."""
    snapshot = _load(ctx)
    nodes = snapshot.nodes
    if since:
        try:
            nodes = filter_updated_since(nodes, parse_since(since))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--since") from e

    if not nodes:
        console.print("No nodes found.")
        return

    table = Table(title=plural(len(nodes), "node"))
    table.add_column("Name", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Lines", justify="right")
    table.add_column("Options", justify="right")
    table.add_column("Updated")
    for node in sort_by(lambda n: n.name.lower(), nodes):
        table.add_row(
            node.name,
            node.id,
            str(len(node.lines)),
            str(len(node.options)),
            format_age(node.updated_at),
        )
    console.print(table)


@cli.command()
@click.argument("query")
@click.pass_context
def search(ctx, query):
    """Search node names, lines and options."""
    snapshot = _load(ctx)
    hits = snapshot.search(query)
    if not hits:
        console.print(f"No nodes match '{query}'.")
        return

    table = Table(title=f"{plural(len(hits), 'match', 'matches')} for '{query}'")
    table.add_column("Name", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Matched on")
    for hit in hits:
        table.add_row(hit.node.name, hit.node.id, ", ".join(hit.reasons))
    console.print(table)


@cli.command()
@click.argument("node_ref")
@click.pass_context
def links(ctx, node_ref):
    """Show the options that link to a node (by id or name)."""
    snapshot = _load(ctx)
    target = _find(snapshot, node_ref)
    pairs = snapshot.link_pairs(target)
    if not pairs:
        console.print(f"Nothing links to [cyan]{target.name}[/cyan].")
        return

    table = Table(title=f"{plural(len(pairs), 'link')} to {target.name}")
    table.add_column("From node", style="cyan")
    table.add_column("Option", style="dim")
    table.add_column("Prompt")
    for owner, option in pairs:
        table.add_row(owner.name, option.id, _preview(option.prompt))
    console.print(table)


@cli.command()
@click.argument("node_ref")
@click.pass_context
def show(ctx, node_ref):
    """Show a node's lines and where each option leads."""
    snapshot = _load(ctx)
    node = _find(snapshot, node_ref)

    console.print(f"[bold cyan]{node.name}[/bold cyan] [dim]{node.id}[/dim]")
    console.print(f"Updated: {format_age(node.updated_at)}")
    console.print()

    for line in node.lines:
        speaker = line.character or "(narrator)"
        guard = f" [dim]if {line.condition}[/dim]" if line.condition else ""
        console.print(f"  [bold]{speaker}[/bold]: {_preview(line.dialogue)}{guard}")
        if line.mutation:
            console.print(f"    [dim]then {line.mutation}[/dim]")

    if node.options:
        console.print()
    for option in node.options:
        target = snapshot.resolve(option)
        if target.status == "end":
            dest = "[yellow]end conversation[/yellow]"
        elif target.status == "missing":
            dest = f"[red]{target.name} (doesn't exist)[/red]"
        else:
            dest = f"[green]{target.name}[/green]"
        prompt = _preview(option.prompt) or "(continue)"
        console.print(f"  > {prompt} -> {dest}")

    referrers = snapshot.referrers(node)
    console.print()
    console.print(f"Referenced by {plural(len(referrers), 'node')}")


@cli.command()
@click.pass_context
def check(ctx):
    """Report duplicate option ids, dangling links and stale link names."""
    snapshot = _load(ctx)
    stats = snapshot.stats()
    console.print(
        f"Graph: [bold]{plural(stats['nodes'], 'node')}[/bold], "
        f"{plural(stats['lines'], 'line')}, {plural(stats['options'], 'option')}"
    )

    problems = 0

    for option_id in snapshot.duplicate_option_ids():
        console.print(f"  [red]duplicate[/red] option id {option_id}")
        problems += 1

    for owner, option in snapshot.dangling():
        console.print(
            f"  [red]dangling[/red] {owner.name} -> {option.next_node_id} "
            f"({option.next_node_name or '?'}) doesn't exist"
        )
        problems += 1

    for owner, option, live_name in snapshot.stale():
        console.print(
            f"  [yellow]stale[/yellow] {owner.name}: option {option.id} says "
            f"'{option.next_node_name}', target is now '{live_name}'"
        )
        problems += 1

    if problems:
        console.print(f"[red]{plural(problems, 'problem')} found[/red]")
        sys.exit(1)
    console.print("[green]No problems found[/green]")


def main():
    cli()


if __name__ == "__main__":
    main()
