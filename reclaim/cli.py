"""CLI entry point for Reclaim."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from reclaim_core.capacity import CapacityError, find_deletion_candidate, total_size_at_most
from reclaim_core.config import ReclaimConfig, configure_logging, load_config
from reclaim_core.config.loader import DEFAULT_CONFIG_TEMPLATE
from reclaim_core.transcript import ParseError, parse_transcript
from reclaim_core.tree import Directory, directory_sizes, sized_nodes

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="reclaim",
    help="Rebuild a directory tree from a shell transcript and find what to delete.",
)

config_app = typer.Typer(help="Manage Reclaim configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: ReclaimConfig | None = None

TranscriptArg = Annotated[
    str | None,
    typer.Argument(help="Transcript file; reads stdin when omitted or '-'"),
]


def _get_config() -> ReclaimConfig:
    if _config is None:
        return load_config()
    return _config


def _fail(message: str) -> typer.Exit:
    rprint(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(1)


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to reclaim.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        raise _fail(str(e))
    configure_logging(_config.log_level, _config.log_format)


def _read_transcript(path: str | None) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    source = Path(path)
    if not source.is_file():
        raise _fail(f"transcript not found: {path}")
    return source.read_text()


def _build_tree(path: str | None) -> Directory:
    """Read and parse a transcript, turning parse failures into exit code 1."""
    text = _read_transcript(path)
    cfg = _get_config()
    try:
        return parse_transcript(text, max_depth=cfg.parser.max_depth)
    except ParseError as e:
        logger.debug("Transcript rejected", exc_info=True)
        raise _fail(str(e))


@app.command()
def free(
    transcript: TranscriptArg = None,
    capacity: Annotated[
        int | None, typer.Option("--capacity", help="Disk capacity in bytes")
    ] = None,
    required: Annotated[
        int | None, typer.Option("--required", help="Free space needed in bytes")
    ] = None,
    ci: Annotated[bool, typer.Option("--ci", help="Print only the size")] = False,
) -> None:
    """Find the smallest directory whose deletion frees enough space."""
    cfg = _get_config()
    root = _build_tree(transcript)
    capacity = cfg.disk.capacity if capacity is None else capacity
    required = cfg.disk.required_free if required is None else required

    try:
        result = find_deletion_candidate(root, capacity, required)
    except (CapacityError, ValueError) as e:
        logger.debug("Search failed", exc_info=True)
        raise _fail(str(e))

    if ci:
        typer.echo(result.size)
        return

    if result.noop:
        summary = "[green]Nothing to delete[/green], enough space is already free."
    else:
        summary = (
            f"[bold]Delete[/bold] [cyan]{escape(result.path)}[/cyan] "
            f"to free [bold]{result.size}[/bold] bytes"
        )
    panel_text = (
        f"{summary}\n\n"
        f"[dim]Capacity:[/dim] {capacity}\n"
        f"[dim]Used:[/dim]     {result.used}\n"
        f"[dim]Unused:[/dim]   {result.unused}\n"
        f"[dim]Needed:[/dim]   {max(result.needed, 0)}"
    )
    rprint(Panel(panel_text, title="Reclaim", border_style="blue"))


@app.command()
def tree(
    transcript: TranscriptArg = None,
    files: Annotated[
        bool, typer.Option("--files/--no-files", help="Show files under each directory")
    ] = True,
) -> None:
    """Render the rebuilt directory tree with sizes."""
    root = _build_tree(transcript)
    # Keyed by node: a "/" inside a name makes two paths look alike.
    sizes = {id(node): size for _, node, size in sized_nodes(root)}

    view = Tree(f"[bold]{escape(root.name)}[/bold] ({sizes[id(root)]})")
    branches: dict[int, Tree] = {id(root): view}
    for _, node in root.walk():
        branch = branches[id(node)]
        for name, child in node.directories.items():
            branches[id(child)] = branch.add(
                f"[blue]{escape(name)}/[/blue] ({sizes[id(child)]})"
            )
        if files:
            for name, size in node.files.items():
                branch.add(f"[green]{escape(name)}[/green] [dim]{size}[/dim]")
    rprint(view)


@app.command()
def sizes(
    transcript: TranscriptArg = None,
    limit: Annotated[
        int | None, typer.Option("--limit", help="Size cap for the small-directory total")
    ] = None,
) -> None:
    """List every directory with its total size."""
    cfg = _get_config()
    root = _build_tree(transcript)
    limit = cfg.report.small_dir_limit if limit is None else limit

    all_sizes = directory_sizes(root)
    table = Table(title=f"Directory Sizes ({len(all_sizes)})")
    table.add_column("Directory", style="cyan")
    table.add_column("Size", justify="right")
    for path, size in all_sizes:
        style = "green" if size <= limit else ""
        table.add_row(escape(path), f"[{style}]{size}[/{style}]" if style else str(size))
    rprint(table)
    rprint(
        f"\n[dim]Total of directories up to {limit}:[/dim] {total_size_at_most(root, limit)}"
    )


@app.command()
def export(
    transcript: TranscriptArg = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write JSON here instead of stdout")
    ] = None,
) -> None:
    """Export the rebuilt tree as JSON."""
    root = _build_tree(transcript)
    if output is None:
        typer.echo(root.to_json())
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    root.save(output)
    rprint(f"[green]Wrote[/green] {escape(str(output))}")


# ---------------------------------------------------------------------------
# Config commands
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default reclaim.yaml in current directory."""
    target = Path("reclaim.yaml")
    if target.exists() and not force:
        rprint("[yellow]reclaim.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
