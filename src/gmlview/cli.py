"""CLI interface for gmlview using Typer framework."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gmlview import __description__, __version__
from gmlview.config import ExportFormat, GmlviewConfig, LayoutName, load_config
from gmlview.session import ExportRequested, SearchChanged, ViewerSession
from gmlview.source import identifier_needle, locate_identifier
from graphml_parser import GraphmlParser

app = typer.Typer(
    name="gmlview",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Configuration file path (default: search for .gmlview.json)")
]
LayoutOption = Annotated[
    LayoutName | None,
    typer.Option("--layout", "-l", help="Layout algorithm (default: from configuration)")
]
FormatOption = Annotated[
    ExportFormat | None,
    typer.Option("--format", "-f", help="Export format (default: from configuration)")
]


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"gmlview version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """gmlview - Interactive viewer for GraphML-style graph documents."""


def _load(config: Path | None) -> GmlviewConfig:
    try:
        gmlview_config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    logging.basicConfig(
        level=gmlview_config.logging.level.to_logging(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="[%X]"
    )
    logging.getLogger().setLevel(gmlview_config.logging.level.to_logging())
    return gmlview_config


def _read_document(file: Path) -> str:
    try:
        return file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot read {file}: {e}")
        raise typer.Exit(1)


def _open_session(file: Path, gmlview_config: GmlviewConfig, layout: LayoutName | None = None) -> ViewerSession:
    """Open file in a new session; exits when the document is malformed."""
    session = ViewerSession(gmlview_config, source_name=file.name)
    if layout is not None:
        session.scene = session.engine.create_scene(layout)
    if not session.open(_read_document(file)):
        console.print(f"[red]Error:[/red] {escape(session.status.message)}")
        raise typer.Exit(1)
    return session


def _write_export(session: ViewerSession, out: Path, format: ExportFormat | None) -> None:
    session.post(ExportRequested(format.value if format else None))
    data = session.run_pending()[-1]
    out.write_bytes(data)


def _default_output(file: Path, session: ViewerSession, format: ExportFormat | None) -> Path:
    exporter = session.controller.exporters.get(format or session.config.export.format)
    return file.with_suffix(exporter.get_file_extension())


@app.command()
def info(
    file: Annotated[Path, typer.Argument(help="GraphML document")],
    config: ConfigOption = None,
) -> None:
    """Show counts, attribute keys and warnings for a document."""
    _load(config)
    if not file.exists():
        console.print(f"[red]Error:[/red] File not found: {file}")
        raise typer.Exit(1)

    result = GraphmlParser().parse_file(file)
    if not result.success:
        for error in result.errors:
            console.print(f"[red]Error:[/red] {escape(error)}")
        raise typer.Exit(1)

    model = result.model
    default = "directed" if model.default_directed else "undirected"
    directed = sum(1 for edge in model.edges if edge.directed)

    table = Table(title=file.name, show_header=True, header_style="bold cyan")
    table.add_column("Property")
    table.add_column("Value", justify="right")
    table.add_row("Nodes", str(len(model.nodes)))
    table.add_row("Edges", str(len(model.edges)))
    table.add_row("Directed edges", str(directed))
    table.add_row("Default", default)
    table.add_row("Parse time", f"{result.parse_time_ms:.1f} ms")
    console.print(table)

    if len(model.keys):
        keys = Table(title="Attribute keys", show_header=True, header_style="bold cyan")
        keys.add_column("Key")
        keys.add_column("Name")
        for token, name in model.keys.entries.items():
            keys.add_row(token, name)
        console.print(keys)

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")


@app.command()
def export(
    file: Annotated[Path, typer.Argument(help="GraphML document")],
    out: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Output file path (default: next to the document)")
    ] = None,
    layout: LayoutOption = None,
    format: FormatOption = None,
    select: Annotated[
        str | None,
        typer.Option("--select", "-s", help="Highlight nodes whose id contains this text")
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Render a document and export the whole scene."""
    gmlview_config = _load(config)
    session = _open_session(file, gmlview_config, layout)

    if select:
        session.post(SearchChanged(select))
        matches = session.run_pending()[-1]
        console.print(f"[dim]Selected {len(matches)} node(s)[/dim]")

    try:
        out = out or _default_output(file, session, format)
        _write_export(session, out, format)
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot write {out}: {e}")
        raise typer.Exit(1)

    scene = session.scene
    if scene.applied_layout != scene.layout_name:
        console.print(f"[yellow]Warning:[/yellow] Layout '{scene.layout_name}' failed, used '{scene.applied_layout}'")
    console.print(f"[green]OK[/green] {session.status.summary}")
    console.print(f"Exported to: {out}")


@app.command()
def search(
    file: Annotated[Path, typer.Argument(help="GraphML document")],
    query: Annotated[str, typer.Argument(help="Substring of node ids to find")],
    config: ConfigOption = None,
) -> None:
    """List nodes whose id contains QUERY."""
    gmlview_config = _load(config)
    session = _open_session(file, gmlview_config)

    session.post(SearchChanged(query))
    matches = session.run_pending()[-1]
    if not matches:
        console.print(f"[yellow]No nodes match '{query.strip()}'[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Id")
    table.add_column("Label")
    for node_id in matches:
        table.add_row(node_id, session.scene.find_node(node_id).label)
    console.print(table)


@app.command()
def reveal(
    file: Annotated[Path, typer.Argument(help="GraphML document")],
    node_id: Annotated[str, typer.Argument(help="Node id to locate")],
) -> None:
    """Print the line and column where NODE_ID is declared."""
    position = locate_identifier(_read_document(file), node_id)
    if position is None:
        console.print(f"[red]Error:[/red] Could not find {escape(identifier_needle(node_id))} in source")
        raise typer.Exit(1)
    console.print(f"{file}:{position.line + 1}:{position.column + 1}")


@app.command()
def watch(
    file: Annotated[Path, typer.Argument(help="GraphML document")],
    out: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Export re-written after every change")
    ] = None,
    layout: LayoutOption = None,
    format: FormatOption = None,
    config: ConfigOption = None,
) -> None:
    """Re-render a document every time it changes on disk."""
    from gmlview.watcher import DocumentWatcher

    gmlview_config = _load(config)
    session = _open_session(file, gmlview_config, layout)
    out = out or _default_output(file, session, format)
    _write_export(session, out, format)

    def on_update(applied: bool) -> None:
        if not applied:
            console.print(f"[red]{escape(session.status.message)}[/red] [dim](keeping previous render)[/dim]")
            return
        _write_export(session, out, format)
        console.print(f"[green]Reloaded[/green] {session.status.summary}")

    console.print(f"[bold green]gmlview watch[/bold green] {session.status.summary}")
    console.print(f"Watching: [cyan]{file.resolve()}[/cyan] -> {out}")
    DocumentWatcher(file, session, on_update).run_forever()


@app.command()
def layouts() -> None:
    """List available layout algorithms."""
    for name in LayoutName:
        console.print(name.value)
