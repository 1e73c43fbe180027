"""
CLI Markup Commands

tag, declare, mappings, project, components
"""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from mjforge.markup import (
    auto_tag,
    declare_markers,
    extract_mappings,
    project_markers,
    parse_editable_components,
)
from .common import emit_text, read_text_or_exit
from .config import CLIConfig
from .output import get_console, print_json

app = typer.Typer()
console = get_console()


@app.command("tag")
def tag_cmd(
    file: Path = typer.Argument(..., help="Source markup file", exists=True, dir_okay=False),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write result here instead of stdout"),
):
    """
    Mark untagged text, button and image elements as editable.

    Run once per document; re-running on an edited document renumbers new elements.
    """
    source = read_text_or_exit(file)
    emit_text(auto_tag(source), output)


@app.command("declare")
def declare_cmd(
    file: Path = typer.Argument(..., help="Source markup file", exists=True, dir_okay=False),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write result here instead of stdout"),
):
    """
    Declare every editable marker in the document head.
    """
    source = read_text_or_exit(file)
    emit_text(declare_markers(source), output)


@app.command("mappings")
def mappings_cmd(
    file: Path = typer.Argument(..., help="Source markup file", exists=True, dir_okay=False),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List editable markers found in the source, in document order.
    """
    source = read_text_or_exit(file, json_output)
    mappings = extract_mappings(source)

    if CLIConfig.is_machine_mode() or json_output:
        print_json([m.model_dump() for m in mappings])
        return

    table = Table(title=f"Editable markers in {file.name}")
    table.add_column("#", justify="right")
    table.add_column("Marker", style="cyan")
    table.add_column("Element")
    table.add_column("Content")
    for index, entry in enumerate(mappings):
        table.add_row(str(index), entry.marker_value, entry.element_kind, entry.content_snapshot[:40])
    console.print(table)


@app.command("project")
def project_cmd(
    compiled: Path = typer.Argument(..., help="Compiled HTML file", exists=True, dir_okay=False),
    source: Path = typer.Option(..., "--source", "-s", help="Source markup the HTML was compiled from", exists=True),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write result here instead of stdout"),
):
    """
    Annotate compiled HTML with editable identifiers from its source.
    """
    mappings = extract_mappings(read_text_or_exit(source))
    html = read_text_or_exit(compiled)
    emit_text(project_markers(html, mappings), output)


@app.command("components")
def components_cmd(
    compiled: Path = typer.Argument(..., help="Annotated HTML file", exists=True, dir_okay=False),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List editable components found in annotated HTML.
    """
    components = parse_editable_components(read_text_or_exit(compiled, json_output))

    if CLIConfig.is_machine_mode() or json_output:
        print_json([c.model_dump() for c in components])
        return

    table = Table(title="Editable components")
    table.add_column("Index", justify="right")
    table.add_column("Id", style="cyan")
    table.add_column("Kind")
    table.add_column("Tag")
    table.add_column("Content")
    for component in components:
        table.add_row(
            str(component.positional_index),
            component.logical_id,
            component.element_kind,
            component.tag_name,
            component.content[:40],
        )
    console.print(table)
