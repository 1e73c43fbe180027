"""
CLI Mutation Commands

update, duplicate, delete, replace-image
"""

from pathlib import Path
from typing import Optional

import typer

from mjforge.mutation import MutationFacade
from mjforge.schemas import MutationResult
from .common import read_text_or_exit, write_text_or_exit
from .config import CLIConfig
from .output import get_console, print_error, print_json, structured_error

app = typer.Typer()
console = get_console()

ERROR_CODES = {
    "parse": "PARSE_ERROR",
    "not_found": "COMPONENT_NOT_FOUND",
    "validation": "VALIDATION_ERROR",
    "invalid_request": "INVALID_REQUEST",
}


def _finish(result: MutationResult, file: Path, dry_run: bool, json_output: bool) -> None:
    """Write the mutated source back and report, or exit 1 with a structured error."""
    if not result.success:
        error = structured_error(
            code=ERROR_CODES.get(result.error_kind, "MUTATION_FAILED"),
            message=result.error or "Mutation failed",
            input_value=result.logical_id,
        )
        print_error(error, json_output)
        raise typer.Exit(code=1)

    if not dry_run:
        write_text_or_exit(file, result.source, json_output)

    if CLIConfig.is_machine_mode() or json_output:
        payload = {
            "status": "ok",
            "operation": result.operation,
            "logical_id": result.logical_id,
            "file": str(file),
            "written": not dry_run,
        }
        if result.new_logical_id:
            payload["new_logical_id"] = result.new_logical_id
        print_json(payload)
        return

    console.print(f"[green]✓[/green] {result.operation} '{result.logical_id}' in {file}")
    if result.new_logical_id:
        console.print(f"  New id: [cyan]{result.new_logical_id}[/cyan]")
    if dry_run:
        console.print("[dim]  Dry run: file not written[/dim]")


@app.command("update")
def update_cmd(
    file: Path = typer.Argument(..., help="Source markup file", exists=True, dir_okay=False),
    component_id: str = typer.Option(..., "--id", help="Logical id of the component"),
    content: str = typer.Option(..., "--content", "-c", help="New text content"),
    hint: Optional[str] = typer.Option(None, "--hint", help="Current content, to disambiguate duplicate ids"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Validate but don't write"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replace the text content of an editable component.
    """
    source = read_text_or_exit(file, json_output)
    result = MutationFacade().update_content(source, component_id, content, content_hint=hint)
    _finish(result, file, dry_run, json_output)


@app.command("duplicate")
def duplicate_cmd(
    file: Path = typer.Argument(..., help="Source markup file", exists=True, dir_okay=False),
    component_id: str = typer.Option(..., "--id", help="Logical id of the component"),
    hint: Optional[str] = typer.Option(None, "--hint", help="Current content, to disambiguate duplicate ids"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Validate but don't write"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Duplicate an editable component next to the original.
    """
    source = read_text_or_exit(file, json_output)
    result = MutationFacade().duplicate_component(source, component_id, content_hint=hint)
    _finish(result, file, dry_run, json_output)


@app.command("delete")
def delete_cmd(
    file: Path = typer.Argument(..., help="Source markup file", exists=True, dir_okay=False),
    component_id: str = typer.Option(..., "--id", help="Logical id of the component"),
    hint: Optional[str] = typer.Option(None, "--hint", help="Current content, to disambiguate duplicate ids"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Validate but don't write"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Delete an editable component and its subtree.
    """
    source = read_text_or_exit(file, json_output)
    result = MutationFacade().delete_component(source, component_id, content_hint=hint)
    _finish(result, file, dry_run, json_output)


@app.command("replace-image")
def replace_image_cmd(
    file: Path = typer.Argument(..., help="Source markup file", exists=True, dir_okay=False),
    index: int = typer.Option(..., "--index", "-n", help="Zero-based image index in document order"),
    url: str = typer.Option(..., "--url", help="New image URL"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Validate but don't write"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Point the N-th image at a new URL.
    """
    source = read_text_or_exit(file, json_output)
    result = MutationFacade().replace_image_source(source, index, url)
    _finish(result, file, dry_run, json_output)
