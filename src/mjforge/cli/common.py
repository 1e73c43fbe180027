"""
Common CLI helpers shared by the command modules.
"""

from pathlib import Path
from typing import Optional

import typer

from .output import print_error, structured_error


def read_text_or_exit(path: Path, json_output: bool = False) -> str:
    """
    Read a UTF-8 file or exit with a structured error.

    Raises:
        typer.Exit: If the file cannot be read
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        print_error(
            structured_error(
                code="FILE_READ_ERROR",
                message=f"Failed to read {path}: {e}",
                input_value=str(path),
            ),
            json_output,
        )
        raise typer.Exit(code=1)


def write_text_or_exit(path: Path, content: str, json_output: bool = False) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        print_error(
            structured_error(
                code="FILE_WRITE_ERROR",
                message=f"Failed to write {path}: {e}",
                input_value=str(path),
            ),
            json_output,
        )
        raise typer.Exit(code=1)


def emit_text(content: str, output: Optional[Path], json_output: bool = False) -> None:
    """Write to --output when given, otherwise to stdout."""
    if output is not None:
        write_text_or_exit(output, content, json_output)
    else:
        typer.echo(content, nl=False)
