import typer

from mjforge import __version__
from mjforge.logging_config import setup_logging
from mjforge.cli import markup, mutations
from mjforge.cli.config import CLIConfig
from mjforge.cli.output import get_console

app = typer.Typer(help="Editable component tooling for MJML templates.")
console = get_console()


@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Enable human mode: pretty output with tables and colors (also via MJFORGE_HUMAN_MODE env var)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug output to stderr"
    ),
):
    """
    mjforge: tag, declare, project and edit editable MJML components.
    """
    if human:
        CLIConfig.set_machine_mode(False)
    if verbose:
        setup_logging(level="DEBUG", suppress_console=False)


app.add_typer(markup.app, name="markup", help="Markup commands (tag, declare, mappings, project, components)")
app.add_typer(mutations.app, name="mutations", help="Component mutation commands (update, duplicate, delete, replace-image)")


@app.command()
def version():
    """Print the mjforge version."""
    console.print(__version__)


if __name__ == "__main__":
    app()
