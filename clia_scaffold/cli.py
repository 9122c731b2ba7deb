"""Command-line interface for the **clia_scaffold** package.

The CLI exposes a single operation:

* ``init`` - add clia resources (config directory, manifest metadata,
  entrypoint script and starter commands) to an existing node project.

Implementation details
----------------------
* Uses **Typer** for argument parsing and for the interactive prompts.
* All scaffolding is delegated to :func:`clia_scaffold.pipeline.run_init`.
* Errors surface as :class:`clia_scaffold.exceptions.CliaError`; the
  command turns them into a non-zero exit status.
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from clia_scaffold.exceptions import CliaError
from clia_scaffold.gate import TyperPrompter
from clia_scaffold.pipeline import run_init
from clia_scaffold.settings import ScaffoldSettings, load_settings

log = logging.getLogger(__name__)

app = typer.Typer(name = "clia-scaffold", help = "Scaffold clia command-line resources into a node project")


@app.callback()
def configure(
        ctx: typer.Context, config: Optional[Path] = typer.Option(
                None, "--config", help = "JSON settings file overriding the defaults.", ),
        verbose: bool = typer.Option(False, "--verbose", "-v", help = "Enable debug logging."), ) -> None:
    """Set up logging and load settings shared by every command."""
    logging.basicConfig(
            level = logging.DEBUG if verbose else logging.INFO, format = "%(levelname)s %(message)s", )
    try:
        ctx.obj = load_settings(config)
    except CliaError as exc:
        log.error(str(exc))
        typer.echo(f"Error: {exc}", err = True)
        raise typer.Exit(code = 1)


@app.command(help = "Initializes a node project with clia resources.")
def init(
        ctx: typer.Context, directory: Optional[Path] = typer.Option(
                None, "--dir", help = "Target directory, defaults to the current one.", ),
        cli_name: Optional[str] = typer.Option(
                None, "--cli-name", help = "Entrypoint file name; asked interactively when omitted.", ), ) -> None:
    """Run the scaffolding pipeline against ``--dir``.

    Existing files are never replaced without a yes to the overwrite
    question.  Answering no skips that file and the run carries on.
    """
    settings = ctx.obj if isinstance(ctx.obj, ScaffoldSettings) else ScaffoldSettings()
    try:
        report = run_init(directory, cli_name, prompter = TyperPrompter(), settings = settings)
    except CliaError as exc:
        log.error(str(exc))
        typer.echo(f"Error: {exc}", err = True)
        raise typer.Exit(code = 1)

    if report.skipped:
        typer.echo(f"Done, skipped: {', '.join(report.skipped)}")
    else:
        typer.echo("Done")


def main() -> None:  # pragma: no cover - thin wrapper
    """Entry point used by the ``clia-scaffold`` console script."""
    app()


if __name__ == "__main__":
    main()
