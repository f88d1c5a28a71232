"""
Init command - write an initialized program dump.
"""

from pathlib import Path

import typer
from rich.console import Console

from mnlgconv.codec import encode_file
from mnlgconv.models.program import ProgramParameters
from mnlgconv.utils.validation import MnlgError

console = Console()
app = typer.Typer()


@app.command()
def init(
    output: Path = typer.Argument(..., help="Output file (.syx)"),
    name: str = typer.Option("INIT PROGRAM", "--name", "-n", help="Program name (max 12 chars)"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing file"),
) -> None:
    """
    Write an initialized (all-zero) program with the given name.

    Examples:

        mnlgconv init blank.syx

        mnlgconv init lead.syx --name "LEAD 1"
    """
    if output.exists() and not overwrite:
        console.print(f"[red]Error: File exists: {output} (use --overwrite)[/red]")
        raise typer.Exit(1)

    if len(name) > 12:
        console.print(f"[yellow]Name truncated to 12 characters: {name[:12]!r}[/yellow]")

    try:
        encode_file(ProgramParameters(patch_name=name), output)
    except MnlgError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Written:[/green] {output}")


if __name__ == "__main__":
    app()
