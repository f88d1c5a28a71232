"""
Info command - display decoded program parameters.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_program_info
from mnlgconv.codec import decode_file

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="Program dump file (.syx)"),
    steps: bool = typer.Option(False, "--steps", "-s", help="Show all 16 step events"),
) -> None:
    """
    Display the parameters of a monologue program dump.

    Shows oscillators, filter, EG, LFO, program settings, sequencer
    settings and motion slots. Programs with a damaged frame are reported
    with their errors.

    Examples:

        mnlgconv info program.syx

        mnlgconv info program.syx --steps
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    result = decode_file(file)

    # A bad marker still yields a decoded body worth showing
    marker_only = bool(result.issues) and not any(i.is_structural for i in result.issues)

    if not result.is_valid and not marker_only:
        console.print(f"[red]Error: Not a valid program dump: {file}[/red]")
        for error in result.errors:
            console.print(f"[red]  - {error}[/red]")
        raise typer.Exit(1)

    display_program_info(
        result.parameters,
        filepath=str(file),
        is_valid=result.is_valid,
        errors=result.errors,
        show_sequence=steps,
    )


if __name__ == "__main__":
    app()
