"""
Convert command - conversion between program dumps and JSON.
"""

import json
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from mnlgconv.codec import decode_file, encode
from mnlgconv.formats.syx_file import write_messages
from mnlgconv.models.program import ProgramParameters
from mnlgconv.utils.validation import MnlgError, ValidationError

console = Console()
app = typer.Typer()


def _syx_to_json(source: Path, output: Path, name: Optional[str], force: bool) -> None:
    result = decode_file(source)

    if not result.is_valid:
        for error in result.errors:
            console.print(f"[red]  - {error}[/red]")
        marker_only = bool(result.issues) and not any(i.is_structural for i in result.issues)
        if not (force and marker_only):
            console.print(f"[red]Error: Not a valid program dump: {source}[/red]")
            if marker_only:
                console.print("[dim]Use --force to convert anyway[/dim]")
            raise typer.Exit(1)

    params = result.parameters
    if name is not None:
        params = replace(params, patch_name=name)

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(params.to_dict(), f, indent=2)
        f.write("\n")


def _json_to_syx(source: Path, output: Path, name: Optional[str], plaintext: bool) -> None:
    with open(source, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValidationError(f"Expected a JSON object in {source}")
    if name is not None:
        data["patch_name"] = name

    params = ProgramParameters.from_dict(data)
    write_messages(output, [encode(params)], plaintext=plaintext)


@app.command()
def convert(
    source: Path = typer.Argument(..., help="Source file (.syx or .json)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Override the program name"),
    plaintext: bool = typer.Option(False, "--hex", help="Write .syx as hex text"),
    force: bool = typer.Option(False, "--force", "-f", help="Convert a dump with a bad marker"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show tracebacks on failure"),
) -> None:
    """
    Convert between monologue program dumps and JSON.

    Automatically detects input format and converts to the other:

    - .syx -> .json (decode)
    - .json -> .syx (encode)

    Examples:

        mnlgconv convert program.syx -o program.json

        mnlgconv convert program.json -o program.syx --name "BASS 2"
    """
    if not source.exists():
        console.print(f"[red]Error: Source file not found: {source}[/red]")
        raise typer.Exit(1)

    suffix = source.suffix.lower()

    try:
        if suffix == ".syx":
            output_path = output or source.with_suffix(".json")
            _syx_to_json(source, output_path, name, force)
        elif suffix == ".json":
            output_path = output or source.with_suffix(".syx")
            _json_to_syx(source, output_path, name, plaintext)
        else:
            console.print(f"[red]Error: Unknown file type: {suffix}[/red]")
            console.print("Supported formats: .syx (program dump), .json (parameters)")
            raise typer.Exit(1)

    except (MnlgError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)

    console.print(f"[green]Converted:[/green] {source} -> {output_path}")
    console.print(f"[dim]Output size: {output_path.stat().st_size} bytes[/dim]")


if __name__ == "__main__":
    app()
