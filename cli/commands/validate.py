"""
Validate command - check program dump frame integrity.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_frame_issues
from mnlgconv.formats.reader import ProgramReader
from mnlgconv.formats.sysex_parser import SysExParser
from mnlgconv.formats.syx_file import read_program_message
from mnlgconv.formats.writer import ProgramWriter
from mnlgconv.utils.validation import MnlgError

console = Console()
app = typer.Typer()


@app.command()
def validate(
    file: Path = typer.Argument(..., help="Program dump file (.syx)"),
    strict: bool = typer.Option(
        False, "--strict", "-s", help="Also check that the program re-encodes unchanged"
    ),
) -> None:
    """
    Validate a monologue program dump.

    Checks for:

    - Correct message length (520 bytes)
    - Header F0 42 30 00 01 44 40 and footer F7
    - 7-bit payload bytes
    - 'PROG' marker in the decoded body

    With --strict the decoded program is encoded again and compared with
    the original message byte for byte.

    Examples:

        mnlgconv validate program.syx

        mnlgconv validate program.syx --strict
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    message = read_program_message(file)
    if message is None:
        console.print(f"[red]Error: No SysEx message found in {file}[/red]")
        raise typer.Exit(1)

    parsed = SysExParser().parse(message)
    display_frame_issues(str(file), parsed.issues)

    if not parsed.valid:
        raise typer.Exit(1)

    if strict:
        params = ProgramReader().parse_body(parsed.frame.body)
        try:
            encoded = ProgramWriter().to_bytes(params)
        except MnlgError as e:
            console.print(f"[red]Re-encode failed: {e}[/red]")
            raise typer.Exit(1)

        if encoded != bytes(message):
            diffs = [i for i, (a, b) in enumerate(zip(encoded, message)) if a != b]
            console.print(
                f"[yellow]Re-encoded message differs in {len(diffs)} byte(s), "
                f"first at offset 0x{diffs[0]:03X}[/yellow]"
            )
            raise typer.Exit(1)

        console.print("[green]Re-encoded message is identical[/green]")


if __name__ == "__main__":
    app()
