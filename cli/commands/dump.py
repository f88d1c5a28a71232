"""
Dump command - annotated hex dump of a program body.
"""

from pathlib import Path
from typing import List, Tuple

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from cli.display.hex_view import display_hex_dump
from mnlgconv.formats.layout import STEP_EVENT_OFFSET, STEP_EVENT_STRIDE
from mnlgconv.formats.sysex_parser import SysExParser
from mnlgconv.formats.syx_file import read_program_message

console = Console()
app = typer.Typer()


# Body regions with start, end, name, description, and color
REGIONS: List[Tuple[int, int, str, str, str]] = [
    (0, 4, "MARKER", "'PROG' marker", "bright_blue"),
    (4, 16, "NAME", "Program name", "cyan"),
    (16, 30, "PANEL_HI", "10-bit parameter high bytes", "green"),
    (30, 37, "PANEL_LO", "Low bits and switches", "green"),
    (37, 41, "RESERVED_1", "Unknown/reserved", "dim"),
    (41, 52, "PROGRAM", "Program settings", "yellow"),
    (52, 59, "SEQ", "Sequencer settings and slide time", "magenta"),
    (59, 64, "RESERVED_2", "Unknown/reserved", "dim"),
    (64, 70, "STEP_FLAGS", "Step active/motion/slide", "magenta"),
    (70, 72, "RESERVED_3", "Unknown/reserved", "dim"),
    (72, 80, "MOTION_PRM", "Motion slot parameters", "blue"),
    (80, 88, "MOTION_STP", "Motion slot step enables", "blue"),
    (88, 96, "RESERVED_4", "Unknown/reserved", "dim"),
    (
        STEP_EVENT_OFFSET,
        STEP_EVENT_OFFSET + 16 * STEP_EVENT_STRIDE,
        "STEPS",
        f"Step events (16x{STEP_EVENT_STRIDE} bytes)",
        "red",
    ),
]


def get_region_for_offset(offset: int) -> Tuple[str, str, str]:
    """Get region name, description, and color for an offset."""
    for start, end, name, desc, color in REGIONS:
        if start <= offset < end:
            return name, desc, color
    return "UNKNOWN", "Unknown region", "white"


def format_hex_line(data: bytes, offset: int, bytes_per_line: int = 16) -> Text:
    """
    Format a single line of hex dump with colors and annotations.

    Returns Rich Text object with colored output.
    """
    region_name, region_desc, region_color = get_region_for_offset(offset)

    text = Text()
    text.append(f"0x{offset:03X} ", style="dim")
    text.append(f"[{region_name:10s}] ", style=region_color)

    for byte in data:
        text.append(f"{byte:02X}", style="dim" if byte == 0x00 else "bold white")
        text.append(" ")

    if len(data) < bytes_per_line:
        text.append("   " * (bytes_per_line - len(data)))

    text.append(" ", style="dim")
    for byte in data:
        if 32 <= byte < 127:
            text.append(chr(byte), style="green")
        else:
            text.append(".", style="dim")

    return text


def create_legend() -> Table:
    """Create a legend for the hex dump colors."""
    table = Table(title="Legend", box=box.SIMPLE, show_header=False, expand=False)
    table.add_column("Region", width=12)
    table.add_column("Description", width=40)

    for start, end, name, desc, color in REGIONS:
        table.add_row(
            Text(name, style=color),
            f"{desc} ({end - start} bytes, 0x{start:03X}-0x{end - 1:03X})",
        )

    return table


@app.command()
def dump(
    file: Path = typer.Argument(..., help="Program dump file (.syx)"),
    raw: bool = typer.Option(False, "--raw", help="Dump the wire message instead of the body"),
    width: int = typer.Option(8, "--width", "-w", help="Bytes per line"),
    no_legend: bool = typer.Option(False, "--no-legend", help="Hide the legend"),
    region: str = typer.Option("", "--region", "-r", help="Show only one region (e.g. STEPS)"),
    non_zero: bool = typer.Option(
        False, "--non-zero", "-n", help="Show only lines with non-zero data"
    ),
) -> None:
    """
    Annotated hex dump of a decoded program body.

    Each line is tagged with the body region it belongs to. With --raw the
    undecoded 520-byte message is shown instead; payload bytes with the
    high bit set are highlighted.

    Examples:

        mnlgconv dump program.syx

        mnlgconv dump program.syx --region STEPS

        mnlgconv dump program.syx --raw
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    message = read_program_message(file)
    if message is None:
        console.print(f"[red]Error: No SysEx message found in {file}[/red]")
        raise typer.Exit(1)

    if raw:
        display_hex_dump(message, title=f"{file.name} ({len(message)} bytes)")
        return

    parsed = SysExParser().parse(message)
    if parsed.frame is None:
        console.print(f"[red]Error: Cannot decode {file}[/red]")
        for error in parsed.errors:
            console.print(f"[red]  - {error}[/red]")
        console.print("[dim]Use --raw to inspect the message bytes[/dim]")
        raise typer.Exit(1)

    for error in parsed.errors:
        console.print(f"[yellow]Warning: {error}[/yellow]")

    data = parsed.frame.body
    start, end = 0, len(data)

    if region:
        region_upper = region.upper()
        for r_start, r_end, r_name, r_desc, r_color in REGIONS:
            if r_name == region_upper:
                start, end = r_start, r_end
                console.print(f"[{r_color}]Showing region: {r_name} - {r_desc}[/{r_color}]")
                break
        else:
            console.print(f"[red]Unknown region: {region}[/red]")
            console.print("Available regions: " + ", ".join(r[2] for r in REGIONS))
            raise typer.Exit(1)

    if not no_legend and not region:
        console.print(create_legend())
        console.print()

    console.print(
        Panel(
            f"[bold]File:[/bold] {file}\n"
            f"[bold]Body:[/bold] {len(data)} bytes\n"
            f"[bold]Showing:[/bold] 0x{start:03X} - 0x{end - 1:03X} ({end - start} bytes)",
            title="[bold]Program Body[/bold]",
            border_style="blue",
        )
    )

    lines_shown = 0
    for offset in range(start, end, width):
        chunk = data[offset : min(offset + width, end)]
        if non_zero and not any(chunk):
            continue
        console.print(format_hex_line(chunk, offset, width))
        lines_shown += 1

    console.print()
    console.print(f"[dim]Total: {lines_shown} lines displayed[/dim]")


if __name__ == "__main__":
    app()
