"""
Hex dump display utilities.
"""

from rich.console import Console
from rich.panel import Panel

console = Console()


def display_hex_dump(
    data: bytes,
    title: str = "Hex Dump",
    start_offset: int = 0,
    bytes_per_line: int = 16,
    max_lines: int = 40,
) -> None:
    """Display formatted hex dump with Rich."""

    lines = []
    end = min(len(data), max_lines * bytes_per_line)

    for offset in range(0, end, bytes_per_line):
        chunk = data[offset : offset + bytes_per_line]

        hex_parts = []
        for i, b in enumerate(chunk):
            if i == 8:
                hex_parts.append(" ")
            # Status bytes never appear inside a valid payload
            hex_parts.append(f"[red]{b:02X}[/red]" if b & 0x80 else f"{b:02X}")
        hex_str = " ".join(hex_parts)
        pad = " " * (3 * (bytes_per_line - len(chunk)))

        ascii_str = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
        ascii_str = ascii_str.replace("[", "\\[")

        addr = start_offset + offset

        lines.append(f"[dim]{addr:04X}[/dim]  {hex_str}{pad}  [cyan]{ascii_str}[/cyan]")

    if len(data) > end:
        remaining = len(data) - end
        lines.append(f"[dim]... {remaining} more bytes ...[/dim]")

    content = "\n".join(lines)
    console.print(Panel(content, title=title, border_style="blue", expand=False))
