"""
Display formatting utilities for CLI output.

Provides bar graphics, switch labels and step grids for program values.
"""

from typing import Sequence

# Switch position labels, indexed by stored value
WAVE_LABELS = ("SQR", "TRI", "SAW")
OCTAVE_LABELS = ("16'", "8'", "4'", "2'")
SYNC_RING_LABELS = ("RING", "OFF", "SYNC")
EG_TYPE_LABELS = ("GATE", "A/G/D", "A/D")
EG_TARGET_LABELS = ("CUTOFF", "PITCH 2", "PITCH")
LFO_MODE_LABELS = ("1-SHOT", "SLOW", "FAST")
LFO_TARGET_LABELS = ("CUTOFF", "SHAPE", "PITCH")
STEP_RESOLUTION_LABELS = ("1/16", "1/8", "1/4", "1/2", "1/1")
KEYBOARD_OCTAVE_LABELS = ("-2", "-1", "0", "+1", "+2")
CUTOFF_VELOCITY_LABELS = ("0%", "33%", "66%", "100%")
CUTOFF_KEY_TRACK_LABELS = ("0%", "50%", "100%")
PORTAMENTO_MODE_LABELS = ("AUTO", "ON")


def value_bar(
    value: int,
    max_value: int = 1023,
    width: int = 10,
    filled_char: str = "█",
    empty_char: str = "░",
    show_value: bool = True,
    show_percent: bool = True,
) -> str:
    """
    Create a text-based bar graphic with value and percentage.

    Args:
        value: Current value
        max_value: Maximum value (default 1023 for panel parameters)
        width: Bar width in characters
        filled_char: Character for filled portion
        empty_char: Character for empty portion
        show_value: Show numeric value
        show_percent: Show percentage

    Returns:
        Formatted string like " 730 [███████░░░]  71%"
    """
    if max_value <= 0:
        max_value = 1

    clamped = max(0, min(value, max_value))

    fill_count = int((clamped / max_value) * width)
    empty_count = width - fill_count

    bar = filled_char * fill_count + empty_char * empty_count
    percent = int((clamped / max_value) * 100)

    parts = []
    if show_value:
        parts.append(f"{value:4d}")
    parts.append(f"[{bar}]")
    if show_percent:
        parts.append(f"{percent:3d}%")

    return " ".join(parts)


def bipolar_bar(
    value: int,
    limit: int = 512,
    width: int = 11,
    left_char: str = "◀",
    right_char: str = "▶",
    center_char: str = "●",
    empty_char: str = "─",
) -> str:
    """
    Create a centered bar for a bipolar value (-512 to 511).

    Returns:
        Formatted string like "-256 [──◀──●─────]"
    """
    center = width // 2
    bar = list(empty_char * width)
    bar[center] = center_char

    if value < 0:
        pos = center - int((-value / limit) * center)
        bar[max(pos, 0)] = left_char
    elif value > 0:
        pos = center + int((value / (limit - 1)) * (width - center - 1))
        bar[min(pos, width - 1)] = right_char

    return f"{value:+5d} [{''.join(bar)}]"


def label(value: int, labels: Sequence[str]) -> str:
    """
    Format a switch value with its label.

    Returns:
        "SAW (2)" or "? (7)" for a value outside the label table
    """
    if 0 <= value < len(labels):
        return f"{labels[value]} ({value})"
    return f"? ({value})"


def format_bpm(raw: int) -> str:
    """
    Format a stored tempo (BPM x10).

    Returns:
        "120.0 BPM (raw: 1200)"
    """
    return f"{raw / 10:.1f} BPM (raw: {raw})"


def step_grid(flags: Sequence[bool], on_char: str = "■", off_char: str = "□") -> str:
    """
    Render 16 step flags as a grid in groups of four.

    Returns:
        "■□□□ ■□□□ ■□□□ ■□□□"
    """
    cells = [on_char if flag else off_char for flag in flags]
    return " ".join("".join(cells[i : i + 4]) for i in range(0, len(cells), 4))
