"""
CLI display modules.
"""

from cli.display.hex_view import display_hex_dump
from cli.display.tables import (
    display_frame_issues,
    display_program_info,
    display_sequencer,
)

__all__ = [
    "display_program_info",
    "display_sequencer",
    "display_frame_issues",
    "display_hex_dump",
]
