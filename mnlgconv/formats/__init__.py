"""Monologue program dump format handlers."""

from mnlgconv.formats.layout import PROGRAM_LAYOUT, LayoutEntry
from mnlgconv.formats.reader import DecodeResult, ProgramReader
from mnlgconv.formats.sysex_parser import SysExParser, parse_sysex, validate_sysex
from mnlgconv.formats.writer import ProgramWriter

__all__ = [
    "PROGRAM_LAYOUT",
    "LayoutEntry",
    "DecodeResult",
    "ProgramReader",
    "ProgramWriter",
    "SysExParser",
    "parse_sysex",
    "validate_sysex",
]
