"""Data models for monologue program representation."""

from mnlgconv.models.codes import MOTION_PARAMETERS, SLIDER_ASSIGN, Code, CodeTable
from mnlgconv.models.program import (
    Envelope,
    Filter,
    Lfo,
    Misc,
    MotionSlot,
    NoteEvent,
    Oscillator,
    ProgramParameters,
    Sequencer,
    Step,
    Vco2,
)

__all__ = [
    "ProgramParameters",
    "Oscillator",
    "Vco2",
    "Filter",
    "Envelope",
    "Lfo",
    "Misc",
    "Sequencer",
    "MotionSlot",
    "NoteEvent",
    "Step",
    "Code",
    "CodeTable",
    "SLIDER_ASSIGN",
    "MOTION_PARAMETERS",
]
