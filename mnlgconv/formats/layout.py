"""
Monologue program body layout.

A single table binds every program parameter to its location in the
448-byte decoded body. ProgramReader and ProgramWriter both walk this
table, so decode and encode always agree on every offset.

Body map (offsets in decoded bytes, bit 0 = LSB):

    0-3     'PROG' marker
    4-15    Program name, 12 ASCII chars, null padded
    16-29   High bytes (bits 9-2) of the 10-bit panel parameters
    30-31   VCO low bits, octave and wave
    32      Sync/ring, keyboard octave
    33-35   Shared low-bit bytes (level, cutoff, resonance, EG, LFO, drive)
    34      EG type and target
    36      LFO wave, mode, target, seq trig
    41-50   Program settings (portamento, slider, bend, misc flags, tuning)
    52-57   Sequencer settings (BPM, length, resolution, swing, gate)
    58      Slide time
    64-69   Step active / motion / slide flags, 16 bits each
    72-79   Motion slot parameters, 2 bytes per slot
    80-87   Motion slot step enable flags, 2 bytes per slot
    96-447  16 step events, 22 bytes each

Step event (22 bytes):

    +0      Note number
    +1      Velocity
    +2      Gate time (bits 0-6), trigger (bit 7)
    +3-5    Reserved
    +6-21   Motion data, 4 slots x 4 data points
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from mnlgconv.models.program import MOTION_POINTS_PER_STEP, NUM_MOTION_SLOTS, NUM_STEPS

BODY_LENGTH = 448

MARKER_OFFSET = 0
NAME_OFFSET = 4
NAME_LENGTH = 12

STEP_ACTIVE_OFFSET = 64
STEP_MOTION_OFFSET = 66
STEP_SLIDE_OFFSET = 68

MOTION_SLOT_PARAM_OFFSET = 72
MOTION_SLOT_PARAM_STRIDE = 2
MOTION_SLOT_STEPS_OFFSET = 80
MOTION_SLOT_STEPS_STRIDE = 2

STEP_EVENT_OFFSET = 96
STEP_EVENT_STRIDE = 22
STEP_MOTION_DATA_OFFSET = 6

BIPOLAR_OFFSET = 512


# ---------------------------------------------------------------------------
# Field descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ByteField:
    """A whole byte. Signed fields use two's complement."""

    offset: int
    minimum: int = 0
    maximum: int = 255
    signed: bool = False


@dataclass(frozen=True)
class BitField:
    """
    A bit range inside one byte.

    `domain` restricts the values an enumerated field may take; by default
    any value that fits the width is allowed. `as_bool` exposes a 1-bit
    field as a bool.
    """

    offset: int
    start: int
    width: int
    domain: Optional[Tuple[int, int]] = None
    as_bool: bool = False

    @property
    def limits(self) -> Tuple[int, int]:
        return self.domain or (0, (1 << self.width) - 1)


@dataclass(frozen=True)
class SplitField:
    """
    A 10-bit value: bits 9-2 in high_offset, bits 1-0 at low_bit of low_offset.

    Bipolar fields are stored as raw = value + 512.
    """

    high_offset: int
    low_offset: int
    low_bit: int
    bipolar: bool = False

    @property
    def limits(self) -> Tuple[int, int]:
        if self.bipolar:
            return (-BIPOLAR_OFFSET, 1023 - BIPOLAR_OFFSET)
        return (0, 1023)


@dataclass(frozen=True)
class WordField:
    """A 16-bit little-endian value over two consecutive bytes."""

    offset: int
    minimum: int = 0
    maximum: int = 0xFFFF


@dataclass(frozen=True)
class FlagArray:
    """Packed booleans, 8 per byte, flag 0 in bit 0 of the first byte."""

    offset: int
    length: int = NUM_STEPS


@dataclass(frozen=True)
class TextField:
    """Fixed-width ASCII text, null padded."""

    offset: int
    length: int


FieldDescriptor = Union[ByteField, BitField, SplitField, WordField, FlagArray, TextField]

# Path into the ProgramParameters.to_dict() tree, e.g. ("steps", 3, "note", "key")
FieldPath = Tuple[Union[str, int], ...]


@dataclass(frozen=True)
class LayoutEntry:
    path: FieldPath
    field: FieldDescriptor

    @property
    def name(self) -> str:
        """Dotted name, e.g. 'steps[3].note.key'."""
        parts: List[str] = []
        for key in self.path:
            if isinstance(key, int):
                parts[-1] += f"[{key}]"
            else:
                parts.append(key)
        return ".".join(parts)


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------

# (path, high byte, shared low byte, low bit offset, bipolar)
_SPLIT_FIELDS = [
    (("vco1", "pitch"), 16, 30, 0, False),
    (("vco1", "shape"), 17, 30, 2, False),
    (("vco2", "pitch"), 18, 31, 0, False),
    (("vco2", "shape"), 19, 31, 2, False),
    (("vco1", "level"), 20, 33, 0, False),
    (("vco2", "level"), 21, 33, 2, False),
    (("filter", "cutoff"), 22, 33, 4, False),
    (("filter", "resonance"), 23, 33, 6, False),
    (("envelope", "attack"), 24, 34, 2, False),
    (("envelope", "decay"), 25, 34, 4, False),
    (("envelope", "intensity"), 26, 35, 0, True),
    (("lfo", "rate"), 27, 35, 2, False),
    (("lfo", "intensity"), 28, 35, 4, True),
    (("drive",), 29, 35, 6, False),
]

_PANEL_FIELDS = [
    (("vco1", "octave"), BitField(30, 4, 2)),
    (("vco1", "wave"), BitField(30, 6, 2, domain=(0, 2))),
    (("vco2", "octave"), BitField(31, 4, 2)),
    (("vco2", "wave"), BitField(31, 6, 2, domain=(0, 2))),
    (("vco2", "sync_ring"), BitField(32, 0, 2, domain=(0, 2))),
    (("misc", "keyboard_octave"), BitField(32, 2, 3, domain=(0, 4))),
    (("envelope", "type"), BitField(34, 0, 2, domain=(0, 2))),
    (("envelope", "target"), BitField(34, 6, 2, domain=(0, 2))),
    (("lfo", "wave"), BitField(36, 0, 2, domain=(0, 2))),
    (("lfo", "mode"), BitField(36, 2, 2, domain=(0, 2))),
    (("lfo", "target"), BitField(36, 4, 2, domain=(0, 2))),
    (("misc", "seq_trig"), BitField(36, 6, 1)),
]

_PROGRAM_FIELDS = [
    (("misc", "portamento_time"), ByteField(41, maximum=128)),
    (("misc", "slider_assign"), ByteField(42)),
    (("misc", "bend_range_plus"), BitField(43, 0, 4, domain=(0, 12))),
    (("misc", "bend_range_minus"), BitField(43, 4, 4, domain=(0, 12))),
    (("misc", "portamento_mode"), BitField(44, 0, 1)),
    (("misc", "lfo_bpm_sync"), BitField(44, 3, 1)),
    (("misc", "cutoff_velocity"), BitField(44, 4, 2)),
    (("misc", "cutoff_key_track"), BitField(44, 6, 2, domain=(0, 2))),
    (("misc", "program_level"), ByteField(45)),
    (("misc", "amp_velocity"), ByteField(46, maximum=127)),
    (("misc", "micro_tuning"), ByteField(48)),
    (("misc", "scale_key"), ByteField(49, maximum=24)),
    (("misc", "program_tuning"), ByteField(50, maximum=100)),
]

_SEQUENCER_FIELDS = [
    (("sequencer", "bpm"), WordField(52, maximum=3000)),
    (("sequencer", "step_length"), ByteField(54, maximum=16)),
    (("sequencer", "step_resolution"), ByteField(55, maximum=4)),
    (("sequencer", "swing"), ByteField(56, minimum=-75, maximum=75, signed=True)),
    (("sequencer", "default_gate_time"), ByteField(57, maximum=72)),
    (("misc", "slide_time"), ByteField(58, maximum=72)),
    (("sequencer", "step_active"), FlagArray(STEP_ACTIVE_OFFSET)),
    (("sequencer", "step_motion"), FlagArray(STEP_MOTION_OFFSET)),
    (("sequencer", "step_slide"), FlagArray(STEP_SLIDE_OFFSET)),
]


def _motion_slot_entries() -> List[LayoutEntry]:
    entries = []
    for slot in range(NUM_MOTION_SLOTS):
        param = MOTION_SLOT_PARAM_OFFSET + slot * MOTION_SLOT_PARAM_STRIDE
        steps = MOTION_SLOT_STEPS_OFFSET + slot * MOTION_SLOT_STEPS_STRIDE
        base = ("motion_slots", slot)
        entries += [
            LayoutEntry(base + ("active",), BitField(param, 0, 1, as_bool=True)),
            LayoutEntry(base + ("smooth",), BitField(param, 1, 1, as_bool=True)),
            LayoutEntry(base + ("parameter",), ByteField(param + 1)),
            LayoutEntry(base + ("step_enabled",), FlagArray(steps)),
        ]
    return entries


def _step_entries() -> List[LayoutEntry]:
    entries = []
    for step in range(NUM_STEPS):
        event = STEP_EVENT_OFFSET + step * STEP_EVENT_STRIDE
        note = ("steps", step, "note")
        entries += [
            LayoutEntry(note + ("key",), ByteField(event, maximum=127)),
            LayoutEntry(note + ("velocity",), ByteField(event + 1, maximum=127)),
            LayoutEntry(note + ("gate_time",), BitField(event + 2, 0, 7, domain=(0, 73))),
            LayoutEntry(note + ("trigger",), BitField(event + 2, 7, 1, as_bool=True)),
        ]
        for slot in range(NUM_MOTION_SLOTS):
            for point in range(MOTION_POINTS_PER_STEP):
                offset = (
                    event + STEP_MOTION_DATA_OFFSET + slot * MOTION_POINTS_PER_STEP + point
                )
                entries.append(
                    LayoutEntry(("steps", step, "motion", slot, point), ByteField(offset))
                )
    return entries


def build_layout() -> Tuple[LayoutEntry, ...]:
    """Assemble the complete program layout table."""
    entries = [LayoutEntry(("patch_name",), TextField(NAME_OFFSET, NAME_LENGTH))]
    entries += [
        LayoutEntry(path, SplitField(high, low, bit, bipolar))
        for path, high, low, bit, bipolar in _SPLIT_FIELDS
    ]
    for group in (_PANEL_FIELDS, _PROGRAM_FIELDS, _SEQUENCER_FIELDS):
        entries += [LayoutEntry(path, descriptor) for path, descriptor in group]
    entries += _motion_slot_entries()
    entries += _step_entries()
    return tuple(entries)


def field_bits(descriptor: FieldDescriptor) -> List[Tuple[int, int]]:
    """List the (byte offset, bit) pairs a descriptor occupies."""
    if isinstance(descriptor, ByteField):
        return [(descriptor.offset, bit) for bit in range(8)]
    if isinstance(descriptor, BitField):
        return [
            (descriptor.offset, bit)
            for bit in range(descriptor.start, descriptor.start + descriptor.width)
        ]
    if isinstance(descriptor, SplitField):
        return [(descriptor.high_offset, bit) for bit in range(8)] + [
            (descriptor.low_offset, descriptor.low_bit),
            (descriptor.low_offset, descriptor.low_bit + 1),
        ]
    if isinstance(descriptor, WordField):
        return [(descriptor.offset + i // 8, i % 8) for i in range(16)]
    if isinstance(descriptor, FlagArray):
        return [(descriptor.offset + i // 8, i % 8) for i in range(descriptor.length)]
    if isinstance(descriptor, TextField):
        return [(descriptor.offset + i // 8, i % 8) for i in range(descriptor.length * 8)]
    raise TypeError(f"Unknown field descriptor: {descriptor!r}")


def verify_layout(entries: Tuple[LayoutEntry, ...]) -> List[str]:
    """
    Check a layout table for overlapping or out-of-range fields.

    Returns:
        List of problems (empty if the table is consistent)
    """
    problems = []
    owners: Dict[Tuple[int, int], str] = {}
    reserved = {(offset, bit) for offset in range(4) for bit in range(8)}
    paths = set()

    for entry in entries:
        if entry.path in paths:
            problems.append(f"Duplicate field path: {entry.name}")
        paths.add(entry.path)

        for offset, bit in field_bits(entry.field):
            if not 0 <= offset < BODY_LENGTH:
                problems.append(f"{entry.name}: offset {offset} outside body")
                continue
            if (offset, bit) in reserved:
                problems.append(f"{entry.name}: overlaps program marker at {offset}")
                continue
            owner = owners.get((offset, bit))
            if owner is not None:
                problems.append(f"{entry.name}: bit {bit} of byte {offset} already used by {owner}")
            else:
                owners[(offset, bit)] = entry.name

    return problems


PROGRAM_LAYOUT = build_layout()

_problems = verify_layout(PROGRAM_LAYOUT)
if _problems:
    raise RuntimeError("Inconsistent program layout:\n" + "\n".join(_problems))
del _problems


def find_entry(name: str) -> LayoutEntry:
    """Look up a layout entry by dotted name, e.g. 'filter.cutoff'."""
    for entry in PROGRAM_LAYOUT:
        if entry.name == name:
            return entry
    raise KeyError(f"No layout entry named {name!r}")
