"""
Monologue program writer.

Builds a 520-byte program dump from ProgramParameters (or a mapping with
the same shape as ProgramParameters.to_dict()).

Several fields share a byte with other fields (the 10-bit low bit pairs,
the enumerations at 30-36, the flags at 44). Those writes are composed in
a per-byte accumulator and committed to the body in one step, so the
order in which the layout is walked never matters.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from mnlgconv.formats.layout import (
    BIPOLAR_OFFSET,
    MARKER_OFFSET,
    PROGRAM_LAYOUT,
    BitField,
    ByteField,
    FlagArray,
    LayoutEntry,
    SplitField,
    TextField,
    WordField,
)
from mnlgconv.formats.sysex_parser import SysExParser
from mnlgconv.formats.syx_file import write_messages
from mnlgconv.models.program import (
    MOTION_POINTS_PER_STEP,
    NUM_MOTION_SLOTS,
    NUM_STEPS,
    ProgramParameters,
    missing_sections,
)
from mnlgconv.utils.bitfield import merge_bits, pack_flags, write_10bit, write_bits
from mnlgconv.utils.validation import EncodeError, validate_patch_name, validate_range

logger = logging.getLogger(__name__)

ProgramLike = Union[ProgramParameters, Mapping[str, Any]]


class ProgramWriter:
    """
    Writer for monologue program dumps.

    A writer keeps scratch state for the program being built, so use one
    instance per call (the classmethods and mnlgconv.codec do this).

    Example:
        params = ProgramParameters(patch_name="BASS 1", drive=512)
        data = ProgramWriter().to_bytes(params)
        ProgramWriter.write(params, "bass.syx")
    """

    def __init__(self):
        self.parser = SysExParser()
        self._body = bytearray(SysExParser.DECODED_DATA_LENGTH)
        self._pending: Dict[int, int] = {}

    @classmethod
    def write(cls, parameters: ProgramLike, filepath: Union[str, Path]) -> None:
        """
        Encode parameters and write them to a .syx file.

        Args:
            parameters: Program to write
            filepath: Output file path
        """
        data = cls().to_bytes(parameters)
        write_messages(filepath, [data])

    def to_bytes(self, parameters: ProgramLike) -> bytes:
        """
        Encode parameters into a complete program dump.

        Raises:
            EncodeError: If required sections or fields are missing
            RangeError: If a value is outside its field's domain
            ValidationError: If the program name is not printable ASCII
        """
        message = self.parser.build(self.build_body(parameters))
        logger.debug("Encoded program dump (%d bytes)", len(message))
        return message

    def build_body(self, parameters: ProgramLike) -> bytes:
        """Encode parameters into the 448-byte decoded body."""
        tree = self._as_tree(parameters)

        self._body = bytearray(SysExParser.DECODED_DATA_LENGTH)
        self._pending = {}

        marker = SysExParser.PROGRAM_MARKER
        self._body[MARKER_OFFSET : MARKER_OFFSET + len(marker)] = marker

        for entry in PROGRAM_LAYOUT:
            self._write_entry(entry, self._lookup(tree, entry))

        self._commit()
        return bytes(self._body)

    def _as_tree(self, parameters: ProgramLike) -> Mapping[str, Any]:
        if isinstance(parameters, ProgramParameters):
            return parameters.to_dict()

        missing = missing_sections(parameters)
        if missing:
            raise EncodeError(
                f"Missing required sections: {', '.join(missing)}", missing=missing
            )
        self._check_counts(parameters)
        return parameters

    def _check_counts(self, tree: Mapping[str, Any]) -> None:
        """Reject repeated sections with more or fewer entries than the body holds."""
        self._sized(tree["motion_slots"], NUM_MOTION_SLOTS, "motion_slots")
        self._sized(tree["steps"], NUM_STEPS, "steps")

        for i, step in enumerate(tree["steps"]):
            motion = step.get("motion") if isinstance(step, Mapping) else None
            if motion is None:
                continue
            self._sized(motion, NUM_MOTION_SLOTS, f"steps[{i}].motion")
            for k, points in enumerate(motion):
                self._sized(points, MOTION_POINTS_PER_STEP, f"steps[{i}].motion[{k}]")

    def _lookup(self, tree: Mapping[str, Any], entry: LayoutEntry) -> Any:
        node: Any = tree
        try:
            for key in entry.path:
                node = node[key]
        except (KeyError, IndexError, TypeError):
            raise EncodeError(
                f"Missing or malformed field: {entry.name}", missing=[entry.name]
            ) from None
        return node

    def _stage(self, offset: int, bits: int, clear_mask: int) -> None:
        self._pending[offset] = merge_bits(self._pending.get(offset, 0), bits, clear_mask)

    def _commit(self) -> None:
        for offset, value in sorted(self._pending.items()):
            self._body[offset] = value
        self._pending = {}

    def _write_entry(self, entry: LayoutEntry, value: Any) -> None:
        descriptor = entry.field
        name = entry.name

        if isinstance(descriptor, TextField):
            raw = validate_patch_name(value, descriptor.length)
            self._body[descriptor.offset : descriptor.offset + descriptor.length] = raw

        elif isinstance(descriptor, ByteField):
            validate_range(value, descriptor.minimum, descriptor.maximum, name)
            self._body[descriptor.offset] = value & 0xFF

        elif isinstance(descriptor, BitField):
            if isinstance(value, bool):
                value = int(value)
            validate_range(value, *descriptor.limits, name)
            mask = ((1 << descriptor.width) - 1) << descriptor.start
            bits = write_bits(0, value, descriptor.start, descriptor.width)
            self._stage(descriptor.offset, bits, ~mask & 0xFF)

        elif isinstance(descriptor, SplitField):
            validate_range(value, *descriptor.limits, name)
            raw = value + BIPOLAR_OFFSET if descriptor.bipolar else value
            split = write_10bit(raw, descriptor.low_bit)
            self._body[descriptor.high_offset] = split.high_byte
            self._stage(descriptor.low_offset, split.low_bits, split.clear_mask)

        elif isinstance(descriptor, WordField):
            validate_range(value, descriptor.minimum, descriptor.maximum, name)
            self._body[descriptor.offset] = value & 0xFF
            self._body[descriptor.offset + 1] = (value >> 8) & 0xFF

        elif isinstance(descriptor, FlagArray):
            flags = self._flags(value, descriptor.length, name)
            packed = pack_flags(flags)
            self._body[descriptor.offset : descriptor.offset + len(packed)] = packed

        else:
            raise TypeError(f"Unknown field descriptor: {descriptor!r}")

    @staticmethod
    def _sized(value: Any, length: int, name: str) -> None:
        if isinstance(value, (str, bytes)) or not hasattr(value, "__len__"):
            raise EncodeError(f"{name} must be a sequence of {length} entries", missing=[name])
        if len(value) != length:
            raise EncodeError(
                f"{name} must have {length} entries, got {len(value)}", missing=[name]
            )

    @staticmethod
    def _flags(value: Any, length: int, name: str) -> List[bool]:
        if isinstance(value, (str, bytes)) or not hasattr(value, "__len__"):
            raise EncodeError(f"{name} must be a sequence of {length} flags", missing=[name])
        if len(value) != length:
            raise EncodeError(
                f"{name} must have {length} flags, got {len(value)}", missing=[name]
            )
        return [bool(flag) for flag in value]
