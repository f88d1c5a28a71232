"""
Monologue program reader.

Turns a 520-byte program dump into ProgramParameters by walking the
program layout table over the decoded body.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

from mnlgconv.formats.layout import (
    BIPOLAR_OFFSET,
    PROGRAM_LAYOUT,
    BitField,
    ByteField,
    FieldDescriptor,
    FieldPath,
    FlagArray,
    SplitField,
    TextField,
    WordField,
)
from mnlgconv.formats.sysex_parser import FrameIssue, MessageData, SysExParser
from mnlgconv.formats.syx_file import read_program_message
from mnlgconv.models.program import ProgramParameters
from mnlgconv.utils.bitfield import read_10bit, read_bits, read_flags

logger = logging.getLogger(__name__)


@dataclass
class DecodeResult:
    """
    Outcome of decoding a program dump.

    `parameters` is always usable: the all-zero program when the message
    could not be decoded at all, the decoded body when only the program
    marker was wrong.
    """

    is_valid: bool
    parameters: ProgramParameters
    errors: List[str] = field(default_factory=list)
    issues: List[FrameIssue] = field(default_factory=list)

    @property
    def error(self) -> Optional[str]:
        """All error messages joined, or None for a valid result."""
        if not self.errors:
            return None
        return "; ".join(self.errors)


def decode_name(raw: bytes) -> str:
    """Decode a null padded name; bytes outside printable ASCII become '?'."""
    raw = bytes(raw).rstrip(b"\x00")
    return "".join(chr(b) if 0x20 <= b <= 0x7E else "?" for b in raw)


def read_field(body: bytes, descriptor: FieldDescriptor) -> Any:
    """Read one field from a decoded body."""
    if isinstance(descriptor, ByteField):
        value = body[descriptor.offset]
        if descriptor.signed and value & 0x80:
            value -= 0x100
        return value

    if isinstance(descriptor, BitField):
        value = read_bits(body[descriptor.offset], descriptor.start, descriptor.width)
        return bool(value) if descriptor.as_bool else value

    if isinstance(descriptor, SplitField):
        value = read_10bit(
            body[descriptor.high_offset], body[descriptor.low_offset], descriptor.low_bit
        )
        return value - BIPOLAR_OFFSET if descriptor.bipolar else value

    if isinstance(descriptor, WordField):
        return body[descriptor.offset] | (body[descriptor.offset + 1] << 8)

    if isinstance(descriptor, FlagArray):
        return list(read_flags(body, descriptor.offset, descriptor.length))

    if isinstance(descriptor, TextField):
        return decode_name(body[descriptor.offset : descriptor.offset + descriptor.length])

    raise TypeError(f"Unknown field descriptor: {descriptor!r}")


def _set_path(tree: Any, path: FieldPath, value: Any) -> None:
    for key in path[:-1]:
        tree = tree[key]
    tree[path[-1]] = value


class ProgramReader:
    """
    Reader for monologue program dumps.

    Example:
        result = ProgramReader.read("program.syx")
        if result.is_valid:
            print(result.parameters.patch_name)
        else:
            print(result.error)
    """

    def __init__(self):
        self.parser = SysExParser()

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> DecodeResult:
        """
        Read the first program dump from a .syx file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        message = read_program_message(filepath)
        if message is None:
            return DecodeResult(
                is_valid=False,
                parameters=ProgramParameters.zero(),
                errors=[f"No SysEx message found in {filepath}"],
            )
        return cls().decode(message)

    def decode(self, message: MessageData) -> DecodeResult:
        """
        Decode a complete program dump message.

        Never raises for malformed input.

        Args:
            message: 520-byte SysEx message including F0 and F7

        Returns:
            DecodeResult with parameters and any errors
        """
        parsed = self.parser.parse(message)

        if parsed.frame is None:
            logger.debug("Program dump rejected with %d issue(s)", len(parsed.issues))
            return DecodeResult(
                is_valid=False,
                parameters=ProgramParameters.zero(),
                errors=parsed.errors,
                issues=parsed.issues,
            )

        parameters = self.parse_body(parsed.frame.body)
        logger.debug("Decoded program %r", parameters.patch_name)

        return DecodeResult(
            is_valid=parsed.valid,
            parameters=parameters,
            errors=parsed.errors,
            issues=parsed.issues,
        )

    def parse_body(self, body: bytes) -> ProgramParameters:
        """
        Build parameters from a 448-byte decoded body.

        Raises:
            ValueError: If the body has the wrong size
        """
        if len(body) != SysExParser.DECODED_DATA_LENGTH:
            raise ValueError(
                f"Invalid body length: expected {SysExParser.DECODED_DATA_LENGTH}, got {len(body)}"
            )

        tree = ProgramParameters.zero().to_dict()
        for entry in PROGRAM_LAYOUT:
            _set_path(tree, entry.path, read_field(body, entry.field))

        return ProgramParameters.from_dict(tree)
