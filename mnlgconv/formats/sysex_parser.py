"""
Korg monologue program dump SysEx parser.

Validates the fixed frame of a single-program dump and extracts the
decoded program body.

Program Dump Format (520 bytes):
    F0 42 30 00 01 44 40 [data...] F7

Where:
    - 42: Manufacturer ID (Korg)
    - 30: Channel byte (3n, global channel 1)
    - 00 01 44: Model ID (monologue)
    - 40: Function code (current program data dump)
    - data: 512 bytes of 7-bit encoded payload (448 bytes decoded)
    - F7: End of exclusive

The first four decoded bytes are the ASCII program marker 'PROG'.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Union

from mnlgconv.utils.korg_7bit import decode_7bit, encode_7bit

logger = logging.getLogger(__name__)

MessageData = Union[bytes, bytearray, Sequence[int]]


class IssueKind(Enum):
    """Categories of problems found in a program dump."""

    LENGTH = "length"
    HEADER = "header"
    FOOTER = "footer"
    DATA_BYTE = "data_byte"
    PROGRAM_MARKER = "program_marker"


@dataclass
class FrameIssue:
    """
    A single problem found while validating a message.

    Attributes:
        kind: Issue category
        offset: Byte offset in the message (body offset for marker issues)
        message: Human-readable description
        expected: Expected value, formatted
        actual: Actual value, formatted
    """

    kind: IssueKind
    offset: int
    message: str
    expected: str = ""
    actual: str = ""

    @property
    def is_structural(self) -> bool:
        """Structural issues point at transmission damage, not misalignment."""
        return self.kind != IssueKind.PROGRAM_MARKER

    def __str__(self) -> str:
        return self.message


@dataclass
class ValidationResult:
    """Result of validating a message frame."""

    valid: bool
    issues: List[FrameIssue] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [issue.message for issue in self.issues]


@dataclass
class Frame:
    """
    A validated program dump split into its parts.

    Attributes:
        header: The 7 header bytes
        body: 448 bytes of decoded 8-bit program data
        footer: The end of exclusive byte
    """

    header: bytes
    body: bytes
    footer: int

    @property
    def program_marker(self) -> bytes:
        return self.body[:4]

    @property
    def has_program_marker(self) -> bool:
        return self.program_marker == SysExParser.PROGRAM_MARKER


@dataclass
class ParseResult:
    """
    Outcome of parsing a message.

    `frame` is None when the message failed structural validation. A frame
    with a bad program marker is still returned, together with the issue.
    """

    frame: Optional[Frame]
    issues: List[FrameIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.frame is not None and not self.issues

    @property
    def errors(self) -> List[str]:
        return [issue.message for issue in self.issues]


class SysExParser:
    """
    Validator and extractor for monologue program dumps.

    Example:
        parser = SysExParser()
        result = parser.parse(message)

        if result.frame is not None:
            print(f"Body: {len(result.frame.body)} bytes")
        for issue in result.issues:
            print(issue.message)
    """

    # Constants
    SYSEX_START = 0xF0
    SYSEX_END = 0xF7
    KORG_ID = 0x42
    MONOLOGUE_MODEL_ID = (0x00, 0x01, 0x44)
    FUNC_PROGRAM_DUMP = 0x40

    HEADER = bytes([0xF0, 0x42, 0x30, 0x00, 0x01, 0x44, 0x40])
    FOOTER = 0xF7
    PROGRAM_MARKER = b"PROG"

    HEADER_LENGTH = 7
    FOOTER_LENGTH = 1
    ENCODED_DATA_LENGTH = 512
    DECODED_DATA_LENGTH = 448
    TOTAL_LENGTH = 520

    # Cap on individually reported payload bytes
    MAX_DATA_BYTE_ISSUES = 5

    def validate(self, message: MessageData) -> ValidationResult:
        """
        Check length, header, footer and payload bytes of a message.

        All problems are collected; none stops the others from being
        checked. Per-byte payload reports are capped.

        Args:
            message: Complete SysEx message including F0 and F7

        Returns:
            Validation result with every issue found
        """
        data = list(message)
        issues: List[FrameIssue] = []

        if len(data) != self.TOTAL_LENGTH:
            issues.append(
                FrameIssue(
                    IssueKind.LENGTH,
                    0,
                    f"Invalid length: expected {self.TOTAL_LENGTH} bytes, got {len(data)}",
                    str(self.TOTAL_LENGTH),
                    str(len(data)),
                )
            )

        issues.extend(self._check_header(data))

        if data and data[-1] != self.FOOTER:
            issues.append(
                FrameIssue(
                    IssueKind.FOOTER,
                    len(data) - 1,
                    f"Invalid footer at offset {len(data) - 1}: "
                    f"expected 0x{self.FOOTER:02X}, got 0x{data[-1]:02X}",
                    f"0x{self.FOOTER:02X}",
                    f"0x{data[-1]:02X}",
                )
            )

        issues.extend(self._check_payload(data))

        for issue in issues:
            logger.debug("SysEx frame issue: %s", issue.message)

        return ValidationResult(valid=not issues, issues=issues)

    def parse(self, message: MessageData) -> ParseResult:
        """
        Validate a message and decode its payload.

        Never raises for malformed input; problems are returned as issues.

        Args:
            message: Complete SysEx message including F0 and F7

        Returns:
            Parse result with the frame (if structurally valid) and issues
        """
        validation = self.validate(message)
        if not validation.valid:
            return ParseResult(frame=None, issues=validation.issues)

        data = bytes(message)
        start = self.HEADER_LENGTH
        end = start + self.ENCODED_DATA_LENGTH

        frame = Frame(
            header=data[:start],
            body=decode_7bit(data[start:end]),
            footer=data[-1],
        )

        issues: List[FrameIssue] = []
        if not frame.has_program_marker:
            marker = frame.program_marker.decode("ascii", errors="replace")
            issues.append(
                FrameIssue(
                    IssueKind.PROGRAM_MARKER,
                    0,
                    f"Invalid program marker: expected 'PROG' at body offset 0-3, got {marker!r}",
                    "PROG",
                    marker,
                )
            )
            logger.debug("Program marker mismatch: %r", frame.program_marker)

        return ParseResult(frame=frame, issues=issues)

    def build(self, body: bytes) -> bytes:
        """
        Wrap a 448-byte program body into a complete dump message.

        Raises:
            ValueError: If the body has the wrong size
        """
        if len(body) != self.DECODED_DATA_LENGTH:
            raise ValueError(
                f"Invalid body length: expected {self.DECODED_DATA_LENGTH}, got {len(body)}"
            )
        return self.HEADER + encode_7bit(body) + bytes([self.FOOTER])

    def split_messages(self, data: bytes) -> List[bytes]:
        """Split a byte stream into individual SysEx messages."""
        messages = []
        start = None

        for i, byte in enumerate(data):
            if byte == self.SYSEX_START:
                start = i
            elif byte == self.SYSEX_END and start is not None:
                messages.append(bytes(data[start : i + 1]))
                start = None

        return messages

    def is_program_dump(self, message: MessageData) -> bool:
        """Check the manufacturer, model and function bytes only."""
        data = list(message[: self.HEADER_LENGTH])
        return (
            len(data) == self.HEADER_LENGTH
            and data[0] == self.SYSEX_START
            and data[1] == self.KORG_ID
            and tuple(data[3:6]) == self.MONOLOGUE_MODEL_ID
            and data[6] == self.FUNC_PROGRAM_DUMP
        )

    def _check_header(self, data: List[int]) -> List[FrameIssue]:
        issues = []
        for i, expected in enumerate(self.HEADER):
            if i >= len(data):
                issues.append(
                    FrameIssue(
                        IssueKind.HEADER,
                        i,
                        f"Missing header byte at offset {i}: expected 0x{expected:02X}",
                        f"0x{expected:02X}",
                        "missing",
                    )
                )
            elif data[i] != expected:
                issues.append(
                    FrameIssue(
                        IssueKind.HEADER,
                        i,
                        f"Invalid header byte at offset {i}: "
                        f"expected 0x{expected:02X}, got 0x{data[i]:02X}",
                        f"0x{expected:02X}",
                        f"0x{data[i]:02X}",
                    )
                )
        return issues

    def _check_payload(self, data: List[int]) -> List[FrameIssue]:
        issues = []
        start = self.HEADER_LENGTH
        end = min(len(data) - self.FOOTER_LENGTH, start + self.ENCODED_DATA_LENGTH)

        bad_offsets = [i for i in range(start, end) if not 0 <= data[i] <= 0x7F]

        for i in bad_offsets[: self.MAX_DATA_BYTE_ISSUES]:
            issues.append(
                FrameIssue(
                    IssueKind.DATA_BYTE,
                    i,
                    f"Invalid data byte at offset {i}: 0x{data[i]:02X} (must be 0-127)",
                    "0x00-0x7F",
                    f"0x{data[i]:02X}",
                )
            )

        remaining = len(bad_offsets) - self.MAX_DATA_BYTE_ISSUES
        if remaining > 0:
            issues.append(
                FrameIssue(
                    IssueKind.DATA_BYTE,
                    bad_offsets[self.MAX_DATA_BYTE_ISSUES],
                    f"... and {remaining} more invalid data bytes",
                )
            )

        return issues


def validate_sysex(message: MessageData) -> ValidationResult:
    """Convenience function to validate a program dump frame."""
    return SysExParser().validate(message)


def parse_sysex(message: MessageData) -> ParseResult:
    """Convenience function to parse a program dump."""
    return SysExParser().parse(message)
