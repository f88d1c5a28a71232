"""
Program codec - the public decode/encode surface.

Example:
    from mnlgconv import decode, encode

    result = decode(message)
    if result.is_valid:
        params = result.parameters
        message = encode(params)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from mnlgconv.formats.reader import DecodeResult, ProgramReader
from mnlgconv.formats.sysex_parser import MessageData
from mnlgconv.formats.writer import ProgramLike, ProgramWriter
from mnlgconv.models.program import ProgramParameters
from mnlgconv.utils.validation import DecodeError, MnlgError

logger = logging.getLogger(__name__)


@dataclass
class EncodeResult:
    """Outcome of safe_encode()."""

    success: bool
    data: Optional[bytes] = None
    errors: List[str] = field(default_factory=list)

    @property
    def error(self) -> Optional[str]:
        if not self.errors:
            return None
        return "; ".join(self.errors)


def decode(message: MessageData) -> DecodeResult:
    """
    Decode a 520-byte program dump.

    Never raises for malformed input. On structural failure the result
    carries the all-zero program together with every error found.
    """
    return ProgramReader().decode(message)


def decode_strict(message: MessageData) -> ProgramParameters:
    """
    Decode a program dump, raising on any problem.

    Raises:
        DecodeError: If the message is malformed or the marker is wrong
    """
    result = decode(message)
    if not result.is_valid:
        raise DecodeError(result.error or "Invalid program dump", result.errors)
    return result.parameters


def encode(parameters: ProgramLike) -> bytes:
    """
    Encode parameters into a 520-byte program dump.

    Raises:
        EncodeError: If required sections or fields are missing
        RangeError: If a value is outside its field's domain
        ValidationError: If the program name is not printable ASCII
    """
    return ProgramWriter().to_bytes(parameters)


def safe_encode(parameters: ProgramLike) -> EncodeResult:
    """Encode parameters without raising; failures are returned as errors."""
    try:
        data = encode(parameters)
    except MnlgError as e:
        return EncodeResult(success=False, errors=[str(e)])
    except Exception as e:
        logger.debug("Unexpected error while encoding", exc_info=True)
        return EncodeResult(success=False, errors=[f"Unexpected error: {e}"])
    return EncodeResult(success=True, data=data)


def decode_file(filepath: Union[str, Path]) -> DecodeResult:
    """Decode the first program dump in a .syx file."""
    return ProgramReader.read(filepath)


def encode_file(parameters: ProgramLike, filepath: Union[str, Path]) -> None:
    """Encode parameters and write them to a .syx file."""
    ProgramWriter.write(parameters, filepath)
