"""
mnlgconv - Encoder/decoder for Korg monologue program dumps.

This library provides tools to:
- Validate 520-byte monologue program SysEx messages
- Decode them into typed, named program parameters
- Encode program parameters back into a program dump
- Read and write .syx files

Example usage:
    from mnlgconv import decode_file, encode_file

    result = decode_file("program.syx")
    print(result.parameters.patch_name, result.parameters.filter.cutoff)

    encode_file(result.parameters, "copy.syx")
"""

__version__ = "0.1.0"
__author__ = "mnlgconv Contributors"

from mnlgconv.codec import (
    EncodeResult,
    decode,
    decode_file,
    decode_strict,
    encode,
    encode_file,
    safe_encode,
)
from mnlgconv.formats.reader import DecodeResult, ProgramReader
from mnlgconv.formats.writer import ProgramWriter
from mnlgconv.models.program import ProgramParameters
from mnlgconv.utils.validation import (
    DecodeError,
    EncodeError,
    MnlgError,
    RangeError,
    ValidationError,
)

__all__ = [
    "decode",
    "decode_strict",
    "encode",
    "safe_encode",
    "decode_file",
    "encode_file",
    "DecodeResult",
    "EncodeResult",
    "ProgramReader",
    "ProgramWriter",
    "ProgramParameters",
    "MnlgError",
    "ValidationError",
    "RangeError",
    "EncodeError",
    "DecodeError",
]
