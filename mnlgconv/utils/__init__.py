"""Utility functions for mnlgconv."""

from mnlgconv.utils.bitfield import read_10bit, read_bits, write_10bit, write_bits
from mnlgconv.utils.korg_7bit import decode_7bit, encode_7bit
from mnlgconv.utils.validation import (
    MnlgError,
    ValidationError,
    RangeError,
    EncodeError,
    DecodeError,
)

__all__ = [
    "encode_7bit",
    "decode_7bit",
    "read_bits",
    "write_bits",
    "read_10bit",
    "write_10bit",
    "MnlgError",
    "ValidationError",
    "RangeError",
    "EncodeError",
    "DecodeError",
]
