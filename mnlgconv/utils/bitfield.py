"""
Bit field helpers for monologue program data.

Most continuous panel parameters on the monologue are 10-bit values (0-1023)
that do not fit in a byte. The program body stores them split:

- Bits 9-2 (the high 8 bits) in a dedicated byte
- Bits 1-0 (the low 2 bits) in a bit pair of a byte shared with the low
  bits of other parameters

Example:
    Cutoff 488 (0b0111101000), low bits at offset 4 of body byte 33
    High byte:  0b01111010 = 122  -> body[22]
    Low bits:   0b00              -> body[33] bits 5-4
"""

from typing import NamedTuple

from mnlgconv.utils.validation import RangeError

# Bit positions a 2-bit low field may start at inside a shared byte
LOW_BIT_OFFSETS = (0, 2, 4, 6)

MAX_10BIT = 0x3FF


class SplitBits(NamedTuple):
    """Result of splitting a 10-bit value for storage."""

    high_byte: int
    low_bits: int  # Already shifted to its offset
    clear_mask: int  # AND mask clearing the target bit pair


def _check_range(start: int, width: int) -> None:
    if not 1 <= width <= 8:
        raise ValueError(f"Bit width must be 1-8, got {width}")
    if not 0 <= start <= 8 - width:
        raise ValueError(f"Bit start must be 0-{8 - width} for width {width}, got {start}")


def read_bits(byte: int, start: int, width: int) -> int:
    """
    Read `width` bits of a byte beginning at bit `start` (0 = LSB).

    Example:
        >>> read_bits(0b01001111, 4, 2)
        0
    """
    _check_range(start, width)
    return (byte >> start) & ((1 << width) - 1)


def write_bits(byte: int, value: int, start: int, width: int) -> int:
    """
    Write `value` into `width` bits of a byte at bit `start`.

    All other bits are preserved.

    Raises:
        RangeError: If value does not fit in `width` bits

    Example:
        >>> write_bits(0b11111111, 0b00, 4, 2)
        207
    """
    _check_range(start, width)
    mask = (1 << width) - 1
    if isinstance(value, bool):
        value = int(value)
    if not 0 <= value <= mask:
        raise RangeError(f"Value {value} does not fit in {width} bits (0-{mask})")
    return (byte & ~(mask << start) & 0xFF) | (value << start)


def read_10bit(high_byte: int, low_byte: int, low_bit_offset: int) -> int:
    """
    Combine a high byte and a 2-bit pair into a 10-bit value (0-1023).

    Args:
        high_byte: Byte holding bits 9-2
        low_byte: Shared byte holding bits 1-0 at low_bit_offset
        low_bit_offset: Position of the bit pair (0, 2, 4 or 6)
    """
    if low_bit_offset not in LOW_BIT_OFFSETS:
        raise ValueError(f"Low bit offset must be one of {LOW_BIT_OFFSETS}, got {low_bit_offset}")
    return ((high_byte & 0xFF) << 2) | ((low_byte >> low_bit_offset) & 0b11)


def write_10bit(value: int, low_bit_offset: int) -> SplitBits:
    """
    Split a 10-bit value into its high byte and positioned low bits.

    The low bits share a byte with other fields, so the caller merges them
    using the returned clear mask (see merge_bits).

    Raises:
        RangeError: If value is outside 0-1023
    """
    if low_bit_offset not in LOW_BIT_OFFSETS:
        raise ValueError(f"Low bit offset must be one of {LOW_BIT_OFFSETS}, got {low_bit_offset}")
    if not 0 <= value <= MAX_10BIT:
        raise RangeError(f"Value out of range: {value} (expected 0-{MAX_10BIT})")

    return SplitBits(
        high_byte=(value >> 2) & 0xFF,
        low_bits=(value & 0b11) << low_bit_offset,
        clear_mask=~(0b11 << low_bit_offset) & 0xFF,
    )


def merge_bits(target: int, bits: int, clear_mask: int) -> int:
    """Clear the masked-out bits of target and OR in bits."""
    return (target & clear_mask) | bits


def read_flags(data: bytes, offset: int, length: int) -> tuple:
    """
    Read a packed boolean array, 8 flags per byte, LSB first.

    Flag i lives in byte offset + i // 8, bit i % 8.
    """
    return tuple(bool((data[offset + i // 8] >> (i % 8)) & 1) for i in range(length))


def pack_flags(flags) -> bytes:
    """Pack a sequence of booleans into bytes, 8 per byte, LSB first."""
    flags = list(flags)
    result = bytearray((len(flags) + 7) // 8)
    for i, flag in enumerate(flags):
        if flag:
            result[i // 8] |= 1 << (i % 8)
    return bytes(result)
