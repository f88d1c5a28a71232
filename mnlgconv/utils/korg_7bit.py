"""
Korg 7-bit encoding/decoding utilities.

Korg packs 8-bit program data into SysEx so that every transmitted byte
has the high bit (bit 7) clear, as required by the MIDI specification.

Encoding scheme:
- Take 7 bytes of raw 8-bit data
- Collect the high bit of each byte into a leading "carrier" byte
- Clear the high bits in the original bytes
- Result: 8 bytes (1 carrier + 7 data bytes) for every 7 input bytes

The carrier holds the high bit of data byte i at bit (6 - i), so the first
data byte's MSB is bit 6.

Example:
    Input:   [0x80, 0x40, 0x20, 0x10, 0x08, 0x04, 0x02]  (7 bytes)
    Carrier: 0b01000000
    Output:  [0x40, 0x00, 0x40, 0x20, 0x10, 0x08, 0x04, 0x02]  (8 bytes)

A monologue program dump carries 64 groups: 512 wire bytes <-> 448 bytes.
"""

from typing import List, Union

ENCODED_GROUP_SIZE = 8
DECODED_GROUP_SIZE = 7


def unpack_group(group: Union[bytes, List[int]]) -> bytes:
    """
    Decode one 8-byte MIDI group into 7 bytes of 8-bit data.

    Raises:
        ValueError: If the group is not exactly 8 bytes
    """
    if len(group) != ENCODED_GROUP_SIZE:
        raise ValueError(
            f"Invalid MIDI group length: expected {ENCODED_GROUP_SIZE}, got {len(group)}"
        )

    carrier = group[0]
    return bytes(
        (((carrier >> (6 - j)) & 0x01) << 7) | (group[j + 1] & 0x7F)
        for j in range(DECODED_GROUP_SIZE)
    )


def pack_group(group: Union[bytes, List[int]]) -> bytes:
    """
    Encode 7 bytes of 8-bit data into one 8-byte MIDI group.

    Raises:
        ValueError: If the group is not exactly 7 bytes
    """
    if len(group) != DECODED_GROUP_SIZE:
        raise ValueError(
            f"Invalid data group length: expected {DECODED_GROUP_SIZE}, got {len(group)}"
        )

    carrier = 0
    for j, byte in enumerate(group):
        carrier |= ((byte >> 7) & 0x01) << (6 - j)

    return bytes([carrier]) + bytes(byte & 0x7F for byte in group)


def decode_7bit(encoded_data: Union[bytes, List[int]]) -> bytes:
    """
    Decode Korg 7-bit packed data to 8-bit raw data.

    For every 8 bytes of encoded data, produces 7 bytes of decoded data.

    Raises:
        ValueError: If the length is not a multiple of 8

    Example:
        >>> decode_7bit(bytes([0x40, 0x00, 0x40, 0x20, 0x10, 0x08, 0x04, 0x02]))
        b'\\x80@ \\x10\\x08\\x04\\x02'
    """
    if isinstance(encoded_data, list):
        encoded_data = bytes(encoded_data)

    if len(encoded_data) % ENCODED_GROUP_SIZE:
        raise ValueError(
            f"Encoded length {len(encoded_data)} is not a multiple of {ENCODED_GROUP_SIZE}"
        )

    result = bytearray()
    for i in range(0, len(encoded_data), ENCODED_GROUP_SIZE):
        result += unpack_group(encoded_data[i : i + ENCODED_GROUP_SIZE])

    return bytes(result)


def encode_7bit(raw_data: Union[bytes, List[int]]) -> bytes:
    """
    Encode 8-bit raw data to Korg 7-bit packed format.

    For every 7 bytes of raw data, produces 8 bytes of encoded data.

    Raises:
        ValueError: If the length is not a multiple of 7
    """
    if isinstance(raw_data, list):
        raw_data = bytes(raw_data)

    if len(raw_data) % DECODED_GROUP_SIZE:
        raise ValueError(
            f"Raw length {len(raw_data)} is not a multiple of {DECODED_GROUP_SIZE}"
        )

    result = bytearray()
    for i in range(0, len(raw_data), DECODED_GROUP_SIZE):
        result += pack_group(raw_data[i : i + DECODED_GROUP_SIZE])

    return bytes(result)


# Names used by the program codec
unpack_all = decode_7bit
pack_all = encode_7bit
