"""Tests for bit field helpers."""

import pytest

from mnlgconv.utils.bitfield import (
    LOW_BIT_OFFSETS,
    merge_bits,
    pack_flags,
    read_10bit,
    read_bits,
    read_flags,
    write_10bit,
    write_bits,
)
from mnlgconv.utils.validation import RangeError


class TestBitRange:
    """Test cases for sub-byte reads and writes."""

    def test_read_bits(self):
        assert read_bits(0b01001111, 0, 4) == 0b1111
        assert read_bits(0b01001111, 4, 2) == 0b00
        assert read_bits(0b01001111, 6, 2) == 0b01
        assert read_bits(0xFF, 7, 1) == 1

    def test_write_preserves_other_bits(self):
        assert write_bits(0b11111111, 0b00, 4, 2) == 0b11001111
        assert write_bits(0b00000000, 0b101, 2, 3) == 0b00010100

    def test_roundtrip_every_position(self):
        """Every value of every width at every start position reads back."""
        for width in range(1, 9):
            for start in range(0, 9 - width):
                for value in range(1 << width):
                    byte = write_bits(0, value, start, width)
                    assert read_bits(byte, start, width) == value

    def test_value_too_wide(self):
        """Values are rejected, never truncated."""
        with pytest.raises(RangeError):
            write_bits(0, 4, 0, 2)
        with pytest.raises(RangeError):
            write_bits(0, -1, 0, 2)

    def test_bool_value(self):
        assert write_bits(0, True, 3, 1) == 0b1000

    @pytest.mark.parametrize("start,width", [(0, 0), (0, 9), (7, 2), (-1, 1)])
    def test_invalid_position(self, start, width):
        """Bad start/width is a programming error."""
        with pytest.raises(ValueError):
            read_bits(0, start, width)
        with pytest.raises(ValueError):
            write_bits(0, 0, start, width)


class TestTenBit:
    """Test cases for 10-bit split values."""

    def test_read(self):
        # 489 = 0b0111101001 -> high 0b01111010, low 0b01
        assert read_10bit(0b01111010, 0b01 << 4, 4) == 489

    def test_write(self):
        split = write_10bit(489, 4)

        assert split.high_byte == 0b01111010
        assert split.low_bits == 0b01 << 4
        assert split.clear_mask == 0b11001111

    def test_roundtrip_all_values(self):
        for offset in LOW_BIT_OFFSETS:
            for value in range(1024):
                split = write_10bit(value, offset)
                assert read_10bit(split.high_byte, split.low_bits, offset) == value

    def test_read_ignores_neighbouring_bits(self):
        assert read_10bit(0, 0b11110011, 2) == 0
        assert read_10bit(0, 0b00001100, 2) == 3

    def test_out_of_range(self):
        with pytest.raises(RangeError):
            write_10bit(1024, 0)
        with pytest.raises(RangeError):
            write_10bit(-1, 0)

    def test_invalid_offset(self):
        with pytest.raises(ValueError):
            write_10bit(0, 1)
        with pytest.raises(ValueError):
            read_10bit(0, 0, 8)

    def test_shared_byte_merge(self):
        """Four fields share one low-bit byte without clobbering each other."""
        shared = 0
        for offset, value in zip(LOW_BIT_OFFSETS, (1, 2, 3, 0)):
            split = write_10bit(value, offset)
            shared = merge_bits(shared, split.low_bits, split.clear_mask)

        assert shared == 0b00111001

        # Rewriting one pair leaves the others intact
        split = write_10bit(0, 4)
        assert merge_bits(shared, split.low_bits, split.clear_mask) == 0b00001001


class TestFlags:
    """Test cases for packed boolean arrays."""

    def test_pack_lsb_first(self):
        flags = [True] + [False] * 7 + [False] * 7 + [True]
        assert pack_flags(flags) == bytes([0x01, 0x80])

    def test_read_flags(self):
        flags = read_flags(bytes([0xAA, 0x03, 0xAA, 0x05]), 1, 16)

        assert len(flags) == 16
        assert flags[0] and flags[1] and not flags[2]
        assert flags[9] and not flags[8]

    def test_roundtrip(self):
        flags = [i % 3 == 0 for i in range(16)]
        assert list(read_flags(pack_flags(flags), 0, 16)) == flags
