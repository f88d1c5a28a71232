"""Tests for .syx file access."""

import pytest

from mnlgconv import decode_file, encode, encode_file
from mnlgconv.formats.syx_file import read_messages, read_program_message, write_messages


class TestSyxFile:
    """Test cases for reading and writing .syx files."""

    def test_write_then_read(self, tmp_path, sample_params):
        path = tmp_path / "program.syx"
        encode_file(sample_params, path)

        assert path.read_bytes() == encode(sample_params)

        result = decode_file(path)
        assert result.is_valid
        assert result.parameters == sample_params

    def test_plaintext(self, tmp_path, zero_message):
        path = tmp_path / "program.txt"
        write_messages(path, [zero_message], plaintext=True)

        assert path.read_bytes()[:1] != b"\xf0"
        assert read_messages(path) == [zero_message]

    def test_damaged_payload_preserved(self, tmp_path, zero_message):
        """Binary files reach the validator unfiltered."""
        damaged = bytearray(zero_message)
        damaged[50] = 0x90
        path = tmp_path / "damaged.syx"
        path.write_bytes(bytes(damaged))

        assert read_messages(path) == [bytes(damaged)]

        result = decode_file(path)
        assert not result.is_valid
        assert "offset 50" in result.error

    def test_program_dump_is_preferred(self, tmp_path, zero_message):
        other = bytes([0xF0, 0x7E, 0x7F, 0x06, 0x01, 0xF7])
        path = tmp_path / "mixed.syx"
        path.write_bytes(other + zero_message)

        assert read_program_message(path) == zero_message

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.syx"
        path.write_bytes(b"")

        assert read_program_message(path) is None
        result = decode_file(path)
        assert not result.is_valid
        assert "No SysEx message" in result.error

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_messages(tmp_path / "missing.syx")

    def test_creates_parent_directories(self, tmp_path, zero_message):
        path = tmp_path / "a" / "b" / "program.syx"
        write_messages(path, [zero_message])

        assert path.exists()
