"""
.syx file access.

Binary .syx files are read as raw bytes and split on F0/F7 so that a
damaged dump reaches the frame validator unchanged. Hex text files and
all writing go through mido.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import mido

from mnlgconv.formats.sysex_parser import SysExParser

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _is_binary(data: bytes) -> bool:
    return data.lstrip()[:1] == bytes([SysExParser.SYSEX_START])


def read_messages(filepath: PathLike) -> List[bytes]:
    """
    Read every SysEx message in a .syx file.

    Args:
        filepath: Binary or hex text .syx file

    Returns:
        Complete messages including F0 and F7

    Raises:
        FileNotFoundError: If the file does not exist
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    with open(filepath, "rb") as f:
        data = f.read()

    if not data.strip():
        return []

    if _is_binary(data):
        messages = SysExParser().split_messages(data)
    else:
        messages = [bytes(msg.bytes()) for msg in mido.read_syx_file(str(filepath))]

    logger.debug("Read %d SysEx message(s) from %s", len(messages), filepath)
    return messages


def read_program_message(filepath: PathLike) -> Optional[bytes]:
    """
    Return the first program dump in a file.

    Falls back to the first SysEx message of any kind, so that a wrong
    header is reported by validation rather than hidden. Returns None for
    a file without SysEx data.
    """
    messages = read_messages(filepath)
    if not messages:
        return None

    parser = SysExParser()
    for message in messages:
        if parser.is_program_dump(message):
            return message
    return messages[0]


def write_messages(filepath: PathLike, messages: Iterable[bytes], plaintext: bool = False) -> None:
    """
    Write SysEx messages to a .syx file.

    Args:
        filepath: Output path; parent directories are created
        messages: Complete messages including F0 and F7
        plaintext: Write hex text instead of binary
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    midi_messages = [mido.Message("sysex", data=bytes(message[1:-1])) for message in messages]
    mido.write_syx_file(str(filepath), midi_messages, plaintext=plaintext)

    logger.debug("Wrote %d SysEx message(s) to %s", len(midi_messages), filepath)
