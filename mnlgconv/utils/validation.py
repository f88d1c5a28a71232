"""
Error types and value validation for monologue program data.
"""

from typing import List, Optional


class MnlgError(Exception):
    """Base class for all mnlgconv errors."""

    pass


class ValidationError(MnlgError):
    """Raised when program data validation fails."""

    pass


class RangeError(ValidationError, ValueError):
    """Raised when a value does not fit the field it is written to."""

    pass


class EncodeError(ValidationError):
    """Raised when a parameter set cannot be encoded."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = list(missing or [])


class DecodeError(ValidationError):
    """Raised by the strict decode path when a message cannot be decoded."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors or [message])


def validate_range(value: int, minimum: int, maximum: int, name: str = "value") -> int:
    """
    Validate that an integer lies within an inclusive range.

    Args:
        value: The value to validate
        minimum: Lowest allowed value
        maximum: Highest allowed value
        name: Name of the value for error messages

    Returns:
        The value, unchanged

    Raises:
        RangeError: If value is not an int or is out of range
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise RangeError(f"{name} must be an integer, got {value!r}")
    if not minimum <= value <= maximum:
        raise RangeError(f"{name} must be {minimum}-{maximum}, got {value}")
    return value


def validate_patch_name(name: str, max_length: int = 12) -> bytes:
    """
    Validate and serialize a program name.

    Args:
        name: Program name
        max_length: Size of the fixed name region (12 on the monologue)

    Returns:
        ASCII bytes truncated or null padded to max_length

    Raises:
        ValidationError: If name contains characters outside printable ASCII
    """
    if not isinstance(name, str):
        raise ValidationError(f"Program name must be a string, got {type(name).__name__}")

    for char in name:
        if not 0x20 <= ord(char) <= 0x7E:
            raise ValidationError(f"Invalid character {char!r} in program name")

    return name[:max_length].encode("ascii").ljust(max_length, b"\x00")

