#!/usr/bin/env python3
"""
Example: Modify program settings programmatically

Shows how to read, modify, and write program dumps. Parameters are
immutable, so changes are made with dataclasses.replace().

Usage:
    python modify_program.py input.syx output.syx
"""

import sys
from dataclasses import replace

from mnlgconv import ProgramParameters, decode_file, encode_file, safe_encode


def brighten(params: ProgramParameters, amount: int) -> ProgramParameters:
    """Open the filter by `amount`, staying inside 0-1023."""
    cutoff = max(0, min(1023, params.filter.cutoff + amount))
    return replace(params, filter=replace(params.filter, cutoff=cutoff))


def set_tempo(params: ProgramParameters, bpm: float) -> ProgramParameters:
    """Set the sequencer tempo (stored as BPM x10)."""
    return replace(params, sequencer=replace(params.sequencer, bpm=int(round(bpm * 10))))


def main():
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)

    input_file, output_file = sys.argv[1:]

    result = decode_file(input_file)
    if not result.is_valid:
        print(f"Invalid program dump: {result.error}")
        sys.exit(1)

    params = result.parameters

    print("=== Modify Program ===")
    print()

    print("1. Opening the filter by 200...")
    params = brighten(params, 200)

    print("2. Changing tempo to 140 BPM...")
    params = set_tempo(params, 140)

    print("3. Renaming to 'BRIGHT'...")
    params = replace(params, patch_name="BRIGHT")
    print()

    # Check before writing
    check = safe_encode(params)
    if not check.success:
        print(f"Cannot encode: {check.error}")
        sys.exit(1)

    encode_file(params, output_file)

    print("=== Verifying Changes ===")
    verified = decode_file(output_file).parameters
    print(f"Program Name: {verified.patch_name}")
    print(f"Tempo: {verified.sequencer.bpm / 10:.1f} BPM")
    print(f"Cutoff: {verified.filter.cutoff}")


if __name__ == "__main__":
    main()
