#!/usr/bin/env python3
"""
Example: Basic program analysis

Shows how to decode a program dump and read its parameters.

Usage:
    python basic_analysis.py program.syx
"""

import sys

from mnlgconv import decode_file
from mnlgconv.models.codes import MOTION_PARAMETERS, SLIDER_ASSIGN


def main():
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)

    result = decode_file(sys.argv[1])

    if not result.is_valid:
        print(f"Invalid program dump: {result.error}")
        sys.exit(1)

    params = result.parameters

    # Basic info
    print(f"Program Name: {params.patch_name}")
    print(f"Tempo: {params.sequencer.bpm / 10:.1f} BPM")
    print(f"Slider: {SLIDER_ASSIGN.lookup(params.misc.slider_assign)}")
    print()

    # Panel
    print("Panel:")
    print(f"  VCO 1: wave={params.vco1.wave} shape={params.vco1.shape} level={params.vco1.level}")
    print(f"  VCO 2: wave={params.vco2.wave} pitch={params.vco2.pitch} level={params.vco2.level}")
    print(f"  Filter: cutoff={params.filter.cutoff} resonance={params.filter.resonance}")
    print(f"  EG: attack={params.envelope.attack} decay={params.envelope.decay} "
          f"int={params.envelope.intensity:+d}")
    print(f"  LFO: rate={params.lfo.rate} int={params.lfo.intensity:+d}")
    print(f"  Drive: {params.drive}")
    print()

    # Motion slots
    print("Motion Slots:")
    for i, slot in enumerate(params.motion_slots):
        status = "On" if slot.active else "Off"
        print(f"  {i + 1}: {MOTION_PARAMETERS.lookup(slot.parameter)} [{status}]")
    print()

    # Steps
    print("Steps:")
    for i, step in enumerate(params.steps):
        if params.sequencer.step_active[i]:
            note = step.note
            print(f"  {i + 1:2d}: key={note.key} vel={note.velocity} gate={note.gate_time}")


if __name__ == "__main__":
    main()
