"""Test configuration and fixtures."""

import pytest

from mnlgconv.models.program import (
    Envelope,
    Filter,
    Lfo,
    Misc,
    MotionSlot,
    NoteEvent,
    Oscillator,
    ProgramParameters,
    Sequencer,
    Step,
    Vco2,
)
from mnlgconv.utils.korg_7bit import encode_7bit

HEADER = bytes([0xF0, 0x42, 0x30, 0x00, 0x01, 0x44, 0x40])
FOOTER = bytes([0xF7])


def wrap_body(body) -> bytes:
    """Build a complete 520-byte message around a 448-byte body."""
    return HEADER + encode_7bit(bytes(body)) + FOOTER


@pytest.fixture
def make_message():
    """Return a function wrapping a body into a program dump."""
    return wrap_body


@pytest.fixture
def zero_body():
    """Return a 448-byte body that is all zero except the 'PROG' marker."""
    body = bytearray(448)
    body[0:4] = b"PROG"
    return body


@pytest.fixture
def zero_message(zero_body):
    """Return a well-formed dump of the all-zero program."""
    return wrap_body(zero_body)


@pytest.fixture
def sample_params():
    """Return a program with a distinct value in every section."""
    steps = []
    for i in range(16):
        steps.append(
            Step(
                note=NoteEvent(key=48 + i, velocity=100 - i, gate_time=i * 4, trigger=i % 2 == 0),
                motion=[[(i * 16 + slot * 4 + point) & 0xFF for point in range(4)] for slot in range(4)],
            )
        )

    return ProgramParameters(
        patch_name="ACID BASS",
        drive=777,
        vco1=Oscillator(wave=2, pitch=512, shape=1023, level=1000, octave=1),
        vco2=Vco2(wave=1, pitch=301, shape=3, level=498, octave=3, sync_ring=2),
        filter=Filter(cutoff=489, resonance=850),
        envelope=Envelope(type=1, attack=5, decay=702, intensity=-300, target=2),
        lfo=Lfo(wave=0, mode=2, rate=613, intensity=511, target=1),
        misc=Misc(
            portamento_time=64,
            portamento_mode=1,
            slide_time=40,
            slider_assign=23,
            bend_range_plus=2,
            bend_range_minus=12,
            lfo_bpm_sync=1,
            cutoff_velocity=3,
            cutoff_key_track=2,
            keyboard_octave=4,
            seq_trig=1,
            amp_velocity=127,
            program_level=102,
            micro_tuning=5,
            scale_key=12,
            program_tuning=50,
        ),
        sequencer=Sequencer(
            bpm=1205,
            step_length=16,
            step_resolution=2,
            swing=-40,
            default_gate_time=72,
            step_active=[i % 4 == 0 for i in range(16)],
            step_motion=[i >= 8 for i in range(16)],
            step_slide=[i == 15 for i in range(16)],
        ),
        motion_slots=[
            MotionSlot(active=True, smooth=False, parameter=23, step_enabled=[True] * 16),
            MotionSlot(active=False, smooth=True, parameter=37, step_enabled=[i < 4 for i in range(16)]),
            MotionSlot(active=True, smooth=True, parameter=99, step_enabled=[False] * 16),
            MotionSlot(),
        ],
        steps=steps,
    )
