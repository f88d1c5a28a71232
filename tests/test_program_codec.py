"""Tests for program decode/encode."""

from dataclasses import replace

import pytest

from mnlgconv import (
    DecodeError,
    EncodeError,
    ProgramParameters,
    RangeError,
    ValidationError,
    decode,
    decode_strict,
    encode,
    safe_encode,
)
from mnlgconv.formats.reader import ProgramReader, decode_name
from mnlgconv.formats.writer import ProgramWriter
from mnlgconv.models.program import Envelope, Filter, Lfo, Misc, Oscillator, Sequencer, Vco2
from mnlgconv.utils.korg_7bit import decode_7bit


def _body(message: bytes) -> bytes:
    return decode_7bit(message[7:519])


class TestDecode:
    """Test cases for decoding program dumps."""

    def test_zero_program(self, zero_message):
        """An all-zero body decodes to zeros; bipolar raw 0 reads as -512."""
        result = decode(zero_message)

        assert result.is_valid
        assert result.error is None
        assert result.parameters == replace(
            ProgramParameters(), envelope=Envelope(intensity=-512), lfo=Lfo(intensity=-512)
        )

        params = result.parameters
        assert params.drive == 0
        assert params.filter.cutoff == 0
        assert params.sequencer.step_active == (False,) * 16
        assert all(slot.step_enabled == (False,) * 16 for slot in params.motion_slots)
        assert len(params.motion_slots) == 4
        assert not any(slot.active for slot in params.motion_slots)

    def test_patch_name_scenario(self, zero_body, make_message):
        """Only 'TEST' at offset 4: trimmed name, drive 0."""
        zero_body[4:8] = b"TEST"

        result = decode(make_message(zero_body))

        assert result.parameters.patch_name == "TEST"
        assert result.parameters.drive == 0

    def test_patch_name_without_marker(self, make_message):
        """A body without marker still decodes, flagged invalid."""
        body = bytearray(448)
        body[4:8] = b"TEST"

        result = decode(make_message(body))

        assert not result.is_valid
        assert "marker" in result.error.lower()
        assert result.parameters.patch_name == "TEST"
        assert result.parameters.drive == 0

    @pytest.mark.parametrize("cut", [1, -1])
    def test_wrong_length(self, zero_message, cut):
        if cut > 0:
            message = zero_message[:-2] + zero_message[-1:]
        else:
            message = zero_message[:-1] + b"\x00\xF7"

        result = decode(message)

        assert not result.is_valid
        assert "520" in result.error
        assert str(len(message)) in result.error
        assert result.parameters == ProgramParameters.zero()

    def test_corrupted_header(self, zero_message):
        message = bytearray(zero_message)
        message[2] = 0x31

        result = decode(message)

        assert not result.is_valid
        assert "offset 2" in result.error
        assert result.parameters == ProgramParameters.zero()

    def test_decode_never_raises(self):
        for message in (b"", b"\xf0", bytes(range(256)) * 3, [0xF0] * 520):
            assert not decode(message).is_valid

    def test_ten_bit_fields(self, zero_body, make_message):
        # cutoff 489: high 122 at 22, low 0b01 at byte 33 bits 4-5
        zero_body[22] = 122
        zero_body[33] = 0b01 << 4
        # drive 1023
        zero_body[29] = 0xFF
        zero_body[35] = 0b11 << 6

        params = decode(make_message(zero_body)).parameters

        assert params.filter.cutoff == 489
        assert params.filter.resonance == 0
        assert params.drive == 1023

    def test_bipolar_fields(self, zero_body, make_message):
        # EG int raw 0 -> -512 needs nothing; LFO int raw 1023 -> 511
        zero_body[28] = 0xFF
        zero_body[35] = 0b11 << 4

        params = decode(make_message(zero_body)).parameters

        assert params.envelope.intensity == -512
        assert params.lfo.intensity == 511

    def test_switches(self, zero_body, make_message):
        zero_body[30] = (2 << 6) | (3 << 4)
        zero_body[36] = (1 << 6) | (2 << 4) | (1 << 2) | 2

        params = decode(make_message(zero_body)).parameters

        assert params.vco1.wave == 2
        assert params.vco1.octave == 3
        assert params.lfo.wave == 2
        assert params.lfo.mode == 1
        assert params.lfo.target == 2
        assert params.misc.seq_trig == 1

    def test_sequencer_fields(self, zero_body, make_message):
        zero_body[52:54] = (1200).to_bytes(2, "little")
        zero_body[56] = 0x100 - 30
        zero_body[64] = 0b00000101
        zero_body[65] = 0b10000000

        seq = decode(make_message(zero_body)).parameters.sequencer

        assert seq.bpm == 1200
        assert seq.swing == -30
        assert seq.step_active[0] and seq.step_active[2] and seq.step_active[15]
        assert sum(seq.step_active) == 3

    def test_slide_time(self, zero_body, make_message):
        zero_body[58] = 40

        params = decode(make_message(zero_body)).parameters

        assert params.misc.slide_time == 40
        assert params.sequencer.default_gate_time == 0

    def test_step_event(self, zero_body, make_message):
        base = 96 + 3 * 22
        zero_body[base] = 60
        zero_body[base + 1] = 100
        zero_body[base + 2] = 0x80 | 36
        zero_body[base + 6 + 4 * 2 + 1] = 0xAB

        step = decode(make_message(zero_body)).parameters.steps[3]

        assert step.note.key == 60
        assert step.note.velocity == 100
        assert step.note.gate_time == 36
        assert step.note.trigger is True
        assert step.motion[2][1] == 0xAB

    def test_non_printable_name_bytes(self):
        assert decode_name(b"AB\x01C\x00\x00") == "AB?C"
        assert decode_name(b"\x00" * 12) == ""

    def test_decode_strict(self, zero_message):
        assert decode_strict(zero_message) == decode(zero_message).parameters

        with pytest.raises(DecodeError) as exc_info:
            decode_strict(zero_message[:10])
        assert exc_info.value.errors


class TestEncode:
    """Test cases for encoding program dumps."""

    def test_zero_body_roundtrip(self, zero_message):
        assert encode(decode(zero_message).parameters) == zero_message

    def test_zero_program_centres_bipolar_fields(self):
        body = _body(encode(ProgramParameters()))

        assert body[26] == 0x80
        assert body[28] == 0x80
        assert body[4:] == bytes(22) + b"\x80\x00\x80" + bytes(419)

    def test_message_frame(self, sample_params):
        message = encode(sample_params)

        assert len(message) == 520
        assert message[:7] == bytes([0xF0, 0x42, 0x30, 0x00, 0x01, 0x44, 0x40])
        assert message[-1] == 0xF7
        assert all(b <= 0x7F for b in message[7:519])
        assert _body(message)[:4] == b"PROG"

    def test_roundtrip(self, sample_params):
        """Every representable value survives encode then decode."""
        result = decode(encode(sample_params))

        assert result.is_valid
        assert result.parameters == sample_params

    def test_roundtrip_from_dict(self, sample_params):
        """A plain mapping encodes exactly like the dataclass."""
        assert encode(sample_params.to_dict()) == encode(sample_params)

    def test_bipolar_extremes(self):
        """Raw 0 and 1023 map to -512 and 511 and back."""
        for eg_int, lfo_int in ((-512, 511), (511, -512), (0, -1)):
            params = ProgramParameters(
                envelope=Envelope(intensity=eg_int), lfo=Lfo(intensity=lfo_int)
            )
            decoded = decode(encode(params)).parameters

            assert decoded.envelope.intensity == eg_int
            assert decoded.lfo.intensity == lfo_int

    def test_bipolar_storage(self):
        body = _body(encode(ProgramParameters(envelope=Envelope(intensity=511))))

        assert body[26] == 0xFF
        assert (body[35] & 0b11) == 0b11

    def test_shared_low_bit_byte(self):
        """Fields sharing byte 33 do not clobber each other."""
        params = ProgramParameters(
            vco1=Oscillator(level=1),
            vco2=Vco2(level=2),
            filter=Filter(cutoff=3, resonance=1022),
        )

        body = _body(encode(params))

        assert body[33] == 0b10111001
        assert body[23] == 1022 >> 2

    def test_patch_name_truncated_and_padded(self):
        long_name = encode(ProgramParameters(patch_name="THIRTEEN CHAR"))
        short_name = encode(ProgramParameters(patch_name="AB"))

        assert decode(long_name).parameters.patch_name == "THIRTEEN CHA"
        assert _body(short_name)[4:16] == b"AB" + bytes(10)

    def test_patch_name_must_be_ascii(self):
        with pytest.raises(ValidationError):
            encode(ProgramParameters(patch_name="Café"))

    def test_out_of_range_rejected(self):
        """Out-of-domain values are rejected, never masked."""
        cases = [
            ProgramParameters(drive=1024),
            ProgramParameters(vco1=Oscillator(wave=3)),
            ProgramParameters(envelope=Envelope(intensity=512)),
            ProgramParameters(misc=Misc(bend_range_plus=13)),
            ProgramParameters(misc=Misc(slide_time=73)),
            ProgramParameters(sequencer=Sequencer(swing=76)),
            ProgramParameters(sequencer=Sequencer(bpm=3001)),
        ]
        for params in cases:
            with pytest.raises(RangeError):
                encode(params)

    def test_range_error_names_field(self):
        with pytest.raises(RangeError, match="vco1.wave"):
            encode(ProgramParameters(vco1=Oscillator(wave=3)))

    def test_missing_sections_all_named(self, sample_params):
        data = sample_params.to_dict()
        del data["filter"]
        del data["steps"]

        with pytest.raises(EncodeError) as exc_info:
            encode(data)

        assert exc_info.value.missing == ["filter", "steps"]
        assert "filter" in str(exc_info.value) and "steps" in str(exc_info.value)

    def test_missing_field_named(self, sample_params):
        data = sample_params.to_dict()
        del data["lfo"]["rate"]

        with pytest.raises(EncodeError, match="lfo.rate"):
            encode(data)

    def test_extra_motion_slots_rejected(self, sample_params):
        """Mappings must carry exactly as many slots as the body holds."""
        data = sample_params.to_dict()
        data["motion_slots"].append(data["motion_slots"][0])

        with pytest.raises(EncodeError, match="motion_slots must have 4 entries, got 5"):
            encode(data)
        assert not safe_encode(data).success

    def test_step_count_checked(self, sample_params):
        data = sample_params.to_dict()
        data["steps"] = data["steps"][:15]

        with pytest.raises(EncodeError, match="steps must have 16 entries"):
            encode(data)

    def test_motion_shape_checked(self, sample_params):
        data = sample_params.to_dict()
        data["steps"][2]["motion"][1].append(7)

        with pytest.raises(EncodeError, match=r"steps\[2\]\.motion\[1\]"):
            encode(data)

    def test_not_a_mapping(self):
        with pytest.raises(EncodeError):
            encode(["not", "a", "program"])

    def test_writer_is_reusable(self, sample_params):
        writer = ProgramWriter()
        first = writer.to_bytes(sample_params)

        assert writer.to_bytes(ProgramParameters()) != first
        assert writer.to_bytes(sample_params) == first


class TestSafeEncode:
    """Test cases for the non-raising encode."""

    def test_success(self, sample_params):
        result = safe_encode(sample_params)

        assert result.success
        assert result.data == encode(sample_params)
        assert result.error is None

    def test_validation_failure(self):
        result = safe_encode({"patch_name": "X"})

        assert not result.success
        assert result.data is None
        assert "Missing required sections" in result.error

    def test_range_failure(self):
        result = safe_encode(ProgramParameters(drive=5000))

        assert not result.success
        assert "drive" in result.error

    def test_unexpected_failure(self, sample_params):
        """Errors outside the library hierarchy are caught too."""

        class Exploding(dict):
            def __getitem__(self, key):
                raise RuntimeError("boom")

        result = safe_encode(Exploding(sample_params.to_dict()))

        assert not result.success
        assert "boom" in result.error


class TestReader:
    """Test cases for ProgramReader body access."""

    def test_parse_body_wrong_size(self):
        with pytest.raises(ValueError):
            ProgramReader().parse_body(bytes(100))

    def test_decode_marker_body(self, sample_params):
        body = bytearray(_body(encode(sample_params)))
        body[0] = 0

        params = ProgramReader().parse_body(bytes(body))

        assert params == sample_params


def test_replace_keeps_immutability(sample_params):
    renamed = replace(sample_params, patch_name="OTHER")

    assert renamed.patch_name == "OTHER"
    assert sample_params.patch_name == "ACID BASS"
