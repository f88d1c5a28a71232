"""Tests for the program parameter model."""

import json
from dataclasses import FrozenInstanceError

import pytest

from mnlgconv.models.program import (
    REQUIRED_SECTIONS,
    MotionSlot,
    ProgramParameters,
    Sequencer,
    Step,
    missing_sections,
)
from mnlgconv.utils.validation import ValidationError


class TestProgramParameters:
    """Test cases for the immutable parameter set."""

    def test_defaults_are_zero(self):
        params = ProgramParameters()

        assert params.patch_name == ""
        assert params.drive == 0
        assert len(params.motion_slots) == 4
        assert len(params.steps) == 16
        assert params == ProgramParameters.zero()

    def test_frozen(self):
        params = ProgramParameters()

        with pytest.raises(FrozenInstanceError):
            params.drive = 10
        with pytest.raises(FrozenInstanceError):
            params.filter.cutoff = 10

    def test_sequences_become_tuples(self):
        seq = Sequencer(step_active=[1, 0] * 8)

        assert isinstance(seq.step_active, tuple)
        assert seq.step_active[:2] == (True, False)

    def test_wrong_flag_count(self):
        with pytest.raises(ValidationError):
            Sequencer(step_active=[True] * 15)
        with pytest.raises(ValidationError):
            MotionSlot(step_enabled=[True] * 17)

    def test_wrong_step_count(self):
        with pytest.raises(ValidationError):
            ProgramParameters(steps=[Step()] * 15)

    def test_wrong_motion_shape(self):
        with pytest.raises(ValidationError):
            Step(motion=[[0, 0, 0]] * 4)

    def test_non_sequence_values(self):
        with pytest.raises(ValidationError):
            Step(motion=5)
        with pytest.raises(ValidationError):
            Step(motion=[5, 5, 5, 5])
        with pytest.raises(ValidationError):
            Sequencer(step_active=1)
        with pytest.raises(ValidationError):
            MotionSlot(step_enabled=None)
        with pytest.raises(ValidationError):
            ProgramParameters(steps=3)

    def test_repr(self, sample_params):
        assert "ACID BASS" in repr(sample_params)


class TestDictConversion:
    """Test cases for to_dict/from_dict."""

    def test_roundtrip(self, sample_params):
        assert ProgramParameters.from_dict(sample_params.to_dict()) == sample_params

    def test_json_compatible(self, sample_params):
        data = json.loads(json.dumps(sample_params.to_dict()))
        assert ProgramParameters.from_dict(data) == sample_params

    def test_shape(self, sample_params):
        data = sample_params.to_dict()

        assert list(data) == list(REQUIRED_SECTIONS)
        assert data["vco2"]["sync_ring"] == 2
        assert data["steps"][0]["motion"][0] == [0, 1, 2, 3]
        assert isinstance(data["sequencer"]["step_active"], list)

    def test_missing_sections(self, sample_params):
        data = sample_params.to_dict()
        del data["lfo"]
        del data["misc"]

        assert missing_sections(data) == ["lfo", "misc"]
        with pytest.raises(ValidationError, match="lfo, misc"):
            ProgramParameters.from_dict(data)

    def test_missing_field(self, sample_params):
        data = sample_params.to_dict()
        del data["steps"][4]["note"]["velocity"]

        with pytest.raises(ValidationError, match=r"steps\[4\]\.note"):
            ProgramParameters.from_dict(data)

    def test_malformed_motion(self, sample_params):
        data = sample_params.to_dict()
        data["steps"][0]["motion"] = 5

        with pytest.raises(ValidationError, match=r"steps\[0\]\.motion"):
            ProgramParameters.from_dict(data)

    def test_malformed_flags(self, sample_params):
        data = sample_params.to_dict()
        data["sequencer"]["step_slide"] = 7

        with pytest.raises(ValidationError, match="step_slide"):
            ProgramParameters.from_dict(data)

    def test_section_not_a_mapping(self, sample_params):
        data = sample_params.to_dict()
        data["filter"] = 5

        with pytest.raises(ValidationError):
            ProgramParameters.from_dict(data)

    def test_missing_sections_of_non_mapping(self):
        assert missing_sections(None) == list(REQUIRED_SECTIONS)
        assert missing_sections(ProgramParameters()) == []
