"""Tests for parameter id code tables."""

import pytest

from mnlgconv.models.codes import MOTION_PARAMETERS, SLIDER_ASSIGN, Code, CodeTable


class TestCodeTable:
    """Test cases for bidirectional lookup."""

    def test_lookup_known(self):
        assert SLIDER_ASSIGN.lookup(23) == Code(23, "CUTOFF")
        assert MOTION_PARAMETERS.lookup(0).name == "NONE"

    def test_lookup_unknown_is_explicit(self):
        """Unknown codes are kept as a distinct unrecognized entry."""
        code = SLIDER_ASSIGN.lookup(99)

        assert not code.recognized
        assert code.value == 99
        assert str(code) == "UNRECOGNIZED (99)"

    def test_code_for(self):
        assert SLIDER_ASSIGN.code_for("CUTOFF") == 23
        assert MOTION_PARAMETERS.code_for("DRIVE") == 37

    def test_unrecognized_name_roundtrip(self):
        name = MOTION_PARAMETERS.lookup(120).name
        assert MOTION_PARAMETERS.code_for(name) == 120

    def test_every_entry_roundtrips(self):
        for table in (SLIDER_ASSIGN, MOTION_PARAMETERS):
            for code in table:
                assert table.code_for(code.name) == code.value
                assert table.lookup(code.value) == code

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            SLIDER_ASSIGN.code_for("FLANGER")

    def test_contains_and_len(self):
        assert 23 in SLIDER_ASSIGN
        assert 0 not in SLIDER_ASSIGN
        assert len(SLIDER_ASSIGN) == 16

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError):
            CodeTable("broken", {1: "A", 2: "A"})
