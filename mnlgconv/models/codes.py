"""
Code tables for enumerated program parameters.

Slider assignment and motion slot targets are stored as parameter ids
rather than small contiguous enumerations. Each table maps id <-> name in
both directions. Ids the table does not name are returned as an explicit
unrecognized entry so that they survive a decode/encode round trip.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterator

_UNRECOGNIZED = re.compile(r"^UNRECOGNIZED \((\d+)\)$")


@dataclass(frozen=True)
class Code:
    """A parameter id together with its name."""

    value: int
    name: str
    recognized: bool = True

    def __str__(self) -> str:
        return self.name


class CodeTable:
    """
    Bidirectional id <-> name table.

    Example:
        >>> SLIDER_ASSIGN.lookup(23).name
        'CUTOFF'
        >>> SLIDER_ASSIGN.lookup(99).recognized
        False
        >>> SLIDER_ASSIGN.code_for("CUTOFF")
        23
    """

    def __init__(self, title: str, names: Dict[int, str]):
        self.title = title
        self._by_code: Dict[int, str] = dict(names)
        self._by_name: Dict[str, int] = {name: code for code, name in names.items()}
        if len(self._by_name) != len(self._by_code):
            raise ValueError(f"Duplicate names in {title} table")

    def lookup(self, code: int) -> Code:
        """Return the entry for a code, or an unrecognized entry."""
        name = self._by_code.get(code)
        if name is None:
            return Code(code, f"UNRECOGNIZED ({code})", recognized=False)
        return Code(code, name)

    def code_for(self, name: str) -> int:
        """
        Return the code for a name.

        Accepts the "UNRECOGNIZED (n)" form produced by lookup().

        Raises:
            KeyError: If the name is unknown
        """
        if name in self._by_name:
            return self._by_name[name]
        match = _UNRECOGNIZED.match(name)
        if match:
            return int(match.group(1))
        raise KeyError(f"Unknown {self.title}: {name!r}")

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    def __iter__(self) -> Iterator[Code]:
        for code in sorted(self._by_code):
            yield Code(code, self._by_code[code])

    def __len__(self) -> int:
        return len(self._by_code)

    def __repr__(self) -> str:
        return f"CodeTable({self.title!r}, {len(self)} codes)"


SLIDER_ASSIGN = CodeTable(
    "slider assign",
    {
        13: "VCO 1 PITCH",
        14: "VCO 1 SHAPE",
        17: "VCO 2 PITCH",
        18: "VCO 2 SHAPE",
        21: "VCO 1 LEVEL",
        22: "VCO 2 LEVEL",
        23: "CUTOFF",
        24: "RESONANCE",
        26: "ATTACK",
        27: "DECAY",
        28: "EG INT",
        31: "LFO RATE",
        32: "LFO INT",
        40: "PORTAMENT",
        56: "PITCH BEND",
        57: "GATE TIME",
    },
)

MOTION_PARAMETERS = CodeTable(
    "motion parameter",
    {
        0: "NONE",
        13: "VCO 1 PITCH",
        14: "VCO 1 SHAPE",
        15: "VCO 1 OCTAVE",
        16: "VCO 1 WAVE",
        17: "VCO 2 PITCH",
        18: "VCO 2 SHAPE",
        19: "VCO 2 OCTAVE",
        20: "VCO 2 WAVE",
        21: "VCO 1 LEVEL",
        22: "VCO 2 LEVEL",
        23: "CUTOFF",
        24: "RESONANCE",
        25: "SYNC/RING",
        26: "ATTACK",
        27: "DECAY",
        28: "EG INT",
        29: "EG TYPE",
        30: "EG TARGET",
        31: "LFO RATE",
        32: "LFO INT",
        33: "LFO TARGET",
        34: "LFO TYPE",
        35: "LFO MODE",
        37: "DRIVE",
        40: "PORTAMENT",
        56: "PITCH BEND",
        57: "GATE TIME",
    },
)
