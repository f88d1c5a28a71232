"""
Program parameter model - the decoded content of a monologue program.

A ProgramParameters value is immutable: every section is a frozen
dataclass and every repeated structure is a tuple. Leaves are plain ints,
bools or (for the name) a str. All defaults are zero, so
ProgramParameters() is the all-zero program.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Mapping, Tuple

from mnlgconv.utils.validation import ValidationError

NUM_STEPS = 16
NUM_MOTION_SLOTS = 4
MOTION_POINTS_PER_STEP = 4

REQUIRED_SECTIONS = (
    "patch_name",
    "drive",
    "vco1",
    "vco2",
    "filter",
    "envelope",
    "lfo",
    "misc",
    "sequencer",
    "motion_slots",
    "steps",
)


def _no_flags() -> Tuple[bool, ...]:
    return (False,) * NUM_STEPS


def _sequence(value: Any, where: str) -> Tuple[Any, ...]:
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{where} must be a sequence, got {type(value).__name__}")
    return tuple(value)


def _freeze_flags(obj: Any, name: str, length: int = NUM_STEPS) -> None:
    """Normalize a flag sequence attribute to a tuple of bools."""
    where = f"{type(obj).__name__}.{name}"
    value = tuple(bool(flag) for flag in _sequence(getattr(obj, name), where))
    if len(value) != length:
        raise ValidationError(
            f"{type(obj).__name__}.{name} must have {length} entries, got {len(value)}"
        )
    object.__setattr__(obj, name, value)


def _freeze_items(obj: Any, name: str, length: int) -> None:
    value = _sequence(getattr(obj, name), f"{type(obj).__name__}.{name}")
    if len(value) != length:
        raise ValidationError(
            f"{type(obj).__name__}.{name} must have {length} entries, got {len(value)}"
        )
    object.__setattr__(obj, name, value)


def _require(data: Any, keys: List[str], where: str) -> None:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{where} must be a mapping, got {type(data).__name__}")
    missing = [key for key in keys if key not in data]
    if missing:
        raise ValidationError(f"{where} is missing fields: {', '.join(missing)}")


def _from_flat(cls, data: Any, where: str):
    """Build a dataclass whose fields are all scalars from a mapping."""
    names = [f.name for f in fields(cls)]
    _require(data, names, where)
    return cls(**{name: data[name] for name in names})


def _listify(value: Any) -> Any:
    """Turn the tuples produced by asdict() into lists, recursively."""
    if isinstance(value, dict):
        return {key: _listify(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_listify(item) for item in value]
    return value


@dataclass(frozen=True)
class Oscillator:
    """VCO 1 settings. Pitch, shape and level are 0-1023."""

    wave: int = 0  # 0-2: SQR, TRI, SAW
    pitch: int = 0
    shape: int = 0
    level: int = 0
    octave: int = 0  # 0-3: 16', 8', 4', 2'


@dataclass(frozen=True)
class Vco2(Oscillator):
    """VCO 2 settings, which add the sync/ring switch."""

    sync_ring: int = 0  # 0-2: RING, OFF, SYNC


@dataclass(frozen=True)
class Filter:
    cutoff: int = 0
    resonance: int = 0


@dataclass(frozen=True)
class Envelope:
    """EG settings. Intensity is bipolar (-512 to 511)."""

    type: int = 0  # 0-2: GATE, A/G/D, A/D
    attack: int = 0
    decay: int = 0
    intensity: int = 0
    target: int = 0  # 0-2: CUTOFF, PITCH 2, PITCH


@dataclass(frozen=True)
class Lfo:
    """LFO settings. Intensity is bipolar (-512 to 511)."""

    wave: int = 0  # 0-2: SQR, TRI, SAW
    mode: int = 0  # 0-2: 1-SHOT, SLOW, FAST
    rate: int = 0
    intensity: int = 0
    target: int = 0  # 0-2: CUTOFF, SHAPE, PITCH


@dataclass(frozen=True)
class Misc:
    """Program settings outside the main panel sections."""

    portamento_time: int = 0  # 0 = off, 1-128
    portamento_mode: int = 0  # 0-1: AUTO, ON
    slide_time: int = 0  # 0-72, sequencer slide
    slider_assign: int = 0  # Parameter id, see models.codes.SLIDER_ASSIGN
    bend_range_plus: int = 0
    bend_range_minus: int = 0
    lfo_bpm_sync: int = 0
    cutoff_velocity: int = 0  # 0-3: 0%, 33%, 66%, 100%
    cutoff_key_track: int = 0  # 0-2: 0%, 50%, 100%
    keyboard_octave: int = 0  # 0-4: -2 to +2
    seq_trig: int = 0
    amp_velocity: int = 0
    program_level: int = 0
    micro_tuning: int = 0
    scale_key: int = 0  # 0-24: -12 to +12
    program_tuning: int = 0  # 0-100: -50 to +50 cent


@dataclass(frozen=True)
class Sequencer:
    """
    Sequencer settings and per-step flags.

    Attributes:
        bpm: Tempo x10 (e.g. 1200 = 120.0 BPM)
        step_length: Number of steps played (1-16)
        step_resolution: 0-4: 1/16, 1/8, 1/4, 1/2, 1/1
        swing: -75 to +75
        default_gate_time: 0-72
        step_active: 16 step on/off flags
        step_motion: 16 step motion on/off flags
        step_slide: 16 step slide on/off flags
    """

    bpm: int = 0
    step_length: int = 0
    step_resolution: int = 0
    swing: int = 0
    default_gate_time: int = 0
    step_active: Tuple[bool, ...] = field(default_factory=_no_flags)
    step_motion: Tuple[bool, ...] = field(default_factory=_no_flags)
    step_slide: Tuple[bool, ...] = field(default_factory=_no_flags)

    def __post_init__(self):
        for name in ("step_active", "step_motion", "step_slide"):
            _freeze_flags(self, name)

    @classmethod
    def from_dict(cls, data: Mapping) -> "Sequencer":
        return _from_flat(cls, data, "sequencer")


@dataclass(frozen=True)
class MotionSlot:
    """One of the four motion sequence slots."""

    active: bool = False
    smooth: bool = False
    parameter: int = 0  # Parameter id, see models.codes.MOTION_PARAMETERS
    step_enabled: Tuple[bool, ...] = field(default_factory=_no_flags)

    def __post_init__(self):
        object.__setattr__(self, "active", bool(self.active))
        object.__setattr__(self, "smooth", bool(self.smooth))
        _freeze_flags(self, "step_enabled")


@dataclass(frozen=True)
class NoteEvent:
    key: int = 0
    velocity: int = 0
    gate_time: int = 0  # 0-72, 73 = TIE
    trigger: bool = False

    def __post_init__(self):
        object.__setattr__(self, "trigger", bool(self.trigger))


def _no_motion() -> Tuple[Tuple[int, ...], ...]:
    return tuple((0,) * MOTION_POINTS_PER_STEP for _ in range(NUM_MOTION_SLOTS))


@dataclass(frozen=True)
class Step:
    """
    A sequencer step event.

    `motion[slot][point]` holds the motion data for one of the four slots,
    four data points per step.
    """

    note: NoteEvent = field(default_factory=NoteEvent)
    motion: Tuple[Tuple[int, ...], ...] = field(default_factory=_no_motion)

    def __post_init__(self):
        shape_error = ValidationError(
            f"Step.motion must be {NUM_MOTION_SLOTS}x{MOTION_POINTS_PER_STEP} data points"
        )
        if not isinstance(self.motion, (list, tuple)) or not all(
            isinstance(points, (list, tuple)) for points in self.motion
        ):
            raise shape_error
        motion = tuple(tuple(points) for points in self.motion)
        if len(motion) != NUM_MOTION_SLOTS or any(
            len(points) != MOTION_POINTS_PER_STEP for points in motion
        ):
            raise shape_error
        object.__setattr__(self, "motion", motion)

    @classmethod
    def from_dict(cls, data: Mapping, where: str = "step") -> "Step":
        _require(data, ["note", "motion"], where)
        motion = data["motion"]
        if not isinstance(motion, (list, tuple)) or not all(
            isinstance(points, (list, tuple)) for points in motion
        ):
            raise ValidationError(
                f"{where}.motion must be {NUM_MOTION_SLOTS}x{MOTION_POINTS_PER_STEP} data points"
            )
        return cls(
            note=_from_flat(NoteEvent, data["note"], f"{where}.note"),
            motion=motion,
        )


def _default_slots() -> Tuple[MotionSlot, ...]:
    return tuple(MotionSlot() for _ in range(NUM_MOTION_SLOTS))


def _default_steps() -> Tuple[Step, ...]:
    return tuple(Step() for _ in range(NUM_STEPS))


@dataclass(frozen=True)
class ProgramParameters:
    """
    Complete decoded monologue program.

    Attributes:
        patch_name: Program name (max 12 ASCII characters)
        drive: Drive amount (0-1023)
        vco1, vco2: Oscillator sections
        filter: Cutoff and resonance
        envelope: EG section
        lfo: LFO section
        misc: Program settings
        sequencer: Sequencer settings and step flags
        motion_slots: 4 motion slots
        steps: 16 sequencer step events
    """

    patch_name: str = ""
    drive: int = 0
    vco1: Oscillator = field(default_factory=Oscillator)
    vco2: Vco2 = field(default_factory=Vco2)
    filter: Filter = field(default_factory=Filter)
    envelope: Envelope = field(default_factory=Envelope)
    lfo: Lfo = field(default_factory=Lfo)
    misc: Misc = field(default_factory=Misc)
    sequencer: Sequencer = field(default_factory=Sequencer)
    motion_slots: Tuple[MotionSlot, ...] = field(default_factory=_default_slots)
    steps: Tuple[Step, ...] = field(default_factory=_default_steps)

    def __post_init__(self):
        _freeze_items(self, "motion_slots", NUM_MOTION_SLOTS)
        _freeze_items(self, "steps", NUM_STEPS)

    @classmethod
    def zero(cls) -> "ProgramParameters":
        """The all-zero program, used as a safe default."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain dicts and lists (JSON compatible)."""
        return _listify(asdict(self))

    @classmethod
    def from_dict(cls, data: Mapping) -> "ProgramParameters":
        """
        Build parameters from the structure produced by to_dict().

        Raises:
            ValidationError: If a section or field is missing or malformed
        """
        missing = missing_sections(data)
        if missing:
            raise ValidationError(f"Missing required sections: {', '.join(missing)}")

        slots = data["motion_slots"]
        steps = data["steps"]
        if not isinstance(slots, (list, tuple)) or not isinstance(steps, (list, tuple)):
            raise ValidationError("motion_slots and steps must be sequences")

        return cls(
            patch_name=data["patch_name"],
            drive=data["drive"],
            vco1=_from_flat(Oscillator, data["vco1"], "vco1"),
            vco2=_from_flat(Vco2, data["vco2"], "vco2"),
            filter=_from_flat(Filter, data["filter"], "filter"),
            envelope=_from_flat(Envelope, data["envelope"], "envelope"),
            lfo=_from_flat(Lfo, data["lfo"], "lfo"),
            misc=_from_flat(Misc, data["misc"], "misc"),
            sequencer=Sequencer.from_dict(data["sequencer"]),
            motion_slots=tuple(
                _from_flat(MotionSlot, slot, f"motion_slots[{i}]") for i, slot in enumerate(slots)
            ),
            steps=tuple(Step.from_dict(step, f"steps[{i}]") for i, step in enumerate(steps)),
        )

    def __repr__(self) -> str:
        return (
            f"ProgramParameters(patch_name={self.patch_name!r}, drive={self.drive}, "
            f"cutoff={self.filter.cutoff}, resonance={self.filter.resonance})"
        )


def missing_sections(data: Any) -> List[str]:
    """Return the names of required top-level sections absent from data."""
    if isinstance(data, ProgramParameters):
        return []
    if not isinstance(data, Mapping):
        return list(REQUIRED_SECTIONS)
    return [name for name in REQUIRED_SECTIONS if name not in data]
