"""
Rich table displays for program information.

Provides formatted output for decoded monologue programs.
"""

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import (
    CUTOFF_KEY_TRACK_LABELS,
    CUTOFF_VELOCITY_LABELS,
    EG_TARGET_LABELS,
    EG_TYPE_LABELS,
    KEYBOARD_OCTAVE_LABELS,
    LFO_MODE_LABELS,
    LFO_TARGET_LABELS,
    OCTAVE_LABELS,
    PORTAMENTO_MODE_LABELS,
    STEP_RESOLUTION_LABELS,
    SYNC_RING_LABELS,
    WAVE_LABELS,
    bipolar_bar,
    format_bpm,
    label,
    step_grid,
    value_bar,
)
from mnlgconv.formats.sysex_parser import FrameIssue
from mnlgconv.models.codes import MOTION_PARAMETERS, SLIDER_ASSIGN
from mnlgconv.models.program import ProgramParameters

console = Console()


def _section_table(title: str) -> Table:
    table = Table(title=title, box=box.SIMPLE, show_header=False, title_justify="left")
    table.add_column("Parameter", style="cyan", width=18)
    table.add_column("Value", width=36)
    return table


def display_program_info(
    params: ProgramParameters,
    filepath: str = "",
    is_valid: bool = True,
    errors: Optional[List[str]] = None,
    show_sequence: bool = False,
) -> None:
    """Display a decoded program with Rich formatting."""

    status = "[green]Valid[/green]" if is_valid else "[red]Invalid[/red]"
    header = f"""[bold]Program:[/bold] {params.patch_name or "N/A"}
[bold]File:[/bold] {filepath or "N/A"}
[bold]Status:[/bold] {status}"""

    if errors:
        header += "\n" + "\n".join(f"[red]- {error}[/red]" for error in errors)

    console.print(
        Panel(
            header,
            title="[bold blue]monologue Program[/bold blue]",
            border_style="blue" if is_valid else "red",
            expand=False,
        )
    )

    # Oscillators
    osc = _section_table("VCO")
    for name, vco in (("VCO 1", params.vco1), ("VCO 2", params.vco2)):
        osc.add_row(f"{name} Wave", label(vco.wave, WAVE_LABELS))
        osc.add_row(f"{name} Octave", label(vco.octave, OCTAVE_LABELS))
        osc.add_row(f"{name} Pitch", value_bar(vco.pitch))
        osc.add_row(f"{name} Shape", value_bar(vco.shape))
        osc.add_row(f"{name} Level", value_bar(vco.level))
    osc.add_row("Sync/Ring", label(params.vco2.sync_ring, SYNC_RING_LABELS))
    console.print(osc)

    # Filter, EG, LFO
    mod = _section_table("Filter / EG / LFO")
    mod.add_row("Cutoff", value_bar(params.filter.cutoff))
    mod.add_row("Resonance", value_bar(params.filter.resonance))
    mod.add_row("Drive", value_bar(params.drive))
    mod.add_row("EG Type", label(params.envelope.type, EG_TYPE_LABELS))
    mod.add_row("EG Attack", value_bar(params.envelope.attack))
    mod.add_row("EG Decay", value_bar(params.envelope.decay))
    mod.add_row("EG Int", bipolar_bar(params.envelope.intensity))
    mod.add_row("EG Target", label(params.envelope.target, EG_TARGET_LABELS))
    mod.add_row("LFO Wave", label(params.lfo.wave, WAVE_LABELS))
    mod.add_row("LFO Mode", label(params.lfo.mode, LFO_MODE_LABELS))
    mod.add_row("LFO Rate", value_bar(params.lfo.rate))
    mod.add_row("LFO Int", bipolar_bar(params.lfo.intensity))
    mod.add_row("LFO Target", label(params.lfo.target, LFO_TARGET_LABELS))
    console.print(mod)

    # Program settings
    misc = params.misc
    settings = _section_table("Program Settings")
    settings.add_row("Slider Assign", str(SLIDER_ASSIGN.lookup(misc.slider_assign)))
    settings.add_row("Portamento", f"{misc.portamento_time} ({label(misc.portamento_mode, PORTAMENTO_MODE_LABELS)})")
    settings.add_row("Slide Time", str(misc.slide_time))
    settings.add_row("Bend Range", f"+{misc.bend_range_plus} / -{misc.bend_range_minus}")
    settings.add_row("Keyboard Octave", label(misc.keyboard_octave, KEYBOARD_OCTAVE_LABELS))
    settings.add_row("Cutoff Velocity", label(misc.cutoff_velocity, CUTOFF_VELOCITY_LABELS))
    settings.add_row("Cutoff Key Track", label(misc.cutoff_key_track, CUTOFF_KEY_TRACK_LABELS))
    settings.add_row("LFO BPM Sync", "On" if misc.lfo_bpm_sync else "Off")
    settings.add_row("Seq Trig", "On" if misc.seq_trig else "Off")
    settings.add_row("Amp Velocity", str(misc.amp_velocity))
    settings.add_row("Program Level", str(misc.program_level))
    settings.add_row("Micro Tuning", str(misc.micro_tuning))
    settings.add_row("Scale Key", f"{misc.scale_key - 12:+d}")
    settings.add_row("Program Tuning", f"{misc.program_tuning - 50:+d} cent")
    console.print(settings)

    display_sequencer(params, show_steps=show_sequence)


def display_sequencer(params: ProgramParameters, show_steps: bool = False) -> None:
    """Display sequencer settings, motion slots and (optionally) step events."""
    seq = params.sequencer

    table = _section_table("Sequencer")
    table.add_row("Tempo", format_bpm(seq.bpm))
    table.add_row("Step Length", str(seq.step_length))
    table.add_row("Resolution", label(seq.step_resolution, STEP_RESOLUTION_LABELS))
    table.add_row("Swing", f"{seq.swing:+d}%")
    table.add_row("Default Gate", str(seq.default_gate_time))
    table.add_row("Active Steps", step_grid(seq.step_active))
    table.add_row("Motion Steps", step_grid(seq.step_motion))
    table.add_row("Slide Steps", step_grid(seq.step_slide))
    console.print(table)

    slots = Table(title="Motion Slots", box=box.ROUNDED, header_style="bold magenta")
    slots.add_column("#", style="dim", width=3)
    slots.add_column("Parameter", style="cyan", width=16)
    slots.add_column("On", width=4)
    slots.add_column("Smooth", width=7)
    slots.add_column("Steps", width=20)

    for i, slot in enumerate(params.motion_slots):
        slots.add_row(
            str(i + 1),
            str(MOTION_PARAMETERS.lookup(slot.parameter)),
            "[green]On[/green]" if slot.active else "[dim]Off[/dim]",
            "Yes" if slot.smooth else "No",
            step_grid(slot.step_enabled),
        )
    console.print(slots)

    if not show_steps:
        return

    steps = Table(title="Steps", box=box.ROUNDED, header_style="bold magenta")
    steps.add_column("#", style="dim", width=3)
    steps.add_column("Note", width=5)
    steps.add_column("Vel", width=4)
    steps.add_column("Gate", width=5)
    steps.add_column("Trig", width=5)
    for slot in range(len(params.motion_slots)):
        steps.add_column(f"M{slot + 1}", width=12)

    for i, step in enumerate(params.steps):
        note = step.note
        gate = "TIE" if note.gate_time == 73 else str(note.gate_time)
        motion = [" ".join(f"{p:02X}" for p in points) for points in step.motion]
        steps.add_row(
            str(i + 1),
            str(note.key),
            str(note.velocity),
            gate,
            "x" if note.trigger else "",
            *motion,
        )
    console.print(steps)


def display_frame_issues(filepath: str, issues: List[FrameIssue]) -> None:
    """Display frame validation result with Rich formatting."""
    structural = [issue for issue in issues if issue.is_structural]

    if not issues:
        status = "[bold green]VALID[/bold green]"
        border = "green"
    elif structural:
        status = "[bold red]INVALID[/bold red]"
        border = "red"
    else:
        status = "[bold yellow]MISALIGNED[/bold yellow]"
        border = "yellow"

    console.print(
        Panel(
            f"[bold]File:[/bold] {filepath}\n"
            f"[bold]Status:[/bold] {status}\n\n"
            f"Structural: [red]{len(structural)}[/red]  "
            f"Marker: [yellow]{len(issues) - len(structural)}[/yellow]",
            title="[bold]Validation Result[/bold]",
            border_style=border,
        )
    )

    if not issues:
        return

    table = Table(title="Issues", box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Kind", style="cyan", width=14)
    table.add_column("Offset", style="dim", width=8)
    table.add_column("Expected", width=10)
    table.add_column("Actual", width=10)
    table.add_column("Message", width=48)

    for issue in issues:
        table.add_row(
            issue.kind.value,
            f"0x{issue.offset:03X}",
            issue.expected,
            issue.actual,
            issue.message,
        )

    console.print(table)
