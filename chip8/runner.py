"""Frame scheduler for the CHIP-8 emulator."""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Optional

from .errors import CHIP8Error, ErrorInfo
from .machine import Chip8
from .render import render_text, to_bitstrings
from .roms import check_rom_size

logger = logging.getLogger(__name__)

TICKS_PER_FRAME = 5

KeyEvents = dict[int, list[tuple[int, bool]]]
FrameCallback = Callable[[int, Chip8], None]


@dataclass
class RunOptions:
    """Options for program execution."""
    frames: int = 60
    ticks_per_frame: int = TICKS_PER_FRAME
    # frame index -> [(key, pressed), ...] applied before that frame's steps
    key_events: KeyEvents = field(default_factory=dict)
    seed: Optional[int] = None
    render: bool = False
    render_scale: int = 1


@dataclass
class RunResult:
    """Result of program execution."""
    status: str  # "ok" | "error"
    frames_executed: int
    steps_executed: int
    final_state: dict
    display: list[str]
    sound_active: bool
    screen: Optional[str] = None
    error: Optional[ErrorInfo] = None

    def to_dict(self) -> dict:
        result = {
            "status": self.status,
            "frames_executed": self.frames_executed,
            "steps_executed": self.steps_executed,
            "final_state": self.final_state,
            "display": self.display,
            "sound_active": self.sound_active,
        }
        if self.screen is not None:
            result["screen"] = self.screen
        if self.error:
            result["error"] = self.error.to_dict()
        return result


def restart(machine: Chip8, rom: bytes) -> None:
    """Reset MACHINE and load ROM again."""
    machine.reset()
    machine.load_game(rom)


def run_frames(
    machine: Chip8,
    frames: int,
    ticks_per_frame: int = TICKS_PER_FRAME,
    key_events: Optional[KeyEvents] = None,
    on_frame: Optional[FrameCallback] = None,
) -> int:
    """Drive MACHINE for FRAMES frames.

    Each frame applies that frame's key events, runs TICKS_PER_FRAME steps,
    ticks the timers once and then calls ON_FRAME. Steps spent stalled on a
    key wait still count toward the frame.

    Returns:
        Number of instructions executed
    """
    key_events = key_events or {}
    start = machine.cycles
    for frame in range(frames):
        for key, pressed in key_events.get(frame, []):
            machine.set_key(key, pressed)
        for _ in range(ticks_per_frame):
            machine.step()
        machine.tick_timers()
        if on_frame is not None:
            on_frame(frame, machine)
    return machine.cycles - start


def run_program(rom: bytes, options: Optional[RunOptions] = None) -> RunResult:
    """Run a CHIP-8 program for a fixed number of frames.

    Args:
        rom: Program image
        options: Execution options

    Returns:
        RunResult with status, final registers and the frame buffer
    """
    if options is None:
        options = RunOptions()

    rng = random.Random(options.seed)
    machine = Chip8(rng=rng)
    error_info: Optional[ErrorInfo] = None
    frames_executed = 0

    def count_frame(frame: int, _machine: Chip8) -> None:
        nonlocal frames_executed
        frames_executed = frame + 1

    try:
        check_rom_size(rom)
        restart(machine, rom)
        run_frames(
            machine,
            options.frames,
            ticks_per_frame=options.ticks_per_frame,
            key_events=options.key_events,
            on_frame=count_frame,
        )
    except CHIP8Error as e:
        logger.warning("Run stopped: %s", e.message)
        error_info = e.to_error_info()

    screen = None
    if options.render:
        screen = render_text(machine.pixels, scale=options.render_scale)

    return RunResult(
        status="ok" if error_info is None else "error",
        frames_executed=frames_executed,
        steps_executed=machine.cycles,
        final_state=machine.get_state(),
        display=to_bitstrings(machine.pixels),
        sound_active=machine.sound_active,
        screen=screen,
        error=error_info,
    )
