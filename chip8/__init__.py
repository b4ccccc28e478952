"""CHIP-8 Emulator Core Package."""

from .machine import Chip8
from .runner import run_program, run_frames, restart, RunOptions, RunResult
from .errors import (
    CHIP8Error,
    LoadError,
    InvalidKeyIndex,
    CHIP8RuntimeError,
    StackOverflow,
    StackUnderflow,
    UnknownOpcode,
    MachineHalted,
)

__all__ = [
    "Chip8",
    "run_program",
    "run_frames",
    "restart",
    "RunOptions",
    "RunResult",
    "CHIP8Error",
    "LoadError",
    "InvalidKeyIndex",
    "CHIP8RuntimeError",
    "StackOverflow",
    "StackUnderflow",
    "UnknownOpcode",
    "MachineHalted",
]
