"""Ensure every opcode has a dedicated behavioral test."""

from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Callable, Optional

import pytest

from chip8 import Chip8
from chip8.decoder import VALID_OPCODES


def expect_v(x: int, value: int) -> Callable:
    def _check(vm):
        assert vm.cpu.v[x] == value

    return _check


def expect_pc(value: int) -> Callable:
    def _check(vm):
        assert vm.cpu.pc == value

    return _check


def expect_i(value: int) -> Callable:
    def _check(vm):
        assert vm.cpu.i == value

    return _check


def expect_mem(addr: int, values: list[int]) -> Callable:
    def _check(vm):
        assert list(vm.memory.read_range(addr, len(values))) == values

    return _check


def expect_lit(count: int) -> Callable:
    def _check(vm):
        assert vm.display.lit_count() == count

    return _check


def expect_delay(value: int) -> Callable:
    def _check(vm):
        assert vm.timers.delay == value

    return _check


def expect_sound(value: int) -> Callable:
    def _check(vm):
        assert vm.timers.sound == value

    return _check


def expect_awaiting(register: int) -> Callable:
    def _check(vm):
        assert vm.keypad.awaiting_register == register

    return _check


def press(key: int) -> Callable:
    def _setup(vm):
        vm.set_key(key, True)

    return _setup


@dataclass
class InstructionCase:
    opcode: str
    program: list[int]
    checker: Callable
    steps: Optional[int] = None
    setup: Optional[Callable] = None


INSTRUCTION_CASES = [
    InstructionCase("0NNN", [0x03, 0x00], expect_pc(0x202)),
    InstructionCase("00E0", [0xA0, 0x00, 0xD0, 0x05, 0x00, 0xE0], expect_lit(0)),
    InstructionCase("00EE", [0x22, 0x04, 0x00, 0x00, 0x00, 0xEE], expect_pc(0x202), steps=2),
    InstructionCase("1NNN", [0x13, 0x45], expect_pc(0x345)),
    InstructionCase("2NNN", [0x23, 0x45], expect_pc(0x345)),
    InstructionCase("3XKK", [0x61, 0x07, 0x31, 0x07], expect_pc(0x206)),
    InstructionCase("4XKK", [0x61, 0x07, 0x41, 0x08], expect_pc(0x206)),
    InstructionCase("5XY0", [0x61, 0x07, 0x62, 0x07, 0x51, 0x20], expect_pc(0x208)),
    InstructionCase("6XKK", [0x6A, 0x42], expect_v(0xA, 0x42)),
    InstructionCase("7XKK", [0x6A, 0xFF, 0x7A, 0x02], expect_v(0xA, 0x01)),
    InstructionCase("8XY0", [0x62, 0x09, 0x81, 0x20], expect_v(1, 9)),
    InstructionCase("8XY1", [0x61, 0x0C, 0x62, 0x03, 0x81, 0x21], expect_v(1, 0x0F)),
    InstructionCase("8XY2", [0x61, 0x0C, 0x62, 0x06, 0x81, 0x22], expect_v(1, 0x04)),
    InstructionCase("8XY3", [0x61, 0x0C, 0x62, 0x06, 0x81, 0x23], expect_v(1, 0x0A)),
    InstructionCase("8XY4", [0x61, 0xF0, 0x62, 0x20, 0x81, 0x24], expect_v(0xF, 1)),
    InstructionCase("8XY5", [0x61, 0x05, 0x62, 0x07, 0x81, 0x25], expect_v(1, 0xFE)),
    InstructionCase("8XY6", [0x61, 0x05, 0x81, 0x06], expect_v(0xF, 1)),
    InstructionCase("8XY7", [0x61, 0x05, 0x62, 0x07, 0x81, 0x27], expect_v(1, 2)),
    InstructionCase("8XYE", [0x61, 0x81, 0x81, 0x0E], expect_v(1, 0x02)),
    InstructionCase("9XY0", [0x61, 0x07, 0x62, 0x08, 0x91, 0x20], expect_pc(0x208)),
    InstructionCase("ANNN", [0xA2, 0x34], expect_i(0x234)),
    InstructionCase("BNNN", [0x60, 0x10, 0xB3, 0x00], expect_pc(0x310)),
    InstructionCase("CXKK", [0xC1, 0x00], expect_v(1, 0)),
    InstructionCase("DXYN", [0xA0, 0x00, 0xD0, 0x05], expect_lit(14)),
    InstructionCase("EX9E", [0x61, 0x05, 0xE1, 0x9E], expect_pc(0x206), setup=press(5)),
    InstructionCase("EXA1", [0x61, 0x05, 0xE1, 0xA1], expect_pc(0x206)),
    InstructionCase("FX07", [0x61, 0x2A, 0xF1, 0x15, 0xF2, 0x07], expect_v(2, 0x2A)),
    InstructionCase("FX0A", [0xF3, 0x0A], expect_awaiting(3)),
    InstructionCase("FX15", [0x61, 0x2A, 0xF1, 0x15], expect_delay(0x2A)),
    InstructionCase("FX18", [0x61, 0x2A, 0xF1, 0x18], expect_sound(0x2A)),
    InstructionCase("FX1E", [0xA1, 0x00, 0x61, 0x05, 0xF1, 0x1E], expect_i(0x105)),
    InstructionCase("FX29", [0x61, 0x0B, 0xF1, 0x29], expect_i(55)),
    InstructionCase(
        "FX33",
        [0xA3, 0x00, 0x61, 0xFE, 0xF1, 0x33],
        expect_mem(0x300, [2, 5, 4]),
    ),
    InstructionCase(
        "FX55",
        [0xA3, 0x00, 0x60, 0x01, 0x61, 0x02, 0xF1, 0x55],
        expect_mem(0x300, [1, 2, 0]),
    ),
    InstructionCase("FX65", [0xA0, 0x00, 0xF1, 0x65], expect_v(1, 0x90)),
]


@pytest.mark.parametrize("case", INSTRUCTION_CASES, ids=lambda case: case.opcode)
def test_all_instructions_have_behavioral_tests(case: InstructionCase):
    vm = Chip8(rng=random.Random(0))
    vm.reset()
    vm.load_game(bytes(case.program))
    if case.setup:
        case.setup(vm)
    steps = case.steps if case.steps is not None else len(case.program) // 2
    for _ in range(steps):
        vm.step()
    case.checker(vm)


def test_instruction_case_coverage_matches_valid_opcodes():
    covered = {case.opcode for case in INSTRUCTION_CASES}
    assert covered == VALID_OPCODES
