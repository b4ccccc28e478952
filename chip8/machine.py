"""The CHIP-8 virtual machine."""

import logging
import random
from typing import Optional

from .cpu import CPU
from .decoder import decode
from .display import Display
from .errors import CHIP8RuntimeError, MachineHalted
from .instructions import Devices, execute_instruction
from .keypad import Keypad
from .memory import ADDRESS_MASK, PROGRAM_START, Memory
from .timers import Timers

logger = logging.getLogger(__name__)


class Chip8:
    """One emulator instance owning memory, registers, timers, keypad and display.

    The host drives it: reset(), load_game(), then per frame some number of
    step() calls followed by a single tick_timers(). Key state may change
    between any two calls.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.cpu = CPU()
        self.memory = Memory()
        self.devices = Devices(
            display=Display(),
            keypad=Keypad(),
            timers=Timers(),
            rng=rng if rng is not None else random.Random(),
        )
        self.cycles = 0

    @property
    def display(self) -> Display:
        return self.devices.display

    @property
    def keypad(self) -> Keypad:
        return self.devices.keypad

    @property
    def timers(self) -> Timers:
        return self.devices.timers

    @property
    def halted(self) -> bool:
        return self.cpu.halted

    @property
    def sound_active(self) -> bool:
        return self.timers.sound_active

    @property
    def pixels(self) -> tuple[tuple[bool, ...], ...]:
        return self.display.pixels

    def reset(self) -> None:
        """Return every component to its power-on state."""
        self.cpu.reset(PROGRAM_START)
        self.memory.clear()
        self.display.clear()
        self.keypad.reset()
        self.timers.reset()
        self.cycles = 0
        logger.debug("Machine reset")

    def load_game(self, data: bytes) -> None:
        """Copy a program image to 0x200.

        Raises:
            LoadError: if the image does not fit; memory is left untouched
        """
        self.memory.write_range(PROGRAM_START, bytes(data))
        logger.debug("Loaded %d-byte program", len(data))

    def set_key(self, index: int, pressed: bool) -> None:
        self.keypad.set_key(index, pressed)

    def tick_timers(self) -> None:
        self.timers.tick()

    def fetch(self) -> int:
        """Read the big-endian word at PC and advance PC by 2."""
        pc = self.cpu.pc
        word = (self.memory.read_byte(pc) << 8) | self.memory.read_byte(pc + 1)
        self.cpu.pc = (pc + 2) & ADDRESS_MASK
        return word

    def step(self) -> bool:
        """Run one instruction.

        Returns False when the machine is stalled on FX0A and no key has
        arrived, True otherwise.

        Raises:
            CHIP8RuntimeError: on stack faults or unknown opcodes; the machine
                halts and every later step raises MachineHalted until reset()
        """
        if self.cpu.halted:
            raise MachineHalted("Machine halted; reset required", pc=self.cpu.pc)

        if self.keypad.awaiting:
            resolved = self.keypad.take_awaited_key()
            if resolved is None:
                return False
            register, key = resolved
            self.cpu.set_v(register, key)
            logger.debug("Key %X stored in V%X", key, register)
            return True

        instr_addr = self.cpu.pc
        word = self.fetch()
        try:
            op = decode(word)
            new_pc = execute_instruction(op, self.cpu, self.memory, self.devices)
        except CHIP8RuntimeError as e:
            # Attach context to error
            e.pc = instr_addr
            e.opcode = word
            self.cpu.halted = True
            raise

        if new_pc is not None:
            self.cpu.pc = new_pc
        self.cycles += 1
        return True

    def get_state(self) -> dict:
        """Registers, timers and key-wait status as a dictionary."""
        state = self.cpu.get_state()
        state.update({
            "delay_timer": self.timers.delay,
            "sound_timer": self.timers.sound,
            "awaiting_key": self.keypad.awaiting_register,
            "halted": self.cpu.halted,
        })
        return state
