"""CPU register file and call stack for the CHIP-8 emulator."""

from .errors import StackOverflow, StackUnderflow
from .memory import ADDRESS_MASK, PROGRAM_START

NUM_REGISTERS = 16
STACK_DEPTH = 16


class CPU:
    """Registers V0-VF, index register, program counter and stack."""

    def __init__(self, start_address: int = PROGRAM_START):
        self.v: list[int] = [0] * NUM_REGISTERS
        self.i: int = 0
        self.pc: int = start_address
        self.stack: list[int] = [0] * STACK_DEPTH
        self.sp: int = 0
        self.halted: bool = False

    def set_v(self, x: int, value: int) -> None:
        """Set Vx, truncated to 8 bits."""
        self.v[x] = value & 0xFF

    def set_i(self, value: int) -> None:
        """Set I, truncated to 12 bits."""
        self.i = value & ADDRESS_MASK

    def push(self, addr: int) -> None:
        """Push a return address."""
        if self.sp >= STACK_DEPTH:
            raise StackOverflow(f"Stack overflow: depth {STACK_DEPTH} exceeded")
        self.sp += 1
        self.stack[self.sp - 1] = addr

    def pop(self) -> int:
        """Pop the most recent return address."""
        if self.sp == 0:
            raise StackUnderflow("Return with empty stack")
        self.sp -= 1
        return self.stack[self.sp]

    def get_state(self) -> dict:
        """Get current register state as dictionary."""
        return {
            "v": list(self.v),
            "i": self.i,
            "pc": self.pc,
            "sp": self.sp,
            "stack": self.stack[:self.sp],
        }

    def reset(self, start_address: int = PROGRAM_START) -> None:
        """Reset CPU to initial state."""
        self.v = [0] * NUM_REGISTERS
        self.i = 0
        self.pc = start_address
        self.stack = [0] * STACK_DEPTH
        self.sp = 0
        self.halted = False
