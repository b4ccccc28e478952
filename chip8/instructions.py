"""Instruction execution for the CHIP-8 emulator."""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Optional

from .cpu import CPU
from .decoder import Opcode
from .display import Display
from .keypad import Keypad
from .memory import ADDRESS_MASK, Memory, font_address
from .timers import Timers

logger = logging.getLogger(__name__)

FLAG = 0xF


@dataclass
class Devices:
    """Peripherals an instruction may touch besides CPU and memory."""
    display: Display = field(default_factory=Display)
    keypad: Keypad = field(default_factory=Keypad)
    timers: Timers = field(default_factory=Timers)
    rng: random.Random = field(default_factory=random.Random)


def _skip(cpu: CPU) -> int:
    """PC of the instruction after next."""
    return (cpu.pc + 2) & ADDRESS_MASK


# Instruction executor type
InstructionExecutor = Callable[[Opcode, CPU, Memory, Devices], Optional[int]]


def execute_sys(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """0NNN: call machine-code routine (ignored)"""
    logger.debug("Ignoring SYS %03X at %03X", op.nnn, cpu.pc - 2)
    return None


def execute_cls(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """00E0: clear the display"""
    dev.display.clear()
    return None


def execute_ret(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """00EE: PC := pop()"""
    return cpu.pop()


def execute_jp(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """1NNN: PC := NNN"""
    return op.nnn


def execute_call(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """2NNN: push(PC); PC := NNN"""
    cpu.push(cpu.pc)
    return op.nnn


def execute_se_imm(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """3XKK: skip if Vx == KK"""
    if cpu.v[op.x] == op.kk:
        return _skip(cpu)
    return None


def execute_sne_imm(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """4XKK: skip if Vx != KK"""
    if cpu.v[op.x] != op.kk:
        return _skip(cpu)
    return None


def execute_se_reg(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """5XY0: skip if Vx == Vy"""
    if cpu.v[op.x] == cpu.v[op.y]:
        return _skip(cpu)
    return None


def execute_ld_imm(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """6XKK: Vx := KK"""
    cpu.set_v(op.x, op.kk)
    return None


def execute_add_imm(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """7XKK: Vx := Vx + KK (no carry flag)"""
    cpu.set_v(op.x, cpu.v[op.x] + op.kk)
    return None


def execute_ld_reg(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """8XY0: Vx := Vy"""
    cpu.set_v(op.x, cpu.v[op.y])
    return None


# OR/AND/XOR leave VF as it was.
def execute_or(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """8XY1: Vx := Vx OR Vy"""
    cpu.set_v(op.x, cpu.v[op.x] | cpu.v[op.y])
    return None


def execute_and(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """8XY2: Vx := Vx AND Vy"""
    cpu.set_v(op.x, cpu.v[op.x] & cpu.v[op.y])
    return None


def execute_xor(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """8XY3: Vx := Vx XOR Vy"""
    cpu.set_v(op.x, cpu.v[op.x] ^ cpu.v[op.y])
    return None


# For the flag-setting arithmetic below the result is written first, so VF
# holds the flag when X is F.
def execute_add_reg(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """8XY4: Vx := Vx + Vy, VF := carry"""
    total = cpu.v[op.x] + cpu.v[op.y]
    cpu.set_v(op.x, total)
    cpu.set_v(FLAG, 1 if total > 0xFF else 0)
    return None


def execute_sub(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """8XY5: Vx := Vx - Vy, VF := NOT borrow"""
    vx, vy = cpu.v[op.x], cpu.v[op.y]
    cpu.set_v(op.x, vx - vy)
    cpu.set_v(FLAG, 1 if vx >= vy else 0)
    return None


def execute_shr(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """8XY6: VF := Vx bit 0; Vx := Vx >> 1"""
    vx = cpu.v[op.x]
    cpu.set_v(op.x, vx >> 1)
    cpu.set_v(FLAG, vx & 0x01)
    return None


def execute_subn(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """8XY7: Vx := Vy - Vx, VF := NOT borrow"""
    vx, vy = cpu.v[op.x], cpu.v[op.y]
    cpu.set_v(op.x, vy - vx)
    cpu.set_v(FLAG, 1 if vy >= vx else 0)
    return None


def execute_shl(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """8XYE: VF := Vx bit 7; Vx := Vx << 1"""
    vx = cpu.v[op.x]
    cpu.set_v(op.x, vx << 1)
    cpu.set_v(FLAG, (vx >> 7) & 0x01)
    return None


def execute_sne_reg(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """9XY0: skip if Vx != Vy"""
    if cpu.v[op.x] != cpu.v[op.y]:
        return _skip(cpu)
    return None


def execute_ld_i(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """ANNN: I := NNN"""
    cpu.set_i(op.nnn)
    return None


def execute_jp_v0(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """BNNN: PC := NNN + V0"""
    return (op.nnn + cpu.v[0]) & ADDRESS_MASK


def execute_rnd(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """CXKK: Vx := random byte AND KK"""
    cpu.set_v(op.x, dev.rng.randrange(256) & op.kk)
    return None


def execute_drw(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """DXYN: XOR N-byte sprite at I onto (Vx, Vy); VF := collision"""
    sprite = mem.read_range(cpu.i, op.n)
    collision = dev.display.blit(cpu.v[op.x], cpu.v[op.y], sprite)
    cpu.set_v(FLAG, 1 if collision else 0)
    return None


def execute_skp(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """EX9E: skip if key Vx is pressed"""
    if dev.keypad.is_pressed(cpu.v[op.x]):
        return _skip(cpu)
    return None


def execute_sknp(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """EXA1: skip if key Vx is not pressed"""
    if not dev.keypad.is_pressed(cpu.v[op.x]):
        return _skip(cpu)
    return None


def execute_ld_vx_dt(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """FX07: Vx := delay timer"""
    cpu.set_v(op.x, dev.timers.delay)
    return None


def execute_ld_vx_k(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """FX0A: wait for a key press, store it in Vx"""
    logger.debug("Waiting for key into V%X", op.x)
    dev.keypad.await_key(op.x)
    return None


def execute_ld_dt_vx(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """FX15: delay timer := Vx"""
    dev.timers.set_delay(cpu.v[op.x])
    return None


def execute_ld_st_vx(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """FX18: sound timer := Vx"""
    dev.timers.set_sound(cpu.v[op.x])
    return None


def execute_add_i(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """FX1E: I := I + Vx"""
    cpu.set_i(cpu.i + cpu.v[op.x])
    return None


def execute_ld_f(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """FX29: I := address of font glyph for digit Vx"""
    cpu.set_i(font_address(cpu.v[op.x]))
    return None


def execute_ld_bcd(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """FX33: MEM[I..I+2] := BCD digits of Vx"""
    value = cpu.v[op.x]
    mem.write_byte(cpu.i, value // 100)
    mem.write_byte(cpu.i + 1, (value // 10) % 10)
    mem.write_byte(cpu.i + 2, value % 10)
    return None


def execute_ld_store(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """FX55: MEM[I..I+x] := V0..Vx (I unchanged)"""
    for reg in range(op.x + 1):
        mem.write_byte(cpu.i + reg, cpu.v[reg])
    return None


def execute_ld_load(op: Opcode, cpu: CPU, mem: Memory, dev: Devices) -> Optional[int]:
    """FX65: V0..Vx := MEM[I..I+x] (I unchanged)"""
    for reg in range(op.x + 1):
        cpu.set_v(reg, mem.read_byte(cpu.i + reg))
    return None


# Instruction dispatch table
INSTRUCTION_EXECUTORS: dict[str, InstructionExecutor] = {
    "0NNN": execute_sys,
    "00E0": execute_cls,
    "00EE": execute_ret,
    "1NNN": execute_jp,
    "2NNN": execute_call,
    "3XKK": execute_se_imm,
    "4XKK": execute_sne_imm,
    "5XY0": execute_se_reg,
    "6XKK": execute_ld_imm,
    "7XKK": execute_add_imm,
    "8XY0": execute_ld_reg,
    "8XY1": execute_or,
    "8XY2": execute_and,
    "8XY3": execute_xor,
    "8XY4": execute_add_reg,
    "8XY5": execute_sub,
    "8XY6": execute_shr,
    "8XY7": execute_subn,
    "8XYE": execute_shl,
    "9XY0": execute_sne_reg,
    "ANNN": execute_ld_i,
    "BNNN": execute_jp_v0,
    "CXKK": execute_rnd,
    "DXYN": execute_drw,
    "EX9E": execute_skp,
    "EXA1": execute_sknp,
    "FX07": execute_ld_vx_dt,
    "FX0A": execute_ld_vx_k,
    "FX15": execute_ld_dt_vx,
    "FX18": execute_ld_st_vx,
    "FX1E": execute_add_i,
    "FX29": execute_ld_f,
    "FX33": execute_ld_bcd,
    "FX55": execute_ld_store,
    "FX65": execute_ld_load,
}


def execute_instruction(
    op: Opcode,
    cpu: CPU,
    mem: Memory,
    dev: Devices,
) -> Optional[int]:
    """Execute a single decoded instruction.

    Returns:
        New PC value if the instruction transfers control, None otherwise
    """
    executor = INSTRUCTION_EXECUTORS.get(op.mnemonic)
    if executor is None:
        raise ValueError(f"No executor for opcode: {op.mnemonic}")
    return executor(op, cpu, mem, dev)
