"""Opcode decoder for the CHIP-8 instruction set."""

from dataclasses import dataclass

from .errors import UnknownOpcode


# The 35 CHIP-8 instructions, named by their encoding pattern
VALID_OPCODES = {
    "0NNN",
    "00E0",
    "00EE",
    "1NNN",
    "2NNN",
    "3XKK",
    "4XKK",
    "5XY0",
    "6XKK",
    "7XKK",
    "8XY0",
    "8XY1",
    "8XY2",
    "8XY3",
    "8XY4",
    "8XY5",
    "8XY6",
    "8XY7",
    "8XYE",
    "9XY0",
    "ANNN",
    "BNNN",
    "CXKK",
    "DXYN",
    "EX9E",
    "EXA1",
    "FX07",
    "FX0A",
    "FX15",
    "FX18",
    "FX1E",
    "FX29",
    "FX33",
    "FX55",
    "FX65",
}

# Families whose pattern is fixed by the high nibble alone
_SINGLE_PATTERN_FAMILIES = {
    0x1: "1NNN",
    0x2: "2NNN",
    0x3: "3XKK",
    0x4: "4XKK",
    0x6: "6XKK",
    0x7: "7XKK",
    0xA: "ANNN",
    0xB: "BNNN",
    0xC: "CXKK",
    0xD: "DXYN",
}


@dataclass(frozen=True)
class Opcode:
    """A decoded 16-bit instruction word."""
    raw: int
    mnemonic: str

    @property
    def family(self) -> int:
        return (self.raw & 0xF000) >> 12

    @property
    def x(self) -> int:
        return (self.raw & 0x0F00) >> 8

    @property
    def y(self) -> int:
        return (self.raw & 0x00F0) >> 4

    @property
    def n(self) -> int:
        return self.raw & 0x000F

    @property
    def kk(self) -> int:
        return self.raw & 0x00FF

    @property
    def nnn(self) -> int:
        return self.raw & 0x0FFF

    def __str__(self) -> str:
        return f"{self.raw:04X} ({self.mnemonic})"


def _resolve_mnemonic(raw: int) -> str:
    family = (raw & 0xF000) >> 12
    n = raw & 0x000F
    kk = raw & 0x00FF

    if family in _SINGLE_PATTERN_FAMILIES:
        return _SINGLE_PATTERN_FAMILIES[family]
    if family == 0x0:
        if raw == 0x00E0:
            return "00E0"
        if raw == 0x00EE:
            return "00EE"
        return "0NNN"
    if family in (0x5, 0x9):
        if n == 0:
            return f"{family:X}XY0"
    elif family == 0x8:
        candidate = f"8XY{n:X}"
        if candidate in VALID_OPCODES:
            return candidate
    elif family == 0xE:
        candidate = f"EX{kk:02X}"
        if candidate in VALID_OPCODES:
            return candidate
    elif family == 0xF:
        candidate = f"FX{kk:02X}"
        if candidate in VALID_OPCODES:
            return candidate

    raise UnknownOpcode(f"Unknown opcode: {raw:04X}", opcode=raw)


def decode(raw: int) -> Opcode:
    """Decode an instruction word into an Opcode.

    Raises:
        UnknownOpcode: if RAW is not one of the 35 CHIP-8 instructions
    """
    raw &= 0xFFFF
    return Opcode(raw=raw, mnemonic=_resolve_mnemonic(raw))
