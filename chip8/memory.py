"""Memory model for the CHIP-8 emulator."""

from .errors import LoadError

MEMORY_SIZE = 4096
ADDRESS_MASK = 0xFFF
PROGRAM_START = 0x200
FONT_BASE = 0x000
GLYPH_SIZE = 5

# Hex digit sprites 0-F, five rows each, high nibble used
FONTSET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


def font_address(digit: int) -> int:
    """Address of the sprite for hex digit (low nibble only)."""
    return FONT_BASE + (digit & 0xF) * GLYPH_SIZE


class Memory:
    """Flat 4 KiB byte store with 12-bit address wrap."""

    def __init__(self):
        self._data = bytearray(MEMORY_SIZE)
        self.load_font()

    def load_font(self) -> None:
        """Write the hex digit glyphs into the reserved low region."""
        self._data[FONT_BASE:FONT_BASE + len(FONTSET)] = FONTSET

    def clear(self) -> None:
        """Zero every byte, then restore the font."""
        self._data = bytearray(MEMORY_SIZE)
        self.load_font()

    def read_byte(self, addr: int) -> int:
        return self._data[addr & ADDRESS_MASK]

    def write_byte(self, addr: int, value: int) -> None:
        self._data[addr & ADDRESS_MASK] = value & 0xFF

    def read_range(self, addr: int, length: int) -> bytes:
        """Read LENGTH bytes starting at ADDR, wrapping past 0xFFF."""
        return bytes(self._data[(addr + n) & ADDRESS_MASK] for n in range(length))

    def write_range(self, offset: int, data: bytes) -> None:
        """Copy DATA into memory at OFFSET; nothing is written if it does not fit."""
        if offset < 0 or offset + len(data) > MEMORY_SIZE:
            raise LoadError(
                f"{len(data)} bytes at 0x{offset:03X} exceed {MEMORY_SIZE}-byte memory",
                pc=offset,
            )
        self._data[offset:offset + len(data)] = data

    def snapshot(self) -> bytes:
        """Return a copy of the entire memory."""
        return bytes(self._data)
