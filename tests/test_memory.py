"""Tests for the Memory module."""

import pytest
from chip8.memory import (
    Memory,
    MEMORY_SIZE,
    PROGRAM_START,
    FONT_BASE,
    FONTSET,
    font_address,
)
from chip8.errors import LoadError


class TestMemory:
    """Memory module tests."""

    def test_size(self):
        mem = Memory()
        assert len(mem.snapshot()) == MEMORY_SIZE

    def test_font_loaded(self):
        """Font glyphs sit at the font base, program area is empty."""
        mem = Memory()
        snap = mem.snapshot()
        assert snap[FONT_BASE:FONT_BASE + 80] == FONTSET
        assert snap[PROGRAM_START:] == bytes(MEMORY_SIZE - PROGRAM_START)

    def test_font_address(self):
        assert font_address(0) == FONT_BASE
        assert font_address(0xA) == FONT_BASE + 50
        assert font_address(0x1F) == FONT_BASE + 75

    def test_write_and_read(self):
        mem = Memory()
        mem.write_byte(0x300, 42)
        assert mem.read_byte(0x300) == 42

    def test_address_wraps(self):
        """Addresses are masked to 12 bits."""
        mem = Memory()
        mem.write_byte(0x1300, 7)
        assert mem.read_byte(0x300) == 7
        assert mem.read_byte(0xF300) == 7

    def test_value_truncated(self):
        mem = Memory()
        mem.write_byte(0x300, 0x1AB)
        assert mem.read_byte(0x300) == 0xAB

    def test_read_range_wraps(self):
        mem = Memory()
        mem.write_byte(0xFFF, 0x11)
        assert mem.read_range(0xFFF, 3) == bytes([0x11, 0xF0, 0x90])

    def test_write_range(self):
        mem = Memory()
        mem.write_range(PROGRAM_START, b"\x60\x0A")
        assert mem.read_byte(0x200) == 0x60
        assert mem.read_byte(0x201) == 0x0A

    def test_write_range_exact_fit(self):
        mem = Memory()
        mem.write_range(PROGRAM_START, b"\xAA" * (MEMORY_SIZE - PROGRAM_START))
        assert mem.read_byte(0xFFF) == 0xAA

    def test_write_range_too_large(self):
        """Oversized writes fail and leave memory untouched."""
        mem = Memory()
        before = mem.snapshot()
        with pytest.raises(LoadError):
            mem.write_range(PROGRAM_START, b"\xAA" * (MEMORY_SIZE - PROGRAM_START + 1))
        assert mem.snapshot() == before

    def test_clear_restores_font(self):
        mem = Memory()
        mem.write_byte(0x000, 0)
        mem.write_byte(0x400, 5)
        mem.clear()
        assert mem.read_byte(0x000) == 0xF0
        assert mem.read_byte(0x400) == 0

    def test_snapshot_is_copy(self):
        mem = Memory()
        snap = mem.snapshot()
        mem.write_byte(0x300, 1)
        assert snap[0x300] == 0
