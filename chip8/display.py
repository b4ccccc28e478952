"""Monochrome frame buffer for the CHIP-8 emulator."""

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32


class Display:
    """64x32 pixel grid, changed only by clear() and blit()."""

    def __init__(self):
        self._grid: list[list[bool]] = [
            [False] * SCREEN_WIDTH for _ in range(SCREEN_HEIGHT)
        ]

    def clear(self) -> None:
        """Turn every pixel off."""
        for row in self._grid:
            row[:] = [False] * SCREEN_WIDTH

    def blit(self, x: int, y: int, sprite: bytes) -> bool:
        """XOR SPRITE onto the grid at (x, y), wrapping on both axes.

        Each sprite byte is one row of eight pixels, most significant bit
        leftmost. Returns True if any lit pixel was turned off.
        """
        collision = False
        for row_offset, bits in enumerate(sprite):
            row = self._grid[(y + row_offset) % SCREEN_HEIGHT]
            for col_offset in range(8):
                if not (bits >> (7 - col_offset)) & 1:
                    continue
                col = (x + col_offset) % SCREEN_WIDTH
                if row[col]:
                    collision = True
                row[col] = not row[col]
        return collision

    def pixel(self, x: int, y: int) -> bool:
        return self._grid[y % SCREEN_HEIGHT][x % SCREEN_WIDTH]

    @property
    def pixels(self) -> tuple[tuple[bool, ...], ...]:
        """Read-only copy of the grid, one tuple per row."""
        return tuple(tuple(row) for row in self._grid)

    def lit_count(self) -> int:
        return sum(sum(row) for row in self._grid)
