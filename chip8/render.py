"""Text rendering of the frame buffer."""

from typing import Sequence

Pixels = Sequence[Sequence[bool]]


def render_rows(pixels: Pixels, scale: int = 1) -> list[list[bool]]:
    """Upscale PIXELS so each pixel becomes a SCALE x SCALE block."""
    if scale < 1:
        raise ValueError(f"Scale must be at least 1, got {scale}")
    rows = []
    for row in pixels:
        wide = [bit for bit in row for _ in range(scale)]
        for _ in range(scale):
            rows.append(list(wide))
    return rows


def render_text(pixels: Pixels, scale: int = 1, on: str = "█", off: str = " ") -> str:
    """Paint the frame buffer as lines of text."""
    return "\n".join(
        "".join(on if bit else off for bit in row)
        for row in render_rows(pixels, scale)
    )


def to_bitstrings(pixels: Pixels) -> list[str]:
    """One "0"/"1" string per row."""
    return ["".join("1" if bit else "0" for bit in row) for row in pixels]
