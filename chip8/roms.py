"""ROM file loading."""

import logging
from pathlib import Path
from typing import Optional, Union

from .errors import LoadError
from .memory import MEMORY_SIZE, PROGRAM_START

logger = logging.getLogger(__name__)

MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START

# Classic public-domain games
DEFAULT_ROMS = [
    "15PUZZLE",
    "BLINKY",
    "BLITZ",
    "BRIX",
    "CONNECT4",
    "GUESS",
    "HIDDEN",
    "INVADERS",
    "KALEID",
    "MAZE",
    "MERLIN",
    "MISSILE",
    "PONG",
    "PONG2",
    "PUZZLE",
    "SYZYGY",
    "TANK",
    "TETRIS",
    "TICTAC",
    "UFO",
    "VBRIX",
    "VERS",
    "WIPEOFF",
]


def check_rom_size(data: bytes) -> None:
    if len(data) > MAX_ROM_SIZE:
        raise LoadError(f"ROM is {len(data)} bytes; limit is {MAX_ROM_SIZE}")


def read_rom(path: Union[str, Path]) -> bytes:
    """Read a ROM image from disk, rejecting images that cannot fit."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise LoadError(f"Cannot read ROM {path}: {e}") from e
    check_rom_size(data)
    logger.debug("Read ROM %s (%d bytes)", path, len(data))
    return data


def list_roms(directory: Union[str, Path]) -> list[str]:
    """Names of the regular files in DIRECTORY, sorted."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(p.name for p in directory.iterdir() if p.is_file())


def default_rom(directory: Union[str, Path]) -> Optional[str]:
    """First of DEFAULT_ROMS present in DIRECTORY, or None."""
    available = set(list_roms(directory))
    for name in DEFAULT_ROMS:
        if name in available:
            return name
    return None
