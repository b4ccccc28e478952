"""Host keyboard to CHIP-8 keypad mapping.

The CHIP-8 keypad

    1 2 3 C
    4 5 6 D
    7 8 9 E
    A 0 B F

is laid over the left-hand block of a QWERTY keyboard:

    1 2 3 4
    Q W E R
    A S D F
    Z X C V
"""

from typing import Optional

KEYMAP: dict[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


def key_to_button(name: str) -> Optional[int]:
    """Keypad index for a host key name, or None if the key is unmapped."""
    return KEYMAP.get(name.lower())
