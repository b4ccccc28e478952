"""Keypad state for the CHIP-8 emulator."""

from typing import Optional

from .errors import InvalidKeyIndex

NUM_KEYS = 16


class Keypad:
    """Sixteen latched keys plus the FX0A awaiting-key state.

    While a register is awaiting a key, the first key that goes from
    released to pressed is remembered until the machine collects it with
    take_awaited_key(). Keys already held when the wait starts do not count.
    """

    def __init__(self):
        self._keys: list[bool] = [False] * NUM_KEYS
        self.awaiting_register: Optional[int] = None
        self._awaited_key: Optional[int] = None

    def set_key(self, index: int, pressed: bool) -> None:
        """Update one key; rejects indexes outside 0-15."""
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < NUM_KEYS:
            raise InvalidKeyIndex(f"Key index out of range: {index!r}")
        was_pressed = self._keys[index]
        self._keys[index] = bool(pressed)
        if (
            self.awaiting_register is not None
            and self._awaited_key is None
            and pressed
            and not was_pressed
        ):
            self._awaited_key = index

    def is_pressed(self, index: int) -> bool:
        return self._keys[index & 0xF]

    def pressed_keys(self) -> list[int]:
        return [k for k, down in enumerate(self._keys) if down]

    @property
    def awaiting(self) -> bool:
        return self.awaiting_register is not None

    def await_key(self, register: int) -> None:
        """Enter awaiting-key mode for REGISTER."""
        self.awaiting_register = register
        self._awaited_key = None

    def take_awaited_key(self) -> Optional[tuple[int, int]]:
        """Return (register, key) and leave awaiting mode if a key arrived."""
        if self.awaiting_register is None or self._awaited_key is None:
            return None
        result = (self.awaiting_register, self._awaited_key)
        self.awaiting_register = None
        self._awaited_key = None
        return result

    def reset(self) -> None:
        self._keys = [False] * NUM_KEYS
        self.awaiting_register = None
        self._awaited_key = None
