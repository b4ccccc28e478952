"""Delay and sound timers."""


class Timers:
    """Two 8-bit countdown timers, decremented only by tick()."""

    def __init__(self):
        self.delay: int = 0
        self.sound: int = 0

    def set_delay(self, value: int) -> None:
        self.delay = value & 0xFF

    def set_sound(self, value: int) -> None:
        self.sound = value & 0xFF

    @property
    def sound_active(self) -> bool:
        return self.sound > 0

    def tick(self) -> None:
        """Decrement both timers by one, floored at zero."""
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0
