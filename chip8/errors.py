"""Custom exceptions for the CHIP-8 emulator."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorInfo:
    """Structured error information for API responses."""
    type: str
    message: str
    pc: int
    opcode: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "message": self.message,
            "pc": self.pc,
            "opcode": None if self.opcode is None else f"{self.opcode:04X}",
        }


class CHIP8Error(Exception):
    """Base exception for all CHIP-8 errors."""

    def __init__(
        self,
        message: str,
        pc: int = 0,
        opcode: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.pc = pc
        self.opcode = opcode

    def to_error_info(self) -> ErrorInfo:
        return ErrorInfo(
            type=self.__class__.__name__,
            message=self.message,
            pc=self.pc,
            opcode=self.opcode,
        )


class LoadError(CHIP8Error):
    """Program image does not fit in memory or cannot be read."""
    pass


class InvalidKeyIndex(CHIP8Error):
    """Key index outside the 16-key keypad."""
    pass


class CHIP8RuntimeError(CHIP8Error):
    """Fatal error during program execution."""
    pass


class StackOverflow(CHIP8RuntimeError):
    """CALL with a full stack."""
    pass


class StackUnderflow(CHIP8RuntimeError):
    """RET with an empty stack."""
    pass


class UnknownOpcode(CHIP8RuntimeError):
    """Opcode outside the CHIP-8 instruction set."""
    pass


class MachineHalted(CHIP8RuntimeError):
    """Step requested after a fatal error, before reset."""
    pass
