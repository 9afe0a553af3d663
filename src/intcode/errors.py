"""Exception taxonomy for the Intcode machine and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


class IntcodeError(Exception):
    """Base class for every failure raised by this package."""

    def __init__(self, message: str, *, pc: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.pc = pc


class LoadError(IntcodeError):
    """Program text holds a token that is not a 64-bit integer."""

    def __init__(self, token: str, position: int) -> None:
        super().__init__(f"failed to parse int {token!r} at position {position}")
        self.token = token
        self.position = position


class DecodeError(IntcodeError):
    """Unrecognised opcode or mode digit, or an instruction cut off by the end of the tape."""


class OperandError(IntcodeError):
    """A parameter resolved to something it may not be (immediate write target, negative address)."""


class RunawayError(IntcodeError):
    """The program counter left the tape without reaching a halt."""


class HaltedError(IntcodeError):
    """Raised when stepping an executor that has already halted."""


class PortClosed(IntcodeError):
    """End-of-stream on read, or consumer gone on write."""


class PortError(IntcodeError):
    """The executor still needed a port that reported :class:`PortClosed`."""


class ChannelError(IntcodeError):
    """Channel misuse: closing twice or writing after close."""


@dataclass(frozen=True)
class StageFailure:
    index: int
    error: BaseException

    def __str__(self) -> str:
        return f"stage {self.index}: {self.error}"


class NetworkError(IntcodeError):
    """An amplifier network could not produce a result."""

    def __init__(self, message: str, failures: Optional[List[StageFailure]] = None) -> None:
        if failures:
            message = message + ": " + "; ".join(str(f) for f in failures)
        super().__init__(message)
        self.failures: List[StageFailure] = list(failures or [])


__all__ = [
    "IntcodeError",
    "LoadError",
    "DecodeError",
    "OperandError",
    "RunawayError",
    "HaltedError",
    "PortClosed",
    "PortError",
    "ChannelError",
    "StageFailure",
    "NetworkError",
]
