"""Growable signed 64-bit memory for the Intcode machine.

:class:`MemoryTape` keeps its cells in a numpy ``int64`` buffer whose capacity
doubles on demand, so appends past the end stay amortised O(1).  The logical
length is tracked separately from the buffer capacity and only ever grows.

Reads and writes past the end are asymmetric::

    tape.get(len(tape) + 5)     # -> 0, length unchanged
    tape.set(len(tape) + 5, 1)  # grows, zero-fills the gap, stores 1
"""

from __future__ import annotations

from typing import Iterable, List

import numpy as np

from .errors import OperandError

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def wrap64(value: int) -> int:
    """Wrap an arbitrary Python int into signed 64-bit two's complement."""
    if INT64_MIN <= value <= INT64_MAX:
        return value
    return ((value - INT64_MIN) & 0xFFFF_FFFF_FFFF_FFFF) + INT64_MIN


class MemoryTape:
    """Zero-indexed, monotonically growing int64 memory."""

    def __init__(self, program: Iterable[int] = ()) -> None:
        cells = [wrap64(int(v)) for v in program]
        self._length = len(cells)
        self._buf = np.zeros(max(self._length, 1), dtype=np.int64)
        if cells:
            self._buf[: self._length] = cells

    @classmethod
    def from_text(cls, text: str) -> "MemoryTape":
        from .loader import parse_program

        return cls(parse_program(text))

    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        return int(self._buf.shape[0])

    def __repr__(self) -> str:
        return f"MemoryTape(len={self._length}, capacity={self.capacity})"

    # ------------------------------------------------------------------
    def get(self, addr: int) -> int:
        if addr < 0:
            raise OperandError(f"read from negative address {addr}")
        if addr >= self._length:
            return 0
        return int(self._buf[addr])

    def set(self, addr: int, value: int) -> None:
        if addr < 0:
            raise OperandError(f"write to negative address {addr}")
        if addr >= self._length:
            self._ensure_capacity(addr + 1)
            self._length = addr + 1
        self._buf[addr] = wrap64(int(value))

    def snapshot(self) -> List[int]:
        """Copy of the live cells as plain Python ints."""
        return [int(v) for v in self._buf[: self._length]]

    # ------------------------------------------------------------------
    def _ensure_capacity(self, size: int) -> None:
        cap = self.capacity
        if size <= cap:
            return
        while cap < size:
            cap *= 2
        try:
            grown = np.zeros(cap, dtype=np.int64)
        except (MemoryError, ValueError) as exc:
            raise OperandError(f"cannot grow tape to {size} cells: {exc}") from exc
        grown[: self._length] = self._buf[: self._length]
        self._buf = grown


__all__ = ["MemoryTape", "wrap64", "INT64_MIN", "INT64_MAX"]
