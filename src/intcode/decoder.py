"""Instruction decoding.

An instruction word packs the opcode in its two low decimal digits and one
addressing-mode digit per parameter above them::

    1002  ->  opcode 02, modes (0, 1, 0)   read from right to left

:func:`decode` turns the word at ``pc`` into an :class:`Instruction` holding
fully resolved :class:`Parameter` records, so the executor never touches mode
digits itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional, Tuple

from .errors import DecodeError, OperandError
from .tape import MemoryTape


class Mode(IntEnum):
    POSITION = 0
    IMMEDIATE = 1
    RELATIVE = 2


class Opcode(IntEnum):
    ADD = 1
    MUL = 2
    INP = 3
    OUT = 4
    JTR = 5
    JFA = 6
    LES = 7
    EQU = 8
    BAS = 9
    RET = 99


@dataclass(frozen=True)
class OpSpec:
    arity: int
    writes: Optional[int] = None  # 1-based index of the write-target parameter


OPCODES: Dict[Opcode, OpSpec] = {
    Opcode.ADD: OpSpec(3, writes=3),
    Opcode.MUL: OpSpec(3, writes=3),
    Opcode.INP: OpSpec(1, writes=1),
    Opcode.OUT: OpSpec(1),
    Opcode.JTR: OpSpec(2),
    Opcode.JFA: OpSpec(2),
    Opcode.LES: OpSpec(3, writes=3),
    Opcode.EQU: OpSpec(3, writes=3),
    Opcode.BAS: OpSpec(1),
    Opcode.RET: OpSpec(0),
}


@dataclass(frozen=True)
class Parameter:
    mode: Mode
    raw: int
    value: int
    address: Optional[int] = None  # None only in immediate mode

    def __str__(self) -> str:
        if self.mode is Mode.IMMEDIATE:
            return str(self.value)
        if self.mode is Mode.POSITION:
            return f"(*{self.address} -> {self.value})"
        return f"(*{self.address}-{self.raw} -> {self.value})"


@dataclass(frozen=True)
class Instruction:
    pc: int
    word: int
    opcode: Opcode
    params: Tuple[Parameter, ...]

    @property
    def spec(self) -> OpSpec:
        return OPCODES[self.opcode]

    @property
    def size(self) -> int:
        return 1 + self.spec.arity

    @property
    def mnemonic(self) -> str:
        return f"{self.opcode.name.lower()}({int(self.opcode)})"

    def target(self) -> int:
        """Address of the write-target parameter."""
        index = self.spec.writes
        if index is None:
            raise DecodeError(f"{self.mnemonic} has no write target", pc=self.pc)
        address = self.params[index - 1].address
        if address is None:
            raise OperandError(f"{self.mnemonic} write target is a literal", pc=self.pc)
        return address


def mode_of(word: int, n: int) -> int:
    """Mode digit of the ``n``-th parameter (1-based) of ``word``."""
    return (word // 10 ** (n + 1)) % 10


def decode_parameter(
    tape: MemoryTape, pc: int, n: int, relative_base: int, *, write: bool = False
) -> Parameter:
    word = tape.get(pc)
    digit = mode_of(word, n)
    try:
        mode = Mode(digit)
    except ValueError:
        raise DecodeError(f"unrecognised mode {digit} for parameter {n} at position {pc}", pc=pc) from None
    raw = tape.get(pc + n)
    if mode is Mode.IMMEDIATE:
        if write:
            raise OperandError(f"wanted pointer but literal at position {pc + n}", pc=pc)
        return Parameter(mode, raw, raw)
    address = raw if mode is Mode.POSITION else relative_base + raw
    if address < 0:
        raise OperandError(f"negative address {address} at position {pc + n}", pc=pc)
    return Parameter(mode, raw, tape.get(address), address)


def decode(tape: MemoryTape, pc: int, relative_base: int = 0) -> Instruction:
    """Decode the instruction at ``pc`` into its tagged representation."""
    word = tape.get(pc)
    if word < 0:
        raise DecodeError(f"negative instruction word {word} at position {pc}", pc=pc)
    code = word % 100
    try:
        opcode = Opcode(code)
    except ValueError:
        raise DecodeError(f"unrecognised op {code} at position {pc}", pc=pc) from None
    spec = OPCODES[opcode]
    available = len(tape) - pc - 1
    if available < spec.arity:
        raise DecodeError(
            f"wanted {spec.arity} parameters but got {available} at position {pc}", pc=pc
        )
    params = tuple(
        decode_parameter(tape, pc, n, relative_base, write=(n == spec.writes))
        for n in range(1, spec.arity + 1)
    )
    return Instruction(pc, word, opcode, params)


__all__ = [
    "Mode",
    "Opcode",
    "OpSpec",
    "OPCODES",
    "Parameter",
    "Instruction",
    "mode_of",
    "decode_parameter",
    "decode",
]
