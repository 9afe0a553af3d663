"""The Intcode execution engine.

:class:`Executor` runs the fetch/decode/execute cycle over a private
:class:`~intcode.tape.MemoryTape`.  All input and output goes through the
bound :class:`~intcode.ports.IOPort`; the executor does not know which kind
of port it is talking to.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional, Union

from .config import VMConfig
from .debug import dbg, is_enabled, sample
from .decoder import Instruction, Opcode, decode
from .errors import HaltedError, IntcodeError, PortClosed, PortError, RunawayError
from .ports import IOPort
from .tape import MemoryTape, wrap64


class Executor:
    """
    A single Intcode process: program counter, relative base and a tape.

    ``run()`` steps until opcode 99.  Every other way of stopping is an
    :class:`~intcode.errors.IntcodeError`.
    """

    def __init__(
        self,
        program: Union[MemoryTape, Iterable[int]],
        port: IOPort,
        *,
        config: Optional[VMConfig] = None,
        name: str = "intcode",
    ) -> None:
        self.tape = program if isinstance(program, MemoryTape) else MemoryTape(program)
        self.port = port
        self.config = config or VMConfig.from_env()
        self.name = name
        self.pc = 0
        self.relative_base = 0
        self.halted = False
        self.steps = 0
        self._handlers: Dict[Opcode, Callable[[Instruction], None]] = {
            Opcode.ADD: self._add,
            Opcode.MUL: self._mul,
            Opcode.INP: self._inp,
            Opcode.OUT: self._out,
            Opcode.JTR: self._jtr,
            Opcode.JFA: self._jfa,
            Opcode.LES: self._les,
            Opcode.EQU: self._equ,
            Opcode.BAS: self._bas,
            Opcode.RET: self._ret,
        }

    # ------------------------------------------------------------------
    def fetch(self) -> Instruction:
        if not 0 <= self.pc < len(self.tape):
            raise RunawayError(
                f"no operation: pc {self.pc} outside tape of length {len(self.tape)}", pc=self.pc
            )
        return decode(self.tape, self.pc, self.relative_base)

    def step(self) -> Instruction:
        """Execute exactly one instruction and return it."""
        if self.halted:
            raise HaltedError(f"{self.name} already halted", pc=self.pc)
        instr = self.fetch()
        self._handlers[instr.opcode](instr)
        self.steps += 1
        return instr

    def run(self) -> "Executor":
        if is_enabled():
            dbg("executor").debug("%s: starting, %d cells %s", self.name, len(self.tape), sample(self.tape.snapshot()))
        try:
            while not self.halted:
                self.step()
        except IntcodeError as exc:
            if exc.pc is None:
                exc.pc = self.pc
            if is_enabled():
                dbg("executor").debug("%s: stopped at pc %d after %d steps: %s", self.name, self.pc, self.steps, exc)
            raise
        if is_enabled():
            dbg("executor").debug("%s: halted after %d steps", self.name, self.steps)
        return self

    # ------------------------------------------------------------------
    def _trace(self, instr: Instruction, text: str) -> None:
        if self.config.trace:
            dbg("trace").debug("%4d: %s: %s", instr.pc, instr.mnemonic, text)

    def _store(self, instr: Instruction, value: int) -> int:
        value = wrap64(value)
        self.tape.set(instr.target(), value)
        return value

    def _add(self, instr: Instruction) -> None:
        a, b, _ = instr.params
        v = self._store(instr, a.value + b.value)
        self._trace(instr, f"{a} + {b} = {v} -> *{instr.target()}")
        self.pc += 4

    def _mul(self, instr: Instruction) -> None:
        a, b, _ = instr.params
        v = self._store(instr, a.value * b.value)
        self._trace(instr, f"{a} * {b} = {v} -> *{instr.target()}")
        self.pc += 4

    def _inp(self, instr: Instruction) -> None:
        try:
            v = self.port.read()
        except PortClosed as exc:
            raise PortError(f"{instr.mnemonic}: reading input: {exc}", pc=instr.pc) from exc
        v = self._store(instr, v)
        self._trace(instr, f"{v} -> *{instr.target()}")
        self.pc += 2

    def _out(self, instr: Instruction) -> None:
        (src,) = instr.params
        self._trace(instr, str(src))
        try:
            self.port.write(src.value)
        except PortClosed as exc:
            raise PortError(f"{instr.mnemonic}: writing output: {exc}", pc=instr.pc) from exc
        self.pc += 2

    def _jtr(self, instr: Instruction) -> None:
        cond, jump = instr.params
        if cond.value != 0:
            self._trace(instr, f"{cond} != 0 => {jump}")
            self.pc = jump.value
        else:
            self._trace(instr, f"{cond} == 0")
            self.pc += 3

    def _jfa(self, instr: Instruction) -> None:
        cond, jump = instr.params
        if cond.value == 0:
            self._trace(instr, f"{cond} == 0 => {jump}")
            self.pc = jump.value
        else:
            self._trace(instr, f"{cond} != 0")
            self.pc += 3

    def _les(self, instr: Instruction) -> None:
        a, b, _ = instr.params
        v = self._store(instr, 1 if a.value < b.value else 0)
        self._trace(instr, f"{a} < {b} = {v} -> *{instr.target()}")
        self.pc += 4

    def _equ(self, instr: Instruction) -> None:
        a, b, _ = instr.params
        v = self._store(instr, 1 if a.value == b.value else 0)
        self._trace(instr, f"{a} == {b} = {v} -> *{instr.target()}")
        self.pc += 4

    def _bas(self, instr: Instruction) -> None:
        (offset,) = instr.params
        before = self.relative_base
        self.relative_base = wrap64(before + offset.value)
        self._trace(instr, f"{before} + {offset} ~> {self.relative_base}")
        self.pc += 2

    def _ret(self, instr: Instruction) -> None:
        self._trace(instr, "halt")
        self.halted = True


def run_program(
    program: Union[MemoryTape, Iterable[int]],
    port: IOPort,
    *,
    config: Optional[VMConfig] = None,
) -> Executor:
    """Build an :class:`Executor` for ``program`` and run it to completion."""
    return Executor(program, port, config=config).run()


__all__ = ["Executor", "run_program"]
