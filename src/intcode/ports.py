"""I/O ports: the only way an executor talks to the outside world.

An :class:`IOPort` is anything with ``read() -> int`` and ``write(int)``.  Both
signal end-of-stream (or a consumer that has gone away) by raising
:class:`~intcode.errors.PortClosed`; the executor turns that into a
:class:`~intcode.errors.PortError` that stops the program.
"""

from __future__ import annotations

import sys
from typing import Iterable, List, Optional, Protocol, TextIO

from .channel import Channel
from .errors import PortClosed


class IOPort(Protocol):
    def read(self) -> int: ...

    def write(self, value: int) -> None: ...


class ConsolePort:
    """Interactive port: one integer per line from stdin, one per line to stdout."""

    PROMPT = "Enter integer: "

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        prompt: str = PROMPT,
    ) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.prompt = prompt

    def read(self) -> int:
        while True:
            self.stdout.write(self.prompt)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                raise PortClosed("EOF")
            fields = line.split()
            if len(fields) != 1:
                print("Please provide one integer.", file=self.stderr)
                continue
            try:
                return int(fields[0])
            except ValueError as exc:
                print(exc, file=self.stderr)

    def write(self, value: int) -> None:
        print(value, file=self.stdout)


class QueuePort:
    """Port over two channels; used to chain amplifier stages."""

    def __init__(self, inbox: Channel, outbox: Channel) -> None:
        self.inbox = inbox
        self.outbox = outbox

    def read(self) -> int:
        return self.inbox.get()

    def write(self, value: int) -> None:
        self.outbox.put(value)


class ScriptedPort:
    """Feeds a fixed input sequence and records every output."""

    def __init__(self, inputs: Iterable[int] = ()) -> None:
        self._inputs = list(inputs)
        self._cursor = 0
        self.outputs: List[int] = []

    def read(self) -> int:
        if self._cursor >= len(self._inputs):
            raise PortClosed("input exhausted")
        value = self._inputs[self._cursor]
        self._cursor += 1
        return value

    def write(self, value: int) -> None:
        self.outputs.append(value)

    def feed(self, *values: int) -> None:
        self._inputs.extend(values)

    @property
    def last(self) -> Optional[int]:
        return self.outputs[-1] if self.outputs else None


__all__ = ["IOPort", "ConsolePort", "QueuePort", "ScriptedPort"]
