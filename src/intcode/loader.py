"""Program text parsing: ``"1,9,10,3,2,3,11,0,99,30,40,50"`` -> ``[1, 9, ...]``."""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import List, TextIO, Union

from .errors import LoadError
from .tape import INT64_MAX, INT64_MIN

_INT = re.compile(r"[+-]?[0-9]+")


def parse_program(text: str) -> List[int]:
    """Parse comma-separated signed integers; whitespace around tokens is ignored."""
    program: List[int] = []
    for i, token in enumerate(text.strip().split(",")):
        if not _INT.fullmatch(token.strip()):
            raise LoadError(token, i)
        n = int(token.strip())
        if not INT64_MIN <= n <= INT64_MAX:
            raise LoadError(token, i)
        program.append(n)
    return program


def load_program(source: Union[str, Path, TextIO]) -> List[int]:
    """Load a program from a path, an open text stream, or ``"-"`` for stdin."""
    if isinstance(source, (str, Path)):
        if str(source) == "-":
            return parse_program(sys.stdin.read())
        return parse_program(Path(source).read_text())
    return parse_program(source.read())


__all__ = ["parse_program", "load_program"]
