"""Logging switches for the Intcode package.

Use `enable(True)` (or set env INTCODE_DEBUG=1) to attach a stream handler to
the ``intcode`` logger. Trace output of executed instructions goes to the
``intcode.trace`` child logger at DEBUG level; INTCODE_TRACE=1 switches the
handler on as well so the trace is visible. The package imports this module
first, so both variables take effect on ``import intcode``.

Helpers:
- dbg(name): namespaced logger under "intcode.<name>"
- enable(flag): turn logging on/off globally
- is_enabled(): check global flag
- sample(seq, n): preview first/last items for readable dumps

By default, logging is quiet: the ``intcode`` logger carries a NullHandler.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Any, Iterable

ROOT = "intcode"
FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _env_flag(name: str) -> bool:
    return bool(int(os.getenv(name, "0") or "0"))


_ENABLED = _env_flag("INTCODE_DEBUG") or _env_flag("INTCODE_TRACE")
_LOCK = threading.Lock()

logging.getLogger(ROOT).addHandler(logging.NullHandler())


def enable(flag: bool = True, *, level: int = logging.DEBUG) -> None:
    """Enable or disable debug logging for the whole ``intcode`` namespace."""
    global _ENABLED
    with _LOCK:
        _ENABLED = bool(flag)
        lg = logging.getLogger(ROOT)
        if _ENABLED:
            if not any(type(h) is logging.StreamHandler for h in lg.handlers):
                h = logging.StreamHandler()
                h.setFormatter(logging.Formatter(fmt=FORMAT, datefmt="%H:%M:%S"))
                lg.addHandler(h)
            lg.setLevel(level)
        else:
            for h in [h for h in lg.handlers if type(h) is logging.StreamHandler]:
                lg.removeHandler(h)
            lg.setLevel(logging.WARNING)


def is_enabled() -> bool:
    return _ENABLED


def dbg(name: str) -> logging.Logger:
    """Return a child logger under the intcode namespace."""
    if _ENABLED and not logging.getLogger(ROOT).isEnabledFor(logging.DEBUG):
        enable(True)
    return logging.getLogger(f"{ROOT}.{name}")


def sample(seq: Iterable[Any], n: int = 6) -> str:
    """Return a short preview of a sequence."""
    lst = list(seq)
    if len(lst) <= n:
        return repr(lst)
    head = ", ".join(repr(x) for x in lst[: n // 2])
    tail = ", ".join(repr(x) for x in lst[-(n - n // 2):])
    return f"[{head}, ..., {tail}] (n={len(lst)})"


if _ENABLED:
    enable(True)


__all__ = ["enable", "is_enabled", "dbg", "sample"]
