"""Closable single-producer/single-consumer FIFO.

``queue.Queue`` has no notion of "the producer is done" or "the consumer is
gone", both of which the amplifier network needs so that a halting or failing
stage unblocks its neighbours.  :class:`Channel` adds them:

* ``close()``   producer side.  Queued values are still delivered, then
  ``get()`` raises :class:`~intcode.errors.PortClosed`.  Closing twice raises
  :class:`~intcode.errors.ChannelError`.
* ``abandon()`` consumer side.  Queued values are dropped and any blocked or
  future ``put()`` raises :class:`~intcode.errors.PortClosed`.  Idempotent.

``maxsize`` of ``None`` means unbounded.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Optional

from .debug import dbg, is_enabled
from .errors import ChannelError, PortClosed


class Channel:
    def __init__(self, maxsize: Optional[int] = None, *, name: str = "channel") -> None:
        if maxsize is not None and maxsize < 1:
            raise ValueError("maxsize must be >= 1 or None")
        self.maxsize = maxsize
        self.name = name
        self._items: Deque[int] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._abandoned = False

    def __repr__(self) -> str:
        state = "abandoned" if self._abandoned else "closed" if self._closed else "open"
        return f"Channel({self.name!r}, {state}, queued={len(self._items)})"

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def abandoned(self) -> bool:
        return self._abandoned

    # ------------------------------------------------------------------
    def put(self, value: int, timeout: Optional[float] = None) -> None:
        """Append ``value``, blocking while the channel is full."""
        with self._cond:
            if self._closed:
                raise ChannelError(f"{self.name}: put after close")
            ok = self._cond.wait_for(
                lambda: self._abandoned
                or self.maxsize is None
                or len(self._items) < self.maxsize,
                timeout,
            )
            if self._abandoned:
                raise PortClosed(f"{self.name}: consumer gone")
            if not ok:
                raise TimeoutError(f"{self.name}: put timed out")
            self._items.append(value)
            self._cond.notify_all()

    def get(self, timeout: Optional[float] = None) -> int:
        """Pop the oldest value, blocking until one arrives or the channel closes."""
        with self._cond:
            self._cond.wait_for(lambda: self._items or self._closed or self._abandoned, timeout)
            if self._items:
                value = self._items.popleft()
                self._cond.notify_all()
                return value
            if self._closed or self._abandoned:
                raise PortClosed(f"{self.name}: input closed")
            raise TimeoutError(f"{self.name}: get timed out")

    def close(self) -> None:
        with self._cond:
            if self._closed:
                raise ChannelError(f"{self.name}: closed twice")
            self._closed = True
            self._cond.notify_all()
        if is_enabled():
            dbg("channel").debug("%s: closed", self.name)

    def abandon(self) -> None:
        with self._cond:
            if self._abandoned:
                return
            self._abandoned = True
            dropped = len(self._items)
            self._items.clear()
            self._cond.notify_all()
        if is_enabled():
            dbg("channel").debug("%s: abandoned, %d queued value(s) dropped", self.name, dropped)


__all__ = ["Channel"]
