from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional


def _env_flag(name: str) -> bool:
    return bool(int(os.getenv(name, "0") or "0"))


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


def _env_optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


@dataclass(frozen=True)
class VMConfig:
    # One DEBUG line per executed instruction on the ``intcode.trace`` logger.
    trace: bool = False
    # Capacity of each pipeline channel; ``None`` = unbounded.
    channel_capacity: Optional[int] = None
    # Seconds to wait for every stage of a network; ``None`` = wait forever.
    join_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if self.channel_capacity is not None and self.channel_capacity < 1:
            raise ValueError("channel_capacity must be >= 1 or None")
        if self.join_timeout is not None and self.join_timeout <= 0:
            raise ValueError("join_timeout must be > 0 or None")

    @classmethod
    def from_env(cls) -> "VMConfig":
        """Build a config from ``INTCODE_TRACE``, ``INTCODE_CHANNEL_CAPACITY`` and ``INTCODE_JOIN_TIMEOUT``."""
        return cls(
            trace=_env_flag("INTCODE_TRACE"),
            channel_capacity=_env_optional_int("INTCODE_CHANNEL_CAPACITY"),
            join_timeout=_env_optional_float("INTCODE_JOIN_TIMEOUT"),
        )

    def with_trace(self, trace: bool = True) -> "VMConfig":
        return replace(self, trace=trace)


__all__ = ["VMConfig"]
