"""Amplifier networks: several executors chained through channels.

Linear topology (``feedback=False``)::

    stimulus -> [amp0] -> [amp1] -> ... -> [ampN] -> tap

Feedback topology (``feedback=True``): the tap forwards every value it sees
back into ``amp0``'s input, and closes that input once ``ampN`` has halted.

Each stage runs in its own thread with a private tape.  A stage, whatever way
it stops, closes the channel feeding its successor and abandons its own input,
so no neighbour can block forever on it.  The network result is the last value
the tap observed.
"""

from __future__ import annotations

import itertools
import threading
import time
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .channel import Channel
from .config import VMConfig
from .debug import dbg, is_enabled, sample
from .errors import NetworkError, PortClosed, StageFailure
from .executor import Executor
from .ports import QueuePort

Program = Sequence[int]


class NetworkState(Enum):
    SEEDED = "seeded"
    RUNNING = "running"
    DRAINED = "drained"
    FAILED = "failed"


def _split_programs(programs: Union[Program, Sequence[Program]], count: int) -> List[Program]:
    items = list(programs)
    if items and all(isinstance(p, int) for p in items):
        return [items] * count
    if len(items) != count:
        raise ValueError(f"expected {count} programs, got {len(items)}")
    return [list(p) for p in items]


class AmplifierNetwork:
    """K executors wired stage to stage, optionally closed into a cycle."""

    def __init__(
        self,
        programs: Union[Program, Sequence[Program]],
        phases: Iterable[int],
        *,
        feedback: bool = False,
        stimulus: int = 0,
        config: Optional[VMConfig] = None,
    ) -> None:
        self.phases = tuple(int(p) for p in phases)
        if not self.phases:
            raise ValueError("an amplifier network needs at least one stage")
        self.feedback = feedback
        self.stimulus = stimulus
        self.config = config or VMConfig.from_env()
        self.state = NetworkState.SEEDED
        self.failures: List[StageFailure] = []
        self.observed: List[int] = []

        count = len(self.phases)
        cap = self.config.channel_capacity
        # The first input holds both the phase and the stimulus before anyone reads.
        self.inputs = [
            Channel(cap if cap is None or i else max(cap, 2), name=f"amp{i}.in")
            for i in range(count)
        ]
        self.tap = Channel(cap, name="tap")
        self.outputs = self.inputs[1:] + [self.tap]

        for channel, phase in zip(self.inputs, self.phases):
            channel.put(phase)
        self.inputs[0].put(stimulus)
        if not feedback:
            self.inputs[0].close()

        self.stages = [
            Executor(program, QueuePort(self.inputs[i], self.outputs[i]), config=self.config, name=f"amp{i}")
            for i, program in enumerate(_split_programs(programs, count))
        ]
        self._lock = threading.Lock()
        self._threads: List[threading.Thread] = []

    # ------------------------------------------------------------------
    @property
    def result(self) -> Optional[int]:
        with self._lock:
            return self.observed[-1] if self.observed else None

    def run(self, timeout: Optional[float] = None) -> int:
        """Run every stage to completion and return the last tapped value."""
        if self.state is not NetworkState.SEEDED:
            raise NetworkError(f"network already {self.state.value}")
        if timeout is None:
            timeout = self.config.join_timeout
        self.state = NetworkState.RUNNING
        if is_enabled():
            dbg("pipeline").debug("starting %d stage(s), phases=%s feedback=%s", len(self.stages), self.phases, self.feedback)

        self._threads = [
            threading.Thread(target=self._run_stage, args=(i,), name=f"amp{i}", daemon=True)
            for i in range(len(self.stages))
        ]
        self._threads.append(threading.Thread(target=self._drain_tap, name="tap", daemon=True))
        for t in self._threads:
            t.start()

        deadline = None if timeout is None else time.monotonic() + timeout
        for t in self._threads:
            t.join(None if deadline is None else max(0.0, deadline - time.monotonic()))
        if any(t.is_alive() for t in self._threads):
            self._abort()
            self.state = NetworkState.FAILED
            raise NetworkError(f"network did not drain within {timeout}s")

        if self.failures:
            self.state = NetworkState.FAILED
            self.failures.sort(key=lambda f: f.index)
            raise NetworkError("amplifier network failed", self.failures)
        if self.result is None:
            self.state = NetworkState.FAILED
            raise NetworkError("amplifier network produced no output")
        self.state = NetworkState.DRAINED
        return self.result

    # ------------------------------------------------------------------
    def _run_stage(self, index: int) -> None:
        stage = self.stages[index]
        try:
            stage.run()
        except Exception as exc:
            dbg("pipeline").warning("%s failed at pc %s: %s", stage.name, getattr(exc, "pc", "?"), exc)
            with self._lock:
                self.failures.append(StageFailure(index, exc))
        finally:
            self.outputs[index].close()
            self.inputs[index].abandon()

    def _drain_tap(self) -> None:
        forward = self.feedback
        while True:
            try:
                value = self.tap.get()
            except PortClosed:
                break
            with self._lock:
                self.observed.append(value)
            if forward:
                try:
                    self.inputs[0].put(value)
                except PortClosed:
                    # amp0 has halted; keep draining so the last stage can finish.
                    forward = False
        if self.feedback:
            self.inputs[0].close()
        if is_enabled():
            dbg("pipeline").debug("tap drained, observed %s", sample(self.observed))

    def _abort(self) -> None:
        for channel in self.inputs + [self.tap]:
            channel.abandon()


def run_amplifiers(
    program: Program,
    phases: Iterable[int],
    *,
    feedback: bool = False,
    stimulus: int = 0,
    config: Optional[VMConfig] = None,
) -> int:
    """Wire one amplifier per phase around ``program`` and return the final signal."""
    network = AmplifierNetwork(program, phases, feedback=feedback, stimulus=stimulus, config=config)
    return network.run()


def best_phase_setting(
    program: Program,
    phases: Iterable[int],
    *,
    feedback: bool = False,
    stimulus: int = 0,
    config: Optional[VMConfig] = None,
) -> Tuple[Tuple[int, ...], int]:
    """Try every ordering of ``phases``; return the ordering with the highest signal."""
    best: Optional[Tuple[Tuple[int, ...], int]] = None
    for order in itertools.permutations(tuple(phases)):
        signal = run_amplifiers(program, order, feedback=feedback, stimulus=stimulus, config=config)
        if best is None or signal > best[1]:
            best = (order, signal)
            if is_enabled():
                dbg("pipeline").debug("%s => %d", ",".join(map(str, order)), signal)
    if best is None:
        raise ValueError("no phases given")
    return best


__all__ = ["NetworkState", "AmplifierNetwork", "run_amplifiers", "best_phase_setting"]
