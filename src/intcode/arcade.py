"""Arcade cabinet: a stateful port that turns output triples into a screen.

Every three writes form ``(x, y, value)``.  ``(-1, 0, score)`` updates the
score; anything else paints ``Tile(value)`` at ``(x, y)``.  Reads return the
joystick position that keeps the paddle under the ball.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from .config import VMConfig
from .debug import dbg, is_enabled
from .executor import Executor
from .tape import MemoryTape

Coord = Tuple[int, int]


class Tile(IntEnum):
    EMPTY = 0
    WALL = 1
    BLOCK = 2
    PADDLE = 3
    BALL = 4


GLYPHS = {
    Tile.EMPTY: " ",
    Tile.WALL: "#",
    Tile.BLOCK: "=",
    Tile.PADDLE: "_",
    Tile.BALL: "o",
}

UNKNOWN_GLYPH = "?"

SCORE_POSITION: Coord = (-1, 0)


class ArcadePort:
    def __init__(self) -> None:
        self.score = 0
        self.tiles: Dict[Coord, Union[Tile, int]] = {}
        self._pending: List[int] = []

    def write(self, value: int) -> None:
        self._pending.append(value)
        if len(self._pending) < 3:
            return
        x, y, v = self._pending
        self._pending = []
        if (x, y) == SCORE_POSITION:
            self.score = v
            if is_enabled():
                dbg("arcade").debug("score %d", v)
        else:
            try:
                self.tiles[(x, y)] = Tile(v)
            except ValueError:
                # unknown ids are kept as-is and drawn as UNKNOWN_GLYPH
                self.tiles[(x, y)] = v

    def read(self) -> int:
        """Joystick: -1 left, 0 neutral, +1 right."""
        ball = self.center(Tile.BALL)
        paddle = self.center(Tile.PADDLE)
        if ball < paddle:
            return -1
        if ball > paddle:
            return 1
        return 0

    # ------------------------------------------------------------------
    def center(self, tile: Tile) -> int:
        """Horizontal centre of every cell holding ``tile``; -1 if there is none."""
        xs = [x for (x, _), t in self.tiles.items() if t is tile]
        if not xs:
            return -1
        return (min(xs) + max(xs)) // 2

    def count(self, tile: Tile) -> int:
        return sum(1 for t in self.tiles.values() if t is tile)

    def count_blocks(self) -> int:
        return self.count(Tile.BLOCK)

    def render(self) -> str:
        """ASCII picture of the screen, one text row per y."""
        if not self.tiles:
            return ""
        coords = np.array(list(self.tiles.keys()), dtype=np.int64)
        values = np.array([int(t) for t in self.tiles.values()], dtype=np.int64)
        x0, y0 = coords.min(axis=0)
        x1, y1 = coords.max(axis=0)
        grid = np.zeros((y1 - y0 + 1, x1 - x0 + 1), dtype=np.int64)
        grid[coords[:, 1] - y0, coords[:, 0] - x0] = values
        glyphs = np.array([GLYPHS[t] for t in Tile] + [UNKNOWN_GLYPH])
        grid = np.where((grid >= 0) & (grid < len(Tile)), grid, len(Tile))
        return "\n".join("".join(row) for row in glyphs[grid])


def run_cabinet(
    program: Union[MemoryTape, Iterable[int]],
    *,
    free_play: bool = False,
    config: Optional[VMConfig] = None,
) -> ArcadePort:
    """Run an arcade program to completion and return the final screen state."""
    tape = program if isinstance(program, MemoryTape) else MemoryTape(program)
    if free_play:
        # Two quarters in address 0 switch the cabinet to free play.
        tape.set(0, 2)
    port = ArcadePort()
    Executor(tape, port, config=config, name="arcade").run()
    if is_enabled():
        dbg("arcade").debug("cabinet halted: %d blocks left, score %d", port.count_blocks(), port.score)
    return port


__all__ = ["Tile", "ArcadePort", "run_cabinet", "GLYPHS", "UNKNOWN_GLYPH"]
