from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

Pos = Tuple[int, int]

WALL = "#"
OPEN = "."


@dataclass
class GridWorld:
    """
    Static grid world description for policy evaluation.

    - Coordinates: (row, col), row=0..rows-1 (top to bottom), col=0..cols-1 (left to right)
    - Walls: cells that are not states; never evaluated
    - Terminals: dict[(row, col)] = reward for ENTERING that cell; no successor
    - Step reward: reward for entering any other valid cell

    Builds two same-shaped arrays:
      valid   [rows, cols] bool
      rewards [rows, cols] float64 (0.0 on walls, unused)
    """

    rows: int = 3
    cols: int = 4
    walls: Iterable[Pos] = ((1, 1),)
    terminals: Dict[Pos, float] = None
    step_reward: float = -0.1

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"grid must be non-empty, got {self.rows}x{self.cols}")
        if self.terminals is None:
            # win at top-right, lose just below it
            self.terminals = {(0, self.cols - 1): 1.0, (1, self.cols - 1): -1.0}

        self._walls = {tuple(p) for p in self.walls}
        for p in self._walls:
            if not self.in_bounds(p):
                raise ValueError(f"wall {p} is outside the grid")
        for p in self.terminals:
            if not self.in_bounds(p):
                raise ValueError(f"terminal {p} is outside the grid")
            if p in self._walls:
                raise ValueError(f"terminal {p} cannot be a wall")

        self.valid = np.ones((self.rows, self.cols), dtype=bool)
        for r, c in self._walls:
            self.valid[r, c] = False

        self.rewards = np.where(self.valid, float(self.step_reward), 0.0).astype(np.float64)
        for (r, c), rew in self.terminals.items():
            self.rewards[r, c] = float(rew)

    @classmethod
    def from_layout(
        cls,
        lines: Sequence[str],
        terminals: Dict[Pos, float],
        step_reward: float = -0.1,
    ) -> "GridWorld":
        """
        Build from text rows, e.g. ["....", ".#..", "...."]; '#' marks a wall,
        '.' an open cell. Whitespace inside a row is ignored.
        """
        rows = ["".join(line.split()) for line in lines]
        if not rows or not rows[0]:
            raise ValueError("layout must have at least one non-empty row")
        cols = len(rows[0])
        walls: List[Pos] = []
        for r, row in enumerate(rows):
            if len(row) != cols:
                raise ValueError(f"layout row {r} has {len(row)} cells, expected {cols}")
            for c, ch in enumerate(row):
                if ch == WALL:
                    walls.append((r, c))
                elif ch != OPEN:
                    raise ValueError(f"unknown layout symbol {ch!r} at {(r, c)}")
        return cls(
            rows=len(rows),
            cols=cols,
            walls=tuple(walls),
            terminals=dict(terminals),
            step_reward=step_reward,
        )

    # ---------- basic properties ----------

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def in_bounds(self, pos: Pos) -> bool:
        r, c = pos
        return 0 <= r < self.rows and 0 <= c < self.cols

    def is_valid(self, pos: Pos) -> bool:
        return self.in_bounds(pos) and bool(self.valid[pos])

    def is_terminal(self, pos: Pos) -> bool:
        return tuple(pos) in self.terminals

    def positions(self) -> List[Pos]:
        """Valid cells in row-major order."""
        return [(r, c) for r in range(self.rows) for c in range(self.cols) if self.valid[r, c]]

    def to_layout(self) -> List[str]:
        return ["".join(OPEN if self.valid[r, c] else WALL for c in range(self.cols)) for r in range(self.rows)]
