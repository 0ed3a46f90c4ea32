from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

Pos = Tuple[int, int]
Successors = List[List[Optional[Pos]]]

# Symbols that mean "no action here": blank, wall, win, lose
NO_ACTION = frozenset(".#WX")


class Direction(Enum):
    UP = "U"
    DOWN = "D"
    LEFT = "L"
    RIGHT = "R"

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTA[self]

    @classmethod
    def parse(cls, symbol: str) -> "Direction":
        try:
            return cls(symbol.upper())
        except ValueError:
            raise ValueError(f"unknown direction symbol {symbol!r}") from None


_DELTA = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


def successor(pos: Pos, direction: Direction, shape: Tuple[int, int]) -> Optional[Pos]:
    """Cell reached by moving one step from pos; None if that leaves the grid."""
    dr, dc = direction.delta
    nr, nc = pos[0] + dr, pos[1] + dc
    if 0 <= nr < shape[0] and 0 <= nc < shape[1]:
        return nr, nc
    return None


@dataclass
class DeterministicPolicy:
    """
    Fixed deterministic policy as a 2-D array of successor cells.

    successors[r][c] is the cell the policy moves to from (r, c), or None for
    terminals, walls and dead ends.
    """

    successors: Successors

    def __post_init__(self) -> None:
        self.successors = [list(row) for row in self.successors]
        if not self.successors:
            raise ValueError("policy must have at least one row")
        widths = {len(row) for row in self.successors}
        if len(widths) != 1:
            raise ValueError(f"policy rows have uneven lengths: {sorted(widths)}")
        for row in self.successors:
            for i, a in enumerate(row):
                if a is None:
                    continue
                if len(a) != 2:
                    raise ValueError(f"successor {a!r} is not a (row, col) pair")
                row[i] = (int(a[0]), int(a[1]))

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.successors), len(self.successors[0])

    def __getitem__(self, pos: Pos) -> Optional[Pos]:
        r, c = pos
        return self.successors[r][c]

    def defined_states(self) -> Iterator[Tuple[Pos, Pos]]:
        """(state, successor) pairs in row-major order."""
        for r, row in enumerate(self.successors):
            for c, a in enumerate(row):
                if a is not None:
                    yield (r, c), a

    @classmethod
    def from_directions(
        cls, lines: Sequence[str], shape: Optional[Tuple[int, int]] = None
    ) -> "DeterministicPolicy":
        """
        Translate rows of direction symbols (U/D/L/R) into successor cells.
        '.', '#', 'W' and 'X' mean no action. Directions that would
        leave the grid are dropped (no successor). Whitespace between symbols
        is ignored, so "R R D" and "RRD" are equivalent.
        """
        rows = ["".join(line.split()) for line in lines]
        if shape is None:
            shape = (len(rows), len(rows[0]) if rows else 0)
        if len(rows) != shape[0]:
            raise ValueError(f"expected {shape[0]} policy rows, got {len(rows)}")

        succ: Successors = []
        for r, row in enumerate(rows):
            if len(row) != shape[1]:
                raise ValueError(f"policy row {r} has {len(row)} symbols, expected {shape[1]}")
            out: List[Optional[Pos]] = []
            for c, sym in enumerate(row):
                if sym in NO_ACTION:
                    out.append(None)
                else:
                    out.append(successor((r, c), Direction.parse(sym), shape))
            succ.append(out)
        return cls(succ)

    def to_directions(self) -> List[str]:
        """Inverse of from_directions for moves of one step; '.' elsewhere."""
        symbols = {d.delta: d.value for d in Direction}
        lines = []
        for r, row in enumerate(self.successors):
            chars = []
            for c, a in enumerate(row):
                chars.append("." if a is None else symbols.get((a[0] - r, a[1] - c), "?"))
            lines.append("".join(chars))
        return lines


def policy_from_directions(
    lines: Sequence[str], shape: Optional[Tuple[int, int]] = None
) -> DeterministicPolicy:
    return DeterministicPolicy.from_directions(lines, shape)
