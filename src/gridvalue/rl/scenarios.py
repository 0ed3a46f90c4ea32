from __future__ import annotations

from typing import Tuple

from .gridworld import GridWorld, Pos
from .policy import DeterministicPolicy


def from_one_indexed(pos: Tuple[int, int]) -> Pos:
    """(row, col) counted from 1 -> 0-indexed."""
    r, c = pos
    if r < 1 or c < 1:
        raise ValueError(f"1-indexed coordinates must be >= 1, got {pos}")
    return r - 1, c - 1


# 6 rows x 5 cols; win at (4, 4) and lose at (5, 3), counted from 1
TUTORIAL_WIN = from_one_indexed((4, 4))
TUTORIAL_LOSE = from_one_indexed((5, 3))
TUTORIAL_STEP_REWARD = -0.1

TUTORIAL_LAYOUT = (
    ". . . . .",
    ". # . # .",
    ". . . . .",
    ". # . . .",
    ". . . # .",
    ". . . . .",
)

# W/X mark the win/lose cells, '#' walls
TUTORIAL_POLICY = (
    "R R D L D",
    "D # D # D",
    "R R R D D",
    "U # U W L",
    "U R X # U",
    "U L U R U",
)


def tutorial_grid() -> GridWorld:
    return GridWorld.from_layout(
        TUTORIAL_LAYOUT,
        terminals={TUTORIAL_WIN: 1.0, TUTORIAL_LOSE: -1.0},
        step_reward=TUTORIAL_STEP_REWARD,
    )


def tutorial_policy() -> DeterministicPolicy:
    return DeterministicPolicy.from_directions(TUTORIAL_POLICY)
