import numpy as np
import pytest

from gridvalue.rl.gridworld import GridWorld


def test_default_grid_arrays():
    env = GridWorld()
    assert env.valid.shape == env.rewards.shape == (3, 4)
    assert not env.valid[1, 1]
    assert env.rewards[1, 1] == 0.0
    assert env.rewards[0, 3] == 1.0
    assert env.rewards[1, 3] == -1.0
    assert env.rewards[2, 0] == pytest.approx(-0.1)
    assert env.valid.dtype == bool and env.rewards.dtype == np.float64


def test_from_layout_roundtrip():
    lines = ["..#", "...", "#.."]
    env = GridWorld.from_layout(lines, terminals={(1, 2): 1.0}, step_reward=-0.04)
    assert env.shape == (3, 3)
    assert env.to_layout() == lines
    assert env.positions()[0] == (0, 0)
    assert (0, 2) not in env.positions()
    assert env.is_terminal((1, 2)) and not env.is_terminal((0, 0))
    assert not env.is_valid((0, 2)) and not env.is_valid((5, 5))


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(rows=0, cols=3, terminals={}),
        dict(rows=2, cols=2, walls=((2, 0),), terminals={}),
        dict(rows=2, cols=2, walls=(), terminals={(0, 5): 1.0}),
        dict(rows=2, cols=2, walls=((0, 0),), terminals={(0, 0): 1.0}),
    ],
)
def test_invalid_grids_raise(kwargs):
    with pytest.raises(ValueError):
        GridWorld(**kwargs)


def test_bad_layouts_raise():
    with pytest.raises(ValueError):
        GridWorld.from_layout(["...", ".."], terminals={})
    with pytest.raises(ValueError):
        GridWorld.from_layout(["..?"], terminals={})
    with pytest.raises(ValueError):
        GridWorld.from_layout([], terminals={})
