from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from gridvalue.core.timers import Timer

from .config import EvalConfig
from .errors import DimensionMismatch, NonConvergence, OutOfBoundsSuccessor
from .policy import DeterministicPolicy, Pos

log = logging.getLogger("gridvalue.rl")

PolicyLike = Union[DeterministicPolicy, Sequence[Sequence[Optional[Pos]]]]


def _as_policy(policy: PolicyLike) -> DeterministicPolicy:
    if isinstance(policy, DeterministicPolicy):
        return policy
    return DeterministicPolicy(policy)


def _check_inputs(
    valid: np.ndarray, rewards: np.ndarray, policy: PolicyLike
) -> Tuple[np.ndarray, np.ndarray, DeterministicPolicy]:
    valid = np.asarray(valid, dtype=bool)
    rewards = np.asarray(rewards, dtype=np.float64)
    if valid.ndim != 2 or rewards.ndim != 2:
        raise DimensionMismatch(
            f"validity mask and rewards must be 2-D, got ndim {valid.ndim} and {rewards.ndim}"
        )
    try:
        pol = _as_policy(policy)
    except ValueError as e:
        raise DimensionMismatch(f"policy is not a rectangular grid: {e}") from e
    if not (valid.shape == rewards.shape == pol.shape):
        raise DimensionMismatch(
            f"shape mismatch: valid={valid.shape}, rewards={rewards.shape}, policy={pol.shape}"
        )

    rows, cols = valid.shape
    for s, a in pol.defined_states():
        # negative indices would silently wrap in numpy
        if not (0 <= a[0] < rows and 0 <= a[1] < cols):
            raise OutOfBoundsSuccessor(s, a, valid.shape)
    return valid, rewards, pol


def evaluate_policy(
    valid: np.ndarray,
    rewards: np.ndarray,
    policy: PolicyLike,
    discount: float = 0.9,
    tolerance: float = 1e-3,
    max_sweeps: int = 10_000,
    config: Optional[EvalConfig] = None,
) -> Tuple[np.ndarray, Dict[str, Any]]:
    """
    In-place iterative policy evaluation for a fixed deterministic policy.

    Each sweep visits cells in row-major order and, for every valid cell s with
    a successor a, sets V[s] = rewards[a] + discount * V[a]. The reward is the
    one for ENTERING a. Updates are applied immediately, so later cells in the
    same sweep see them. Cells without a successor keep V = 0.

    Stops after the first sweep whose largest change is below tolerance.
    If config is given it overrides discount/tolerance/max_sweeps.

    Returns (V, info) where:
      - V: value array with the grid's shape
      - info: {"sweeps": int, "residual": float, "history": [float], "elapsed": float}

    Raises DimensionMismatch, OutOfBoundsSuccessor, or NonConvergence after
    max_sweeps sweeps.
    """
    config = config or EvalConfig(discount, tolerance, max_sweeps)
    discount, tolerance, max_sweeps = config.discount, config.tolerance, config.max_sweeps

    valid, rewards, pol = _check_inputs(valid, rewards, policy)
    states = [(s, a) for s, a in pol.defined_states() if valid[s]]
    log.debug(
        "evaluating %d states on %dx%d grid (gamma=%g, tol=%g)",
        len(states), valid.shape[0], valid.shape[1], discount, tolerance,
    )

    V = np.zeros(valid.shape, dtype=np.float64)
    history: List[float] = []
    timer = Timer()
    for sweep in range(1, max_sweeps + 1):
        largest_change = 0.0
        for s, a in states:
            old_v = V[s]
            V[s] = rewards[a] + discount * V[a]
            largest_change = max(largest_change, abs(old_v - V[s]))
        history.append(float(largest_change))
        log.debug("sweep %d: largest change %.3e", sweep, largest_change)
        if largest_change < tolerance:
            info = {
                "sweeps": sweep,
                "residual": float(largest_change),
                "history": history,
                "elapsed": timer.elapsed,
            }
            log.info("converged after %d sweeps in %s", sweep, timer)
            return V, info

    log.warning("no convergence after %d sweeps (last change %.3e)", max_sweeps, history[-1])
    raise NonConvergence(max_sweeps, history[-1], tolerance)


def evaluate(
    valid: np.ndarray,
    rewards: np.ndarray,
    policy: PolicyLike,
    discount: float = 0.9,
    tolerance: float = 1e-3,
    max_sweeps: int = 10_000,
) -> np.ndarray:
    V, _ = evaluate_policy(valid, rewards, policy, discount, tolerance, max_sweeps)
    return V


def bellman_residual(
    V: np.ndarray,
    valid: np.ndarray,
    rewards: np.ndarray,
    policy: PolicyLike,
    discount: float = 0.9,
) -> float:
    """Largest |V[s] - (rewards[a] + discount * V[a])| over evaluated cells."""
    valid, rewards, pol = _check_inputs(valid, rewards, policy)
    V = np.asarray(V, dtype=np.float64)
    if V.shape != valid.shape:
        raise DimensionMismatch(f"V has shape {V.shape}, grid is {valid.shape}")
    res = 0.0
    for s, a in pol.defined_states():
        if valid[s]:
            res = max(res, abs(V[s] - (rewards[a] + discount * V[a])))
    return float(res)


def rollout(
    rewards: np.ndarray,
    policy: PolicyLike,
    start: Pos,
    discount: float = 1.0,
    max_steps: int = 100,
) -> Tuple[float, int, bool]:
    """
    Follow the policy once from start.
    Returns (discounted return, steps, reached_terminal).
    """
    rewards = np.asarray(rewards, dtype=np.float64)
    pol = _as_policy(policy)
    rows, cols = rewards.shape
    s = tuple(start)
    if not (0 <= s[0] < rows and 0 <= s[1] < cols):
        raise IndexError(f"start {s} is outside grid of shape {rewards.shape}")
    G = 0.0
    for t in range(max_steps):
        a = pol[s]
        if a is None:
            return G, t, True
        if not (0 <= a[0] < rows and 0 <= a[1] < cols):
            raise OutOfBoundsSuccessor(s, a, rewards.shape)
        G += discount**t * float(rewards[a])
        s = a
    return G, max_steps, pol[s] is None
