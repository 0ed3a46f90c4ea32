from __future__ import annotations

from typing import Optional, Tuple

Pos = Tuple[int, int]


class PolicyEvaluationError(Exception):
    """Base class for errors raised while evaluating a policy."""


class DimensionMismatch(PolicyEvaluationError, ValueError):
    """Validity mask, reward table and policy do not share a grid shape."""


class OutOfBoundsSuccessor(PolicyEvaluationError, IndexError):
    def __init__(self, state: Pos, successor: Pos, shape: Tuple[int, int]):
        self.state = state
        self.successor = successor
        self.shape = shape
        super().__init__(
            f"policy maps {state} to {successor}, outside grid of shape {shape}"
        )


class NonConvergence(PolicyEvaluationError, RuntimeError):
    def __init__(self, sweeps: int, residual: float, tolerance: Optional[float] = None):
        self.sweeps = sweeps
        self.residual = residual
        self.tolerance = tolerance
        msg = f"no convergence after {sweeps} sweeps (residual={residual:.3e}"
        if tolerance is not None:
            msg += f", tolerance={tolerance:.3e}"
        super().__init__(msg + ")")
