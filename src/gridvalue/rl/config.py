from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path

from gridvalue.core.io import load_yaml, save_yaml


@dataclass
class EvalConfig:
    discount: float = 0.9  # gamma, in (0, 1]
    tolerance: float = 1e-3  # stop once a sweep changes no value by this much
    max_sweeps: int = 10_000  # guard against tolerances below float precision

    def __post_init__(self) -> None:
        self.discount = float(self.discount)
        self.tolerance = float(self.tolerance)
        self.max_sweeps = int(self.max_sweeps)
        if not 0.0 < self.discount <= 1.0:
            raise ValueError(f"discount must be in (0, 1], got {self.discount}")
        if not self.tolerance > 0.0:
            raise ValueError(f"tolerance must be > 0, got {self.tolerance}")
        if self.max_sweeps < 1:
            raise ValueError(f"max_sweeps must be >= 1, got {self.max_sweeps}")

    @classmethod
    def from_yaml(cls, path: Path | str) -> "EvalConfig":
        raw = load_yaml(path) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"{path}: expected a mapping, got {type(raw).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ValueError(f"{path}: unknown config keys {unknown}")
        return cls(**raw)

    def to_yaml(self, path: Path | str) -> None:
        save_yaml(path, asdict(self))
