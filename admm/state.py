"""Per-term ADMM block state: coefficients, threshold and the x/y/z vectors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

import math

import numpy as np

__all__ = ["LocalBlockState", "is_hard_rule_weight"]


def is_hard_rule_weight(weight: float) -> bool:
    """True for the 'effectively infinite' weight that marks a hard constraint."""
    return not math.isfinite(float(weight))


def _as_vector(values: Optional[Sequence[float]], n: int, name: str) -> np.ndarray:
    if values is None:
        return np.zeros(n, dtype=float)
    arr = np.array(values, dtype=float).reshape(-1)
    if arr.shape[0] != n:
        raise ValueError(f"{name} has length {arr.shape[0]}, expected {n}")
    return arr


@dataclass(eq=False)
class LocalBlockState:
    """Local variable block of one grounded rule.

    `coefficients`, `constant`, `weight`, `step_size` and `z_indices` are fixed
    at construction. `x` (primal), `y` (scaled dual) and `z` (local view of the
    consensus vector) mutate every ADMM iteration.
    """

    term_id: int
    coefficients: np.ndarray
    constant: float
    weight: float
    z_indices: Tuple[int, ...]
    step_size: float = 1.0
    x: Optional[np.ndarray] = None
    y: Optional[np.ndarray] = None
    z: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        self.term_id = int(self.term_id)
        coeffs = np.array(self.coefficients, dtype=float).reshape(-1)
        n = coeffs.shape[0]
        if n == 0:
            raise ValueError("a block needs at least one local variable")
        if not np.all(np.isfinite(coeffs)):
            raise ValueError("coefficients must be finite")
        self.coefficients = coeffs
        self.constant = float(self.constant)
        if not math.isfinite(self.constant):
            raise ValueError("constant must be finite")
        self.weight = float(self.weight)
        if is_hard_rule_weight(self.weight):
            raise ValueError(
                f"term {self.term_id} has a hard-rule weight; hard constraints are not solved by proximal optimizers"
            )
        if self.weight < 0.0:
            raise ValueError("weight must be non-negative")
        self.step_size = float(self.step_size)
        if not (self.step_size > 0.0 and math.isfinite(self.step_size)):
            raise ValueError("step_size must be > 0")
        idx = tuple(int(i) for i in self.z_indices)
        if len(idx) != n:
            raise ValueError(f"z_indices has length {len(idx)}, expected {n}")
        if len(set(idx)) != n:
            raise ValueError("z_indices must not contain duplicates")
        self.z_indices = idx
        self.x = _as_vector(self.x, n, "x")
        self.y = _as_vector(self.y, n, "y")
        self.z = _as_vector(self.z, n, "z")

    @classmethod
    def from_consensus_map(
        cls,
        term_id: int,
        coefficients: Sequence[float],
        constant: float,
        weight: float,
        z_indices: Sequence[int],
        initial_z_map: Mapping[int, float],
        step_size: float = 1.0,
    ) -> "LocalBlockState":
        """Build a block whose z (and starting x) are read from the initial consensus map."""
        missing = [int(i) for i in z_indices if int(i) not in initial_z_map]
        if missing:
            raise ValueError(f"initial consensus map lacks indices {missing}")
        z0 = [float(initial_z_map[int(i)]) for i in z_indices]
        return cls(
            term_id=term_id,
            coefficients=np.asarray(coefficients, dtype=float),
            constant=constant,
            weight=weight,
            z_indices=tuple(z_indices),
            step_size=step_size,
            x=list(z0),
            y=None,
            z=z0,
        )

    @property
    def arity(self) -> int:
        return int(self.coefficients.shape[0])

    def candidate(self) -> np.ndarray:
        """Unconstrained minimizer of the augmented penalty alone: z - y/step_size."""
        return self.z - self.y / self.step_size
