"""Shared logic for per-term proximal optimizers.

An optimizer holds one `LocalBlockState` and solves, per ADMM iteration,

    argmin_x  potential(x) + (ρ/2) ||x - z + y/ρ||^2

Concrete potentials supply `_value_and_grad` (the potential alone) and
`_proximal_solution` (the minimizer given the candidate z - y/ρ). The outer
driver owns slicing of the global consensus vector and the y-updates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .interfaces import ConvexMinimizer, Vector
from .minimizers import MinimizerError, default_minimizer
from .state import LocalBlockState

__all__ = ["OptimizerBase", "ProximalStepError", "ProximalStepRecord", "StepCallback"]


class ProximalStepError(RuntimeError):
    """A proximal step could not be completed; x is left untouched."""

    def __init__(self, term_id: int, message: str) -> None:
        super().__init__(f"term {term_id}: {message}")
        self.term_id = term_id


@dataclass(frozen=True)
class ProximalStepRecord:
    term_id: int
    kind: str
    arity: int
    branch: str
    potential: float
    primal_shift: float


StepCallback = Callable[[ProximalStepRecord], None]


@dataclass(repr=False, eq=False)
class OptimizerBase(ABC):
    """Per-term optimizer with simple event hooks."""

    state: LocalBlockState
    minimizer: Optional[ConvexMinimizer] = None
    on_step_completed: List[StepCallback] = field(default_factory=list)

    kind: ClassVar[str] = "base"

    # --- accessors ---
    @property
    def term_id(self) -> int:
        return self.state.term_id

    @property
    def x(self) -> np.ndarray:
        return self.state.x

    @property
    def y(self) -> np.ndarray:
        return self.state.y

    @property
    def z(self) -> np.ndarray:
        return self.state.z

    @property
    def coefficients(self) -> np.ndarray:
        return self.state.coefficients

    @property
    def constant(self) -> float:
        return self.state.constant

    @property
    def weight(self) -> float:
        return self.state.weight

    @property
    def step_size(self) -> float:
        return self.state.step_size

    @property
    def z_indices(self) -> Tuple[int, ...]:
        return self.state.z_indices

    @property
    def arity(self) -> int:
        return self.state.arity

    # --- driver-facing mutation ---
    def set_consensus(self, global_slice: Sequence[float]) -> None:
        z_new = self._check_length(global_slice, "consensus slice")
        self.state.z = z_new

    def set_dual(self, y: Sequence[float]) -> None:
        y_new = self._check_length(y, "dual vector")
        self.state.y = y_new

    # --- potential ---
    @abstractmethod
    def _value_and_grad(self, point: np.ndarray) -> Tuple[float, np.ndarray]:
        """Value and gradient of the potential alone."""

    @abstractmethod
    def _proximal_solution(self, candidate: np.ndarray) -> Tuple[np.ndarray, str]:
        """Minimizer of potential + penalty given the candidate, and the branch that produced it."""

    def evaluate(self, point: Sequence[float]) -> float:
        value, _ = self._value_and_grad(self._check_length(point, "point"))
        return float(value)

    def gradient(self, point: Sequence[float]) -> Vector:
        _, grad = self._value_and_grad(self._check_length(point, "point"))
        return grad

    def augmented_objective(self, point: np.ndarray) -> Tuple[float, np.ndarray]:
        """Potential plus (ρ/2)||x - z + y/ρ||^2, with its gradient."""
        d = np.asarray(point, dtype=float)
        rho = self.state.step_size
        value, grad = self._value_and_grad(d)
        resid = d - self.state.z + self.state.y / rho
        value = float(value) + 0.5 * rho * float(resid.dot(resid))
        grad = grad + (d - self.state.z) * rho + self.state.y
        return value, grad

    # --- global-assignment diagnostics ---
    def _local_point(self, x_map: Mapping[int, float]) -> np.ndarray:
        return np.array([float(x_map[i]) for i in self.state.z_indices], dtype=float)

    def evaluate_at(self, x_map: Mapping[int, float]) -> float:
        return self.evaluate(self._local_point(x_map))

    def gradient_at(self, x_map: Mapping[int, float]) -> Dict[int, float]:
        grad = self.gradient(self._local_point(x_map))
        return {idx: float(g) for idx, g in zip(self.state.z_indices, grad)}

    # --- proximal step ---
    def solve_proximal_step(self, consensus_slice: Sequence[float]) -> Vector:
        """Set z from the slice, solve the local proximal problem, store x and return it."""
        self.set_consensus(consensus_slice)
        candidate = self.state.candidate()
        x_old = self.state.x
        try:
            x_new, branch = self._proximal_solution(candidate)
        except MinimizerError as exc:
            raise ProximalStepError(self.term_id, str(exc)) from exc
        x_new = np.asarray(x_new, dtype=float).reshape(-1)
        assert x_new.shape[0] == self.arity, "proximal solution has wrong length"
        self.state.x = x_new
        self._emit_step(branch, x_old, x_new)
        return x_new

    def _minimize_augmented(self, seed: np.ndarray) -> np.ndarray:
        minimizer = self.minimizer if self.minimizer is not None else default_minimizer()
        return np.asarray(minimizer(self.augmented_objective, seed.copy()), dtype=float)

    def _emit_step(self, branch: str, x_old: np.ndarray, x_new: np.ndarray) -> None:
        if not self.on_step_completed:
            return
        record = ProximalStepRecord(
            term_id=self.term_id,
            kind=self.kind,
            arity=self.arity,
            branch=branch,
            potential=self.evaluate(x_new),
            primal_shift=float(np.linalg.norm(x_new - x_old)),
        )
        for cb in self.on_step_completed:
            cb(record)

    def _check_length(self, values: Sequence[float], name: str) -> np.ndarray:
        arr = np.array(values, dtype=float).reshape(-1)
        assert arr.shape[0] == self.arity, f"{name} length {arr.shape[0]} != arity {self.arity}"
        return arr

    def __repr__(self) -> str:
        s = self.state
        return (
            f"{self.__class__.__name__}(x={s.x.tolist()}, y={s.y.tolist()}, z={s.z.tolist()}, "
            f"coeffs={s.coefficients.tolist()}, constant={s.constant}, z_indices={list(s.z_indices)})"
        )
