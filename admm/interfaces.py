"""Interfaces for per-term ADMM proximal optimizers.

Exposes strict typed Protocols for potential optimizers and the injected
convex minimizer capability.
"""

from __future__ import annotations

from typing import Callable, Mapping, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np

__all__ = [
    "Vector",
    "DiffFunction",
    "ConvexMinimizer",
    "PotentialOptimizer",
    "SupportsGlobalAssignment",
]

Vector = np.ndarray

# Differentiable objective: point -> (value, gradient).
DiffFunction = Callable[[Vector], Tuple[float, Vector]]


@runtime_checkable
class ConvexMinimizer(Protocol):
    """Gradient-based minimizer for a differentiable convex objective."""

    def __call__(self, objective: DiffFunction, seed: Vector) -> Vector:
        """Return a minimizer of `objective` starting from `seed`."""
        ...


@runtime_checkable
class PotentialOptimizer(Protocol):
    """A grounded rule's potential with its local ADMM proximal step."""

    def set_consensus(self, global_slice: Sequence[float]) -> None:
        """Overwrite the local consensus view z with a pre-sliced global slice."""
        ...

    def evaluate(self, point: Sequence[float]) -> float:
        """Value of the potential alone at `point`."""
        ...

    def gradient(self, point: Sequence[float]) -> Vector:
        """Gradient of the potential alone at `point` (no ADMM penalty)."""
        ...

    def solve_proximal_step(self, consensus_slice: Sequence[float]) -> Vector:
        """Set z, minimize potential + augmented penalty, store and return x."""
        ...


@runtime_checkable
class SupportsGlobalAssignment(Protocol):
    """Optional diagnostics over a global assignment keyed by consensus index."""

    def evaluate_at(self, x_map: Mapping[int, float]) -> float:
        ...

    def gradient_at(self, x_map: Mapping[int, float]) -> Mapping[int, float]:
        ...
