"""Linear hinge-loss potential: w * max(c·x - k, 0)."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .base import OptimizerBase
from .prox_utils import prox_linear_hinge

__all__ = ["LinearHingeLossOptimizer"]


class LinearHingeLossOptimizer(OptimizerBase):
    """Soft rule penalized linearly in its violation; closed-form prox for any arity."""

    kind = "linear"

    def _value_and_grad(self, point: np.ndarray) -> Tuple[float, np.ndarray]:
        coeffs = self.state.coefficients
        gap = float(coeffs.dot(point)) - self.state.constant
        if gap > 0.0:
            return self.state.weight * gap, coeffs * self.state.weight
        return 0.0, np.zeros_like(coeffs)

    def _proximal_solution(self, candidate: np.ndarray) -> Tuple[np.ndarray, str]:
        s = self.state
        return prox_linear_hinge(candidate, s.coefficients, s.constant, s.weight, s.step_size)
