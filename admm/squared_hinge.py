"""Squared hinge-loss potential: w * max(c·x - k, 0)^2."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .base import OptimizerBase
from .prox_utils import prox_squared_hinge_pair, prox_squared_hinge_scalar

__all__ = ["SquaredHingeLossOptimizer"]


class SquaredHingeLossOptimizer(OptimizerBase):
    """Soft rule whose violation is penalized quadratically past the linear margin.

    The proximal step is solved in closed form for one and two local variables
    and by the injected minimizer for larger blocks.
    """

    kind = "squared"

    def _value_and_grad(self, point: np.ndarray) -> Tuple[float, np.ndarray]:
        coeffs = self.state.coefficients
        gap = float(coeffs.dot(point)) - self.state.constant
        if gap > 0.0:
            w = self.state.weight
            return w * gap * gap, coeffs * (2.0 * w * gap)
        return 0.0, np.zeros_like(coeffs)

    def _proximal_solution(self, candidate: np.ndarray) -> Tuple[np.ndarray, str]:
        s = self.state
        coeffs = s.coefficients
        if s.weight == 0.0 or float(coeffs.dot(candidate)) <= s.constant:
            return candidate, "inactive"
        if s.arity == 1:
            x0 = prox_squared_hinge_scalar(
                float(candidate[0]), float(coeffs[0]), s.constant, s.weight, s.step_size
            )
            return np.array([x0], dtype=float), "closed_form"
        if s.arity == 2:
            x0, x1 = prox_squared_hinge_pair(
                float(candidate[0]),
                float(candidate[1]),
                float(coeffs[0]),
                float(coeffs[1]),
                s.constant,
                s.weight,
                s.step_size,
            )
            return np.array([x0, x1], dtype=float), "closed_form"
        return self._minimize_augmented(candidate), "minimizer"
