"""Generic convex minimizers injected into optimizers for blocks without a closed form.

Usage:
    minimizer = ScipyMinimizer()
    x = minimizer(objective, seed)   # objective: x -> (value, gradient)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import warnings

import numpy as np
from scipy.optimize import minimize

from .interfaces import DiffFunction, Vector

__all__ = ["MinimizerError", "ScipyMinimizer", "default_minimizer"]


class MinimizerError(RuntimeError):
    """Raised when the fallback minimizer fails to produce a usable point."""


@dataclass
class ScipyMinimizer:
    """Quasi-Newton minimization via `scipy.optimize.minimize` with analytic gradients.

    Tolerances are relative to the gradient at the seed, which for a hinge
    potential grows with the weight and ||c||^2; an absolute threshold would
    reject well-scaled points on heavily weighted rules.
    """

    method: str = "BFGS"
    tol: float = 1e-10
    max_iter: int = 1000
    accept_tol: Optional[float] = 1e-8

    def __post_init__(self) -> None:
        assert self.tol > 0.0, "tol must be > 0"
        assert self.max_iter >= 1, "max_iter must be >= 1"
        if self.accept_tol is not None:
            assert self.accept_tol >= self.tol, "accept_tol must be >= tol"

    def __call__(self, objective: DiffFunction, seed: Vector) -> Vector:
        x0 = np.asarray(seed, dtype=float).reshape(-1)

        def fun(d: np.ndarray):
            value, grad = objective(d)
            return float(value), np.asarray(grad, dtype=float)

        _, grad0 = fun(x0)
        scale = max(1.0, _inf_norm(grad0))
        try:
            result = minimize(
                fun,
                x0,
                jac=True,
                method=self.method,
                tol=self.tol * scale,
                options={"maxiter": int(self.max_iter)},
            )
        except (ValueError, FloatingPointError) as exc:
            raise MinimizerError(f"{self.method} raised during minimization: {exc}") from exc
        x = np.asarray(result.x, dtype=float)
        if not np.all(np.isfinite(x)):
            raise MinimizerError(f"{self.method} returned a non-finite point")
        _, grad = fun(x)
        grad_norm = _inf_norm(grad)
        if result.success or grad_norm <= self.tol * scale:
            return x
        # Precision loss or iteration cap with the gradient already negligible
        if self.accept_tol is not None and grad_norm <= self.accept_tol * scale:
            warnings.warn(
                f"{self.method} stopped early ({result.message}) with |grad|_inf={grad_norm:.3e} "
                f"(scale {scale:.3e}); accepting point.",
                RuntimeWarning,
                stacklevel=2,
            )
            return x
        raise MinimizerError(
            f"{self.method} did not converge: {result.message} (|grad|_inf={grad_norm:.3e}, scale {scale:.3e})"
        )


def _inf_norm(v: np.ndarray) -> float:
    return float(np.max(np.abs(v))) if v.size else 0.0


def default_minimizer() -> ScipyMinimizer:
    return ScipyMinimizer()
