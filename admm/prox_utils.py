"""Closed-form proximal kernels for hinge-loss potentials.

All kernels minimize  potential(x) + (ρ/2)||x - v||^2  where v = z - y/ρ is the
candidate point of the ADMM augmented penalty.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

__all__ = [
    "prox_squared_hinge_scalar",
    "prox_squared_hinge_pair",
    "prox_linear_hinge",
]


def prox_squared_hinge_scalar(v0: float, c0: float, constant: float, weight: float, rho: float) -> float:
    """Active-branch prox for w*(c0 x - k)^2 + (ρ/2)(x - v0)^2.

    Stationarity: 2w c0 (c0 x - k) + ρ (x - v0) = 0, so the right-hand side is
    ρ*v0 + 2w c0 k. Formulations that add 2w c0 k to v0 without the factor ρ
    agree with this only at ρ = 1.
    """
    x0 = rho * v0 + 2.0 * weight * c0 * constant
    x0 /= 2.0 * weight * c0 * c0 + rho
    return float(x0)


def prox_squared_hinge_pair(
    v0: float,
    v1: float,
    c0: float,
    c1: float,
    constant: float,
    weight: float,
    rho: float,
) -> Tuple[float, float]:
    """Active-branch prox for w*(c·x - k)^2 + (ρ/2)||x - v||^2 on two variables.

    Solves the 2x2 system [[a0, a1b0], [a1b0, b1]] x = ρv + c*(2wk) by eliminating
    x0 from the second row, then back-substituting. The candidate enters scaled
    by ρ; dropping that factor is only correct at ρ = 1.
    """
    a0 = 2.0 * weight * c0 * c0 + rho
    b1 = 2.0 * weight * c1 * c1 + rho
    a1b0 = 2.0 * weight * c0 * c1
    shift = 2.0 * weight * constant
    x0 = rho * v0 + c0 * shift
    x1 = rho * v1 + c1 * shift
    # a0*b1 - a1b0^2 = ρ(ρ + 2w(c0^2 + c1^2)) > 0
    x1 -= a1b0 * x0 / a0
    x1 /= b1 - a1b0 * a1b0 / a0
    x0 -= a1b0 * x1
    x0 /= a0
    return float(x0), float(x1)


def prox_linear_hinge(
    v: np.ndarray,
    coeffs: np.ndarray,
    constant: float,
    weight: float,
    rho: float,
) -> Tuple[np.ndarray, str]:
    """Prox for w*max(c·x - k, 0) + (ρ/2)||x - v||^2 for any arity.

    Returns the solution and which branch produced it: "inactive", "interior"
    (hinge active at the optimum) or "projection" (optimum on the kink c·x = k).
    """
    total = float(coeffs.dot(v))
    if total <= constant:
        return v.copy(), "inactive"
    shifted = v - (weight / rho) * coeffs
    if float(coeffs.dot(shifted)) >= constant:
        return shifted, "interior"
    # ||c||^2 > 0 here: with c == 0 the shift is a no-op and the branch above returns
    norm_sq = float(coeffs.dot(coeffs))
    return v - ((total - constant) / norm_sq) * coeffs, "projection"
