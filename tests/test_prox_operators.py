from __future__ import annotations

import numpy as np
import pytest

from admm.prox_utils import prox_linear_hinge, prox_squared_hinge_pair, prox_squared_hinge_scalar


def test_prox_squared_hinge_scalar_worked_example() -> None:
    # w=1, ρ=1, c=1, k=0, v=2 -> 2/3
    assert prox_squared_hinge_scalar(2.0, 1.0, 0.0, weight=1.0, rho=1.0) == pytest.approx(2.0 / 3.0)


def test_prox_squared_hinge_scalar_zero_coefficient_is_identity() -> None:
    assert prox_squared_hinge_scalar(0.4, 0.0, -1.0, weight=5.0, rho=2.0) == pytest.approx(0.4)


def test_prox_squared_hinge_pair_matches_linear_solve() -> None:
    v = np.array([0.3, -0.8])
    c = np.array([1.5, -0.5])
    w, rho, k = 0.7, 1.3, -0.2
    A = 2.0 * w * np.outer(c, c) + rho * np.eye(2)
    rhs = rho * v + 2.0 * w * k * c
    expected = np.linalg.solve(A, rhs)
    x0, x1 = prox_squared_hinge_pair(v[0], v[1], c[0], c[1], k, weight=w, rho=rho)
    assert np.allclose([x0, x1], expected, atol=1e-12)


def test_prox_squared_hinge_pair_zero_weight_is_identity() -> None:
    x0, x1 = prox_squared_hinge_pair(0.1, 0.9, 2.0, 3.0, 0.0, weight=0.0, rho=0.5)
    assert (x0, x1) == pytest.approx((0.1, 0.9))


def test_prox_linear_hinge_branches() -> None:
    c = np.array([1.0, 1.0])
    x, branch = prox_linear_hinge(np.array([0.2, 0.2]), c, 1.0, weight=1.0, rho=1.0)
    assert branch == "inactive" and np.allclose(x, [0.2, 0.2])
    x, branch = prox_linear_hinge(np.array([3.0, 3.0]), c, 1.0, weight=1.0, rho=1.0)
    assert branch == "interior" and np.allclose(x, [2.0, 2.0])
    x, branch = prox_linear_hinge(np.array([0.6, 0.6]), c, 1.0, weight=1.0, rho=1.0)
    assert branch == "projection" and np.allclose(x, [0.5, 0.5])


def test_prox_squared_hinge_scalar_scales_candidate_by_step_size() -> None:
    v0, c0, k, w, rho = 2.0, 1.0, 0.5, 1.0, 4.0
    x = prox_squared_hinge_scalar(v0, c0, k, weight=w, rho=rho)
    assert 2.0 * w * c0 * (c0 * x - k) + rho * (x - v0) == pytest.approx(0.0, abs=1e-12)
    unscaled = (v0 + 2.0 * w * c0 * k) / (2.0 * w * c0 * c0 + rho)
    assert x != pytest.approx(unscaled)
