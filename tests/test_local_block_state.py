from __future__ import annotations

import numpy as np
import pytest

from admm.state import LocalBlockState, is_hard_rule_weight


def _params(**overrides):
    params = dict(
        term_id=0,
        coefficients=[1.0, -1.0],
        constant=0.0,
        weight=1.0,
        z_indices=(4, 9),
    )
    params.update(overrides)
    return params


def test_defaults_zero_vectors_and_unit_step() -> None:
    state = LocalBlockState(**_params())
    assert state.arity == 2
    assert state.step_size == 1.0
    for vec in (state.x, state.y, state.z):
        assert vec.dtype == np.float64
        assert vec.tolist() == [0.0, 0.0]
    assert state.z_indices == (4, 9)


def test_from_consensus_map_seeds_z_and_x() -> None:
    state = LocalBlockState.from_consensus_map(
        term_id=5,
        coefficients=[1.0, 2.0, 3.0],
        constant=1.0,
        weight=0.5,
        z_indices=[7, 2, 3],
        initial_z_map={2: 0.2, 3: 0.3, 7: 0.7, 8: 0.8},
        step_size=0.5,
    )
    assert state.z.tolist() == [0.7, 0.2, 0.3]
    assert state.x.tolist() == [0.7, 0.2, 0.3]
    assert state.y.tolist() == [0.0, 0.0, 0.0]
    state.x[0] = 1.0
    assert state.z[0] == pytest.approx(0.7)


def test_from_consensus_map_missing_index() -> None:
    with pytest.raises(ValueError, match="lacks"):
        LocalBlockState.from_consensus_map(
            term_id=1,
            coefficients=[1.0],
            constant=0.0,
            weight=1.0,
            z_indices=[3],
            initial_z_map={},
        )


def test_candidate_uses_scaled_dual() -> None:
    state = LocalBlockState(**_params(step_size=4.0, y=[2.0, -4.0], z=[1.0, 1.0]))
    assert state.candidate().tolist() == [0.5, 2.0]


@pytest.mark.parametrize(
    "overrides,match",
    [
        ({"coefficients": []}, "at least one"),
        ({"z_indices": (1,)}, "z_indices has length"),
        ({"z_indices": (3, 3)}, "duplicates"),
        ({"weight": -0.1}, "non-negative"),
        ({"weight": float("inf")}, "hard-rule"),
        ({"step_size": 0.0}, "step_size"),
        ({"step_size": -1.0}, "step_size"),
        ({"x": [0.0]}, "x has length"),
        ({"y": [0.0, 0.0, 0.0]}, "y has length"),
        ({"z": [1.0]}, "z has length"),
        ({"constant": float("nan")}, "constant"),
        ({"coefficients": [1.0, float("inf")]}, "coefficients"),
    ],
)
def test_construction_invariants(overrides, match) -> None:
    with pytest.raises(ValueError, match=match):
        LocalBlockState(**_params(**overrides))


def test_hard_rule_weight_detection() -> None:
    assert is_hard_rule_weight(float("inf"))
    assert is_hard_rule_weight(float("nan"))
    assert not is_hard_rule_weight(1e12)
    assert not is_hard_rule_weight(0.0)
