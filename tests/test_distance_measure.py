from __future__ import annotations

import pytest

from admm.distance import DistanceMeasure, build_optimizer
from admm.interfaces import PotentialOptimizer, SupportsGlobalAssignment
from admm.linear_hinge import LinearHingeLossOptimizer
from admm.squared_hinge import SquaredHingeLossOptimizer
from admm.state import LocalBlockState


def _state() -> LocalBlockState:
    return LocalBlockState(term_id=2, coefficients=[1.0], constant=0.0, weight=1.0, z_indices=(0,))


@pytest.mark.parametrize(
    "name,expected",
    [
        ("linear", DistanceMeasure.LINEAR),
        ("Squared", DistanceMeasure.SQUARED),
        (" SQUARED ", DistanceMeasure.SQUARED),
    ],
)
def test_parse_is_case_insensitive(name, expected) -> None:
    assert DistanceMeasure.parse(name) is expected


def test_parse_rejects_unknown_measure() -> None:
    with pytest.raises(ValueError, match="valid measures are: linear, squared"):
        DistanceMeasure.parse("cubic")


def test_default_and_str() -> None:
    assert DistanceMeasure.default() is DistanceMeasure.SQUARED
    assert str(DistanceMeasure.LINEAR) == "linear"


def test_build_optimizer_by_measure() -> None:
    assert isinstance(build_optimizer(DistanceMeasure.LINEAR, _state()), LinearHingeLossOptimizer)
    assert isinstance(build_optimizer("squared", _state()), SquaredHingeLossOptimizer)
    assert isinstance(build_optimizer(None, _state()), SquaredHingeLossOptimizer)


def test_built_optimizers_satisfy_protocols() -> None:
    for measure in DistanceMeasure:
        opt = build_optimizer(measure, _state())
        assert isinstance(opt, PotentialOptimizer)
        assert isinstance(opt, SupportsGlobalAssignment)
        assert opt.kind == measure.value


def test_build_optimizer_passes_minimizer() -> None:
    def minimizer(objective, seed):
        return seed

    opt = build_optimizer("linear", _state(), minimizer=minimizer)
    assert opt.minimizer is minimizer
