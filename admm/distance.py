"""Distance measures selecting the potential kind of a grounded rule."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Type, Union

from .base import OptimizerBase
from .interfaces import ConvexMinimizer
from .linear_hinge import LinearHingeLossOptimizer
from .squared_hinge import SquaredHingeLossOptimizer
from .state import LocalBlockState

__all__ = ["DistanceMeasure", "build_optimizer"]


class DistanceMeasure(str, Enum):
    LINEAR = "linear"
    SQUARED = "squared"

    @classmethod
    def default(cls) -> "DistanceMeasure":
        return cls.SQUARED

    @classmethod
    def parse(cls, name: str) -> "DistanceMeasure":
        """Case-insensitive lookup by name."""
        lower = str(name).strip().lower()
        for measure in cls:
            if measure.value == lower:
                return measure
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Could not parse distance measure '{name}', valid measures are: {valid}")

    def __str__(self) -> str:
        return self.value


_OPTIMIZERS: Dict[DistanceMeasure, Type[OptimizerBase]] = {
    DistanceMeasure.LINEAR: LinearHingeLossOptimizer,
    DistanceMeasure.SQUARED: SquaredHingeLossOptimizer,
}


def build_optimizer(
    measure: Union[DistanceMeasure, str, None],
    state: LocalBlockState,
    minimizer: Optional[ConvexMinimizer] = None,
) -> OptimizerBase:
    """Instantiate the optimizer for `measure` (default: squared) around `state`."""
    if measure is None:
        resolved = DistanceMeasure.default()
    elif isinstance(measure, DistanceMeasure):
        resolved = measure
    else:
        resolved = DistanceMeasure.parse(measure)
    return _OPTIMIZERS[resolved](state=state, minimizer=minimizer)
