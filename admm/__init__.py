"""Per-term proximal optimizers for consensus ADMM over weighted rules."""

from .base import OptimizerBase, ProximalStepError, ProximalStepRecord
from .distance import DistanceMeasure, build_optimizer
from .linear_hinge import LinearHingeLossOptimizer
from .minimizers import MinimizerError, ScipyMinimizer
from .squared_hinge import SquaredHingeLossOptimizer
from .state import LocalBlockState, is_hard_rule_weight

__all__ = [
    "DistanceMeasure",
    "LinearHingeLossOptimizer",
    "LocalBlockState",
    "MinimizerError",
    "OptimizerBase",
    "ProximalStepError",
    "ProximalStepRecord",
    "ScipyMinimizer",
    "SquaredHingeLossOptimizer",
    "build_optimizer",
    "is_hard_rule_weight",
]
