"""Toy consensus-ADMM sweep over a handful of grounded rules.

Usage:
    python -m examples.consensus_demo --iters 50 --rho 1.0 --run-id demo

The loop here stands in for the outer driver: it slices the global consensus
vector, runs one proximal step per term, averages the local copies back into
the consensus vector and updates the scaled duals. It runs a fixed number of
iterations and prints the primal residual trace.
"""

from __future__ import annotations

import argparse
from typing import Dict, List, Tuple

import numpy as np

from admm.base import OptimizerBase
from admm.distance import build_optimizer
from admm.state import LocalBlockState
from admm_logging.observability import ProximalStepTracker

# (coefficients, constant, weight, z_indices, measure)
RuleSpec = Tuple[List[float], float, float, List[int], str]

# Truth values of three atoms A, B, C in [0, 1]:
#   A -> B  (squared),  B -> C  (linear),  A & B -> C  (squared),  prior !A (squared)
DEMO_RULES: List[RuleSpec] = [
    ([1.0, -1.0], 0.0, 2.0, [0, 1], "squared"),
    ([1.0, -1.0], 0.0, 1.0, [1, 2], "linear"),
    ([1.0, 1.0, -1.0], 1.0, 0.5, [0, 1, 2], "squared"),
    ([1.0], 0.0, 0.1, [0], "squared"),
]


def build_terms(rules: List[RuleSpec], z0: np.ndarray, rho: float) -> List[OptimizerBase]:
    z_map: Dict[int, float] = {i: float(v) for i, v in enumerate(z0)}
    terms: List[OptimizerBase] = []
    for term_id, (coeffs, constant, weight, idx, measure) in enumerate(rules):
        state = LocalBlockState.from_consensus_map(term_id, coeffs, constant, weight, idx, z_map, step_size=rho)
        terms.append(build_optimizer(measure, state))
    return terms


def run(iters: int, rho: float, run_id: str, z0: np.ndarray) -> np.ndarray:
    assert iters >= 1, "iters must be >= 1"
    terms = build_terms(DEMO_RULES, z0, rho)
    tracker = ProximalStepTracker(run_id=run_id)
    tracker.attach_all(terms)
    z = z0.copy()
    for it in range(iters):
        for t in terms:
            t.solve_proximal_step(z[list(t.z_indices)])
        total = np.zeros_like(z)
        count = np.zeros_like(z)
        for t in terms:
            idx = list(t.z_indices)
            total[idx] += t.x + t.y / rho
            count[idx] += 1.0
        z = np.clip(np.where(count > 0, total / np.maximum(count, 1.0), z), 0.0, 1.0)
        resid = 0.0
        for t in terms:
            r = t.x - z[list(t.z_indices)]
            t.set_dual(t.y + rho * r)
            resid += float(r.dot(r))
        if it % 10 == 0 or it == iters - 1:
            print(f"iter={it:4d} primal_resid={resid ** 0.5:.3e} z={np.round(z, 4).tolist()}")
    out = tracker.flush()
    if out is not None:
        print(f"Wrote {tracker.step} step records to {out}")
    return z


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--iters", type=int, default=50)
    parser.add_argument("--rho", type=float, default=1.0, help="ADMM step size shared by all terms")
    parser.add_argument("--run-id", type=str, default="consensus_demo")
    parser.add_argument("--z0", type=float, nargs=3, default=[0.9, 0.2, 0.5], help="Initial truth values of A B C")
    args = parser.parse_args()
    run(args.iters, args.rho, args.run_id, np.asarray(args.z0, dtype=float))


if __name__ == "__main__":
    main()
