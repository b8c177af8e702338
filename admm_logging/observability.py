from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from admm.base import OptimizerBase, ProximalStepRecord
from admm_logging.metrics_log import log_records


@dataclass
class ProximalStepTracker:
    """Attach to optimizer step hooks and log proximal-step traces to Polars CSV.

    Usage:
        tracker = ProximalStepTracker(run_id="demo")
        tracker.attach_all(optimizers)
        for opt, zs in zip(optimizers, slices):
            opt.solve_proximal_step(zs)
        tracker.flush()
    """
    name: str = "proximal_steps"
    run_id: str = "default"
    log_dir: Optional[Path] = None
    buffer: List[Dict[str, Any]] = field(default_factory=list)
    step: int = 0
    branch_counts: Dict[str, int] = field(default_factory=dict)

    def attach(self, optimizer: OptimizerBase) -> None:
        optimizer.on_step_completed.append(self.on_step)

    def attach_all(self, optimizers: Iterable[OptimizerBase]) -> None:
        for opt in optimizers:
            self.attach(opt)

    def on_step(self, record: ProximalStepRecord) -> None:
        self.step += 1
        self.branch_counts[record.branch] = self.branch_counts.get(record.branch, 0) + 1
        self.buffer.append({
            "run_id": self.run_id,
            "step": int(self.step),
            "term_id": int(record.term_id),
            "kind": record.kind,
            "arity": int(record.arity),
            "branch": record.branch,
            "potential": float(record.potential),
            "primal_shift": float(record.primal_shift),
        })

    def flush(self) -> Optional[Path]:
        if not self.buffer:
            return None
        out = log_records(self.name, self.buffer, log_dir=self.log_dir)
        self.buffer.clear()
        return out
