"""
Banker's Algorithm safety check.

Implements the static safety test for a resource-allocation snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Dict, Any

import numpy as np

from .core import ValidationError, is_int


@dataclass
class SafetyStep:
    process: int
    work_before: List[int]
    work_after: List[int]


@dataclass
class SafetyResult:
    safe: bool
    sequence: List[int]
    need: List[List[int]]
    steps: List[SafetyStep] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"safe": self.safe, "sequence": list(self.sequence), "need": [list(r) for r in self.need]}


def _check_vector(name: str, values: Sequence[int], length: int) -> None:
    if not isinstance(values, (list, tuple)):
        raise ValidationError(f"{name} must be a list of integers, got {values!r}")
    if len(values) != length:
        raise ValidationError(f"{name} has {len(values)} entries, expected {length}")
    for j, v in enumerate(values):
        if not is_int(v):
            raise ValidationError(f"{name}[{j}] must be an integer, got {v!r}")
        if v < 0:
            raise ValidationError(f"{name}[{j}] must be >= 0, got {v}")


def validate_state(available: Sequence[int], max_demand: Sequence[Sequence[int]],
                   allocation: Sequence[Sequence[int]]) -> None:
    """Check dimensions, signs and allocation <= max for a Banker's snapshot."""
    for name, value in (("available", available), ("max", max_demand), ("allocation", allocation)):
        if not isinstance(value, (list, tuple)):
            raise ValidationError(f"{name} must be a list, got {value!r}")
    m = len(available)
    _check_vector("available", available, m)
    if len(max_demand) != len(allocation):
        raise ValidationError(f"max has {len(max_demand)} rows but allocation has {len(allocation)}")
    for i, (max_row, alloc_row) in enumerate(zip(max_demand, allocation)):
        _check_vector(f"max[{i}]", max_row, m)
        _check_vector(f"allocation[{i}]", alloc_row, m)
        for j, (mx, al) in enumerate(zip(max_row, alloc_row)):
            if al > mx:
                raise ValidationError(f"allocation[{i}][{j}]={al} exceeds max[{i}][{j}]={mx}")


def compute_need(max_demand: Sequence[Sequence[int]], allocation: Sequence[Sequence[int]]) -> np.ndarray:
    """Need[i][j] = Max[i][j] - Allocation[i][j]"""
    n = len(max_demand)
    m = len(max_demand[0]) if n else 0
    return np.asarray(max_demand, dtype=np.int64).reshape(n, m) - np.asarray(allocation, dtype=np.int64).reshape(n, m)


def is_safe_state(available: Sequence[int], max_demand: Sequence[Sequence[int]],
                  allocation: Sequence[Sequence[int]]) -> SafetyResult:
    """
    Check whether a resource-allocation snapshot is safe.

    Algorithm:
    1. Work = Available, Finish = [False] * n
    2. Scan every unfinished process i in index order; if Need[i] <= Work,
       set Finish[i], add Allocation[i] to Work and append i to the sequence
    3. Repeat the scan while the previous one finished at least one process
    4. The state is safe iff every process finished

    Time Complexity: O(n^2 * m)

    Returns:
        SafetyResult; ``sequence`` is empty when the state is unsafe.
    """
    validate_state(available, max_demand, allocation)
    n, m = len(max_demand), len(available)
    need = compute_need(max_demand, allocation)
    alloc = np.asarray(allocation, dtype=np.int64).reshape(n, m)
    work = np.asarray(available, dtype=np.int64).copy()
    finish = np.zeros(n, dtype=bool)
    sequence: List[int] = []
    steps: List[SafetyStep] = []

    made_progress = True
    while made_progress:
        made_progress = False
        for i in range(n):
            if finish[i]:
                continue
            if np.all(need[i] <= work):
                before = work.tolist()
                work += alloc[i]
                finish[i] = True
                sequence.append(i)
                steps.append(SafetyStep(process=i, work_before=before, work_after=work.tolist()))
                made_progress = True

    safe = bool(finish.all())
    return SafetyResult(
        safe=safe,
        sequence=sequence if safe else [],
        need=need.tolist(),
        steps=steps,
    )
