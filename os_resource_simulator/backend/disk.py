"""
Disk head scheduling: FCFS, SSTF, SCAN and C-SCAN.

Each algorithm returns the ordered list of cylinders the head visits,
starting with the head position. SCAN and C-SCAN sweep toward higher
cylinders first and touch the last cylinder before turning around.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Any

from .core import ValidationError, require_int, validate_int_sequence


class DiskAlgorithm:
    FCFS = "FCFS"
    SSTF = "SSTF"
    SCAN = "SCAN"
    CSCAN = "CSCAN"

    ALL = (FCFS, SSTF, SCAN, CSCAN)


@dataclass
class DiskScheduleResult:
    algorithm: str
    head: int
    path: List[int]

    @property
    def total_seek(self) -> int:
        return total_seek(self.path)

    def to_dict(self) -> Dict[str, Any]:
        return {"path": list(self.path), "totalSeek": self.total_seek}


def total_seek(path: Sequence[int]) -> int:
    return sum(abs(b - a) for a, b in zip(path, path[1:]))


def path_fcfs(requests: Sequence[int], head: int) -> List[int]:
    return [head, *requests]


def path_sstf(requests: Sequence[int], head: int) -> List[int]:
    remaining = list(requests)
    current = head
    path = [current]
    while remaining:
        idx = min(range(len(remaining)), key=lambda i: (abs(remaining[i] - current), remaining[i]))
        current = remaining.pop(idx)
        path.append(current)
    return path


def path_scan(requests: Sequence[int], head: int, max_cylinder: int) -> List[int]:
    if not requests:
        return [head]
    above = sorted(r for r in requests if r >= head)
    below = sorted((r for r in requests if r < head), reverse=True)
    path = [head, *above]
    if path[-1] != max_cylinder:
        path.append(max_cylinder)
    return path + below


def path_cscan(requests: Sequence[int], head: int, max_cylinder: int) -> List[int]:
    if not requests:
        return [head]
    above = sorted(r for r in requests if r >= head)
    below = sorted(r for r in requests if r < head)
    path = [head, *above]
    if path[-1] != max_cylinder:
        path.append(max_cylinder)
    if path[-1] != 0 and not (below and below[0] == 0):
        path.append(0)
    return path + below


def normalize_algorithm(algorithm: str) -> str:
    key = str(algorithm).upper().replace("-", "").replace("_", "")
    if key not in DiskAlgorithm.ALL:
        raise ValidationError(f"Unknown disk scheduling algorithm: {algorithm!r} (expected FCFS, SSTF, SCAN or C-SCAN)")
    return key


def simulate_disk(
    requests: Sequence[int],
    head: int,
    max_cylinder: int = 199,
    algorithm: str = DiskAlgorithm.FCFS,
) -> DiskScheduleResult:
    key = normalize_algorithm(algorithm)
    require_int("max cylinder", max_cylinder, minimum=0)
    require_int("head", head, minimum=0)
    if head > max_cylinder:
        raise ValidationError(f"head must be <= {max_cylinder}, got {head}")
    reqs = validate_int_sequence("requests", requests, minimum=0, maximum=max_cylinder)

    if key == DiskAlgorithm.FCFS:
        path = path_fcfs(reqs, head)
    elif key == DiskAlgorithm.SSTF:
        path = path_sstf(reqs, head)
    elif key == DiskAlgorithm.SCAN:
        path = path_scan(reqs, head, max_cylinder)
    else:
        path = path_cscan(reqs, head, max_cylinder)
    return DiskScheduleResult(algorithm=key, head=head, path=path)
