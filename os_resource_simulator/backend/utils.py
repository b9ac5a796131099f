from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, Sequence
import json
import csv

import pandas as pd

from .core import Process, ProcessMetrics, ScheduleSegment, ValidationError, validate_processes


# Reference workloads shown by default in every simulation view.
SAMPLE_PROCESSES: List[Process] = [
    Process(pid="P1", arrival=0, burst=7, priority=2),
    Process(pid="P2", arrival=2, burst=4, priority=1),
    Process(pid="P3", arrival=4, burst=1, priority=3),
    Process(pid="P4", arrival=5, burst=4, priority=2),
]
SAMPLE_QUANTUM = 2
SAMPLE_FRAME_COUNT = 3
SAMPLE_REFERENCES: List[int] = [7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2]
SAMPLE_DISK_QUEUE: List[int] = [98, 183, 37, 122, 14, 124, 65, 67]
SAMPLE_HEAD = 53
SAMPLE_MAX_CYLINDER = 199
SAMPLE_AVAILABLE: List[int] = [3, 3, 2]
SAMPLE_MAX: List[List[int]] = [[7, 5, 3], [3, 2, 2], [9, 0, 2], [2, 2, 2], [4, 3, 3]]
SAMPLE_ALLOCATION: List[List[int]] = [[0, 1, 0], [2, 0, 0], [3, 0, 2], [2, 1, 1], [0, 0, 2]]

GANTT_PALETTE = [
    "#93c5fd", "#fca5a5", "#fdba74", "#86efac", "#c4b5fd",
    "#f9a8d4", "#a5f3fc", "#fde68a", "#ddd6fe", "#bbf7d0",
]


class EventLogger:
    def __init__(self) -> None:
        self.process_events: List[Dict[str, Any]] = []
        self.timeline: List[Dict[str, Any]] = []

    def log_process_event(self, time_s: int, pid: str, event: str) -> None:
        self.process_events.append({
            "time": time_s,
            "pid": pid,
            "event": event,
        })

    def log_timeline_slice(self, start: int, end: int, pid: Optional[str], policy: str, reason: Optional[str] = None) -> None:
        self.timeline.append({
            "start": start,
            "end": end,
            "pid": pid,
            "policy": policy,
            "reason": reason,
        })

    def export_json(self, path: str) -> None:
        data = {
            "process_events": self.process_events,
            "timeline": self.timeline,
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def export_csv(self, base_path_no_ext: str) -> None:
        with open(f"{base_path_no_ext}_events.csv", "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=["time", "pid", "event"])
            writer.writeheader()
            for row in self.process_events:
                writer.writerow(row)
        with open(f"{base_path_no_ext}_timeline.csv", "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=["start", "end", "pid", "policy", "reason"])
            writer.writeheader()
            for row in self.timeline:
                writer.writerow(row)


@dataclass
class MetricsReport:
    metrics: List[ProcessMetrics] = field(default_factory=list)
    utilization: float = 0.0
    throughput: float = 0.0


def compute_metrics(schedule: Sequence[ScheduleSegment], processes: Sequence[Process]) -> MetricsReport:
    """Derive per-process timing statistics from a finished schedule.

    ``start`` is the first segment of a pid and ``completion`` the end of its
    last one, so preempted processes spread over several segments are handled.
    Utilization and throughput are measured over the span from the first
    segment start to the last segment end and are 0 for an empty or zero-length
    span.
    """
    first_start: Dict[str, int] = {}
    last_end: Dict[str, int] = {}
    executed: Dict[str, int] = {}
    for seg in schedule:
        first_start.setdefault(seg.pid, seg.start)
        last_end[seg.pid] = seg.end
        executed[seg.pid] = executed.get(seg.pid, 0) + seg.duration

    metrics: List[ProcessMetrics] = []
    for p in processes:
        start = first_start.get(p.pid)
        completion = last_end.get(p.pid)
        turnaround = (completion if completion is not None else p.arrival) - p.arrival
        metrics.append(ProcessMetrics(
            pid=p.pid,
            arrival=p.arrival,
            burst=p.burst,
            priority=p.priority,
            start=start,
            completion=completion,
            waiting=turnaround - executed.get(p.pid, 0),
            turnaround=turnaround,
            response=None if start is None else start - p.arrival,
        ))

    if not schedule:
        return MetricsReport(metrics=metrics)
    span = max(s.end for s in schedule) - min(s.start for s in schedule)
    if span <= 0:
        return MetricsReport(metrics=metrics)
    return MetricsReport(
        metrics=metrics,
        utilization=total_burst(processes) / span * 100,
        throughput=len(processes) / span,
    )


def total_burst(processes: Sequence[Process]) -> int:
    return sum(p.burst for p in processes)


def compute_avg(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def count_context_switches(schedule: Sequence[ScheduleSegment]) -> int:
    return sum(1 for prev, cur in zip(schedule, schedule[1:]) if prev.pid != cur.pid)


def load_processes_csv(path: str) -> List[Process]:
    """Read a workload with ``pid, arrival, burst[, priority]`` columns."""
    df = pd.read_csv(path)
    missing = [c for c in ("pid", "arrival", "burst") if c not in df.columns]
    if missing:
        raise ValidationError(f"Workload missing columns: {missing}")
    if "priority" not in df.columns:
        df["priority"] = 0
    numeric = ["arrival", "burst", "priority"]
    for col in numeric:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    if df[numeric].isna().any().any():
        raise ValidationError("Workload has empty or non-numeric arrival, burst or priority cells")
    if (df[numeric] % 1 != 0).any().any():
        raise ValidationError("Workload arrival, burst and priority must be whole numbers")
    procs = [
        Process(pid=str(row.pid), arrival=int(row.arrival), burst=int(row.burst), priority=int(row.priority))
        for row in df.itertuples(index=False)
    ]
    return validate_processes(procs)
