from __future__ import annotations

from typing import List, Dict, Any
from dataclasses import dataclass, asdict

import pandas as pd

from .core import Process, ProcessMetrics, ScheduleSegment, ValidationError, validate_processes
from .schedulers import (
    BaseScheduler,
    FCFSScheduler,
    SJFScheduler,
    SRTFScheduler,
    PriorityScheduler,
    RoundRobinScheduler,
)
from .utils import EventLogger, compute_metrics, compute_avg, count_context_switches


@dataclass
class SimulationResult:
    policy: str
    schedule: List[ScheduleSegment]
    metrics: List[ProcessMetrics]
    utilization: float
    throughput: float
    avg_waiting_time: float
    avg_turnaround_time: float
    avg_response_time: float
    context_switches: int
    total_time: int
    logger: EventLogger

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schedule": [asdict(s) for s in self.schedule],
            "metrics": [asdict(m) for m in self.metrics],
            "utilization": self.utilization,
            "throughput": self.throughput,
        }

    def to_dataframe(self) -> pd.DataFrame:
        columns = [f for f in ProcessMetrics.__dataclass_fields__]
        return pd.DataFrame([asdict(m) for m in self.metrics], columns=columns)


class Scheduler:
    FCFS = "FCFS"         # non-preemptive First-Come, First-Served
    SJF = "SJF"           # non-preemptive
    SRTF = "SRTF"         # preemptive SJF
    PRIORITY = "PRIORITY" # non-preemptive (lower number = higher priority)
    RR = "RR"

    ALL = (FCFS, SJF, SRTF, PRIORITY, RR)


def make_scheduler(policy: str, time_quantum: int = 2) -> BaseScheduler:
    key = str(policy).upper()
    if key == Scheduler.FCFS:
        return FCFSScheduler()
    if key == Scheduler.SJF:
        return SJFScheduler()
    if key == Scheduler.SRTF:
        return SRTFScheduler()
    if key == Scheduler.PRIORITY:
        return PriorityScheduler()
    if key == Scheduler.RR:
        return RoundRobinScheduler(time_quantum=time_quantum)
    raise ValidationError(f"Unknown CPU scheduling policy: {policy!r} (expected one of {', '.join(Scheduler.ALL)})")


def simulate(
    processes: List[Process],
    policy: str = Scheduler.FCFS,
    time_quantum: int = 2,
) -> SimulationResult:
    procs = validate_processes(processes)
    scheduler = make_scheduler(policy, time_quantum=time_quantum)
    logger = EventLogger()
    schedule = scheduler.run(procs, logger=logger)
    report = compute_metrics(schedule, procs)

    started = [m.response for m in report.metrics if m.response is not None]
    return SimulationResult(
        policy=scheduler.name,
        schedule=schedule,
        metrics=report.metrics,
        utilization=report.utilization,
        throughput=report.throughput,
        avg_waiting_time=compute_avg([m.waiting for m in report.metrics]),
        avg_turnaround_time=compute_avg([m.turnaround for m in report.metrics]),
        avg_response_time=compute_avg(started),
        context_switches=count_context_switches(schedule),
        total_time=schedule[-1].end if schedule else 0,
        logger=logger,
    )
