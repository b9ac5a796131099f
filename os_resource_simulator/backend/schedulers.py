"""
CPU scheduler implementations: FCFS, SJF, SRTF, Priority and Round Robin.

Every scheduler consumes a complete process list and returns the whole
schedule as a list of ScheduleSegment. The clock starts at the earliest
arrival and jumps straight to the next arrival whenever the ready queue is
empty, so a run always terminates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, List

from .core import PCB, Process, ReadyQueue, ScheduleSegment, require_int, validate_processes
from .utils import EventLogger


class BaseScheduler(ABC):
    """Abstract base class for all schedulers."""

    name: str = ""

    def run(self, processes: List[Process], logger: Optional[EventLogger] = None) -> List[ScheduleSegment]:
        """Validate the input, simulate it and return the schedule."""
        procs = validate_processes(processes)
        self.logger = logger if logger is not None else EventLogger()
        self.ready_queue = ReadyQueue()
        self.pending: List[PCB] = sorted(
            (PCB.from_process(p, i) for i, p in enumerate(procs)),
            key=lambda pcb: (pcb.arrival, pcb.order),
        )
        self.schedule: List[ScheduleSegment] = []
        if not self.pending:
            return self.schedule
        self.clock = self.pending[0].arrival
        self._simulate()
        return self.schedule

    @abstractmethod
    def _simulate(self) -> None:
        pass

    def admit_arrivals(self) -> None:
        """Move every pending process with arrival <= clock to the ready queue."""
        while self.pending and self.pending[0].arrival <= self.clock:
            self.ready_queue.push(self.pending.pop(0))

    def skip_idle(self) -> None:
        """Advance the clock to the next arrival when nothing is ready."""
        if self.ready_queue.is_empty() and self.pending:
            self.clock = max(self.clock, self.pending[0].arrival)
            self.admit_arrivals()

    def record(self, pcb: PCB, start: int, end: int, reason: Optional[str] = None) -> None:
        self.schedule.append(ScheduleSegment(pid=pcb.pid, start=start, end=end))
        self.logger.log_timeline_slice(start, end, pcb.pid, self.name, reason=reason)

    def complete_process(self, pcb: PCB) -> None:
        pcb.remaining = 0
        self.logger.log_process_event(self.clock, pcb.pid, "complete")

    def has_work(self) -> bool:
        return bool(self.pending) or not self.ready_queue.is_empty()


class NonPreemptiveScheduler(BaseScheduler):
    """Runs the selected process to completion once dispatched."""

    mode: str = 'fcfs'

    def _simulate(self) -> None:
        while self.has_work():
            self.admit_arrivals()
            self.skip_idle()
            pcb = self.ready_queue.pop(mode=self.mode)
            start = self.clock
            self.logger.log_process_event(start, pcb.pid, "dispatch")
            self.clock += pcb.remaining
            self.record(pcb, start, self.clock)
            self.complete_process(pcb)


class FCFSScheduler(NonPreemptiveScheduler):
    """First Come First Serve: earliest arrival first, ties by input order."""
    name = "FCFS"
    mode = 'fcfs'


class SJFScheduler(NonPreemptiveScheduler):
    """Non-preemptive Shortest Job First."""
    name = "SJF"
    mode = 'sjf'


class PriorityScheduler(NonPreemptiveScheduler):
    """Non-preemptive priority scheduling, lower number = higher priority."""
    name = "PRIORITY"
    mode = 'priority'


class SRTFScheduler(BaseScheduler):
    """Shortest Remaining Time First (preemptive SJF).

    Advances one time unit per step. The running process keeps the CPU on a
    tie for shortest remaining time; otherwise the earliest arrival wins.
    """
    name = "SRTF"

    def _simulate(self) -> None:
        current: Optional[PCB] = None
        segment_start = self.clock
        while self.has_work() or current is not None:
            self.admit_arrivals()
            if current is None:
                self.skip_idle()
            best = self.ready_queue.peek(mode='srtf')
            if current is None or (best is not None and best.remaining < current.remaining):
                if current is not None:
                    self.record(current, segment_start, self.clock, reason="preempt")
                    self.logger.log_process_event(self.clock, current.pid, "preempt")
                    self.ready_queue.push(current)
                current = self.ready_queue.pop(mode='srtf')
                segment_start = self.clock
                self.logger.log_process_event(self.clock, current.pid, "dispatch")

            current.remaining -= 1
            self.clock += 1
            if current.finished:
                self.record(current, segment_start, self.clock)
                self.complete_process(current)
                current = None


class RoundRobinScheduler(BaseScheduler):
    """Round Robin over a FIFO ready queue.

    A process that uses up its quantum goes to the back of the queue after
    every process that arrived during its slice.
    """
    name = "RR"

    def __init__(self, time_quantum: int = 2):
        self.time_quantum = require_int("time quantum", time_quantum, minimum=1)

    def _simulate(self) -> None:
        while self.has_work():
            self.admit_arrivals()
            self.skip_idle()
            pcb = self.ready_queue.pop(mode='fifo')
            run_for = min(self.time_quantum, pcb.remaining)
            start = self.clock
            self.logger.log_process_event(start, pcb.pid, "dispatch")
            pcb.remaining -= run_for
            self.clock += run_for
            self.admit_arrivals()
            if pcb.finished:
                self.record(pcb, start, self.clock)
                self.complete_process(pcb)
            else:
                self.record(pcb, start, self.clock, reason="quantum expired")
                self.logger.log_process_event(self.clock, pcb.pid, "preempt")
                self.ready_queue.push(pcb)
