"""
Core data structures for the OS resource simulator.
Includes Process, PCB, ReadyQueue, trace records and input validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Dict, Iterable, Sequence, Tuple


class ValidationError(ValueError):
    """Raised when a simulation input is malformed.

    Always raised before any simulation step runs, so callers never see a
    partially computed trace.
    """


@dataclass(frozen=True)
class Process:
    """Immutable process description supplied by the caller."""
    pid: str
    arrival: int
    burst: int
    priority: int = 0


@dataclass
class PCB:
    """Process Control Block - working copy of a Process for one run."""
    pid: str
    arrival: int
    burst: int
    priority: int = 0
    order: int = 0
    remaining: Optional[int] = None

    def __post_init__(self):
        """Initialize derived attributes."""
        self.remaining = self.burst if self.remaining is None else self.remaining

    @classmethod
    def from_process(cls, process: Process, order: int) -> "PCB":
        return cls(
            pid=process.pid,
            arrival=process.arrival,
            burst=process.burst,
            priority=process.priority,
            order=order,
        )

    @property
    def finished(self) -> bool:
        return self.remaining <= 0


@dataclass(frozen=True)
class ScheduleSegment:
    """One contiguous run of a process on the CPU, covering [start, end)."""
    pid: str
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass
class ProcessMetrics:
    """Timing statistics for one process derived from a schedule."""
    pid: str
    arrival: int
    burst: int
    priority: int
    start: Optional[int]
    completion: Optional[int]
    waiting: int
    turnaround: int
    response: Optional[int]


@dataclass(frozen=True)
class TimelineStep:
    """Frame-set snapshot taken after one page reference."""
    step: int
    page: int
    frames: Tuple[Optional[int], ...]
    hit: bool
    evicted: Optional[int] = None


class ReadyQueue:
    """List-backed ready queue with a selectable dispatch order.

    Every mode ends its sort key with the input order, so ties never depend
    on insertion history:

    * ``fifo``     - first pushed first
    * ``fcfs``     - earliest arrival
    * ``sjf``      - shortest burst, then earliest arrival
    * ``srtf``     - shortest remaining time, then earliest arrival
    * ``priority`` - lowest priority number, then earliest arrival
    """

    MODES = ("fifo", "fcfs", "sjf", "srtf", "priority")

    def __init__(self):
        self._items: List[PCB] = []
        self._pid_map: Dict[str, PCB] = {}

    def push(self, pcb: PCB) -> None:
        """Add a process to the back of the queue."""
        if pcb.pid in self._pid_map:
            self.remove(pcb.pid)
        self._items.append(pcb)
        self._pid_map[pcb.pid] = pcb

    @staticmethod
    def _key(pcb: PCB, mode: str) -> tuple:
        if mode == 'fcfs':
            return (pcb.arrival, pcb.order)
        if mode == 'sjf':
            return (pcb.burst, pcb.arrival, pcb.order)
        if mode == 'srtf':
            return (pcb.remaining, pcb.arrival, pcb.order)
        if mode == 'priority':
            return (pcb.priority, pcb.arrival, pcb.order)
        raise ValueError(f"Unknown ready queue mode: {mode}")

    def _select_index(self, mode: str = 'fifo') -> Optional[int]:
        """Return index in _items for the next process according to mode."""
        if not self._items:
            return None
        if mode == 'fifo':
            return 0
        return min(range(len(self._items)), key=lambda i: self._key(self._items[i], mode))

    def pop(self, mode: str = 'fifo') -> Optional[PCB]:
        """Remove and return the next process according to the given mode."""
        idx = self._select_index(mode)
        if idx is None:
            return None
        pcb = self._items.pop(idx)
        del self._pid_map[pcb.pid]
        return pcb

    def peek(self, mode: str = 'fifo') -> Optional[PCB]:
        """View the next process according to mode without removing it."""
        idx = self._select_index(mode)
        if idx is None:
            return None
        return self._items[idx]

    def remove(self, pid: str) -> Optional[PCB]:
        """Remove a specific process by PID."""
        if pid not in self._pid_map:
            return None
        pcb = self._pid_map.pop(pid)
        self._items = [p for p in self._items if p.pid != pid]
        return pcb

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, pid: str) -> bool:
        return pid in self._pid_map


def is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def require_int(name: str, value, minimum: Optional[int] = None) -> int:
    """Return ``value`` if it is an integer not below ``minimum``."""
    if not is_int(value):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise ValidationError(f"{name} must be >= {minimum}, got {value}")
    return value


def validate_processes(processes: Iterable[Process]) -> List[Process]:
    """Check a process list and return it as a new list."""
    procs = list(processes)
    seen = set()
    for p in procs:
        if p.pid in seen:
            raise ValidationError(f"Duplicate pid: {p.pid}")
        seen.add(p.pid)
        require_int(f"{p.pid} arrival", p.arrival, minimum=0)
        require_int(f"{p.pid} burst", p.burst, minimum=1)
        require_int(f"{p.pid} priority", p.priority)
    return procs


def validate_int_sequence(name: str, values: Sequence, minimum: Optional[int] = None,
                          maximum: Optional[int] = None) -> List[int]:
    if not isinstance(values, (list, tuple)):
        raise ValidationError(f"{name} must be a list, got {values!r}")
    items = list(values)
    for i, v in enumerate(items):
        require_int(f"{name}[{i}]", v, minimum=minimum)
        if maximum is not None and v > maximum:
            raise ValidationError(f"{name}[{i}] must be <= {maximum}, got {v}")
    return items
