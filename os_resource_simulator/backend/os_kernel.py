from __future__ import annotations

from typing import List, Optional, Dict, Any
from dataclasses import dataclass

from .core import Process, ValidationError
from .simulator import simulate, Scheduler, SimulationResult
from .paging import simulate_paging, compare_policies, PageReplacementResult
from .disk import simulate_disk, DiskScheduleResult, DiskAlgorithm
from .bankers import is_safe_state, SafetyResult


class Mode:
    CPU = "cpu"
    PAGE = "page"
    DISK = "disk"
    DEADLOCK = "deadlock"

    ALL = (CPU, PAGE, DISK, DEADLOCK)


@dataclass
class KernelConfig:
    cpu_policy: str = Scheduler.FCFS
    time_quantum: int = 2
    page_policy: Optional[str] = None  # None runs FIFO and LRU side by side
    frame_count: int = 3
    disk_policy: str = DiskAlgorithm.FCFS
    max_cylinder: int = 199


def _field(payload: Dict[str, Any], key: str, default: Any = None, required: bool = False) -> Any:
    if key in payload and payload[key] is not None:
        return payload[key]
    if required:
        raise ValidationError(f"Payload is missing required field {key!r}")
    return default


def processes_from_payload(items: List[Dict[str, Any]]) -> List[Process]:
    if not isinstance(items, (list, tuple)):
        raise ValidationError(f"processes must be a list, got {items!r}")
    procs: List[Process] = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError(f"processes[{i}] must be an object, got {item!r}")
        procs.append(Process(
            pid=str(_field(item, "pid", required=True)),
            arrival=_field(item, "arrival", required=True),
            burst=_field(item, "burst", required=True),
            priority=_field(item, "priority", 0),
        ))
    return procs


class OSKernel:
    """Dispatches one request-scoped simulation to the module a mode names.

    Payloads and results use the plain dict shapes of the JSON interface, so
    the kernel can sit directly behind a CLI or a request handler. Every call
    is independent; the kernel itself only holds the default configuration.
    """

    def __init__(self, config: KernelConfig | None = None):
        self.config = config or KernelConfig()

    def run_cpu(self, processes: List[Process], policy: Optional[str] = None,
                time_quantum: Optional[int] = None) -> SimulationResult:
        return simulate(
            processes,
            policy=policy or self.config.cpu_policy,
            time_quantum=self.config.time_quantum if time_quantum is None else time_quantum,
        )

    def run_paging(self, references: List[int], frame_count: Optional[int] = None,
                   policy: Optional[str] = None):
        frames = self.config.frame_count if frame_count is None else frame_count
        policy = policy or self.config.page_policy
        if policy is None:
            return compare_policies(references, frames)
        return simulate_paging(references, frames, policy)

    def run_disk(self, requests: List[int], head: int, max_cylinder: Optional[int] = None,
                 algorithm: Optional[str] = None) -> DiskScheduleResult:
        return simulate_disk(
            requests,
            head,
            max_cylinder=self.config.max_cylinder if max_cylinder is None else max_cylinder,
            algorithm=algorithm or self.config.disk_policy,
        )

    def check_safety(self, available: List[int], max_demand: List[List[int]],
                     allocation: List[List[int]]) -> SafetyResult:
        return is_safe_state(available, max_demand, allocation)

    def run(self, mode: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Run a JSON-shaped payload and return the JSON-shaped result."""
        if not isinstance(payload, dict):
            raise ValidationError(f"Payload must be an object, got {payload!r}")
        key = str(mode).lower()
        if key == Mode.CPU:
            result = self.run_cpu(
                processes_from_payload(_field(payload, "processes", [])),
                policy=_field(payload, "algorithm"),
                time_quantum=_field(payload, "quantum"),
            )
            return result.to_dict()
        if key == Mode.PAGE:
            result = self.run_paging(
                _field(payload, "references", []),
                frame_count=_field(payload, "frameCount"),
                policy=_field(payload, "policy"),
            )
            if isinstance(result, PageReplacementResult):
                return result.to_dict()
            return {name: r.to_dict() for name, r in result.items()}
        if key == Mode.DISK:
            result = self.run_disk(
                _field(payload, "requests", []),
                _field(payload, "head", required=True),
                max_cylinder=_field(payload, "maxCylinder"),
                algorithm=_field(payload, "algorithm"),
            )
            return result.to_dict()
        if key == Mode.DEADLOCK:
            result = self.check_safety(
                _field(payload, "available", required=True),
                _field(payload, "max", required=True),
                _field(payload, "allocation", required=True),
            )
            return result.to_dict()
        raise ValidationError(f"Unknown simulation mode: {mode!r} (expected one of {', '.join(Mode.ALL)})")
