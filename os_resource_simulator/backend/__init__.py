"""
Simulation engine for the OS resource simulator.
"""

from .core import Process, ScheduleSegment, ProcessMetrics, TimelineStep, ValidationError
from .simulator import simulate, Scheduler, SimulationResult
from .paging import fifo_replacement, lru_replacement, simulate_paging, compare_policies, PagePolicy
from .disk import simulate_disk, total_seek, DiskAlgorithm
from .bankers import is_safe_state
from .os_kernel import OSKernel, KernelConfig, Mode

__all__ = [
    'Process', 'ScheduleSegment', 'ProcessMetrics', 'TimelineStep', 'ValidationError',
    'simulate', 'Scheduler', 'SimulationResult',
    'fifo_replacement', 'lru_replacement', 'simulate_paging', 'compare_policies', 'PagePolicy',
    'simulate_disk', 'total_seek', 'DiskAlgorithm',
    'is_safe_state',
    'OSKernel', 'KernelConfig', 'Mode',
]
