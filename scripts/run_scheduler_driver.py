from __future__ import annotations
import os, sys
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from os_resource_simulator.backend.core import Process
from os_resource_simulator.backend.simulator import simulate, Scheduler


def make_processes():
    return [
        Process(pid="P1", arrival=0, burst=8, priority=3),
        Process(pid="P2", arrival=1, burst=4, priority=1),
        Process(pid="P3", arrival=2, burst=9, priority=4),
        Process(pid="P4", arrival=3, burst=5, priority=2),
        Process(pid="P5", arrival=14, burst=2, priority=1),
        Process(pid="P6", arrival=40, burst=3, priority=5),
    ]


def run():
    procs = make_processes()
    print(f"{'policy':<10}{'avg wait':>10}{'avg tat':>10}{'avg resp':>10}{'util %':>9}{'switches':>10}")
    for policy in Scheduler.ALL:
        result = simulate(procs, policy=policy, time_quantum=3)
        print(f"{result.policy:<10}{result.avg_waiting_time:>10.2f}{result.avg_turnaround_time:>10.2f}"
              f"{result.avg_response_time:>10.2f}{result.utilization:>9.1f}{result.context_switches:>10}")
    print()
    for policy in Scheduler.ALL:
        result = simulate(procs, policy=policy, time_quantum=3)
        timeline = " ".join(f"{s.pid}[{s.start}-{s.end}]" for s in result.schedule)
        print(f"{result.policy:<10}{timeline}")


if __name__ == '__main__':
    run()
