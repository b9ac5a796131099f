from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Ensure repo root is on sys.path so this script can be executed directly
repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from colorama import Fore, Style, init as colorama_init

from os_resource_simulator.backend.core import Process, ValidationError
from os_resource_simulator.backend.simulator import simulate, Scheduler
from os_resource_simulator.backend.paging import compare_policies, simulate_paging, PagePolicy
from os_resource_simulator.backend.disk import simulate_disk
from os_resource_simulator.backend.bankers import is_safe_state
from os_resource_simulator.backend.visualizer import plot_gantt, plot_disk_path
from os_resource_simulator.backend.manual_terminal import format_frames
from os_resource_simulator.backend.utils import (
    SAMPLE_PROCESSES,
    SAMPLE_QUANTUM,
    SAMPLE_FRAME_COUNT,
    SAMPLE_REFERENCES,
    SAMPLE_DISK_QUEUE,
    SAMPLE_HEAD,
    SAMPLE_MAX_CYLINDER,
    SAMPLE_AVAILABLE,
    SAMPLE_MAX,
    SAMPLE_ALLOCATION,
    load_processes_csv,
)


def parse_process(text: str) -> Process:
    """Parse ``pid:arrival:burst[:priority]``."""
    parts = text.split(":")
    if len(parts) not in (3, 4):
        raise argparse.ArgumentTypeError(f"expected pid:arrival:burst[:priority], got {text!r}")
    try:
        numbers = [int(x) for x in parts[1:]]
    except ValueError:
        raise argparse.ArgumentTypeError(f"arrival, burst and priority must be integers in {text!r}")
    return Process(parts[0], *numbers)


def parse_matrix(text: str) -> List[List[int]]:
    """Parse rows separated by ';' and values by spaces or commas."""
    try:
        return [[int(v) for v in row.replace(",", " ").split()] for row in text.split(";")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"matrix values must be integers: {text!r}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="OS resource-allocation algorithm simulator")
    sub = p.add_subparsers(dest="command", required=True)

    cpu = sub.add_parser("cpu", help="CPU scheduling")
    cpu.add_argument("--policy", choices=list(Scheduler.ALL), default=Scheduler.FCFS)
    cpu.add_argument("--quantum", type=int, default=SAMPLE_QUANTUM)
    cpu.add_argument("--process", type=parse_process, action="append", dest="processes",
                     help="pid:arrival:burst[:priority], repeatable")
    cpu.add_argument("--csv", type=str, default=None, help="Workload CSV with pid,arrival,burst[,priority]")
    cpu.add_argument("--out", type=str, default=None, help="Save a Gantt chart to this path")
    cpu.add_argument("--export", type=str, default=None, help="Base path for JSON/CSV event logs")

    page = sub.add_parser("page", help="page replacement")
    page.add_argument("--policy", choices=list(PagePolicy.ALL), default=None, help="Omit to compare both")
    page.add_argument("--frames", type=int, default=SAMPLE_FRAME_COUNT)
    page.add_argument("references", type=int, nargs="*", default=SAMPLE_REFERENCES)

    disk = sub.add_parser("disk", help="disk scheduling")
    disk.add_argument("--algorithm", choices=["FCFS", "SSTF", "SCAN", "C-SCAN", "CSCAN"], default="FCFS")
    disk.add_argument("--head", type=int, default=SAMPLE_HEAD)
    disk.add_argument("--max", type=int, default=SAMPLE_MAX_CYLINDER, dest="max_cylinder")
    disk.add_argument("--out", type=str, default=None, help="Save the head path plot to this path")
    disk.add_argument("requests", type=int, nargs="*", default=SAMPLE_DISK_QUEUE)

    bank = sub.add_parser("bankers", help="Banker's safety check")
    bank.add_argument("--available", type=int, nargs="+", default=SAMPLE_AVAILABLE)
    bank.add_argument("--max", type=parse_matrix, default=SAMPLE_MAX, dest="max_demand",
                      help="rows separated by ';', e.g. '7 5 3; 3 2 2'")
    bank.add_argument("--allocation", type=parse_matrix, default=SAMPLE_ALLOCATION)

    return p.parse_args(argv)


def run_cpu(args: argparse.Namespace) -> None:
    if args.csv:
        procs = load_processes_csv(args.csv)
    else:
        procs = args.processes or list(SAMPLE_PROCESSES)
    result = simulate(procs, policy=args.policy, time_quantum=args.quantum)

    print(Style.BRIGHT + f"{result.policy} schedule")
    for seg in result.schedule:
        print(f"  {seg.pid:<6} {seg.start:>4} - {seg.end:<4}")
    print(result.to_dataframe().to_string(index=False))
    print(f"Avg waiting: {result.avg_waiting_time:.2f}, Avg turnaround: {result.avg_turnaround_time:.2f}, "
          f"Avg response: {result.avg_response_time:.2f}")
    print(f"CPU utilization: {result.utilization:.1f}%, Throughput: {result.throughput:.2f} / time-unit, "
          f"Context switches: {result.context_switches}")
    if args.out:
        plot_gantt(result.schedule, args.out, title=f"{result.policy} schedule")
        print(Fore.CYAN + f"Saved plot to {args.out}")
    if args.export:
        result.logger.export_json(f"{args.export}.json")
        result.logger.export_csv(args.export)
        print(Fore.CYAN + f"Event logs written to {args.export}.json / {args.export}_*.csv")


def run_page(args: argparse.Namespace) -> None:
    if args.policy:
        results = {args.policy: simulate_paging(args.references, args.frames, args.policy)}
    else:
        results = compare_policies(args.references, args.frames)
    for name, result in results.items():
        print(Style.BRIGHT + f"{name}: {result.faults} faults, {result.hits} hits ({result.fault_rate:.0%} fault rate)")
        for step in result.timeline:
            status = Fore.GREEN + "hit" if step.hit else Fore.RED + "fault"
            print(f"  {step.step:>3}  page {step.page:>3}  [{format_frames(step.frames)}]  " + status)


def run_disk(args: argparse.Namespace) -> None:
    result = simulate_disk(args.requests, args.head, max_cylinder=args.max_cylinder, algorithm=args.algorithm)
    print(Style.BRIGHT + f"{result.algorithm}: " + " -> ".join(str(c) for c in result.path))
    print(f"Total seek: {result.total_seek}")
    if args.out:
        plot_disk_path(result.path, args.max_cylinder, args.out, title=f"{result.algorithm} head movement")
        print(Fore.CYAN + f"Saved plot to {args.out}")


def run_bankers(args: argparse.Namespace) -> None:
    result = is_safe_state(args.available, args.max_demand, args.allocation)
    for i, row in enumerate(result.need):
        print(f"  need P{i}: {row}")
    if result.safe:
        print(Fore.GREEN + "SAFE - sequence: " + " -> ".join(f"P{i}" for i in result.sequence))
    else:
        print(Fore.RED + "UNSAFE - no safe sequence exists")


COMMANDS = {
    "cpu": run_cpu,
    "page": run_page,
    "disk": run_disk,
    "bankers": run_bankers,
}


def main(argv: Optional[List[str]] = None) -> int:
    colorama_init(autoreset=True)
    args = parse_args(argv)
    try:
        COMMANDS[args.command](args)
    except ValidationError as e:
        print(Fore.RED + f"Invalid input: {e}")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
