from __future__ import annotations

import shlex
from typing import List, Optional, Tuple
from colorama import Fore, Style, init as colorama_init

from .core import Process, ValidationError
from .simulator import simulate, Scheduler
from .paging import compare_policies, simulate_paging
from .disk import simulate_disk
from .bankers import is_safe_state
from .visualizer import plot_gantt
from .utils import (
    SAMPLE_ALLOCATION,
    SAMPLE_AVAILABLE,
    SAMPLE_FRAME_COUNT,
    SAMPLE_HEAD,
    SAMPLE_MAX,
    SAMPLE_MAX_CYLINDER,
)


def format_frames(frames) -> str:
    return " ".join("-" if f is None else str(f) for f in frames)


def split_flags(args: List[str], flags: Tuple[str, ...]) -> Tuple[dict, List[str]]:
    """Separate ``--flag value`` pairs from positional tokens."""
    values = {}
    rest: List[str] = []
    it = iter(args)
    for token in it:
        if token in flags:
            values[token] = next(it, None)
        else:
            rest.append(token)
    return values, rest


class ManualTerminal:
    def __init__(self) -> None:
        colorama_init(autoreset=True)
        self.processes: List[Process] = []
        self.last_result = None

    def prompt(self) -> None:
        print(Fore.CYAN + "OS resource simulator terminal. Type 'help' for commands.")
        while True:
            try:
                raw = input(Fore.GREEN + "> ")
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if not raw.strip():
                continue
            self.handle_command(raw)

    def handle_command(self, raw: str) -> None:
        try:
            parts = shlex.split(raw)
        except ValueError as e:
            print(Fore.RED + f"Parse error: {e}")
            return
        if not parts:
            return
        cmd, *args = parts
        cmd = cmd.lower()
        handlers = {
            "help": self._help,
            "add": self._add,
            "list": self._list,
            "clear": self._clear,
            "run": self._run,
            "stats": self._stats,
            "page": self._page,
            "disk": self._disk,
            "bank": self._bank,
        }
        if cmd in ("exit", "quit"):
            raise SystemExit(0)
        handler = handlers.get(cmd)
        if handler is None:
            print(Fore.YELLOW + "Unknown command. Type 'help'.")
            return
        try:
            if cmd in ("help", "list", "clear", "stats", "bank"):
                handler()
            else:
                handler(args)
        except ValidationError as e:
            print(Fore.RED + f"Invalid input: {e}")

    def _help(self) -> None:
        print("Commands:")
        print("  add <pid> <burst> <priority> [arrival=0]")
        print("  list | clear")
        print("  run [--policy FCFS|SJF|SRTF|PRIORITY|RR] [--quantum Q] [--out path]")
        print("  stats")
        print("  page [--policy FIFO|LRU] [--frames N] <page> <page> ...")
        print("  disk [--algorithm FCFS|SSTF|SCAN|C-SCAN] [--head H] [--max M] <cylinder> ...")
        print("  bank")
        print("  exit")

    def _add(self, args: List[str]) -> None:
        if len(args) < 3:
            print(Fore.RED + "Usage: add <pid> <burst> <priority> [arrival]")
            return
        pid = args[0]
        try:
            burst = int(args[1])
            priority = int(args[2])
            arrival = int(args[3]) if len(args) >= 4 else 0
        except ValueError:
            print(Fore.RED + "Invalid numeric values")
            return
        if any(p.pid == pid for p in self.processes):
            print(Fore.RED + f"Process {pid} already exists")
            return
        self.processes.append(Process(pid=pid, arrival=arrival, burst=burst, priority=priority))
        print(Fore.CYAN + f"Process {pid} added: burst={burst}, priority={priority}, arrival={arrival}")

    def _list(self) -> None:
        if not self.processes:
            print("No processes yet")
            return
        for p in self.processes:
            print(f"{p.pid}: burst={p.burst}, priority={p.priority}, arrival={p.arrival}")

    def _clear(self) -> None:
        self.processes = []
        self.last_result = None
        print(Fore.CYAN + "Process list cleared")

    def _run(self, args: List[str]) -> None:
        flags, _ = split_flags(args, ("--policy", "--quantum", "--out"))
        policy = flags.get("--policy") or Scheduler.FCFS
        out_path: Optional[str] = flags.get("--out")
        try:
            quantum = int(flags.get("--quantum") or 2)
        except ValueError:
            print(Fore.RED + "Quantum must be an integer")
            return

        result = simulate(self.processes, policy=policy, time_quantum=quantum)
        self.last_result = result
        for seg in result.schedule:
            print(f"  {seg.pid}: {seg.start}-{seg.end}")
        print(Style.BRIGHT + f"{result.policy} finished. Avg waiting: {result.avg_waiting_time:.2f}, Avg turnaround: {result.avg_turnaround_time:.2f}, Utilization: {result.utilization:.1f}%")
        if out_path:
            plot_gantt(result.schedule, out_path, title=f"{result.policy} schedule")
            print(Fore.CYAN + f"Saved plot to {out_path}")

    def _stats(self) -> None:
        if not self.last_result:
            print("No simulation yet")
            return
        r = self.last_result
        print(f"Avg waiting time: {r.avg_waiting_time:.3f}")
        print(f"Avg turnaround time: {r.avg_turnaround_time:.3f}")
        print(f"Avg response time: {r.avg_response_time:.3f}")
        print(f"CPU utilization: {r.utilization:.1f}%")
        print(f"Throughput: {r.throughput:.3f} / time-unit")
        print(f"Context switches: {r.context_switches}")

    def _page(self, args: List[str]) -> None:
        flags, rest = split_flags(args, ("--policy", "--frames"))
        try:
            frames = int(flags.get("--frames") or SAMPLE_FRAME_COUNT)
            refs = [int(r) for r in rest]
        except ValueError:
            print(Fore.RED + "Frames and pages must be integers")
            return
        if flags.get("--policy"):
            results = {flags["--policy"].upper(): simulate_paging(refs, frames, flags["--policy"])}
        else:
            results = compare_policies(refs, frames)
        for name, result in results.items():
            print(Style.BRIGHT + f"{name}: {result.faults} faults, {result.hits} hits")
            for step in result.timeline:
                marker = Fore.GREEN + "hit " if step.hit else Fore.RED + "miss"
                print(f"  {step.step:>3} page {step.page:>3} [{format_frames(step.frames)}] " + marker)

    def _disk(self, args: List[str]) -> None:
        flags, rest = split_flags(args, ("--algorithm", "--head", "--max"))
        try:
            head = int(flags.get("--head") or SAMPLE_HEAD)
            max_cyl = int(flags.get("--max") or SAMPLE_MAX_CYLINDER)
            requests = [int(r) for r in rest]
        except ValueError:
            print(Fore.RED + "Head, max and cylinders must be integers")
            return
        result = simulate_disk(requests, head, max_cylinder=max_cyl, algorithm=flags.get("--algorithm") or "FCFS")
        print(Style.BRIGHT + f"{result.algorithm}: " + " -> ".join(str(c) for c in result.path))
        print(f"Total seek: {result.total_seek}")

    def _bank(self) -> None:
        result = is_safe_state(SAMPLE_AVAILABLE, SAMPLE_MAX, SAMPLE_ALLOCATION)
        if result.safe:
            print(Fore.GREEN + "SAFE - sequence: " + " -> ".join(f"P{i}" for i in result.sequence))
        else:
            print(Fore.RED + "UNSAFE")
        for i, row in enumerate(result.need):
            print(f"  need P{i}: {row}")


def main() -> None:
    ManualTerminal().prompt()


if __name__ == "__main__":
    main()
