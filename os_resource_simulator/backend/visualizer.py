from __future__ import annotations

from typing import List, Optional, Dict, Sequence
import os
import matplotlib.pyplot as plt

from .core import ScheduleSegment
from .utils import GANTT_PALETTE


def ensure_dir(path: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)


def _finish(fig, out_path: Optional[str]) -> None:
    fig.tight_layout()
    if out_path:
        ensure_dir(out_path)
        fig.savefig(out_path, dpi=150)
        plt.close(fig)
    else:
        plt.show()


def plot_gantt(schedule: Sequence[ScheduleSegment], out_path: Optional[str] = None, title: str = "Gantt Chart") -> None:
    # one row per pid, in order of first dispatch
    pids_order: List[str] = []
    for seg in schedule:
        if seg.pid not in pids_order:
            pids_order.append(seg.pid)
    y_positions: Dict[str, int] = {pid: i for i, pid in enumerate(pids_order)}

    fig, ax = plt.subplots(figsize=(12, 2 + 0.4 * max(1, len(pids_order))))
    for seg in schedule:
        y = y_positions[seg.pid]
        ax.barh(y, seg.duration, left=seg.start, color=GANTT_PALETTE[y % len(GANTT_PALETTE)], edgecolor="black", alpha=0.9)
        ax.text(seg.start + seg.duration / 2, y, f"{seg.start}-{seg.end}", va="center", ha="center", fontsize=8)

    ax.set_yticks([y_positions[pid] for pid in pids_order])
    ax.set_yticklabels(pids_order)
    ax.invert_yaxis()
    ax.set_xlabel("Time")
    ax.set_title(title)
    ax.grid(True, axis="x", linestyle=":", alpha=0.5)
    _finish(fig, out_path)


def plot_disk_path(path: Sequence[int], max_cylinder: int, out_path: Optional[str] = None, title: str = "Disk Head Movement") -> None:
    fig, ax = plt.subplots(figsize=(10, 3 + 0.25 * max(1, len(path))))
    steps = list(range(len(path)))
    ax.plot(list(path), steps, marker="o", color="#2563eb")
    for step, cyl in zip(steps, path):
        ax.annotate(str(cyl), (cyl, step), textcoords="offset points", xytext=(6, -3), fontsize=8)

    ax.set_xlim(0, max_cylinder)
    ax.invert_yaxis()
    ax.set_xlabel("Cylinder")
    ax.set_ylabel("Step")
    ax.set_title(title)
    ax.grid(True, linestyle=":", alpha=0.5)
    _finish(fig, out_path)
