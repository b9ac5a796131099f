"""
Page replacement simulation over a fixed number of frames.

FIFO evicts in insertion order using a circular replacement pointer; LRU
evicts the resident page with the oldest last-use step, lowest frame index
first on a tie. Every step snapshots the frames after the access, padded with
None for empty slots.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Sequence, Any

from .core import TimelineStep, ValidationError, require_int, validate_int_sequence


class PagePolicy:
    FIFO = "FIFO"
    LRU = "LRU"

    ALL = (FIFO, LRU)


@dataclass
class PageReplacementResult:
    policy: str
    frame_count: int
    timeline: List[TimelineStep]
    faults: int

    @property
    def hits(self) -> int:
        return len(self.timeline) - self.faults

    @property
    def fault_rate(self) -> float:
        return self.faults / len(self.timeline) if self.timeline else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timeline": [dict(asdict(t), frames=list(t.frames)) for t in self.timeline],
            "faults": self.faults,
        }


def _validate(references: Sequence[int], frame_count: int) -> List[int]:
    require_int("frame count", frame_count, minimum=1)
    return validate_int_sequence("references", references)


def fifo_replacement(references: Sequence[int], frame_count: int) -> PageReplacementResult:
    refs = _validate(references, frame_count)
    frames: List[Optional[int]] = [None] * frame_count
    pointer = 0
    faults = 0
    timeline: List[TimelineStep] = []

    for step, page in enumerate(refs):
        hit = page in frames
        evicted = None
        if not hit:
            faults += 1
            evicted = frames[pointer]
            frames[pointer] = page
            pointer = (pointer + 1) % frame_count
        timeline.append(TimelineStep(step=step, page=page, frames=tuple(frames), hit=hit, evicted=evicted))

    return PageReplacementResult(policy=PagePolicy.FIFO, frame_count=frame_count, timeline=timeline, faults=faults)


def lru_replacement(references: Sequence[int], frame_count: int) -> PageReplacementResult:
    refs = _validate(references, frame_count)
    frames: List[Optional[int]] = [None] * frame_count
    last_used: Dict[int, int] = {}
    faults = 0
    timeline: List[TimelineStep] = []

    for step, page in enumerate(refs):
        hit = page in frames
        evicted = None
        if not hit:
            faults += 1
            if None in frames:
                slot = frames.index(None)
            else:
                # min() keeps the first index among equal timestamps
                slot = min(range(frame_count), key=lambda i: last_used[frames[i]])
                evicted = frames[slot]
            frames[slot] = page
        last_used[page] = step
        timeline.append(TimelineStep(step=step, page=page, frames=tuple(frames), hit=hit, evicted=evicted))

    return PageReplacementResult(policy=PagePolicy.LRU, frame_count=frame_count, timeline=timeline, faults=faults)


def simulate_paging(references: Sequence[int], frame_count: int, policy: str = PagePolicy.FIFO) -> PageReplacementResult:
    key = str(policy).upper()
    if key == PagePolicy.FIFO:
        return fifo_replacement(references, frame_count)
    if key == PagePolicy.LRU:
        return lru_replacement(references, frame_count)
    raise ValidationError(f"Unknown page replacement policy: {policy!r} (expected FIFO or LRU)")


def compare_policies(references: Sequence[int], frame_count: int) -> Dict[str, PageReplacementResult]:
    """Run every policy over the same reference string."""
    return {policy: simulate_paging(references, frame_count, policy) for policy in PagePolicy.ALL}
