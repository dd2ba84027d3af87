from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

IDLE = 0


@dataclass
class Process:
    """
    Timing facts for one process plus the run state an algorithm mutates.

    Records are created fresh for every algorithm run (see ``make_processes``)
    so no run ever observes another's state.
    """

    id: int
    arrival_time: int
    burst_time: int
    remaining_time: int = field(init=False)
    waiting_time: int = 0
    turnaround_time: int = 0
    completion_time: Optional[int] = None
    completed: bool = False

    def __post_init__(self) -> None:
        self.remaining_time = self.burst_time

    @property
    def label(self) -> str:
        return f"P{self.id}"

    def finish(self, completion_time: int) -> None:
        self.remaining_time = 0
        self.completion_time = completion_time
        self.turnaround_time = completion_time - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time
        self.completed = True


@dataclass(frozen=True)
class TimelineSegment:
    """
    One contiguous interval of CPU occupancy; ``process_id`` 0 means idle.
    """

    process_id: int
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    @property
    def is_idle(self) -> bool:
        return self.process_id == IDLE

    @property
    def label(self) -> str:
        return "Idle" if self.is_idle else f"P{self.process_id}"


@dataclass(frozen=True)
class QueueSnapshot:
    time: int
    ready_queue: Tuple[int, ...]
    currently_dispatched: int = IDLE


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    context_switches: int = 0


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[Process] = field(default_factory=list)
    timeline: List[TimelineSegment] = field(default_factory=list)
    snapshots: List[QueueSnapshot] = field(default_factory=list)
    system: Optional[SystemMetrics] = None

    @property
    def waiting_times(self) -> List[int]:
        return [p.waiting_time for p in self.processes]

    @property
    def turnaround_times(self) -> List[int]:
        return [p.turnaround_time for p in self.processes]

    @property
    def makespan(self) -> int:
        return self.timeline[-1].end_time if self.timeline else 0


def make_processes(arrival: Sequence[int], burst: Sequence[int]) -> List[Process]:
    """
    Build a fresh arena of Process records, ids 1..N in input order.
    """
    if len(arrival) != len(burst):
        raise ValueError(
            f"arrival and burst must have the same length ({len(arrival)} != {len(burst)})"
        )
    return [
        Process(id=i + 1, arrival_time=int(a), burst_time=int(b))
        for i, (a, b) in enumerate(zip(arrival, burst))
    ]


def consolidate_timeline(timeline: Sequence[TimelineSegment]) -> List[TimelineSegment]:
    """
    Merge adjacent segments that belong to the same process (or are both idle).
    """
    merged: List[TimelineSegment] = []
    for seg in timeline:
        if merged and merged[-1].process_id == seg.process_id:
            prev = merged[-1]
            merged[-1] = TimelineSegment(prev.process_id, prev.start_time, seg.end_time)
        else:
            merged.append(seg)
    return merged
