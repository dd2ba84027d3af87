from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from .clock import SimulationClock
from .metrics import compute_system_metrics
from .models import (
    IDLE,
    Process,
    QueueSnapshot,
    ScheduleResult,
    TimelineSegment,
    make_processes,
)
from .ready_queue import ReadyQueue

logger = logging.getLogger(__name__)


def _select_shortest(
    processes: List[Process], now: int, key: Callable[[Process], int]
) -> Optional[Process]:
    """
    Left-to-right scan over arrived, unfinished processes keeping only strict
    improvements, so the lowest id wins a tie.
    """
    best: Optional[Process] = None
    for p in processes:
        if p.completed or p.arrival_time > now:
            continue
        if best is None or key(p) < key(best):
            best = p
    return best


def _next_arrival(processes: List[Process]) -> int:
    return min(p.arrival_time for p in processes if not p.completed)


def schedule_fcfs(
    arrival: Sequence[int], burst: Sequence[int], quantum: Optional[int] = None
) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.
    """
    processes = make_processes(arrival, burst)
    result = ScheduleResult(algorithm="FCFS", quantum=quantum, processes=processes)
    timeline = result.timeline

    time = 0
    for p in sorted(processes, key=lambda p: (p.arrival_time, p.id)):
        if time < p.arrival_time:
            timeline.append(TimelineSegment(IDLE, time, p.arrival_time))
            logger.debug("FCFS idle %d-%d", time, p.arrival_time)
            time = p.arrival_time

        start_time = time
        end_time = start_time + p.burst_time
        timeline.append(TimelineSegment(p.id, start_time, end_time))
        p.finish(end_time)
        time = end_time

    compute_system_metrics(result)
    return result


def schedule_rr(
    arrival: Sequence[int], burst: Sequence[int], quantum: Optional[int] = None
) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    The running process is advanced one tick at a time. Processes arriving
    during its burst are queued at the exact tick they arrive, ahead of the
    preempted process being put back. A snapshot of the ready queue is taken
    before every dispatch, plus a final empty one.
    """
    if quantum is None or quantum <= 0:
        raise ValueError("Round Robin requires a positive quantum (use --quantum)")

    processes = make_processes(arrival, burst)
    result = ScheduleResult(algorithm="Round Robin", quantum=quantum, processes=processes)
    if not processes:
        compute_system_metrics(result)
        return result

    timeline = result.timeline
    snapshots = result.snapshots
    clock = SimulationClock()
    ready = ReadyQueue()

    def enqueue_arrived() -> None:
        for p in processes:
            if not p.completed and p.arrival_time <= clock.now and p.id not in ready:
                ready.push_back(p.id)

    def enqueue_arriving_now() -> None:
        for p in processes:
            if not p.completed and p.arrival_time == clock.now and p.id not in ready:
                ready.push_back(p.id)

    enqueue_arrived()

    while any(not p.completed for p in processes):
        if not ready:
            next_arrival = min(p.arrival_time for p in processes if not p.completed)
            if next_arrival > clock.now:
                timeline.append(TimelineSegment(IDLE, clock.now, next_arrival))
                logger.debug("RR idle %d-%d", clock.now, next_arrival)
                clock.advance_to(next_arrival)
            enqueue_arrived()
            continue

        snapshots.append(QueueSnapshot(clock.now, ready.peek_all(), ready.peek_front()))
        current = processes[ready.pop_front() - 1]

        run_time = min(quantum, current.remaining_time)
        slice_start = clock.now
        for _ in range(run_time):
            current.remaining_time -= 1
            clock.tick()
            enqueue_arriving_now()

        timeline.append(TimelineSegment(current.id, slice_start, clock.now))

        if current.remaining_time == 0:
            current.finish(clock.now)
            logger.debug("RR %s completed at %d", current.label, clock.now)
        else:
            ready.push_back(current.id)
            logger.debug(
                "RR %s preempted at %d (remaining %d)", current.label, clock.now, current.remaining_time
            )

    snapshots.append(QueueSnapshot(clock.now, (), IDLE))

    compute_system_metrics(result)
    return result


def schedule_spn(
    arrival: Sequence[int], burst: Sequence[int], quantum: Optional[int] = None
) -> ScheduleResult:
    """
    Shortest Process Next (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time.
    """
    processes = make_processes(arrival, burst)
    result = ScheduleResult(algorithm="SPN", quantum=quantum, processes=processes)
    timeline = result.timeline

    time = 0
    while any(not p.completed for p in processes):
        p = _select_shortest(processes, time, key=lambda x: x.burst_time)

        if p is None:
            next_arrival = _next_arrival(processes)
            timeline.append(TimelineSegment(IDLE, time, next_arrival))
            logger.debug("SPN idle %d-%d", time, next_arrival)
            time = next_arrival
            continue

        start_time = time
        end_time = start_time + p.burst_time
        timeline.append(TimelineSegment(p.id, start_time, end_time))
        p.finish(end_time)
        time = end_time

    compute_system_metrics(result)
    return result


def schedule_srt(
    arrival: Sequence[int], burst: Sequence[int], quantum: Optional[int] = None
) -> ScheduleResult:
    """
    Shortest Remaining Time (preemptive SPN).

    The choice is re-evaluated on every tick, so a newly arrived process
    with less remaining work takes the CPU at the instant it arrives.
    """
    processes = make_processes(arrival, burst)
    result = ScheduleResult(algorithm="SRT", quantum=quantum, processes=processes)
    timeline = result.timeline
    clock = SimulationClock()
    running: Optional[Process] = None

    while any(not p.completed for p in processes):
        current = _select_shortest(processes, clock.now, key=lambda x: x.remaining_time)

        if current is None:
            next_arrival = _next_arrival(processes)
            timeline.append(TimelineSegment(IDLE, clock.now, next_arrival))
            logger.debug("SRT idle %d-%d", clock.now, next_arrival)
            clock.advance_to(next_arrival)
            continue

        if running is not None and running is not current and not running.completed:
            logger.debug(
                "SRT %s preempts %s at %d (%d < %d)",
                current.label,
                running.label,
                clock.now,
                current.remaining_time,
                running.remaining_time,
            )
        running = current

        slice_start = clock.now
        if current.remaining_time > 0:
            current.remaining_time -= 1
            clock.tick()
        timeline.append(TimelineSegment(current.id, slice_start, clock.now))

        if current.remaining_time == 0:
            current.finish(clock.now)

    compute_system_metrics(result)
    return result


@dataclass(frozen=True)
class SchedulingPolicy:
    key: str
    label: str
    func: Callable[..., ScheduleResult]
    preemptive: bool
    uses_quantum: bool = False

    def run(
        self, arrival: Sequence[int], burst: Sequence[int], quantum: Optional[int] = None
    ) -> ScheduleResult:
        return self.func(arrival, burst, quantum=quantum if self.uses_quantum else None)


ALGORITHMS: Dict[str, SchedulingPolicy] = {
    "fcfs": SchedulingPolicy("fcfs", "FCFS", schedule_fcfs, preemptive=False),
    "rr": SchedulingPolicy("rr", "Round Robin", schedule_rr, preemptive=True, uses_quantum=True),
    "spn": SchedulingPolicy("spn", "SPN", schedule_spn, preemptive=False),
    "srt": SchedulingPolicy("srt", "SRT", schedule_srt, preemptive=True),
}


def run_algorithm(
    name: str, arrival: Sequence[int], burst: Sequence[int], quantum: Optional[int] = None
) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only passed to
    algorithms that use one.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    return ALGORITHMS[name].run(arrival, burst, quantum=quantum)
