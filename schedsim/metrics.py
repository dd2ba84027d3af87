from __future__ import annotations

from typing import List

from .models import Process, ScheduleResult, SystemMetrics, consolidate_timeline


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute busy/idle time, throughput and CPU utilization from a populated
    timeline and attach them to the result.
    """
    if not result.processes:
        system = SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    makespan = result.makespan
    cpu_busy_time = sum(seg.duration for seg in result.timeline if not seg.is_idle)
    idle_time = sum(seg.duration for seg in result.timeline if seg.is_idle)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    # Idle gaps do not count as a switch; P1 | Idle | P1 is still one process.
    busy_runs = [seg.process_id for seg in consolidate_timeline(result.timeline) if not seg.is_idle]
    context_switches = sum(1 for prev, cur in zip(busy_runs, busy_runs[1:]) if prev != cur)

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=idle_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
        context_switches=context_switches,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[Process]) -> dict:
    """
    Return average waiting and turnaround times (0.0 for an empty set).
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
    }
