from __future__ import annotations

from typing import Dict, List

from .errors import EmptyProcessSetError
from .models import ProcessMetrics, ScheduleResult, SystemMetrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute averages, throughput and CPU utilization given populated
    per-process metrics and timeline slices.

    The result is also stored on ``result.system``.
    """
    if not result.processes:
        raise EmptyProcessSetError("Cannot compute metrics for an empty process set")

    makespan = max(p.completion_time for p in result.processes)
    if makespan <= 0:
        raise EmptyProcessSetError("Schedule has no completed work (makespan is 0)")

    summary = summarize_process_metrics(result.processes)
    cpu_busy_time = sum(slice_.duration for slice_ in result.timeline)

    system = SystemMetrics(
        avg_turnaround=summary["avg_turnaround"],
        avg_waiting=summary["avg_waiting"],
        makespan=makespan,
        throughput=len(result.processes) / makespan,
        cpu_busy_time=cpu_busy_time,
        cpu_utilization=cpu_busy_time / makespan,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[ProcessMetrics]) -> Dict[str, float]:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        raise EmptyProcessSetError("Cannot average metrics over zero processes")

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }
