"""
CPU scheduler package.

Simulates classical CPU scheduling policies (FCFS, SJF, Round Robin and
Priority with optional aging) over a fixed set of processes, and reports
per-process and aggregate performance metrics.
"""

from .algorithms import (
    ALGORITHMS,
    effective_priority,
    run_algorithm,
    schedule_fcfs,
    schedule_priority,
    schedule_rr,
    schedule_sjf,
)
from .errors import (
    DuplicateProcessIdError,
    EmptyProcessSetError,
    InvalidProcessError,
    InvalidQuantumError,
    SchedulerError,
)
from .metrics import compute_system_metrics, summarize_process_metrics
from .models import Process, ProcessMetrics, ScheduleResult, ScheduledSlice, SystemMetrics

__all__ = [
    "ALGORITHMS",
    "DuplicateProcessIdError",
    "EmptyProcessSetError",
    "InvalidProcessError",
    "InvalidQuantumError",
    "Process",
    "ProcessMetrics",
    "ScheduleResult",
    "ScheduledSlice",
    "SchedulerError",
    "SystemMetrics",
    "compute_system_metrics",
    "effective_priority",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_priority",
    "schedule_rr",
    "schedule_sjf",
    "summarize_process_metrics",
]
