from __future__ import annotations

import logging
from collections import deque
from functools import partial
from typing import Deque, Dict, List, Optional, Sequence, Union

from .config import settings
from .errors import SchedulerError
from .metrics import compute_system_metrics
from .models import Process, ProcessMetrics, ScheduleResult, ScheduledSlice
from .validation import validate_processes, validate_quantum

logger = logging.getLogger(__name__)


def _finished(p: Process, start_time: int, completion_time: int) -> ProcessMetrics:
    turnaround_time = completion_time - p.arrival_time
    return ProcessMetrics(
        pid=p.pid,
        arrival_time=p.arrival_time,
        burst_time=p.burst_time,
        start_time=start_time,
        completion_time=completion_time,
        waiting_time=turnaround_time - p.burst_time,
        turnaround_time=turnaround_time,
        response_time=start_time - p.arrival_time,
        priority=p.priority,
    )


def _build_result(
    algorithm: str,
    quantum: Optional[int],
    processes: Sequence[Process],
    finished: Dict[int, ProcessMetrics],
    timeline: List[ScheduledSlice],
) -> ScheduleResult:
    # Per-process rows are reported in caller input order.
    metrics = [finished[i] for i in range(len(processes))]
    result = ScheduleResult(algorithm=algorithm, quantum=quantum, processes=metrics, timeline=timeline)
    system = compute_system_metrics(result)
    logger.info(
        f"{algorithm}: {len(processes)} processes finished at t={system.makespan} "
        f"({len(timeline)} slices)"
    )
    return result


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Ties on arrival keep input order (sorted() is stable).
    """
    validate_processes(processes)
    order = sorted(range(len(processes)), key=lambda i: processes[i].arrival_time)

    time = 0
    timeline: List[ScheduledSlice] = []
    finished: Dict[int, ProcessMetrics] = {}

    for i in order:
        p = processes[i]
        if time < p.arrival_time:
            logger.debug(f"t={time}: CPU idle until {p.arrival_time}")
            time = p.arrival_time

        start_time = time
        time = start_time + p.burst_time
        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=time))
        finished[i] = _finished(p, start_time, time)

    return _build_result("FCFS", quantum, processes, finished, timeline)


def schedule_sjf(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    scheduled, choose the one with the smallest burst time; equal bursts go
    to the process listed first.

    When nothing has arrived the clock jumps to the arrival of the first
    unscheduled process in input order, which is not necessarily the
    earliest pending arrival.
    """
    validate_processes(processes)
    n = len(processes)

    time = 0
    timeline: List[ScheduledSlice] = []
    finished: Dict[int, ProcessMetrics] = {}
    scheduled = [False] * n

    while len(finished) < n:
        ready = [i for i in range(n) if not scheduled[i] and processes[i].arrival_time <= time]

        if not ready:
            first_pending = next(i for i in range(n) if not scheduled[i])
            logger.debug(f"t={time}: nothing ready, jumping to {processes[first_pending].arrival_time}")
            time = processes[first_pending].arrival_time
            continue

        i = min(ready, key=lambda j: (processes[j].burst_time, j))
        p = processes[i]
        logger.debug(f"t={time}: dispatch {p.pid} (burst {p.burst_time})")

        start_time = time
        time = start_time + p.burst_time
        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=time))
        finished[i] = _finished(p, start_time, time)
        scheduled[i] = True

    return _build_result("SJF (non-preemptive)", quantum, processes, finished, timeline)


def schedule_rr(
    processes: Sequence[Process],
    quantum: Optional[int] = None,
    honor_arrivals: bool = False,
) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    By default every process is queued up front in arrival order and that
    cyclic order never changes. A process at the front that has not arrived
    yet is rotated behind the others while any queued process has arrived;
    the CPU only idles, until the earliest queued arrival, when none has.
    With ``honor_arrivals`` processes join the back of the ready queue only
    once they have arrived (ahead of a process preempted at the same instant).
    """
    quantum = validate_quantum(quantum)
    validate_processes(processes)
    n = len(processes)
    order = sorted(range(n), key=lambda i: processes[i].arrival_time)

    # Remaining burst time per input index
    remaining = [p.burst_time for p in processes]
    first_start: Dict[int, int] = {}

    time = 0
    timeline: List[ScheduledSlice] = []
    finished: Dict[int, ProcessMetrics] = {}

    if honor_arrivals:
        ready: Deque[int] = deque()
        admitted = [False] * n
    else:
        ready = deque(order)
        admitted = [True] * n

    def admit_arrivals(current_time: int) -> None:
        for i in order:
            if not admitted[i] and processes[i].arrival_time <= current_time:
                admitted[i] = True
                ready.append(i)

    admit_arrivals(time)

    while ready or not all(admitted):
        if not ready:
            # Jump to next arrival if CPU is idle
            time = min(processes[i].arrival_time for i in order if not admitted[i])
            admit_arrivals(time)
            continue

        if all(processes[j].arrival_time > time for j in ready):
            next_arrival = min(processes[j].arrival_time for j in ready)
            logger.debug(f"t={time}: nothing queued has arrived, CPU idle until {next_arrival}")
            time = next_arrival

        # Skip over processes that have not arrived yet, keeping the cyclic order
        while processes[ready[0]].arrival_time > time:
            ready.rotate(-1)

        i = ready.popleft()
        p = processes[i]
        first_start.setdefault(i, time)

        run_time = min(quantum, remaining[i])
        slice_start = time
        time = slice_start + run_time
        timeline.append(ScheduledSlice(pid=p.pid, start_time=slice_start, end_time=time))
        remaining[i] -= run_time

        # Anything that arrived during this slice queues ahead of the preempted process
        admit_arrivals(time)

        if remaining[i] > 0:
            ready.append(i)
        else:
            finished[i] = _finished(p, first_start[i], time)

    return _build_result("Round Robin", quantum, processes, finished, timeline)


def effective_priority(
    process: Process, now: int, aging_interval: Optional[int] = None
) -> Union[int, float]:
    """
    Priority of ``process`` at time ``now`` once aging has been applied.

    Every full ``aging_interval`` spent waiting since arrival lowers the
    value by one (raising the priority), never below 0. A process without a
    priority ranks after every numeric priority. The interval defaults to
    ``settings.AGING_INTERVAL``.
    """
    if aging_interval is None:
        aging_interval = settings.AGING_INTERVAL
    if process.priority is None:
        return float("inf")
    waited = max(0, now - process.arrival_time)
    return max(0, process.priority - waited // aging_interval)


def schedule_priority(
    processes: Sequence[Process],
    quantum: Optional[int] = None,
    with_aging: bool = False,
    aging_interval: Optional[int] = None,
) -> ScheduleResult:
    """
    Priority scheduling (non-preemptive), optionally with aging.

    Lower numeric priority value means higher priority. Among ready
    processes, choose the one with the smallest (effective) priority; break
    ties by earlier arrival time, then shorter burst, then input order.
    The aging interval defaults to ``settings.AGING_INTERVAL``.
    """
    if aging_interval is None:
        aging_interval = settings.AGING_INTERVAL
    if with_aging and aging_interval <= 0:
        raise SchedulerError(f"Aging interval must be positive, got {aging_interval}")
    validate_processes(processes)
    n = len(processes)

    time = 0
    timeline: List[ScheduledSlice] = []
    finished: Dict[int, ProcessMetrics] = {}
    scheduled = [False] * n

    def priority_key(i: int):
        p = processes[i]
        if with_aging:
            prio = effective_priority(p, time, aging_interval)
        else:
            # Treat missing priority as lowest priority.
            prio = p.priority if p.priority is not None else float("inf")
        return (prio, p.arrival_time, p.burst_time, i)

    while len(finished) < n:
        ready = [i for i in range(n) if not scheduled[i] and processes[i].arrival_time <= time]

        if not ready:
            time = min(processes[i].arrival_time for i in range(n) if not scheduled[i])
            continue

        i = min(ready, key=priority_key)
        p = processes[i]
        logger.debug(f"t={time}: dispatch {p.pid} (effective priority {priority_key(i)[0]})")

        start_time = time
        time = start_time + p.burst_time
        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=time))
        finished[i] = _finished(p, start_time, time)
        scheduled[i] = True

    label = f"Priority (aging, interval={aging_interval})" if with_aging else "Priority (static)"
    return _build_result(label, quantum, processes, finished, timeline)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "rr": schedule_rr,
    "priority": schedule_priority,
    "aging": partial(schedule_priority, with_aging=True),
}

# Algorithms that accept an aging interval
AGING_ALGORITHMS = {"priority", "aging"}


def run_algorithm(
    name: str,
    processes: Sequence[Process],
    quantum: Optional[int] = None,
    aging_interval: Optional[int] = None,
) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by
    round-robin; aging_interval only by the priority policies.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    if name in AGING_ALGORITHMS and aging_interval is not None:
        return func(processes, quantum=quantum, aging_interval=aging_interval)
    return func(processes, quantum=quantum)
