"""
Properties every policy must satisfy on any valid workload.
"""

import pytest

from cpu_scheduler.algorithms import run_algorithm
from cpu_scheduler.models import Process
from cpu_scheduler.workload_io import default_workload

WORKLOADS = {
    "default": default_workload(),
    "idle_gaps": [
        Process("a", arrival_time=3, burst_time=2, priority=2),
        Process("b", arrival_time=20, burst_time=4, priority=1),
        Process("c", arrival_time=4, burst_time=7, priority=3),
        Process("d", arrival_time=30, burst_time=1),
    ],
    "simultaneous": [
        Process(str(i), arrival_time=0, burst_time=(i % 4) + 1, priority=i % 3)
        for i in range(8)
    ],
}

RUNS = [("fcfs", None), ("sjf", None), ("rr", 1), ("rr", 3), ("priority", None), ("aging", None)]


@pytest.mark.parametrize("workload", sorted(WORKLOADS))
@pytest.mark.parametrize("alg,quantum", RUNS)
def test_schedule_invariants(workload, alg, quantum):
    processes = WORKLOADS[workload]
    res = run_algorithm(alg, processes, quantum=quantum)

    # single CPU: ordered slices never overlap and are never empty
    timeline = sorted(res.timeline, key=lambda s: s.start_time)
    for sl in timeline:
        assert sl.end_time > sl.start_time
    for prev, nxt in zip(timeline, timeline[1:]):
        assert prev.end_time <= nxt.start_time

    assert [m.pid for m in res.processes] == [p.pid for p in processes]
    for p in processes:
        m = res.metrics_for(p.pid)
        slices = res.slices_for(p.pid)
        assert sum(s.duration for s in slices) == p.burst_time
        assert min(s.start_time for s in slices) >= p.arrival_time
        assert m.completion_time == max(s.end_time for s in slices)
        assert m.turnaround_time == m.completion_time - p.arrival_time
        assert m.waiting_time == m.turnaround_time - p.burst_time
        assert m.waiting_time >= 0
        assert m.turnaround_time >= p.burst_time


@pytest.mark.parametrize("alg", ["fcfs", "sjf", "priority", "aging"])
def test_non_round_robin_runs_each_process_once(alg):
    res = run_algorithm(alg, default_workload())
    assert len(res.timeline) == len(default_workload())


def test_runs_do_not_share_state():
    processes = default_workload()
    snapshot = list(processes)
    first = run_algorithm("sjf", processes)
    run_algorithm("rr", processes, quantum=2)
    run_algorithm("aging", processes)
    again = run_algorithm("sjf", processes)

    assert processes == snapshot
    assert first.processes == again.processes
    assert first.timeline == again.timeline
