import pytest

from cpu_scheduler.algorithms import (
    schedule_fcfs,
    schedule_priority,
    schedule_rr,
    schedule_sjf,
)
from cpu_scheduler.errors import (
    DuplicateProcessIdError,
    EmptyProcessSetError,
    InvalidProcessError,
    InvalidQuantumError,
    SchedulerError,
)
from cpu_scheduler.models import Process


@pytest.mark.parametrize("policy", [schedule_fcfs, schedule_sjf, schedule_priority])
def test_empty_process_set_rejected(policy):
    with pytest.raises(EmptyProcessSetError):
        policy([])


def test_rr_empty_process_set_rejected():
    with pytest.raises(EmptyProcessSetError):
        schedule_rr([], quantum=2)


@pytest.mark.parametrize("quantum", [None, 0, -3, 1.5, True])
def test_invalid_quantum(quantum):
    procs = [Process("P1", arrival_time=0, burst_time=3)]
    with pytest.raises(InvalidQuantumError):
        schedule_rr(procs, quantum=quantum)


def test_duplicate_pid():
    procs = [
        Process("P1", arrival_time=0, burst_time=3),
        Process("P1", arrival_time=2, burst_time=1),
    ]
    with pytest.raises(DuplicateProcessIdError, match="P1"):
        schedule_fcfs(procs)


@pytest.mark.parametrize(
    "proc",
    [
        Process("neg", arrival_time=-1, burst_time=3),
        Process("zero", arrival_time=0, burst_time=0),
        Process("neg-burst", arrival_time=0, burst_time=-2),
    ],
)
def test_out_of_range_process(proc):
    with pytest.raises(InvalidProcessError):
        schedule_sjf([proc])


def test_bad_aging_interval():
    procs = [Process("P1", arrival_time=0, burst_time=3, priority=1)]
    with pytest.raises(SchedulerError):
        schedule_priority(procs, with_aging=True, aging_interval=0)


def test_errors_are_value_errors():
    # callers written against ValueError keep working
    with pytest.raises(ValueError):
        schedule_rr([Process("P1", 0, 1)], quantum=0)
