from __future__ import annotations

from typing import Optional, Sequence

from .errors import (
    DuplicateProcessIdError,
    EmptyProcessSetError,
    InvalidProcessError,
    InvalidQuantumError,
)
from .models import Process


def validate_processes(processes: Sequence[Process]) -> None:
    """
    Reject a workload that no policy can schedule meaningfully.

    Raises before any simulation work happens, so a failing call never
    returns a partial schedule.
    """
    if not processes:
        raise EmptyProcessSetError("At least one process is required")

    seen: set = set()
    for p in processes:
        if p.pid in seen:
            raise DuplicateProcessIdError(f"Duplicate process id: {p.pid!r}")
        seen.add(p.pid)

        if p.arrival_time < 0:
            raise InvalidProcessError(
                f"Process {p.pid!r} has negative arrival time: {p.arrival_time}"
            )
        if p.burst_time <= 0:
            raise InvalidProcessError(
                f"Process {p.pid!r} must have a positive burst time, got {p.burst_time}"
            )


def validate_quantum(quantum: Optional[int]) -> int:
    # bool is an int subclass; True is not a quantum.
    if quantum is None or isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise InvalidQuantumError(
            f"Round Robin requires a positive integer quantum, got {quantum!r}"
        )
    return quantum
