from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List

from .errors import InvalidProcessError
from .models import Process
from .validation import validate_processes

logger = logging.getLogger(__name__)

# (pid, arrival, burst, priority)
_DEFAULT_WORKLOAD = [
    ("P1", 0, 8, 1),
    ("P2", 1, 4, 2),
    ("P3", 2, 2, 1),
    ("P4", 3, 1, 3),
    ("P5", 4, 3, 2),
    ("P6", 5, 6, 2),
    ("P7", 6, 3, 1),
    ("P8", 7, 5, 3),
    ("P9", 8, 2, 2),
    ("P10", 9, 4, 1),
]


def default_workload() -> List[Process]:
    """
    The built-in ten-process workload used when no file is given.
    """
    return [
        Process(pid=pid, arrival_time=arrival, burst_time=burst, priority=priority)
        for pid, arrival, burst, priority in _DEFAULT_WORKLOAD
    ]


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    The result is validated, so duplicate pids, negative arrivals and
    non-positive bursts are rejected here rather than at scheduling time.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    validate_processes(processes)
    logger.info(f"Loaded {len(processes)} processes from {path}")
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise InvalidProcessError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return [_process_from_mapping(row) for row in reader]


def _as_int(value) -> int:
    # int() would turn true into 1 and 2.7 into 2
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"expected an integer, got {value!r}")
    return int(value)


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"]).strip()
        arrival_time = _as_int(mapping["arrival_time"])
        burst_time = _as_int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = _as_int(priority_val) if priority_val not in (None, "") else None
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise InvalidProcessError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
