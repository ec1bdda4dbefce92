from __future__ import annotations

from typing import Dict, List, Tuple

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _ordered(slices: List[ScheduledSlice]) -> List[ScheduledSlice]:
    return sorted(slices, key=lambda s: (s.start_time, s.end_time))


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: a bar line, pid labels under each slice and the
    slice boundaries. Idle time is drawn as dots.
    """
    if not slices:
        return "(no execution)"

    bar = "|"
    labels = " "
    time_marks = "0"
    last_time = 0

    for sl in _ordered(slices):
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            bar += "." * idle_gap
            labels += " " * idle_gap
            time_marks += f"{sl.start_time:>{idle_gap}}"

        width = max(1, sl.duration)
        bar += "=" * width
        labels += str(sl.pid)[:width].ljust(width)
        time_marks += f"{sl.end_time:>{width}}"
        last_time = sl.end_time

    bar += "|"
    return "\n".join(["Gantt Chart:", bar, labels, time_marks])


def build_rich_gantt(slices: List[ScheduledSlice]) -> Tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for sl in _ordered(slices):
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            timeline.append("." * idle_gap, style="dim")
            labels.append(" " * idle_gap)
            time_marks += f"{sl.start_time:>{idle_gap}}"

        width = max(1, sl.duration)
        timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(str(sl.pid)[:width].ljust(width), style="bold")
        time_marks += f"{sl.end_time:>{width}}"
        last_time = sl.end_time

    grid = Table.grid(padding=(0, 0))
    grid.add_row(timeline)
    grid.add_row(labels)

    return Panel.fit(grid, title="Gantt Chart"), time_marks


def build_slice_table(slices: List[ScheduledSlice]) -> Table:
    """
    One row per execution slice: pid, start, end and duration.
    """
    table = Table(title="Process execution details", box=box.SIMPLE_HEAVY)
    table.add_column("PID", justify="center")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Duration", justify="right")

    for sl in _ordered(slices):
        table.add_row(str(sl.pid), str(sl.start_time), str(sl.end_time), str(sl.duration))
    return table
