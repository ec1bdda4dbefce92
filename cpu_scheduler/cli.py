from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .config import settings
from .gantt import build_rich_gantt, build_slice_table, render_gantt
from .models import Process, ScheduleResult
from .workload_io import default_workload, load_workload

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

COMPARE_DEFAULT = ["fcfs", "sjf", "rr", "priority", "aging"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpu-scheduler",
        description="CPU scheduling simulator (FCFS, SJF, Round Robin, Priority with optional aging).",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help=f"Logging level (default: {settings.LOG_LEVEL}).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=sorted(ALGORITHMS),
        help="Algorithm to use.",
    )
    _add_workload_args(run_parser)
    run_parser.add_argument(
        "--aging",
        action="store_true",
        help="Enable aging for the priority algorithm.",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart as plain text instead of a colored panel.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    _add_workload_args(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=COMPARE_DEFAULT,
        choices=sorted(ALGORITHMS),
        help=f"Algorithms to compare (default: {' '.join(COMPARE_DEFAULT)}).",
    )

    menu_parser = subparsers.add_parser(
        "menu",
        help="Interactive menu to pick an algorithm at runtime.",
    )
    _add_workload_args(menu_parser)

    return parser


def _add_workload_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workload",
        "-w",
        default=settings.DEFAULT_WORKLOAD,
        help="Path to JSON or CSV workload file (default: built-in ten-process set).",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=settings.DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {settings.DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--aging-interval",
        type=int,
        default=settings.AGING_INTERVAL,
        help=f"Waiting time per one-step priority boost when aging (default: {settings.AGING_INTERVAL}).",
    )


def _resolve_workload(workload: Optional[str]) -> List[Process]:
    if workload:
        return load_workload(Path(workload))
    return default_workload()


def _run_one(
    alg: str, processes: List[Process], quantum: int, aging_interval: int
) -> ScheduleResult:
    q = quantum if alg == "rr" else None
    return run_algorithm(alg, processes, quantum=q, aging_interval=aging_interval)


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    headers = ["PID", "Arrival", "Burst", "Priority", "Completion", "Turnaround", "Waiting"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            str(p.pid),
            str(p.arrival_time),
            str(p.burst_time),
            "" if p.priority is None else str(p.priority),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
        )

    console.print(proc_table)

    if result.system:
        sys = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg turnaround", f"{sys.avg_turnaround:.2f}")
        sys_table.add_row("Avg waiting", f"{sys.avg_waiting:.2f}")
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.2f}")
        sys_table.add_row("Total time", str(sys.makespan))
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

        console.print(sys_table)

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print(build_slice_table(result.timeline))


def _print_compare(
    processes: List[Process],
    algorithms: List[str],
    quantum: int,
    aging_interval: int,
    console: Console,
) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Throughput", justify="right")

    for alg in algorithms:
        result = _run_one(alg, processes, quantum, aging_interval)
        sys = result.system
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{sys.avg_waiting:.2f}",
            f"{sys.avg_turnaround:.2f}",
            f"{sys.throughput:.2f}",
        )

    console.print(summary_table)


def _menu_loop(
    processes: List[Process],
    default_quantum: int,
    aging_interval: int,
    console: Console,
    read: Callable[[str], str] = input,
) -> None:
    choices = [
        ("FCFS (First Come First Served)", "fcfs"),
        ("SJF (Shortest Job First)", "sjf"),
        ("Round Robin", "rr"),
        ("Priority Scheduling", "priority"),
        ("Compare all", None),
    ]
    exit_idx = len(choices) + 1

    while True:
        console.print("\n[bold cyan]CPU Scheduling Algorithms[/bold cyan]")
        for idx, (label, _) in enumerate(choices, start=1):
            console.print(f"  [yellow]{idx}[/yellow]. [white]{label}[/white]")
        console.print(f"  [yellow]{exit_idx}[/yellow]. [white]Exit[/white]")

        choice = read(f"Choice [1-{exit_idx}]: ").strip().lower()
        if choice in {str(exit_idx), "q", "quit", "exit"}:
            return

        if not choice.isdigit() or not 1 <= int(choice) <= len(choices):
            console.print("[red]Invalid choice! Please try again.[/red]")
            continue
        _, alg = choices[int(choice) - 1]

        quantum = default_quantum
        if alg in {"rr", None}:
            q_in = read(f"Time quantum for Round Robin [{default_quantum}]: ").strip()
            if q_in:
                try:
                    quantum = int(q_in)
                except ValueError:
                    console.print("[red]Invalid quantum; using default.[/red]")

        if alg == "priority":
            if read("Enable aging? [Enter=no, y=yes]: ").strip().lower() == "y":
                alg = "aging"

        try:
            if alg is None:
                _print_compare(processes, COMPARE_DEFAULT, quantum, aging_interval, console)
            else:
                _print_result(_run_one(alg, processes, quantum, aging_interval), console)
        except ValueError as exc:
            console.print(f"[red]Error: {escape(str(exc))}[/red]")


def _interactive_menu(
    processes: List[Process],
    default_quantum: int,
    aging_interval: int,
    console: Console,
    read: Callable[[str], str] = input,
) -> None:
    # Ctrl-D or Ctrl-C at a prompt leaves the menu like choosing Exit
    try:
        _menu_loop(processes, default_quantum, aging_interval, console, read)
    except (EOFError, KeyboardInterrupt):
        console.print()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format=LOG_FORMAT,
    )

    console = Console()

    try:
        processes = _resolve_workload(args.workload)

        if args.command == "run":
            alg = "aging" if args.algorithm == "priority" and args.aging else args.algorithm
            result = _run_one(alg, processes, args.quantum, args.aging_interval)
            _print_result(result, console, plain=args.plain)
            return 0

        if args.command == "compare":
            _print_compare(processes, args.algorithms, args.quantum, args.aging_interval, console)
            return 0

        if args.command == "menu":
            _interactive_menu(processes, args.quantum, args.aging_interval, console)
            console.print("\nThank you for using CPU Scheduler!")
            return 0
    except (ValueError, OSError) as exc:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
