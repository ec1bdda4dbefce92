from pathlib import Path

import pytest
from rich.console import Console

from cpu_scheduler.cli import _interactive_menu, build_parser, main
from cpu_scheduler.workload_io import default_workload


def test_run_default_workload(capsys):
    assert main(["run", "-a", "fcfs"]) == 0
    out = capsys.readouterr().out
    assert "Algorithm: FCFS" in out
    assert "Avg turnaround" in out
    assert "Gantt Chart" in out


def test_run_priority_with_aging(capsys):
    assert main(["run", "-a", "priority", "--aging", "--aging-interval", "3"]) == 0
    assert "Priority (aging, interval=3)" in capsys.readouterr().out


def test_run_workload_file(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,5\nB,0,3\n")
    assert main(["run", "-a", "rr", "-q", "2", "-w", str(p)]) == 0
    out = capsys.readouterr().out
    assert "Quantum: 2" in out
    assert "Round Robin" in out


def test_invalid_quantum_exit_code(capsys):
    assert main(["run", "-a", "rr", "-q", "0"]) == 2
    assert "Error" in capsys.readouterr().out


def test_duplicate_pids_exit_code(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":1},'
                 '{"pid":"A","arrival_time":0,"burst_time":2}]')
    assert main(["compare", "-w", str(p)]) == 2
    assert "Duplicate process id" in capsys.readouterr().out


def test_compare(capsys):
    assert main(["compare", "-a", "fcfs", "sjf"]) == 0
    out = capsys.readouterr().out
    assert "Algorithm comparison" in out
    assert "SJF (non-preemptive)" in out


def test_unknown_algorithm_rejected_by_parser():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["run", "-a", "lottery"])


def test_interactive_menu_runs_choices_then_exits():
    answers = iter(["3", "4", "", "4", "y", "9", "6"])
    console = Console(record=True, width=120)
    _interactive_menu(default_workload(), 2, 5, console, read=lambda _prompt: next(answers))
    text = console.export_text()
    assert "Round Robin" in text
    assert "Quantum: 4" in text
    assert "Priority (aging, interval=5)" in text
    assert "Invalid choice" in text


def test_run_plain_gantt(capsys):
    assert main(["run", "-a", "sjf", "--plain"]) == 0
    out = capsys.readouterr().out
    assert "Gantt Chart:" in out
    assert any(line.startswith("|=") and line.endswith("|") for line in out.splitlines())


@pytest.mark.parametrize("interrupt", [EOFError, KeyboardInterrupt])
def test_interactive_menu_exits_on_end_of_input(interrupt):
    def read(_prompt):
        raise interrupt()

    console = Console(record=True, width=120)
    _interactive_menu(default_workload(), 2, 5, console, read=read)
    assert "CPU Scheduling Algorithms" in console.export_text()


def test_interactive_menu_exits_on_end_of_input_mid_prompt():
    answers = iter(["3"])

    def read(_prompt):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    console = Console(record=True, width=120)
    _interactive_menu(default_workload(), 2, 5, console, read=read)
    assert "Round Robin" in console.export_text()
