import io
from pathlib import Path

from rich.console import Console

from schedsim.cli import build_parser, main


def _run(argv):
    buf = io.StringIO()
    code = main(argv, console=Console(file=buf, width=120))
    return code, buf.getvalue()


INLINE = ["--arrival", "0", "1", "2", "--burst", "5", "3", "2"]


def test_run_fcfs():
    code, out = _run(["run", "-a", "fcfs", *INLINE])
    assert code == 0
    assert "Average waiting time = 3.33" in out
    assert "Average turnaround time = 6.67" in out
    assert "| P1 | P2 | P3 |" in out


def test_run_rr_prints_queue_timeline():
    code, out = _run(["run", "-a", "rr", "-q", "2", *INLINE])
    assert code == 0
    assert "Time 0: [P1] → CPU: P1" in out
    assert "Time 10: [] → Done" in out


def test_run_rich_chart():
    code, out = _run(["run", "-a", "srt", "--chart", "rich", *INLINE])
    assert code == 0
    assert "Gantt Chart" in out


def test_run_from_workload_file(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"arrival_time":0,"burst_time":6},{"arrival_time":0,"burst_time":2},'
                 '{"arrival_time":0,"burst_time":8}]')
    code, out = _run(["run", "-a", "spn", "-w", str(p)])
    assert code == 0
    assert "| P2 | P1 | P3 |" in out


def test_compare():
    code, out = _run(["compare", *INLINE])
    assert code == 0
    for label in ("FCFS", "Round Robin", "SPN", "SRT"):
        assert label in out


def test_report_runs_all_four():
    code, out = _run(["report", "-q", "2", *INLINE])
    assert code == 0
    assert out.count("Average waiting time") == 4
    assert "Ready Queue Timeline" in out


def test_missing_workload_is_an_error():
    code, out = _run(["run", "-a", "fcfs"])
    assert code == 2
    assert "No workload given" in out


def test_strict_rejects_negative_time():
    code, out = _run(["run", "-a", "fcfs", "--strict", "--arrival", "-1", "--burst", "2"])
    assert code == 2


def test_negative_time_is_clamped():
    code, out = _run(["run", "-a", "fcfs", "--arrival", "-1", "--burst", "2"])
    assert code == 0
    assert "| P1 |" in out


def test_prompt(monkeypatch):
    answers = iter(["2", "3", "1", "0", "1", "0"])
    monkeypatch.setattr("builtins.input", lambda *args: next(answers))
    code, out = _run(["prompt"])
    assert code == 0
    assert "Round Robin (quantum=1)" in out
    assert out.count("Average waiting time") == 4


def test_parser_defaults():
    args = build_parser().parse_args(["compare", *INLINE])
    assert args.algorithms == ["fcfs", "rr", "spn", "srt"]
    assert args.quantum == 2


def test_prompt_input_closed(monkeypatch):
    def closed(*args):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed)
    code, out = _run(["prompt"])
    assert code == 2
    assert "input ended" in out


def test_compare_shows_preemptive_column():
    code, out = _run(["compare", "-a", "fcfs", "srt", *INLINE])
    assert code == 0
    assert "Preemptive" in out
    rows = {line.split()[0]: line.split()[1] for line in out.splitlines() if line.strip().startswith(("FCFS", "SRT"))}
    assert rows == {"FCFS": "no", "SRT": "yes"}
