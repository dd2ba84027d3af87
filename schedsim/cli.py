from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .gantt import build_rich_gantt, render_gantt, render_queue_timeline
from .metrics import summarize_process_metrics
from .models import ScheduleResult
from .workload_io import (
    InvalidInputError,
    Workload,
    load_workload,
    normalize_quantum,
    normalize_workload,
    prompt_workload,
    workload_from_lists,
)

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2
REPORT_ORDER = ["fcfs", "rr", "spn", "srt"]


def _add_workload_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (columns arrival_time, burst_time).",
    )
    parser.add_argument("--arrival", type=int, nargs="+", help="Inline arrival times, one per process.")
    parser.add_argument("--burst", type=int, nargs="+", help="Inline burst times, one per process.")
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject negative times and non-positive quanta instead of clamping them.",
    )


def _add_chart_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--chart",
        choices=["text", "rich"],
        default="text",
        help="Gantt chart style (default: text).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, RR, SPN, SRT).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log scheduling decisions.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=list(ALGORITHMS),
        help="Algorithm to use.",
    )
    _add_workload_args(run_parser)
    _add_chart_arg(run_parser)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(REPORT_ORDER),
        help="Algorithms to compare (default: fcfs rr spn srt).",
    )
    _add_workload_args(compare_parser)

    report_parser = subparsers.add_parser(
        "report",
        help="Run all four algorithms and print the full output of each.",
    )
    _add_workload_args(report_parser)
    _add_chart_arg(report_parser)

    prompt_parser = subparsers.add_parser(
        "prompt",
        help="Enter a workload interactively, then print the full report.",
    )
    _add_chart_arg(prompt_parser)

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _resolve_workload(args: argparse.Namespace) -> Workload:
    if args.workload:
        if args.arrival or args.burst:
            raise InvalidInputError("Use either --workload or --arrival/--burst, not both")
        workload = load_workload(Path(args.workload))
    elif args.arrival is not None or args.burst is not None:
        workload = workload_from_lists(args.arrival, args.burst)
    else:
        raise InvalidInputError("No workload given (use --workload or --arrival/--burst)")

    logger.debug("loaded %d processes", len(workload))
    return normalize_workload(workload, strict=args.strict)


def _print_result(result: ScheduleResult, console: Console, chart: str = "text") -> None:
    title = result.algorithm if result.quantum is None else f"{result.algorithm} (quantum={result.quantum})"
    console.rule(f"[bold]{title}[/bold]")

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in ["Process", "Arrival", "Burst", "Waiting", "Turnaround"]:
        proc_table.add_column(h, justify="center" if h == "Process" else "right")

    for p in result.processes:
        proc_table.add_row(
            str(p.id),
            str(p.arrival_time),
            str(p.burst_time),
            str(p.waiting_time),
            str(p.turnaround_time),
        )

    console.print(proc_table)

    summary = summarize_process_metrics(result.processes)
    console.print(f"Average waiting time = {summary['avg_waiting']:.2f}")
    console.print(f"Average turnaround time = {summary['avg_turnaround']:.2f}")

    if result.system:
        sys = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Idle time", str(sys.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")
        sys_table.add_row("Context switches", str(sys.context_switches))

        console.print(sys_table)

    if result.snapshots:
        console.print()
        console.print(render_queue_timeline(result.snapshots), markup=False, highlight=False, soft_wrap=True)

    console.print()
    if chart == "rich":
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks, highlight=False)
    else:
        console.print(render_gantt(result.timeline), markup=False, highlight=False, soft_wrap=True)
    console.print()


def _print_comparison(workload: Workload, algorithms: List[str], quantum: int, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Preemptive", justify="center")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Makespan", justify="right")

    for alg in algorithms:
        policy = ALGORITHMS[alg]
        result = policy.run(workload.arrival, workload.burst, quantum=quantum)
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            policy.label,
            "yes" if policy.preemptive else "no",
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            str(result.makespan),
        )

    console.print(summary_table)


def _print_report(workload: Workload, quantum: int, console: Console, chart: str) -> None:
    for alg in REPORT_ORDER:
        result = run_algorithm(alg, workload.arrival, workload.burst, quantum=quantum)
        _print_result(result, console, chart=chart)


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = console or Console()

    try:
        if args.command == "prompt":
            raw, raw_quantum = prompt_workload(console)
            workload = normalize_workload(raw)
            quantum = normalize_quantum(raw_quantum)
        else:
            workload = _resolve_workload(args)
            quantum = normalize_quantum(args.quantum, strict=args.strict)
    except (InvalidInputError, OSError) as exc:
        console.print(f"[red]Error: {exc}[/red]")
        return 2
    except EOFError:
        console.print("[red]Error: input ended before the workload was complete[/red]")
        return 2

    if args.command == "run":
        result = run_algorithm(args.algorithm, workload.arrival, workload.burst, quantum=quantum)
        _print_result(result, console, chart=args.chart)
        return 0

    if args.command == "compare":
        _print_comparison(workload, args.algorithms, quantum, console)
        return 0

    if args.command in {"report", "prompt"}:
        if not len(workload):
            console.print("[yellow]No processes to schedule.[/yellow]")
            return 0
        _print_report(workload, quantum, console, chart=args.chart)
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
