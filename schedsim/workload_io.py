from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, TextIO

from rich.console import Console
from rich.prompt import IntPrompt

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised for workloads or quanta the simulator cannot accept."""


@dataclass
class Workload:
    arrival: List[int] = field(default_factory=list)
    burst: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.arrival)


def load_workload(path: str | Path) -> Workload:
    """
    Load a workload from a JSON or CSV file. Process ids follow file order.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise InvalidInputError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> Workload:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInputError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise InvalidInputError("JSON workload must be a list of process objects")

    return _workload_from_mappings(raw)


def _load_csv(path: Path) -> Workload:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return _workload_from_mappings(reader)


def _as_int(value) -> int:
    # json bools and floats are not times
    if isinstance(value, (bool, float)):
        raise TypeError(f"expected an integer, got {value!r}")
    return int(value)


def _workload_from_mappings(entries: Iterable) -> Workload:
    workload = Workload()
    for entry in entries:
        try:
            arrival_time = _as_int(entry["arrival_time"])
            burst_time = _as_int(entry["burst_time"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidInputError(f"Invalid process entry: {entry!r}") from exc
        workload.arrival.append(arrival_time)
        workload.burst.append(burst_time)
    return workload


def workload_from_lists(arrival: Optional[Sequence[int]], burst: Optional[Sequence[int]]) -> Workload:
    """
    Build a workload from inline ``--arrival`` / ``--burst`` values.
    """
    arrival = list(arrival or [])
    burst = list(burst or [])
    if len(arrival) != len(burst):
        raise InvalidInputError(
            f"--arrival and --burst need the same number of values ({len(arrival)} != {len(burst)})"
        )
    return Workload(arrival=arrival, burst=burst)


def normalize_workload(workload: Workload, strict: bool = False) -> Workload:
    """
    Clamp negative arrival and burst times to 0, or reject them when strict.
    """
    normalized = Workload()
    for idx, (a, b) in enumerate(zip(workload.arrival, workload.burst), start=1):
        for name, value in (("arrival", a), ("burst", b)):
            if value < 0:
                if strict:
                    raise InvalidInputError(f"P{idx}: negative {name} time {value}")
                logger.warning("P%d: negative %s time %d clamped to 0", idx, name, value)
        normalized.arrival.append(max(a, 0))
        normalized.burst.append(max(b, 0))
    return normalized


def normalize_quantum(quantum: Optional[int], strict: bool = False) -> int:
    if quantum is None or quantum <= 0:
        if strict:
            raise InvalidInputError(f"Quantum must be a positive integer, got {quantum}")
        logger.warning("quantum %s replaced with 1", quantum)
        return 1
    return quantum


def prompt_workload(console: Console, stream: Optional[TextIO] = None) -> tuple[Workload, int]:
    """
    Ask for the process count, every burst time, every arrival time and the
    Round Robin quantum, in that order. Values are returned unnormalized.
    """
    n = IntPrompt.ask("Enter number of processes", console=console, stream=stream)
    if n <= 0:
        return Workload(), 1

    burst = [
        IntPrompt.ask(f"Enter burst time for process {i}", console=console, stream=stream)
        for i in range(1, n + 1)
    ]
    arrival = [
        IntPrompt.ask(f"Enter arrival time for process {i}", console=console, stream=stream)
        for i in range(1, n + 1)
    ]
    quantum = IntPrompt.ask("Enter time quantum for Round Robin", console=console, stream=stream)
    return Workload(arrival=arrival, burst=burst), quantum
