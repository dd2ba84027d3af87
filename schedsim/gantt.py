from __future__ import annotations

from typing import Dict, List, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import QueueSnapshot, TimelineSegment, consolidate_timeline


def render_gantt(segments: Sequence[TimelineSegment]) -> str:
    """
    Plain-text Gantt chart: one cell per consolidated run, with every time
    marker centered under the pipe that closes the run before it.

        | P1 | Idle | P2 |
        0    5      7    9
    """
    if not segments:
        return "(no execution)"

    runs = consolidate_timeline(segments)

    line = "| " + "".join(f"{seg.label} | " for seg in runs)
    pipes = [i for i, ch in enumerate(line) if ch == "|"]
    marks = [0] + [seg.end_time for seg in runs]

    time_line = [" "] * len(line)
    for pipe, mark in zip(pipes, marks):
        text = str(mark)
        left = pipe - len(text) // 2
        for offset, ch in enumerate(text):
            pos = left + offset
            if 0 <= pos < len(time_line):
                time_line[pos] = ch

    return "\n".join(["Gantt Chart:", line.rstrip(), "".join(time_line).rstrip()])


def render_queue_timeline(snapshots: Sequence[QueueSnapshot]) -> str:
    """
    One line per Round Robin dispatch decision, e.g.
    ``Time 2: [P2, P3, P1] → CPU: P2``; the closing snapshot reads ``→ Done``.
    """
    if not snapshots:
        return ""

    lines = ["Ready Queue Timeline (Compact View):"]
    for snap in snapshots:
        queue = ", ".join(f"P{pid}" for pid in snap.ready_queue)
        target = f"CPU: P{snap.currently_dispatched}" if snap.currently_dispatched > 0 else "Done"
        lines.append(f"Time {snap.time}: [{queue}] → {target}")
    return "\n".join(lines)


def build_rich_gantt(segments: Sequence[TimelineSegment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    runs = consolidate_timeline(segments)

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    marks: List[str] = ["0"]

    for seg in runs:
        width = max(len(seg.label), seg.duration)
        if seg.is_idle:
            timeline.append("." * width, style="dim")
            labels.append(seg.label.ljust(width), style="dim")
        else:
            timeline.append(" " * width, style=f"on {pid_color(seg.process_id)}")
            labels.append(seg.label.ljust(width), style="bold")
        marks.append(str(seg.end_time).rjust(width))

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, "".join(marks)
