from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimelineEntry

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _label(entry: TimelineEntry, width: int) -> str:
    return f"P{entry.pid}"[:width].ljust(width)


def build_rich_gantt(entries: List[TimelineEntry]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not entries:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    entries = sorted(entries, key=lambda e: (e.start, e.end))

    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    bars = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for entry in entries:
        idle_gap = entry.start - last_time
        if idle_gap > 0:
            bars.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            last_time = entry.start
            time_marks += f"{last_time:>3}"

        width = max(1, entry.duration)
        bars.append(" " * width, style=f"on {pid_color(entry.pid)}")
        labels.append(_label(entry, width), style="bold")

        last_time = entry.end
        time_marks += f"{last_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(bars)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
