from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .dispatcher import simulate
from .errors import SchedulerError
from .gantt import build_rich_gantt
from .log import configure_logging
from .metrics import summarize_process_metrics
from .models import ScheduleResult, SchedulingOptions
from .policies import POLICIES, default_policy_name
from .ready_queue import ReadyQueue
from .workload_io import default_output_path, load_job_pool, write_timeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jobpool-scheduler",
        description="Single-CPU job pool scheduler (FCFS, P_PL).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log output (-v for info, -vv for every dispatch decision).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Schedule a job pool and write the timeline.")
    run_parser.add_argument("job_pool", help="Path to the job pool file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        default=None,
        help="Policy to use (FCFS, P_PL). Defaults to P_PL for preemptive pools, FCFS otherwise.",
    )
    run_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Where to write the timeline (default: output.<ext> next to the job pool).",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Override the quantum from the job pool options line.",
    )
    run_parser.add_argument(
        "--preemptive",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Override the preemption flag from the job pool options line.",
    )
    run_parser.add_argument(
        "--show",
        action="store_true",
        help="Print a Gantt chart and metric tables after writing the timeline.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several policies on the same job pool and compare average metrics.",
    )
    compare_parser.add_argument("job_pool", help="Path to the job pool file.")
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(POLICIES),
        help=f"Policies to compare (default: {' '.join(POLICIES)}).",
    )

    subparsers.add_parser("policies", help="List the available scheduling policies.")

    return parser


def _apply_overrides(ready_queue: ReadyQueue, quantum: Optional[int], preemptive: Optional[bool]) -> ReadyQueue:
    if quantum is None and preemptive is None:
        return ready_queue
    options = SchedulingOptions(
        preemptive=ready_queue.preemptive if preemptive is None else preemptive,
        quantum=ready_queue.quantum if quantum is None else quantum,
    )
    logger.info("Overriding job pool options: preemptive=%s, quantum=%d", options.preemptive, options.quantum)
    return ready_queue.copy(options)


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Policy:[/bold] {result.policy}")
    console.print(f"[bold]Preemptive:[/bold] {'yes' if result.options.preemptive else 'no'}")
    console.print(f"[bold]Quantum:[/bold] {result.options.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Complete",
        "Wait",
        "Turnaround",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            f"P{p.pid}",
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.processes)
    if result.system:
        system = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
        sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
        sys_table.add_row("Avg response", f"{summary['avg_response']:.2f}")
        sys_table.add_row("Makespan", str(system.makespan))
        sys_table.add_row("Throughput (proc/time)", f"{system.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{system.cpu_utilization*100:.1f}%")

        console.print(sys_table)


def _run(args: argparse.Namespace, console: Console) -> int:
    job_pool = Path(args.job_pool)
    ready_queue = _apply_overrides(load_job_pool(job_pool), args.quantum, args.preemptive)
    policy_name = args.algorithm or default_policy_name(ready_queue.options)

    result = simulate(ready_queue, policy_name)

    output = Path(args.output) if args.output else default_output_path(job_pool)
    write_timeline(result.lines, output)
    console.print(f"Wrote {len(result.timeline)} timeline entries to [green]{output}[/green]")

    if args.show:
        console.print()
        _print_result(result, console)
    return 0


def _compare(args: argparse.Namespace, console: Console) -> int:
    job_pool = Path(args.job_pool)
    ready_queue = load_job_pool(job_pool)

    summary_table = Table(title=f"Policy comparison: {job_pool}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Policy")
    summary_table.add_column("Entries", justify="right")
    summary_table.add_column("Makespan", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for name in args.algorithms:
        # Every policy gets its own unexecuted copy of the pool.
        result = simulate(ready_queue.copy(), name)
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            result.policy,
            str(len(result.timeline)),
            str(result.system.makespan if result.system else 0),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_response']:.2f}",
        )

    console.print(summary_table)
    return 0


def _list_policies(console: Console) -> int:
    table = Table(title="Scheduling policies", box=box.SIMPLE_HEAVY)
    table.add_column("Name")
    table.add_column("Description")
    for name, policy_cls in POLICIES.items():
        table.add_row(name, policy_cls.description)
    console.print(table)
    return 0


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    configure_logging(args.verbose)

    try:
        if args.command == "run":
            return _run(args, console)
        if args.command == "compare":
            return _compare(args, console)
        if args.command == "policies":
            return _list_policies(console)
    except (SchedulerError, OSError) as exc:
        logger.debug("Run failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
