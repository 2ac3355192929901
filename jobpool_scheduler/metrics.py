from __future__ import annotations

from typing import Dict, Iterable, List

from .models import Process, ProcessMetrics, ScheduleResult, SystemMetrics, TimelineEntry


def compute_process_metrics(processes: Iterable[Process], timeline: List[TimelineEntry]) -> List[ProcessMetrics]:
    """
    Derive start, completion, waiting, turnaround and response times from the
    timeline. A process without entries (zero demand) completes on arrival.
    """
    first_start: Dict[int, int] = {}
    last_end: Dict[int, int] = {}
    for entry in timeline:
        first_start.setdefault(entry.pid, entry.start)
        last_end[entry.pid] = max(last_end.get(entry.pid, entry.end), entry.end)

    metrics: List[ProcessMetrics] = []
    for p in sorted(processes, key=lambda proc: proc.pid):
        start_time = first_start.get(p.pid, p.arrival_time)
        completion_time = last_end.get(p.pid, p.arrival_time)
        turnaround_time = completion_time - p.arrival_time
        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                start_time=start_time,
                completion_time=completion_time,
                waiting_time=turnaround_time - p.burst_time,
                turnaround_time=turnaround_time,
                response_time=start_time - p.arrival_time,
                priority=p.priority,
            )
        )
    return metrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given populated per-process metrics
    and timeline entries.
    """
    if not result.processes:
        system = SystemMetrics(cpu_busy_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    makespan = max(p.completion_time for p in result.processes)
    cpu_busy_time = sum(entry.duration for entry in result.timeline)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[ProcessMetrics]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }
