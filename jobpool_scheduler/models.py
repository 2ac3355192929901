from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import ConfigurationError, SchedulingInvariantError


@dataclass(eq=False)
class Process:
    """
    A process from the job pool.

    Identity and demand are fixed at load time. The only mutable counter is
    the CPU time granted so far, which policies advance through
    ``record_execution`` / ``run_to_completion``.
    """

    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0
    _executed_time: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.pid <= 0:
            raise ConfigurationError(f"Process id must be positive, got {self.pid}")
        if self.arrival_time < 0:
            raise ConfigurationError(f"P{self.pid}: arrival time must be >= 0, got {self.arrival_time}")
        if self.burst_time < 0:
            raise ConfigurationError(f"P{self.pid}: burst time must be >= 0, got {self.burst_time}")

    @property
    def executed_time(self) -> int:
        return self._executed_time

    @property
    def remaining_time(self) -> int:
        return self.burst_time - self._executed_time

    @property
    def finished(self) -> bool:
        return self._executed_time == self.burst_time

    def record_execution(self, amount: int) -> None:
        if amount < 0:
            raise SchedulingInvariantError(f"P{self.pid}: negative execution amount {amount}")
        if amount > self.remaining_time:
            raise SchedulingInvariantError(
                f"P{self.pid}: cannot record {amount} units, only {self.remaining_time} remaining"
            )
        self._executed_time += amount

    def run_to_completion(self) -> int:
        """Grant the rest of the burst in one go and return how much that was."""
        granted = self.remaining_time
        self._executed_time = self.burst_time
        return granted

    def copy(self) -> "Process":
        """Fresh, unexecuted copy with the same identity."""
        return Process(
            pid=self.pid,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            priority=self.priority,
        )

    def __str__(self) -> str:
        return f"{{P{self.pid}, {self.arrival_time}, {self.burst_time}, {self.priority}}}"


@dataclass(frozen=True)
class SchedulingOptions:
    preemptive: bool = False
    quantum: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.quantum, bool) or not isinstance(self.quantum, int):
            raise ConfigurationError(f"Quantum must be an integer, got {self.quantum!r}")
        if self.quantum <= 0:
            raise ConfigurationError(f"Invalid quantum time: {self.quantum}")


@dataclass(frozen=True)
class TimelineEntry:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    def format(self) -> str:
        return f"{self.start} {self.end} P{self.pid}"


@dataclass
class ProcessMetrics:
    pid: int
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: int = 0


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    policy: str
    options: SchedulingOptions
    timeline: List[TimelineEntry] = field(default_factory=list)
    processes: List[ProcessMetrics] = field(default_factory=list)
    system: Optional[SystemMetrics] = None

    @property
    def lines(self) -> List[str]:
        return [entry.format() for entry in self.timeline]
