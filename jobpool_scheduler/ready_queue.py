"""
Queues holding processes that still need the CPU.

``ReadyQueue`` orders by arrival time (ties by insertion order) and carries
the run-wide scheduling options. ``RemainingQueue`` orders preempted
processes by priority, lowest value first.

Both are min-heaps with an insertion counter as the final tie-breaker, so
popping is deterministic for equal keys.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Iterable, Iterator, List, Optional, Tuple

from .models import Process, SchedulingOptions


class ReadyQueue:
    def __init__(self, options: SchedulingOptions, processes: Iterable[Process] = ()):
        self._options = options
        self._heap: List[Tuple[int, int, Process]] = []
        self._counter = itertools.count()
        for process in processes:
            self.push(process)

    @property
    def options(self) -> SchedulingOptions:
        return self._options

    @property
    def preemptive(self) -> bool:
        return self._options.preemptive

    @property
    def quantum(self) -> int:
        return self._options.quantum

    def copy(self, options: Optional[SchedulingOptions] = None) -> "ReadyQueue":
        """
        Independent queue holding unexecuted copies of the same processes, in
        the same order, optionally with different options.
        """
        return ReadyQueue(options or self._options, (process.copy() for process in self))

    def push(self, process: Process) -> None:
        heapq.heappush(self._heap, (process.arrival_time, next(self._counter), process))

    def pop(self) -> Process:
        """Remove and return the process that arrived earliest."""
        if not self._heap:
            raise IndexError("pop from an empty ReadyQueue")
        _, _, process = heapq.heappop(self._heap)
        return process

    def pop_arrived(self, timeline: int) -> Iterator[Process]:
        """Remove and yield, in arrival order, every process arrived by ``timeline``."""
        while self._heap and self._heap[0][0] <= timeline:
            yield heapq.heappop(self._heap)[2]

    def next_arrival(self) -> Optional[int]:
        return self._heap[0][0] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[Process]:
        return (process for _, _, process in sorted(self._heap, key=lambda item: item[:2]))

    def __repr__(self) -> str:
        return (
            f"ReadyQueue(preemptive={self.preemptive}, quantum={self.quantum}, "
            f"processes=[{', '.join(str(p) for p in self)}])"
        )


def priority_key(process: Process) -> Tuple[int, int, int]:
    # Lower numeric priority value wins; then earlier arrival, then lower pid.
    return (process.priority, process.arrival_time, process.pid)


class RemainingQueue:
    def __init__(self):
        self._heap: List[Tuple[Tuple[int, int, int], int, Process]] = []
        self._counter = itertools.count()

    def push(self, process: Process) -> None:
        heapq.heappush(self._heap, (priority_key(process), next(self._counter), process))

    def pop(self) -> Process:
        if not self._heap:
            raise IndexError("pop from an empty RemainingQueue")
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
