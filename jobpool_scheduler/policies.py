from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type

from .errors import UnknownPolicyError
from .models import Process, SchedulingOptions, TimelineEntry
from .ready_queue import ReadyQueue, RemainingQueue

logger = logging.getLogger(__name__)


class SchedulingPolicy(ABC):
    """
    A CPU scheduling algorithm.

    ``run`` drains the ready queue completely and returns the timeline in
    emission order. The only state it touches besides the returned list is
    the executed time of each process.
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    def run(self, ready_queue: ReadyQueue) -> List[TimelineEntry]:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FirstArrivalPolicy(SchedulingPolicy):
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes leave the queue in arrival order and run to completion. When
    the next process has not arrived yet the cursor jumps to its arrival;
    idle time never gets an entry of its own.
    """

    name = "FCFS"
    description = "First-come first-serve, non-preemptive"

    def run(self, ready_queue: ReadyQueue) -> List[TimelineEntry]:
        timeline = 0
        entries: List[TimelineEntry] = []

        while ready_queue:
            process = ready_queue.pop()

            if process.finished:
                logger.debug("FCFS: P%d has no CPU demand, skipping", process.pid)
                continue

            if process.arrival_time > timeline:
                logger.debug("FCFS: CPU idle from %d to %d", timeline, process.arrival_time)
                timeline = process.arrival_time

            start = timeline
            end = start + process.run_to_completion()
            entries.append(TimelineEntry(pid=process.pid, start=start, end=end))
            logger.debug("FCFS: P%d runs %d-%d", process.pid, start, end)

            timeline = end

        logger.info("FCFS finished at t=%d with %d entries", timeline, len(entries))
        return entries


class LowestPriorityPreemptivePolicy(SchedulingPolicy):
    """
    Preemptive lowest-priority-first scheduling with a fixed quantum.

    At every decision point all arrived processes compete and the one with
    the numerically lowest priority runs for at most one quantum. Ties go to
    the earlier arrival, then the lower pid. A process that still needs more
    than one quantum is preempted and parked in the remaining queue. When
    nothing has arrived yet the cursor advances by a whole quantum.
    """

    name = "P_PL"
    description = "Preemptive lowest-priority-first with quantum time slicing"

    def run(self, ready_queue: ReadyQueue) -> List[TimelineEntry]:
        quantum = ready_queue.quantum
        remaining_queue = RemainingQueue()

        timeline = 0
        entries: List[TimelineEntry] = []

        if not ready_queue.preemptive:
            logger.info("P_PL: job pool is not marked preemptive, slicing with quantum %d anyway", quantum)

        while ready_queue or remaining_queue:
            process = self._select_lowest(ready_queue, remaining_queue, timeline)

            if process is None:
                # Nothing has arrived yet.
                logger.debug(
                    "P_PL: CPU idle from %d to %d, next arrival at %s",
                    timeline,
                    timeline + quantum,
                    ready_queue.next_arrival(),
                )
                timeline += quantum
                continue

            start = timeline
            burst_remaining = process.remaining_time

            if burst_remaining <= quantum:
                end = start + burst_remaining
                process.record_execution(burst_remaining)
                logger.debug("P_PL: P%d runs %d-%d and finishes", process.pid, start, end)
            else:
                end = start + quantum
                process.record_execution(quantum)
                remaining_queue.push(process)
                logger.debug(
                    "P_PL: P%d runs %d-%d, preempted with %d left",
                    process.pid,
                    start,
                    end,
                    process.remaining_time,
                )

            entries.append(TimelineEntry(pid=process.pid, start=start, end=end))
            timeline = end

        logger.info("P_PL finished at t=%d with %d entries (quantum %d)", timeline, len(entries), quantum)
        return entries

    @staticmethod
    def _select_lowest(
        ready_queue: ReadyQueue, remaining_queue: RemainingQueue, timeline: int
    ) -> Optional[Process]:
        """
        Move every arrival up to ``timeline`` into the remaining queue and pop
        the lowest-priority process from it. Everything in the remaining
        queue has already arrived, so its head is the winner among all
        eligible processes; the losers simply stay where they are.
        """
        for process in ready_queue.pop_arrived(timeline):
            if process.finished:
                logger.debug("P_PL: P%d has no CPU demand, skipping", process.pid)
                continue
            remaining_queue.push(process)

        if not remaining_queue:
            return None
        return remaining_queue.pop()


POLICIES: Dict[str, Type[SchedulingPolicy]] = {
    FirstArrivalPolicy.name: FirstArrivalPolicy,
    LowestPriorityPreemptivePolicy.name: LowestPriorityPreemptivePolicy,
}


def create_policy(name: str) -> SchedulingPolicy:
    """
    Look up a policy by name (case-insensitive) and instantiate it.
    """
    policy_cls = POLICIES.get(name.upper())
    if policy_cls is None:
        raise UnknownPolicyError(name, POLICIES)
    return policy_cls()


def default_policy_name(options: SchedulingOptions) -> str:
    return LowestPriorityPreemptivePolicy.name if options.preemptive else FirstArrivalPolicy.name
