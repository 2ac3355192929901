from __future__ import annotations

from typing import List

from .metrics import compute_process_metrics, compute_system_metrics
from .models import ScheduleResult, TimelineEntry
from .policies import SchedulingPolicy, create_policy
from .ready_queue import ReadyQueue


class Dispatcher:
    """
    Runs one policy over one ready queue.
    """

    def __init__(self, ready_queue: ReadyQueue, policy: SchedulingPolicy):
        self.ready_queue = ready_queue
        self.policy = policy

    def run(self) -> List[TimelineEntry]:
        return self.policy.run(self.ready_queue)

    def dispatch(self) -> List[str]:
        """
        Drain the queue and return the timeline as ``"<start> <end> P<pid>"`` lines.
        """
        return [entry.format() for entry in self.run()]


def simulate(ready_queue: ReadyQueue, policy: SchedulingPolicy | str) -> ScheduleResult:
    """
    Dispatch ``ready_queue`` under ``policy`` (instance or registry name) and
    attach per-process and system metrics to the result.
    """
    if isinstance(policy, str):
        policy = create_policy(policy)

    processes = list(ready_queue)
    options = ready_queue.options
    timeline = Dispatcher(ready_queue, policy).run()

    result = ScheduleResult(
        policy=policy.name,
        options=options,
        timeline=timeline,
        processes=compute_process_metrics(processes, timeline),
    )
    compute_system_metrics(result)
    return result
