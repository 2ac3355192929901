"""
Job pool scheduler package.

Simulates how a single CPU dispatches a pool of processes under a
scheduling policy (FCFS or preemptive lowest-priority-first) and produces
the resulting execution timeline.
"""

from .dispatcher import Dispatcher, simulate
from .models import Process, SchedulingOptions, TimelineEntry
from .policies import (
    POLICIES,
    FirstArrivalPolicy,
    LowestPriorityPreemptivePolicy,
    SchedulingPolicy,
    create_policy,
)
from .ready_queue import ReadyQueue

__all__ = [
    "Dispatcher",
    "FirstArrivalPolicy",
    "LowestPriorityPreemptivePolicy",
    "POLICIES",
    "Process",
    "ReadyQueue",
    "SchedulingOptions",
    "SchedulingPolicy",
    "TimelineEntry",
    "create_policy",
    "simulate",
]
