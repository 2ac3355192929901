import pytest

from jobpool_scheduler.errors import ConfigurationError, SchedulingInvariantError
from jobpool_scheduler.models import Process, SchedulingOptions, TimelineEntry
from jobpool_scheduler.ready_queue import ReadyQueue, RemainingQueue


def test_process_starts_unexecuted():
    p = Process(1, arrival_time=0, burst_time=5, priority=2)
    assert p.executed_time == 0
    assert p.remaining_time == 5
    assert not p.finished


def test_record_execution_accumulates():
    p = Process(1, arrival_time=0, burst_time=5)
    p.record_execution(3)
    p.record_execution(2)
    assert p.executed_time == 5
    assert p.finished


def test_record_execution_rejects_overshoot():
    p = Process(1, arrival_time=0, burst_time=3)
    with pytest.raises(SchedulingInvariantError):
        p.record_execution(4)
    assert p.executed_time == 0


def test_record_execution_rejects_negative():
    p = Process(1, arrival_time=0, burst_time=3)
    with pytest.raises(SchedulingInvariantError):
        p.record_execution(-1)


def test_run_to_completion_returns_remaining():
    p = Process(1, arrival_time=0, burst_time=6)
    p.record_execution(2)
    assert p.run_to_completion() == 4
    assert p.finished


def test_zero_demand_process_is_finished():
    assert Process(1, arrival_time=0, burst_time=0).finished


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(pid=0, arrival_time=0, burst_time=1),
        dict(pid=1, arrival_time=-1, burst_time=1),
        dict(pid=1, arrival_time=0, burst_time=-2),
    ],
)
def test_process_rejects_invalid_fields(kwargs):
    with pytest.raises(ConfigurationError):
        Process(**kwargs)


def test_process_copy_is_fresh():
    p = Process(3, arrival_time=1, burst_time=4, priority=7)
    p.record_execution(4)
    clone = p.copy()
    assert (clone.pid, clone.arrival_time, clone.burst_time, clone.priority) == (3, 1, 4, 7)
    assert clone.executed_time == 0


def test_process_str():
    assert str(Process(2, 1, 5, 3)) == "{P2, 1, 5, 3}"


@pytest.mark.parametrize("quantum", [0, -3])
def test_options_reject_non_positive_quantum(quantum):
    with pytest.raises(ConfigurationError, match="quantum"):
        SchedulingOptions(preemptive=True, quantum=quantum)


def test_options_reject_non_integer_quantum():
    with pytest.raises(ConfigurationError):
        SchedulingOptions(quantum=2.5)


def test_timeline_entry_format():
    entry = TimelineEntry(pid=4, start=3, end=9)
    assert entry.format() == "3 9 P4"
    assert entry.duration == 6


def test_ready_queue_orders_by_arrival_then_insertion():
    processes = [Process(1, 4, 1), Process(2, 0, 1), Process(3, 4, 1), Process(4, 2, 1)]
    queue = ReadyQueue(SchedulingOptions(), processes)
    assert [p.pid for p in queue] == [2, 4, 1, 3]
    # Iteration does not consume.
    assert len(queue) == 4
    assert [queue.pop().pid for _ in range(4)] == [2, 4, 1, 3]
    assert not queue


def test_ready_queue_exposes_options():
    queue = ReadyQueue(SchedulingOptions(preemptive=True, quantum=3))
    assert queue.preemptive is True
    assert queue.quantum == 3
    assert queue.next_arrival() is None


def test_ready_queue_pop_empty_raises():
    with pytest.raises(IndexError):
        ReadyQueue(SchedulingOptions()).pop()


def test_ready_queue_pop_arrived_stops_at_future_arrivals():
    processes = [Process(1, 0, 1), Process(2, 3, 1), Process(3, 6, 1)]
    queue = ReadyQueue(SchedulingOptions(), processes)
    assert [p.pid for p in queue.pop_arrived(3)] == [1, 2]
    assert queue.next_arrival() == 6
    assert [p.pid for p in queue] == [3]


def test_ready_queue_copy_is_independent():
    processes = [Process(1, 0, 2), Process(2, 1, 2)]
    queue = ReadyQueue(SchedulingOptions(quantum=2), processes)
    clone = queue.copy(SchedulingOptions(preemptive=True, quantum=5))
    clone.pop().record_execution(2)
    assert len(queue) == 2
    assert processes[0].executed_time == 0
    assert clone.quantum == 5 and queue.quantum == 2


def test_remaining_queue_orders_by_priority_then_arrival_then_pid():
    queue = RemainingQueue()
    for process in [Process(1, 0, 1, priority=3), Process(3, 2, 1, priority=1), Process(2, 2, 1, priority=1), Process(4, 0, 1, priority=1)]:
        queue.push(process)
    assert [queue.pop().pid for _ in range(4)] == [4, 2, 3, 1]
    assert not queue
