from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .errors import ConfigurationError, JobPoolFormatError
from .models import Process, SchedulingOptions
from .ready_queue import ReadyQueue

logger = logging.getLogger(__name__)

OPTION_FIELDS = 2
PROCESS_FIELDS = 3


def load_job_pool(path: str | Path) -> ReadyQueue:
    """
    Load a job pool file into a ReadyQueue.

    Layout::

        <number of processes>
        <preemptive 0|1> <quantum>
        <arrival> <burst> <priority>    (one line per process)
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            return parse_job_pool(f, source=path)
    except UnicodeDecodeError as exc:
        raise JobPoolFormatError(f"Job pool is not valid UTF-8 text ({exc.reason})", path) from exc


def parse_job_pool(lines: Iterable[str], source: str | Path = "<memory>") -> ReadyQueue:
    numbered = [(no, line.strip()) for no, line in enumerate(lines, start=1)]
    # Trailing blank lines are common in hand-written pools.
    while numbered and not numbered[-1][1]:
        numbered.pop()

    if not numbered:
        raise JobPoolFormatError("Empty job pool", source)

    declared = _read_process_count(numbered[0], source)

    if len(numbered) < 2:
        raise JobPoolFormatError("Expecting an options line, but the job pool ends", source)
    preemption, quantum = _parse_ints(numbered[1], OPTION_FIELDS, "options", source)

    try:
        options = SchedulingOptions(preemptive=preemption == 1, quantum=quantum)
    except ConfigurationError as exc:
        raise JobPoolFormatError(str(exc), source, numbered[1][0]) from exc

    processes: List[Process] = []
    for pid, numbered_line in enumerate(numbered[2:], start=1):
        arrival_time, burst_time, priority = _parse_ints(
            numbered_line, PROCESS_FIELDS, "process attributes", source
        )
        try:
            processes.append(Process(pid, arrival_time, burst_time, priority))
        except ConfigurationError as exc:
            raise JobPoolFormatError(str(exc), source, numbered_line[0]) from exc

    if declared != len(processes):
        raise JobPoolFormatError(
            f"Declared number of processes {declared} does not equal "
            f"actual number of processes in the job pool: {len(processes)}",
            source,
        )

    logger.info(
        "Loaded %d processes from %s (preemptive=%s, quantum=%d)",
        len(processes),
        source,
        options.preemptive,
        options.quantum,
    )
    return ReadyQueue(options, processes)


def _read_process_count(numbered_line: Tuple[int, str], source) -> int:
    line_no, text = numbered_line
    try:
        count = int(text)
    except ValueError as exc:
        raise JobPoolFormatError(f"Invalid number of processes: {text!r}", source, line_no) from exc
    if count < 0:
        raise JobPoolFormatError(f"No valid number of processes: {count}", source, line_no)
    return count


def _parse_ints(numbered_line: Tuple[int, str], expected: int, what: str, source) -> List[int]:
    """
    Read the first ``expected`` integers of a line; extra tokens are ignored.
    """
    line_no, text = numbered_line
    tokens = text.split()[:expected]
    if len(tokens) != expected:
        raise JobPoolFormatError(
            f"Missing {what}: expected {expected} integers, got {len(tokens)} ({text!r})",
            source,
            line_no,
        )
    try:
        return [int(token) for token in tokens]
    except ValueError as exc:
        raise JobPoolFormatError(f"Non-integer {what}: {text!r}", source, line_no) from exc


def default_output_path(job_pool: str | Path) -> Path:
    """
    ``dir/jobs.data`` -> ``dir/output.data``; a pool without an extension
    gets ``output`` as its output name. A pool already named like its
    output gets ``<name>.processed`` so the input is never overwritten.
    """
    job_pool = Path(job_pool)
    output = job_pool.with_name(f"output{job_pool.suffix}")
    if output == job_pool:
        return job_pool.with_name(f"{job_pool.name}.processed")
    return output


def write_timeline(lines: Iterable[str], path: str | Path, encoding: Optional[str] = "utf-8") -> Path:
    path = Path(path)
    lines = list(lines)
    with path.open("w", encoding=encoding) as f:
        for line in lines:
            f.write(f"{line}\n")
    logger.info("Wrote %d timeline entries to %s", len(lines), path)
    return path
