"""The job table kept by the shell: fixed slots, job ids and states."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass

MAXJOBS = 16


class JobState(enum.IntEnum):
    """Where a job runs: undefined, foreground, background or stopped."""

    UNDEF = 0
    FG = 1
    BG = 2
    ST = 3


@dataclass
class Job:
    """One entry of the job table."""

    pid: int
    jid: int
    state: JobState
    cmdline: str


class TooManyJobsError(RuntimeError):
    """Raised when every slot of the job table is taken."""


_STATE_LABELS = {
    JobState.BG: "Running ",
    JobState.FG: "Foreground ",
    JobState.ST: "Stopped ",
}


class JobList:
    """A fixed number of job slots with job ids handed out in turn.

    At most one job is expected to be in the foreground state.
    """

    def __init__(self, max_jobs: int = MAXJOBS, verbose: bool = False) -> None:
        if max_jobs < 1:
            raise ValueError("max_jobs must be at least 1")
        self.max_jobs = max_jobs
        self.verbose = verbose
        self.next_jid = 1
        self._slots: list[Job | None] = [None] * max_jobs

    def __iter__(self) -> Iterator[Job]:
        """Yield the jobs in slot order."""
        return (job for job in self._slots if job is not None)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def add(self, pid: int, state: JobState, cmdline: str) -> Job | None:
        """Put a job in the first free slot and return it.

        A pid below 1 adds nothing and gives None; a full table raises
        ``TooManyJobsError``.
        """
        if pid < 1:
            return None
        for index, slot in enumerate(self._slots):
            if slot is None:
                job = Job(pid, self.next_jid, JobState(state), cmdline)
                self._slots[index] = job
                self.next_jid += 1
                if self.next_jid > self.max_jobs:
                    self.next_jid = 1
                if self.verbose:
                    print(f"Added job [{job.jid}] {job.pid} {job.cmdline}")
                return job
        raise TooManyJobsError("Tried to create too many jobs")

    def delete(self, pid: int) -> bool:
        """Remove the job with this pid; tell whether one was removed."""
        if pid < 1:
            return False
        for index, slot in enumerate(self._slots):
            if slot is not None and slot.pid == pid:
                self._slots[index] = None
                self.next_jid = self.max_jid() + 1
                return True
        return False

    def max_jid(self) -> int:
        """Return the largest job id in use, or 0 when there is none."""
        return max((job.jid for job in self), default=0)

    def fg_pid(self) -> int:
        """Return the pid of the foreground job, or 0 when there is none."""
        return next((job.pid for job in self if job.state is JobState.FG), 0)

    def by_pid(self, pid: int) -> Job | None:
        """Find a job by process id."""
        if pid < 1:
            return None
        return next((job for job in self if job.pid == pid), None)

    def by_jid(self, jid: int) -> Job | None:
        """Find a job by job id."""
        if jid < 1:
            return None
        return next((job for job in self if job.jid == jid), None)

    def pid_to_jid(self, pid: int) -> int:
        """Map a process id to its job id, or 0 when it has no job."""
        job = self.by_pid(pid)
        return job.jid if job is not None else 0

    def listing(self) -> str:
        """Render the job table as the ``jobs`` builtin prints it."""
        parts = []
        for index, slot in enumerate(self._slots):
            if slot is None:
                continue
            label = _STATE_LABELS.get(
                slot.state,
                f"listjobs: Internal error: job[{index}].state={int(slot.state)} ",
            )
            parts.append(f"[{slot.jid}] ({slot.pid}) {label}{slot.cmdline}")
        return "".join(parts)