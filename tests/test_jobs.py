import pytest

from labnet.jobs import Job, JobList, JobState, TooManyJobsError


def test_first_job_gets_jid_one_and_ids_increase():
    jobs = JobList()
    first = jobs.add(100, JobState.BG, "sleep 1 &\n")
    second = jobs.add(200, JobState.BG, "sleep 2 &\n")
    assert first.jid == 1
    assert second.jid == first.jid + 1
    assert len(jobs) == 2


def test_add_returns_stored_job():
    jobs = JobList()
    job = jobs.add(42, JobState.FG, "ls\n")
    assert job == Job(42, job.jid, JobState.FG, "ls\n")
    assert jobs.by_pid(42) is job


def test_add_rejects_non_positive_pid():
    jobs = JobList()
    assert jobs.add(0, JobState.BG, "x\n") is None
    assert jobs.add(-5, JobState.BG, "x\n") is None
    assert len(jobs) == 0


def test_full_table_raises():
    jobs = JobList(max_jobs=2)
    jobs.add(1, JobState.BG, "a\n")
    jobs.add(2, JobState.BG, "b\n")
    with pytest.raises(TooManyJobsError, match="too many jobs"):
        jobs.add(3, JobState.BG, "c\n")


def test_delete_recomputes_next_jid():
    jobs = JobList()
    jobs.add(10, JobState.BG, "a\n")
    jobs.add(11, JobState.BG, "b\n")
    third = jobs.add(12, JobState.BG, "c\n")
    assert jobs.delete(12) is True
    again = jobs.add(13, JobState.BG, "d\n")
    assert again.jid == third.jid


def test_delete_middle_job_continues_after_max():
    jobs = JobList()
    jobs.add(10, JobState.BG, "a\n")
    jobs.add(11, JobState.BG, "b\n")
    jobs.add(12, JobState.BG, "c\n")
    jobs.delete(11)
    highest = jobs.max_jid()
    new = jobs.add(13, JobState.BG, "d\n")
    assert new.jid == highest + 1


def test_delete_missing_and_invalid():
    jobs = JobList()
    jobs.add(10, JobState.BG, "a\n")
    assert jobs.delete(99) is False
    assert jobs.delete(0) is False
    assert len(jobs) == 1


def test_jid_wraps_after_max_jobs():
    jobs = JobList(max_jobs=3)
    jobs.add(1, JobState.BG, "a\n")
    jobs.add(2, JobState.BG, "b\n")
    jobs.delete(1)
    jobs.add(3, JobState.BG, "c\n")
    wrapped = jobs.add(4, JobState.BG, "d\n")
    assert wrapped.jid == 1


def test_max_jid_empty_is_zero():
    assert JobList().max_jid() == 0


def test_fg_pid():
    jobs = JobList()
    assert jobs.fg_pid() == 0
    jobs.add(100, JobState.BG, "bg\n")
    jobs.add(200, JobState.FG, "fg\n")
    assert jobs.fg_pid() == 200
    jobs.by_pid(200).state = JobState.ST
    assert jobs.fg_pid() == 0


def test_lookups():
    jobs = JobList()
    job = jobs.add(100, JobState.BG, "a\n")
    assert jobs.by_jid(job.jid) is job
    assert jobs.by_jid(0) is None
    assert jobs.by_pid(0) is None
    assert jobs.by_pid(101) is None
    assert jobs.pid_to_jid(100) == job.jid
    assert jobs.pid_to_jid(101) == 0
    assert jobs.pid_to_jid(-1) == 0


def test_listing_format():
    jobs = JobList()
    jobs.add(100, JobState.BG, "sleep 1 &\n")
    jobs.add(200, JobState.ST, "sleep 2\n")
    jobs.add(300, JobState.FG, "sleep 3\n")
    assert jobs.listing() == (
        "[1] (100) Running sleep 1 &\n"
        "[2] (200) Stopped sleep 2\n"
        "[3] (300) Foreground sleep 3\n"
    )


def test_listing_undefined_state():
    jobs = JobList()
    jobs.add(100, JobState.UNDEF, "odd\n")
    assert jobs.listing() == "[1] (100) listjobs: Internal error: job[0].state=0 odd\n"


def test_verbose_reports_added_job(capsys):
    jobs = JobList(verbose=True)
    jobs.add(100, JobState.BG, "sleep\n")
    assert capsys.readouterr().out == "Added job [1] 100 sleep\n\n"


def test_quiet_by_default(capsys):
    JobList().add(100, JobState.BG, "sleep\n")
    assert capsys.readouterr().out == ""