"""A tiny job-control shell: foreground and background jobs, bg/fg and signals."""

from __future__ import annotations

import getopt
import os
import signal
import sys
import time
from typing import Any, TextIO

from labnet.jobs import JobList, JobState, TooManyJobsError

PROMPT = "tsh> "
MAXLINE = 1024

_BUILTIN_JOB_COMMANDS = ("bg", "fg")


class JobArgumentError(ValueError):
    """Raised when a bg or fg argument does not name an existing job."""


def parseline(cmdline: str) -> tuple[list[str], bool]:
    """Split a command line into arguments and a background flag.

    The last character (normally the newline) is dropped, arguments are
    separated by spaces and text between single quotes is one argument.
    A blank line gives ``([], True)``; a last argument starting with
    ``&`` marks a background job and is removed.
    """
    buf = (cmdline[:-1] if cmdline else "") + " "

    def skip_spaces(pos: int) -> int:
        while pos < len(buf) and buf[pos] == " ":
            pos += 1
        return pos

    def next_delim(pos: int) -> tuple[int, int]:
        if buf[pos:pos + 1] == "'":
            pos += 1
            return pos, buf.find("'", pos)
        return pos, buf.find(" ", pos)

    argv: list[str] = []
    pos, delim = next_delim(skip_spaces(0))
    while delim != -1:
        argv.append(buf[pos:delim])
        pos, delim = next_delim(skip_spaces(delim + 1))

    if not argv:
        return argv, True
    background = argv[-1].startswith("&")
    if background:
        argv.pop()
    return argv, background


def _kill_group(pid: int, signum: int) -> None:
    try:
        os.kill(-pid, signum)
    except OSError:
        pass


class Shell:
    """The shell's state: its job table and where it writes its messages."""

    def __init__(self, out: TextIO | None = None, verbose: bool = False) -> None:
        self.out = sys.stdout if out is None else out
        self.verbose = verbose
        self.jobs = JobList(verbose=verbose)

    def _say(self, text: str) -> None:
        self.out.write(text)
        self.out.flush()

    def eval(self, cmdline: str) -> None:
        """Run a builtin at once, or start a program as a new job."""
        argv, background = parseline(cmdline)
        if not argv:
            return
        if self.builtin_cmd(argv):
            return

        self.out.flush()
        prev_mask = signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGCHLD})
        pid = os.fork()
        if pid == 0:
            try:
                os.setpgid(0, 0)
                signal.pthread_sigmask(signal.SIG_SETMASK, prev_mask)
                os.execve(argv[0], argv, os.environ)
            except OSError:
                self._say(f"{argv[0]}: Command not found\n")
            finally:
                os._exit(0)

        signal.pthread_sigmask(signal.SIG_BLOCK, signal.valid_signals())
        try:
            state = JobState.BG if background else JobState.FG
            self.jobs.add(pid, state, cmdline)
        except TooManyJobsError as exc:
            self.out.write(f"{exc}\n")
        finally:
            signal.pthread_sigmask(signal.SIG_SETMASK, prev_mask)

        if background:
            self.out.write(f"[{self.jobs.pid_to_jid(pid)}] ({pid}) {cmdline}")
        else:
            self.waitfg(pid)

    def builtin_cmd(self, argv: list[str]) -> bool:
        """Execute a builtin command; tell whether ``argv`` was one."""
        command = argv[0]
        if command == "quit":
            raise SystemExit(0)
        if command == "jobs":
            self.out.write(self.jobs.listing())
            return True
        if command in _BUILTIN_JOB_COMMANDS:
            self.do_bgfg(argv)
            return True
        return command == "&"

    def resolve_job(self, argv: list[str]):
        """Find the job named by a bg/fg argument (a PID or ``%jobid``)."""
        if len(argv) < 2:
            raise JobArgumentError(
                f"{argv[0]} command requires PID or %jobid argument"
            )
        arg = argv[1]
        digits = arg[1:] if arg.startswith("%") else arg
        if not all(ch in "0123456789" for ch in digits):
            raise JobArgumentError(f"{argv[0]}: argument must be a PID or %jobid")
        number = int(digits) if digits else 0
        if arg.startswith("%"):
            job = self.jobs.by_jid(number)
            if job is None:
                raise JobArgumentError(f"{arg}: No such job")
        else:
            job = self.jobs.by_pid(number)
            if job is None:
                raise JobArgumentError(f"({arg}): No such process")
        return job

    def do_bgfg(self, argv: list[str]) -> None:
        """Continue a job in the background (bg) or the foreground (fg)."""
        try:
            job = self.resolve_job(argv)
        except JobArgumentError as exc:
            self.out.write(f"{exc}\n")
            return
        _kill_group(job.pid, signal.SIGCONT)
        if argv[0] == "bg":
            job.state = JobState.BG
            self.out.write(f"[{job.jid}] ({job.pid}) {job.cmdline}")
        else:
            job.state = JobState.FG
            self.waitfg(job.pid)

    def waitfg(self, pid: int) -> None:
        """Block until ``pid`` is no longer the foreground job."""
        while pid == self.jobs.fg_pid():
            time.sleep(0.001)

    def sigchld_handler(self, signum: Any = None, frame: Any = None) -> None:
        """Reap finished children and record stopped ones."""
        while True:
            try:
                pid, status = os.waitpid(-1, os.WNOHANG | os.WUNTRACED)
            except ChildProcessError:
                return
            if pid <= 0:
                return
            prev_mask = signal.pthread_sigmask(
                signal.SIG_BLOCK, signal.valid_signals()
            )
            try:
                jid = self.jobs.pid_to_jid(pid)
                if os.WIFEXITED(status):
                    self.jobs.delete(pid)
                elif os.WIFSIGNALED(status):
                    self.jobs.delete(pid)
                    self._say(
                        f"Job [{jid}] ({pid}) terminated by signal "
                        f"{os.WTERMSIG(status)}\n"
                    )
                elif os.WIFSTOPPED(status):
                    self._say(
                        f"Job [{jid}] ({pid}) stopped by signal "
                        f"{int(signal.SIGTSTP)}\n"
                    )
                    _kill_group(pid, signal.SIGTSTP)
                    job = self.jobs.by_pid(pid)
                    if job is not None:
                        job.state = JobState.ST
            finally:
                signal.pthread_sigmask(signal.SIG_SETMASK, prev_mask)

    def sigint_handler(self, signum: Any = None, frame: Any = None) -> None:
        """Pass an interrupt on to the foreground job's process group."""
        pid = self.jobs.fg_pid()
        if pid:
            _kill_group(pid, signal.SIGINT)

    def sigtstp_handler(self, signum: Any = None, frame: Any = None) -> None:
        """Stop the foreground job's process group."""
        pid = self.jobs.fg_pid()
        if not pid:
            return
        jid = self.jobs.pid_to_jid(pid)
        self._say(f"Job [{jid}] ({pid}) stopped by signal {int(signal.SIGTSTP)}\n")
        _kill_group(pid, signal.SIGTSTP)
        job = self.jobs.by_pid(pid)
        if job is not None:
            job.state = JobState.ST

    def sigquit_handler(self, signum: Any = None, frame: Any = None) -> None:
        """Terminate the shell."""
        self._say("Terminating after receipt of SIGQUIT signal\n")
        raise SystemExit(1)

    def install_handlers(self) -> dict[int, Any]:
        """Install the shell's signal handlers; return the previous ones."""
        handlers = {
            signal.SIGINT: self.sigint_handler,
            signal.SIGTSTP: self.sigtstp_handler,
            signal.SIGCHLD: self.sigchld_handler,
            signal.SIGQUIT: self.sigquit_handler,
        }
        previous = {}
        for signum, handler in handlers.items():
            previous[signum] = signal.signal(signum, handler)
            signal.siginterrupt(signum, False)
        return previous

    def run(self, stdin: TextIO | None = None, emit_prompt: bool = True) -> int:
        """Read and evaluate command lines until end of input."""
        source = sys.stdin if stdin is None else stdin
        while True:
            if emit_prompt:
                self._say(PROMPT)
            line = source.readline(MAXLINE - 1)
            if not line.endswith("\n"):
                self.out.flush()
                return 0
            self.eval(line)
            self.out.flush()


def usage(out: TextIO | None = None) -> None:
    """Print the help message and exit with status 1."""
    stream = sys.stdout if out is None else out
    stream.write(
        "Usage: shell [-hvp]\n"
        "   -h   print this message\n"
        "   -v   print additional diagnostic information\n"
        "   -p   do not emit a command prompt\n"
    )
    stream.flush()
    raise SystemExit(1)


def main(argv: list[str] | None = None) -> int:
    """Start the interactive shell."""
    args = sys.argv[1:] if argv is None else list(argv)
    os.dup2(1, 2)
    verbose = False
    emit_prompt = True
    try:
        options, _rest = getopt.getopt(args, "hvp")
    except getopt.GetoptError:
        usage()
        return 1
    for flag, _value in options:
        if flag == "-h":
            usage()
        elif flag == "-v":
            verbose = True
        elif flag == "-p":
            emit_prompt = False
    shell = Shell(sys.stdout, verbose)
    shell.install_handlers()
    return shell.run(sys.stdin, emit_prompt)


if __name__ == "__main__":
    raise SystemExit(main())