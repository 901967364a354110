"""Run another command in place of this process and mirror how it ended.

The child inherits the working directory, environment and standard streams, so
its output (and anything the wrapping tool prints) reaches the terminal in the
order the OS delivers it. While blocked on the child, termination signals sent
to this process are forwarded so no orphaned child outlives the wrapper.
"""

from __future__ import annotations

import contextlib
import os
import signal
import subprocess
import sys
import threading
from collections.abc import Iterator, Sequence
from types import FrameType
from typing import Any

import attrs

from .errors import LaunchFailure

FORWARDED_SIGNALS: tuple[signal.Signals, ...] = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGHUP", "SIGQUIT") if hasattr(signal, name)
)


def spawn(argv: Sequence[str]) -> subprocess.Popen[bytes]:
    """Start argv with inherited cwd/env/stdio. Raises LaunchFailure on OS-level spawn errors."""
    try:
        return subprocess.Popen(list(argv))
    except OSError as e:
        reason = e.strerror or str(e)
        raise LaunchFailure(f"failed to start {argv[0]}: {reason}", os_error=e) from e


@attrs.define(slots=True)
class SignalForwarder:
    """Relays signals to a child process.

    Signals that arrive before a child is attached are held and delivered on
    `attach()`, so nothing slips through between installing the handlers and
    the spawn returning.
    """

    proc: subprocess.Popen[Any] | None = None
    pending: list[int] = attrs.field(factory=list)

    def attach(self, proc: subprocess.Popen[Any]) -> None:
        self.proc = proc
        while self.pending:
            proc.send_signal(self.pending.pop(0))

    def __call__(self, signum: int, frame: FrameType | None) -> None:
        if self.proc is None:
            self.pending.append(signum)
            return
        # send_signal() ignores a child that has already been reaped.
        self.proc.send_signal(signum)


@contextlib.contextmanager
def forwarding_signals() -> Iterator[SignalForwarder]:
    """Install a SignalForwarder for FORWARDED_SIGNALS for the duration of the block.

    Enter the block before spawning and `attach()` the child once it exists.
    Handlers can only be installed from the main thread; elsewhere the
    forwarder is returned without being installed.
    """
    forwarder = SignalForwarder()
    if threading.current_thread() is not threading.main_thread():
        yield forwarder
        return

    previous = {sig: signal.signal(sig, forwarder) for sig in FORWARDED_SIGNALS}
    try:
        yield forwarder
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def wait(proc: subprocess.Popen[Any]) -> int:
    return proc.wait()


def run_and_wait(argv: Sequence[str]) -> int:
    """Run argv to completion and return its raw returncode (negative for a signal)."""
    with forwarding_signals() as forwarder:
        proc = spawn(argv)
        forwarder.attach(proc)
        return wait(proc)


def exit_status(returncode: int) -> int:
    """Map a subprocess returncode to a shell-style exit status (128+N for signal N)."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def mirror_returncode(returncode: int) -> int:
    """Reproduce the child's termination for this process.

    Exit statuses are returned as-is for the caller to exit with. For a signal,
    the default disposition is restored and the same signal is raised against
    this process. Signals whose default action does not terminate (or that cannot
    be re-raised) fall back to returning 128+N.
    """
    if returncode >= 0:
        return returncode

    signum = -returncode
    # SIGKILL/SIGSTOP reject handler changes; their default action already terminates.
    with contextlib.suppress(OSError, ValueError):
        signal.signal(signum, signal.SIG_DFL)
    sys.stdout.flush()
    sys.stderr.flush()
    os.kill(os.getpid(), signum)
    return exit_status(returncode)
