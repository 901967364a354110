from __future__ import annotations

import sys
from collections.abc import Callable, Sequence

import attrs

from . import delegate, engine
from .errors import HarnessError
from .model import DEFAULT_INSTRUMENTATION, InstrumentationConfig, InvocationRequest, ProfilingSession

PROG = "callgrind-bench"
USAGE = f"usage: {PROG} <target-command> [target-args...]"


@attrs.define(slots=True)
class ProfilingLauncher:
    """Runs one target command under the profiling engine.

    `resolve_engine`, `spawn` and `wait` are injectable so argv assembly can be exercised
    without spawning anything.
    """

    config: InstrumentationConfig = DEFAULT_INSTRUMENTATION
    resolve_engine: Callable[[], str] = engine.resolve_engine
    spawn: Callable[[Sequence[str]], object] = delegate.spawn
    wait: Callable[..., int] = delegate.wait

    def engine_argv(self, request: InvocationRequest) -> list[str]:
        # Engine lookup happens before anything is spawned: no unprofiled fallback.
        return engine.build_engine_argv(engine=self.resolve_engine(), request=request, config=self.config)

    def run_session(self, request: InvocationRequest) -> ProfilingSession:
        """Spawn the engine, block until it terminates and return the finished session."""
        session = ProfilingSession(argv=tuple(self.engine_argv(request)))
        # Handlers go in before the spawn; the forwarder holds signals until attach().
        with delegate.forwarding_signals() as forwarder:
            proc = self.spawn(session.argv)
            forwarder.attach(proc)  # type: ignore[arg-type]
            session = attrs.evolve(session, state="running", pid=getattr(proc, "pid", None))
            returncode = self.wait(proc)
        return attrs.evolve(session, state="terminated", returncode=returncode)


def report_error(e: HarnessError) -> None:
    print(f"{PROG}: {e}", file=sys.stderr)


def launch(argv: Sequence[str], *, launcher: ProfilingLauncher | None = None) -> int:
    """Run argv under the profiler. Returns the raw child returncode, or a harness exit code on failure."""
    launcher = launcher or ProfilingLauncher()
    try:
        request = InvocationRequest(argv)
    except HarnessError as e:
        report_error(e)
        print(USAGE, file=sys.stderr)
        return e.exit_code

    try:
        session = launcher.run_session(request)
    except HarnessError as e:
        report_error(e)
        return e.exit_code

    if session.returncode is None:
        raise AssertionError(f"Session ended without a returncode: {session.argv}")
    return session.returncode
