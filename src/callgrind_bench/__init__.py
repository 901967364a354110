"""Run a benchmark program under Valgrind's callgrind tool.

The harness builds a fixed callgrind instrumentation command line, forwards the
caller's command unchanged, streams the target's output through untouched and
exits with the target's own status.
"""

from __future__ import annotations

from .errors import EngineNotFound, HarnessError, LaunchFailure, UsageError
from .model import DEFAULT_INSTRUMENTATION, InstrumentationConfig, InvocationRequest, ProfilingSession

__all__ = [
    "DEFAULT_INSTRUMENTATION",
    "EngineNotFound",
    "HarnessError",
    "InstrumentationConfig",
    "InvocationRequest",
    "LaunchFailure",
    "ProfilingSession",
    "UsageError",
]
