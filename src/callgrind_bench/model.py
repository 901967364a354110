from __future__ import annotations

from typing import Any, Literal

import attrs

from .errors import UsageError

CheckStatus = Literal["pass", "fail"]
SessionState = Literal["not_started", "running", "terminated"]
EngineTool = Literal["callgrind"]


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


@attrs.define(frozen=True, slots=True)
class InstrumentationConfig:
    """Callgrind options prepended to every profiled command.

    Flags render in a fixed order: tool, instruction dump, jump collection,
    cache simulation.
    """

    tool: EngineTool = "callgrind"
    dump_instr: bool = True
    collect_jumps: bool = True
    simulate_cache: bool = True

    def to_flags(self) -> list[str]:
        return [
            f"--tool={self.tool}",
            f"--dump-instr={_yes_no(self.dump_instr)}",
            f"--collect-jumps={_yes_no(self.collect_jumps)}",
            f"--simulate-cache={_yes_no(self.simulate_cache)}",
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool": self.tool,
            "dump_instr": self.dump_instr,
            "collect_jumps": self.collect_jumps,
            "simulate_cache": self.simulate_cache,
        }


DEFAULT_INSTRUMENTATION = InstrumentationConfig()


def _to_argv_tuple(argv: Any) -> tuple[str, ...]:
    return tuple(str(a) for a in argv)


@attrs.define(frozen=True, slots=True)
class InvocationRequest:
    """Target command plus its arguments, forwarded verbatim."""

    argv: tuple[str, ...] = attrs.field(converter=_to_argv_tuple)

    @argv.validator
    def _check_non_empty(self, attribute: attrs.Attribute[tuple[str, ...]], value: tuple[str, ...]) -> None:
        if not value:
            raise UsageError("missing target command")

    @property
    def executable(self) -> str:
        return self.argv[0]


@attrs.define(frozen=True, slots=True)
class ProfilingSession:
    argv: tuple[str, ...]
    state: SessionState = "not_started"
    pid: int | None = None
    returncode: int | None = None

    @property
    def signal_number(self) -> int | None:
        """Signal that terminated the child, if any (subprocess reports it as a negative returncode)."""
        if self.returncode is None or self.returncode >= 0:
            return None
        return -self.returncode

    def to_dict(self) -> dict[str, Any]:
        return {
            "argv": list(self.argv),
            "state": self.state,
            "pid": self.pid,
            "returncode": self.returncode,
        }


@attrs.define(frozen=True, slots=True)
class PrerequisiteCheck:
    check_name: str
    status: CheckStatus
    details: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"check_name": self.check_name, "status": self.status, "details": self.details}
