from __future__ import annotations

import shutil
from collections.abc import Sequence

from .errors import EngineNotFound
from .model import DEFAULT_INSTRUMENTATION, InstrumentationConfig, InvocationRequest, PrerequisiteCheck

ENGINE_NAME = "valgrind"
INSTALL_HINT = "Install Valgrind (e.g. `apt install valgrind`) and ensure `valgrind` is on PATH."


def resolve_engine() -> str:
    """Return the absolute path of the profiling engine found on PATH."""
    path = shutil.which(ENGINE_NAME)
    if path is None:
        raise EngineNotFound(f"{ENGINE_NAME} not found on PATH. {INSTALL_HINT}")
    return path


def check_engine_available() -> PrerequisiteCheck:
    if shutil.which(ENGINE_NAME) is not None:
        return PrerequisiteCheck(check_name="engine_available", status="pass")
    return PrerequisiteCheck(check_name="engine_available", status="fail", details=INSTALL_HINT)


def build_engine_argv(
    *,
    engine: str,
    request: InvocationRequest | Sequence[str],
    config: InstrumentationConfig = DEFAULT_INSTRUMENTATION,
) -> list[str]:
    if not isinstance(request, InvocationRequest):
        request = InvocationRequest(request)
    return [engine, *config.to_flags(), *request.argv]
