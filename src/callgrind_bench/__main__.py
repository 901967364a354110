from __future__ import annotations

import sys

from . import delegate, launcher


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint. Returns process exit code; re-raises the child's terminating signal.

    No options are parsed: every token after the program name, `-h` included,
    belongs to the target command.
    """
    target = sys.argv[1:] if argv is None else argv
    returncode = launcher.launch(target)
    return delegate.mirror_returncode(returncode)


if __name__ == "__main__":
    raise SystemExit(main())
