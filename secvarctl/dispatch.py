"""Route a subcommand token to the selected backend's command table."""

from __future__ import annotations

from typing import Sequence

from loguru import logger

from .registry import Backend
from .results import ExitCode, RunResult
from .runtime import RunContext

log = logger


def dispatch(
    backend: Backend, argv: Sequence[str], ctx: RunContext
) -> RunResult:
    """Invoke the first command in ``backend`` that matches ``argv[0]``.

    The handler receives ``argv`` unchanged, starting at its own subcommand
    token, and its status is returned verbatim. At most one handler runs.
    """
    if not argv:
        return RunResult.failed(ExitCode.ARG_PARSE_FAIL, 'commands not found')
    subcommand = argv[0]
    cmd = backend.find_command(subcommand)
    if cmd is None:
        return RunResult.failed(
            ExitCode.UNKNOWN_COMMAND, f'unknown command {subcommand}'
        )
    log.debug('Dispatching {} to backend {}', cmd.name, backend.name)
    rc = cmd.handler(list(argv), ctx)
    log.debug('Command {} returned {}', cmd.name, rc)
    return RunResult.dispatched(rc)
