"""Exit codes and the run outcome returned by the top-level dispatcher."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ExitCode(enum.IntEnum):
    SUCCESS = 0
    GENERAL_FAIL = 1
    ARG_PARSE_FAIL = 2
    UNKNOWN_COMMAND = 3
    INVALID_FILE = 4
    INVALID_VAR_NAME = 5
    WRITE_FAIL = 6


class Outcome(enum.Enum):
    """How a single invocation ended.

    ``SKIPPED`` covers paths that intentionally never reach a handler but
    still exit with :attr:`ExitCode.SUCCESS` (help, usage, unknown mode,
    disabled mode).
    """

    DISPATCHED = 'dispatched'
    SKIPPED = 'skipped'
    FAILED = 'failed'


@dataclass(frozen=True)
class RunResult:
    outcome: Outcome
    code: int = ExitCode.SUCCESS
    reason: str = ''

    @classmethod
    def dispatched(cls, code: int | None) -> 'RunResult':
        return cls(Outcome.DISPATCHED, 0 if code is None else int(code))

    @classmethod
    def skipped(cls, reason: str) -> 'RunResult':
        return cls(Outcome.SKIPPED, ExitCode.SUCCESS, reason)

    @classmethod
    def failed(cls, code: int, reason: str) -> 'RunResult':
        return cls(Outcome.FAILED, int(code), reason)

    def as_dict(self) -> dict[str, object]:
        return {
            'outcome': self.outcome.value,
            'code': int(self.code),
            'reason': self.reason,
        }
