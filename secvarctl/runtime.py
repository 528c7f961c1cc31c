"""Per-invocation settings handed to every component that logs or does I/O."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .config import SecvarConfig
from .registry import Backend, Mode

# `-v` on the command line jumps straight to DEBUG.
VERBOSE_FLAG_LEVEL = 2


def log_level(verbosity: int) -> str:
    level = 'WARNING'
    if verbosity == 1:
        level = 'INFO'
    elif verbosity >= 2:
        level = 'DEBUG'
    return level


@dataclass
class ProcessConfig:
    """Settings resolved while consuming the leading flags."""

    verbosity: int = 0
    mode: Mode | None = None

    @property
    def level(self) -> str:
        return log_level(self.verbosity)


@dataclass(frozen=True)
class RunContext:
    process: ProcessConfig
    backend: Backend
    config: SecvarConfig = field(default_factory=SecvarConfig)

    @property
    def verbosity(self) -> int:
        return self.process.verbosity

    @property
    def mode(self) -> Mode | None:
        return self.process.mode

    @property
    def vars_path(self) -> Path:
        return Path(self.config.sysfs.vars_path)
