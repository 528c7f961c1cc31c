"""Backend and command tables, and the registry the dispatcher selects from."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Sequence

from loguru import logger

from .errors import BackendRegistrationError, ConfigError

if TYPE_CHECKING:
    from .runtime import RunContext

log = logger

# Longest subcommand name the dispatcher will compare.
MAX_COMMAND_NAME_LENGTH = 32

HOST_BACKEND_NAME = 'ibm,edk2-compat-v1'
GUEST_BACKEND_NAME = 'ibm,plpks-sb-v1'

Handler = Callable[[list[str], 'RunContext'], int]


class Mode(enum.Enum):
    HOST = 'host'
    GUEST = 'guest'

    @property
    def backend_name(self) -> str:
        return MODE_BACKEND_NAMES[self]

    @classmethod
    def parse(cls, text: str | None) -> Optional['Mode']:
        """Exact, case-sensitive match against ``host`` / ``guest``."""
        for mode in cls:
            if text == mode.value:
                return mode
        return None


MODE_BACKEND_NAMES = {
    Mode.HOST: HOST_BACKEND_NAME,
    Mode.GUEST: GUEST_BACKEND_NAME,
}


@dataclass(frozen=True)
class Command:
    name: str
    handler: Handler
    help: str = ''

    def __post_init__(self) -> None:
        if not self.name:
            raise BackendRegistrationError('Command name must not be empty')
        if len(self.name) > MAX_COMMAND_NAME_LENGTH:
            raise BackendRegistrationError(
                f'Command name {self.name!r} exceeds '
                f'{MAX_COMMAND_NAME_LENGTH} characters'
            )

    def matches(self, token: str) -> bool:
        n = MAX_COMMAND_NAME_LENGTH
        return token[:n] == self.name[:n]


@dataclass(frozen=True)
class Backend:
    name: str
    commands: tuple[Command, ...] = ()
    variables: tuple[str, ...] = ()
    mode: Mode | None = None

    def find_command(self, token: str) -> Command | None:
        for cmd in self.commands:
            if cmd.matches(token):
                return cmd
        return None


@dataclass(frozen=True)
class BackendRegistry:
    backends: tuple[Backend, ...] = field(default_factory=tuple)

    @classmethod
    def from_backends(cls, backends: Iterable[Backend]) -> 'BackendRegistry':
        items = tuple(backends)
        seen: set[str] = set()
        for backend in items:
            if not backend.name:
                raise BackendRegistrationError('Backend name must not be empty')
            if backend.name in seen:
                raise BackendRegistrationError(
                    f'Backend {backend.name!r} registered twice'
                )
            seen.add(backend.name)
        return cls(items)

    def __iter__(self):
        return iter(self.backends)

    def __len__(self) -> int:
        return len(self.backends)

    @property
    def max_name_length(self) -> int:
        return max((len(b.name) for b in self.backends), default=0)

    def find_by_name_prefix(self, candidate: str | None) -> Backend | None:
        """Return the first backend whose name ``candidate`` begins with.

        Trailing data after the registered name (a newline from sysfs, a
        version suffix) does not prevent a match.
        """
        if not candidate:
            return None
        for backend in self.backends:
            if candidate.startswith(backend.name):
                log.info('found backend {}', backend.name)
                return backend
        return None

    def command_help(self) -> list[tuple[str, str]]:
        rows: list[tuple[str, str]] = []
        seen: set[str] = set()
        for backend in self.backends:
            for cmd in backend.commands:
                if cmd.name in seen:
                    continue
                seen.add(cmd.name)
                rows.append((cmd.name, cmd.help))
        return rows


def build_registry(
    enabled: Sequence[str] | None = None,
) -> BackendRegistry:
    """Compose a registry from the enabled backend families, in ``enabled`` order."""
    from .backends import backend_factories

    factories = backend_factories()
    if enabled is None:
        enabled = list(factories)
    backends: list[Backend] = []
    for family in enabled:
        try:
            factory = factories[family]
        except KeyError:
            raise ConfigError(
                f'Unknown backend family {family!r}; '
                f'expected one of: {", ".join(factories)}'
            ) from None
        backends.append(factory())
    log.debug('Composed backend registry: {}', [b.name for b in backends])
    return BackendRegistry.from_backends(backends)
