"""Host firmware backend (EDK2-compatible secure variables)."""

from __future__ import annotations

from ..commands import ReadCLI, WriteCLI
from ..registry import HOST_BACKEND_NAME, Backend, Command, Mode

HOST_VARIABLES = ('PK', 'KEK', 'db', 'dbx', 'TS')


def make_backend() -> Backend:
    return Backend(
        name=HOST_BACKEND_NAME,
        commands=(
            Command('read', ReadCLI.handler, ReadCLI.short_help()),
            Command('write', WriteCLI.handler, WriteCLI.short_help()),
        ),
        variables=HOST_VARIABLES,
        mode=Mode.HOST,
    )
