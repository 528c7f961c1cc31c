"""Guest hypervisor backend (PLPKS static-key secure boot)."""

from __future__ import annotations

from ..commands import ReadCLI, WriteCLI
from ..registry import GUEST_BACKEND_NAME, Backend, Command, Mode

GUEST_VARIABLES = (
    'PK',
    'KEK',
    'db',
    'dbx',
    'grubdb',
    'grubdbx',
    'sbat',
    'moduledb',
    'trustedcadb',
)


def make_backend() -> Backend:
    return Backend(
        name=GUEST_BACKEND_NAME,
        commands=(
            Command('read', ReadCLI.handler, ReadCLI.short_help()),
            Command('write', WriteCLI.handler, WriteCLI.short_help()),
        ),
        variables=GUEST_VARIABLES,
        mode=Mode.GUEST,
    )
