"""Backend families that can be composed into a registry."""

from __future__ import annotations

from typing import Callable

from ..registry import Backend
from . import guest, host


def backend_factories() -> dict[str, Callable[[], Backend]]:
    """Map each enable-able family name to its backend constructor."""
    return {
        'host': host.make_backend,
        'guest': guest.make_backend,
    }


__all__ = ['backend_factories']
