"""Built-in backend commands operating on the secvar sysfs interface."""

from __future__ import annotations

from .read import ReadCLI
from .write import WriteCLI

__all__ = ['ReadCLI', 'WriteCLI']
