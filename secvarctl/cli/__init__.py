"""CLI package exports for top-level command entry points."""

from __future__ import annotations

from .main import main, parse_args, run

__all__ = ['main', 'parse_args', 'run']
