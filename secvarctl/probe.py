"""Detect which secure variable backend the running platform exposes."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from .config import DEFAULT_FORMAT_PATH
from .registry import Backend, BackendRegistry

log = logger


def read_format(path: Path, max_bytes: int) -> str | None:
    """Read at most ``max_bytes`` of the platform format string.

    Returns None when the file cannot be read or is empty.
    """
    try:
        with open(path, 'rb') as file:
            data = file.read(max_bytes)
    except OSError as ex:
        log.debug('Failed to read {}: {}', path, ex)
        return None
    if not data:
        return None
    return data.decode('ascii', errors='replace')


def probe_backend(
    registry: BackendRegistry,
    format_path: str | Path = DEFAULT_FORMAT_PATH,
) -> Backend | None:
    """Resolve the active backend from the platform format file.

    Never raises for a missing, unreadable or unrecognized format file; each
    of those logs a warning and returns None so the caller can fall back to
    the backend implied by the requested mode.
    """
    path = Path(format_path)
    if not path.exists():
        log.warning('platform does not support secure variables')
        return None
    buff = read_format(path, registry.max_name_length)
    if buff is None:
        log.warning(
            'could not extract data from {}, assuming platform does not '
            'support secure variables',
            path,
        )
        return None
    backend = registry.find_by_name_prefix(buff)
    if backend is None:
        log.warning('{} does not contain known backend format.', path)
    return backend
