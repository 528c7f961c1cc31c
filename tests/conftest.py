from __future__ import annotations

import sys
from pathlib import Path

import pytest
from loguru import logger

from secvarctl.config import SecvarConfig, SysfsConfig
from secvarctl.registry import (
    GUEST_BACKEND_NAME,
    HOST_BACKEND_NAME,
    Backend,
    BackendRegistry,
    Command,
    Mode,
)


@pytest.fixture
def log_messages():
    messages: list[str] = []
    handler_id = logger.add(
        lambda msg: messages.append(msg.record['message']), level='DEBUG'
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


class Recorder:
    """Command handler stand-in that remembers how it was called."""

    def __init__(self, rc: int = 0):
        self.rc = rc
        self.calls: list[tuple[list[str], object]] = []

    def __call__(self, argv, ctx) -> int:
        self.calls.append((list(argv), ctx))
        return self.rc


def make_backend(name: str, mode: Mode | None, **handlers: Recorder) -> Backend:
    return Backend(
        name=name,
        commands=tuple(Command(n, h, f'{n} things') for n, h in handlers.items()),
        variables=('PK', 'KEK', 'db', 'dbx'),
        mode=mode,
    )


@pytest.fixture
def handlers() -> dict[str, Recorder]:
    return {
        'host_read': Recorder(),
        'host_write': Recorder(),
        'guest_read': Recorder(),
        'guest_write': Recorder(),
    }


@pytest.fixture
def registry(handlers) -> BackendRegistry:
    return BackendRegistry.from_backends(
        [
            make_backend(
                HOST_BACKEND_NAME,
                Mode.HOST,
                read=handlers['host_read'],
                write=handlers['host_write'],
            ),
            make_backend(
                GUEST_BACKEND_NAME,
                Mode.GUEST,
                read=handlers['guest_read'],
                write=handlers['guest_write'],
            ),
        ]
    )


def write_format(tmp_path: Path, text: str) -> Path:
    path = tmp_path / 'format'
    path.write_text(text, encoding='ascii')
    return path


def make_vars(tmp_path: Path, values: dict[str, bytes]) -> Path:
    vars_path = tmp_path / 'vars'
    for name, data in values.items():
        var_dir = vars_path / name
        var_dir.mkdir(parents=True)
        (var_dir / 'data').write_bytes(data)
        (var_dir / 'size').write_text(f'{len(data)}\n', encoding='ascii')
        (var_dir / 'update').write_bytes(b'')
    vars_path.mkdir(exist_ok=True)
    return vars_path


def make_config(tmp_path: Path, *, format_text: str | None = None) -> SecvarConfig:
    format_path = tmp_path / 'format'
    if format_text is not None:
        write_format(tmp_path, format_text)
    return SecvarConfig(
        sysfs=SysfsConfig(
            format_path=str(format_path),
            vars_path=str(tmp_path / 'vars'),
        )
    )
