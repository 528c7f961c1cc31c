"""Raw access to the per-variable files under the secvar sysfs directory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

log = logger

DATA_FILE = 'data'
SIZE_FILE = 'size'
UPDATE_FILE = 'update'


@dataclass(frozen=True)
class VariableInfo:
    name: str
    size: int
    data: bytes = b''


def list_variables(vars_path: Path) -> list[str]:
    if not vars_path.is_dir():
        raise FileNotFoundError(f'Secure variable directory not found: {vars_path}')
    return sorted(p.name for p in vars_path.iterdir() if p.is_dir())


def _read_size(var_dir: Path, data: bytes) -> int:
    size_file = var_dir / SIZE_FILE
    if size_file.exists():
        try:
            return int(size_file.read_text(encoding='ascii').strip())
        except ValueError:
            log.warning('Ignoring malformed size file {}', size_file)
    return len(data)


def read_variable(vars_path: Path, name: str) -> VariableInfo:
    var_dir = vars_path / name
    if not var_dir.is_dir():
        raise FileNotFoundError(f'Secure variable not found: {var_dir}')
    data_file = var_dir / DATA_FILE
    data = data_file.read_bytes() if data_file.exists() else b''
    return VariableInfo(name=name, size=_read_size(var_dir, data), data=data)


def write_update(vars_path: Path, name: str, payload: bytes) -> Path:
    """Write ``payload`` verbatim to the variable's update file."""
    update_file = vars_path / name / UPDATE_FILE
    log.debug('Writing {} bytes to {}', len(payload), update_file)
    with open(update_file, 'wb') as file:
        file.write(payload)
    return update_file


def hexdump(data: bytes, *, width: int = 16) -> str:
    lines = []
    for offset in range(0, len(data), width):
        chunk = data[offset:offset + width]
        lines.append(f'{offset:08x}  {chunk.hex(" ")}')
    return '\n'.join(lines)
