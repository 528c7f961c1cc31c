"""TOML-backed configuration for enabled backends and sysfs locations."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import ubelt as ub

from .errors import ConfigError

DEFAULT_FORMAT_PATH = '/sys/firmware/secvar/format'
DEFAULT_VARS_PATH = '/sys/firmware/secvar/vars'
CONFIG_ENV_VAR = 'SECVARCTL_CONFIG'


@dataclass
class SysfsConfig:
    format_path: str = DEFAULT_FORMAT_PATH
    vars_path: str = DEFAULT_VARS_PATH


@dataclass
class BackendsConfig:
    enabled: list[str] = field(default_factory=lambda: ['host', 'guest'])


@dataclass
class SecvarConfig:
    sysfs: SysfsConfig = field(default_factory=SysfsConfig)
    backends: BackendsConfig = field(default_factory=BackendsConfig)
    verbosity: int = 0

    def expanded_paths(self) -> 'SecvarConfig':
        self.sysfs.format_path = ub.expandpath(self.sysfs.format_path)
        self.sysfs.vars_path = ub.expandpath(self.sysfs.vars_path)
        return self


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR, '').strip()
    if override:
        return Path(override).expanduser()
    return Path(ub.Path.appdir('secvarctl', type='config')) / 'config.toml'


def load(path: Path | None = None) -> SecvarConfig:
    """Load the config at ``path``; a missing file yields the defaults."""
    fpath = path or config_path()
    cfg = SecvarConfig()
    if not fpath.exists():
        return cfg
    try:
        raw = tomllib.loads(fpath.read_text(encoding='utf-8'))
    except (OSError, tomllib.TOMLDecodeError) as ex:
        raise ConfigError(f'Could not read config {fpath}: {ex}') from ex
    sysfs_raw = raw.get('sysfs')
    for key, value in (sysfs_raw.items() if isinstance(sysfs_raw, dict) else ()):
        if hasattr(cfg.sysfs, key) and not isinstance(value, str):
            raise ConfigError(f'sysfs.{key} must be a string in {fpath}')
    for section in ('sysfs', 'backends'):
        if section in raw and isinstance(raw[section], dict):
            obj = getattr(cfg, section)
            for k, v in raw[section].items():
                if hasattr(obj, k):
                    setattr(obj, k, v)
    if 'verbosity' in raw:
        try:
            cfg.verbosity = int(raw['verbosity'])
        except (TypeError, ValueError) as ex:
            raise ConfigError(
                f'verbosity must be an integer in {fpath}'
            ) from ex
    enabled = cfg.backends.enabled
    if not isinstance(enabled, list) or not all(
        isinstance(item, str) for item in enabled
    ):
        raise ConfigError(f'backends.enabled must be a list of strings in {fpath}')
    from .backends import backend_factories

    known = backend_factories()
    unknown = [item for item in enabled if item not in known]
    if unknown:
        raise ConfigError(
            f'Unknown backend family {unknown[0]!r} in {fpath}; '
            f'expected one of: {", ".join(known)}'
        )
    return cfg.expanded_paths()
