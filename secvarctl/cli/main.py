"""Top-level flag parsing, backend resolution, dispatch, and logging setup."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import Sequence

from loguru import logger

from ..config import SecvarConfig
from ..config import load as load_config
from ..dispatch import dispatch
from ..errors import ConfigError
from ..probe import probe_backend
from ..registry import BackendRegistry, Mode, build_registry
from ..results import ExitCode, RunResult
from ..runtime import VERBOSE_FLAG_LEVEL, ProcessConfig, RunContext, log_level
from .help import print_help, print_usage

log = logger

MODE_FLAGS = ('-m', '--mode')
VERBOSE_FLAGS = ('-v', '--verbose')
HELP_FLAGS = ('--help', '-h')
USAGE_FLAG = '--usage'


@dataclass
class ParsedArgs:
    process: ProcessConfig = field(default_factory=ProcessConfig)
    # Subcommand token followed by its own arguments.
    argv: list[str] = field(default_factory=list)
    result: RunResult | None = None


def parse_args(
    argv: Sequence[str], registry: BackendRegistry, *, verbosity: int = 0
) -> ParsedArgs:
    """Consume leading ``-`` tokens and stop at the subcommand.

    When ``result`` is set on the returned value the invocation ends there;
    usage or help text has already been printed.
    """
    parsed = ParsedArgs(process=ProcessConfig(verbosity=verbosity))
    if not argv:
        print_usage(registry)
        parsed.result = RunResult.failed(
            ExitCode.ARG_PARSE_FAIL, 'no arguments given'
        )
        return parsed

    idx = 0
    while idx < len(argv) and argv[idx].startswith('-'):
        tok = argv[idx]
        if tok == USAGE_FLAG:
            print_usage(registry)
            parsed.result = RunResult.skipped('usage requested')
            return parsed
        elif tok in HELP_FLAGS:
            print_help(registry)
            parsed.result = RunResult.skipped('help requested')
            return parsed
        elif tok in MODE_FLAGS:
            idx += 1
            value = argv[idx] if idx < len(argv) else None
            mode = Mode.parse(value)
            if mode is None:
                if value is None:
                    reason = 'mode name is needed'
                else:
                    reason = f'{value} is unknown mode'
                log.warning('ERROR: {}', reason)
                print_usage(registry)
                parsed.result = RunResult.skipped(reason)
                return parsed
            parsed.process.mode = mode
        elif tok in VERBOSE_FLAGS:
            parsed.process.verbosity = VERBOSE_FLAG_LEVEL
        else:
            log.debug('Unrecognized option {}', tok)
            print_usage(registry)
            parsed.result = RunResult.skipped(f'unrecognized option {tok}')
            return parsed
        idx += 1

    parsed.argv = list(argv[idx:])
    if not parsed.argv:
        log.error('ERROR: commands not found')
        print_usage(registry)
        parsed.result = RunResult.failed(
            ExitCode.ARG_PARSE_FAIL, 'commands not found'
        )
        return parsed
    if parsed.process.mode is None:
        print_usage(registry)
        parsed.result = RunResult.skipped('mode was not given')
    return parsed


def run(
    argv: Sequence[str],
    *,
    registry: BackendRegistry | None = None,
    config: SecvarConfig | None = None,
) -> RunResult:
    """Parse ``argv``, resolve a backend, and dispatch to its command."""
    cfg = config if config is not None else SecvarConfig()
    if registry is None:
        registry = build_registry(cfg.backends.enabled)
    parsed = parse_args(argv, registry, verbosity=cfg.verbosity)
    if parsed.result is not None:
        return parsed.result
    process = parsed.process
    mode = process.mode
    if mode is None:
        return RunResult.skipped('mode was not given')

    backend = probe_backend(registry, cfg.sysfs.format_path)
    if backend is None:
        backend = registry.find_by_name_prefix(mode.backend_name)
        if backend is None:
            log.warning('{} mode is not enabled.', mode.value)
            return RunResult.skipped(f'{mode.value} mode is not enabled')
        log.warning(
            'unsupported backend detected, assuming {}; '
            'read/write may not work as expected',
            backend.name,
        )
    elif backend.mode is not None and backend.mode is not mode:
        log.info(
            'Platform reports backend {}; using it instead of the {} mode default',
            backend.name,
            mode.value,
        )

    ctx = RunContext(process=process, backend=backend, config=cfg)
    result = dispatch(backend, parsed.argv, ctx)
    if result.code == ExitCode.UNKNOWN_COMMAND:
        log.error('ERROR: unknown command {}', parsed.argv[0])
        print_usage(registry)
    return result


def main(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[1:]
    config_error = None
    try:
        cfg = load_config()
    except ConfigError as ex:
        cfg = SecvarConfig()
        config_error = ex

    _setup_logging(_count_verbose(argv), cfg.verbosity)
    if config_error is not None:
        log.warning('Ignoring unusable config: {}', config_error)

    try:
        result = run(argv, config=cfg)
    except Exception as ex:
        print(f'ERROR: {ex}', file=sys.stderr)
        log.error('Unhandled secvarctl error: {}', ex)
        sys.exit(ExitCode.GENERAL_FAIL)
    log.debug('Finished: {}', result.as_dict())
    sys.exit(int(result.code))


def _setup_logging(args_verbose: int, cfg_verbosity: int) -> None:
    logger.remove()
    effective_verbosity = args_verbose if args_verbose > 0 else cfg_verbosity
    level = log_level(effective_verbosity)
    colorize = sys.stderr.isatty() and os.getenv('NO_COLOR') is None
    logger.add(
        sys.stderr,
        level=level,
        colorize=colorize,
        format='<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>',
    )
    log.debug(
        'Logging configured at {} (effective_verbosity={}, colorize={})',
        level,
        effective_verbosity,
        colorize,
    )


def _count_verbose(argv: Sequence[str]) -> int:
    """Pre-scan the leading flags for ``-v`` before logging is configured."""
    idx = 0
    while idx < len(argv) and argv[idx].startswith('-'):
        tok = argv[idx]
        if tok in VERBOSE_FLAGS:
            return VERBOSE_FLAG_LEVEL
        if tok in MODE_FLAGS:
            idx += 1
        idx += 1
    return 0
