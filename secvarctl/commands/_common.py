"""Shared base class adapting scriptconfig commands to the dispatcher handler protocol."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import scriptconfig as scfg
from loguru import logger

from ..results import ExitCode
from ..runtime import RunContext

log = logger


class _BaseCommand(scfg.DataConfig):
    """Base options shared by all backend commands."""

    vars_dir = scfg.Value(
        '',
        alias=['path'],
        help='Secure variable directory (default: the configured vars_path).',
    )

    @classmethod
    def handler(cls, argv: Sequence[str], ctx: RunContext) -> int:
        """Parse ``argv[1:]`` as this command's options and run it."""
        args_in = ['--help' if a == '--usage' else a for a in argv[1:]]
        try:
            args = cls.cli(argv=args_in or False, special_options=False)
        except SystemExit as ex:
            return _system_exit_code(ex)
        return cls.execute(args, ctx)

    @classmethod
    def execute(cls, args, ctx: RunContext) -> int:
        raise NotImplementedError

    @classmethod
    def short_help(cls) -> str:
        doc = (cls.__doc__ or '').strip()
        return doc.splitlines()[0].strip() if doc else ''


def _system_exit_code(ex: SystemExit) -> int:
    if ex.code is None:
        return ExitCode.SUCCESS
    if isinstance(ex.code, int):
        return ex.code
    return ExitCode.ARG_PARSE_FAIL


def _vars_path(args, ctx: RunContext) -> Path:
    return Path(args.vars_dir) if args.vars_dir else ctx.vars_path
