"""The ``read`` command: print the secure variables the platform exposes."""

from __future__ import annotations

import scriptconfig as scfg

from ..results import ExitCode
from ..runtime import RunContext
from ..sysfs import hexdump, list_variables, read_variable
from ._common import _BaseCommand, _vars_path, log


class ReadCLI(_BaseCommand):
    """Print info on secure variables."""

    var = scfg.Value(
        '',
        position=1,
        help='Only print this variable (positional).',
    )
    raw = scfg.Value(
        False, isflag=True, help='Also dump the raw variable data as hex.'
    )

    @classmethod
    def execute(cls, args, ctx: RunContext) -> int:
        vars_path = _vars_path(args, ctx)
        try:
            names = list_variables(vars_path)
        except FileNotFoundError as ex:
            log.error('{}', ex)
            return ExitCode.INVALID_FILE
        if args.var:
            if args.var not in names:
                log.error(
                    'variable {} not found in {} (have: {})',
                    args.var,
                    vars_path,
                    ', '.join(names) or '(none)',
                )
                return ExitCode.INVALID_VAR_NAME
            names = [args.var]
        if not names:
            print(f'No secure variables found in {vars_path}')
            return ExitCode.SUCCESS

        known = ctx.backend.variables
        unknown = [n for n in names if known and n not in known]
        if unknown:
            log.info(
                'Variables not defined by backend {}: {}',
                ctx.backend.name,
                ', '.join(unknown),
            )
        for name in names:
            try:
                info = read_variable(vars_path, name)
            except OSError as ex:
                log.error('Failed to read variable {}: {}', name, ex)
                return ExitCode.INVALID_FILE
            print(f'{info.name}: size={info.size}')
            if args.raw and info.data:
                print(hexdump(info.data))
        return ExitCode.SUCCESS
