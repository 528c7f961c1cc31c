"""The ``write`` command: submit a signed update for one secure variable."""

from __future__ import annotations

from pathlib import Path

import scriptconfig as scfg

from ..results import ExitCode
from ..runtime import RunContext
from ..sysfs import write_update
from ._common import _BaseCommand, _vars_path, log


class WriteCLI(_BaseCommand):
    """Update a secure variable with a new auth file, committed on reboot."""

    var = scfg.Value(
        '',
        position=1,
        help='Name of the variable to update (positional).',
    )
    auth_file = scfg.Value(
        '',
        position=2,
        help='Signed update file to submit (positional).',
    )
    force = scfg.Value(
        False,
        isflag=True,
        help='Allow variable names the backend does not define.',
    )

    @classmethod
    def execute(cls, args, ctx: RunContext) -> int:
        if not args.var or not args.auth_file:
            log.error('write needs a variable name and an auth file')
            return ExitCode.ARG_PARSE_FAIL
        if args.var not in ctx.backend.variables and not args.force:
            log.error(
                'variable {} is not one of: {}',
                args.var,
                ', '.join(ctx.backend.variables),
            )
            return ExitCode.INVALID_VAR_NAME
        auth_path = Path(args.auth_file)
        try:
            payload = auth_path.read_bytes()
        except OSError as ex:
            log.error('Could not read {}: {}', auth_path, ex)
            return ExitCode.INVALID_FILE
        if not payload:
            log.error('{} is empty', auth_path)
            return ExitCode.INVALID_FILE
        vars_path = _vars_path(args, ctx)
        try:
            update_file = write_update(vars_path, args.var, payload)
        except OSError as ex:
            log.error('Failed to write {} update: {}', args.var, ex)
            return ExitCode.WRITE_FAIL
        print(
            f'Submitted {len(payload)} bytes to {update_file}; '
            'the update is applied on the next reboot.'
        )
        return ExitCode.SUCCESS
