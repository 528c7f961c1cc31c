"""Usage and help text rendered from the composed backend registry."""

from __future__ import annotations

import textwrap

from ..registry import BackendRegistry

PROG = 'secvarctl'


def _modes_line(registry: BackendRegistry) -> str:
    enabled = [b.mode.value for b in registry if b.mode is not None]
    if not enabled:
        return 'no modes are enabled in this build.'
    return ' or '.join(f'-m {m}' for m in enabled) + (
        ' is an acceptable value.'
        if len(enabled) == 1
        else ' are acceptable values.'
    )


def render_usage(registry: BackendRegistry, prog: str = PROG) -> str:
    lines = [
        '',
        'USAGE: ',
        f'\t$ {prog} [MODE] [COMMAND]',
        'MODEs:',
        '-m, --mode\tsupports both the Guest and Host secure boot variables '
        'in two different modes',
        f'\t\tand {_modes_line(registry)}',
        '-v, --verbose\tprint debug information',
        'COMMANDs:',
        '\t--help/--usage',
    ]
    for name, help_text in registry.command_help():
        summary = help_text.rstrip('.') or name
        lines.append(f'\t{name}\t\t{summary[0].lower()}{summary[1:]},')
        lines.append(
            f"\t\t\tuse '{prog} [MODE] {name} --usage/help' "
            'for more information'
        )
    return '\n'.join(lines) + '\n'


def render_help(registry: BackendRegistry, prog: str = PROG) -> str:
    header = textwrap.dedent(
        """
        HELP:
        \tA command line tool for simplifying the reading and writing of secure boot variables.
        \tCommands are:
        """
    ).lstrip('\n')
    body = [
        f'\t\t{name} - {help_text or name}'
        for name, help_text in registry.command_help()
    ]
    backends = [
        f'\t\t{b.mode.value if b.mode else "-"}: {b.name}' for b in registry
    ]
    return (
        '\n'
        + header
        + '\n'.join(body)
        + '\n\tEnabled backends:\n'
        + ('\n'.join(backends) if backends else '\t\t(none)')
        + '\n'
        + render_usage(registry, prog)
    )


def print_usage(registry: BackendRegistry) -> None:
    print(render_usage(registry))


def print_help(registry: BackendRegistry) -> None:
    print(render_help(registry))


__all__ = ['PROG', 'print_help', 'print_usage', 'render_help', 'render_usage']
