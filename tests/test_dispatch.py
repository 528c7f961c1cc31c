"""Tests for subcommand dispatch against a backend command table."""

from __future__ import annotations

from conftest import Recorder, make_backend

from secvarctl.config import SecvarConfig
from secvarctl.dispatch import dispatch
from secvarctl.registry import MAX_COMMAND_NAME_LENGTH, Mode
from secvarctl.results import ExitCode, Outcome
from secvarctl.runtime import ProcessConfig, RunContext


def _ctx(backend) -> RunContext:
    return RunContext(
        process=ProcessConfig(mode=Mode.HOST),
        backend=backend,
        config=SecvarConfig(),
    )


def test_dispatch_passes_argv_unchanged_and_returns_code() -> None:
    read = Recorder(rc=42)
    backend = make_backend('b', Mode.HOST, read=read)
    ctx = _ctx(backend)
    result = dispatch(backend, ['read', '-p', 'x', 'PK'], ctx)
    assert result.outcome is Outcome.DISPATCHED
    assert result.code == 42
    assert read.calls == [(['read', '-p', 'x', 'PK'], ctx)]


def test_dispatch_unknown_command() -> None:
    read = Recorder()
    backend = make_backend('b', Mode.HOST, read=read)
    result = dispatch(backend, ['bogus'], _ctx(backend))
    assert result.outcome is Outcome.FAILED
    assert result.code == ExitCode.UNKNOWN_COMMAND
    assert read.calls == []


def test_dispatch_no_partial_name_match() -> None:
    read = Recorder()
    backend = make_backend('b', Mode.HOST, read=read)
    assert dispatch(backend, ['rea'], _ctx(backend)).code == ExitCode.UNKNOWN_COMMAND
    assert dispatch(backend, ['reads'], _ctx(backend)).code == ExitCode.UNKNOWN_COMMAND
    assert read.calls == []


def test_dispatch_compares_bounded_prefix() -> None:
    name = 'c' * MAX_COMMAND_NAME_LENGTH
    handler = Recorder()
    backend = make_backend('b', Mode.HOST, **{name: handler})
    result = dispatch(backend, [name + 'ignored-tail'], _ctx(backend))
    assert result.outcome is Outcome.DISPATCHED
    assert len(handler.calls) == 1


def test_dispatch_first_match_wins_and_runs_once() -> None:
    first = Recorder(rc=1)
    backend = make_backend('b', Mode.HOST, read=first, write=Recorder())
    result = dispatch(backend, ['read'], _ctx(backend))
    assert result.code == 1
    assert len(first.calls) == 1


def test_dispatch_handler_returning_none_is_success() -> None:
    backend = make_backend('b', Mode.HOST, read=lambda argv, ctx: None)
    result = dispatch(backend, ['read'], _ctx(backend))
    assert result.outcome is Outcome.DISPATCHED
    assert result.code == ExitCode.SUCCESS


def test_dispatch_empty_argv() -> None:
    backend = make_backend('b', Mode.HOST, read=Recorder())
    result = dispatch(backend, [], _ctx(backend))
    assert result.code == ExitCode.ARG_PARSE_FAIL
