"""
Tests for the log-then-propagate decorator.
"""

from __future__ import annotations

import asyncio

import pytest

from imbibe_action.core.errors import log_and_reraise
from imbibe_action.core.exceptions import AssemblyFailure, ImbibeError, ResolutionFailure


def test_sync_passthrough_and_wrap():
    @log_and_reraise("sync_failed")
    def fail(exc: Exception) -> None:
        raise exc

    original = ResolutionFailure("imbibed.sol", "no owner registered")
    with pytest.raises(ResolutionFailure) as exc:
        fail(original)
    assert exc.value is original

    with pytest.raises(AssemblyFailure) as exc2:
        fail(KeyError("missing"))
    assert isinstance(exc2.value.__cause__, KeyError)
    assert "sync_failed" in str(exc2.value)


def test_async_passthrough_and_return_value():
    @log_and_reraise("async_failed")
    async def maybe(fail: bool) -> str:
        if fail:
            raise RuntimeError("boom")
        return "ok"

    assert asyncio.run(maybe(False)) == "ok"
    with pytest.raises(AssemblyFailure):
        asyncio.run(maybe(True))


def test_decorator_keeps_metadata():
    @log_and_reraise("noop_failed")
    async def documented() -> None:
        """Docstring survives."""

    assert documented.__name__ == "documented"
    assert documented.__doc__ == "Docstring survives."


def test_exception_hierarchy():
    assert issubclass(ResolutionFailure, ImbibeError)
    assert issubclass(AssemblyFailure, ImbibeError)
    err = ResolutionFailure("imbibed.sol", ValueError("bad"))
    assert err.domain == "imbibed.sol"
    assert isinstance(err.cause, ValueError)


def test_nested_boundaries_log_failure_once(missing_connection):
    """An unresolved domain crosses resolver and assembler boundaries but is logged once."""
    from structlog.testing import capture_logs

    from imbibe_action.transactions import build_imbibe_transaction

    with capture_logs() as logs:
        with pytest.raises(ResolutionFailure):
            asyncio.run(build_imbibe_transaction(missing_connection))

    errors = [entry for entry in logs if entry["log_level"] == "error"]
    assert [entry["event"] for entry in errors] == ["sns_resolution_failed"]
    assert errors[0]["error_type"] == "ResolutionFailure"


def test_wrapped_failure_not_relogged_by_outer_layer():
    from structlog.testing import capture_logs

    @log_and_reraise("inner_failed")
    def inner() -> None:
        raise ZeroDivisionError("div")

    @log_and_reraise("outer_failed")
    def outer() -> None:
        inner()

    with capture_logs() as logs:
        with pytest.raises(AssemblyFailure):
            outer()
    assert [entry["event"] for entry in logs] == ["inner_failed"]
