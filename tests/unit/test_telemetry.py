"""Tests for logging setup and the traced decorator."""

import logging

import pytest

from firelite.shared.telemetry import add_span_attributes, setup_logging, traced


@pytest.fixture
def bare_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    root.handlers = []
    yield root
    root.handlers, root.level = handlers, level


def test_setup_logging_respects_debug(monkeypatch, bare_root_logger) -> None:
    monkeypatch.setenv("DEBUG", "true")
    bare_root_logger.handlers = []  # drop pytest's call-phase capture handlers
    setup_logging()
    assert bare_root_logger.level == logging.DEBUG


def test_setup_logging_explicit_level(bare_root_logger) -> None:
    bare_root_logger.handlers = []  # drop pytest's call-phase capture handlers
    setup_logging(logging.WARNING)
    assert bare_root_logger.level == logging.WARNING
    assert len(bare_root_logger.handlers) == 1


def test_traced_sync_passes_result_and_errors() -> None:
    @traced("test.sync")
    def double(x: int) -> int:
        add_span_attributes(x=x)
        return x * 2

    @traced()
    def boom() -> None:
        raise RuntimeError("boom")

    assert double(2) == 4
    with pytest.raises(RuntimeError, match="boom"):
        boom()


async def test_traced_async_passes_result_and_errors() -> None:
    @traced("test.async", attributes={"component": "test"})
    async def triple(x: int) -> int:
        return x * 3

    @traced()
    async def boom() -> None:
        raise KeyError("k")

    assert await triple(2) == 6
    with pytest.raises(KeyError):
        await boom()
