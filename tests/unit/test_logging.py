"""Tests for structlog setup and stdlib routing in core/logging.py."""

import io
import json
import logging
from collections.abc import Iterator

import pytest

from predmarket.config import Settings
from predmarket.core.logging import get_logger, setup_logging


def _settings(**kwargs: object) -> Settings:
    return Settings(_env_file=None, **kwargs)  # type: ignore[arg-type]


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _json_lines(out: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in out.splitlines() if line.strip()]


class TestSetupLogging:
    def test_structlog_events_rendered_as_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(_settings(PREDMARKET_ENV="production"))

        get_logger("predmarket.test").info("Market created", market_id="m-1")

        [line] = _json_lines(capsys.readouterr().out)
        assert line["event"] == "Market created"
        assert line["market_id"] == "m-1"
        assert line["level"] == "info"
        assert line["logger"] == "predmarket.test"
        assert "timestamp" in line

    def test_stdlib_records_share_the_renderer(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        setup_logging(_settings(PREDMARKET_ENV="production"))

        logging.getLogger("uvicorn.error").warning("Started server process")

        [line] = _json_lines(capsys.readouterr().out)
        assert line["event"] == "Started server process"
        assert line["level"] == "warning"
        assert line["logger"] == "uvicorn.error"

    def test_level_filters_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(_settings(PREDMARKET_ENV="production", PREDMARKET_LOG_LEVEL="WARNING"))

        logger = get_logger("predmarket.test")
        logger.info("hidden")
        logger.warning("shown")

        events = [line["event"] for line in _json_lines(capsys.readouterr().out)]
        assert events == ["shown"]

    def test_access_log_quieted(self) -> None:
        setup_logging(_settings())
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_closed_stream_does_not_raise(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A handler whose stream was closed reports the error instead of raising."""
        monkeypatch.setattr(logging, "raiseExceptions", False)
        setup_logging(_settings(PREDMARKET_ENV="production"))
        stream = io.StringIO()
        stream.close()
        handler = logging.getLogger().handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        handler.setStream(stream)

        get_logger("predmarket.test").info("after close")
