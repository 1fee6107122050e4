from __future__ import annotations

import base64
import logging
from collections.abc import Iterator

import pytest
import structlog
from structlog.testing import capture_logs

from jwtexp.diagnostics import NULL_SINK, DiagnosticSink, NullSink, configure_logging, get_logger
from jwtexp.extract import extract_expiration
from jwtexp.settings import ExtractorSettings


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


def test_null_sink_discards_events() -> None:
    assert NULL_SINK.critical("anything", exc_info=RuntimeError("x")) is None
    assert isinstance(NullSink(), DiagnosticSink)


def test_structlog_logger_exposes_critical() -> None:
    assert callable(get_logger("jwtexp.test").critical)


def test_unexpected_error_is_logged_at_critical() -> None:
    with capture_logs() as captured:
        assert extract_expiration(42, get_logger("jwtexp.test")) is None  # type: ignore[arg-type]

    assert len(captured) == 1
    entry = captured[0]
    assert entry["event"] == "jwt_expiration_error"
    assert entry["log_level"] == "critical"
    assert isinstance(entry["exc_info"], AttributeError)


def test_malformed_token_logs_nothing() -> None:
    payload = base64.urlsafe_b64encode(b'{"exp":"invalid"}').decode("ascii").rstrip("=")
    with capture_logs() as captured:
        assert extract_expiration(f"h.{payload}.s", get_logger("jwtexp.test")) is None
        assert extract_expiration("invalid.jwt.token", get_logger("jwtexp.test")) is None
    assert captured == []


def test_token_is_not_included_in_log_context() -> None:
    with capture_logs() as captured:
        extract_expiration(object(), get_logger("jwtexp.test"))  # type: ignore[arg-type]
    assert set(captured[0]) == {"event", "log_level", "exc_info", "token_length"}


@pytest.mark.parametrize("log_json", [True, False])
def test_configure_logging_sets_root_level(log_json: bool) -> None:
    configure_logging(ExtractorSettings(log_level="error", log_json=log_json))
    assert structlog.is_configured()
    assert logging.getLogger().level == logging.ERROR
