"""Tests for the coded errors and the error handler."""

import pytest
from structlog.testing import capture_logs

from logweave.core.errors import ConfigError, ParsingError, error_handler

def test_error_codes():
    error = ParsingError("bad timestamp", details={"text": "2024-13-45"})
    assert error.error_code == 3000
    assert error.details == {"text": "2024-13-45"}
    assert ConfigError("x").details == {}

def test_coded_error_is_reported_once(capsys):
    @error_handler(reraise=False)
    def load():
        raise ConfigError("Invalid scheme configuration", details={"key": "hostname"})

    with capture_logs() as logs:
        assert load() is None

    err = capsys.readouterr().err
    assert err.count("Invalid scheme configuration") == 1
    assert "hostname" in err
    assert logs == [{
        "event": "error_handled",
        "log_level": "debug",
        "function": "load",
        "error_code": 1000,
        "details": {"key": "hostname"},
    }]

def test_unexpected_error_is_logged():
    @error_handler(reraise=True)
    def explode():
        raise ValueError("boom")

    with capture_logs() as logs:
        with pytest.raises(ValueError):
            explode()

    assert logs[0]["event"] == "error_unexpected"
    assert logs[0]["log_level"] == "error"
    assert isinstance(logs[0]["exc_info"], ValueError)

def test_excluded_errors_pass_through():
    @error_handler(exclude=(ValueError,))
    def explode():
        raise ValueError("boom")

    with capture_logs() as logs:
        with pytest.raises(ValueError):
            explode()
    assert logs == []
