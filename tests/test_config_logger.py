import json
import logging
import math
import warnings

import pytest

from scalar_aad import AADConfig, backward, div, value
from scalar_aad.logger import JsonFormatter, setup_logger


def test_default_mode_is_silent(tape):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        c = div(value(1.0), value(0.0))
        backward(c)
    assert c.data == math.inf


def test_warn_mode_surfaces_runtime_warning(tape, monkeypatch):
    monkeypatch.setattr(AADConfig, "FP_ERRORS", "warn")
    with pytest.warns(RuntimeWarning):
        div(value(1.0), value(0.0))


def test_raise_mode(tape, monkeypatch):
    monkeypatch.setattr(AADConfig, "FP_ERRORS", "raise")
    a, b = value(1.0), value(0.0)
    with pytest.raises(FloatingPointError):
        div(a, b)
    with pytest.raises(FloatingPointError):
        a / 0.0
    assert len(tape) == 2


def test_unknown_mode_is_rejected(tape, monkeypatch):
    monkeypatch.setattr(AADConfig, "FP_ERRORS", "loud")
    with pytest.raises(ValueError):
        value(1.0) + value(2.0)


def test_json_formatter_includes_metrics():
    record = logging.LogRecord("bench", logging.INFO, __file__, 10, "done %s", ("chain",), None)
    record.metrics = {"nodes": 3}
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "done chain"
    assert payload["level"] == "INFO"
    assert payload["metrics"] == {"nodes": 3}


def test_setup_logger_is_idempotent():
    logger = setup_logger("scalar_aad.test", level="DEBUG")
    again = setup_logger("scalar_aad.test", level="DEBUG")
    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_engine_logs_at_debug(tape, caplog):
    with caplog.at_level(logging.DEBUG, logger="scalar_aad.core.engine"):
        backward(value(2.0) * value(3.0))
    assert "3 nodes visited" in caplog.text
