from __future__ import annotations

import json
import logging
import contextvars
import math

import numpy as np

from netdim.config import Settings, get_settings
from netdim.logging import JsonFormatter, RequestIdFilter, build_logging_config, request_id_var
from netdim.utils import sanitize_floats


def test_console_only_by_default(tmp_path):
    config = build_logging_config(Settings(log_dir=str(tmp_path / "logs"), log_to_file=False))
    assert list(config["handlers"]) == ["console"]
    assert not (tmp_path / "logs").exists()


def test_rotating_file_handler(tmp_path):
    config = build_logging_config(Settings(log_dir=str(tmp_path / "logs"), log_to_file=True, log_level="debug"))
    assert config["handlers"]["file"]["class"] == "logging.handlers.RotatingFileHandler"
    assert config["loggers"]["netdim"]["handlers"] == ["console", "file"]
    assert config["loggers"]["netdim"]["level"] == "DEBUG"
    assert (tmp_path / "logs").is_dir()


def test_json_formatter_in_production():
    formatter = JsonFormatter("%(message)s", is_prod=True)
    record = logging.LogRecord("netdim.test", logging.INFO, __file__, 1, "margin=%s", (5.0,), None)
    payload = json.loads(formatter.format(record))
    assert payload["message"] == "margin=5.0"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "system"


def test_sanitize_floats():
    data = {"a": math.inf, "b": [np.float64("nan"), 1.5, np.int64(3)], "c": "x", "d": True}
    assert sanitize_floats(data) == {"a": None, "b": [None, 1.5, 3], "c": "x", "d": True}


def _tagged(request_id):
    request_id_var.set(request_id)
    record = logging.LogRecord("netdim.http", logging.INFO, __file__, 1, "x", (), None)
    RequestIdFilter().filter(record)
    return record.request_id


def test_request_id_is_scoped_to_its_context():
    first = contextvars.copy_context().run(_tagged, "req-1")
    second = contextvars.copy_context().run(_tagged, "req-2")
    assert (first, second) == ("req-1", "req-2")

    record = logging.LogRecord("netdim.http", logging.INFO, __file__, 1, "x", (), None)
    RequestIdFilter().filter(record)
    assert record.request_id == "system"


def test_settings_are_cached():
    assert get_settings() is get_settings()
    assert get_settings().umts_fallback_radius_km == 0.8
