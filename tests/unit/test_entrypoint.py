#  Copyright 2026 Canonical Ltd.
#  See LICENSE file for licensing details.

"""Unit tests for the gunicorn entry point."""
import importlib
import logging
import sys
from types import ModuleType

import pytest
from flask import Flask


@pytest.fixture(name="entrypoint")
def entrypoint_fixture(monkeypatch: pytest.MonkeyPatch, secret: str) -> ModuleType:
    """Import the entry point module with a webhook secret set."""
    monkeypatch.setenv("FLASK_WEBHOOK_SECRET", secret)
    monkeypatch.setenv("FLASK_LOG_LEVEL", "DEBUG")
    if "app" in sys.modules:
        return importlib.reload(sys.modules["app"])
    return importlib.import_module("app")


def test_entrypoint_configures_app(entrypoint: ModuleType, secret: str):
    """
    arrange: A webhook secret and a log level in the environment.
    act: Import the entry point.
    assert: The app is configured and the log level is set.
    """
    assert entrypoint.app.config["WEBHOOK_SECRET"] == secret
    assert entrypoint.app.logger.level == logging.DEBUG


@pytest.mark.parametrize(
    "log_level, expected_level",
    [
        pytest.param("INFO", logging.INFO, id="info"),
        pytest.param("warn", logging.WARNING, id="lower case alias"),
        pytest.param("ERROR", logging.ERROR, id="error"),
    ],
)
def test_set_log_level(entrypoint: ModuleType, log_level: str, expected_level: int):
    """
    arrange: A flask app with a log level config.
    act: Set up the logging.
    assert: The logger level is set.
    """
    flask_app = Flask(__name__)
    flask_app.config["LOG_LEVEL"] = log_level

    entrypoint.set_up_logging(flask_app)

    assert flask_app.logger.level == expected_level


def test_set_log_level_invalid(entrypoint: ModuleType):
    """
    arrange: A flask app with an invalid log level config.
    act: Set up the logging.
    assert: ConfigError is raised.
    """
    flask_app = Flask(__name__)
    flask_app.config["LOG_LEVEL"] = "VERBOSE"

    with pytest.raises(entrypoint.ConfigError):
        entrypoint.set_up_logging(flask_app)
