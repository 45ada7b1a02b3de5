#  Copyright 2026 Canonical Ltd.
#  See LICENSE file for licensing details.

"""The gunicorn entry point for the webhook receiver."""
import logging

from flask import Flask

from webhook_signature.app import ConfigError, app, config_app

LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.FATAL,
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def set_up_logging(flask_app: Flask) -> None:
    """Set up logging for the application.

    Args:
        flask_app: The Flask application.
    """
    _set_log_handlers(flask_app)
    _set_log_level(flask_app)


def _set_log_handlers(flask_app: Flask) -> None:
    """Set the log handlers of the application.

    Args:
        flask_app: The Flask application.
    """
    # reuse the gunicorn handlers so that the logs end up next to the access logs
    gunicorn_logger = logging.getLogger("gunicorn.error")
    flask_app.logger.handlers = gunicorn_logger.handlers


def _set_log_level(flask_app: Flask) -> None:
    """Set the log level of the application.

    Args:
        flask_app: The Flask application.

    Raises:
        ConfigError: If the log level is invalid.
    """
    log_level = flask_app.config.get("LOG_LEVEL", "INFO")
    try:
        level = LOG_LEVELS[str(log_level).upper()]
    except KeyError as exc:
        raise ConfigError(f"Invalid log level: {log_level}") from exc
    flask_app.logger.setLevel(level)


# gunicorn imports this module, so the app is configured on import
config_app(app)
set_up_logging(app)
