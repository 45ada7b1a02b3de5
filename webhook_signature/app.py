#  Copyright 2026 Canonical Ltd.
#  See LICENSE file for licensing details.

"""Flask application which receives signed webhooks and verifies those."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from flask import Flask, request

from webhook_signature.errors import PayloadDecodeError, PayloadParseError, SignatureError
from webhook_signature.signature import SIGNATURE_HEADER, decode
from webhook_signature.verify import verify

app = Flask(__name__.split(".", maxsplit=1)[0])


class ConfigError(Exception):
    """Raised when a configuration error occurs."""


def config_app(flask_app: Flask) -> None:
    """Configure the application.

    Args:
        flask_app: The Flask application to configure.
    """
    # values stay strings so that a numeric secret is not loaded as int
    flask_app.config.from_prefixed_env(loads=str)
    flask_app.config["WEBHOOK_SECRET"] = _parse_webhook_secret_config(
        flask_app.config.get("WEBHOOK_SECRET")
    )
    flask_app.config["TIMESTAMP_TOLERANCE"] = _parse_timestamp_tolerance_config(
        flask_app.config.get("TIMESTAMP_TOLERANCE")
    )


def _parse_webhook_secret_config(webhook_secret: Any) -> str | bytes:
    """Get the webhook secret from the config.

    Args:
        webhook_secret: The webhook secret config.

    Returns:
        The webhook secret.

    Raises:
        ConfigError: If the WEBHOOK_SECRET config is not set.
    """
    if not webhook_secret:
        raise ConfigError("WEBHOOK_SECRET config is not set!")
    if not isinstance(webhook_secret, (str, bytes)):
        raise ConfigError("Invalid 'WEBHOOK_SECRET' config. Expected a string.")
    return webhook_secret


def _parse_timestamp_tolerance_config(tolerance: Any) -> timedelta | None:
    """Get the accepted difference between the signature timestamp and now.

    Args:
        tolerance: The tolerance config in seconds.

    Returns:
        The tolerance, or None if timestamps are not checked.

    Raises:
        ConfigError: If the TIMESTAMP_TOLERANCE config is invalid.
    """
    if tolerance is None or tolerance == "":
        return None
    if isinstance(tolerance, timedelta):
        tolerance = tolerance.total_seconds()
    if isinstance(tolerance, bool):
        raise ConfigError(f"Invalid 'TIMESTAMP_TOLERANCE' config: {tolerance}")
    try:
        seconds = int(tolerance)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid 'TIMESTAMP_TOLERANCE' config: {tolerance}") from exc
    if seconds < 0:
        raise ConfigError(f"Invalid 'TIMESTAMP_TOLERANCE' config. Negative value: {seconds}")
    return timedelta(seconds=seconds)


@app.route("/health", methods=["GET"])
def health_check() -> tuple[str, int]:
    """Health check endpoint.

    Returns:
        A tuple containing an empty string and 200 status code.
    """
    return "", 200


@app.route("/webhook", methods=["POST"])
def handle_webhook() -> tuple[str, int]:
    """Receive a webhook and verify its signature.

    Returns:
        A tuple containing an empty string and 200 status code on success or
        a failure message and 4xx status code.
    """
    signature_header = request.headers.get(SIGNATURE_HEADER, "")
    if not signature_header:
        app.logger.debug(
            "%s header is missing in request from %s", SIGNATURE_HEADER, request.origin
        )
        return f"{SIGNATURE_HEADER} header is missing!", 403

    tolerance = app.config.get("TIMESTAMP_TOLERANCE")
    try:
        result = verify(
            payload=request.get_data(),
            signature=signature_header,
            secret=app.config["WEBHOOK_SECRET"],
        )
    except PayloadDecodeError as exc:
        app.logger.error("Failed to decode webhook payload: %s", exc)
        return str(exc), 400
    except PayloadParseError as exc:
        # the signature is authentic at this point, staleness takes precedence
        timestamp = decode(signature_header).timestamp
        if not _is_within_tolerance(timestamp, tolerance):
            return _reject_stale_signature(timestamp)
        app.logger.error("Failed to parse webhook payload: %s", exc)
        return str(exc), 400
    except SignatureError as exc:
        app.logger.debug(
            "Signature validation failed (%s) in request from %s", exc.kind.value, request.origin
        )
        return "Signature validation failed!", 403

    if not _is_within_tolerance(result.timestamp, tolerance):
        return _reject_stale_signature(result.timestamp)

    app.logger.debug("Received event: %s", result.event)
    app.logger.info(
        "Verified webhook event %s signed at %s",
        _event_type(result.event),
        result.timestamp.isoformat(),
    )
    return "", 200


def _reject_stale_signature(timestamp: datetime) -> tuple[str, int]:
    """Reject a request whose signature timestamp is outside of the tolerance.

    Args:
        timestamp: The signature timestamp.

    Returns:
        A tuple containing a failure message and 403 status code.
    """
    app.logger.debug(
        "Signature timestamp %s outside of tolerance in request from %s",
        timestamp.isoformat(),
        request.origin,
    )
    return "Signature timestamp outside of tolerance!", 403


def _is_within_tolerance(timestamp: datetime, tolerance: timedelta | None) -> bool:
    """Check that the signature timestamp is close enough to now.

    Args:
        timestamp: The signature timestamp.
        tolerance: The accepted difference, None to accept any timestamp.

    Returns:
        True if the timestamp is accepted, False otherwise.
    """
    if tolerance is None:
        return True
    return abs(datetime.now(tz=timezone.utc) - timestamp) <= tolerance


def _event_type(event: Any) -> str:
    """Get the type of a webhook event for logging.

    Args:
        event: The parsed webhook event.

    Returns:
        The value of the type field or "unknown".
    """
    if isinstance(event, dict) and isinstance(event.get("type"), str):
        return event["type"]
    return "unknown"


# Exclude from coverage since unit tests should not run as __main__
if __name__ == "__main__":  # pragma: no cover
    # Start development server
    app.logger.setLevel(logging.DEBUG)
    config_app(app)
    app.run()
