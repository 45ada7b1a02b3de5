#  Copyright 2026 Canonical Ltd.
#  See LICENSE file for licensing details.

"""Module for verifying and signing webhook deliveries."""
import hmac
import json
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict

from webhook_signature.errors import InvalidSignatureError, PayloadDecodeError, PayloadParseError
from webhook_signature.signature import (
    DecodedSignature,
    compute_hmac,
    decode,
    encode,
    from_millis,
    to_millis,
)


class VerificationResult(BaseModel):
    """A class to represent a verified webhook delivery.

    Attributes:
        timestamp: The verified timestamp of the signature.
        event: The webhook event parsed from the payload.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    event: Any


def verify(payload: bytes | str, signature: str, secret: bytes | str) -> VerificationResult:
    """Verify a webhook delivery and parse its event.

    Args:
        payload: The raw request body.
        signature: The signature sent with the request.
        secret: The webhook secret.

    Returns:
        The verified timestamp and the parsed webhook event.

    Raises:
        InvalidSignatureError: If the hmac does not match the payload.
        PayloadParseError: If the authenticated payload is not valid JSON.

    The errors of decode and _payload_to_str are propagated unchanged.
    """
    decoded = decode(signature)
    payload_str = _payload_to_str(payload)
    computed_hmac = compute_hmac(decoded.timestamp, payload_str, secret)
    if not hmac.compare_digest(decoded.hmac.encode("utf-8"), computed_hmac.encode("utf-8")):
        raise InvalidSignatureError("Incorrect signature")

    try:
        event = json.loads(payload_str, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise PayloadParseError(f"Failed to parse webhook payload: {exc}") from exc
    return VerificationResult(timestamp=decoded.timestamp, event=event)


def sign(
    payload: bytes | str, secret: bytes | str, timestamp: datetime | int | None = None
) -> str:
    """Create the signature of a webhook payload.

    Args:
        payload: The webhook payload.
        secret: The webhook secret.
        timestamp: The timestamp to sign with, defaults to now.

    Returns:
        The signature string.

    Raises:
        ValueError: If the timestamp is before the epoch.
    """
    millis = to_millis(timestamp if timestamp is not None else datetime.now(tz=timezone.utc))
    if millis < 0:
        raise ValueError(f"Cannot sign with a timestamp before the epoch: {millis}")
    signature = DecodedSignature(
        timestamp=from_millis(millis),
        hmac=compute_hmac(millis, _payload_to_str(payload), secret),
    )
    return encode(signature)


def _payload_to_str(payload: bytes | str) -> str:
    """Get the payload as text.

    Args:
        payload: The raw payload.

    Returns:
        The payload decoded as UTF-8.

    Raises:
        PayloadDecodeError: If the payload is not valid UTF-8.
    """
    if isinstance(payload, str):
        return payload
    try:
        return bytes(payload).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise PayloadDecodeError(f"Webhook payload is not valid UTF-8: {exc}") from exc


def _reject_constant(constant: str) -> None:
    """Reject the non standard JSON constants NaN, Infinity and -Infinity.

    Args:
        constant: The constant found in the payload.

    Raises:
        ValueError: Always.
    """
    raise ValueError(f"Invalid JSON constant {constant}")
