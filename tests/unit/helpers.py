#  Copyright 2026 Canonical Ltd.
#  See LICENSE file for licensing details.

"""Helper functions for the unit tests."""

import base64
import hashlib
import hmac


def create_correct_signature(secret: str, payload: bytes, timestamp_millis: int) -> str:
    """Create a correct webhook signature.

    Args:
        secret: The secret.
        payload: The payload.
        timestamp_millis: The timestamp in milliseconds.

    Returns:
        The correct signature.
    """
    hash_object = hmac.new(
        secret.encode("utf-8"),
        msg=f"{timestamp_millis}.".encode("utf-8") + payload,
        digestmod=hashlib.sha256,
    )
    return f"t:{timestamp_millis},hmac:{base64.b64encode(hash_object.digest()).decode()}"


def create_incorrect_signature(secret: str, payload: bytes, timestamp_millis: int) -> str:
    """Create an incorrect webhook signature.

    Args:
        secret: The secret.
        payload: The payload.
        timestamp_millis: The timestamp in milliseconds.

    Returns:
        The incorrect signature.
    """
    return create_correct_signature(secret, payload, timestamp_millis)[:-2]
