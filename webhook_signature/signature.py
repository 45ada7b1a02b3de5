#  Copyright 2026 Canonical Ltd.
#  See LICENSE file for licensing details.

"""Module for encoding, decoding and computing webhook signatures.

A signature is a comma separated list of ``key:value`` items, e.g.
``t:1700000000000,hmac:<base64 digest>``. The hmac is computed over
``<timestamp in milliseconds>.<payload>`` with the webhook secret as key.
"""
import base64
import hmac
import re
from datetime import datetime, timedelta, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict

from webhook_signature.errors import (
    InvalidTimestampError,
    MissingHmacError,
    MissingTimestampError,
)

HASH_ALGORITHM = "sha256"
SIGNATURE_HEADER = "X-Ik-Signature"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)

# Leading whitespace and trailing garbage are tolerated, like parseInt on the issuing side.
_TIMESTAMP_PATTERN = re.compile(r"\s*([+-]?)0*([0-9]+)")
# digits of the last millisecond of year 9999
_MAX_TIMESTAMP_DIGITS = 15


class SignatureItem(str, Enum):
    """The keys of the items of a signature.

    Attributes:
        TIMESTAMP: The timestamp of the request in milliseconds.
        HMAC: The base64 encoded hmac.
    """

    TIMESTAMP = "t"
    HMAC = "hmac"


class DecodedSignature(BaseModel):
    """A class to represent a decoded signature.

    Attributes:
        timestamp: The point in time the webhook was signed at.
        hmac: The base64 encoded hmac claimed by the sender.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    hmac: str

    @property
    def timestamp_millis(self) -> int:
        """The timestamp in milliseconds since the epoch."""
        return to_millis(self.timestamp)


def to_millis(timestamp: datetime | int) -> int:
    """Convert a point in time to milliseconds since the epoch.

    Naive datetimes are considered to be in UTC.

    Args:
        timestamp: A datetime or an amount of milliseconds.

    Returns:
        The milliseconds since the epoch.
    """
    if isinstance(timestamp, int):
        return timestamp
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return (timestamp - EPOCH) // _MILLISECOND


def from_millis(millis: int) -> datetime:
    """Convert milliseconds since the epoch to an UTC datetime.

    Args:
        millis: The milliseconds since the epoch.

    Returns:
        The datetime.
    """
    return EPOCH + timedelta(milliseconds=millis)


def compute_hmac(timestamp: datetime | int, payload: str, secret: bytes | str) -> str:
    """Compute the hmac of a webhook payload.

    Args:
        timestamp: The timestamp of the request.
        payload: The webhook payload as text.
        secret: The webhook secret.

    Returns:
        The base64 encoded hmac of ``<timestamp>.<payload>`` keyed with the secret.
    """
    if isinstance(secret, str):
        secret = secret.encode("utf-8")
    hash_payload = f"{to_millis(timestamp)}.{payload}".encode("utf-8")
    digest = hmac.new(secret, msg=hash_payload, digestmod=HASH_ALGORITHM).digest()
    return base64.b64encode(digest).decode("ascii")


def decode(signature: str) -> DecodedSignature:
    """Extract the items of a signature.

    Items without a ``:`` separator are treated as missing, and a repeated key
    overrides the previous occurrence.

    Args:
        signature: The signature string.

    Returns:
        The decoded signature.

    Raises:
        MissingTimestampError: If the timestamp item is missing.
        InvalidTimestampError: If the timestamp is not a non-negative integer.
        MissingHmacError: If the hmac item is missing.
    """
    items: dict[str, str | None] = {}
    for item in signature.split(","):
        key, separator, value = item.partition(":")
        items[key] = value if separator else None

    timestamp_str = items.get(SignatureItem.TIMESTAMP.value)
    if timestamp_str is None:
        raise MissingTimestampError("Invalid signature - timestamp missing")
    timestamp = _parse_timestamp(timestamp_str)

    hmac_str = items.get(SignatureItem.HMAC.value)
    if hmac_str is None:
        raise MissingHmacError("Invalid signature - hmac missing")

    return DecodedSignature(timestamp=timestamp, hmac=hmac_str)


def encode(signature: DecodedSignature) -> str:
    """Serialize a signature.

    Args:
        signature: The signature to serialize.

    Returns:
        The signature string.
    """
    return (
        f"{SignatureItem.TIMESTAMP.value}:{signature.timestamp_millis},"
        f"{SignatureItem.HMAC.value}:{signature.hmac}"
    )


def _parse_timestamp(timestamp_str: str) -> datetime:
    """Parse the timestamp item of a signature.

    Args:
        timestamp_str: The value of the timestamp item.

    Returns:
        The timestamp as UTC datetime.

    Raises:
        InvalidTimestampError: If the value is not a non-negative integer or out of range.
    """
    if not (match := _TIMESTAMP_PATTERN.match(timestamp_str)):
        raise InvalidTimestampError("Invalid signature - timestamp invalid")
    sign, digits = match.groups()
    if len(digits) > _MAX_TIMESTAMP_DIGITS:
        raise InvalidTimestampError("Invalid signature - timestamp out of range")
    millis = int(sign + digits)
    if millis < 0:
        raise InvalidTimestampError("Invalid signature - timestamp invalid")
    try:
        return from_millis(millis)
    except OverflowError as exc:
        raise InvalidTimestampError("Invalid signature - timestamp out of range") from exc
