#  Copyright 2026 Canonical Ltd.
#  See LICENSE file for licensing details.

"""Errors raised while verifying a webhook signature."""

from enum import Enum


class SignatureErrorKind(str, Enum):
    """The kind of a signature verification failure.

    Attributes:
        MISSING_TIMESTAMP: The signature has no timestamp item.
        INVALID_TIMESTAMP: The timestamp item is not a non-negative integer.
        MISSING_HMAC: The signature has no hmac item.
        INVALID_SIGNATURE: The hmac does not match the payload.
        PAYLOAD_DECODE_ERROR: The payload bytes are not valid UTF-8.
        PAYLOAD_PARSE_ERROR: The authenticated payload is not valid JSON.
    """

    MISSING_TIMESTAMP = "missing_timestamp"
    INVALID_TIMESTAMP = "invalid_timestamp"
    MISSING_HMAC = "missing_hmac"
    INVALID_SIGNATURE = "invalid_signature"
    PAYLOAD_DECODE_ERROR = "payload_decode_error"
    PAYLOAD_PARSE_ERROR = "payload_parse_error"


class SignatureError(Exception):
    """Base class of all the signature verification errors.

    Attributes:
        kind: The kind of failure.
    """

    kind: SignatureErrorKind


class MissingTimestampError(SignatureError):
    """The signature does not contain a timestamp."""

    kind = SignatureErrorKind.MISSING_TIMESTAMP


class InvalidTimestampError(SignatureError):
    """The signature timestamp is not a valid point in time."""

    kind = SignatureErrorKind.INVALID_TIMESTAMP


class MissingHmacError(SignatureError):
    """The signature does not contain a hmac."""

    kind = SignatureErrorKind.MISSING_HMAC


class InvalidSignatureError(SignatureError):
    """The signature hmac does not match the one computed for the payload."""

    kind = SignatureErrorKind.INVALID_SIGNATURE


class PayloadDecodeError(SignatureError):
    """The payload is not valid UTF-8."""

    kind = SignatureErrorKind.PAYLOAD_DECODE_ERROR


class PayloadParseError(SignatureError):
    """The payload is authentic but could not be parsed as JSON."""

    kind = SignatureErrorKind.PAYLOAD_PARSE_ERROR
