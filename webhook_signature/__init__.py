#  Copyright 2026 Canonical Ltd.
#  See LICENSE file for licensing details.
"""Package for verifying the signature of webhook deliveries."""

from webhook_signature.errors import (
    InvalidSignatureError,
    InvalidTimestampError,
    MissingHmacError,
    MissingTimestampError,
    PayloadDecodeError,
    PayloadParseError,
    SignatureError,
    SignatureErrorKind,
)
from webhook_signature.signature import (
    HASH_ALGORITHM,
    SIGNATURE_HEADER,
    DecodedSignature,
    compute_hmac,
    decode,
    encode,
)
from webhook_signature.verify import VerificationResult, sign, verify

__all__ = [
    "HASH_ALGORITHM",
    "SIGNATURE_HEADER",
    "DecodedSignature",
    "InvalidSignatureError",
    "InvalidTimestampError",
    "MissingHmacError",
    "MissingTimestampError",
    "PayloadDecodeError",
    "PayloadParseError",
    "SignatureError",
    "SignatureErrorKind",
    "VerificationResult",
    "compute_hmac",
    "decode",
    "encode",
    "sign",
    "verify",
]
