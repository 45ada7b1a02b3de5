#  Copyright 2026 Canonical Ltd.
#  See LICENSE file for licensing details.

"""Print the signature of a webhook payload.

Useful to send hand crafted deliveries to a webhook receiver.
"""
import argparse
import logging
import os
import sys
from collections import namedtuple

from webhook_signature import SIGNATURE_HEADER, SignatureError, sign

WEBHOOK_SECRET_ENV_NAME = "WEBHOOK_SECRET"  # nosec this is no hardcoded password

logger = logging.getLogger(__name__)

_ParsedArgs = namedtuple("_ParsedArgs", ["payload", "secret", "timestamp"])


class ArgParseError(Exception):
    """Raised when an error occurs during argument parsing."""


def main(argv: list[str] | None = None) -> None:
    """Run the module as script.

    Args:
        argv: The command line arguments, defaults to sys.argv.
    """
    args = _arg_parsing(argv)
    print(sign(payload=args.payload, secret=args.secret, timestamp=args.timestamp))


def _arg_parsing(argv: list[str] | None) -> _ParsedArgs:
    """Parse the command line arguments.

    Args:
        argv: The command line arguments.

    Raises:
        ArgParseError: If the arguments are invalid.

    Returns:
        The parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description=f"{__doc__} The output is meant to be sent in the {SIGNATURE_HEADER}"
        f" header. The secret is read from the {WEBHOOK_SECRET_ENV_NAME} env variable."
    )
    parser.add_argument(
        "payload_file",
        type=str,
        help="The file containing the payload, '-' to read it from stdin.",
    )
    parser.add_argument(
        "--timestamp",
        type=int,
        help="The timestamp in milliseconds since the epoch, defaults to now.",
        default=None,
    )
    args = parser.parse_args(argv)

    secret = os.getenv(WEBHOOK_SECRET_ENV_NAME)
    if not secret:
        raise ArgParseError(f"The {WEBHOOK_SECRET_ENV_NAME} env variable is not set.")
    if args.timestamp is not None and args.timestamp < 0:
        raise ArgParseError(f"Invalid timestamp {args.timestamp}. Must not be negative.")

    if args.payload_file == "-":
        payload = sys.stdin.buffer.read()
    else:
        try:
            with open(args.payload_file, "rb") as payload_file:
                payload = payload_file.read()
        except OSError as exc:
            raise ArgParseError(f"Failed to read payload file {args.payload_file}") from exc

    return _ParsedArgs(payload=payload, secret=secret, timestamp=args.timestamp)


if __name__ == "__main__":  # pragma: no cover
    try:
        main()
    except ArgParseError as exc:
        logger.exception("Argument parsing failed: %s", exc)
        sys.exit(1)
    except SignatureError as exc:
        logger.exception("Signing failed: %s", exc)
        sys.exit(1)
