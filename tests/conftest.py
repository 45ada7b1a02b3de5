# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Fixtures for the webhook signature tests."""

import secrets

import pytest


@pytest.fixture(name="secret")
def secret_fixture() -> str:
    """Create a random webhook secret."""
    return f"whsec_{secrets.token_hex(16)}"
