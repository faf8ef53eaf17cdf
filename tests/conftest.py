"""
Pytest configuration and fixtures for pulumi_propel tests.
"""

from unittest.mock import MagicMock

import pytest

from pulumi_propel.poller import StatusPoller
from pulumi_propel.resources import Timeouts
from pulumi_propel.settings import PropelSettings

from .factories import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def poller(clock):
    """Poller with a 10s delay and interval, stability 3, on the fake clock."""
    return StatusPoller(
        delay=10, interval=10, min_interval=5, stability=3, sleep=clock.sleep, clock=clock
    )


@pytest.fixture
def settings():
    return PropelSettings(client_id="client", client_secret="secret")


@pytest.fixture
def timeouts():
    return Timeouts(create=30 * 60, delete=30 * 60)


@pytest.fixture
def client():
    """Stand-in for PropelClient; operations are patched per test."""
    return MagicMock(name="PropelClient")
