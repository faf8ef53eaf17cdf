"""Tests for settings loading."""

import pytest

from pulumi_propel.client import PropelClient
from pulumi_propel.errors import ConfigurationError
from pulumi_propel.poller import StatusPoller
from pulumi_propel.resources import Timeouts
from pulumi_propel.settings import PropelSettings, get_settings, reload_settings


@pytest.fixture
def clean_settings(monkeypatch):
    for name in ("PROPEL_CLIENT_ID", "PROPEL_CLIENT_SECRET", "PROPEL_POLL_INTERVAL"):
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
    monkeypatch.undo()
    reload_settings()


class TestSettings:
    def test_defaults(self):
        settings = PropelSettings(_env_file=None)

        assert settings.poll_delay == 10
        assert settings.poll_interval == 10
        assert settings.poll_min_interval == 5
        assert settings.poll_stability == 3
        assert settings.create_timeout == 30 * 60
        assert settings.timeout_safety_margin == 60

    def test_env_prefix(self, clean_settings):
        clean_settings.setenv("PROPEL_CLIENT_ID", "abc")
        clean_settings.setenv("PROPEL_POLL_INTERVAL", "20")

        settings = reload_settings()

        assert settings.client_id == "abc"
        assert settings.poll_interval == 20
        assert get_settings() is settings
        assert StatusPoller.from_settings(settings).interval == 20

    def test_missing_credentials(self, clean_settings):
        settings = PropelSettings(_env_file=None)

        with pytest.raises(ConfigurationError, match="Credentials are required"):
            PropelClient.from_settings(settings)

    def test_timeouts_override_settings(self, settings):
        assert Timeouts.resolve(None, settings) == Timeouts(create=1800, delete=1800)
        assert Timeouts.resolve({"delete": 300}, settings) == Timeouts(create=1800, delete=300)
