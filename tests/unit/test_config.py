"""Unit tests for nodewatch.config and the config update helpers."""

from __future__ import annotations

import pytest

from nodewatch.config import ClientSettings
from nodewatch.exceptions import ConfigurationError
from nodewatch.models.device_config import NetworkConfig, network_update, port_update
from nodewatch.models.port import MergeMode, PortMode


class TestClientSettings:
    def test_defaults(self):
        settings = ClientSettings.from_env({})
        assert settings.device_url == "http://192.168.4.1"
        assert settings.poll_interval_ms == 2000
        assert settings.reconnect_delay_ms == 5000
        assert settings.request_timeout_s == 10.0
        assert settings.notification_visible_ms == 5000
        assert settings.notification_fade_ms == 300

    def test_env_overrides(self):
        settings = ClientSettings.from_env({
            "NODEWATCH_DEVICE_URL": "node.local/",
            "NODEWATCH_POLL_INTERVAL_MS": "500",
            "NODEWATCH_SIMULATE_CHANNELS": "false",
        })
        assert settings.device_url == "http://node.local"
        assert settings.poll_interval_ms == 500
        assert settings.simulate_channels is False

    def test_explicit_override_wins(self):
        settings = ClientSettings.from_env(
            {"NODEWATCH_DEVICE_URL": "http://a"}, device_url="https://b", poll_interval_ms=None
        )
        assert settings.device_url == "https://b"
        assert settings.poll_interval_ms == 2000

    @pytest.mark.parametrize("env", [
        {"NODEWATCH_POLL_INTERVAL_MS": "fast"},
        {"NODEWATCH_POLL_INTERVAL_MS": "0"},
        {"NODEWATCH_CHANNELS_PER_PORT": "0"},
    ])
    def test_invalid_values(self, env):
        with pytest.raises(ConfigurationError):
            ClientSettings.from_env(env)


class TestConfigUpdates:
    def test_port_update_only_given_fields(self):
        assert port_update(2, universe=5) == {"port2": {"universe_primary": 5}}

    def test_port_update_enums_as_ints(self):
        update = port_update(1, mode=PortMode.RDM_MASTER, merge_mode=MergeMode.LTP, priority=100)
        assert update == {"port1": {"mode": 3, "priority": 100, "merge_mode": 1}}

    def test_network_update_drops_empty_password(self):
        update = network_update(NetworkConfig(wifi_ssid="venue", wifi_password=""))
        assert "wifi_password" not in update["network"]
        assert update["network"]["wifi_ssid"] == "venue"

    def test_network_update_keeps_password(self):
        update = network_update(NetworkConfig(wifi_password="secret"))
        assert update["network"]["wifi_password"] == "secret"
