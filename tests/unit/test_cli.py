"""Unit tests for nodewatch.cli - commands against a fake device."""

from __future__ import annotations

import json

import httpx
import pytest
from click.testing import CliRunner

from nodewatch.cli import main as cli_main
from nodewatch.cli.main import cli
from nodewatch.client.device import DeviceClient


@pytest.fixture
def run(device, monkeypatch):
    monkeypatch.setattr(
        cli_main,
        "_make_client",
        lambda settings: DeviceClient(settings.device_url, transport=device.transport()),
    )
    runner = CliRunner()

    def _invoke(*args, input=None):
        return runner.invoke(cli, list(args), input=input)

    return _invoke


# ---------------------------------------------------------------------------
# Monitoring
# ---------------------------------------------------------------------------

class TestStatus:
    def test_status_text(self, run):
        result = run("status", "--device-url", "http://node.local")
        assert result.exit_code == 0, result.output
        assert "Device: connected" in result.output
        assert "Firmware: 1.2.0" in result.output
        assert "Uptime: 1h 2m 5s" in result.output
        assert "Port 1: DMX Output, universe 0, 100 sent, 0 received" in result.output

    def test_status_missing_universe_shows_placeholder(self, run, device):
        device.routes["GET /api/ports/status"] = [{"mode": 1, "frames_sent": 5}, {"mode": 2}]
        result = run("status")
        assert result.exit_code == 0, result.output
        assert "Port 1: DMX Output, universe --, 5 sent, 0 received" in result.output
        assert "None" not in result.output

    def test_status_json(self, run):
        result = run("--json-output", "status")
        assert result.exit_code == 0, result.output
        body = json.loads(result.stdout)
        assert body["device_connected"] is True
        assert body["poll_count"] == 1

    def test_status_device_down(self, run, device):
        device.routes["GET /api/system/info"] = httpx.ConnectError("refused")
        result = run("status")
        assert result.exit_code == 0
        assert "Device: disconnected" in result.output
        assert "Failed: system info" in result.output

    def test_watch(self, run):
        result = run("watch", "--interval", "1", "--count", "2")
        assert result.exit_code == 0, result.output
        lines = [line for line in result.output.splitlines() if line.startswith("[")]
        assert len(lines) == 2
        assert "Port 1:" in lines[0] and "Hz" in lines[0]

    def test_watch_rejects_bad_interval(self, run):
        result = run("watch", "--interval", "0", "--count", "1")
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

class TestActions:
    def test_blackout(self, run, device):
        result = run("blackout", "2")
        assert result.exit_code == 0, result.output
        assert "Port 2 blackout activated" in result.output
        assert device.requests[-1].url.path == "/api/ports/2/blackout"

    def test_blackout_invalid_port(self, run, device):
        result = run("blackout", "3")
        assert result.exit_code == 1
        assert "Invalid port" in result.output
        assert device.requests == []

    def test_restart_requires_confirmation(self, run, device):
        result = run("restart", input="n\n")
        assert result.exit_code == 1
        assert device.requests == []

    def test_restart_confirmed(self, run, device):
        result = run("restart", input="y\n")
        assert result.exit_code == 0, result.output
        assert "Device is rebooting" in result.output
        assert device.requests[-1].url.path == "/api/system/restart"

    def test_factory_reset_unsupported(self, run, device):
        del device.routes["POST /api/system/factory-reset"]
        result = run("factory-reset", "--yes")
        assert result.exit_code == 1
        assert "HTTP 404: Not Found" in result.output

    def test_rdm_discover(self, run, device):
        device.routes["POST /api/rdm/discover"] = [
            {"port": 1, "uid": "4A4C:00000001", "label": "Par 64", "dmx_address": 17},
        ]
        result = run("rdm-discover")
        assert result.exit_code == 0, result.output
        assert "Found 1 device(s)" in result.output
        assert "Par 64" in result.output

    def test_rdm_discover_empty(self, run):
        result = run("rdm-discover")
        assert "No RDM devices found." in result.output


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

class TestConfig:
    def test_show(self, run, device):
        device.routes["GET /api/config"] = {"port1": {"mode": 3, "universe_primary": 4, "priority": 150}}
        result = run("config", "show")
        assert result.exit_code == 0, result.output
        assert "Mode: RDM Master" in result.output
        assert "Universe: 4" in result.output
        assert "Addressing: DHCP" in result.output

    def test_show_json_hides_password(self, run, device):
        device.routes["GET /api/config"] = {"network": {"wifi_ssid": "venue", "wifi_password": "x"}}
        result = run("--json-output", "config", "show")
        body = json.loads(result.stdout)
        assert "wifi_password" not in body["network"]

    def test_port(self, run, device):
        result = run("config", "port", "1", "--universe", "5", "--merge-mode", "ltp")
        assert result.exit_code == 0, result.output
        assert device.posted("/api/config") == [{"port1": {"universe_primary": 5, "merge_mode": 1}}]

    def test_port_mode_choice(self, run, device):
        run("config", "port", "2", "--mode", "rdm-master")
        assert device.posted("/api/config") == [{"port2": {"mode": 3}}]

    def test_port_without_changes(self, run, device):
        result = run("config", "port", "1")
        assert result.exit_code == 2
        assert device.requests == []

    def test_port_out_of_range(self, run):
        assert run("config", "port", "3", "--universe", "1").exit_code == 2

    def test_network_keeps_password(self, run, device):
        result = run("config", "network", "--ssid", "venue")
        assert result.exit_code == 0, result.output
        (posted,) = device.posted("/api/config")
        assert posted["network"]["wifi_ssid"] == "venue"
        assert "wifi_password" not in posted["network"]

    def test_network_static_requires_ip(self, run, device):
        assert run("config", "network", "--static").exit_code == 2
        assert device.requests == []
