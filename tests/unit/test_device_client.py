"""Unit tests for nodewatch.client.device - REST calls, decoding and errors."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from nodewatch.client.device import DeviceClient, validate_port
from nodewatch.exceptions import DeviceRequestError, DeviceResponseError, InvalidParameterError
from nodewatch.models.port import PortMode


def _run(coro):
    return asyncio.run(coro)


async def _call(device, method: str, *args):
    async with device.client() as client:
        return await getattr(client, method)(*args)


# ---------------------------------------------------------------------------
# Status resources
# ---------------------------------------------------------------------------

class TestStatus:
    def test_system_info(self, device):
        info = _run(_call(device, "get_system_info"))
        assert info.firmware_version == "1.2.0"
        assert info.free_heap == 150000

    def test_missing_fields_default(self, device):
        device.routes["GET /api/system/info"] = {}
        info = _run(_call(device, "get_system_info"))
        assert info.firmware_version is None
        assert info.uptime_sec is None

    def test_stats_counters(self, device):
        stats = _run(_call(device, "get_system_stats"))
        assert stats.counters() == {
            "artnet.packets": 1000,
            "artnet.dmx_packets": 900,
            "sacn.packets": 500,
            "sacn.data_packets": 480,
        }

    def test_null_counter_is_zero(self, device):
        device.routes["GET /api/system/stats"] = {"artnet": {"packets": None}}
        stats = _run(_call(device, "get_system_stats"))
        assert stats.artnet.packets == 0
        assert stats.sacn is None

    def test_network_ip_alias(self, device):
        device.routes["GET /api/network/status"] = {"mode": "eth", "ip_address": "10.0.0.9"}
        status = _run(_call(device, "get_network_status"))
        assert status.ip == "10.0.0.9"
        assert status.available

    def test_ports(self, device):
        ports = _run(_call(device, "get_ports_status"))
        assert [p.port for p in ports] == [1, 2]
        assert ports[0].mode is PortMode.DMX_OUTPUT
        assert ports[1].mode_name == "DMX Input"

    def test_unknown_port_mode(self, device, make_ports):
        entries = make_ports()
        entries[0]["mode"] = 42
        device.routes["GET /api/ports/status"] = entries
        ports = _run(_call(device, "get_ports_status"))
        assert ports[0].mode is None
        assert ports[0].mode_name == "Unknown"

    @pytest.mark.parametrize("body", [{"ports": []}, [], [{"port": 1}], "nope"])
    def test_lenient_ports_returns_none(self, device, body):
        device.routes["GET /api/ports/status"] = body
        assert _run(_call(device, "get_ports_status")) is None


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TestErrors:
    def test_http_error_status(self, device):
        device.routes["GET /api/network/status"] = httpx.Response(404)
        with pytest.raises(DeviceRequestError) as exc_info:
            _run(_call(device, "get_network_status"))
        assert str(exc_info.value) == "HTTP 404: Not Found"
        assert exc_info.value.status_code == 404
        assert exc_info.value.resource == "/api/network/status"

    def test_transport_error(self, device):
        device.routes["GET /api/system/info"] = httpx.ConnectError("refused")
        with pytest.raises(DeviceRequestError) as exc_info:
            _run(_call(device, "get_system_info"))
        assert exc_info.value.status_code is None
        assert not isinstance(exc_info.value, DeviceResponseError)

    def test_timeout(self, device):
        device.routes["GET /api/system/info"] = httpx.ReadTimeout("slow")
        with pytest.raises(DeviceRequestError):
            _run(_call(device, "get_system_info"))

    def test_invalid_json(self, device):
        device.routes["GET /api/system/info"] = httpx.Response(200, content=b"<html>")
        with pytest.raises(DeviceResponseError):
            _run(_call(device, "get_system_info"))

    def test_wrong_shape(self, device):
        device.routes["GET /api/system/info"] = [1, 2, 3]
        with pytest.raises(DeviceResponseError):
            _run(_call(device, "get_system_info"))


# ---------------------------------------------------------------------------
# Configuration and actions
# ---------------------------------------------------------------------------

class TestConfigAndActions:
    def test_get_config_defaults(self, device):
        config = _run(_call(device, "get_config"))
        assert config.port(1).universe_primary == 0
        assert config.port(2).universe_primary == 1
        assert config.network.use_dhcp

    def test_update_config_posts_partial(self, device):
        result = _run(_call(device, "update_config", {"port1": {"universe_primary": 7}}))
        assert result.status == "ok"
        assert device.posted("/api/config") == [{"port1": {"universe_primary": 7}}]

    def test_update_config_empty(self, device):
        with pytest.raises(InvalidParameterError):
            _run(_call(device, "update_config", {}))
        assert device.requests == []

    def test_blackout(self, device):
        _run(_call(device, "blackout_port", 2))
        assert device.requests[-1].url.path == "/api/ports/2/blackout"

    @pytest.mark.parametrize("port", [0, 3, -1, True])
    def test_blackout_invalid_port_sends_nothing(self, device, port):
        with pytest.raises(InvalidParameterError):
            _run(_call(device, "blackout_port", port))
        assert device.requests == []

    def test_restart_without_body(self, device):
        device.routes["POST /api/system/restart"] = httpx.Response(200)
        assert _run(_call(device, "restart")).status == "ok"

    def test_factory_reset_missing_endpoint(self, device):
        del device.routes["POST /api/system/factory-reset"]
        with pytest.raises(DeviceRequestError):
            _run(_call(device, "factory_reset"))

    def test_discover_rdm(self, device):
        device.routes["POST /api/rdm/discover"] = [
            {"port": 1, "uid": "4A4C:00000001", "label": "Par", "dmx_address": 1},
        ]
        devices = _run(_call(device, "discover_rdm"))
        assert devices[0].uid == "4A4C:00000001"

    def test_discover_rdm_non_list(self, device):
        device.routes["POST /api/rdm/discover"] = {"devices": []}
        assert _run(_call(device, "discover_rdm")) == []


class TestClientBasics:
    def test_host(self):
        client = DeviceClient("http://node.local:8080/")
        assert client.base_url == "http://node.local:8080"
        assert client.host == "node.local"
        _run(client.aclose())

    def test_validate_port(self):
        assert validate_port(1) == 1
        with pytest.raises(InvalidParameterError):
            validate_port("1")
