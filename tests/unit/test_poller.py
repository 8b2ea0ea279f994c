"""Unit tests for nodewatch.core.poller - fetch, degrade, derive and merge."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from nodewatch.core.metrics import MetricsDeriver
from nodewatch.core.notifications import NotificationCenter
from nodewatch.core.poller import PollScheduler, port_counter_key
from nodewatch.core.state import DashboardStore
from nodewatch.models.notification import Severity
from nodewatch.ui.formatting import format_rate


class Clock:
    def __init__(self, *values: int) -> None:
        self._values = list(values)
        self.last = 0

    def __call__(self) -> int:
        if self._values:
            self.last = self._values.pop(0)
        return self.last


@pytest.fixture
def notifications(scheduler):
    return NotificationCenter(scheduler)


@pytest.fixture
def store():
    return DashboardStore(clock=lambda: 0.0)


def _ticks(device, notifications, store, clock, count=1, between=None):
    """Run *count* ticks against the fake device; *between(i)* runs before tick i>0."""

    async def _main():
        async with device.client() as client:
            poller = PollScheduler(client, MetricsDeriver(), notifications, store, clock=clock)
            results = []
            for i in range(count):
                if i and between is not None:
                    between(i)
                results.append(await poller.tick())
            return results

    return asyncio.run(_main())


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------

class TestTick:
    def test_all_resources_merged(self, device, notifications, store):
        (result,) = _ticks(device, notifications, store, Clock(0))
        state = store.snapshot()
        assert result.failed_resources == []
        assert state.device_connected is True
        assert state.system_info.firmware_version == "1.2.0"
        assert state.network_status.ip == "192.168.1.50"
        assert state.ports[0].snapshot.frames_sent == 100
        assert state.poll_count == 1
        assert len(notifications) == 0

    def test_fetch_order(self, device, notifications, store):
        _ticks(device, notifications, store, Clock(0))
        paths = [r.url.path for r in device.requests]
        assert paths == [
            "/api/system/info",
            "/api/network/status",
            "/api/system/stats",
            "/api/ports/status",
        ]

    def test_first_tick_rates_are_zero(self, device, notifications, store):
        _ticks(device, notifications, store, Clock(0))
        state = store.snapshot()
        assert format_rate(state.ports[0].rate) == "0.0 Hz"
        assert state.protocol_rates["artnet.dmx_packets"].rate_per_second == 0.0

    def test_end_to_end_port_rate(self, device, notifications, store, make_ports):
        def _advance(_i):
            device.routes["GET /api/ports/status"] = make_ports(sent1=130, sent2=50)

        _ticks(device, notifications, store, Clock(0, 1000), count=2, between=_advance)
        state = store.snapshot()
        assert format_rate(state.ports[0].rate) == "30.0 Hz"
        assert format_rate(state.ports[1].rate) == "0.0 Hz"

    def test_protocol_rates(self, device, notifications, store):
        def _advance(_i):
            device.routes["GET /api/system/stats"] = {
                "artnet": {"packets": 1100, "dmx_packets": 944},
                "sacn": {"packets": 500, "data_packets": 480},
            }

        _ticks(device, notifications, store, Clock(0, 2000), count=2, between=_advance)
        rates = store.snapshot().protocol_rates
        assert rates["artnet.packets"].rounded == 50.0
        assert rates["artnet.dmx_packets"].rounded == 22.0
        assert rates["sacn.data_packets"].rounded == 0.0


def test_port_counter_key():
    assert port_counter_key(0) == "port1.frames_sent"
    assert port_counter_key(1) == "port2.frames_sent"


# ---------------------------------------------------------------------------
# Degradation
# ---------------------------------------------------------------------------

class TestDegradation:
    def test_port_failure_keeps_device_connected(self, device, notifications, store):
        device.routes["GET /api/ports/status"] = httpx.Response(500)
        (result,) = _ticks(device, notifications, store, Clock(0))
        state = store.snapshot()
        assert state.device_connected is True
        assert all(view.snapshot is None and view.rate is None for view in state.ports)
        assert result.failed_resources == ["port status"]
        (note,) = notifications.notifications
        assert note.severity is Severity.ERROR
        assert "port status" in note.message

    def test_system_info_failure_and_recovery(self, device, notifications, store):
        device.routes["GET /api/system/info"] = httpx.ConnectError("refused")

        def _recover(_i):
            assert store.snapshot().device_connected is False
            device.routes["GET /api/system/info"] = {"firmware_version": "1.2.1"}

        _ticks(device, notifications, store, Clock(0, 2000), count=2, between=_recover)
        state = store.snapshot()
        assert state.device_connected is True
        assert state.system_info.firmware_version == "1.2.1"

    def test_system_info_failure_keeps_last_info(self, device, notifications, store):
        def _fail(_i):
            device.routes["GET /api/system/info"] = httpx.Response(503)

        _ticks(device, notifications, store, Clock(0, 2000), count=2, between=_fail)
        state = store.snapshot()
        assert state.device_connected is False
        assert state.system_info.firmware_version == "1.2.0"

    def test_missing_network_endpoint(self, device, notifications, store):
        del device.routes["GET /api/network/status"]
        _ticks(device, notifications, store, Clock(0))
        status = store.snapshot().network_status
        assert status.available is False
        assert status.ip == "node.local"
        assert store.snapshot().device_connected is True

    def test_stats_failure(self, device, notifications, store):
        device.routes["GET /api/system/stats"] = httpx.Response(500)
        _ticks(device, notifications, store, Clock(0))
        state = store.snapshot()
        assert state.protocol_stats is None
        assert state.protocol_rates == {}

    def test_every_failure_notifies(self, device, notifications, store):
        for key in ("GET /api/system/info", "GET /api/network/status"):
            device.routes[key] = httpx.Response(500)
        _ticks(device, notifications, store, Clock(0))
        messages = [n.message for n in notifications.notifications]
        assert len(messages) == 2
        assert messages[0].startswith("Failed to load system info")
        assert messages[1].startswith("Failed to load network status")

    @pytest.mark.parametrize("body", [[], {"ports": []}, [{"port": 1}]])
    def test_lenient_port_response_keeps_previous(self, device, notifications, store, body):
        def _break(_i):
            device.routes["GET /api/ports/status"] = body

        _ticks(device, notifications, store, Clock(0, 2000), count=2, between=_break)
        state = store.snapshot()
        assert state.ports[0].snapshot.frames_sent == 100
        assert len(notifications) == 0


# ---------------------------------------------------------------------------
# Scheduling
# ---------------------------------------------------------------------------

class TestScheduling:
    def test_overlapping_tick_skipped(self, device, notifications, store):
        gate = asyncio.Event()

        async def _main():
            async def _slow_handler(request: httpx.Request) -> httpx.Response:
                await gate.wait()
                return device.handler(request)

            from nodewatch.client.device import DeviceClient

            client = DeviceClient("http://node.local", transport=httpx.MockTransport(_slow_handler))
            poller = PollScheduler(client, MetricsDeriver(), notifications, store, clock=Clock(0))
            assert poller.fire() is True
            await asyncio.sleep(0)
            assert poller.tick_in_flight
            assert poller.fire() is False
            assert poller.skipped_ticks == 1
            gate.set()
            await poller._tick_task
            assert poller.fire() is True
            await poller._tick_task
            await poller.stop()
            await client.aclose()

        asyncio.run(_main())
        assert store.snapshot().poll_count == 2

    def test_start_and_stop(self, device, notifications, store):
        async def _main():
            async with device.client() as client:
                poller = PollScheduler(client, MetricsDeriver(), notifications, store, clock=Clock(0))
                poller.start(interval_ms=10)
                assert poller.running
                await asyncio.sleep(0.05)
                await poller.stop()
                assert not poller.running

        asyncio.run(_main())
        assert store.snapshot().poll_count >= 1

    def test_invalid_interval(self, device, notifications, store):
        async def _main():
            async with device.client() as client:
                poller = PollScheduler(client, MetricsDeriver(), notifications, store)
                with pytest.raises(ValueError):
                    poller.start(interval_ms=0)

        asyncio.run(_main())
