"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import heapq
import itertools
import json
from typing import Any, Callable

import httpx
import pytest

from nodewatch.client.device import DeviceClient


class FakeTimer:
    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual scheduler with virtual time; nothing fires until :meth:`advance`."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, FakeTimer]] = []
        self._seq = itertools.count()

    def time(self) -> float:
        return self.now

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback)
        heapq.heappush(self._queue, (timer.when, next(self._seq), timer))
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for _, _, t in sorted(self._queue) if not t.cancelled]

    def advance(self, seconds: float) -> None:
        """Move time forward, firing due callbacks in order."""
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            when, _, timer = heapq.heappop(self._queue)
            self.now = when
            if not timer.cancelled:
                timer.callback()
        self.now = target


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


# ---------------------------------------------------------------------------
# Fake device
# ---------------------------------------------------------------------------

SYSTEM_INFO = {
    "firmware_version": "1.2.0",
    "hardware": "ESP32-S3",
    "idf_version": "v5.1",
    "free_heap": 150000,
    "uptime_sec": 3725,
}

SYSTEM_STATS = {
    "artnet": {"packets": 1000, "dmx_packets": 900, "poll_packets": 100},
    "sacn": {"packets": 500, "data_packets": 480},
}

NETWORK_STATUS = {"mode": "sta", "ip": "192.168.1.50", "connected": True}


def port_entries(sent1: int = 100, sent2: int = 50) -> list[dict[str, Any]]:
    return [
        {"port": 1, "active": True, "mode": 1, "universe": 0, "frames_sent": sent1, "frames_received": 0},
        {"port": 2, "active": False, "mode": 2, "universe": 1, "frames_sent": sent2, "frames_received": 10},
    ]


class FakeDevice:
    """Route table for an ``httpx.MockTransport``.

    ``routes`` maps ``"METHOD /path"`` to a JSON body, an ``httpx.Response``,
    an exception instance to raise, or a callable taking the request.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Any] = {
            "GET /api/system/info": SYSTEM_INFO,
            "GET /api/system/stats": SYSTEM_STATS,
            "GET /api/network/status": NETWORK_STATUS,
            "GET /api/ports/status": port_entries(),
            "GET /api/config": {},
            "POST /api/config": {"status": "ok"},
            "POST /api/system/restart": {"status": "ok", "message": "Restarting"},
            "POST /api/system/factory-reset": {"status": "ok"},
            "POST /api/rdm/discover": [],
        }
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.method} {request.url.path}"
        if key not in self.routes:
            if request.method == "POST" and request.url.path.endswith("/blackout"):
                return httpx.Response(200, json={"status": "ok"})
            return httpx.Response(404)
        route = self.routes[key]
        if callable(route):
            route = route(request)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, json=route)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> DeviceClient:
        return DeviceClient("http://node.local", transport=self.transport())

    def posted(self, path: str) -> list[Any]:
        return [
            json.loads(r.content) if r.content else None
            for r in self.requests
            if r.method == "POST" and r.url.path == path
        ]


@pytest.fixture
def device() -> FakeDevice:
    return FakeDevice()


@pytest.fixture
def make_ports() -> Callable[..., list[dict[str, Any]]]:
    return port_entries


@pytest.fixture
def toast_scheduler() -> FakeScheduler:
    """Separate clock for notification timers, so they don't mix with the one under test."""
    return FakeScheduler()
