"""Fixed-interval poll of the device REST resources."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, TypeVar

from nodewatch.client.device import DeviceClient
from nodewatch.core.metrics import MetricsDeriver
from nodewatch.core.notifications import NotificationCenter
from nodewatch.core.state import DashboardStore
from nodewatch.exceptions import DeviceRequestError
from nodewatch.models.dashboard import PollResult
from nodewatch.models.metrics import RateEstimate, Sample
from nodewatch.models.notification import Severity
from nodewatch.models.port import PortSnapshot
from nodewatch.models.system import NetworkStatus
from nodewatch.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_INTERVAL_MS = 2000

RESOURCE_SYSTEM_INFO = "system info"
RESOURCE_NETWORK_STATUS = "network status"
RESOURCE_PROTOCOL_STATS = "protocol counters"
RESOURCE_PORTS_STATUS = "port status"


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


def port_counter_key(port_index: int) -> str:
    """Counter key for a port's sent-frame count (1-based port numbers)."""
    return f"port{port_index + 1}.frames_sent"


class PollScheduler:
    """Pulls system, network, protocol and port state on a fixed period.

    One tick fetches all four resources, degrades whichever fail, feeds
    the counters to :class:`MetricsDeriver` and submits the merged
    :class:`PollResult` to the store. Only a failed system-info fetch
    marks the device disconnected. Ticks never overlap: a tick that
    comes due while the previous one is still in flight is skipped.
    """

    def __init__(
        self,
        client: DeviceClient,
        deriver: MetricsDeriver,
        notifications: NotificationCenter,
        store: DashboardStore,
        clock: Callable[[], int] = _monotonic_ms,
    ) -> None:
        self._client = client
        self._deriver = deriver
        self._notifications = notifications
        self._store = store
        self._clock = clock
        self._loop_task: asyncio.Task[None] | None = None
        self._tick_task: asyncio.Task[PollResult] | None = None
        self._interval_ms = DEFAULT_INTERVAL_MS
        self._skipped_ticks = 0

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def skipped_ticks(self) -> int:
        return self._skipped_ticks

    @property
    def tick_in_flight(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    def start(self, interval_ms: int = DEFAULT_INTERVAL_MS) -> None:
        """Start ticking on the running loop; the first tick fires immediately."""
        if self.running:
            return
        if interval_ms <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval_ms}")
        self._interval_ms = interval_ms
        self._loop_task = asyncio.get_running_loop().create_task(self._run())
        logger.info("poller_started", interval_ms=interval_ms)

    async def stop(self) -> None:
        """Stop ticking and wait for the loop and any in-flight tick to finish."""
        tasks = [t for t in (self._loop_task, self._tick_task) if t is not None and not t.done()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._loop_task = None
        self._tick_task = None
        logger.info("poller_stopped", skipped_ticks=self._skipped_ticks)

    async def _run(self) -> None:
        while True:
            self.fire()
            await asyncio.sleep(self._interval_ms / 1000)

    def fire(self) -> bool:
        """Launch a tick unless one is still in flight.

        Returns:
            True if a tick was started, False if it was skipped.
        """
        if self.tick_in_flight:
            self._skipped_ticks += 1
            logger.debug("poll_tick_skipped", skipped=self._skipped_ticks)
            return False
        self._tick_task = asyncio.get_running_loop().create_task(self.tick())
        self._tick_task.add_done_callback(_log_tick_crash)
        return True

    async def tick(self) -> PollResult:
        """Run one fetch, degrade, derive and merge cycle."""
        failed: list[str] = []
        info, network, stats, ports = await asyncio.gather(
            self._fetch(RESOURCE_SYSTEM_INFO, self._client.get_system_info, failed),
            self._fetch(RESOURCE_NETWORK_STATUS, self._client.get_network_status, failed),
            self._fetch(RESOURCE_PROTOCOL_STATS, self._client.get_system_stats, failed),
            self._fetch(RESOURCE_PORTS_STATUS, self._client.get_ports_status, failed),
        )
        now_ms = self._clock()

        device_connected = RESOURCE_SYSTEM_INFO not in failed
        if network is None:
            network = NetworkStatus.unavailable(self._client.host)

        protocol_rates: dict[str, RateEstimate] = {}
        if stats is not None:
            for key, value in stats.counters().items():
                protocol_rates[key] = self._deriver.update(key, Sample(counter_value=value, timestamp_millis=now_ms))

        port_rates = None
        if ports is not None:
            port_rates = self._derive_port_rates(ports, now_ms)

        result = PollResult(
            timestamp_ms=now_ms,
            device_connected=device_connected,
            system_info=info,
            network_status=network,
            protocol_stats=stats,
            protocol_rates=protocol_rates,
            ports=ports,
            port_rates=port_rates,
            ports_failed=RESOURCE_PORTS_STATUS in failed,
            failed_resources=failed,
        )
        self._store.apply_poll(result)
        return result

    def _derive_port_rates(self, ports: list[PortSnapshot], now_ms: int) -> list[RateEstimate]:
        return [
            self._deriver.update(
                port_counter_key(index),
                Sample(counter_value=port.frames_sent, timestamp_millis=now_ms),
            )
            for index, port in enumerate(ports)
        ]

    async def _fetch(
        self,
        resource: str,
        fetch: Callable[[], Awaitable[T]],
        failed: list[str],
    ) -> T | None:
        try:
            return await fetch()
        except DeviceRequestError as exc:
            failed.append(resource)
            logger.warning("poll_fetch_failed", resource=resource, path=exc.resource, error=str(exc))
            self._notifications.notify(f"Failed to load {resource}: {exc}", Severity.ERROR)
            return None


def _log_tick_crash(task: asyncio.Task[PollResult]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("poll_tick_crashed", error=repr(exc))
