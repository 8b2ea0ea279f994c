"""Builds and wires the dashboard components at startup."""

from __future__ import annotations

from nodewatch.client.device import DeviceClient
from nodewatch.config import ClientSettings
from nodewatch.core.live_channel import Connector, LiveChannel, derive_live_url
from nodewatch.core.metrics import MetricsDeriver
from nodewatch.core.notifications import NotificationCenter
from nodewatch.core.poller import PollScheduler
from nodewatch.core.scheduling import LoopScheduler, Scheduler
from nodewatch.core.simulation import ChannelSource, IdleFeed, SimulationFeed
from nodewatch.core.state import DashboardStore
from nodewatch.utils.logging import get_logger

logger = get_logger(__name__)


class DashboardRuntime:
    """Owns one instance of every component and the wiring between them.

    The poll scheduler and the live channel are independent producers;
    both write into the same :class:`DashboardStore`, which the render
    step and the API read.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        client: DeviceClient | None = None,
        scheduler: Scheduler | None = None,
        connector: Connector | None = None,
        channel_source: ChannelSource | None = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        self.scheduler = scheduler or LoopScheduler()
        self.notifications = NotificationCenter(
            self.scheduler,
            visible_ms=self.settings.notification_visible_ms,
            fade_ms=self.settings.notification_fade_ms,
        )
        self.deriver = MetricsDeriver()
        self.store = DashboardStore()
        self.client = client or DeviceClient(
            self.settings.device_url, timeout=self.settings.request_timeout_s
        )
        self.poller = PollScheduler(self.client, self.deriver, self.notifications, self.store)

        channel_kwargs = {} if connector is None else {"connector": connector}
        self.live = LiveChannel(
            derive_live_url(self.settings.device_url),
            self.notifications,
            self.scheduler,
            reconnect_delay_ms=self.settings.reconnect_delay_ms,
            **channel_kwargs,
        )
        self.live.on_message(self.store.apply_live_event)
        self.live.on_state_change(self.store.set_channel_state)

        if channel_source is None:
            channel_source = (
                SimulationFeed(self.settings.channels_per_port)
                if self.settings.simulate_channels
                else IdleFeed()
            )
        self.channels: ChannelSource = channel_source
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def channel_frame(self, port: int, time_seconds: float) -> list[int]:
        """Channel levels for a 1-based port at *time_seconds*."""
        return [
            self.channels.sample(channel, port, time_seconds)
            for channel in range(self.settings.channels_per_port)
        ]

    async def start(self) -> None:
        if self._started:
            return
        self._started = True
        logger.info("runtime_starting", device_url=self.settings.device_url)
        self.poller.start(self.settings.poll_interval_ms)
        self.live.connect()

    async def stop(self) -> None:
        if not self._started:
            return
        self._started = False
        self.live.disconnect()
        await self.live.wait_closed()
        await self.poller.stop()
        await self.client.aclose()
        logger.info("runtime_stopped")
