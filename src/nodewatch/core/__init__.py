"""Core domain layer: live channel, poller, metrics and notifications."""

from nodewatch.core.live_channel import LiveChannel, derive_live_url
from nodewatch.core.metrics import MetricsDeriver
from nodewatch.core.notifications import NotificationCenter
from nodewatch.core.poller import PollScheduler
from nodewatch.core.runtime import DashboardRuntime
from nodewatch.core.simulation import ChannelSource, IdleFeed, SimulationFeed
from nodewatch.core.state import DashboardStore

__all__ = [
    "ChannelSource",
    "DashboardRuntime",
    "DashboardStore",
    "IdleFeed",
    "LiveChannel",
    "MetricsDeriver",
    "NotificationCenter",
    "PollScheduler",
    "SimulationFeed",
    "derive_live_url",
]
