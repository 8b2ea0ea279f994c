"""Pydantic data models for nodewatch."""

from nodewatch.models.connection import ConnectionState
from nodewatch.models.dashboard import DashboardState, PollResult, PortView
from nodewatch.models.device_config import (
    ActionResult,
    DeviceConfig,
    NetworkConfig,
    NodeInfo,
    PortConfig,
)
from nodewatch.models.metrics import RateEstimate, Sample
from nodewatch.models.notification import Notification, Severity
from nodewatch.models.port import MergeMode, PortMode, PortSnapshot, RdmDevice
from nodewatch.models.system import (
    ArtnetStats,
    MergeStats,
    NetworkStatus,
    ProtocolStats,
    SacnStats,
    SystemInfo,
)

__all__ = [
    "ActionResult",
    "ArtnetStats",
    "ConnectionState",
    "DashboardState",
    "DeviceConfig",
    "MergeMode",
    "MergeStats",
    "NetworkConfig",
    "NetworkStatus",
    "NodeInfo",
    "Notification",
    "PortConfig",
    "PortMode",
    "PortSnapshot",
    "PollResult",
    "PortView",
    "ProtocolStats",
    "RateEstimate",
    "RdmDevice",
    "SacnStats",
    "Sample",
    "Severity",
    "SystemInfo",
]
