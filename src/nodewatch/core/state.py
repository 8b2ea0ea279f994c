"""Single-writer store for the converged dashboard state."""

from __future__ import annotations

import time
from typing import Any, Callable

from pydantic import ValidationError

from nodewatch.models.connection import ConnectionState
from nodewatch.models.dashboard import DashboardState, PollResult, PortView
from nodewatch.models.port import PORT_COUNT, PortSnapshot
from nodewatch.models.system import NetworkStatus, ProtocolStats, SystemInfo
from nodewatch.utils.logging import get_logger

logger = get_logger(__name__)

StateListener = Callable[[DashboardState], None]

TOPIC_SYSTEM_INFO = "system_info"
TOPIC_SYSTEM_STATS = "system_stats"
TOPIC_NETWORK_STATUS = "network_status"
TOPIC_PORTS_STATUS = "ports_status"


class DashboardStore:
    """Owns the one :class:`DashboardState` both producers converge on.

    The poll scheduler and the live channel submit updates through the
    ``apply_*``/``set_*`` methods; the store builds a new frozen state
    for every write and hands it to subscribers. Readers never see a
    partially applied update.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._state = DashboardState()
        self._listeners: list[StateListener] = []
        self._clock = clock

    def snapshot(self) -> DashboardState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # --- Writers ---

    def apply_poll(self, result: PollResult) -> DashboardState:
        """Merge one poll tick into the state."""
        update: dict[str, Any] = {
            "device_connected": result.device_connected,
            "system_info": result.system_info if result.device_connected else self._state.system_info,
            "network_status": result.network_status,
            "protocol_stats": result.protocol_stats,
            "protocol_rates": result.protocol_rates,
            "last_poll_ms": result.timestamp_ms,
            "poll_count": self._state.poll_count + 1,
        }
        if result.ports_failed:
            update["ports"] = [PortView() for _ in range(PORT_COUNT)]
        elif result.ports is not None:
            rates = result.port_rates or [None] * len(result.ports)
            update["ports"] = [
                PortView(snapshot=snapshot, rate=rate)
                for snapshot, rate in zip(result.ports[:PORT_COUNT], rates)
            ]
        return self._commit(update)

    def apply_live_event(self, topic: str | None, payload: dict[str, Any]) -> DashboardState:
        """Merge a pushed event whose payload mirrors one poll resource.

        The event body is read from ``data`` when present, otherwise from
        the payload itself. Unknown topics only mark the event as seen.
        """
        body = payload.get("data", payload)
        update: dict[str, Any] = {
            "last_event_topic": topic,
            "last_event_at": self._clock(),
        }
        try:
            if topic == TOPIC_SYSTEM_INFO:
                update["system_info"] = SystemInfo.model_validate(body)
            elif topic == TOPIC_SYSTEM_STATS:
                update["protocol_stats"] = ProtocolStats.model_validate(body)
            elif topic == TOPIC_NETWORK_STATUS:
                update["network_status"] = NetworkStatus.model_validate(body)
            elif topic == TOPIC_PORTS_STATUS:
                ports = _live_ports(body, self._state.ports)
                if ports is not None:
                    update["ports"] = ports
        except ValidationError as exc:
            logger.warning("live_event_invalid", topic=topic, error=str(exc))
            return self._state
        return self._commit(update)

    def set_channel_state(self, state: ConnectionState) -> DashboardState:
        if state == self._state.channel_state:
            return self._state
        return self._commit({"channel_state": state})

    def _commit(self, update: dict[str, Any]) -> DashboardState:
        self._state = self._state.model_copy(update=update)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("state_listener_failed")
        return self._state


def _live_ports(body: object, current: list[PortView]) -> list[PortView] | None:
    """Replace snapshots from a pushed port list, keeping the polled rates."""
    if not isinstance(body, list) or len(body) < PORT_COUNT:
        return None
    snapshots = [PortSnapshot.model_validate(entry) for entry in body[:PORT_COUNT]]
    return [
        PortView(snapshot=snapshot, rate=view.rate)
        for snapshot, view in zip(snapshots, current)
    ]
