"""Push channel to the device with fixed-delay reconnection."""

from __future__ import annotations

import asyncio
import json
from typing import Any, AsyncContextManager, Callable, Protocol

import httpx
import websockets
from websockets.exceptions import WebSocketException

from nodewatch.core.notifications import NotificationCenter
from nodewatch.core.scheduling import Scheduler, TimerHandle
from nodewatch.exceptions import PayloadDecodeError
from nodewatch.models.connection import ConnectionState
from nodewatch.models.notification import Severity
from nodewatch.utils.logging import get_logger

logger = get_logger(__name__)

LIVE_PATH = "/ws"
DEFAULT_RECONNECT_DELAY_MS = 5000

MessageHandler = Callable[[str | None, dict[str, Any]], None]
StateHandler = Callable[[ConnectionState], None]


class LiveSocket(Protocol):
    """The part of a websocket connection the channel uses."""

    def __aiter__(self) -> Any: ...

    async def close(self) -> None: ...


Connector = Callable[[str], AsyncContextManager[LiveSocket]]


def derive_live_url(base_url: str) -> str:
    """Map a device base URL to its push endpoint.

    ``http://node.local`` becomes ``ws://node.local/ws``; a secure
    origin gets the secure ``wss`` scheme.
    """
    url = httpx.URL(base_url)
    scheme = "wss" if url.scheme == "https" else "ws"
    return str(url.copy_with(scheme=scheme, path=LIVE_PATH))


def decode_payload(raw: str | bytes) -> dict[str, Any]:
    """Decode one inbound frame into a JSON object.

    Raises:
        PayloadDecodeError: If the frame is not UTF-8 JSON or not an object.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        data = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PayloadDecodeError(f"Malformed live payload: {exc}") from exc
    if not isinstance(data, dict):
        raise PayloadDecodeError(f"Live payload is {type(data).__name__}, expected object")
    return data


def message_topic(payload: dict[str, Any]) -> str | None:
    topic = payload.get("type", payload.get("topic"))
    return topic if isinstance(topic, str) else None


def _default_connector(url: str) -> AsyncContextManager[LiveSocket]:
    return websockets.connect(url, ping_interval=20, ping_timeout=20)


class LiveChannel:
    """One push connection with unconditional fixed-delay reconnection.

    States move Disconnected -> Connecting -> Connected, and back to
    Disconnected on any close or error. Each drop schedules exactly one
    reconnect after ``reconnect_delay_ms``; there is no backoff growth
    and no attempt cap. :meth:`disconnect` is the only way to stop the
    retry loop.

    Inbound frames are decoded as JSON objects and dispatched by topic
    (the ``type`` key, falling back to ``topic``). Malformed frames are
    logged and dropped without touching the connection state.
    """

    def __init__(
        self,
        url: str,
        notifications: NotificationCenter,
        scheduler: Scheduler,
        reconnect_delay_ms: int = DEFAULT_RECONNECT_DELAY_MS,
        connector: Connector = _default_connector,
    ) -> None:
        self._url = url
        self._notifications = notifications
        self._scheduler = scheduler
        self._reconnect_delay_s = reconnect_delay_ms / 1000
        self._connector = connector
        self._state = ConnectionState.DISCONNECTED
        self._task: asyncio.Task[None] | None = None
        self._closing: set[asyncio.Task[None]] = set()
        self._socket: LiveSocket | None = None
        self._reconnect_timer: TimerHandle | None = None
        self._handlers: dict[str | None, list[MessageHandler]] = {}
        self._state_handlers: list[StateHandler] = []
        self._attempts = 0

    @property
    def url(self) -> str:
        return self._url

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def attempts(self) -> int:
        """Connection attempts started since construction."""
        return self._attempts

    @property
    def reconnect_pending(self) -> bool:
        return self._reconnect_timer is not None

    # --- Subscriptions ---

    def on_message(self, handler: MessageHandler, topic: str | None = None) -> Callable[[], None]:
        """Register *handler* for one topic, or for every message when *topic* is None.

        Handlers are called as ``handler(topic, payload)``.
        """
        handlers = self._handlers.setdefault(topic, [])
        handlers.append(handler)

        def _unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return _unsubscribe

    def on_state_change(self, handler: StateHandler) -> Callable[[], None]:
        self._state_handlers.append(handler)

        def _unsubscribe() -> None:
            if handler in self._state_handlers:
                self._state_handlers.remove(handler)

        return _unsubscribe

    # --- Lifecycle ---

    def connect(self) -> None:
        """Open the connection unless an attempt is already outstanding."""
        if self._state != ConnectionState.DISCONNECTED:
            return
        self._cancel_reconnect()
        self._attempts += 1
        self._set_state(ConnectionState.CONNECTING)
        logger.info("live_channel_connecting", url=self._url, attempt=self._attempts)
        self._task = asyncio.get_running_loop().create_task(self._run())

    def disconnect(self) -> None:
        """Tear down the connection and stop reconnecting."""
        self._cancel_reconnect()
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            self._closing.add(task)
        self._socket = None
        if self._state != ConnectionState.DISCONNECTED:
            logger.info("live_channel_disconnected", url=self._url)
        self._set_state(ConnectionState.DISCONNECTED)

    async def wait_closed(self) -> None:
        """Wait for the connection task and every task being torn down to finish."""
        closing = list(self._closing)
        tasks = closing + ([self._task] if self._task is not None else [])
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._closing.difference_update(closing)

    async def _run(self) -> None:
        try:
            async with self._connector(self._url) as socket:
                self._socket = socket
                self._on_open()
                async for raw in socket:
                    self._on_frame(raw)
            logger.info("live_channel_closed", url=self._url)
        except asyncio.CancelledError:
            raise
        except (OSError, asyncio.TimeoutError, WebSocketException) as exc:
            logger.warning("live_channel_error", url=self._url, error=str(exc) or type(exc).__name__)
        except Exception:
            logger.exception("live_channel_error", url=self._url)
        self._socket = None
        if asyncio.current_task() is self._task:
            self._task = None
            self._on_closed()

    def _on_open(self) -> None:
        self._cancel_reconnect()
        self._set_state(ConnectionState.CONNECTED)
        logger.info("live_channel_connected", url=self._url)
        self._notifications.notify("Live channel connected", Severity.SUCCESS)

    def _on_frame(self, raw: str | bytes) -> None:
        try:
            payload = decode_payload(raw)
        except PayloadDecodeError as exc:
            logger.warning("live_payload_dropped", error=str(exc))
            return
        self._dispatch(message_topic(payload), payload)

    def _dispatch(self, topic: str | None, payload: dict[str, Any]) -> None:
        targets = list(self._handlers.get(topic, [])) if topic is not None else []
        targets += self._handlers.get(None, [])
        for handler in targets:
            try:
                handler(topic, payload)
            except Exception:
                logger.exception("live_handler_failed", topic=topic)

    def _on_closed(self) -> None:
        self._set_state(ConnectionState.DISCONNECTED)
        self._cancel_reconnect()
        self._reconnect_timer = self._scheduler.call_later(self._reconnect_delay_s, self._reconnect)
        logger.info("live_channel_reconnect_scheduled", delay_s=self._reconnect_delay_s)

    def _reconnect(self) -> None:
        self._reconnect_timer = None
        self.connect()

    def _cancel_reconnect(self) -> None:
        if self._reconnect_timer is not None:
            self._reconnect_timer.cancel()
            self._reconnect_timer = None

    def _set_state(self, state: ConnectionState) -> None:
        if state == self._state:
            return
        self._state = state
        for handler in list(self._state_handlers):
            try:
                handler(state)
            except Exception:
                logger.exception("live_state_handler_failed", state=state.value)
