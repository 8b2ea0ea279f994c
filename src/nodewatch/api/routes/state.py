"""Dashboard state endpoints and live state stream."""

from __future__ import annotations

import asyncio
import time

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect

from nodewatch.api.app import get_runtime
from nodewatch.core.runtime import DashboardRuntime
from nodewatch.models.dashboard import DashboardState
from nodewatch.models.notification import Notification
from nodewatch.models.port import PORT_COUNT
from nodewatch.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["state"])

_STREAM_QUEUE_SIZE = 16


@router.get("/state", response_model=DashboardState)
async def get_state(runtime: DashboardRuntime = Depends(get_runtime)) -> DashboardState:
    """Current converged dashboard state."""
    return runtime.store.snapshot()


@router.get("/notifications", response_model=list[Notification])
async def get_notifications(runtime: DashboardRuntime = Depends(get_runtime)) -> list[Notification]:
    """Notifications that have not expired yet, oldest first."""
    return runtime.notifications.notifications


@router.get("/channels/{port}")
async def get_channels(port: int, runtime: DashboardRuntime = Depends(get_runtime)) -> dict:
    """Current channel levels for one port."""
    if not 1 <= port <= PORT_COUNT:
        raise HTTPException(status_code=404, detail="Port not found")
    return {"port": port, "levels": runtime.channel_frame(port, time.time())}


@router.websocket("/state/stream")
async def state_stream(websocket: WebSocket) -> None:
    """Send the state once on connect, then after every store write."""
    runtime: DashboardRuntime = websocket.app.state.runtime
    await websocket.accept()

    queue: asyncio.Queue[DashboardState] = asyncio.Queue(maxsize=_STREAM_QUEUE_SIZE)

    def _enqueue(state: DashboardState) -> None:
        if queue.full():
            queue.get_nowait()
        queue.put_nowait(state)

    unsubscribe = runtime.store.subscribe(_enqueue)
    closed = asyncio.ensure_future(_wait_disconnect(websocket))
    try:
        await websocket.send_json(runtime.store.snapshot().model_dump(mode="json"))
        while True:
            getter = asyncio.ensure_future(queue.get())
            await asyncio.wait({getter, closed}, return_when=asyncio.FIRST_COMPLETED)
            if closed.done():
                getter.cancel()
                break
            await websocket.send_json(getter.result().model_dump(mode="json"))
    except WebSocketDisconnect:
        pass
    finally:
        unsubscribe()
        closed.cancel()
    logger.debug("state_stream_client_left")


async def _wait_disconnect(websocket: WebSocket) -> None:
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return
