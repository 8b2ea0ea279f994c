"""Async HTTP client for the device REST API."""

from __future__ import annotations

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from nodewatch.exceptions import (
    DeviceRequestError,
    DeviceResponseError,
    InvalidParameterError,
)
from nodewatch.models.device_config import ActionResult, DeviceConfig
from nodewatch.models.port import PORT_COUNT, PortSnapshot, RdmDevice
from nodewatch.models.system import NetworkStatus, ProtocolStats, SystemInfo
from nodewatch.utils.logging import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

SYSTEM_INFO_PATH = "/api/system/info"
SYSTEM_STATS_PATH = "/api/system/stats"
NETWORK_STATUS_PATH = "/api/network/status"
PORTS_STATUS_PATH = "/api/ports/status"
CONFIG_PATH = "/api/config"
RDM_DISCOVER_PATH = "/api/rdm/discover"
RESTART_PATH = "/api/system/restart"
FACTORY_RESET_PATH = "/api/system/factory-reset"


def validate_port(port: int) -> int:
    """Check a 1-based port number.

    Raises:
        InvalidParameterError: If *port* is not a device port.
    """
    if isinstance(port, bool) or not isinstance(port, int) or not 1 <= port <= PORT_COUNT:
        raise InvalidParameterError(f"Invalid port: {port} (expected 1-{PORT_COUNT})")
    return port


class DeviceClient:
    """Talks to one device over its JSON REST endpoints.

    Every method raises :class:`DeviceRequestError` on transport failure
    or a non-2xx status, and :class:`DeviceResponseError` when the body
    cannot be decoded into the expected shape. Missing fields in a
    decoded body take their model defaults.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def host(self) -> str:
        return httpx.URL(self._base_url).host

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> DeviceClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    # --- Status resources ---

    async def get_system_info(self) -> SystemInfo:
        return _decode(SystemInfo, await self._request("GET", SYSTEM_INFO_PATH), SYSTEM_INFO_PATH)

    async def get_system_stats(self) -> ProtocolStats:
        return _decode(ProtocolStats, await self._request("GET", SYSTEM_STATS_PATH), SYSTEM_STATS_PATH)

    async def get_network_status(self) -> NetworkStatus:
        return _decode(NetworkStatus, await self._request("GET", NETWORK_STATUS_PATH), NETWORK_STATUS_PATH)

    async def get_ports_status(self) -> list[PortSnapshot] | None:
        """Fetch both port snapshots.

        Returns:
            One snapshot per port, or ``None`` when the response is not a
            list of at least two entries. Such a response means "nothing
            to update" rather than an error.
        """
        data = await self._request("GET", PORTS_STATUS_PATH)
        if not isinstance(data, list) or len(data) < PORT_COUNT:
            logger.debug("ports_status_ignored", kind=type(data).__name__)
            return None
        return [_decode(PortSnapshot, entry, PORTS_STATUS_PATH) for entry in data[:PORT_COUNT]]

    # --- Configuration ---

    async def get_config(self) -> DeviceConfig:
        return _decode(DeviceConfig, await self._request("GET", CONFIG_PATH), CONFIG_PATH)

    async def update_config(self, partial: dict[str, Any]) -> ActionResult:
        """POST a partial config; the device merges it into the stored one."""
        if not partial:
            raise InvalidParameterError("Config update is empty")
        data = await self._request("POST", CONFIG_PATH, json=partial)
        logger.info("config_updated", sections=sorted(partial))
        return _decode(ActionResult, data or {}, CONFIG_PATH)

    # --- Actions ---

    async def blackout_port(self, port: int) -> ActionResult:
        path = f"/api/ports/{validate_port(port)}/blackout"
        data = await self._request("POST", path)
        logger.info("port_blackout", port=port)
        return _decode(ActionResult, data or {}, path)

    async def discover_rdm(self) -> list[RdmDevice]:
        data = await self._request("POST", RDM_DISCOVER_PATH)
        if not isinstance(data, list):
            return []
        return [_decode(RdmDevice, entry, RDM_DISCOVER_PATH) for entry in data]

    async def restart(self) -> ActionResult:
        data = await self._request("POST", RESTART_PATH)
        logger.warning("device_restart_requested", url=self._base_url)
        return _decode(ActionResult, data or {}, RESTART_PATH)

    async def factory_reset(self) -> ActionResult:
        data = await self._request("POST", FACTORY_RESET_PATH)
        logger.warning("device_factory_reset_requested", url=self._base_url)
        return _decode(ActionResult, data or {}, FACTORY_RESET_PATH)

    # --- Transport ---

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.debug("device_request_failed", method=method, path=path, error=str(exc))
            raise DeviceRequestError(
                f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__,
                resource=path,
            ) from exc

        if not response.is_success:
            raise DeviceRequestError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                resource=path,
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise DeviceResponseError(
                f"Invalid JSON from {path}", resource=path, status_code=response.status_code
            ) from exc


def _decode(model: type[ModelT], data: Any, path: str) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise DeviceResponseError(f"Unexpected response from {path}: {exc}", resource=path) from exc
