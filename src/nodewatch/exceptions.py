"""Exception hierarchy for device requests, live payloads and settings."""

from __future__ import annotations


class NodewatchError(Exception):
    """Base exception for all nodewatch errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class DeviceRequestError(NodewatchError):
    """A request to the device failed at the transport level or with a non-2xx status."""

    def __init__(
        self,
        message: str,
        resource: str = "",
        status_code: int | None = None,
    ) -> None:
        self.resource = resource
        super().__init__(message, status_code=status_code)


class DeviceResponseError(DeviceRequestError):
    """The device answered, but the body could not be decoded or validated."""


class PayloadDecodeError(NodewatchError):
    """A live-channel payload was not a JSON object."""


class InvalidParameterError(NodewatchError):
    """An invalid parameter was passed to a device operation."""


class ConfigurationError(NodewatchError):
    """A settings value could not be parsed."""
