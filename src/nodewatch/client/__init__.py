"""Device REST client."""

from nodewatch.client.device import DeviceClient, validate_port

__all__ = ["DeviceClient", "validate_port"]
