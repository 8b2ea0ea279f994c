"""Client settings with environment overrides."""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from nodewatch.exceptions import ConfigurationError

ENV_PREFIX = "NODEWATCH_"


class ClientSettings(BaseModel):
    """Runtime settings shared by the dashboard, API host and CLI."""
    model_config = {"frozen": True}

    device_url: str = Field(default="http://192.168.4.1", description="Device base URL")
    poll_interval_ms: int = Field(default=2000, gt=0)
    reconnect_delay_ms: int = Field(default=5000, gt=0)
    request_timeout_s: float = Field(default=10.0, gt=0)
    notification_visible_ms: int = Field(default=5000, gt=0)
    notification_fade_ms: int = Field(default=300, ge=0)
    channels_per_port: int = Field(default=8, ge=1, le=512)
    simulate_channels: bool = True

    @field_validator("device_url")
    @classmethod
    def _normalize_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            value = f"http://{value}"
        return value

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: object,
    ) -> ClientSettings:
        """Build settings from ``NODEWATCH_*`` variables plus explicit overrides.

        Overrides whose value is ``None`` are ignored so CLI options that
        were not given fall through to the environment.

        Raises:
            ConfigurationError: If a value cannot be parsed.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for name in cls.model_fields:
            raw = env.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw != "":
                values[name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid settings: {exc}") from exc
