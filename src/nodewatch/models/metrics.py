"""Counter sample and derived rate models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Sample(BaseModel):
    """One reading of a monotonic counter."""
    model_config = {"frozen": True}

    counter_value: int = Field(ge=0)
    timestamp_millis: int


class RateEstimate(BaseModel):
    """Rate derived from two consecutive samples of one counter."""
    model_config = {"frozen": True}

    rate_per_second: float = Field(default=0.0, ge=0.0)

    @property
    def rounded(self) -> float:
        """Rate rounded to one decimal place for display."""
        return round(self.rate_per_second, 1)

    def format(self, unit: str = "Hz") -> str:
        return f"{self.rate_per_second:.1f} {unit}"


ZERO_RATE = RateEstimate(rate_per_second=0.0)
