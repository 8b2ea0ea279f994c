"""Rate and percentage metrics derived from raw device counters."""

from __future__ import annotations

from typing import Iterable

from nodewatch.models.metrics import ZERO_RATE, RateEstimate, Sample

CHANNEL_MAX = 255
HIGH_CHANNEL_THRESHOLD = 200


class MetricsDeriver:
    """Derives per-second rates from monotonically increasing counters.

    Keeps exactly one previous :class:`Sample` per counter key; each
    :meth:`update` overwrites it, whatever rate it reports.
    """

    def __init__(self) -> None:
        self._previous: dict[str, Sample] = {}

    @property
    def keys(self) -> list[str]:
        return list(self._previous)

    def previous(self, counter_key: str) -> Sample | None:
        return self._previous.get(counter_key)

    def update(self, counter_key: str, sample: Sample) -> RateEstimate:
        """Store *sample* and return the rate since the previous one.

        The first sample for a key, a non-positive time delta and a
        counter that went backwards (device reboot or wrap) all report
        a rate of 0.
        """
        previous = self._previous.get(counter_key)
        self._previous[counter_key] = sample
        if previous is None:
            return ZERO_RATE

        elapsed_ms = sample.timestamp_millis - previous.timestamp_millis
        delta = sample.counter_value - previous.counter_value
        if elapsed_ms <= 0 or delta < 0:
            return ZERO_RATE
        return RateEstimate(rate_per_second=delta / (elapsed_ms / 1000))

    def reset(self, counter_key: str | None = None) -> None:
        """Forget one counter's history, or all of it."""
        if counter_key is None:
            self._previous.clear()
        else:
            self._previous.pop(counter_key, None)


def channel_percentage(value: int) -> int:
    """Scale a 0-255 channel level to a whole percentage."""
    value = max(0, min(CHANNEL_MAX, value))
    return round(value / CHANNEL_MAX * 100)


def is_high_level(value: int) -> bool:
    return value > HIGH_CHANNEL_THRESHOLD


def signal_strength(values: Iterable[int]) -> int:
    """Mean channel level of a frame as a 0-100 percentage."""
    levels = list(values)
    if not levels:
        return 0
    mean = sum(levels) / len(levels)
    return round(mean / CHANNEL_MAX * 100)


def strength_band(percent: int) -> str:
    if percent < 30:
        return "weak"
    if percent < 70:
        return "medium"
    return "strong"
