"""Synthetic per-channel levels used when no real channel feed exists."""

from __future__ import annotations

import math
import random
from typing import Protocol

CHANNEL_MIN = 0
CHANNEL_MAX = 255
WAVEFORM_COUNT = 8

# Random channel holds each value for a quarter second.
_RANDOM_STEPS_PER_SECOND = 4


class ChannelSource(Protocol):
    """Anything that can report a 0-255 level for a channel at a time."""

    def sample(self, channel_index: int, port_index: int, time_seconds: float) -> int:
        """Level of *channel_index* on *port_index* at *time_seconds*."""


def _clamp(value: float) -> int:
    return max(CHANNEL_MIN, min(CHANNEL_MAX, math.floor(value)))


def _sine(t: float, port: int) -> float:
    return (math.sin(t + port) + 1) * 127.5


def _fast_sine(t: float, port: int) -> float:
    return (math.sin(t * 2 + port) + 1) * 127.5


def _ramp(t: float, port: int) -> float:
    return ((t * 0.5 + port) % 1) * 255


def _bounded_random(t: float, port: int) -> float:
    step = math.floor(t * _RANDOM_STEPS_PER_SECOND)
    rng = random.Random(f"{port}:{step}")
    return rng.randint(64, 191)


def _triangle(t: float, port: int) -> float:
    phase = (t + port) % 2
    return phase * 255 if phase < 1 else (2 - phase) * 255


def _step(t: float, port: int) -> float:
    return 200 if math.floor((t + port) % 2) < 1 else 50


def _cosine(t: float, port: int) -> float:
    return (math.cos(t * 1.5 + port) + 1) * 127.5


def _product(t: float, port: int) -> float:
    return (math.sin(t) * math.cos(t * 0.7 + port) + 1) * 127.5


_WAVEFORMS = (
    _sine,
    _fast_sine,
    _ramp,
    _bounded_random,
    _triangle,
    _step,
    _cosine,
    _product,
)


class SimulationFeed:
    """Deterministic waveform generator behind the :class:`ChannelSource` contract.

    Output depends only on the arguments, so the feed can be sampled
    from any render tick, restarted, or replayed.
    """

    def __init__(self, channels_per_port: int = WAVEFORM_COUNT) -> None:
        self.channels_per_port = channels_per_port

    def sample(self, channel_index: int, port_index: int, time_seconds: float) -> int:
        waveform = _WAVEFORMS[channel_index % WAVEFORM_COUNT]
        return _clamp(waveform(time_seconds, port_index))

    def frame(self, port_index: int, time_seconds: float) -> list[int]:
        """Levels of every channel on one port at one instant."""
        return [
            self.sample(channel, port_index, time_seconds)
            for channel in range(self.channels_per_port)
        ]


class IdleFeed:
    """Channel source that reports every channel at zero.

    Used when simulation is switched off and no real per-channel feed
    is available.
    """

    def sample(self, channel_index: int, port_index: int, time_seconds: float) -> int:
        return 0
