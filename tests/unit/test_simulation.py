"""Unit tests for nodewatch.core.simulation - deterministic channel waveforms."""

from __future__ import annotations

import pytest

from nodewatch.core.simulation import WAVEFORM_COUNT, IdleFeed, SimulationFeed


class TestSimulationFeed:
    @pytest.mark.parametrize("t", [0.0, 0.25, 1.0, 7.3, 1234.5, -3.0])
    def test_values_in_range(self, t):
        feed = SimulationFeed()
        for port in (1, 2):
            for channel in range(16):
                assert 0 <= feed.sample(channel, port, t) <= 255

    def test_pure(self):
        a, b = SimulationFeed(), SimulationFeed()
        for channel in range(WAVEFORM_COUNT):
            assert a.sample(channel, 1, 2.5) == a.sample(channel, 1, 2.5) == b.sample(channel, 1, 2.5)

    def test_channels_wrap_every_eight(self):
        feed = SimulationFeed()
        for channel in range(WAVEFORM_COUNT):
            assert feed.sample(channel, 1, 3.0) == feed.sample(channel + WAVEFORM_COUNT, 1, 3.0)

    def test_step_waveform(self):
        feed = SimulationFeed()
        assert feed.sample(5, 1, 0.5) == 50
        assert feed.sample(5, 1, 1.5) == 200

    def test_bounded_random(self):
        feed = SimulationFeed()
        values = {feed.sample(3, 1, t / 4) for t in range(40)}
        assert all(64 <= v <= 191 for v in values)
        assert len(values) > 1

    def test_random_stable_within_quarter_second(self):
        feed = SimulationFeed()
        assert feed.sample(3, 2, 10.0) == feed.sample(3, 2, 10.2)

    def test_ports_differ(self):
        feed = SimulationFeed()
        assert feed.frame(1, 4.0) != feed.frame(2, 4.0)

    def test_frame_length(self):
        assert len(SimulationFeed(channels_per_port=12).frame(1, 0.0)) == 12


def test_idle_feed():
    assert IdleFeed().sample(0, 1, 5.0) == 0
