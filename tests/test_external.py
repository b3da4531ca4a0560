"""Tests for simulated external calls and the simulated event sink."""

import random

import pytest

from aether_nav.events.recorder import EventRecorder, SimulatedEventSink
from aether_nav.external.calls import MIN_LATENCY_MS, simulate_external_call


class TestSimulateExternalCall:
    @pytest.mark.asyncio
    async def test_reports_ok_with_bounded_latency(self):
        result = await simulate_external_call(
            "https://monitor.azure.com/log",
            payload={"ping": True},
            max_latency_ms=5,
            rng=random.Random(3),
        )
        assert result.status == "OK"
        assert result.endpoint == "https://monitor.azure.com/log"
        assert result.payload == {"ping": True}
        assert MIN_LATENCY_MS <= result.took_ms < MIN_LATENCY_MS + 5


class TestSimulatedEventSink:
    def test_endpoint(self):
        sink = SimulatedEventSink("citibankdemobusiness.dev")
        assert sink.endpoint == "https://citibankdemobusiness.dev/obsrv/log"

    @pytest.mark.asyncio
    async def test_forwarding_through_simulated_sink(self):
        recorder = EventRecorder(sink=SimulatedEventSink("example.test", max_latency_ms=1))
        recorder.record("A", {"k": "v"})
        assert recorder.pending_forwards == 1

        await recorder.flush()
        assert recorder.pending_forwards == 0
