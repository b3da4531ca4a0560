"""
Simulated External Calls — stand-in for real HTTP calls to monitoring,
analytics and logging endpoints.

Behavioral Contract:
- Suspends for a pseudo-random latency (20ms + up to ``max_latency_ms``)
- Always reports status "OK"; no real network I/O is performed
"""

import asyncio
import random
from typing import Optional

from pydantic import BaseModel, JsonValue

MIN_LATENCY_MS = 20


class ExternalCallResult(BaseModel):
    """Outcome of a simulated external call."""

    endpoint: str
    payload: Optional[JsonValue] = None
    took_ms: int
    status: str = "OK"


async def simulate_external_call(
    endpoint: str,
    payload: Optional[JsonValue] = None,
    max_latency_ms: int = 50,
    rng: Optional[random.Random] = None,
) -> ExternalCallResult:
    """Pretend to call ``endpoint`` and return once the simulated latency has elapsed."""
    rng = rng or random
    took_ms = rng.randrange(max_latency_ms) + MIN_LATENCY_MS
    await asyncio.sleep(took_ms / 1000.0)
    return ExternalCallResult(endpoint=endpoint, payload=payload, took_ms=took_ms)
