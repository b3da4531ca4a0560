"""
Event Recorder — bounded, append-only observability log.

Every component records its steps here; the UI polls the most recent
entries for its live feed.

Behavioral Contract:
- Append-only. Records are immutable once created.
- Holds at most ``capacity`` records; the oldest is evicted first.
- Forwarding to an external sink is detached from the caller: ``record``
  never waits for, or fails because of, the sink.
"""

import asyncio
from collections import deque
from datetime import datetime, timezone
from typing import Deque, List, Optional, Protocol, Set

from aether_nav.external.calls import simulate_external_call
from aether_nav.logging_utils import get_logger
from aether_nav.models.events import EventDetails, EventRecord

logger = get_logger(__name__)

DEFAULT_CAPACITY = 100


class EventSink(Protocol):
    """Protocol for an external logging sink — fire-and-forget."""

    async def forward(self, record: EventRecord) -> None: ...


class SimulatedEventSink:
    """Forwards events to the remote observability endpoint via a simulated call."""

    def __init__(self, base_url: str, max_latency_ms: int = 50):
        self.endpoint = f"https://{base_url}/obsrv/log"
        self.max_latency_ms = max_latency_ms

    async def forward(self, record: EventRecord) -> None:
        await simulate_external_call(
            self.endpoint,
            payload=record.model_dump(mode="json"),
            max_latency_ms=self.max_latency_ms,
        )


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class EventRecorder:
    """
    In-memory event log shared by every component of one service instance.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        sink: Optional[EventSink] = None,
        forward_enabled: bool = True,
    ):
        self.capacity = capacity
        self.sink = sink
        self.forward_enabled = forward_enabled
        self._log: Deque[EventRecord] = deque(maxlen=capacity)
        self._pending: Set[asyncio.Task] = set()

    def record(self, event_name: str, details: Optional[EventDetails] = None) -> EventRecord:
        """Append an event and schedule its forward to the sink."""
        entry = EventRecord(
            timestamp=_utc_now_iso(),
            event_name=event_name,
            details=details,
        )
        # deque(maxlen) drops the oldest entry on overflow
        self._log.append(entry)
        logger.debug("event %s %s", event_name, details)

        if self.forward_enabled and self.sink is not None:
            self._schedule_forward(entry)
        return entry

    def recent_events(self, count: int = 20) -> List[EventRecord]:
        """Up to ``count`` most recent records, newest first."""
        if count <= 0:
            return []
        newest_first = reversed(self._log)
        return [entry for _, entry in zip(range(count), newest_first)]

    def __len__(self) -> int:
        return len(self._log)

    @property
    def pending_forwards(self) -> int:
        return len(self._pending)

    async def flush(self) -> None:
        """Wait for all in-flight forwards to settle."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _schedule_forward(self, entry: EventRecord) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; skipping forward of %s", entry.event_name)
            return

        task = loop.create_task(self.sink.forward(entry))
        self._pending.add(task)
        task.add_done_callback(self._forward_done)

    def _forward_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Event forward failed: %s", exc)
