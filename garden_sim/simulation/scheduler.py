"""Discrete-event scheduler: deferred actions fired against an advancing clock."""

from __future__ import annotations

import heapq
from dataclasses import dataclass
from typing import Callable, Optional

from garden_sim.core.clock import SimClock


@dataclass
class ScheduledEvent:
    """Handle for a pending one-shot or repeating action."""

    fire_time: int
    action: Callable[[], None]
    label: str = ""
    interval: Optional[int] = None
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        if self.cancelled:
            return False
        return self.interval is not None or not self.fired


class EventScheduler:
    """Priority queue of (fire_time, sequence, event) processed in time order.

    Events due at the same instant fire in the order they were scheduled.
    Actions may schedule or cancel other events while running.
    """

    def __init__(self, clock: Optional[SimClock] = None) -> None:
        self.clock = clock or SimClock()
        self._queue: list[tuple[int, int, ScheduledEvent]] = []
        self._counter: int = 0

    @property
    def now(self) -> int:
        return self.clock.now

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, ev in self._queue if not ev.cancelled)

    def schedule(self, delay_ms: int, action: Callable[[], None], label: str = "") -> ScheduledEvent:
        """Run `action` once, `delay_ms` after now."""
        if delay_ms < 0:
            raise ValueError(f"negative delay: {delay_ms}")
        event = ScheduledEvent(fire_time=self.now + delay_ms, action=action, label=label)
        self._push(event)
        return event

    def schedule_interval(
        self, interval_ms: int, action: Callable[[], None], label: str = ""
    ) -> ScheduledEvent:
        """Run `action` every `interval_ms` until the handle is cancelled."""
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive: {interval_ms}")
        event = ScheduledEvent(
            fire_time=self.now + interval_ms,
            action=action,
            label=label,
            interval=interval_ms,
        )
        self._push(event)
        return event

    def cancel(self, event: Optional[ScheduledEvent]) -> None:
        """Cancel a pending event. Cancelling None or a fired event is a no-op."""
        if event is not None:
            event.cancelled = True

    def advance(self, delta_ms: int) -> int:
        """Advance model time by `delta_ms`, firing every event that falls due.

        Returns the number of actions executed.
        """
        if delta_ms < 0:
            raise ValueError(f"cannot advance by {delta_ms} ms")
        return self._run_until(self.now + delta_ms)

    def run_until_idle(self, limit_ms: int) -> int:
        """Fire events until the queue is empty or `limit_ms` of model time passes."""
        end = self.now + limit_ms
        fired = 0
        while True:
            next_time = self._next_fire_time()
            if next_time is None or next_time > end:
                break
            fired += self._run_until(next_time)
        return fired

    def _run_until(self, end: int) -> int:
        fired = 0
        while self._queue:
            fire_time, _, event = self._queue[0]
            if fire_time > end:
                break
            heapq.heappop(self._queue)
            if event.cancelled:
                continue
            self.clock.advance_to(fire_time)
            event.fired = True
            if event.interval is not None:
                # Re-arm before running so the action may cancel its own handle
                event.fire_time = fire_time + event.interval
                self._push(event)
            event.action()
            fired += 1
        self.clock.advance_to(end)
        return fired

    def _next_fire_time(self) -> Optional[int]:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)
        if not self._queue:
            return None
        return self._queue[0][0]

    def _push(self, event: ScheduledEvent) -> None:
        self._counter += 1
        heapq.heappush(self._queue, (event.fire_time, self._counter, event))
