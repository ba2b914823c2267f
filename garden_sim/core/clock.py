"""Model time for the simulation, in integer milliseconds."""


class SimClock:
    """Manages simulation time."""

    def __init__(self) -> None:
        self.now: int = 0

    @property
    def seconds(self) -> float:
        return self.now / 1000.0

    def advance_to(self, time_ms: int) -> None:
        """Move the clock forward to an absolute time. Never moves backwards."""
        if time_ms > self.now:
            self.now = time_ms

    def advance(self, delta_ms: int) -> None:
        """Advance the clock by a relative amount."""
        if delta_ms < 0:
            raise ValueError(f"cannot advance clock by {delta_ms} ms")
        self.now += delta_ms
