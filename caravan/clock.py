"""FrameClock - elapsed time between host frame callbacks."""

import random

from caravan.types import TickContext


class FrameClock:
    def __init__(self) -> None:
        self._last: float | None = None

    @property
    def started(self) -> bool:
        return self._last is not None

    @property
    def last(self) -> float | None:
        return self._last

    def delta(self, now: float) -> float:
        """Milliseconds since the previous callback.

        The first call only sets the baseline and returns 0. Timestamps that
        go backwards yield 0.
        """
        if self._last is None:
            self._last = now
        elapsed = max(0.0, now - self._last)
        self._last = now
        return elapsed

    def reset(self) -> None:
        self._last = None


def make_context(
    tick_number: int, dt: float, elapsed: float, rng: random.Random,
) -> TickContext:
    return TickContext(tick_number=tick_number, dt=dt, elapsed=elapsed, random=rng)
