"""Timers and stream bookkeeping for a non-blocking terminal event loop."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class EventLoopConfig:
    """Intervals, in seconds, for periodic updates and input polling."""

    tick_interval: float = 0.1
    input_poll_interval: float = 0.05


class _Interval:
    """Periodic timer; the first tick is immediate and missed ticks are skipped."""

    def __init__(self, period: float) -> None:
        if period <= 0:
            raise ValueError("interval period must be positive")
        self._period = period
        self._next = time.monotonic()

    async def tick(self) -> float:
        now = time.monotonic()
        if now < self._next:
            await asyncio.sleep(self._next - now)
        deadline = self._next
        now = time.monotonic()
        late = now - deadline
        if late >= self._period:
            self._next = now + self._period - (late % self._period)
        else:
            self._next = deadline + self._period
        return deadline


class NonBlockingEventLoop:
    """Coordinates the periodic ticks of a streaming terminal UI."""

    def __init__(self, config: EventLoopConfig | None = None) -> None:
        config = config or EventLoopConfig()
        self._tick_interval = _Interval(config.tick_interval)
        self._input_poll_interval = _Interval(config.input_poll_interval)

    async def tick(self) -> float:
        """Wait for the next UI tick; returns its scheduled monotonic time."""
        return await self._tick_interval.tick()

    async def input_poll(self) -> float:
        """Wait for the next input poll; returns its scheduled monotonic time."""
        return await self._input_poll_interval.tick()

    @classmethod
    def with_defaults(cls) -> "NonBlockingEventLoop":
        """Create an event loop with the default configuration."""
        return cls(EventLoopConfig())


@dataclass
class StreamState:
    """Tracks whether the output streams and the process have finished."""

    stdout_closed: bool = False
    stderr_closed: bool = False
    process_exited: bool = False

    def is_complete(self) -> bool:
        """True once both streams are closed and the process has exited."""
        return self.stdout_closed and self.stderr_closed and self.process_exited

    def should_continue(self) -> bool:
        """True while anything is still open or running."""
        return not self.is_complete()