from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List


class ScheduledCall(ABC):
    """Handle for a deferred call that can be cancelled before it fires."""

    @abstractmethod
    def cancel(self) -> None:
        pass

    @property
    @abstractmethod
    def active(self) -> bool:
        pass


class Scheduler(ABC):
    """
    Abstract interface for deferred callbacks (animation resets, debounces).

    Hosts with their own event loop supply an implementation bound to it.
    """

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        pass


@dataclass
class _ManualCall(ScheduledCall):
    due_ms: int
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


@dataclass
class ManualScheduler(Scheduler):
    """
    Deterministic scheduler driven by `advance(ms)`.

    Used by tests and by hosts that pump time themselves.
    """

    now_ms: int = 0
    calls: List[_ManualCall] = field(default_factory=list)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        call = _ManualCall(due_ms=self.now_ms + delay_ms, callback=callback)
        self.calls.append(call)
        return call

    def advance(self, ms: int) -> None:
        self.now_ms += ms
        due = sorted(
            (c for c in self.calls if c.active and c.due_ms <= self.now_ms),
            key=lambda c: c.due_ms,
        )
        for call in due:
            if call.active:
                call.fired = True
                call.callback()
        self.calls = [c for c in self.calls if c.active]

    @property
    def pending(self) -> int:
        return sum(1 for c in self.calls if c.active)
