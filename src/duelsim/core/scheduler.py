"""Single-threaded queue of delayed calls used for AI turn pacing."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List


@dataclass(slots=True)
class ScheduledCall:
    """A deferred callback that runs at most once."""

    due_at: float
    callback: Callable[[], None]
    done: bool = False

    def run(self) -> bool:
        """Invoke the callback if it has not run yet. Returns True when it ran."""
        if self.done:
            return False
        self.done = True
        self.callback()
        return True

    def cancel(self) -> None:
        self.done = True


@dataclass(slots=True)
class TurnScheduler:
    """Virtual-clock event queue.

    Nothing runs on its own: hosts call ``advance`` with elapsed time (or
    ``flush`` to drain everything). Calls are executed in due order, ties in
    scheduling order.
    """

    now: float = 0.0
    _pending: List[ScheduledCall] = field(default_factory=list)

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        self._pending = [pending for pending in self._pending if not pending.done]
        call = ScheduledCall(due_at=self.now + max(0.0, delay), callback=callback)
        self._pending.append(call)
        return call

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every call that became due."""
        self.now += max(0.0, seconds)
        return self._run_until(self.now)

    def flush(self) -> int:
        """Run every pending call regardless of its due time."""
        if not self._pending:
            return 0
        latest = max(call.due_at for call in self._pending)
        self.now = max(self.now, latest)
        return self._run_until(self.now)

    @property
    def pending_count(self) -> int:
        return sum(1 for call in self._pending if not call.done)

    def _run_until(self, moment: float) -> int:
        due = sorted(
            (call for call in self._pending if call.due_at <= moment),
            key=lambda call: call.due_at,
        )
        self._pending = [call for call in self._pending if call.due_at > moment and not call.done]
        executed = 0
        for call in due:
            if call.run():
                executed += 1
        return executed
