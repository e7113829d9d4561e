"""
Process-wide polarity toggle request.

The SIGUSR1 handler only appends to a one-slot deque; the dispatch loop pops
it once per tick. Both are single C-level deque operations, so the handler
never waits on a lock the interrupted main thread might hold. Several
signals between two ticks collapse into one toggle.
"""

from __future__ import annotations

import logging
import signal
from collections import deque

L = logging.getLogger("snapshot_relay.gate.toggle")

TOGGLE_SIGNUM = signal.SIGUSR1


class SwitchSignal:
    def __init__(self):
        self._pending: deque[bool] = deque(maxlen=1)

    def notify(self) -> None:
        self._pending.append(True)

    def consume(self) -> bool:
        """Return True once per pending request, clearing it."""
        try:
            return self._pending.popleft()
        except IndexError:
            return False

    @property
    def pending(self) -> bool:
        return bool(self._pending)

    def _handle(self, _signum, _frame):
        self.notify()

    def install(self, signum: int = TOGGLE_SIGNUM):
        previous = signal.signal(signum, self._handle)
        L.debug("Polarity toggle bound to signal %s", signal.Signals(signum).name)
        return previous


# Created at import, lives for the whole process.
TOGGLE_SIGNAL = SwitchSignal()


def install_toggle_handler(signum: int = TOGGLE_SIGNUM) -> SwitchSignal:
    TOGGLE_SIGNAL.install(signum)
    return TOGGLE_SIGNAL


__all__ = ["SwitchSignal", "TOGGLE_SIGNAL", "TOGGLE_SIGNUM", "install_toggle_handler"]
