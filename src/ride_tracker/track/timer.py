"""RepeatingTimer — fixed-interval callback on a daemon thread."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable


class RepeatingTimer:
    """Calls *callback* every *interval_s* seconds until cancelled.

    The first call happens one interval after :meth:`start`.  :meth:`cancel`
    is idempotent and safe to call before :meth:`start` or from inside the
    callback itself.

    Parameters
    ----------
    interval_s:
        Seconds between calls.
    callback:
        Zero-argument callable run on the timer thread.
    name:
        Thread name, for debugging.
    """

    def __init__(
        self,
        interval_s: float,
        callback: Callable[[], None],
        name: str = "RepeatingTimer",
    ) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        self.interval_s = interval_s
        self._callback = callback
        self._name = name
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_active(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    def start(self) -> None:
        """Start the timer thread.  Starting an active timer is a no-op."""
        if self.is_active:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name=self._name)
        self._thread.start()

    def cancel(self) -> None:
        """Stop the timer.  No further callbacks start after this returns."""
        self._stop_event.set()
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=2.0)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _run(self) -> None:
        next_fire = time.monotonic() + self.interval_s
        while not self._stop_event.wait(max(0.0, next_fire - time.monotonic())):
            self._callback()
            next_fire += self.interval_s
