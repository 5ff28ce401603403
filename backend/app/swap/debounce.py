"""Single-slot cancellable delayed call on the asyncio loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """Runs a callback once the caller has stopped scheduling for ``delay`` seconds.

    At most one call is pending at a time: scheduling again cancels the
    pending call and starts the wait over. A delay of 0 (or less) runs the
    callback synchronously, which needs no event loop.
    """

    def __init__(self, delay: float, name: str = "debounce") -> None:
        self._delay = delay
        self._name = name
        self._task: asyncio.Task | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def require_loop(self) -> None:
        """Raise RuntimeError if schedule() could not run from here."""
        if self._delay > 0:
            asyncio.get_running_loop()

    def schedule(self, callback: Callable[[], None]) -> None:
        """Replace any pending call with ``callback``.

        With a positive delay this must be called from a running event loop.
        """
        self.require_loop()
        self.cancel()
        if self._delay <= 0:
            callback()
            return
        self._task = asyncio.get_running_loop().create_task(
            self._fire_after(callback), name=self._name
        )

    def cancel(self) -> None:
        """Drop the pending call, if any. Safe to call multiple times."""
        if self._task and not self._task.done():
            self._task.cancel()
        self._task = None

    async def aclose(self) -> None:
        """Cancel the pending call and wait for its task to finish."""
        task = self._task
        self._task = None
        if task and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _fire_after(self, callback: Callable[[], None]) -> None:
        await asyncio.sleep(self._delay)
        self._task = None
        try:
            callback()
        except Exception:
            logger.exception("Debounced call %s failed", self._name)
