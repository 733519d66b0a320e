"""Auto-advance timer for time-driven screens (the splash screen).

The timer performs a single advance() on the running event loop after a
delay. It is bound to the store state it was armed on: if any transition
happened in the meantime (the user navigated away, went back, reset), the
timer expires without touching the store.
"""

import asyncio
import contextlib
import logging

from app.navigation.errors import NavigationError
from app.navigation.registry import ScreenName
from app.navigation.store import NavigationStore

logger = logging.getLogger(__name__)

# Splash screen is shown for ~4.8s before moving on
DEFAULT_SPLASH_DELAY_SECONDS = 4.8


class AutoAdvanceTimer:
    """One-shot, cancellable delayed advance.

    Lifecycle:
    - start() arms the timer on the store's current screen.
    - cancel() disarms it; a cancelled timer never mutates the store.
    - wait() awaits completion (for tests and orderly shutdown).

    Args:
        store: Store to advance.
        next_screen: Screen to advance to when the delay elapses.
        delay: Seconds to wait.

    Raises:
        UnknownScreenError: ``next_screen`` is not registered.
    """

    def __init__(
        self,
        store: NavigationStore,
        next_screen: ScreenName | str,
        *,
        delay: float = DEFAULT_SPLASH_DELAY_SECONDS,
    ) -> None:
        if delay < 0:
            msg = "delay must not be negative"
            raise ValueError(msg)
        self._store = store
        self._next_screen = store.registry.coerce(next_screen)
        self._delay = delay
        self._task: asyncio.Task[None] | None = None
        self._armed_screen: ScreenName | None = None
        self._armed_sequence: int | None = None
        self._fired = False

    @property
    def next_screen(self) -> ScreenName:
        return self._next_screen

    @property
    def is_pending(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def fired(self) -> bool:
        """Whether the timer actually advanced the store."""
        return self._fired

    def start(self) -> None:
        """Arm the timer. Must be called with a running event loop.

        No-op if already pending.
        """
        if self.is_pending:
            return
        self._armed_screen = self._store.current_screen
        self._armed_sequence = self._store.sequence
        self._task = asyncio.create_task(self._run())
        logger.debug(
            "Auto-advance armed on '%s' -> '%s' in %.2fs",
            self._armed_screen.value,
            self._next_screen.value,
            self._delay,
        )

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Auto-advance to '%s' cancelled", self._next_screen.value)

    async def wait(self) -> None:
        """Wait until the timer has fired, expired, or been cancelled."""
        if self._task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await self._task

    async def _run(self) -> None:
        await asyncio.sleep(self._delay)

        if (
            self._store.current_screen != self._armed_screen
            or self._store.sequence != self._armed_sequence
        ):
            logger.debug(
                "Auto-advance expired: store moved on from '%s'",
                self._armed_screen.value if self._armed_screen else None,
            )
            return

        try:
            self._store.advance(self._next_screen)
        except NavigationError:
            logger.exception("Auto-advance to '%s' failed", self._next_screen.value)
            return
        self._fired = True
