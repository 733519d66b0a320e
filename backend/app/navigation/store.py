"""Navigation store: sole owner of the active screen and collected data.

The store holds exactly one current ScreenName, one ApplicationState (a flat
dict of fields collected so far) and the back-history of visited screens.
It is mutated only through advance / complete / go_back / reset / resume.
Every successful mutation is committed in one step and then published as
exactly one NavigationChange to subscribed listeners (render layer,
persistence mirrors, diagnostics).

Usage:
    store = NavigationStore(build_default_registry())
    unsubscribe = store.subscribe(on_change)
    store.advance(ScreenName.PURPOSE_SELECTION)
    store.advance(ScreenName.BASIC_REGISTRATION, {"role": "candidate"})
    store.go_back()
"""

import copy
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any

from app.navigation.errors import InvalidTransitionError
from app.navigation.registry import ScreenBinding, ScreenName, ViewRegistry

logger = logging.getLogger(__name__)


class Transition(str, Enum):
    """Kind of state change carried by a notification."""

    ADVANCE = "advance"
    BACK = "back"
    RESET = "reset"
    RESUME = "resume"


@dataclass(frozen=True)
class NavigationChange:
    """Notification published once per successful transition.

    Attributes:
        screen: Screen that is now active.
        previous_screen: Screen that was active before the transition.
        transition: What caused the change.
        sequence: Monotonic transition counter, starting at 1.
        occurred_at: When the transition was committed.
    """

    screen: ScreenName
    previous_screen: ScreenName
    transition: Transition
    sequence: int
    occurred_at: datetime


@dataclass(frozen=True)
class NavigationSnapshot:
    """Read-only copy of the store's state at one point in time."""

    screen: ScreenName
    data: Mapping[str, Any]
    history: tuple[ScreenName, ...]
    sequence: int


@dataclass(frozen=True)
class ScreenContext:
    """The slice of ApplicationState a screen receives on entry.

    Only fields the screen declares it reads, and only those already
    produced by screens that have executed, are present.
    """

    screen: ScreenName
    component: str
    data: Mapping[str, Any]
    can_go_back: bool


Listener = Callable[[NavigationChange], None]


class NavigationStore:
    """Single authoritative holder of the current screen and ApplicationState.

    Note: Safe for a single-threaded event loop. Transitions are synchronous,
    so two transitions never interleave. Transitions requested from inside a
    listener are rejected.

    Args:
        registry: View registry defining the valid screens.
        initial_screen: Screen to start on. None uses the registry's entry
            screen; an unregistered value falls back to the default screen.
    """

    def __init__(
        self,
        registry: ViewRegistry,
        *,
        initial_screen: ScreenName | str | None = None,
    ) -> None:
        self._registry = registry
        if initial_screen is None:
            self._screen = registry.entry_screen
        else:
            self._screen = registry.resolve_or_default(initial_screen).screen
        self._data: dict[str, Any] = {}
        self._history: tuple[ScreenName, ...] = ()
        self._sequence = 0
        self._listeners: list[Listener] = []
        self._notifying = False

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def registry(self) -> ViewRegistry:
        return self._registry

    @property
    def current_screen(self) -> ScreenName:
        return self._screen

    @property
    def binding(self) -> ScreenBinding:
        """Binding for the active screen."""
        return self._registry.resolve_or_default(self._screen)

    @property
    def data(self) -> dict[str, Any]:
        """Deep copy of the accumulated ApplicationState."""
        return copy.deepcopy(self._data)

    @property
    def history(self) -> tuple[ScreenName, ...]:
        return self._history

    @property
    def sequence(self) -> int:
        return self._sequence

    def snapshot(self) -> NavigationSnapshot:
        """Return an immutable copy of the current state."""
        return NavigationSnapshot(
            screen=self._screen,
            data=MappingProxyType(copy.deepcopy(self._data)),
            history=self._history,
            sequence=self._sequence,
        )

    def context_for(self, screen: ScreenName | str | None = None) -> ScreenContext:
        """Build the entry context for a screen.

        Args:
            screen: Screen to build the context for. Defaults to the active
                screen. Unknown names resolve to the default screen.

        Returns:
            ScreenContext exposing only the fields the screen reads.
        """
        binding = self._registry.resolve_or_default(
            self._screen if screen is None else screen
        )
        visible = {
            key: copy.deepcopy(value)
            for key, value in self._data.items()
            if key in binding.reads
        }
        return ScreenContext(
            screen=binding.screen,
            component=binding.component,
            data=MappingProxyType(visible),
            can_go_back=bool(self._history),
        )

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            Callable that removes the listener. Calling it twice is harmless.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def advance(
        self,
        next_screen: ScreenName | str,
        partial_data: Mapping[str, Any] | None = None,
    ) -> NavigationChange:
        """Complete the active screen and move to ``next_screen``.

        ``partial_data`` is validated against the active screen's payload
        model and shallow-merged into ApplicationState: same-named fields
        are overwritten, all other fields are kept.

        Args:
            next_screen: Registered screen to move to.
            partial_data: Completion data from the active screen.

        Returns:
            The published NavigationChange.

        Raises:
            UnknownScreenError: ``next_screen`` is not registered. The store
                is left unchanged.
            ScreenPayloadError: ``partial_data`` does not validate. The
                store is left unchanged.
        """
        self._ensure_not_notifying()
        target = self._registry.coerce(next_screen)
        fields = self._registry.validate_payload(self._screen, partial_data)
        return self._move_forward(target, fields)

    def complete(self, partial_data: Mapping[str, Any] | None = None) -> NavigationChange:
        """Complete the active screen along its declared route.

        Same validation and merge as advance(); the next screen is chosen by
        the active binding's route using the merged state.

        Raises:
            InvalidTransitionError: The active screen has no route.
            ScreenPayloadError: ``partial_data`` does not validate.
        """
        self._ensure_not_notifying()
        binding = self.binding
        if binding.route is None:
            msg = f"Screen '{binding.screen.value}' has no completion route"
            raise InvalidTransitionError(msg)
        fields = self._registry.validate_payload(self._screen, partial_data)
        target = self._registry.coerce(binding.route({**self._data, **fields}))
        return self._move_forward(target, fields)

    def go_back(self) -> NavigationChange | None:
        """Return to the previously visited screen.

        ApplicationState is left untouched.

        Returns:
            The published NavigationChange, or None when history is empty
            (no-op, nothing is published).
        """
        self._ensure_not_notifying()
        if not self._history:
            return None
        return self._commit(
            screen=self._history[-1],
            data=self._data,
            history=self._history[:-1],
            transition=Transition.BACK,
        )

    def reset(self) -> NavigationChange:
        """Clear all collected data and return to the entry screen."""
        self._ensure_not_notifying()
        return self._commit(
            screen=self._registry.entry_screen,
            data={},
            history=(),
            transition=Transition.RESET,
        )

    def resume(self, screen: ScreenName | str) -> NavigationChange:
        """Jump to a previously recorded screen on explicit user request.

        This is the only path by which a value read back from a
        persistence mirror may change the active screen after startup.
        History is cleared; ApplicationState is kept.

        Raises:
            UnknownScreenError: ``screen`` is not registered.
        """
        self._ensure_not_notifying()
        target = self._registry.coerce(screen)
        return self._commit(
            screen=target,
            data=self._data,
            history=(),
            transition=Transition.RESUME,
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _ensure_not_notifying(self) -> None:
        if self._notifying:
            msg = "Cannot change screens while change listeners are running"
            raise InvalidTransitionError(msg)

    def _move_forward(
        self, target: ScreenName, fields: Mapping[str, Any]
    ) -> NavigationChange:
        return self._commit(
            screen=target,
            data={**self._data, **fields},
            history=(*self._history, self._screen),
            transition=Transition.ADVANCE,
        )

    def _commit(
        self,
        *,
        screen: ScreenName,
        data: dict[str, Any],
        history: tuple[ScreenName, ...],
        transition: Transition,
    ) -> NavigationChange:
        previous = self._screen
        change = NavigationChange(
            screen=screen,
            previous_screen=previous,
            transition=transition,
            sequence=self._sequence + 1,
            occurred_at=datetime.now(UTC),
        )

        self._screen, self._data, self._history = screen, data, history
        self._sequence = change.sequence

        logger.debug(
            "Navigation %s: %s -> %s (seq %d)",
            transition.value,
            previous.value,
            screen.value,
            change.sequence,
        )
        self._notify(change)
        return change

    def _notify(self, change: NavigationChange) -> None:
        self._notifying = True
        try:
            for listener in tuple(self._listeners):
                try:
                    listener(change)
                except Exception:
                    # State is already committed; one failing observer must
                    # not starve the others.
                    logger.exception(
                        "Navigation listener failed for seq %d", change.sequence
                    )
        finally:
            self._notifying = False
