"""Navigation error taxonomy.

None of these are fatal to the process. Callers recover by staying on the
current screen or by falling back to the registry's default screen.

- UnknownScreenError: transition target is not a registered screen
- ScreenPayloadError: completion data does not match the screen's payload model
- InvalidTransitionError: operation not allowed from the current screen
- MirrorReadFailure: a persistence mirror could not be read at startup
- StaleMirror: report (not raised) for a mirror that disagrees with the store
"""

from dataclasses import dataclass


class NavigationError(Exception):
    """Base class for navigation failures.

    Attributes:
        message: Human-readable description of the failure.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnknownScreenError(NavigationError):
    """Attempted transition to a name outside the view registry."""

    def __init__(self, screen: object) -> None:
        self.screen = screen
        super().__init__(f"Unknown screen: {screen!r}")


class ScreenPayloadError(NavigationError):
    """Completion data rejected by the completing screen's payload model.

    Attributes:
        screen: Wire value of the screen whose payload failed validation.
        details: Field-level errors in the API error-detail format.
    """

    def __init__(self, screen: str, details: list[dict]) -> None:
        self.screen = screen
        self.details = details
        super().__init__(f"Invalid data for screen '{screen}'")


class InvalidTransitionError(NavigationError):
    """Operation is not available from the current screen."""


class MirrorReadFailure(NavigationError):
    """A mirror value was missing, corrupt, or named an unknown screen."""

    def __init__(self, mirror: str, reason: str) -> None:
        self.mirror = mirror
        self.reason = reason
        super().__init__(f"Mirror '{mirror}' unreadable: {reason}")


@dataclass(frozen=True)
class StaleMirror:
    """A mirror whose recorded screen differs from the store's screen.

    Produced by diagnostics only. Never used to correct the store.

    Attributes:
        mirror: Mirror name (e.g. "hash", "storage").
        mirror_value: Raw value the mirror holds, None if empty.
        store_value: Screen the store currently holds.
    """

    mirror: str
    mirror_value: str | None
    store_value: str
