"""Navigation diagnostics.

ChangeLog subscribes to a store and records every published NavigationChange,
which is enough to count renders, replay the path a user took, and spot
missing or duplicated notifications. audit_mirrors() compares mirrors with
the store and reports divergence. Neither ever mutates the store.
"""

import logging
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from app.navigation.errors import MirrorReadFailure, StaleMirror
from app.navigation.mirrors import PersistenceMirror
from app.navigation.store import NavigationChange, NavigationStore

logger = logging.getLogger(__name__)

DEFAULT_LOG_SIZE = 200


@dataclass(frozen=True)
class SequenceGap:
    """Notification whose sequence number is not the one expected.

    Attributes:
        expected: Sequence number that should have arrived next.
        received: Sequence number that actually arrived.
    """

    expected: int
    received: int


class ChangeLog:
    """Bounded record of navigation changes.

    Args:
        max_entries: How many recent changes to retain. ``count`` keeps
            counting past this limit.
    """

    def __init__(self, max_entries: int = DEFAULT_LOG_SIZE) -> None:
        if max_entries < 1:
            msg = "max_entries must be at least 1"
            raise ValueError(msg)
        self._entries: deque[NavigationChange] = deque(maxlen=max_entries)
        self._count = 0
        self._unsubscribe: Callable[[], None] | None = None

    def __call__(self, change: NavigationChange) -> None:
        self._entries.append(change)
        self._count += 1

    @property
    def entries(self) -> tuple[NavigationChange, ...]:
        return tuple(self._entries)

    @property
    def count(self) -> int:
        """Total notifications received since the log was created."""
        return self._count

    def attach(self, store: NavigationStore) -> None:
        self.detach()
        self._unsubscribe = store.subscribe(self)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def sequence_gaps(self) -> list[SequenceGap]:
        """Find missing or duplicated notifications among retained entries."""
        gaps: list[SequenceGap] = []
        previous: int | None = None
        for change in self._entries:
            if previous is not None and change.sequence != previous + 1:
                gaps.append(SequenceGap(expected=previous + 1, received=change.sequence))
            previous = change.sequence
        return gaps


def audit_mirrors(
    store: NavigationStore, mirrors: Iterable[PersistenceMirror]
) -> list[StaleMirror]:
    """Report every mirror whose recorded screen differs from the store.

    Reports only. The store remains the source of truth and mirrors are not
    rewritten here.

    Args:
        store: Authoritative navigation store.
        mirrors: Mirrors to compare.

    Returns:
        One StaleMirror per disagreeing (or unreadable) mirror.
    """
    current = store.current_screen.value
    stale: list[StaleMirror] = []
    for mirror in mirrors:
        try:
            value = mirror.read()
        except MirrorReadFailure as exc:
            logger.warning("Mirror audit: %s", exc.message)
            value = None
        if value != current:
            logger.warning(
                "Stale mirror '%s': holds %r, store is on '%s'",
                mirror.name,
                value,
                current,
            )
            stale.append(
                StaleMirror(mirror=mirror.name, mirror_value=value, store_value=current)
            )
    return stale
