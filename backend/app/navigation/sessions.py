"""In-memory registry of live navigation sessions.

Each browser session gets its own NavigationStore plus the collaborators
wired to it: hash and storage mirrors, a change log and, while the splash
screen is showing, an auto-advance timer. The REST API looks sessions up
here by id; nothing else holds a reference to a store.

Sessions expire after a period of inactivity. Expired sessions are torn
down lazily on access and in bulk by cleanup_expired(), which also runs
whenever a new session is opened.

Note: Safe for a single-threaded event loop only. For multi-instance
deployments, sessions would need to move to a shared backend.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from app.core.config import settings
from app.navigation.diagnostics import DEFAULT_LOG_SIZE, ChangeLog
from app.navigation.mirrors import HashFragmentMirror, StorageMirror, seed_initial_screen
from app.navigation.registry import ScreenName, ViewRegistry, build_default_registry
from app.navigation.store import NavigationChange, NavigationStore
from app.navigation.timers import DEFAULT_SPLASH_DELAY_SECONDS, AutoAdvanceTimer

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_MINUTES = 24 * 60


@dataclass
class NavigationSession:
    """One user's navigation store and its attached collaborators.

    Attributes:
        id: Session identifier handed to the client.
        store: The session's authoritative navigation store.
        hash_mirror: URL fragment mirror (deep links).
        storage_mirror: Key-value storage mirror.
        change_log: Record of every published change.
        user_id: Owning user, None for anonymous sessions.
        splash_delay: Auto-advance delay for the splash screen, None disables.
        timer: Pending splash auto-advance, if any.
        created_at: When the session was opened.
        expires_at: When the session lapses unless used again.
    """

    id: uuid.UUID
    store: NavigationStore
    hash_mirror: HashFragmentMirror
    storage_mirror: StorageMirror
    change_log: ChangeLog
    user_id: uuid.UUID | None = None
    splash_delay: float | None = DEFAULT_SPLASH_DELAY_SECONDS
    timer: AutoAdvanceTimer | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    expires_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    _unsubscribe: Callable[[], None] | None = field(
        default=None, init=False, repr=False
    )

    @property
    def mirrors(self) -> tuple[HashFragmentMirror, StorageMirror]:
        return (self.hash_mirror, self.storage_mirror)

    def open(self) -> None:
        """Wire mirrors, change log and splash timer to the store."""
        self.change_log.attach(self.store)
        for mirror in self.mirrors:
            mirror.attach(self.store)
        self._unsubscribe = self.store.subscribe(self._on_change)
        if self.store.current_screen == ScreenName.SPLASH:
            self._arm_splash_timer()

    def teardown(self) -> None:
        """Cancel pending timers and detach every observer."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None
        for mirror in self.mirrors:
            mirror.detach()
        self.change_log.detach()

    def _on_change(self, change: NavigationChange) -> None:
        # A timer left over from an earlier splash visit expires on its own
        # once the store has moved on.
        if change.screen == ScreenName.SPLASH:
            self._arm_splash_timer()

    def _arm_splash_timer(self) -> None:
        if self.splash_delay is None:
            return
        binding = self.store.registry.resolve(ScreenName.SPLASH)
        if binding is None or binding.route is None:
            return
        if self.timer is not None:
            self.timer.cancel()
        self.timer = AutoAdvanceTimer(
            self.store,
            binding.route(self.store.data),
            delay=self.splash_delay,
        )
        self.timer.start()


class NavigationSessionStore:
    """Session id to NavigationSession map with idle expiry.

    Args:
        registry: View registry shared by all sessions.
        ttl_minutes: Idle time after which a session lapses.
        change_log_size: Entries retained per session change log.
        splash_delay: Splash auto-advance delay, None disables auto-advance.
    """

    def __init__(
        self,
        registry: ViewRegistry | None = None,
        *,
        ttl_minutes: int = DEFAULT_SESSION_TTL_MINUTES,
        change_log_size: int = DEFAULT_LOG_SIZE,
        splash_delay: float | None = DEFAULT_SPLASH_DELAY_SECONDS,
    ) -> None:
        self.registry = registry or build_default_registry()
        self._sessions: dict[uuid.UUID, NavigationSession] = {}
        self._ttl = timedelta(minutes=ttl_minutes)
        self._change_log_size = change_log_size
        self._splash_delay = splash_delay

    def __len__(self) -> int:
        return len(self._sessions)

    def create(
        self,
        *,
        user_id: uuid.UUID | None = None,
        initial_screen: ScreenName | str | None = None,
        resume_fragment: str | None = None,
    ) -> NavigationSession:
        """Open a new session.

        The first screen is chosen, in order, from ``resume_fragment`` (read
        once through the hash mirror, failing closed to the default screen),
        then ``initial_screen`` (unknown names fall back to the default
        screen), then the registry's entry screen.

        Must be called with a running event loop when the first screen is
        the splash screen, since its auto-advance timer is armed here.
        Lapsed sessions are swept first, so the registry never grows past
        the sessions still in use.
        """
        self.cleanup_expired()
        hash_mirror = HashFragmentMirror()
        if resume_fragment is not None:
            hash_mirror.fragment = resume_fragment
            first_screen: ScreenName | str | None = seed_initial_screen(
                self.registry, hash_mirror
            )
        else:
            first_screen = initial_screen

        store = NavigationStore(self.registry, initial_screen=first_screen)
        now = datetime.now(UTC)
        session = NavigationSession(
            id=uuid.uuid4(),
            store=store,
            hash_mirror=hash_mirror,
            storage_mirror=StorageMirror(),
            change_log=ChangeLog(self._change_log_size),
            user_id=user_id,
            splash_delay=self._splash_delay,
            created_at=now,
            expires_at=now + self._ttl,
        )
        session.open()
        self._sessions[session.id] = session
        logger.info(
            "Navigation session %s opened on '%s'", session.id, store.current_screen.value
        )
        return session

    def get(
        self, session_id: uuid.UUID, user_id: uuid.UUID | None = None
    ) -> NavigationSession | None:
        """Look up a live session and extend its expiry.

        Args:
            session_id: Session to look up.
            user_id: Requesting user. Sessions owned by a user are only
                visible to that user.

        Returns:
            The session, or None if not found, expired, or owned by someone
            else.
        """
        session = self._sessions.get(session_id)
        if session is None:
            return None

        if session.user_id is not None and session.user_id != user_id:
            return None

        now = datetime.now(UTC)
        if now > session.expires_at:
            self.close(session_id)
            return None

        session.expires_at = now + self._ttl
        return session

    def close(self, session_id: uuid.UUID) -> bool:
        """Tear down and forget a session.

        Returns:
            True if a session was removed.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.teardown()
        logger.info("Navigation session %s closed", session_id)
        return True

    def cleanup_expired(self) -> int:
        """Tear down every lapsed session.

        Returns:
            Number of sessions removed.
        """
        now = datetime.now(UTC)
        expired = [sid for sid, s in self._sessions.items() if now > s.expires_at]
        for session_id in expired:
            self.close(session_id)
        return len(expired)

    def clear(self) -> None:
        """Tear down all sessions (for testing and shutdown)."""
        for session in self._sessions.values():
            session.teardown()
        self._sessions.clear()


# Singleton instance for the application
_session_store: NavigationSessionStore | None = None


def get_session_store() -> NavigationSessionStore:
    """Get the singleton session store, configured from settings."""
    global _session_store
    if _session_store is None:
        _session_store = NavigationSessionStore(
            build_default_registry(settings.navigation_entry_screen),
            ttl_minutes=settings.navigation_session_ttl_minutes,
            change_log_size=settings.navigation_change_log_size,
            splash_delay=settings.splash_delay_seconds,
        )
    return _session_store


def reset_session_store() -> None:
    """Reset the session store singleton (for testing)."""
    global _session_store
    if _session_store is not None:
        _session_store.clear()
    _session_store = None
