"""Navigation session schemas.

Screen names travel as plain strings so that an unregistered name reaches
the navigation layer and is reported as UNKNOWN_SCREEN rather than as a
generic request validation error.
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.navigation.diagnostics import ChangeLog
from app.navigation.errors import StaleMirror
from app.navigation.registry import ScreenBinding
from app.navigation.sessions import NavigationSession
from app.navigation.store import NavigationChange

_MAX_SCREEN_NAME = 100


class CreateNavigationSessionRequest(BaseModel):
    """Request body for POST /navigation/sessions.

    Attributes:
        initial_screen: Screen to start on. Unknown names fall back to the
            default screen.
        resume_fragment: URL fragment from a deep link (e.g. "#login"). Read
            once to pick the first screen, failing closed to the default.
    """

    model_config = ConfigDict(extra="forbid")

    initial_screen: str | None = Field(None, max_length=_MAX_SCREEN_NAME)
    resume_fragment: str | None = Field(None, max_length=_MAX_SCREEN_NAME + 1)


class AdvanceRequest(BaseModel):
    """Request body for POST /navigation/sessions/{id}/advance."""

    model_config = ConfigDict(extra="forbid")

    next_screen: str = Field(min_length=1, max_length=_MAX_SCREEN_NAME)
    data: dict[str, Any] = Field(default_factory=dict)


class CompleteRequest(BaseModel):
    """Request body for POST /navigation/sessions/{id}/complete."""

    model_config = ConfigDict(extra="forbid")

    data: dict[str, Any] = Field(default_factory=dict)


class ResumeRequest(BaseModel):
    """Request body for POST /navigation/sessions/{id}/resume."""

    model_config = ConfigDict(extra="forbid")

    screen: str = Field(min_length=1, max_length=_MAX_SCREEN_NAME)


class ScreenResponse(BaseModel):
    """One registered screen."""

    name: str
    component: str
    reads: list[str]
    has_route: bool

    @classmethod
    def from_binding(cls, binding: ScreenBinding) -> "ScreenResponse":
        return cls(
            name=binding.screen.value,
            component=binding.component,
            reads=sorted(binding.reads),
            has_route=binding.route is not None,
        )


class NavigationSessionResponse(BaseModel):
    """Current state of a navigation session.

    Attributes:
        id: Session id.
        screen: Active screen.
        component: Component that renders the active screen.
        context: ApplicationState fields the active screen reads.
        data: Full ApplicationState collected so far.
        history: Back-history, oldest first.
        sequence: Number of transitions so far.
        can_go_back: Whether back() would change the screen.
        fragment: URL fragment the client should display.
        expires_at: When the session lapses unless used again.
    """

    id: uuid.UUID
    screen: str
    component: str
    context: dict[str, Any]
    data: dict[str, Any]
    history: list[str]
    sequence: int
    can_go_back: bool
    fragment: str
    expires_at: datetime

    @classmethod
    def from_session(cls, session: NavigationSession) -> "NavigationSessionResponse":
        snapshot = session.store.snapshot()
        context = session.store.context_for()
        return cls(
            id=session.id,
            screen=snapshot.screen.value,
            component=context.component,
            context=dict(context.data),
            data=dict(snapshot.data),
            history=[screen.value for screen in snapshot.history],
            sequence=snapshot.sequence,
            can_go_back=context.can_go_back,
            fragment=session.hash_mirror.fragment,
            expires_at=session.expires_at,
        )


class NavigationChangeResponse(BaseModel):
    screen: str
    previous_screen: str
    transition: str
    sequence: int
    occurred_at: datetime

    @classmethod
    def from_change(cls, change: NavigationChange) -> "NavigationChangeResponse":
        return cls(
            screen=change.screen.value,
            previous_screen=change.previous_screen.value,
            transition=change.transition.value,
            sequence=change.sequence,
            occurred_at=change.occurred_at,
        )


class StaleMirrorResponse(BaseModel):
    mirror: str
    mirror_value: str | None
    store_value: str


class SequenceGapResponse(BaseModel):
    expected: int
    received: int


class NavigationDiagnosticsResponse(BaseModel):
    """Change log and mirror audit for one session.

    Attributes:
        change_count: Total notifications published since the session opened.
        changes: Most recent changes, oldest first.
        sequence_gaps: Missing or duplicated notifications.
        stale_mirrors: Mirrors disagreeing with the store.
    """

    change_count: int
    changes: list[NavigationChangeResponse]
    sequence_gaps: list[SequenceGapResponse]
    stale_mirrors: list[StaleMirrorResponse]

    @classmethod
    def build(
        cls, change_log: ChangeLog, stale: list[StaleMirror]
    ) -> "NavigationDiagnosticsResponse":
        return cls(
            change_count=change_log.count,
            changes=[NavigationChangeResponse.from_change(c) for c in change_log.entries],
            sequence_gaps=[
                SequenceGapResponse(expected=g.expected, received=g.received)
                for g in change_log.sequence_gaps()
            ],
            stale_mirrors=[
                StaleMirrorResponse(
                    mirror=s.mirror,
                    mirror_value=s.mirror_value,
                    store_value=s.store_value,
                )
                for s in stale
            ],
        )
