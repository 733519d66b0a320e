"""Onboarding navigation API router.

Hosts one NavigationStore per client session. The client renders whatever
screen the session reports and submits completions back; the server-side
store stays the single source of truth for screen and collected data.

Endpoints:
- GET    /screens                        - registered screens
- POST   /sessions                       - open a session
- GET    /sessions/{id}                  - current state
- POST   /sessions/{id}/advance          - complete screen, go to named screen
- POST   /sessions/{id}/complete         - complete screen along its route
- POST   /sessions/{id}/back             - previous screen
- POST   /sessions/{id}/reset            - clear data, back to entry screen
- POST   /sessions/{id}/resume           - explicit resume to a recorded screen
- GET    /sessions/{id}/diagnostics      - change log and mirror audit
- DELETE /sessions/{id}                  - close session

Navigation failures (unknown screen, invalid payload, no route) propagate
as NavigationError and are rendered by the app-level handler.
"""

import uuid

import structlog
from fastapi import APIRouter, Request, Response

from app.api.deps import OptionalUserId, SessionStore
from app.core.config import settings
from app.core.errors import NotFoundError
from app.core.rate_limiting import limiter
from app.core.responses import DataResponse
from app.navigation.diagnostics import audit_mirrors
from app.navigation.sessions import NavigationSession, NavigationSessionStore
from app.schemas.navigation import (
    AdvanceRequest,
    CompleteRequest,
    CreateNavigationSessionRequest,
    NavigationDiagnosticsResponse,
    NavigationSessionResponse,
    ResumeRequest,
    ScreenResponse,
)

logger = structlog.get_logger()

router = APIRouter()

_SESSION_RESOURCE = "Navigation session"


def _get_session(
    sessions: NavigationSessionStore,
    session_id: uuid.UUID,
    user_id: uuid.UUID | None,
) -> NavigationSession:
    """Look up a session visible to the caller.

    Raises:
        NotFoundError: 404 if missing, expired, or owned by another user.
    """
    session = sessions.get(session_id, user_id)
    if session is None:
        raise NotFoundError(_SESSION_RESOURCE, str(session_id))
    return session


def _state(session: NavigationSession) -> DataResponse[NavigationSessionResponse]:
    return DataResponse(data=NavigationSessionResponse.from_session(session))


@router.get("/screens")
async def list_screens(sessions: SessionStore) -> DataResponse[list[ScreenResponse]]:
    """List every registered screen and what it reads."""
    return DataResponse(
        data=[ScreenResponse.from_binding(binding) for binding in sessions.registry]
    )


@router.post("/sessions", status_code=201)
@limiter.limit(settings.rate_limit_navigation_sessions)
async def create_session(
    request: Request,  # noqa: ARG001 - required by @limiter.limit()
    body: CreateNavigationSessionRequest,
    sessions: SessionStore,
    user_id: OptionalUserId,
) -> DataResponse[NavigationSessionResponse]:
    """Open a navigation session.

    Anonymous sessions are allowed (the flow starts before login). A
    session opened with a bearer token is only visible to that user.
    """
    session = sessions.create(
        user_id=user_id,
        initial_screen=body.initial_screen,
        resume_fragment=body.resume_fragment,
    )
    logger.info(
        "navigation_session_created",
        session_id=str(session.id),
        screen=session.store.current_screen.value,
        authenticated=user_id is not None,
    )
    return _state(session)


@router.get("/sessions/{session_id}")
async def get_session(
    session_id: uuid.UUID,
    sessions: SessionStore,
    user_id: OptionalUserId,
) -> DataResponse[NavigationSessionResponse]:
    return _state(_get_session(sessions, session_id, user_id))


@router.post("/sessions/{session_id}/advance")
async def advance(
    session_id: uuid.UUID,
    body: AdvanceRequest,
    sessions: SessionStore,
    user_id: OptionalUserId,
) -> DataResponse[NavigationSessionResponse]:
    """Complete the active screen with ``data`` and move to ``next_screen``.

    Unknown screens yield 422 UNKNOWN_SCREEN and invalid data 400
    VALIDATION_ERROR; in both cases the session is unchanged.
    """
    session = _get_session(sessions, session_id, user_id)
    session.store.advance(body.next_screen, body.data)
    return _state(session)


@router.post("/sessions/{session_id}/complete")
async def complete(
    session_id: uuid.UUID,
    body: CompleteRequest,
    sessions: SessionStore,
    user_id: OptionalUserId,
) -> DataResponse[NavigationSessionResponse]:
    """Complete the active screen and follow its declared route.

    Screens without a route yield 422 INVALID_STATE_TRANSITION.
    """
    session = _get_session(sessions, session_id, user_id)
    session.store.complete(body.data)
    return _state(session)


@router.post("/sessions/{session_id}/back")
async def go_back(
    session_id: uuid.UUID,
    sessions: SessionStore,
    user_id: OptionalUserId,
) -> DataResponse[NavigationSessionResponse]:
    """Return to the previous screen. No-op when there is no history."""
    session = _get_session(sessions, session_id, user_id)
    session.store.go_back()
    return _state(session)


@router.post("/sessions/{session_id}/reset")
async def reset(
    session_id: uuid.UUID,
    sessions: SessionStore,
    user_id: OptionalUserId,
) -> DataResponse[NavigationSessionResponse]:
    """Clear collected data and return to the entry screen (logout)."""
    session = _get_session(sessions, session_id, user_id)
    session.store.reset()
    return _state(session)


@router.post("/sessions/{session_id}/resume")
async def resume(
    session_id: uuid.UUID,
    body: ResumeRequest,
    sessions: SessionStore,
    user_id: OptionalUserId,
) -> DataResponse[NavigationSessionResponse]:
    """Jump to a screen recorded by a mirror, on explicit user request."""
    session = _get_session(sessions, session_id, user_id)
    session.store.resume(body.screen)
    return _state(session)


@router.get("/sessions/{session_id}/diagnostics")
async def get_diagnostics(
    session_id: uuid.UUID,
    sessions: SessionStore,
    user_id: OptionalUserId,
) -> DataResponse[NavigationDiagnosticsResponse]:
    """Report the session's change log and any stale mirrors."""
    session = _get_session(sessions, session_id, user_id)
    stale = audit_mirrors(session.store, session.mirrors)
    return DataResponse(
        data=NavigationDiagnosticsResponse.build(session.change_log, stale)
    )


@router.delete("/sessions/{session_id}", status_code=204)
async def close_session(
    session_id: uuid.UUID,
    sessions: SessionStore,
    user_id: OptionalUserId,
) -> Response:
    """Close a session, cancelling any pending auto-advance."""
    _get_session(sessions, session_id, user_id)
    sessions.close(session_id)
    logger.info("navigation_session_closed", session_id=str(session_id))
    return Response(status_code=204)
