"""View registry: the closed set of onboarding screens.

Each screen is bound to the component that renders it, the payload model it
produces on completion, the ApplicationState fields it reads on entry, and
(optionally) the route its completion follows.

Flow (default bindings):

    splash → login-selection ─┬→ login → candidate-page | company-dashboard
                              └→ purpose-selection → basic-registration
    basic-registration ─┬→ candidate-registration → questionnaire-method-selection
                        └→ job-builder → candidate-recommendations
    questionnaire-method-selection → professional-assessment | ai-writing-chat
                                   | ai-conversation-chat
    assessment (manual) → dream-job-builder → candidate-page
    assessment (AI)     → candidate-page
"""

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from app.navigation.errors import ScreenPayloadError, UnknownScreenError
from app.navigation.payloads import (
    AssessmentPayload,
    BasicRegistrationPayload,
    CandidateRegistrationPayload,
    DreamJobPayload,
    EmptyPayload,
    JobBuilderPayload,
    LoginPayload,
    QuestionnaireMethodPayload,
    RoleSelectionPayload,
    SalaryBenchmarkingPayload,
    ScreenPayload,
)

logger = logging.getLogger(__name__)


class ScreenName(str, Enum):
    """Navigable screens. Values are the wire names used by the client."""

    SPLASH = "splash"
    LOGIN_SELECTION = "login-selection"
    LOGIN = "login"
    PROFILE_SELECTION = "profile-selection"
    PURPOSE_SELECTION = "purpose-selection"
    BASIC_REGISTRATION = "basic-registration"
    CANDIDATE_REGISTRATION = "candidate-registration"
    QUESTIONNAIRE_METHOD_SELECTION = "questionnaire-method-selection"
    PROFESSIONAL_ASSESSMENT = "professional-assessment"
    AI_WRITING_CHAT = "ai-writing-chat"
    AI_CONVERSATION_CHAT = "ai-conversation-chat"
    DREAM_JOB_BUILDER = "dream-job-builder"
    CANDIDATE_PAGE = "candidate-page"
    JOB_BUILDER = "job-builder"
    CANDIDATE_RECOMMENDATIONS = "candidate-recommendations"
    MATCHING_PAGE = "matching-page"
    COMPANY_DASHBOARD = "company-dashboard"
    CANDIDATE_FEEDBACK = "candidate-feedback"
    SALARY_BENCHMARKING = "salary-benchmarking"


Route = Callable[[Mapping[str, Any]], ScreenName]
"""Chooses the next screen from the merged ApplicationState."""


@dataclass(frozen=True)
class ScreenBinding:
    """Everything the navigation layer knows about one screen.

    Attributes:
        screen: The screen this binding describes.
        component: Name of the client component that renders the screen.
        payload_model: Model the screen's completion data must satisfy.
        reads: ApplicationState fields exposed to the screen on entry.
        route: Next-screen selector for completion, None if the screen has
            no single forward path (the client must name the target).
    """

    screen: ScreenName
    component: str
    payload_model: type[ScreenPayload] = EmptyPayload
    reads: frozenset[str] = frozenset()
    route: Route | None = None


class ViewRegistry:
    """Closed mapping from ScreenName to ScreenBinding.

    Args:
        bindings: One binding per registered screen.
        entry_screen: Screen a fresh or reset session starts on.
        default_screen: Fail-closed fallback for unrecognized names.

    Raises:
        ValueError: If a screen is bound twice, or entry/default screens
            are not bound.
    """

    def __init__(
        self,
        bindings: Iterable[ScreenBinding],
        *,
        entry_screen: ScreenName = ScreenName.LOGIN_SELECTION,
        default_screen: ScreenName = ScreenName.LOGIN_SELECTION,
    ) -> None:
        self._bindings: dict[ScreenName, ScreenBinding] = {}
        for binding in bindings:
            if binding.screen in self._bindings:
                msg = f"Screen '{binding.screen.value}' is bound more than once"
                raise ValueError(msg)
            self._bindings[binding.screen] = binding

        for screen in (entry_screen, default_screen):
            if screen not in self._bindings:
                msg = f"Screen '{screen.value}' must be bound in the registry"
                raise ValueError(msg)

        self.entry_screen = entry_screen
        self.default_screen = default_screen

    def __contains__(self, screen: object) -> bool:
        return self.resolve(screen) is not None

    def __iter__(self) -> Iterator[ScreenBinding]:
        return iter(self._bindings.values())

    def __len__(self) -> int:
        return len(self._bindings)

    def _lookup(self, screen: object) -> ScreenName | None:
        if isinstance(screen, ScreenName):
            name = screen
        else:
            try:
                name = ScreenName(screen)
            except ValueError:
                return None
        return name if name in self._bindings else None

    def resolve(self, screen: object) -> ScreenBinding | None:
        """Look up a binding. Returns None for unregistered names."""
        name = self._lookup(screen)
        return self._bindings[name] if name is not None else None

    def resolve_or_default(self, screen: object) -> ScreenBinding:
        """Look up a binding, falling back to the default screen.

        Never raises. An unrecognized name is logged and the default
        screen's binding is returned instead.
        """
        binding = self.resolve(screen)
        if binding is None:
            logger.warning(
                "Unknown screen %r, rendering default screen %s",
                screen,
                self.default_screen.value,
            )
            return self._bindings[self.default_screen]
        return binding

    def coerce(self, screen: object) -> ScreenName:
        """Convert a wire value to a registered ScreenName.

        Raises:
            UnknownScreenError: If the value is not a registered screen.
        """
        name = self._lookup(screen)
        if name is None:
            raise UnknownScreenError(screen)
        return name

    def validate_payload(
        self, screen: ScreenName, data: Mapping[str, Any] | None
    ) -> dict[str, Any]:
        """Validate completion data against the screen's payload model.

        Args:
            screen: Screen whose completion produced the data.
            data: Raw completion data. None is treated as empty.

        Returns:
            ApplicationState fields contributed by the payload.

        Raises:
            UnknownScreenError: If the screen is not registered.
            ScreenPayloadError: If the data does not validate.
        """
        binding = self.resolve(screen)
        if binding is None:
            raise UnknownScreenError(screen)
        try:
            payload = binding.payload_model.model_validate(dict(data or {}))
        except ValidationError as exc:
            raise ScreenPayloadError(
                binding.screen.value,
                [
                    {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
                    for e in exc.errors()
                ],
            ) from exc
        return payload.to_state_fields()


# =============================================================================
# Default routes
# =============================================================================


def _route_by_role(state: Mapping[str, Any]) -> ScreenName:
    if state.get("role") == "company":
        return ScreenName.JOB_BUILDER
    return ScreenName.CANDIDATE_REGISTRATION


def _route_by_user_type(state: Mapping[str, Any]) -> ScreenName:
    if state.get("user_type") == "company":
        return ScreenName.JOB_BUILDER
    return ScreenName.CANDIDATE_REGISTRATION


def _route_after_login(state: Mapping[str, Any]) -> ScreenName:
    if state.get("profile_type") == "company":
        return ScreenName.COMPANY_DASHBOARD
    return ScreenName.CANDIDATE_PAGE


_METHOD_SCREENS: dict[str, ScreenName] = {
    "manual": ScreenName.PROFESSIONAL_ASSESSMENT,
    "ai-writing": ScreenName.AI_WRITING_CHAT,
    "ai-conversation": ScreenName.AI_CONVERSATION_CHAT,
}


def _route_by_method(state: Mapping[str, Any]) -> ScreenName:
    return _METHOD_SCREENS.get(
        str(state.get("questionnaire_method")), ScreenName.PROFESSIONAL_ASSESSMENT
    )


def _route_after_assessment(state: Mapping[str, Any]) -> ScreenName:
    # AI-assisted methods already collected the dream job in conversation
    if state.get("questionnaire_method") == "manual":
        return ScreenName.DREAM_JOB_BUILDER
    return ScreenName.CANDIDATE_PAGE


def _to(screen: ScreenName) -> Route:
    return lambda _state: screen


_CANDIDATE_PROFILE_FIELDS = frozenset(
    {
        "full_name",
        "email",
        "mentor",
        "questionnaire_method",
        "professional_profile",
        "personality_profile",
        "dream_job",
        "salary_data",
    }
)

DEFAULT_BINDINGS: tuple[ScreenBinding, ...] = (
    ScreenBinding(
        ScreenName.SPLASH,
        "SplashScreen",
        route=_to(ScreenName.LOGIN_SELECTION),
    ),
    ScreenBinding(ScreenName.LOGIN_SELECTION, "LoginSelection"),
    ScreenBinding(
        ScreenName.LOGIN,
        "Login",
        payload_model=LoginPayload,
        route=_route_after_login,
    ),
    ScreenBinding(
        ScreenName.PROFILE_SELECTION,
        "ProfileSelection",
        payload_model=RoleSelectionPayload,
        route=_route_by_role,
    ),
    ScreenBinding(
        ScreenName.PURPOSE_SELECTION,
        "PurposeSelection",
        payload_model=RoleSelectionPayload,
        route=_to(ScreenName.BASIC_REGISTRATION),
    ),
    ScreenBinding(
        ScreenName.BASIC_REGISTRATION,
        "BasicRegistration",
        payload_model=BasicRegistrationPayload,
        reads=frozenset({"role"}),
        route=_route_by_user_type,
    ),
    ScreenBinding(
        ScreenName.CANDIDATE_REGISTRATION,
        "CandidateAvatarSelection",
        payload_model=CandidateRegistrationPayload,
        reads=frozenset({"role", "email"}),
        route=_to(ScreenName.QUESTIONNAIRE_METHOD_SELECTION),
    ),
    ScreenBinding(
        ScreenName.QUESTIONNAIRE_METHOD_SELECTION,
        "QuestionnaireMethodSelection",
        payload_model=QuestionnaireMethodPayload,
        reads=frozenset({"mentor"}),
        route=_route_by_method,
    ),
    ScreenBinding(
        ScreenName.PROFESSIONAL_ASSESSMENT,
        "ProfessionalAssessment",
        payload_model=AssessmentPayload,
        reads=frozenset({"mentor", "questionnaire_method"}),
        route=_route_after_assessment,
    ),
    ScreenBinding(
        ScreenName.AI_WRITING_CHAT,
        "AIWritingChat",
        payload_model=AssessmentPayload,
        reads=frozenset({"mentor", "questionnaire_method"}),
        route=_route_after_assessment,
    ),
    ScreenBinding(
        ScreenName.AI_CONVERSATION_CHAT,
        "AIConversationChat",
        payload_model=AssessmentPayload,
        reads=frozenset({"mentor", "questionnaire_method"}),
        route=_route_after_assessment,
    ),
    ScreenBinding(
        ScreenName.DREAM_JOB_BUILDER,
        "DreamJobBuilder",
        payload_model=DreamJobPayload,
        reads=frozenset({"role", "full_name", "professional_profile"}),
        route=_to(ScreenName.CANDIDATE_PAGE),
    ),
    ScreenBinding(
        ScreenName.CANDIDATE_PAGE,
        "CandidatePageWithLogout",
        reads=_CANDIDATE_PROFILE_FIELDS,
    ),
    ScreenBinding(
        ScreenName.JOB_BUILDER,
        "JobBuilder",
        payload_model=JobBuilderPayload,
        reads=frozenset({"role", "email"}),
        route=_to(ScreenName.CANDIDATE_RECOMMENDATIONS),
    ),
    ScreenBinding(
        ScreenName.CANDIDATE_RECOMMENDATIONS,
        "CandidateRecommendations",
        reads=frozenset({"job"}),
    ),
    ScreenBinding(ScreenName.MATCHING_PAGE, "MatchingPage", reads=frozenset({"dream_job"})),
    ScreenBinding(
        ScreenName.COMPANY_DASHBOARD,
        "CompanyDashboard",
        reads=frozenset({"email", "full_name"}),
    ),
    ScreenBinding(
        ScreenName.CANDIDATE_FEEDBACK,
        "CandidateFeedback",
        reads=_CANDIDATE_PROFILE_FIELDS,
    ),
    ScreenBinding(
        ScreenName.SALARY_BENCHMARKING,
        "SalaryBenchmarking",
        payload_model=SalaryBenchmarkingPayload,
        reads=frozenset({"dream_job", "salary_data"}),
        route=_to(ScreenName.CANDIDATE_PAGE),
    ),
)


def build_default_registry(
    entry_screen: ScreenName | str = ScreenName.LOGIN_SELECTION,
) -> ViewRegistry:
    """Build the registry of all RAVYZ screens.

    Args:
        entry_screen: Screen fresh/reset sessions start on. Unknown values
            fall back to login-selection with a warning.

    Returns:
        ViewRegistry with the default bindings.
    """
    try:
        entry = ScreenName(entry_screen)
    except ValueError:
        logger.warning(
            "Configured entry screen %r is unknown, using %s",
            entry_screen,
            ScreenName.LOGIN_SELECTION.value,
        )
        entry = ScreenName.LOGIN_SELECTION
    return ViewRegistry(DEFAULT_BINDINGS, entry_screen=entry)
