"""Onboarding navigation core.

ScreenName / ViewRegistry define the closed set of screens; NavigationStore is
the single owner of the active screen and ApplicationState; mirrors,
diagnostics and timers are observers of the store.
"""

from app.navigation.diagnostics import ChangeLog, SequenceGap, audit_mirrors
from app.navigation.errors import (
    InvalidTransitionError,
    MirrorReadFailure,
    NavigationError,
    ScreenPayloadError,
    StaleMirror,
    UnknownScreenError,
)
from app.navigation.mirrors import (
    HashFragmentMirror,
    JsonFileMirror,
    PersistenceMirror,
    StorageMirror,
    seed_initial_screen,
)
from app.navigation.registry import (
    ScreenBinding,
    ScreenName,
    ViewRegistry,
    build_default_registry,
)
from app.navigation.store import (
    NavigationChange,
    NavigationSnapshot,
    NavigationStore,
    ScreenContext,
    Transition,
)
from app.navigation.timers import AutoAdvanceTimer

__all__ = [
    "AutoAdvanceTimer",
    "ChangeLog",
    "HashFragmentMirror",
    "InvalidTransitionError",
    "JsonFileMirror",
    "MirrorReadFailure",
    "NavigationChange",
    "NavigationError",
    "NavigationSnapshot",
    "NavigationStore",
    "PersistenceMirror",
    "ScreenBinding",
    "ScreenContext",
    "ScreenName",
    "ScreenPayloadError",
    "SequenceGap",
    "StaleMirror",
    "StorageMirror",
    "Transition",
    "UnknownScreenError",
    "ViewRegistry",
    "audit_mirrors",
    "build_default_registry",
    "seed_initial_screen",
]
