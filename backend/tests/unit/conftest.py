"""Shared fixtures for navigation unit tests.

``registry`` / ``store`` use the real screen bindings. ``open_registry``
binds every screen to a payload model that accepts any fields, for tests
that exercise merge and history semantics independent of screen payloads.
"""

import pytest
from pydantic import ConfigDict

from app.navigation.payloads import ScreenPayload
from app.navigation.registry import (
    ScreenBinding,
    ScreenName,
    ViewRegistry,
    build_default_registry,
)
from app.navigation.store import NavigationChange, NavigationStore


class OpenPayload(ScreenPayload):
    """Accepts any completion fields."""

    model_config = ConfigDict(extra="allow")


def make_open_registry() -> ViewRegistry:
    return ViewRegistry(
        [
            ScreenBinding(
                screen,
                component=screen.name.title().replace("_", ""),
                payload_model=OpenPayload,
                reads=frozenset({"role", "full_name"}),
            )
            for screen in ScreenName
        ]
    )


class Recorder:
    """Listener that keeps every change it receives."""

    def __init__(self) -> None:
        self.changes: list[NavigationChange] = []

    def __call__(self, change: NavigationChange) -> None:
        self.changes.append(change)


@pytest.fixture
def registry() -> ViewRegistry:
    return build_default_registry()


@pytest.fixture
def store(registry: ViewRegistry) -> NavigationStore:
    """Store on the default registry, starting at login-selection."""
    return NavigationStore(registry)


@pytest.fixture
def open_registry() -> ViewRegistry:
    return make_open_registry()


@pytest.fixture
def open_store(open_registry: ViewRegistry) -> NavigationStore:
    return NavigationStore(open_registry)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
