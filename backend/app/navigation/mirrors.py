"""Persistence mirrors: secondary copies of the current screen.

A mirror records the active ScreenName in some medium (URL fragment,
key-value storage, JSON file) so a session can be deep-linked or resumed.
Mirrors are strictly downstream of the Navigation Store:

- While attached, a mirror only writes what the store publishes.
- A mirror is read at most once, at session start, via seed_initial_screen().
  Any later use of a recorded value goes through NavigationStore.resume().

A mirror never changes the store on its own. Diagnostics may report that a
mirror disagrees with the store (StaleMirror), but nothing corrects either side.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Callable, MutableMapping
from datetime import UTC, datetime
from pathlib import Path
from urllib.parse import quote, unquote

from app.navigation.errors import MirrorReadFailure
from app.navigation.registry import ScreenName, ViewRegistry
from app.navigation.store import NavigationChange, NavigationStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "ravyz-state"


class PersistenceMirror(ABC):
    """Base class for screen mirrors.

    Subclasses implement write() and read(); attaching and detaching from a
    store is shared.
    """

    name: str = "mirror"

    def __init__(self) -> None:
        self._unsubscribe: Callable[[], None] | None = None

    @abstractmethod
    def write(self, screen: ScreenName) -> None:
        """Record ``screen`` in the mirror's medium."""

    @abstractmethod
    def read(self) -> str | None:
        """Return the raw recorded value, or None when nothing is recorded.

        Raises:
            MirrorReadFailure: The medium exists but cannot be interpreted.
        """

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    def attach(self, store: NavigationStore) -> None:
        """Start mirroring ``store``. Writes the current screen immediately."""
        self.detach()
        self.write(store.current_screen)
        self._unsubscribe = store.subscribe(self._on_change)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_change(self, change: NavigationChange) -> None:
        self.write(change.screen)


class HashFragmentMirror(PersistenceMirror):
    """URL fragment mirror (``#candidate-page``), used for deep links."""

    name = "hash"

    def __init__(self, fragment: str = "") -> None:
        super().__init__()
        self._fragment = ""
        self.fragment = fragment

    @property
    def fragment(self) -> str:
        """Fragment as it would appear in the address bar, including '#'."""
        return self._fragment

    @fragment.setter
    def fragment(self, value: str) -> None:
        value = value.strip()
        if value and not value.startswith("#"):
            value = f"#{value}"
        self._fragment = "" if value == "#" else value

    def write(self, screen: ScreenName) -> None:
        self._fragment = f"#{quote(screen.value)}"

    def read(self) -> str | None:
        if not self._fragment:
            return None
        return unquote(self._fragment[1:])


class StorageMirror(PersistenceMirror):
    """Key-value storage mirror (the browser's localStorage analogue).

    Args:
        storage: Backing mapping. A private dict is used when omitted.
        key: Storage key holding the screen name.
    """

    name = "storage"

    def __init__(
        self,
        storage: MutableMapping[str, str] | None = None,
        key: str = STORAGE_KEY,
    ) -> None:
        super().__init__()
        self.storage: MutableMapping[str, str] = {} if storage is None else storage
        self.key = key

    def write(self, screen: ScreenName) -> None:
        self.storage[self.key] = screen.value

    def read(self) -> str | None:
        value = self.storage.get(self.key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise MirrorReadFailure(self.name, f"non-string value under '{self.key}'")
        return value or None


class JsonFileMirror(PersistenceMirror):
    """Durable mirror writing ``{"screen": ..., "updated_at": ...}`` to disk.

    Writes go to a temporary sibling file first and are then renamed over the
    target, so readers never observe a half-written document.
    """

    name = "file"

    def __init__(self, path: str | os.PathLike[str]) -> None:
        super().__init__()
        self.path = Path(path)

    def write(self, screen: ScreenName) -> None:
        document = {
            "screen": screen.value,
            "updated_at": datetime.now(UTC).isoformat(),
        }
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(document), encoding="utf-8")
        tmp_path.replace(self.path)

    def read(self) -> str | None:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise MirrorReadFailure(self.name, str(exc)) from exc

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MirrorReadFailure(self.name, "corrupt JSON document") from exc

        if not isinstance(document, dict):
            raise MirrorReadFailure(self.name, "document is not an object")
        screen = document.get("screen")
        if screen is None:
            return None
        if not isinstance(screen, str):
            raise MirrorReadFailure(self.name, "'screen' is not a string")
        return screen


def seed_initial_screen(registry: ViewRegistry, mirror: PersistenceMirror) -> ScreenName:
    """Pick the session's first screen from a mirror, failing closed.

    Reads the mirror exactly once. A missing value yields the registry's
    default screen. A corrupt value or a name outside the registry is logged
    as a MirrorReadFailure and also yields the default screen. Never raises.

    Args:
        registry: Registry used to validate the recorded value.
        mirror: Mirror to read.

    Returns:
        A registered ScreenName.
    """
    try:
        raw = mirror.read()
    except MirrorReadFailure as exc:
        logger.warning("%s; starting at '%s'", exc.message, registry.default_screen.value)
        return registry.default_screen

    if raw is None:
        logger.info(
            "Mirror '%s' is empty; starting at '%s'",
            mirror.name,
            registry.default_screen.value,
        )
        return registry.default_screen

    binding = registry.resolve(raw)
    if binding is None:
        failure = MirrorReadFailure(mirror.name, f"unknown screen {raw!r}")
        logger.warning(
            "%s; starting at '%s'", failure.message, registry.default_screen.value
        )
        return registry.default_screen
    return binding.screen
