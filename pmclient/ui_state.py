"""UI preferences passed explicitly to the views that read them."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace

Listener = Callable[["UIPreferences"], None]


@dataclass(frozen=True)
class UIPreferences:
    is_dark_mode: bool = False
    is_sidebar_collapsed: bool = False


@dataclass
class UIState:
    """Holds UI preferences and tells listeners when they change.

    Create one per app shell and hand it to views; there is no module-level
    instance.
    """

    preferences: UIPreferences = field(default_factory=UIPreferences)
    _listeners: list[Listener] = field(default_factory=list, repr=False)

    @property
    def is_dark_mode(self) -> bool:
        return self.preferences.is_dark_mode

    @property
    def is_sidebar_collapsed(self) -> bool:
        return self.preferences.is_sidebar_collapsed

    def set_dark_mode(self, enabled: bool) -> None:
        self._update(is_dark_mode=enabled)

    def toggle_dark_mode(self) -> None:
        self.set_dark_mode(not self.is_dark_mode)

    def set_sidebar_collapsed(self, collapsed: bool) -> None:
        self._update(is_sidebar_collapsed=collapsed)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    def _update(self, **changes: bool) -> None:
        updated = replace(self.preferences, **changes)
        if updated == self.preferences:
            return
        self.preferences = updated
        for listener in list(self._listeners):
            listener(updated)
