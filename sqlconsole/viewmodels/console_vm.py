"""UI-side state holders that implement the dispatcher's collaborator ports.

Call context:
    ``sqlconsole/web_ui/main.py`` creates one instance of each per browser
    page and binds widgets to them; tests use them directly as fakes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class QueryInputVM:
    """Holds the textarea value (``QueryInputPort``)."""

    text: str = ""

    def read_query(self) -> str:
        return self.text


@dataclass
class ControlVM:
    """Enabled/busy flags of one trigger button (``ControlPort``).

    ``caption`` switches to ``busy_caption`` while busy, mirroring the
    "Executing..." / "Inserting..." button texts.
    """

    idle_caption: str
    busy_caption: str
    on_change: Optional[Callable[["ControlVM"], None]] = None

    _enabled: bool = field(default=True, init=False)
    _busy: bool = field(default=False, init=False)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def caption(self) -> str:
        return self.busy_caption if self._busy else self.idle_caption

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = bool(enabled)
        self._notify()

    def set_busy(self, busy: bool) -> None:
        self._busy = bool(busy)
        self._notify()

    def _notify(self) -> None:
        if self.on_change:
            self.on_change(self)


@dataclass
class ResultPanelVM:
    """Render target that keeps the latest view object (``RenderTarget``)."""

    on_render: Optional[Callable[[object], None]] = None
    current: Optional[object] = None

    def render(self, view: object) -> None:
        self.current = view
        if self.on_render:
            self.on_render(view)


__all__ = ["ControlVM", "QueryInputVM", "ResultPanelVM"]
