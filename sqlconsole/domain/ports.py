from __future__ import annotations
from typing import Dict, Protocol

from .models import OperationOutcome, QueryClassification, RejectionReason


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class QueryPort(Protocol):
    """Read/write operations against the remote SQL endpoint.
    Implementations return outcomes and never raise.
    """

    def execute_read(self, query: str) -> OperationOutcome: ...
    def execute_write(self, query: str) -> OperationOutcome: ...


class ValidatorPort(Protocol):
    """Pure checks on raw query text."""

    def is_non_empty(self, text: str) -> bool: ...
    def classify(self, text: str) -> QueryClassification: ...
    def is_allowed(self, text: str) -> bool: ...


class PresenterPort(Protocol):
    """Maps outcomes to renderable view objects (see ``viewmodels.result_vm``)."""

    def present(self, outcome: OperationOutcome) -> object: ...
    def rejection(self, reason: RejectionReason) -> object: ...
    def loading(self) -> object: ...


# ---- Collaborator surface (UI side) ----
class QueryInputPort(Protocol):
    def read_query(self) -> str: ...


class ControlPort(Protocol):
    """A trigger control (button) the dispatcher disables while busy."""

    @property
    def enabled(self) -> bool: ...
    def set_enabled(self, enabled: bool) -> None: ...
    def set_busy(self, busy: bool) -> None: ...


class RenderTarget(Protocol):
    """Sink that paints one view object, replacing whatever it showed before."""

    def render(self, view: object) -> None: ...


class StoragePort(Protocol):
    """Persistence for user preferences."""

    def save_user_prefs(self, prefs: Dict) -> None: ...
    def load_user_prefs(self) -> Dict: ...
