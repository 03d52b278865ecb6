from __future__ import annotations

"""Domain value objects shared across adapters, use-cases, and view models."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

RawQuery = str


class QueryClassification(Enum):
    """Statement type derived from the leading keyword of a raw query."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    REJECTED = "REJECTED"


class OperationKind(Enum):
    """Display label of the remote operation that produced an outcome."""

    QUERY = "query"
    INSERT = "insert"


class RejectionReason(Enum):
    """Pre-flight reasons a query never reaches the network."""

    EMPTY = "empty"
    DISALLOWED = "disallowed"


@dataclass(frozen=True)
class TabularPayload:
    """Uniform-keyed row sequence eligible for table rendering."""

    columns: Tuple[str, ...]
    """Keys of the first row, in first-seen order."""

    rows: Tuple[Mapping[str, Any], ...]
    """Row objects in response order; each shares the key set of the first row."""


@dataclass(frozen=True)
class Success:
    """Remote operation completed with a 2xx response and a decodable body."""

    payload: Any
    operation: OperationKind


@dataclass(frozen=True)
class Failure:
    """Remote operation failed; ``message`` is ready for display."""

    message: str


OperationOutcome = Union[Success, Failure]


def as_tabular(payload: Any) -> Optional[TabularPayload]:
    """Return the tabular view of ``payload`` or ``None`` when it is opaque.

    Only the ``rows`` sequence of a mapping payload is considered; a bare list
    is opaque. Empty sequences, non-mapping rows, and rows whose key set
    differs from the first row's are all treated as opaque.
    """
    if not isinstance(payload, Mapping):
        return None
    rows: Any = payload.get("rows")
    if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        return None
    if not rows:
        return None
    first = rows[0]
    if not isinstance(first, Mapping):
        return None
    columns = tuple(str(key) for key in first.keys())
    expected = set(first.keys())
    for row in rows[1:]:
        if not isinstance(row, Mapping) or set(row.keys()) != expected:
            return None
    return TabularPayload(columns=columns, rows=tuple(rows))


class ViewPhase(Enum):
    IDLE = "idle"
    LOADING = "loading"
    RENDERED = "rendered"


@dataclass(frozen=True)
class ViewState:
    """Snapshot of what the shared render target currently shows.

    Instances are never mutated; the dispatcher swaps in a new one on every
    transition.
    """

    phase: ViewPhase = ViewPhase.IDLE
    outcome: Optional[OperationOutcome] = None
    rejection: Optional[RejectionReason] = None

    @classmethod
    def idle(cls) -> "ViewState":
        return cls()

    @classmethod
    def loading(cls) -> "ViewState":
        return cls(phase=ViewPhase.LOADING)

    @classmethod
    def rendered(cls, outcome: OperationOutcome) -> "ViewState":
        return cls(phase=ViewPhase.RENDERED, outcome=outcome)

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "ViewState":
        return cls(phase=ViewPhase.RENDERED, rejection=reason)


__all__ = [
    "Failure",
    "OperationKind",
    "OperationOutcome",
    "QueryClassification",
    "RawQuery",
    "RejectionReason",
    "Success",
    "TabularPayload",
    "ViewPhase",
    "ViewState",
    "as_tabular",
]
