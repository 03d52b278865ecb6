"""Domain package exports for query value objects and classification."""

from .models import (
    Failure,
    OperationKind,
    OperationOutcome,
    QueryClassification,
    RawQuery,
    RejectionReason,
    Success,
    TabularPayload,
    ViewPhase,
    ViewState,
    as_tabular,
)
from .query import QueryValidator, classify, is_allowed, is_non_empty

__all__ = [
    "Failure",
    "OperationKind",
    "OperationOutcome",
    "QueryClassification",
    "QueryValidator",
    "RawQuery",
    "RejectionReason",
    "Success",
    "TabularPayload",
    "ViewPhase",
    "ViewState",
    "as_tabular",
    "classify",
    "is_allowed",
    "is_non_empty",
]
