from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List

from sqlconsole.domain.models import Failure, OperationKind, OperationOutcome, Success
from sqlconsole.domain.ports import QueryPort

_INSERT_RE = re.compile(
    r"^\s*INSERT\s+INTO\s+\w+\s*\(([^)]*)\)\s*VALUES\s*(.+?);?\s*$",
    re.IGNORECASE | re.DOTALL,
)
_TUPLE_RE = re.compile(r"\(([^)]*)\)")


@dataclass
class QueryRestMock(QueryPort):
    """Offline substitute for ``QueryRestAdapter`` backed by one in-memory table.

    Understands just enough of ``INSERT INTO t (cols) VALUES (...), (...)`` to
    store rows; every SELECT returns all stored rows.
    """

    rows: List[Dict[str, Any]] = field(default_factory=list)

    # ---------- QueryPort ----------

    def execute_read(self, query: str) -> OperationOutcome:
        return Success(payload={"rows": [dict(row) for row in self.rows]}, operation=OperationKind.QUERY)

    def execute_write(self, query: str) -> OperationOutcome:
        match = _INSERT_RE.match(query or "")
        if not match:
            return Failure("Mock endpoint only understands INSERT INTO ... VALUES")
        columns = [col.strip() for col in match.group(1).split(",") if col.strip()]
        inserted = 0
        for values_text in _TUPLE_RE.findall(match.group(2)):
            values = [value.strip().strip("'\"") for value in values_text.split(",")]
            if len(values) != len(columns):
                return Failure(f"Column count mismatch in ({values_text})")
            row: Dict[str, Any] = {"id": len(self.rows) + 1}
            row.update(zip(columns, values))
            self.rows.append(row)
            inserted += 1
        return Success(
            payload={"message": "Insert successful", "affectedRows": inserted},
            operation=OperationKind.INSERT,
        )


__all__ = ["QueryRestMock"]
