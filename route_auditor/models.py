"""
Finding records produced by the route audit engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Severity(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


SEVERITY_LABELS = {
    Severity.SUCCESS: "Pass",
    Severity.WARNING: "Warning",
    Severity.ERROR: "Error",
}

SEVERITY_RANK = {
    Severity.SUCCESS: 0,
    Severity.WARNING: 1,
    Severity.ERROR: 2,
}


@dataclass(slots=True)
class Locator:
    line: int | None = None
    column: int | None = None
    snippet: str | None = None

    @property
    def found(self) -> bool:
        return self.line is not None


@dataclass(slots=True)
class Finding:
    """One audit outcome.

    ``id`` is stable across runs so consumers can key UI strings on it.
    ``selector`` is set only when the finding was anchored on a node, and the
    location fields only when the node or query was found in the raw markup.
    """

    id: str
    severity: Severity
    message: str
    selector: str | None = None
    line: int | None = None
    column: int | None = None
    snippet: str | None = None
    recommendation: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "severity": self.severity.value,
            "message": self.message,
        }
        for key in ("selector", "line", "column", "snippet", "recommendation"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload
