"""Caller-visible generation diagnostics."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    ADVISORY = "advisory"
    WARNING = "warning"
    ERROR = "error"


_LOG_LEVELS = {
    Severity.ADVISORY: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class Diagnostic:
    """One non-fatal finding, identified by the fully-qualified name it concerns."""

    severity: Severity
    subject: str
    message: str

    def __str__(self) -> str:
        return f"{self.severity.value}: {self.subject}: {self.message}"


class DiagnosticLog:
    """Ordered diagnostic collector that mirrors entries to logging."""

    def __init__(self) -> None:
        self._entries: list[Diagnostic] = []

    def report(self, severity: Severity, subject: str, message: str) -> None:
        diagnostic = Diagnostic(severity=severity, subject=subject, message=message)
        logger.log(_LOG_LEVELS[severity], "%s", diagnostic)
        if diagnostic not in self._entries:
            self._entries.append(diagnostic)

    @property
    def entries(self) -> tuple[Diagnostic, ...]:
        return tuple(self._entries)

    @property
    def has_errors(self) -> bool:
        return any(entry.severity == Severity.ERROR for entry in self._entries)
