"""Scan data models — a scan and its tagged outcome."""

from __future__ import annotations

import enum
import time
import uuid
from dataclasses import dataclass, field

from accessaudit.catalog.models import ConformanceLevel
from accessaudit.scanner.models import Finding, ScanMetrics


class ScanStatus(enum.Enum):
    """Lifecycle state of a scan. Completed and failed are terminal."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class Pending:
    pass


@dataclass(frozen=True)
class Completed:
    findings: tuple[Finding, ...]
    metrics: ScanMetrics


@dataclass(frozen=True)
class Failed:
    error_message: str


ScanOutcome = Pending | Completed | Failed

_STATUS_BY_OUTCOME = {
    Pending: ScanStatus.PENDING,
    Completed: ScanStatus.COMPLETED,
    Failed: ScanStatus.FAILED,
}


@dataclass
class Scan:
    """One automated assessment of one target."""

    target: str
    level: ConformanceLevel
    outcome: ScanOutcome = field(default_factory=Pending)
    created_at: float = field(default_factory=time.time)
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])

    @property
    def status(self) -> ScanStatus:
        return _STATUS_BY_OUTCOME[type(self.outcome)]

    @property
    def is_terminal(self) -> bool:
        return self.status is not ScanStatus.PENDING

    @property
    def findings(self) -> tuple[Finding, ...]:
        if isinstance(self.outcome, Completed):
            return self.outcome.findings
        return ()

    @property
    def metrics(self) -> ScanMetrics | None:
        if isinstance(self.outcome, Completed):
            return self.outcome.metrics
        return None

    @property
    def error_message(self) -> str | None:
        if isinstance(self.outcome, Failed):
            return self.outcome.error_message
        return None
