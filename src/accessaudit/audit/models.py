"""Audit data models — sessions, per-criterion evaluations, and evidence."""

from __future__ import annotations

import enum
import time
import uuid
from dataclasses import dataclass, field

from accessaudit.catalog.models import ConformanceLevel
from accessaudit.errors import InvalidInputError


class AuditStatus(enum.Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class EvaluationStatus(enum.Enum):
    """Auditor judgement for one criterion. Any state may follow any other."""

    NOT_EVALUATED = "not_evaluated"
    PASSED = "passed"
    FAILED = "failed"
    NOT_APPLICABLE = "not_applicable"

    @classmethod
    def parse(cls, value: str | EvaluationStatus) -> EvaluationStatus:
        if isinstance(value, EvaluationStatus):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise InvalidInputError(
                f"Invalid evaluation status {value!r}; expected one of {allowed}"
            ) from None


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass
class EvidenceItem:
    """An artifact (usually a screenshot) attached to a criterion evaluation."""

    evaluation_id: str
    filename: str
    original_name: str
    description: str | None = None
    uploaded_at: float = field(default_factory=time.time)
    id: str = field(default_factory=_new_id)


@dataclass
class CriterionEvaluation:
    """One checklist row: the auditor's current judgement of one criterion."""

    session_id: str
    criterion_id: str
    title: str
    level: ConformanceLevel
    status: EvaluationStatus = EvaluationStatus.NOT_EVALUATED
    notes: str = ""
    # False when no rule maps to the criterion: manual review only
    automated_signal: bool = True
    updated_at: float = field(default_factory=time.time)
    id: str = field(default_factory=_new_id)
    evidence: list[EvidenceItem] = field(default_factory=list)


@dataclass
class AuditSession:
    """One human-driven checklist pass over a completed scan."""

    scan_id: str
    auditor_name: str
    status: AuditStatus = AuditStatus.IN_PROGRESS
    created_at: float = field(default_factory=time.time)
    completed_at: float | None = None
    id: str = field(default_factory=_new_id)
    evaluations: list[CriterionEvaluation] = field(default_factory=list)

    def summary(self) -> dict[str, int]:
        """Number of evaluations in each status."""
        counts = {s.value: 0 for s in EvaluationStatus}
        for evaluation in self.evaluations:
            counts[evaluation.status.value] += 1
        return counts
