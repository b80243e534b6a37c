"""Persistence protocols — what the scan and audit managers need from storage.

Every getter returns ``None`` for an unknown key and every delete returns
``False``; nothing raises for a missing record.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from accessaudit.audit.models import (
    AuditSession,
    CriterionEvaluation,
    EvaluationStatus,
    EvidenceItem,
)
from accessaudit.scans.models import Scan, ScanOutcome


class ScanStore(Protocol):
    async def create(self, scan: Scan) -> None: ...

    async def get(self, scan_id: str) -> Scan | None: ...

    async def update_outcome(self, scan_id: str, outcome: ScanOutcome) -> bool:
        """Write a terminal outcome. Only succeeds while the scan is pending."""
        ...

    async def list_all(self, limit: int = 50, offset: int = 0) -> list[Scan]: ...


class AuditStore(Protocol):
    async def create_session(
        self,
        session: AuditSession,
        evaluations: Sequence[CriterionEvaluation],
    ) -> None:
        """Create a session together with its checklist rows."""
        ...

    async def get_session(self, session_id: str) -> AuditSession | None: ...

    async def get_session_by_scan_id(self, scan_id: str) -> AuditSession | None: ...

    async def update_session(self, session: AuditSession) -> None: ...

    async def get_evaluation(self, evaluation_id: str) -> CriterionEvaluation | None: ...

    async def list_evaluations_by_session(
        self, session_id: str
    ) -> list[CriterionEvaluation]: ...

    async def update_evaluation(
        self,
        evaluation_id: str,
        status: EvaluationStatus | None,
        notes: str | None,
        updated_at: float,
    ) -> CriterionEvaluation | None: ...

    async def create_evidence(self, item: EvidenceItem) -> None: ...

    async def list_evidence_by_evaluation(self, evaluation_id: str) -> list[EvidenceItem]: ...

    async def delete_evidence(self, evidence_id: str) -> bool: ...
