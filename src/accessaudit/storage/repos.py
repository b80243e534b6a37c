"""Repository classes for async CRUD operations on SQLite."""

from __future__ import annotations

import json
import time
from collections.abc import Sequence

import aiosqlite

from accessaudit.audit.models import (
    AuditSession,
    AuditStatus,
    CriterionEvaluation,
    EvaluationStatus,
    EvidenceItem,
)
from accessaudit.catalog.models import ConformanceLevel
from accessaudit.scanner.models import Finding, ScanMetrics
from accessaudit.scans.models import Completed, Failed, Pending, Scan, ScanOutcome, ScanStatus


def _row_to_scan(row: aiosqlite.Row) -> Scan:
    status = ScanStatus(row["status"])
    outcome: ScanOutcome
    if status is ScanStatus.COMPLETED:
        outcome = Completed(
            findings=tuple(Finding.from_dict(f) for f in json.loads(row["findings"])),
            metrics=ScanMetrics.from_dict(json.loads(row["metrics"])),
        )
    elif status is ScanStatus.FAILED:
        outcome = Failed(error_message=row["error_message"] or "")
    else:
        outcome = Pending()
    return Scan(
        target=row["target"],
        level=ConformanceLevel(row["level"]),
        outcome=outcome,
        created_at=row["created_at"],
        id=row["id"],
    )


def _row_to_session(row: aiosqlite.Row) -> AuditSession:
    return AuditSession(
        scan_id=row["scan_id"],
        auditor_name=row["auditor_name"],
        status=AuditStatus(row["status"]),
        created_at=row["created_at"],
        completed_at=row["completed_at"],
        id=row["id"],
    )


def _row_to_evaluation(row: aiosqlite.Row) -> CriterionEvaluation:
    return CriterionEvaluation(
        session_id=row["session_id"],
        criterion_id=row["criterion_id"],
        title=row["title"],
        level=ConformanceLevel(row["level"]),
        status=EvaluationStatus(row["status"]),
        notes=row["notes"],
        automated_signal=bool(row["automated_signal"]),
        updated_at=row["updated_at"],
        id=row["id"],
    )


def _row_to_evidence(row: aiosqlite.Row) -> EvidenceItem:
    return EvidenceItem(
        evaluation_id=row["evaluation_id"],
        filename=row["filename"],
        original_name=row["original_name"],
        description=row["description"],
        uploaded_at=row["uploaded_at"],
        id=row["id"],
    )


class ScanRepo:
    """CRUD for scans. Findings and metrics are stored as JSON."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def create(self, scan: Scan) -> None:
        await self._db.execute(
            "INSERT INTO scans (id, target, level, status, created_at) "
            "VALUES (?, ?, ?, ?, ?)",
            (
                scan.id,
                scan.target,
                scan.level.value,
                scan.status.value,
                scan.created_at,
            ),
        )
        await self._db.commit()

    async def get(self, scan_id: str) -> Scan | None:
        cursor = await self._db.execute("SELECT * FROM scans WHERE id = ?", (scan_id,))
        row = await cursor.fetchone()
        return _row_to_scan(row) if row else None

    async def update_outcome(self, scan_id: str, outcome: ScanOutcome) -> bool:
        """Record a terminal outcome in a single statement.

        The ``status = 'pending'`` guard makes completed and failed scans
        immutable: a second write matches no row and returns False.
        """
        if isinstance(outcome, Completed):
            params = (
                ScanStatus.COMPLETED.value,
                json.dumps([f.to_dict() for f in outcome.findings]),
                json.dumps(outcome.metrics.to_dict()),
                None,
            )
        elif isinstance(outcome, Failed):
            params = (ScanStatus.FAILED.value, "[]", None, outcome.error_message)
        else:
            raise ValueError("A scan can only move to a terminal outcome")

        cursor = await self._db.execute(
            "UPDATE scans SET status = ?, findings = ?, metrics = ?, "
            "error_message = ?, finished_at = ? "
            "WHERE id = ? AND status = ?",
            (*params, time.time(), scan_id, ScanStatus.PENDING.value),
        )
        await self._db.commit()
        return cursor.rowcount == 1

    async def list_all(self, limit: int = 50, offset: int = 0) -> list[Scan]:
        cursor = await self._db.execute(
            "SELECT * FROM scans ORDER BY created_at DESC LIMIT ? OFFSET ?",
            (limit, offset),
        )
        return [_row_to_scan(row) async for row in cursor]


class AuditRepo:
    """CRUD for audit sessions, criterion evaluations, and evidence."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def create_session(
        self,
        session: AuditSession,
        evaluations: Sequence[CriterionEvaluation],
    ) -> None:
        await self._db.execute(
            "INSERT INTO audit_sessions "
            "(id, scan_id, auditor_name, status, created_at, completed_at) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (
                session.id,
                session.scan_id,
                session.auditor_name,
                session.status.value,
                session.created_at,
                session.completed_at,
            ),
        )
        await self._db.executemany(
            "INSERT INTO criterion_evaluations "
            "(id, session_id, criterion_id, title, level, status, notes, "
            "automated_signal, position, updated_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [
                (
                    e.id,
                    session.id,
                    e.criterion_id,
                    e.title,
                    e.level.value,
                    e.status.value,
                    e.notes,
                    int(e.automated_signal),
                    position,
                    e.updated_at,
                )
                for position, e in enumerate(evaluations)
            ],
        )
        await self._db.commit()

    async def get_session(self, session_id: str) -> AuditSession | None:
        cursor = await self._db.execute(
            "SELECT * FROM audit_sessions WHERE id = ?", (session_id,)
        )
        row = await cursor.fetchone()
        return _row_to_session(row) if row else None

    async def get_session_by_scan_id(self, scan_id: str) -> AuditSession | None:
        cursor = await self._db.execute(
            "SELECT * FROM audit_sessions WHERE scan_id = ?", (scan_id,)
        )
        row = await cursor.fetchone()
        return _row_to_session(row) if row else None

    async def update_session(self, session: AuditSession) -> None:
        await self._db.execute(
            "UPDATE audit_sessions SET auditor_name = ?, status = ?, completed_at = ? "
            "WHERE id = ?",
            (
                session.auditor_name,
                session.status.value,
                session.completed_at,
                session.id,
            ),
        )
        await self._db.commit()

    async def get_evaluation(self, evaluation_id: str) -> CriterionEvaluation | None:
        cursor = await self._db.execute(
            "SELECT * FROM criterion_evaluations WHERE id = ?", (evaluation_id,)
        )
        row = await cursor.fetchone()
        return _row_to_evaluation(row) if row else None

    async def list_evaluations_by_session(
        self, session_id: str
    ) -> list[CriterionEvaluation]:
        cursor = await self._db.execute(
            "SELECT * FROM criterion_evaluations WHERE session_id = ? ORDER BY position",
            (session_id,),
        )
        return [_row_to_evaluation(row) async for row in cursor]

    async def update_evaluation(
        self,
        evaluation_id: str,
        status: EvaluationStatus | None,
        notes: str | None,
        updated_at: float,
    ) -> CriterionEvaluation | None:
        """Apply a partial update in one statement; last write wins."""
        cursor = await self._db.execute(
            "UPDATE criterion_evaluations SET "
            "status = COALESCE(?, status), notes = COALESCE(?, notes), updated_at = ? "
            "WHERE id = ?",
            (
                status.value if status is not None else None,
                notes,
                updated_at,
                evaluation_id,
            ),
        )
        await self._db.commit()
        if cursor.rowcount == 0:
            return None
        return await self.get_evaluation(evaluation_id)

    async def create_evidence(self, item: EvidenceItem) -> None:
        await self._db.execute(
            "INSERT INTO evidence_items "
            "(id, evaluation_id, filename, original_name, description, uploaded_at) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (
                item.id,
                item.evaluation_id,
                item.filename,
                item.original_name,
                item.description,
                item.uploaded_at,
            ),
        )
        await self._db.commit()

    async def list_evidence_by_evaluation(self, evaluation_id: str) -> list[EvidenceItem]:
        cursor = await self._db.execute(
            "SELECT * FROM evidence_items WHERE evaluation_id = ? ORDER BY uploaded_at",
            (evaluation_id,),
        )
        return [_row_to_evidence(row) async for row in cursor]

    async def delete_evidence(self, evidence_id: str) -> bool:
        cursor = await self._db.execute(
            "DELETE FROM evidence_items WHERE id = ?", (evidence_id,)
        )
        await self._db.commit()
        return cursor.rowcount == 1
