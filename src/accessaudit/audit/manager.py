"""Audit manager — checklist sessions seeded from a completed scan."""

from __future__ import annotations

import asyncio
import logging
import time

from accessaudit.audit.mapper import has_automated_signal, map_findings
from accessaudit.audit.models import (
    AuditSession,
    AuditStatus,
    CriterionEvaluation,
    EvaluationStatus,
    EvidenceItem,
)
from accessaudit.catalog.loader import load_catalog
from accessaudit.catalog.models import Catalog
from accessaudit.errors import InvalidInputError, NotFoundError, ScanNotReadyError
from accessaudit.scans.models import ScanStatus
from accessaudit.storage.base import AuditStore, ScanStore

logger = logging.getLogger(__name__)


class AuditManager:
    """Human override surface over automated scan results.

    The mapper only supplies the initial status of each evaluation. After
    that every status change comes from the auditor, and any status may
    follow any other.
    """

    def __init__(
        self,
        scans: ScanStore,
        audits: AuditStore,
        catalog: Catalog | None = None,
    ) -> None:
        self._scans = scans
        self._audits = audits
        self._catalog = catalog or load_catalog()
        self._start_lock = asyncio.Lock()

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    async def start_session(
        self, scan_id: str, auditor_name: str | None = None
    ) -> AuditSession:
        """Open the session for ``scan_id``, or return the one already open."""
        async with self._start_lock:
            scan = await self._scans.get(scan_id)
            if scan is None:
                raise NotFoundError("scan", scan_id)
            if scan.status is not ScanStatus.COMPLETED:
                raise ScanNotReadyError(
                    f"Scan {scan_id} is {scan.status.value}; "
                    "only completed scans can be audited"
                )

            existing = await self._audits.get_session_by_scan_id(scan_id)
            if existing is not None:
                logger.debug("Reusing audit session %s for scan %s", existing.id, scan_id)
                return await self._load(existing)

            session = AuditSession(
                scan_id=scan_id, auditor_name=(auditor_name or "").strip()
            )
            criteria = self._catalog.for_level(scan.level)
            seeds = map_findings(criteria, scan.findings)
            evaluations = [
                CriterionEvaluation(
                    session_id=session.id,
                    criterion_id=c.id,
                    title=c.title,
                    level=c.level,
                    status=seeds[c.id],
                    automated_signal=has_automated_signal(c.id),
                    updated_at=session.created_at,
                )
                for c in criteria
            ]
            await self._audits.create_session(session, evaluations)
            session.evaluations = evaluations

        failed = sum(1 for e in evaluations if e.status is EvaluationStatus.FAILED)
        logger.info(
            "Audit session %s started for scan %s: %d criteria, %d seeded failed",
            session.id,
            scan_id,
            len(evaluations),
            failed,
        )
        return session

    async def get_session(self, session_id: str) -> AuditSession:
        session = await self._audits.get_session(session_id)
        if session is None:
            raise NotFoundError("audit session", session_id)
        return await self._load(session)

    async def update_criterion(
        self,
        evaluation_id: str,
        status: EvaluationStatus | str | None = None,
        notes: str | None = None,
    ) -> CriterionEvaluation:
        """Set status and/or notes on one evaluation and bump ``updated_at``."""
        if status is None and notes is None:
            raise InvalidInputError("Provide a status, notes, or both")
        parsed = EvaluationStatus.parse(status) if status is not None else None

        evaluation = await self._audits.update_evaluation(
            evaluation_id, parsed, notes, time.time()
        )
        if evaluation is None:
            raise NotFoundError("criterion evaluation", evaluation_id)
        evaluation.evidence = await self._audits.list_evidence_by_evaluation(evaluation_id)
        logger.info(
            "Criterion %s in session %s set to %s",
            evaluation.criterion_id,
            evaluation.session_id,
            evaluation.status.value,
        )
        return evaluation

    async def attach_evidence(
        self,
        evaluation_id: str,
        filename: str,
        original_name: str | None = None,
        description: str | None = None,
    ) -> EvidenceItem:
        filename = (filename or "").strip()
        if not filename:
            raise InvalidInputError("Evidence filename must not be empty")
        if await self._audits.get_evaluation(evaluation_id) is None:
            raise NotFoundError("criterion evaluation", evaluation_id)

        item = EvidenceItem(
            evaluation_id=evaluation_id,
            filename=filename,
            original_name=original_name or filename,
            description=description,
        )
        await self._audits.create_evidence(item)
        logger.info("Evidence %s attached to evaluation %s", item.id, evaluation_id)
        return item

    async def list_evidence(self, evaluation_id: str) -> list[EvidenceItem]:
        if await self._audits.get_evaluation(evaluation_id) is None:
            raise NotFoundError("criterion evaluation", evaluation_id)
        return await self._audits.list_evidence_by_evaluation(evaluation_id)

    async def remove_evidence(self, evidence_id: str) -> None:
        if not await self._audits.delete_evidence(evidence_id):
            raise NotFoundError("evidence", evidence_id)
        logger.info("Evidence %s removed", evidence_id)

    async def complete_session(self, session_id: str) -> AuditSession:
        """Mark the session completed. Evaluations remain editable."""
        session = await self._audits.get_session(session_id)
        if session is None:
            raise NotFoundError("audit session", session_id)
        if session.status is not AuditStatus.COMPLETED:
            session.status = AuditStatus.COMPLETED
            session.completed_at = time.time()
            await self._audits.update_session(session)
            logger.info("Audit session %s completed", session_id)
        return await self._load(session)

    @staticmethod
    def summarize(session: AuditSession) -> dict[str, int]:
        return session.summary()

    async def _load(self, session: AuditSession) -> AuditSession:
        evaluations = await self._audits.list_evaluations_by_session(session.id)
        for evaluation in evaluations:
            evaluation.evidence = await self._audits.list_evidence_by_evaluation(
                evaluation.id
            )
        session.evaluations = evaluations
        return session
