"""Plain-data export of scans and audit sessions.

These dicts are the stable shape handed to the CLI ``--json`` output, the
web API, and any document renderer built on top.
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from accessaudit.audit.models import AuditSession, CriterionEvaluation, EvidenceItem
from accessaudit.scanner.models import Severity
from accessaudit.scans.models import Scan


def severity_counts(scan: Scan) -> dict[str, int]:
    counts = Counter(f.severity for f in scan.findings)
    return {s.value: counts.get(s, 0) for s in Severity}


def scan_to_dict(scan: Scan, include_findings: bool = True) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": scan.id,
        "target": scan.target,
        "level": scan.level.value,
        "status": scan.status.value,
        "created_at": scan.created_at,
        "error_message": scan.error_message,
        "metrics": scan.metrics.to_dict() if scan.metrics else None,
        "finding_count": len(scan.findings),
        "severity_counts": severity_counts(scan),
    }
    if include_findings:
        data["findings"] = [f.to_dict() for f in scan.findings]
    return data


def evidence_to_dict(item: EvidenceItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "evaluation_id": item.evaluation_id,
        "filename": item.filename,
        "original_name": item.original_name,
        "description": item.description,
        "uploaded_at": item.uploaded_at,
    }


def evaluation_to_dict(evaluation: CriterionEvaluation) -> dict[str, Any]:
    return {
        "id": evaluation.id,
        "criterion_id": evaluation.criterion_id,
        "title": evaluation.title,
        "level": evaluation.level.value,
        "status": evaluation.status.value,
        "notes": evaluation.notes,
        "automated_signal": evaluation.automated_signal,
        "updated_at": evaluation.updated_at,
        "evidence": [evidence_to_dict(e) for e in evaluation.evidence],
    }


def session_to_dict(session: AuditSession) -> dict[str, Any]:
    return {
        "id": session.id,
        "scan_id": session.scan_id,
        "auditor_name": session.auditor_name,
        "status": session.status.value,
        "created_at": session.created_at,
        "completed_at": session.completed_at,
        "summary": session.summary(),
        "evaluations": [evaluation_to_dict(e) for e in session.evaluations],
    }
