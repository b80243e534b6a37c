"""REST API for audit sessions, criterion evaluations, and evidence."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from accessaudit.errors import InvalidInputError, NotFoundError, ScanNotReadyError
from accessaudit.report import evaluation_to_dict, evidence_to_dict, session_to_dict

router = APIRouter(tags=["audits"])


class AuditCreate(BaseModel):
    scan_id: str
    auditor_name: str = ""


class CriterionUpdate(BaseModel):
    status: str | None = None
    notes: str | None = None


class EvidenceCreate(BaseModel):
    filename: str
    original_name: str | None = None
    description: str | None = None


def _not_found(e: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(e)})


@router.post("/audits")
async def start_audit(body: AuditCreate, request: Request):
    manager = request.app.state.audit_manager
    try:
        session = await manager.start_session(body.scan_id, body.auditor_name)
    except NotFoundError as e:
        return _not_found(e)
    except ScanNotReadyError as e:
        return JSONResponse(status_code=409, content={"detail": str(e)})
    return session_to_dict(session)


@router.get("/audits/{session_id}")
async def get_audit(session_id: str, request: Request):
    try:
        session = await request.app.state.audit_manager.get_session(session_id)
    except NotFoundError as e:
        return _not_found(e)
    return session_to_dict(session)


@router.post("/audits/{session_id}/complete")
async def complete_audit(session_id: str, request: Request):
    try:
        session = await request.app.state.audit_manager.complete_session(session_id)
    except NotFoundError as e:
        return _not_found(e)
    return session_to_dict(session)


@router.patch("/audits/criteria/{evaluation_id}")
async def update_criterion(evaluation_id: str, body: CriterionUpdate, request: Request):
    try:
        evaluation = await request.app.state.audit_manager.update_criterion(
            evaluation_id, status=body.status, notes=body.notes
        )
    except InvalidInputError as e:
        return JSONResponse(status_code=400, content={"detail": str(e)})
    except NotFoundError as e:
        return _not_found(e)
    return evaluation_to_dict(evaluation)


@router.get("/audits/criteria/{evaluation_id}/evidence")
async def list_evidence(evaluation_id: str, request: Request):
    try:
        items = await request.app.state.audit_manager.list_evidence(evaluation_id)
    except NotFoundError as e:
        return _not_found(e)
    return [evidence_to_dict(i) for i in items]


@router.post("/audits/criteria/{evaluation_id}/evidence", status_code=201)
async def attach_evidence(evaluation_id: str, body: EvidenceCreate, request: Request):
    try:
        item = await request.app.state.audit_manager.attach_evidence(
            evaluation_id,
            body.filename,
            original_name=body.original_name,
            description=body.description,
        )
    except InvalidInputError as e:
        return JSONResponse(status_code=400, content={"detail": str(e)})
    except NotFoundError as e:
        return _not_found(e)
    return evidence_to_dict(item)


@router.delete("/audits/evidence/{evidence_id}")
async def remove_evidence(evidence_id: str, request: Request):
    try:
        await request.app.state.audit_manager.remove_evidence(evidence_id)
    except NotFoundError as e:
        return _not_found(e)
    return {"status": "deleted", "evidence_id": evidence_id}
