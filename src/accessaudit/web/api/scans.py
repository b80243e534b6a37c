"""REST API for scans."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from accessaudit.errors import InvalidInputError, NotFoundError
from accessaudit.report import scan_to_dict

router = APIRouter(tags=["scans"])


class ScanCreate(BaseModel):
    target: str
    level: str | None = None


@router.post("/scans", status_code=202)
async def start_scan(body: ScanCreate, request: Request):
    manager = request.app.state.scan_manager
    try:
        level = body.level or request.app.state.config.default_level
        scan = await manager.start_scan(body.target, level)
    except InvalidInputError as e:
        return JSONResponse(status_code=400, content={"detail": str(e)})
    return {"id": scan.id, "status": scan.status.value}


@router.get("/scans")
async def list_scans(request: Request, limit: int = 50, offset: int = 0):
    scans = await request.app.state.scan_manager.list_scans(limit=limit, offset=offset)
    return [scan_to_dict(s, include_findings=False) for s in scans]


@router.get("/scans/{scan_id}")
async def get_scan(scan_id: str, request: Request):
    try:
        scan = await request.app.state.scan_manager.get_scan(scan_id)
    except NotFoundError:
        return JSONResponse(
            status_code=404,
            content={"detail": "Scan not found"},
        )
    return scan_to_dict(scan)
