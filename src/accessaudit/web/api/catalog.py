"""REST API for the success criteria catalog."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from accessaudit.audit.mapper import has_automated_signal
from accessaudit.catalog.models import ConformanceLevel
from accessaudit.errors import InvalidInputError

router = APIRouter(tags=["catalog"])


@router.get("/catalog")
async def list_criteria(request: Request, level: str = "AAA"):
    try:
        conformance = ConformanceLevel.parse(level)
    except InvalidInputError as e:
        return JSONResponse(status_code=400, content={"detail": str(e)})

    catalog = request.app.state.audit_manager.catalog
    return {
        "version": catalog.version,
        "level": conformance.value,
        "criteria": [
            {
                "id": c.id,
                "title": c.title,
                "level": c.level.value,
                "guideline": c.guideline,
                "automated_signal": has_automated_signal(c.id),
            }
            for c in catalog.for_level(conformance)
        ],
    }
