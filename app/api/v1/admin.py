import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status

from app.api.dependencies import get_record_store, get_session_store
from app.core.config import get_settings
from app.services.storage import RecordStore, SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")


def require_admin_token(
    x_admin_token: Optional[str] = Header(None),
    token: Optional[str] = Query(None),
):
    """Valida el token de administración (cabecera o parámetro)."""
    expected = get_settings().ADMIN_TOKEN
    provided = x_admin_token or token

    # compare_digest solo acepta str ASCII; en bytes admite cualquier token
    if not expected or not provided or not secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("[ADMIN] Acceso no autorizado")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


@router.get("/appointments", dependencies=[Depends(require_admin_token)])
@router.get("/citas", dependencies=[Depends(require_admin_token)])
async def list_appointments(records: RecordStore = Depends(get_record_store)):
    appointments = await records.list_appointments()
    return {"appointments": [appointment.to_document() for appointment in appointments]}


@router.get("/reports", dependencies=[Depends(require_admin_token)])
async def list_reports(records: RecordStore = Depends(get_record_store)):
    reports = await records.list_reports()
    return {"reports": [report.to_document() for report in reports]}


@router.get("/db", dependencies=[Depends(require_admin_token)])
async def dump_db(
    sessions: SessionStore = Depends(get_session_store),
    records: RecordStore = Depends(get_record_store),
):
    """Volcado completo para diagnóstico."""
    return {
        "sessions": await sessions.snapshot(),
        "appointments": [a.to_document() for a in await records.list_appointments()],
        "reports": [r.to_document() for r in await records.list_reports()],
        "catalog": records.get_catalog().model_dump(),
    }
