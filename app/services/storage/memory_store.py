import logging
from typing import Dict, List, Optional

from app.core.catalog import Catalog, default_catalog
from app.core.timezone_helper import TimezoneHelper
from app.models.records import Appointment, CaseReport
from app.models.session import Session
from .base import RecordStore, SessionStore

logger = logging.getLogger(__name__)


class InMemorySessionStore(SessionStore):
    """Sesiones en memoria del proceso; se pierden al reiniciar."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    async def get(self, user_id: str) -> Optional[Session]:
        session = self._sessions.get(user_id)
        return session.model_copy(deep=True) if session else None

    async def upsert(self, session: Session) -> None:
        session.updated_at = TimezoneHelper.now_iso()
        self._sessions[session.user_id] = session.model_copy(deep=True)

    async def delete(self, user_id: str) -> None:
        self._sessions.pop(user_id, None)

    async def snapshot(self) -> Dict[str, Dict]:
        return {user_id: s.model_dump() for user_id, s in self._sessions.items()}


class InMemoryRecordStore(RecordStore):

    def __init__(self, catalog: Optional[Catalog] = None):
        self._appointments: List[Appointment] = []
        self._reports: List[CaseReport] = []
        self._catalog = catalog or default_catalog()

    async def add_appointment(self, appointment: Appointment) -> None:
        self._appointments.append(appointment)
        logger.debug(f"[STORE] Cita {appointment.id} agregada en memoria")

    async def list_appointments(self) -> List[Appointment]:
        return list(self._appointments)

    async def add_report(self, report: CaseReport) -> None:
        self._reports.append(report)
        logger.debug(f"[STORE] Caso {report.id} ({report.kind}) agregado en memoria")

    async def list_reports(self) -> List[CaseReport]:
        return list(self._reports)

    def get_catalog(self) -> Catalog:
        return self._catalog
