import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.core.catalog import Catalog, default_catalog
from app.core.timezone_helper import TimezoneHelper
from app.models.records import Appointment, CaseReport
from app.models.session import Session
from .base import RecordStore, SessionStore, StorageError

logger = logging.getLogger(__name__)


class JsonDocument:
    """
    Documento JSON único que respalda sesiones, citas, casos y catálogo.

    Se carga una sola vez; cada mutación reescribe el archivo completo
    (archivo temporal + reemplazo) para no dejarlo a medias. Desde los
    handlers se usa `save()`, que serializa en el event loop y escribe el
    archivo en un hilo; las escrituras se hacen de una en una.
    """

    def __init__(self, path: str):
        self.path = Path(path)
        self.data: Dict[str, Any] = {}
        self._lock: Optional[asyncio.Lock] = None
        self._load()

    def _load(self):
        if self.path.exists():
            try:
                with self.path.open("r", encoding="utf-8") as fh:
                    self.data = json.load(fh) or {}
                logger.info(f"[STORE] Documento cargado desde {self.path}")
            except (OSError, json.JSONDecodeError) as e:
                raise StorageError(f"No se pudo leer {self.path}: {e}") from e

        seeded = self._seed_defaults()
        if seeded or not self.path.exists():
            self.write()

    def _seed_defaults(self) -> bool:
        """Completa las colecciones faltantes con los valores por defecto."""
        catalog = default_catalog().model_dump()
        defaults = {
            "sessions": {},
            "appointments": [],
            "reports": [],
            "branches": catalog["branches"],
            "inventory": catalog["inventory"],
            "prices": catalog["prices"],
        }
        seeded = False
        for key, value in defaults.items():
            if key not in self.data:
                self.data[key] = value
                seeded = True
        return seeded

    def _serialize(self) -> str:
        return json.dumps(self.data, ensure_ascii=False, indent=2)

    def write(self):
        """Escritura síncrona; solo para la carga inicial."""
        self._write_text(self._serialize())

    async def save(self):
        """Persiste el documento sin bloquear el event loop."""
        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            payload = self._serialize()
            await asyncio.to_thread(self._write_text, payload)

    def _write_text(self, payload: str):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_path, self.path)
        except OSError as e:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise StorageError(f"No se pudo escribir {self.path}: {e}") from e


class JsonSessionStore(SessionStore):

    def __init__(self, document: JsonDocument):
        self.document = document

    async def get(self, user_id: str) -> Optional[Session]:
        raw = self.document.data["sessions"].get(user_id)
        if raw is None:
            return None
        try:
            return Session.model_validate(raw)
        except ValidationError as e:
            # Registro ilegible: se trata como usuario nuevo
            logger.warning(f"[STORE] Sesión ilegible para {user_id}, se descarta: {e}")
            return None

    async def upsert(self, session: Session) -> None:
        session.updated_at = TimezoneHelper.now_iso()
        self.document.data["sessions"][session.user_id] = session.model_dump()
        await self.document.save()

    async def delete(self, user_id: str) -> None:
        if self.document.data["sessions"].pop(user_id, None) is not None:
            await self.document.save()

    async def snapshot(self) -> Dict[str, Dict]:
        return dict(self.document.data["sessions"])


class JsonRecordStore(RecordStore):

    def __init__(self, document: JsonDocument):
        self.document = document

    async def add_appointment(self, appointment: Appointment) -> None:
        self.document.data["appointments"].append(appointment.to_document())
        await self.document.save()
        logger.debug(f"[STORE] Cita {appointment.id} guardada en {self.document.path}")

    async def list_appointments(self) -> List[Appointment]:
        return [Appointment.model_validate(item) for item in self.document.data["appointments"]]

    async def add_report(self, report: CaseReport) -> None:
        self.document.data["reports"].append(report.to_document())
        await self.document.save()
        logger.debug(f"[STORE] Caso {report.id} ({report.kind}) guardado en {self.document.path}")

    async def list_reports(self) -> List[CaseReport]:
        return [CaseReport.model_validate(item) for item in self.document.data["reports"]]

    def get_catalog(self) -> Catalog:
        return Catalog.model_validate({
            "branches": self.document.data["branches"],
            "inventory": self.document.data["inventory"],
            "prices": self.document.data["prices"],
        })
