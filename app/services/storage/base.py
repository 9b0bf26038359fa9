from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Union

from app.core.catalog import Catalog
from app.models.records import Appointment, CaseReport
from app.models.session import Session


class StorageError(Exception):
    """Error al leer o escribir el almacenamiento."""


class SessionStore(ABC):
    """
    Almacén de sesiones por usuario.
    Responsabilidad única: lectura-modificación-escritura por clave.
    """

    @abstractmethod
    async def get(self, user_id: str) -> Optional[Session]:
        """Devuelve la sesión del usuario o None si no existe."""

    @abstractmethod
    async def upsert(self, session: Session) -> None:
        """Crea o reemplaza la sesión de `session.user_id`."""

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """Elimina la sesión; no falla si no existe."""

    @abstractmethod
    async def snapshot(self) -> Dict[str, Dict]:
        """Copia de todas las sesiones para el panel de administración."""


class RecordStore(ABC):
    """
    Colecciones de solo inserción (citas y casos) y catálogo de solo lectura.
    """

    @abstractmethod
    async def add_appointment(self, appointment: Appointment) -> None:
        pass

    @abstractmethod
    async def list_appointments(self) -> List[Appointment]:
        pass

    @abstractmethod
    async def add_report(self, report: CaseReport) -> None:
        pass

    @abstractmethod
    async def list_reports(self) -> List[CaseReport]:
        pass

    @abstractmethod
    def get_catalog(self) -> Catalog:
        pass

    async def find_record(self, record_id: str) -> Optional[Union[Appointment, CaseReport]]:
        """Busca una cita o caso por su ID sin distinguir mayúsculas."""
        wanted = (record_id or "").strip().upper()
        if not wanted:
            return None
        for appointment in await self.list_appointments():
            if appointment.id.upper() == wanted:
                return appointment
        for report in await self.list_reports():
            if report.id.upper() == wanted:
                return report
        return None
