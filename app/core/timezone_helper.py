import logging
from datetime import datetime
import pytz

from app.core.config import get_settings

logger = logging.getLogger(__name__)

# Timezone del taller (Costa Rica, UTC-6)
SHOP_TZ = pytz.timezone(get_settings().TIMEZONE)


class TimezoneHelper:
    """
    Helper para manejar fechas en la zona horaria del taller.
    Responsabilidad única: marcas de tiempo ISO y formatos legibles.
    """

    @staticmethod
    def get_shop_now() -> datetime:
        """Obtiene la fecha y hora actual en la zona horaria del taller."""
        return datetime.now(SHOP_TZ)

    @staticmethod
    def now_iso() -> str:
        """Marca de tiempo ISO-8601 con offset, usada en createdAt/updated_at."""
        return TimezoneHelper.get_shop_now().isoformat(timespec="seconds")

    @staticmethod
    def get_weekday_name_spanish(weekday: int) -> str:
        """
        Convierte número de día a nombre en español.

        Args:
            weekday: Número del día según datetime.weekday() (0=Lunes, 6=Domingo)

        Returns:
            str: Nombre del día en español
        """
        days = {
            0: "Lunes", 1: "Martes", 2: "Miércoles", 3: "Jueves",
            4: "Viernes", 5: "Sábado", 6: "Domingo"
        }
        return days.get(weekday, "Desconocido")

    @staticmethod
    def format_timestamp(iso_timestamp: str) -> str:
        """
        Formatea una marca ISO para mensajes de WhatsApp.

        Args:
            iso_timestamp: "2025-12-05T10:30:00-06:00"

        Returns:
            str: "05/12/2025 10:30 (Viernes)"; el valor original si no se puede parsear
        """
        try:
            dt = datetime.fromisoformat(iso_timestamp)
            if dt.tzinfo is None:
                dt = SHOP_TZ.localize(dt)
            else:
                dt = dt.astimezone(SHOP_TZ)
            weekday_name = TimezoneHelper.get_weekday_name_spanish(dt.weekday())
            return f"{dt.strftime('%d/%m/%Y %H:%M')} ({weekday_name})"
        except (TypeError, ValueError):
            logger.debug(f"[TZ] Marca de tiempo no reconocida: {iso_timestamp!r}")
            return iso_timestamp
