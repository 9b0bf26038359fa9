import logging
from typing import Dict

from app.core.timezone_helper import TimezoneHelper
from app.models.records import CaseReport
from app.services.conversation.messages import format_colones

logger = logging.getLogger(__name__)

FIELD_LABELS: Dict[str, str] = {
    "problema": "Problema",
    "nombre": "Nombre",
    "ubicacion": "Ubicación",
    "solicitud": "Solicitud",
    "codigo": "Código consultado",
    "resultado": "Resultado",
    "correo": "Correo",
    "zona": "Zona",
    "horario": "Horario de contacto",
    "equipo": "Tipo de equipo",
    "marca": "Marca/Modelo",
    "sistema": "Sistema operativo",
    "sintoma": "Síntoma",
    "duracion": "Desde cuándo",
    "reparaciones": "Reparaciones recientes",
    "mensaje": "Mensaje",
}

KIND_TITLES: Dict[str, str] = {
    "reparacion": "🔧 Nueva solicitud de reparación",
    "otros": "📌 Nueva solicitud de otros servicios",
    "estado": "🔎 Consulta de estado",
    "consulta": "🩺 Nueva consulta técnica",
    "asesor": "🙋 Cliente solicita un asesor",
}


class ReportFormatter:
    """
    Responsabilidad única: Formatear casos para el usuario y el operador.
    """

    @staticmethod
    def format_fields(fields: Dict[str, str]) -> str:
        lines = []
        for key, value in fields.items():
            label = FIELD_LABELS.get(key, key.capitalize())
            lines.append(f"• {label}: {value}")
        return "\n".join(lines)

    @staticmethod
    def operator_summary(report: CaseReport) -> str:
        """Texto que recibe el operador por WhatsApp."""
        title = KIND_TITLES.get(report.kind, f"Nuevo caso ({report.kind})")
        text = (
            f"{title}\n"
            f"ID: {report.id}\n"
            f"Cliente: {report.user_id.replace('whatsapp:', '')}\n"
            f"Fecha: {TimezoneHelper.format_timestamp(report.created_at)}\n\n"
            f"{ReportFormatter.format_fields(report.fields)}"
        )
        if report.estimate is not None:
            text += f"\n• Estimado: {format_colones(report.estimate)}"
        if report.remote is not None:
            text += f"\n• Atención sugerida: {'remota' if report.remote else 'en taller'}"
        return text
