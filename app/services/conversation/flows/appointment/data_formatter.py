import logging
from typing import Dict, Optional

from app.core.catalog import Branch
from app.core.timezone_helper import TimezoneHelper
from app.models.records import Appointment

logger = logging.getLogger(__name__)


class DataFormatter:
    """
    Responsabilidad única: Formatear datos de la cita para el usuario y el operador.
    """

    @staticmethod
    def format_branch(branch: Optional[Branch], branch_id: Optional[str] = None) -> str:
        if branch:
            return branch.name
        return branch_id or "Sin sucursal"

    @staticmethod
    def format_confirmation_summary(answers: Dict[str, str], branch: Optional[Branch]) -> str:
        """Resumen previo a confirmar la cita."""
        return (
            "📋 *Resumen de tu cita:*\n\n"
            f"🏢 Sucursal: {DataFormatter.format_branch(branch, answers.get('branch_id'))}\n"
            f"👤 Nombre: {answers.get('nombre', '')}\n"
            f"📞 Tel: {answers.get('telefono', '')}\n"
            f"📅 Fecha: {answers.get('fecha', '')}\n"
            f"🕐 Hora: {answers.get('hora', '')}\n\n"
            "¿Confirmas la cita? Responde *sí* para confirmar o *no* para cancelar."
        )

    @staticmethod
    def format_created(appointment: Appointment, branch: Optional[Branch]) -> str:
        """Confirmación que recibe el usuario al crear la cita."""
        return (
            "*Cita agendada con éxito*\n"
            f"ID: {appointment.id}\n"
            f"Sucursal: {DataFormatter.format_branch(branch, appointment.branch_id)}\n"
            f"Nombre: {appointment.name}\n"
            f"Tel: {appointment.phone}\n"
            f"Fecha: {appointment.date}\n"
            f"Hora: {appointment.time}\n\n"
            "Te contactaremos para confirmar."
        )

    @staticmethod
    def format_for_operator(appointment: Appointment, branch: Optional[Branch]) -> str:
        text = (
            "📅 Nueva cita agendada\n"
            f"ID: {appointment.id}\n"
            f"Cliente: {appointment.user_id.replace('whatsapp:', '')}\n"
            f"Creada: {TimezoneHelper.format_timestamp(appointment.created_at)}\n\n"
            f"• Sucursal: {DataFormatter.format_branch(branch, appointment.branch_id)}\n"
            f"• Nombre: {appointment.name}\n"
            f"• Tel: {appointment.phone}\n"
            f"• Fecha: {appointment.date}\n"
            f"• Hora: {appointment.time}"
        )
        if appointment.service:
            text += f"\n• Servicio: {appointment.service}"
        return text
