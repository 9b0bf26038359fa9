import logging
from typing import Optional

from app.models.records import Appointment, CaseReport
from app.services.llm import LLMManager
from app.services.operator_notifier import OperatorNotifier
from app.services.storage import RecordStore

logger = logging.getLogger(__name__)


class ConversationPorts:
    """
    Efectos secundarios que el motor invoca al completar un flujo.

    Cada puerto captura y registra sus propios errores: una falla al guardar,
    notificar o consultar la IA nunca bloquea la respuesta al usuario ni
    revierte la transición de la sesión.
    """

    def __init__(self, records: RecordStore, notifier: Optional[OperatorNotifier] = None, llm: Optional[LLMManager] = None):
        self.records = records
        self.notifier = notifier
        self.llm = llm

    @property
    def ai_enabled(self) -> bool:
        return self.llm is not None and self.llm.enabled

    async def persist_appointment(self, appointment: Appointment) -> bool:
        try:
            await self.records.add_appointment(appointment)
            logger.info(f"[PORTS] Cita {appointment.id} registrada para {appointment.user_id}")
            return True
        except Exception as e:
            logger.error(f"[PORTS] No se pudo guardar la cita {appointment.id}: {e}", exc_info=True)
            return False

    async def persist_report(self, report: CaseReport) -> bool:
        try:
            await self.records.add_report(report)
            logger.info(f"[PORTS] Caso {report.id} ({report.kind}) registrado para {report.user_id}")
            return True
        except Exception as e:
            logger.error(f"[PORTS] No se pudo guardar el caso {report.id}: {e}", exc_info=True)
            return False

    async def notify_operator(self, text: str) -> bool:
        if self.notifier is None:
            logger.debug("[PORTS] Sin notificador configurado")
            return False
        try:
            return await self.notifier.notify(text)
        except Exception as e:
            logger.error(f"[PORTS] Falló el aviso al operador: {e}", exc_info=True)
            return False

    async def complete_with_ai(self, system_instruction: str, prompt: str, max_tokens: int = 300) -> Optional[str]:
        if not self.ai_enabled:
            return None
        try:
            return await self.llm.complete(system_instruction, prompt, max_tokens=max_tokens)
        except Exception as e:
            logger.error(f"[PORTS] Error en IA: {e}", exc_info=True)
            return None
