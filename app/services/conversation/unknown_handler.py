# app/services/conversation/unknown_handler.py
import logging
import re

from app.core.keywords import AI_PREFIXES
from app.services.conversation import messages
from app.services.conversation.ports import ConversationPorts

logger = logging.getLogger(__name__)

AI_PREFIX_PATTERN = re.compile(r"^(ai|gpt|chat)\s+", re.IGNORECASE)

EXPLICIT_SYSTEM_PROMPT = "Eres un asistente técnico para MPC Jsala. Responde en español, conciso, amigable."
FALLBACK_SYSTEM_PROMPT = (
    "Eres soporte técnico para un taller de reparación de computadoras, habla en español corto y directo."
)


class UnknownIntentHandler:
    """
    Maneja el texto libre que llega en el menú y no es una opción.
    Usa la IA cuando está configurada y si no responde con el menú.
    """

    def __init__(self, ports: ConversationPorts):
        self.ports = ports

    @staticmethod
    def is_ai_request(message: str) -> bool:
        return message.lower().startswith(AI_PREFIXES)

    async def handle_unknown_intent(self, message: str, contact_id: str) -> str:
        """
        Genera respuesta para texto libre en el menú.
        """
        if self.is_ai_request(message):
            return await self._handle_explicit_ai(message, contact_id)

        if self.ports.ai_enabled:
            logger.info(f"[UNKNOWN] Texto libre de {contact_id}, consultando IA")
            prompt = (
                f"Eres un asistente para MPC Jsala. Usuario: \"{message}\". Responde brevemente en español y ofrece: "
                "(1) sugerencia automática, (2) pregunta para obtener más detalles, (3) ofrecer agendar si es pertinente."
            )
            answer = await self.ports.complete_with_ai(FALLBACK_SYSTEM_PROMPT, prompt, max_tokens=300)
            if answer:
                return f"{answer}\n\nEscribe \"MENU\" para volver al menú principal."

        logger.info(f"[UNKNOWN] Sin respuesta automática para {contact_id}")
        return messages.generic_fallback()

    async def _handle_explicit_ai(self, message: str, contact_id: str) -> str:
        """Pregunta directa: "AI <pregunta>"."""
        if not self.ports.ai_enabled:
            return "Lo siento, el servicio de IA no está configurado en el servidor. Contacta al administrador."

        question = AI_PREFIX_PATTERN.sub("", message, count=1)
        logger.info(f"[UNKNOWN] Pregunta directa a la IA de {contact_id}")
        answer = await self.ports.complete_with_ai(EXPLICIT_SYSTEM_PROMPT, question, max_tokens=500)
        if answer is None:
            return "Error en IA: intenta más tarde."
        return answer
