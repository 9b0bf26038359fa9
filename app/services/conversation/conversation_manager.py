import logging
from typing import Dict, Optional

from app.core.keywords import is_reset_keyword
from app.models.session import Session
from app.services.conversation import messages
from app.services.conversation.flow_router import FlowRouter
from app.services.conversation.flows import BaseFlow, build_flows
from app.services.conversation.ports import ConversationPorts
from app.services.storage import RecordStore, SessionStore

logger = logging.getLogger(__name__)


class ConversationManager:
    """
    Responsabilidad única: Orquestar el procesamiento de conversaciones.
    Coordina sesión, interrupción global y enrutamiento; siempre devuelve
    exactamente una respuesta por mensaje.
    """

    def __init__(
        self,
        session_store: SessionStore,
        record_store: RecordStore,
        ports: ConversationPorts,
        flows: Optional[Dict[str, BaseFlow]] = None,
    ):
        """
        Inicializa el gestor de conversaciones.

        Args:
            session_store: Almacén de sesiones por usuario
            record_store: Almacén de citas, casos y catálogo
            ports: Efectos secundarios (guardar, notificar, IA)
            flows: Flujos disponibles; por defecto todos los del bot
        """
        self.session_store = session_store
        self.record_store = record_store
        self.ports = ports
        self.flows = flows if flows is not None else build_flows()
        self.flow_router = FlowRouter(self.flows, ports, record_store)

    async def process_message(self, user_id: str, message_text: str) -> str:
        """
        Procesa un mensaje entrante y devuelve el texto de respuesta.
        """
        try:
            logger.info(f"[CONVERSATION] Mensaje de {user_id}: '{message_text[:50]}'")

            session = await self.session_store.get(user_id)

            # Primer contacto: saludo + menú, el mensaje no se interpreta
            if session is None:
                session = Session(user_id=user_id)
                await self._save_session(session)
                logger.info(f"[CONVERSATION] Nueva sesión para {user_id}")
                return messages.welcome()

            # Interrupción global desde cualquier estado
            if is_reset_keyword(message_text):
                logger.info(f"[CONVERSATION] {user_id} vuelve al menú desde '{session.state}'")
                await self._save_session(session.reset())
                return messages.main_menu()

            session, response = await self.flow_router.route_message(session, message_text)
            await self._save_session(session)
            return response

        except Exception as e:
            logger.error(f"[CONVERSATION] Error procesando mensaje de {user_id}: {e}", exc_info=True)
            return messages.processing_error()

    async def _save_session(self, session: Session):
        """Guarda la sesión; una falla se registra pero no cambia la respuesta."""
        try:
            await self.session_store.upsert(session)
        except Exception as e:
            logger.error(f"[CONVERSATION] No se pudo guardar la sesión de {session.user_id}: {e}", exc_info=True)

    async def close(self):
        """Libera recursos externos (cliente de IA)."""
        if self.ports.llm is not None:
            await self.ports.llm.close()
