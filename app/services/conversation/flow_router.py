import logging
from typing import Dict, Optional, Tuple

from app.models.session import Flow, Session, State
from app.services.conversation import messages
from app.services.conversation.flows import BaseFlow, FlowContext
from app.services.conversation.ports import ConversationPorts
from app.services.conversation.unknown_handler import UnknownIntentHandler
from app.services.storage import RecordStore

logger = logging.getLogger(__name__)

PRICES_OPTION = "6"

# Opción del menú -> flujo. La opción 6 no abre flujo (precios).
MENU_OPTIONS: Dict[str, Optional[Flow]] = {
    "1": Flow.REPARACION,
    "2": Flow.MANTENIMIENTO,
    "3": Flow.OTROS,
    "4": Flow.SUCURSALES,
    "5": Flow.CITA,
    PRICES_OPTION: None,
    "7": Flow.ESTADO,
    "8": Flow.CONSULTA,
    "9": Flow.ASESOR,
}

MENU_ALIASES = {
    "agendar": "5",
    "cita": "5",
    "precios": PRICES_OPTION,
    "precio": PRICES_OPTION,
    "estado": "7",
    "consulta": "8",
    "asesor": "9",
}

KEYCAP_SUFFIXES = ("️", "⃣")


def normalize_option(text: str) -> str:
    """"1️⃣ " -> "1", " Agendar" -> "agendar"."""
    option = text.strip().lower()
    for suffix in KEYCAP_SUFFIXES:
        option = option.replace(suffix, "")
    return option.strip()


class FlowRouter:
    """
    Responsabilidad única: Enrutar mensajes al flujo apropiado.
    """

    def __init__(self, flows: Dict[str, BaseFlow], ports: ConversationPorts, records: RecordStore):
        """
        Inicializa el router de flujos.

        Args:
            flows: Diccionario con los flujos disponibles (clave = valor de `Flow`)
            ports: Efectos secundarios (guardar, notificar, IA)
            records: Almacén de citas, casos y catálogo
        """
        self.flows = flows
        self.ports = ports
        self.records = records
        self.unknown_handler = UnknownIntentHandler(ports)

    def _context(self, session: Session) -> FlowContext:
        return FlowContext(
            user_id=session.user_id,
            catalog=self.records.get_catalog(),
            ports=self.ports,
            records=self.records,
        )

    async def route_message(self, session: Session, message_text: str) -> Tuple[Session, str]:
        """
        Enruta el mensaje al flujo apropiado.

        Returns:
            (sesión actualizada, respuesta para el usuario)
        """
        # Flujo activo tiene prioridad
        if not session.is_idle:
            return await self._process_active_flow(session, message_text)

        return await self._handle_menu(session, message_text)

    async def _handle_menu(self, session: Session, message_text: str) -> Tuple[Session, str]:
        """Interpreta el mensaje como opción del menú principal."""
        option = normalize_option(message_text)
        option = MENU_ALIASES.get(option, option)

        if option in MENU_OPTIONS:
            flow_name = MENU_OPTIONS[option]
            if flow_name is None:
                logger.info(f"[ROUTER] Precios solicitados por {session.user_id}")
                return session, messages.prices_text(self.records.get_catalog())
            return await self._start_flow(session, flow_name)

        if option.isdigit():
            logger.info(f"[ROUTER] Opción inválida '{option}' de {session.user_id}")
            return session, messages.invalid_option()

        response = await self.unknown_handler.handle_unknown_intent(message_text.strip(), session.user_id)
        return session, response

    async def _start_flow(self, session: Session, flow_name: Flow) -> Tuple[Session, str]:
        """Inicia un flujo específico."""
        flow_handler = self.flows.get(flow_name.value)
        if not flow_handler:
            logger.error(f"[ROUTER] Flujo '{flow_name.value}' no registrado")
            return session.reset(), messages.restart()

        try:
            session, response, _ = await flow_handler.start(session, self._context(session))
            logger.info(f"[ROUTER] {session.user_id} inicia flujo '{flow_name.value}'")
            return session, response
        except Exception as e:
            logger.error(f"[ROUTER] Error iniciando flujo {flow_name.value}: {e}", exc_info=True)
            return session.reset(), messages.restart()

    async def _process_active_flow(self, session: Session, message_text: str) -> Tuple[Session, str]:
        """Procesa un mensaje en un flujo activo."""
        try:
            state = State(session.state)
        except ValueError:
            logger.warning(f"[ROUTER] Estado desconocido '{session.state}' para {session.user_id}, reiniciando")
            return session.reset(), messages.restart()

        flow_handler = self.flows.get(session.flow) if session.flow else None
        if flow_handler is None or not flow_handler.owns(state):
            logger.warning(
                f"[ROUTER] Estado '{state.value}' sin flujo válido ('{session.flow}') para {session.user_id}, reiniciando"
            )
            return session.reset(), messages.restart()

        try:
            session, response, is_completed = await flow_handler.process_message(
                session, message_text, self._context(session)
            )
        except Exception as e:
            logger.error(f"[ROUTER] Error procesando flujo activo {session.flow}: {e}", exc_info=True)
            return session.reset(), messages.restart()

        if is_completed:
            logger.info(f"[ROUTER] Flujo completado para {session.user_id}")
            session.reset()

        return session, response
