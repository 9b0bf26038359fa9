from abc import ABC
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional, Tuple
import logging

from app.core.catalog import Catalog
from app.models.session import Flow, Session, State
from app.services.conversation.ports import ConversationPorts
from app.services.storage import RecordStore
from .validators import AnswerValidators

# (sesión actualizada, respuesta para el usuario, flujo completado)
FlowResult = Tuple[Session, str, bool]
Normalizer = Callable[[str, Session], str]


@dataclass
class FlowContext:
    """Dependencias que un flujo necesita para procesar un mensaje."""
    user_id: str
    catalog: Catalog
    ports: ConversationPorts
    records: RecordStore


@dataclass(frozen=True)
class Step:
    """
    Paso lineal de recolección de datos.

    Al entrar al estado se muestra `prompt`; la respuesta (recortada y
    normalizada) se guarda en `answers[field]`.
    """
    state: State
    field: str
    prompt: str
    normalizer: Optional[Normalizer] = None


class _Answers(dict):
    """Permite usar {campo} en los prompts aunque el campo aún no exista."""

    def __missing__(self, key):
        return ""


class BaseFlow(ABC):
    """
    Clase base para todos los flujos de conversación.

    Responsabilidad: Definir interfaz común y utilidades compartidas.
    Los flujos declaran su secuencia de preguntas en `steps` y, si tienen
    estados con dos o más caminos, los registran en `branch_handlers()`.
    """

    flow: Flow
    intro: str = ""
    steps: Tuple[Step, ...] = ()

    def __init__(self):
        """Inicialización base. Los flujos hijos pueden sobrescribir."""
        self.logger = logging.getLogger(self.__class__.__name__)
        self._step_index: Dict[State, int] = {step.state: i for i, step in enumerate(self.steps)}

    def branch_handlers(self) -> Dict[State, Callable[[Session, str, FlowContext], Awaitable[FlowResult]]]:
        """Estados que deciden por palabras clave en lugar de guardar la respuesta."""
        return {}

    def owns(self, state: State) -> bool:
        return state in self._step_index or state in self.branch_handlers()

    async def start(self, session: Session, ctx: FlowContext) -> FlowResult:
        """Entra al flujo y muestra la primera pregunta."""
        first = self.steps[0]
        session.enter(self.flow, first.state)
        self.log_step(first.state.value, ctx.user_id)
        prompt = self.render_prompt(first, session)
        return session, f"{self.intro}\n\n{prompt}" if self.intro else prompt, False

    async def process_message(self, session: Session, message: str, ctx: FlowContext) -> FlowResult:
        """
        Procesa un mensaje dentro del flujo.

        Args:
            session: Sesión actual (se modifica y se devuelve)
            message: Mensaje del usuario
            ctx: Dependencias del flujo

        Returns:
            FlowResult: (sesión, respuesta, flujo_completado)
        """
        state = State(session.state)
        self.log_step(state.value, ctx.user_id, message)

        handler = self.branch_handlers().get(state)
        if handler is not None:
            return await handler(session, message, ctx)
        return await self.collect_answer(session, state, message, ctx)

    async def collect_answer(self, session: Session, state: State, message: str, ctx: FlowContext) -> FlowResult:
        """Guarda la respuesta del paso lineal y avanza al siguiente."""
        index = self._step_index[state]
        step = self.steps[index]

        is_valid, error_msg, cleaned = AnswerValidators.validate_answer(message)
        if not is_valid:
            return self.create_error_response(f"{error_msg}\n\n{self.render_prompt(step, session)}", session)

        session.answers[step.field] = step.normalizer(cleaned, session) if step.normalizer else cleaned

        if index + 1 < len(self.steps):
            next_step = self.steps[index + 1]
            session.state = next_step.state.value
            return session, self.render_prompt(next_step, session), False

        return await self.after_steps(session, ctx)

    async def after_steps(self, session: Session, ctx: FlowContext) -> FlowResult:
        """Se ejecuta al responder el último paso lineal. Por defecto completa el flujo."""
        return await self.complete(session, ctx)

    async def complete(self, session: Session, ctx: FlowContext) -> FlowResult:
        """
        Construye el registro, dispara los efectos y devuelve la confirmación.

        Obligatorio para los flujos con `steps` que terminan por `after_steps`.
        Los flujos que solo deciden en estados de `branch_handlers()` nunca
        llegan aquí y no lo implementan, por eso no es abstracto.
        """
        raise NotImplementedError(f"{self.__class__.__name__} no define complete()")

    def go_to_step(self, session: Session, state: State) -> FlowResult:
        """Salta a un paso lineal y muestra su pregunta."""
        step = self.steps[self._step_index[state]]
        session.state = step.state.value
        return session, self.render_prompt(step, session), False

    @staticmethod
    def render_prompt(step: Step, session: Session) -> str:
        return step.prompt.format_map(_Answers(session.answers))

    def log_step(self, step: str, contact_id: str, message: str = ""):
        """Utilidad para logging consistente entre flujos."""
        flow_name = self.__class__.__name__.replace('Flow', '').upper()
        self.logger.info(f"[{flow_name}] Paso '{step}' - Contacto: {contact_id}")
        if message:
            self.logger.debug(f"[{flow_name}] Mensaje: '{message}'")

    def create_error_response(self, error_message: str, session: Session) -> FlowResult:
        """Utilidad para respuestas de error consistentes: la sesión no avanza."""
        return (
            session,
            f"❌ {error_message}",
            False
        )

    def create_completion_response(self, session: Session, success_message: str) -> FlowResult:
        """Utilidad para respuestas de completación."""
        return (
            session.reset(),  # Sesión en el menú = flujo completado
            f"✅ {success_message}",
            True  # Flujo completado
        )
