from typing import Dict

from app.core.keywords import PRICE_KEYWORDS, SCHEDULE_KEYWORDS, contains_any
from app.models.session import Flow, Session, State
from app.services.conversation import messages
from app.services.conversation.flows.base_flow import BaseFlow, FlowContext, FlowResult

CHOICE_PROMPT = "¿Quieres agendar ahora o prefieres que te enviemos el precio estimado? (responde: \"agendar\" o \"precio\")"


class MaintenanceFlow(BaseFlow):
    """Implementa el flujo de mantenimiento: agendar o consultar precio."""

    flow = Flow.MANTENIMIENTO

    def __init__(self, appointment_flow: BaseFlow):
        super().__init__()
        self.appointment_flow = appointment_flow

    def branch_handlers(self) -> Dict:
        return {State.MANTENIMIENTO_OPCION: self.process_choice}

    async def start(self, session: Session, ctx: FlowContext) -> FlowResult:
        session.enter(self.flow, State.MANTENIMIENTO_OPCION)
        return (
            session,
            "🧹 *Mantenimiento de Computadoras*\n"
            "Incluye limpieza interna, cambio de pasta térmica, diagnóstico.\n"
            f"{CHOICE_PROMPT}",
            False
        )

    async def process_choice(self, session: Session, message: str, ctx: FlowContext) -> FlowResult:
        if contains_any(message, SCHEDULE_KEYWORDS):
            # Continúa en el flujo de citas con el servicio ya elegido
            session, reply, completed = await self.appointment_flow.start(session, ctx)
            session.answers["servicio"] = self.flow.value
            return session, reply, completed

        if contains_any(message, PRICE_KEYWORDS):
            return (
                session,
                f"{messages.prices_text(ctx.catalog)}\n"
                "Si deseas agendar el mantenimiento escribe \"agendar\".",
                False
            )

        return self.create_error_response(f"No entendí. {CHOICE_PROMPT}", session)
