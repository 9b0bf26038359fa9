import logging
from typing import Dict

from app.core.keywords import CANCEL_KEYWORDS, CANCEL_WORDS, CONFIRM_KEYWORDS, CONFIRM_WORDS, contains_any, has_word
from app.models.records import Appointment
from app.models.session import Flow, Session, State
from app.services.conversation import messages
from app.services.conversation.flows.base_flow import BaseFlow, FlowContext, FlowResult, Step
from app.services.conversation.flows.normalizers import same_phone
from app.services.conversation.flows.validators import AnswerValidators
from .data_formatter import DataFormatter

logger = logging.getLogger(__name__)


class AppointmentFlow(BaseFlow):
    """
    Responsabilidad única: Orquestar el flujo de agendamiento.

    sucursal -> nombre -> teléfono -> fecha -> hora -> confirmación.
    La sucursal y la confirmación son estados con opciones; el resto es lineal.
    """

    flow = Flow.CITA
    steps = (
        Step(
            State.CITA_NOMBRE,
            "nombre",
            "Perfecto. Elegiste *{sucursal}*.\n¿Me das tu nombre completo para la cita?",
        ),
        Step(
            State.CITA_TELEFONO,
            "telefono",
            "Gracias *{nombre}*. ¿Cuál es el número de teléfono donde te contactamos (si es diferente al que usas)? "
            "Si es el mismo, escribe \"mismo\".",
            normalizer=same_phone,
        ),
        Step(
            State.CITA_FECHA,
            "fecha",
            "Perfecto. ¿Qué fecha prefieres para la cita? (ej: 2025-12-05 o \"mañana\" o \"próxima semana\")",
        ),
        Step(
            State.CITA_HORA,
            "hora",
            "Hora preferida (ej: 10:00 AM o 15:30):",
        ),
    )

    def branch_handlers(self) -> Dict:
        return {
            State.CITA_SUCURSAL: self.process_branch_selection,
            State.CITA_CONFIRMAR: self.process_confirmation,
        }

    async def start(self, session: Session, ctx: FlowContext) -> FlowResult:
        session.enter(self.flow, State.CITA_SUCURSAL)
        self.log_step(State.CITA_SUCURSAL.value, ctx.user_id)
        return (
            session,
            f"Perfecto, vamos a agendar. Primero, elige la sucursal:\n\n{messages.branch_list(ctx.catalog.branches)}",
            False
        )

    async def process_branch_selection(self, session: Session, message: str, ctx: FlowContext) -> FlowResult:
        is_valid, error_msg, option = AnswerValidators.validate_option(message, len(ctx.catalog.branches))
        if not is_valid:
            return self.create_error_response(f"{error_msg}\n\n{messages.branch_list(ctx.catalog.branches)}", session)

        branch = ctx.catalog.branches[option - 1]
        session.answers["branch_id"] = branch.id
        session.answers["sucursal"] = branch.name
        return self.go_to_step(session, State.CITA_NOMBRE)

    async def after_steps(self, session: Session, ctx: FlowContext) -> FlowResult:
        """Después de la hora se pide confirmación explícita."""
        session.state = State.CITA_CONFIRMAR.value
        branch = ctx.catalog.branch_by_id(session.answers.get("branch_id"))
        return session, DataFormatter.format_confirmation_summary(session.answers, branch), False

    async def process_confirmation(self, session: Session, message: str, ctx: FlowContext) -> FlowResult:
        # "no confirmo" cuenta como cancelación: se revisa primero
        if has_word(message, CANCEL_WORDS) or contains_any(message, CANCEL_KEYWORDS):
            logger.info(f"[CITA] Cita cancelada por {ctx.user_id}")
            session.reset()
            return session, f"Cita cancelada. No se guardó ningún dato.\n\n{messages.main_menu()}", True

        if has_word(message, CONFIRM_WORDS) or contains_any(message, CONFIRM_KEYWORDS):
            return await self.complete(session, ctx)

        branch = ctx.catalog.branch_by_id(session.answers.get("branch_id"))
        return (
            session,
            f"No entendí tu respuesta.\n\n{DataFormatter.format_confirmation_summary(session.answers, branch)}",
            False
        )

    async def complete(self, session: Session, ctx: FlowContext) -> FlowResult:
        answers = session.answers
        appointment = Appointment(
            user_id=ctx.user_id,
            name=answers.get("nombre", ""),
            phone=answers.get("telefono", ""),
            date=answers.get("fecha", ""),
            time=answers.get("hora", ""),
            branch_id=answers.get("branch_id"),
            service=answers.get("servicio"),
        )
        branch = ctx.catalog.branch_by_id(appointment.branch_id)

        await ctx.ports.persist_appointment(appointment)
        await ctx.ports.notify_operator(DataFormatter.format_for_operator(appointment, branch))

        return self.create_completion_response(
            session,
            f"{DataFormatter.format_created(appointment, branch)}\n\n{messages.main_menu()}"
        )
