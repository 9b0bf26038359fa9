from typing import Dict

from app.core.keywords import CATALOG_KEYWORDS, contains_any
from app.models.records import CaseReport
from app.models.session import Flow, Session, State
from app.services.conversation import messages
from app.services.conversation.flows.base_flow import BaseFlow, FlowContext, FlowResult
from app.services.conversation.flows.report_formatter import ReportFormatter
from app.services.conversation.flows.validators import AnswerValidators


class OtherServicesFlow(BaseFlow):
    """Implementa el flujo de otros servicios con traspaso a un agente humano."""

    flow = Flow.OTROS

    def branch_handlers(self) -> Dict:
        return {State.OTROS_SOLICITUD: self.process_request}

    async def start(self, session: Session, ctx: FlowContext) -> FlowResult:
        session.enter(self.flow, State.OTROS_SOLICITUD)
        return (
            session,
            "📌 *Otros servicios*\n"
            "Soporte remoto, instalación de programas, redes, impresoras, venta de accesorios.\n"
            "Escribe qué servicio necesitas o escribe \"catalogo\" para ver inventario.",
            False
        )

    async def process_request(self, session: Session, message: str, ctx: FlowContext) -> FlowResult:
        if contains_any(message, CATALOG_KEYWORDS):
            return (
                session,
                f"{messages.prices_text(ctx.catalog)}\nEscribe qué servicio necesitas.",
                False
            )

        is_valid, error_msg, request = AnswerValidators.validate_answer(message)
        if not is_valid:
            return self.create_error_response(error_msg, session)

        session.answers["solicitud"] = request
        return await self.complete(session, ctx)

    async def complete(self, session: Session, ctx: FlowContext) -> FlowResult:
        report = CaseReport(user_id=ctx.user_id, kind=self.flow.value, fields=dict(session.answers))
        await ctx.ports.persist_report(report)
        await ctx.ports.notify_operator(ReportFormatter.operator_summary(report))

        return self.create_completion_response(
            session,
            f"Gracias. Hemos recibido tu solicitud: \"{report.fields['solicitud']}\" (ID: {report.id}).\n"
            "Un agente humano te contactará pronto.\n\n"
            f"{messages.main_menu()}"
        )
