from app.models.records import CaseReport
from app.models.session import Flow, Session, State
from app.services.conversation import messages
from app.services.conversation.flows.base_flow import BaseFlow, FlowContext, FlowResult, Step
from app.services.conversation.flows.report_formatter import ReportFormatter


class AdvisorFlow(BaseFlow):
    """Traspaso a un asesor humano: nombre -> mensaje -> aviso al operador."""

    flow = Flow.ASESOR
    intro = "🙋 *Hablar con un asesor*"
    steps = (
        Step(State.ASESOR_NOMBRE, "nombre", "¿Cuál es tu nombre?"),
        Step(State.ASESOR_MENSAJE, "mensaje", "Gracias {nombre}. Cuéntanos brevemente en qué te podemos ayudar."),
    )

    async def complete(self, session: Session, ctx: FlowContext) -> FlowResult:
        report = CaseReport(user_id=ctx.user_id, kind=self.flow.value, fields=dict(session.answers))
        await ctx.ports.persist_report(report)
        await ctx.ports.notify_operator(ReportFormatter.operator_summary(report))

        return self.create_completion_response(
            session,
            f"Listo {report.fields['nombre']}, un asesor te escribirá pronto por este chat (ID: {report.id}).\n\n"
            f"{messages.main_menu()}"
        )
