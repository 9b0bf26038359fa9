import logging

from app.models.records import CaseReport
from app.models.session import Flow, Session, State
from app.services.conversation import messages
from app.services.conversation.flows.base_flow import BaseFlow, FlowContext, FlowResult, Step
from app.services.conversation.flows.report_formatter import ReportFormatter
from .pricing import estimate_repair_price

logger = logging.getLogger(__name__)


class RepairFlow(BaseFlow):
    """
    Flujo de reparación: problema -> nombre -> ubicación -> estimado.
    """

    flow = Flow.REPARACION
    intro = (
        "🔧 *Reparación de Computadoras*\n"
        "Ofrecemos formateo, eliminación de virus, reparación de hardware, recuperación de datos..."
    )
    steps = (
        Step(
            State.REPARACION_PROBLEMA,
            "problema",
            "¿Podrías describir el problema que tienes? (Ej: \"No enciende\", \"Pantalla azul\", \"Virus\")\n"
            "Escribe tu descripción.",
        ),
        Step(
            State.REPARACION_NOMBRE,
            "nombre",
            "Gracias por la descripción:\n\"{problema}\"\n\n"
            "Para darte un presupuesto y agendar, ¿puedes darme tu nombre completo?",
        ),
        Step(
            State.REPARACION_UBICACION,
            "ubicacion",
            "Gracias {nombre}. ¿Cuál es la ubicación (barrio/ciudad) o prefieres llevar el equipo a la sucursal? "
            "(responde: \"llevar\" o escribe tu ubicación)",
        ),
    )

    async def complete(self, session: Session, ctx: FlowContext) -> FlowResult:
        answers = dict(session.answers)
        estimate = estimate_repair_price(answers.get("problema", ""), ctx.catalog.prices.reparacion_minima)

        report = CaseReport(user_id=ctx.user_id, kind=self.flow.value, fields=answers, estimate=estimate)
        await ctx.ports.persist_report(report)
        await ctx.ports.notify_operator(ReportFormatter.operator_summary(report))

        logger.info(f"[REPARACION] Caso {report.id} con estimado {estimate} para {ctx.user_id}")

        return self.create_completion_response(
            session,
            f"Caso registrado (ID: {report.id})\n\n"
            f"💰 *Estimado preliminar*: {messages.format_colones(estimate)}\n"
            "(Este es un estimado; el precio final depende del diagnóstico completo).\n\n"
            "¿Quieres que te agendemos una cita para diagnóstico? Escribe *agendar*.\n\n"
            f"{messages.main_menu()}"
        )
