import logging
from typing import Optional, Union

from app.core.timezone_helper import TimezoneHelper
from app.models.records import Appointment, CaseReport
from app.models.session import Flow, Session, State
from app.services.conversation import messages
from app.services.conversation.flows.base_flow import BaseFlow, FlowContext, FlowResult, Step
from app.services.conversation.flows.report_formatter import ReportFormatter

logger = logging.getLogger(__name__)


class StatusFlow(BaseFlow):
    """
    Consulta el estado de una cita o caso por su ID.

    Solo se muestran registros del mismo número que consulta. Cada consulta
    queda registrada como caso y se avisa al operador.
    """

    flow = Flow.ESTADO
    intro = "🔎 *Estado de mi equipo o cita*"
    steps = (
        Step(
            State.ESTADO_CODIGO,
            "codigo",
            "Escribe el ID que recibiste al agendar tu cita o registrar tu caso (ej: K3F9QZ2A).",
            normalizer=lambda value, session: value.strip().upper(),
        ),
    )

    async def complete(self, session: Session, ctx: FlowContext) -> FlowResult:
        code = session.answers["codigo"]
        record = await ctx.records.find_record(code)
        if record is not None and record.user_id != ctx.user_id:
            logger.warning(f"[ESTADO] {ctx.user_id} consultó un registro ajeno: {code}")
            record = None

        status_text = self._describe(record, ctx)
        fields = dict(session.answers)
        fields["resultado"] = "encontrado" if record else "no encontrado"

        report = CaseReport(user_id=ctx.user_id, kind=self.flow.value, fields=fields)
        await ctx.ports.persist_report(report)
        await ctx.ports.notify_operator(ReportFormatter.operator_summary(report))

        return self.create_completion_response(session, f"{status_text}\n\n{messages.main_menu()}")

    @staticmethod
    def _describe(record: Optional[Union[Appointment, CaseReport]], ctx: FlowContext) -> str:
        if record is None:
            return (
                "No encontramos ningún registro con ese ID para tu número. "
                "Un asesor revisará tu consulta y te escribirá."
            )

        if isinstance(record, Appointment):
            branch = ctx.catalog.branch_by_id(record.branch_id)
            branch_name = branch.name if branch else (record.branch_id or "Sin sucursal")
            return (
                f"Cita {record.id}\n"
                f"📅 {record.date} a las {record.time}\n"
                f"🏢 {branch_name}\n"
                f"Registrada: {TimezoneHelper.format_timestamp(record.created_at)}"
            )

        text = (
            f"Caso {record.id} ({record.kind})\n"
            f"Estado: *{record.status}*\n"
            f"Registrado: {TimezoneHelper.format_timestamp(record.created_at)}"
        )
        if record.estimate is not None:
            text += f"\nEstimado: {messages.format_colones(record.estimate)}"
        return text
