import logging

from app.models.records import CaseReport
from app.models.session import Flow, Session, State
from app.services.conversation import messages
from app.services.conversation.flows.base_flow import BaseFlow, FlowContext, FlowResult, Step
from app.services.conversation.flows.normalizers import numbered_options, option_label
from app.services.conversation.flows.report_formatter import ReportFormatter
from .remote_classifier import is_remote_candidate

logger = logging.getLogger(__name__)

CONTACT_TIMES = {
    "1": "Mañana (8:00-12:00)",
    "2": "Tarde (12:00-17:00)",
    "3": "Noche (17:00-20:00)",
    "4": "Cualquier horario",
}

DEVICE_TYPES = {
    "1": "Laptop",
    "2": "Computadora de escritorio",
    "3": "Todo en uno",
    "4": "Otro",
}

OPERATING_SYSTEMS = {
    "1": "Windows",
    "2": "macOS",
    "3": "Linux",
    "4": "No sé",
}


class ConsultFlow(BaseFlow):
    """
    Consulta técnica rápida: recoge datos de contacto y del equipo y al final
    recomienda soporte remoto o visita al taller según el síntoma.
    """

    flow = Flow.CONSULTA
    intro = "🩺 *Consulta técnica rápida*\nTe haremos unas preguntas cortas para ayudarte mejor."
    steps = (
        Step(State.CONSULTA_NOMBRE, "nombre", "¿Cuál es tu nombre completo?"),
        Step(State.CONSULTA_CORREO, "correo", "Gracias {nombre}. ¿Cuál es tu correo electrónico?"),
        Step(State.CONSULTA_ZONA, "zona", "¿En qué zona te encuentras? (barrio/ciudad)"),
        Step(
            State.CONSULTA_HORARIO,
            "horario",
            f"¿En qué horario prefieres que te contactemos?\n{numbered_options(CONTACT_TIMES)}",
            normalizer=option_label(CONTACT_TIMES),
        ),
        Step(
            State.CONSULTA_EQUIPO,
            "equipo",
            f"¿Qué tipo de equipo tienes?\n{numbered_options(DEVICE_TYPES)}",
            normalizer=option_label(DEVICE_TYPES),
        ),
        Step(State.CONSULTA_MARCA, "marca", "¿Cuál es la marca y modelo? (ej: HP Pavilion 15, Dell Inspiron)"),
        Step(
            State.CONSULTA_SISTEMA,
            "sistema",
            f"¿Qué sistema operativo usa?\n{numbered_options(OPERATING_SYSTEMS)}",
            normalizer=option_label(OPERATING_SYSTEMS),
        ),
        Step(State.CONSULTA_SINTOMA, "sintoma", "Describe el síntoma o problema principal."),
        Step(State.CONSULTA_DURACION, "duracion", "¿Desde cuándo ocurre?"),
        Step(
            State.CONSULTA_REPARACIONES,
            "reparaciones",
            "¿Le han hecho reparaciones o cambios recientemente? (si no, escribe \"no\")",
        ),
    )

    async def complete(self, session: Session, ctx: FlowContext) -> FlowResult:
        answers = dict(session.answers)
        remote = is_remote_candidate(answers.get("sintoma", ""))

        report = CaseReport(user_id=ctx.user_id, kind=self.flow.value, fields=answers, remote=remote)
        await ctx.ports.persist_report(report)
        await ctx.ports.notify_operator(ReportFormatter.operator_summary(report))

        logger.info(f"[CONSULTA] Caso {report.id} - remoto: {remote}")

        if remote:
            recommendation = (
                "💻 Por lo que describes, tu caso puede resolverse con *soporte remoto*. "
                "Un técnico te contactará en el horario elegido para conectarse a tu equipo."
            )
        else:
            recommendation = (
                "🏢 Por lo que describes, te recomendamos *traer el equipo a una sucursal* "
                "para un diagnóstico presencial. Puedes agendar escribiendo *agendar*."
            )

        return self.create_completion_response(
            session,
            f"Consulta registrada (ID: {report.id}).\n\n{recommendation}\n\n{messages.main_menu()}"
        )
