from typing import Dict

from app.models.session import Flow, Session, State
from app.services.conversation import messages
from app.services.conversation.flows.base_flow import BaseFlow, FlowContext, FlowResult
from app.services.conversation.flows.validators import AnswerValidators


class BranchesFlow(BaseFlow):
    """Muestra las sucursales y el detalle de la elegida. No genera registros."""

    flow = Flow.SUCURSALES

    def branch_handlers(self) -> Dict:
        return {State.SUCURSALES_SELECCION: self.process_selection}

    async def start(self, session: Session, ctx: FlowContext) -> FlowResult:
        session.enter(self.flow, State.SUCURSALES_SELECCION)
        return session, messages.branch_list(ctx.catalog.branches), False

    async def process_selection(self, session: Session, message: str, ctx: FlowContext) -> FlowResult:
        is_valid, error_msg, option = AnswerValidators.validate_option(message, len(ctx.catalog.branches))
        if not is_valid:
            return self.create_error_response(f"{error_msg}\n\n{messages.branch_list(ctx.catalog.branches)}", session)

        branch = ctx.catalog.branches[option - 1]
        session.reset()
        return (
            session,
            f"Has seleccionado: {messages.branch_details(branch)}\n\n{messages.main_menu()}",
            True
        )
