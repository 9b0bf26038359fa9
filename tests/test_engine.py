"""Recuperación de errores, respaldo de texto libre y aislamiento de los puertos."""

import pytest

from app.models.session import Flow, Session, State
from app.services.conversation import messages
from app.services.conversation.flows import BaseFlow, FlowContext, Step, build_flows
from app.services.storage import InMemorySessionStore
from conftest import FailingRecordStore, FakeLLM, FakeNotifier, USER, make_manager, send_all


class TestUnknownState:

    @pytest.mark.asyncio
    async def test_corrupted_state_restarts(self, manager):
        await manager.session_store.upsert(Session(user_id=USER, state="paso_inexistente", flow="cita"))

        reply = await manager.process_message(USER, "hola")

        assert reply == messages.restart()
        session = await manager.session_store.get(USER)
        assert session.is_idle
        assert session.flow is None

    @pytest.mark.asyncio
    async def test_state_not_owned_by_flow_restarts(self, manager):
        await manager.session_store.upsert(Session(user_id=USER, state="cita_nombre", flow="reparacion"))

        reply = await manager.process_message(USER, "Ana")

        assert reply == messages.restart()
        assert (await manager.session_store.get(USER)).is_idle

    @pytest.mark.asyncio
    async def test_state_without_flow_restarts(self, manager):
        await manager.session_store.upsert(Session(user_id=USER, state="reparacion_nombre", flow=None))

        reply = await manager.process_message(USER, "Ana")

        assert reply == messages.restart()

    @pytest.mark.asyncio
    async def test_reset_keyword_recovers_corrupted_state(self, manager):
        await manager.session_store.upsert(Session(user_id=USER, state="???", flow="nada"))

        reply = await manager.process_message(USER, "menu")

        assert reply == messages.main_menu()
        assert (await manager.session_store.get(USER)).is_idle

    @pytest.mark.asyncio
    async def test_exception_inside_flow_restarts(self, manager, monkeypatch):
        async def boom(session, ctx):
            raise RuntimeError("falla inesperada")

        monkeypatch.setattr(manager.flows["asesor"], "complete", boom)

        replies = await send_all(manager, ["hola", "9", "Carla", "Ayuda"])

        assert replies[-1] == messages.restart()
        assert (await manager.session_store.get(USER)).is_idle


class TestEngineErrors:

    @pytest.mark.asyncio
    async def test_session_store_failure_returns_apology(self, manager, monkeypatch):
        async def broken_get(user_id):
            raise OSError("sin disco")

        monkeypatch.setattr(manager.session_store, "get", broken_get)

        reply = await manager.process_message(USER, "hola")

        assert reply == messages.processing_error()

    @pytest.mark.asyncio
    async def test_session_save_failure_keeps_reply(self, manager, monkeypatch):
        async def broken_upsert(session):
            raise OSError("sin disco")

        monkeypatch.setattr(manager.session_store, "upsert", broken_upsert)

        reply = await manager.process_message(USER, "hola")

        assert reply == messages.welcome()


class TestPortIsolation:

    @pytest.mark.asyncio
    async def test_failed_persist_and_notify_still_complete(self):
        notifier = FakeNotifier(fail=True)
        manager = make_manager(records=FailingRecordStore(), notifier=notifier)

        replies = await send_all(manager, ["hola", "1", "virus", "Ana", "llevar"])

        assert "Caso registrado" in replies[-1]
        assert "₡20.000" in replies[-1]
        assert (await manager.session_store.get(USER)).is_idle

    @pytest.mark.asyncio
    async def test_failed_appointment_persist_still_confirms(self):
        manager = make_manager(records=FailingRecordStore())

        replies = await send_all(manager, ["hola", "5", "1", "Luis", "mismo", "mañana", "10:00", "si"])

        assert "Cita agendada con éxito" in replies[-1]
        assert (await manager.session_store.get(USER)).is_idle


class TestFreeTextFallback:

    @pytest.mark.asyncio
    async def test_free_text_without_ai(self, manager):
        replies = await send_all(manager, ["hola", "mi compu hace ruido"])

        assert replies[-1] == messages.generic_fallback()

    @pytest.mark.asyncio
    async def test_ai_prefix_without_ai(self, manager):
        replies = await send_all(manager, ["hola", "AI qué es la RAM"])

        assert "no está configurado" in replies[-1]

    @pytest.mark.asyncio
    async def test_ai_prefix_with_ai(self):
        llm = FakeLLM(answer="La RAM es memoria temporal.")
        manager = make_manager(llm_provider=llm)

        replies = await send_all(manager, ["hola", "gpt qué es la RAM"])

        assert replies[-1] == "La RAM es memoria temporal."
        assert llm.calls[0]["prompt"] == "qué es la RAM"
        assert llm.calls[0]["max_tokens"] == 500

    @pytest.mark.asyncio
    async def test_ai_prefix_failure(self):
        manager = make_manager(llm_provider=FakeLLM(fail=True))

        replies = await send_all(manager, ["hola", "chat hola"])

        assert replies[-1] == "Error en IA: intenta más tarde."

    @pytest.mark.asyncio
    async def test_free_text_with_ai_adds_footer(self):
        llm = FakeLLM(answer="Revisa el ventilador.")
        manager = make_manager(llm_provider=llm)

        replies = await send_all(manager, ["hola", "mi compu hace ruido"])

        assert replies[-1].startswith("Revisa el ventilador.")
        assert replies[-1].endswith("Escribe \"MENU\" para volver al menú principal.")
        assert "mi compu hace ruido" in llm.calls[0]["prompt"]
        assert llm.calls[0]["max_tokens"] == 300

    @pytest.mark.asyncio
    async def test_free_text_ai_failure_falls_back(self):
        manager = make_manager(llm_provider=FakeLLM(fail=True))

        replies = await send_all(manager, ["hola", "mi compu hace ruido"])

        assert replies[-1] == messages.generic_fallback()

    @pytest.mark.asyncio
    async def test_ai_is_not_used_inside_a_flow(self):
        llm = FakeLLM()
        manager = make_manager(llm_provider=llm)

        await send_all(manager, ["hola", "9", "ai Carla"])

        assert llm.calls == []
        session = await manager.session_store.get(USER)
        assert session.answers["nombre"] == "ai Carla"


class TestSessionIsolation:

    @pytest.mark.asyncio
    async def test_sessions_are_per_user(self):
        manager = make_manager()
        await send_all(manager, ["hola", "1"], user_id="whatsapp:+1")
        await send_all(manager, ["hola"], user_id="whatsapp:+2")

        assert (await manager.session_store.get("whatsapp:+1")).flow == "reparacion"
        assert (await manager.session_store.get("whatsapp:+2")).is_idle

    @pytest.mark.asyncio
    async def test_store_returns_copies(self):
        store = InMemorySessionStore()
        await store.upsert(Session(user_id=USER))

        session = await store.get(USER)
        session.answers["nombre"] = "Ana"

        assert (await store.get(USER)).answers == {}


class _StepsWithoutComplete(BaseFlow):
    flow = Flow.ASESOR
    steps = (Step(State.ASESOR_NOMBRE, "nombre", "¿Cuál es tu nombre?"),)


class TestFlowCompletion:

    def test_linear_flows_define_complete(self):
        for name, flow in build_flows().items():
            finishes_by_steps = flow.steps and type(flow).after_steps is BaseFlow.after_steps
            if finishes_by_steps:
                assert type(flow).complete is not BaseFlow.complete, name

    @pytest.mark.asyncio
    async def test_last_step_without_complete_raises(self):
        flow = _StepsWithoutComplete()
        session = Session(user_id=USER, state=State.ASESOR_NOMBRE.value, flow=Flow.ASESOR.value)
        ctx = FlowContext(user_id=USER, catalog=None, ports=None, records=None)

        with pytest.raises(NotImplementedError):
            await flow.process_message(session, "Ana", ctx)
