"""Servicios externos: aviso al operador, IA y puertos."""

import httpx
import pytest

from app.core.config import Settings
from app.models.records import CaseReport
from app.services.conversation import ConversationPorts
from app.services.llm import LLMError, LLMManager, OpenAIProvider
from app.services.operator_notifier import OperatorNotifier
from app.services.whatsapp import WhatsAppAPIError, WhatsAppClient
from conftest import FailingRecordStore, FakeLLM, USER


@pytest.fixture
def twilio_settings(monkeypatch):
    monkeypatch.setenv("TWILIO_ACCOUNT_SID", "AC123")
    monkeypatch.setenv("TWILIO_AUTH_TOKEN", "secreto")
    monkeypatch.setenv("TWILIO_WHATSAPP_FROM", "+14155238886")
    monkeypatch.setenv("OPERATOR_WHATSAPP_TO", "+50688898177")
    return Settings()


class RecordingClient:

    def __init__(self):
        self.sent = []

    async def send_text(self, to, text):
        self.sent.append((to, text))
        return {"sid": "SM1"}


class TestWhatsAppClient:

    def test_builds_twilio_url_and_sender(self, twilio_settings):
        client = WhatsAppClient(twilio_settings)

        assert client.url.endswith("/Accounts/AC123/Messages.json")
        assert client.sender == "whatsapp:+14155238886"
        assert client.auth == ("AC123", "secreto")

    @pytest.mark.asyncio
    async def test_http_error_becomes_domain_error(self, twilio_settings, monkeypatch):
        real_async_client = httpx.AsyncClient

        def handler(request):
            assert request.url.path.endswith("/Messages.json")
            return httpx.Response(400, text="bad number")

        def fake_async_client(**kwargs):
            return real_async_client(transport=httpx.MockTransport(handler), **kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", fake_async_client)

        with pytest.raises(WhatsAppAPIError):
            await WhatsAppClient(twilio_settings).send_text("+50688898177", "hola")


class TestOperatorNotifier:

    @pytest.mark.asyncio
    async def test_disabled_without_configuration(self, monkeypatch):
        monkeypatch.delenv("OPERATOR_WHATSAPP_TO", raising=False)
        notifier = OperatorNotifier(Settings())

        assert await notifier.notify("hola") is False

    @pytest.mark.asyncio
    async def test_sends_to_operator(self, twilio_settings):
        client = RecordingClient()
        notifier = OperatorNotifier(twilio_settings, client=client)

        assert await notifier.notify("Nuevo caso") is True
        assert client.sent == [("+50688898177", "Nuevo caso")]


class TestLLM:

    def test_provider_requires_api_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        with pytest.raises(LLMError):
            OpenAIProvider(Settings())

    @pytest.mark.asyncio
    async def test_manager_disabled_raises(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        manager = LLMManager(Settings())

        assert not manager.enabled
        with pytest.raises(LLMError):
            await manager.complete("sistema", "pregunta")

    @pytest.mark.asyncio
    async def test_manager_uses_provider(self):
        llm = FakeLLM(answer="respuesta")
        manager = LLMManager(Settings(), provider=llm)

        assert await manager.complete("sistema", "pregunta", max_tokens=50) == "respuesta"
        assert llm.calls == [{"prompt": "pregunta", "system_prompt": "sistema", "max_tokens": 50}]


class TestConversationPorts:

    @pytest.mark.asyncio
    async def test_failures_are_absorbed(self):
        class BrokenNotifier:
            async def notify(self, text):
                raise WhatsAppAPIError("timeout")

        ports = ConversationPorts(
            records=FailingRecordStore(),
            notifier=BrokenNotifier(),
            llm=LLMManager(Settings(), provider=FakeLLM(fail=True)),
        )

        assert await ports.persist_report(CaseReport(user_id=USER, kind="asesor")) is False
        assert await ports.notify_operator("hola") is False
        assert await ports.complete_with_ai("sistema", "hola") is None

    @pytest.mark.asyncio
    async def test_without_notifier_or_ai(self, records):
        ports = ConversationPorts(records=records)

        assert not ports.ai_enabled
        assert await ports.notify_operator("hola") is False
        assert await ports.complete_with_ai("sistema", "hola") is None
        assert await ports.persist_report(CaseReport(user_id=USER, kind="asesor")) is True
        assert len(await records.list_reports()) == 1
