"""Fixtures compartidas: almacenes en memoria, notificador y LLM falsos."""

from typing import List, Optional

import pytest

from app.core.config import get_settings
from app.services.conversation import ConversationManager, ConversationPorts
from app.services.llm import BaseLLM, LLMError, LLMManager, LLMResponse
from app.services.storage import InMemoryRecordStore, InMemorySessionStore

USER = "whatsapp:+50688887777"
OTHER_USER = "whatsapp:+50611112222"


class FakeNotifier:
    """Guarda los avisos en lugar de enviarlos por Twilio."""

    def __init__(self, fail: bool = False):
        self.sent: List[str] = []
        self.fail = fail

    async def notify(self, text: str) -> bool:
        if self.fail:
            raise RuntimeError("twilio caído")
        self.sent.append(text)
        return True


class FakeLLM(BaseLLM):
    """Proveedor que responde un texto fijo o falla."""

    def __init__(self, answer: str = "Respuesta de prueba", fail: bool = False):
        super().__init__()
        self.answer = answer
        self.fail = fail
        self.calls = []

    async def generate_response(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        model_name: Optional[str] = None,
        max_tokens: int = 300,
        temperature: float = 0.7
    ) -> LLMResponse:
        self.calls.append({"prompt": prompt, "system_prompt": system_prompt, "max_tokens": max_tokens})
        if self.fail:
            raise LLMError("sin servicio")
        return LLMResponse(text=self.answer, model="fake")

    async def is_available(self) -> bool:
        return True


class FailingRecordStore(InMemoryRecordStore):
    """Almacén cuyas escrituras siempre fallan."""

    async def add_appointment(self, appointment) -> None:
        raise OSError("disco lleno")

    async def add_report(self, report) -> None:
        raise OSError("disco lleno")


def make_manager(records=None, notifier=None, llm_provider=None):
    records = records if records is not None else InMemoryRecordStore()
    notifier = notifier if notifier is not None else FakeNotifier()
    llm = LLMManager(get_settings(), provider=llm_provider) if llm_provider is not None else None
    ports = ConversationPorts(records=records, notifier=notifier, llm=llm)
    return ConversationManager(InMemorySessionStore(), records, ports)


async def send_all(manager: ConversationManager, messages, user_id: str = USER) -> List[str]:
    """Envía los mensajes en orden y devuelve las respuestas."""
    return [await manager.process_message(user_id, text) for text in messages]


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def records():
    return InMemoryRecordStore()


@pytest.fixture
def manager(records, notifier):
    return make_manager(records=records, notifier=notifier)
