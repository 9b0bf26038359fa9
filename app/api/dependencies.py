"""
Construcción de las dependencias compartidas por los endpoints.

Los tests reemplazan estas funciones con `app.dependency_overrides`.
"""

import logging
from functools import lru_cache

from fastapi import Depends

from app.core.config import get_settings
from app.services.conversation import ConversationManager, ConversationPorts
from app.services.llm import LLMManager
from app.services.operator_notifier import OperatorNotifier
from app.services.storage import build_stores

logger = logging.getLogger(__name__)


@lru_cache()
def get_conversation_manager() -> ConversationManager:
    """Instancia única del gestor de conversaciones para el proceso."""
    settings = get_settings()
    session_store, record_store = build_stores(settings)
    ports = ConversationPorts(
        records=record_store,
        notifier=OperatorNotifier(settings),
        llm=LLMManager(settings),
    )
    logger.info(
        f"[DEPENDENCIES] Gestor listo - IA: {settings.ai_enabled}, "
        f"notificaciones: {settings.notifications_enabled}"
    )
    return ConversationManager(session_store, record_store, ports)


def get_session_store(manager: ConversationManager = Depends(get_conversation_manager)):
    return manager.session_store


def get_record_store(manager: ConversationManager = Depends(get_conversation_manager)):
    return manager.record_store
