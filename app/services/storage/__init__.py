"""
Módulo de almacenamiento de sesiones y registros.

Uso:
    from app.services.storage import build_stores
    session_store, record_store = build_stores(settings)
"""

import logging
from typing import Tuple

from .base import RecordStore, SessionStore, StorageError
from .json_store import JsonDocument, JsonRecordStore, JsonSessionStore
from .memory_store import InMemoryRecordStore, InMemorySessionStore

logger = logging.getLogger(__name__)

__all__ = [
    "SessionStore",
    "RecordStore",
    "StorageError",
    "InMemorySessionStore",
    "InMemoryRecordStore",
    "JsonDocument",
    "JsonSessionStore",
    "JsonRecordStore",
    "build_stores",
]


def build_stores(settings) -> Tuple[SessionStore, RecordStore]:
    """Elige el respaldo según DB_PATH: archivo JSON o memoria del proceso."""
    if settings.DB_PATH:
        document = JsonDocument(settings.DB_PATH)
        logger.info(f"[STORE] Usando documento JSON en {settings.DB_PATH}")
        return JsonSessionStore(document), JsonRecordStore(document)

    logger.info("[STORE] DB_PATH no configurado, usando almacenamiento en memoria")
    return InMemorySessionStore(), InMemoryRecordStore()
