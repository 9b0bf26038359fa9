"""
Módulo de gestión de conversaciones para WhatsApp Bot.

"""

# Importación principal para el webhook
from .conversation_manager import ConversationManager

# Componentes internos (para testing o uso avanzado)
from .flow_router import FlowRouter
from .ports import ConversationPorts
from .unknown_handler import UnknownIntentHandler

__all__ = [
    # Clase principal - usada por webhook
    "ConversationManager",

    # Componentes internos - para testing/debugging
    "FlowRouter",
    "ConversationPorts",
    "UnknownIntentHandler"
]
