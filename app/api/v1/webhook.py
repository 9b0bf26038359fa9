from fastapi import APIRouter, Depends, Form
from fastapi.responses import Response
from twilio.twiml.messaging_response import MessagingResponse
from app.api.dependencies import get_conversation_manager
from app.services.conversation import ConversationManager
from app.services.conversation import messages
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

# ============================================================================
# ENDPOINTS PRINCIPALES
# ============================================================================

@router.post("/whatsapp")
async def receive_message(
    From: str = Form(""),
    Body: str = Form(""),
    conversation_manager: ConversationManager = Depends(get_conversation_manager),
):
    """
    Endpoint principal para recibir mensajes de Twilio WhatsApp.
    Responde siempre 200 con TwiML de un solo mensaje.
    """
    user_id = From.strip()
    message_text = Body.strip()

    if not user_id:
        logger.warning("[WEBHOOK] Mensaje sin remitente, respuesta genérica")
        return _twiml_response(messages.processing_error())

    logger.info(f"[WEBHOOK] Mensaje recibido de {user_id}")
    reply = await conversation_manager.process_message(user_id, message_text)
    return _twiml_response(reply)

# ============================================================================
# FUNCIONES PRIVADAS
# ============================================================================

def _twiml_response(text: str) -> Response:
    """Envuelve el texto en una respuesta TwiML."""
    twiml = MessagingResponse()
    twiml.message(text)
    return Response(content=str(twiml), media_type="text/xml")
