import logging
from typing import Optional

from app.services.whatsapp import WhatsAppClient

logger = logging.getLogger(__name__)


class OperatorNotifier:
    """
    Envía resúmenes de casos y citas al WhatsApp del operador del taller.
    Si falta configuración, la notificación se omite.
    """

    def __init__(self, settings, client: Optional[WhatsAppClient] = None):
        self.operator_address = settings.OPERATOR_WHATSAPP_TO
        self.enabled = settings.notifications_enabled
        self.client = client or (WhatsAppClient(settings) if self.enabled else None)

    async def notify(self, text: str) -> bool:
        """
        Envía el texto al operador.

        Returns:
            bool: True si se envió, False si la notificación está desactivada

        Raises:
            WhatsAppAPIError: si Twilio rechaza el mensaje
        """
        if not self.enabled or self.client is None:
            logger.info("[NOTIFY] Notificaciones desactivadas, se omite el aviso al operador")
            return False

        await self.client.send_text(self.operator_address, text)
        logger.info(f"[NOTIFY] Aviso enviado al operador {self.operator_address}")
        return True
