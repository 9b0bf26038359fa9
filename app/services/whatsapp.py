import httpx, logging
from app.core.config import get_settings
logger = logging.getLogger(__name__)


class WhatsAppAPIError(Exception):
    """Error al llamar a la API de mensajes de Twilio."""


class WhatsAppClient:
    """
    Encapsula las llamadas a la API REST de Twilio para WhatsApp.
    Responsabilidad única: enviar mensajes salientes.
    """
    def __init__(self, settings=None):
        settings = settings or get_settings()
        self.url = f"{settings.TWILIO_API_URL}/Accounts/{settings.TWILIO_ACCOUNT_SID}/Messages.json"
        self.auth = (settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)
        self.sender = self._as_whatsapp(settings.TWILIO_WHATSAPP_FROM)
        self.timeout = settings.NOTIFY_TIMEOUT

    @staticmethod
    def _as_whatsapp(address: str) -> str:
        return address if address.startswith("whatsapp:") else f"whatsapp:{address}"

    async def send_text(self, to: str, text: str):
        payload = {
            "From": self.sender,
            "To": self._as_whatsapp(to),
            "Body": text,
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                r = await client.post(self.url, data=payload, auth=self.auth)
                r.raise_for_status()
            except httpx.HTTPStatusError as exc:
                logger.error("Twilio %s – %s", exc.response.status_code, exc.response.text)
                # Propaga un error de dominio, no el de httpx
                raise WhatsAppAPIError(exc.response.text) from exc
            except httpx.RequestError as exc:
                logger.error("Twilio sin conexión – %s", exc)
                raise WhatsAppAPIError(str(exc)) from exc
        return r.json()
