from functools import lru_cache
from pathlib import Path
from dotenv import load_dotenv
import os

load_dotenv(Path(__file__).resolve().parents[2] / ".env")


def _int_env(name: str, default: str) -> int:
    """Lee un entero del entorno con un error claro si el valor es inválido."""
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(f"Valor entero inválido para {name}: {raw!r}") from None


class Settings:
    """
    Configuración de la aplicación leída desde variables de entorno.
    Los valores opcionales ausentes desactivan la funcionalidad asociada
    (IA, notificaciones) en lugar de detener el proceso.
    """

    def __init__(self):
        # Servidor
        self.PORT: int = _int_env("PORT", "3000")
        self.BUSINESS_NAME: str = os.getenv("BUSINESS_NAME", "MPC Jsala")
        self.TIMEZONE: str = os.getenv("TIMEZONE", "America/Costa_Rica")

        # Administración
        self.ADMIN_TOKEN: str = os.getenv("ADMIN_TOKEN", "")

        # OpenAI
        self.OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
        self.LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
        self.AI_TIMEOUT: int = _int_env("AI_TIMEOUT", "20")

        # Twilio WhatsApp (notificaciones al operador)
        self.TWILIO_ACCOUNT_SID: str = os.getenv("TWILIO_ACCOUNT_SID", "")
        self.TWILIO_AUTH_TOKEN: str = os.getenv("TWILIO_AUTH_TOKEN", "")
        self.TWILIO_WHATSAPP_FROM: str = os.getenv("TWILIO_WHATSAPP_FROM", "")
        self.OPERATOR_WHATSAPP_TO: str = os.getenv("OPERATOR_WHATSAPP_TO", "")
        self.TWILIO_API_URL: str = os.getenv("TWILIO_API_URL", "https://api.twilio.com/2010-04-01")
        self.NOTIFY_TIMEOUT: int = _int_env("NOTIFY_TIMEOUT", "10")

        # Persistencia: vacío = memoria del proceso
        self.DB_PATH: str = os.getenv("DB_PATH", "")

        # Logging
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_DIR: str = os.getenv("LOG_DIR", str(Path(__file__).resolve().parents[2] / "logs"))

    @property
    def ai_enabled(self) -> bool:
        return bool(self.OPENAI_API_KEY)

    @property
    def notifications_enabled(self) -> bool:
        return all([
            self.TWILIO_ACCOUNT_SID,
            self.TWILIO_AUTH_TOKEN,
            self.TWILIO_WHATSAPP_FROM,
            self.OPERATOR_WHATSAPP_TO,
        ])


@lru_cache
def get_settings() -> Settings:
    return Settings()
