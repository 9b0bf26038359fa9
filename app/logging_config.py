# app/logging_config.py
import logging
from pathlib import Path
from logging.handlers import TimedRotatingFileHandler

from app.core.config import get_settings

settings = get_settings()

LOG_LEVEL = settings.LOG_LEVEL.upper()    # DEBUG en desarrollo

# Crear el directorio de logs si no existe
LOGS_DIR = Path(settings.LOG_DIR)
LOGS_DIR.mkdir(parents=True, exist_ok=True)

LOG_FILE = LOGS_DIR / "bot.log"

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(),                                 # consola
        TimedRotatingFileHandler(LOG_FILE, when="midnight", interval=1, backupCount=30, encoding='utf-8'),  # Archivo con rotación diaria y retención de 30 días
    ],
    force=True,    # sobreescribe config que ponga uvicorn
)

# httpx registra cada request en INFO; solo interesan los errores
logging.getLogger("httpx").setLevel(logging.WARNING)
