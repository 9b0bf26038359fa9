import app.logging_config
import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from app.api.dependencies import get_conversation_manager
from app.api.v1.admin import router as admin_router
from app.api.v1.webhook import router as webhook_router
from app.core.config import get_settings
from app.core.timezone_helper import TimezoneHelper

settings = get_settings()

os.environ['TZ'] = settings.TIMEZONE

logger = logging.getLogger(__name__)
shop_time = TimezoneHelper.get_shop_now()
logger.info(f"[TIMEZONE] Configurado timezone {settings.TIMEZONE}. Hora actual: {shop_time.strftime('%d/%m/%Y %H:%M:%S %Z')}")


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    # Solo se cierra si algún request llegó a crear el gestor
    if get_conversation_manager.cache_info().currsize:
        await get_conversation_manager().close()


app = FastAPI(title=f"{settings.BUSINESS_NAME} – WhatsApp", lifespan=lifespan)

app.include_router(webhook_router)
app.include_router(admin_router)


@app.get("/health", response_class=PlainTextResponse)
async def health():
    return "ok"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
