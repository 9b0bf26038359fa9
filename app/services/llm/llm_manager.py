from typing import Optional
from .openai_provider import OpenAIProvider
from .base_llm import BaseLLM, LLMError
import logging

logger = logging.getLogger(__name__)

class LLMManager:
    """
    Coordinador del proveedor LLM para el respaldo de texto libre.
    Se inicializa de forma perezosa en la primera consulta.
    """

    def __init__(self, settings, provider: Optional[BaseLLM] = None):
        self.settings = settings
        self.llm_provider = provider
        self._initialized = provider is not None

    @property
    def enabled(self) -> bool:
        """La IA está habilitada si hay proveedor inyectado o API key."""
        return self.llm_provider is not None or self.settings.ai_enabled

    async def initialize(self):
        """Crea el cliente de OpenAI una sola vez."""
        if self._initialized:
            return

        try:
            provider = OpenAIProvider(self.settings)
            await provider.__aenter__()
            self.llm_provider = provider
            self._initialized = True
            logger.info("[LLM_MANAGER] Inicializado exitosamente")
        except Exception as e:
            logger.error(f"[LLM_MANAGER] Error en inicialización: {e}")
            raise

    async def complete(self, system_instruction: str, prompt: str, max_tokens: int = 300) -> str:
        """
        Genera texto para el usuario.

        Raises:
            LLMError: si la IA está desactivada o la llamada falla
        """
        if not self.enabled:
            raise LLMError("IA no configurada")

        await self.initialize()

        if not await self.llm_provider.is_available():
            raise LLMError("Proveedor no está disponible")

        logger.debug(f"[LLM_MANAGER] Consultando IA: {prompt[:50]}...")
        response = await self.llm_provider.generate_response(
            prompt=prompt,
            system_prompt=system_instruction,
            max_tokens=max_tokens
        )
        logger.info(f"[LLM_MANAGER] Respuesta en {response.response_time:.2f}s ({response.tokens_used} tokens)")
        return response.text

    async def close(self):
        """Libera el cliente del proveedor."""
        if self.llm_provider is not None and hasattr(self.llm_provider, "__aexit__"):
            await self.llm_provider.__aexit__(None, None, None)
