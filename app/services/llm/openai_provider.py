import openai
import time
import logging
from typing import Optional
from .base_llm import BaseLLM, LLMResponse, LLMError

logger = logging.getLogger(__name__)

class OpenAIProvider(BaseLLM):
    """
    Proveedor OpenAI para respuestas de soporte técnico en texto libre.
    """

    def __init__(self, settings):
        super().__init__()
        self.client = None
        self.api_key = settings.OPENAI_API_KEY
        self.model = settings.LLM_MODEL  # Modelo económico y rápido
        self.timeout = settings.AI_TIMEOUT

        if not self.api_key:
            raise LLMError("OPENAI_API_KEY no configurada")

    async def __aenter__(self):
        """Inicializa el cliente de OpenAI."""
        try:
            self.client = openai.AsyncOpenAI(api_key=self.api_key, timeout=self.timeout)
            logger.info("[OPENAI] Cliente inicializado correctamente")
            return self
        except Exception as e:
            logger.error(f"[OPENAI] Error inicializando cliente: {e}")
            raise LLMError(f"Error inicializando OpenAI: {e}") from e

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Limpia recursos."""
        if self.client is not None:
            await self.client.close()
        self.client = None

    async def generate_response(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        model_name: Optional[str] = None,
        max_tokens: int = 300,
        temperature: float = 0.7
    ) -> LLMResponse:
        """Genera respuesta usando OpenAI."""
        if not self.client:
            raise LLMError("Cliente OpenAI no inicializado")

        start_time = time.time()
        model = model_name or self.model

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature
            )
        except openai.OpenAIError as e:
            logger.error(f"[OPENAI] Error generando respuesta: {e}")
            raise LLMError(f"Error en OpenAI: {str(e)}") from e

        content = (response.choices[0].message.content or "").strip() if response.choices else ""
        if not content:
            raise LLMError("OpenAI devolvió una respuesta vacía")

        usage = response.usage
        return LLMResponse(
            text=content,
            model=model,
            tokens_used=usage.total_tokens if usage else 0,
            response_time=time.time() - start_time,
            metadata={
                "finish_reason": response.choices[0].finish_reason,
                "prompt_tokens": usage.prompt_tokens if usage else 0,
                "completion_tokens": usage.completion_tokens if usage else 0
            }
        )

    async def is_available(self) -> bool:
        """El proveedor está disponible una vez creado el cliente."""
        return self.client is not None
