"""
Módulo LLM para el respaldo de texto libre con OpenAI.
"""

from .base_llm import BaseLLM, LLMError, LLMResponse
from .openai_provider import OpenAIProvider
from .llm_manager import LLMManager

__all__ = ['BaseLLM', 'LLMError', 'LLMResponse', 'LLMManager', 'OpenAIProvider']
