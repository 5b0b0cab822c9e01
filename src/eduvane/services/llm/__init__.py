"""LLM 서비스 (OpenAI / Anthropic / Dummy)"""

from .base import Attachment, BaseLLMService, LLMResponse, Message
from .factory import get_llm_service

__all__ = [
    "Attachment",
    "BaseLLMService",
    "LLMResponse",
    "Message",
    "get_llm_service",
]
