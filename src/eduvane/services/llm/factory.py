"""LLM 서비스 팩토리"""

from eduvane.errors import ConfigurationError
from eduvane.settings import settings

from .anthropic_llm import AnthropicLLM
from .base import BaseLLMService
from .dummy_llm import DummyLLM
from .openai_llm import OpenAILLM


def get_llm_service(provider: str | None = None) -> BaseLLMService:
    """설정에 따라 적절한 LLM 서비스 반환

    Args:
        provider: 제공자 이름 (None이면 settings.llm_provider)

    Returns:
        BaseLLMService 인스턴스

    Raises:
        ConfigurationError: 지원하지 않는 제공자이거나 API 키가 없을 때
    """
    provider = provider or settings.llm_provider

    if provider == "openai":
        if not settings.openai_api_key:
            raise ConfigurationError("Configuration Error: Missing API key for OpenAI (OPENAI_API_KEY).")
        return OpenAILLM()
    elif provider == "anthropic":
        if not settings.anthropic_api_key:
            raise ConfigurationError(
                "Configuration Error: Missing API key for Anthropic (ANTHROPIC_API_KEY)."
            )
        return AnthropicLLM()
    elif provider == "dummy":
        return DummyLLM()
    else:
        raise ConfigurationError(f"지원하지 않는 LLM 제공자: {provider}")
