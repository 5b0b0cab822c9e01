"""채팅 세션 팩토리

설정에 따라 primary/fallback 전송을 구성합니다.

- CHAT_PROXY_URL 이 있으면: primary = HTTP 프록시, fallback = LLM 직접 호출 (llm_provider)
- 없으면: primary = LLM 직접 호출 (llm_provider), fallback = llm_fallback_provider (선택)
"""

from dataclasses import dataclass

from eduvane.services.llm.factory import get_llm_service
from eduvane.settings import settings

from .session import ChatSession
from .transports import BaseChatTransport, HTTPChatTransport, LLMChatTransport


@dataclass
class ChatSessionFactory:
    """같은 전송 구성을 공유하는 ChatSession 생성기"""

    primary: BaseChatTransport
    fallback: BaseChatTransport | None = None
    model: str | None = None

    def create(self, system_instruction: str) -> ChatSession:
        """새 세션 생성 (history는 세션마다 독립)"""
        return ChatSession(
            system_instruction=system_instruction,
            primary=self.primary,
            fallback=self.fallback,
            model=self.model,
        )

    def close(self) -> None:
        """primary/fallback 전송의 연결 자원 해제"""
        self.primary.close()
        if self.fallback is not None:
            self.fallback.close()

    def __enter__(self) -> "ChatSessionFactory":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _llm_transport(provider: str | None = None) -> LLMChatTransport:
    """LLM 직접 호출 전송 생성

    model_chat 은 OpenAI 모델명이므로 다른 제공자는 자체 기본 모델로 고정합니다.
    """
    llm_service = get_llm_service(provider)
    override = None if llm_service.provider == "openai" else llm_service.model
    return LLMChatTransport(llm_service, model=override)


def get_chat_session_factory() -> ChatSessionFactory:
    """설정에 따라 ChatSessionFactory 반환

    Raises:
        ConfigurationError: 필요한 LLM 제공자의 API 키가 없을 때
    """
    if settings.chat_proxy_url:
        primary: BaseChatTransport = HTTPChatTransport(
            settings.chat_proxy_url, timeout=settings.chat_proxy_timeout
        )
        fallback: BaseChatTransport | None = _llm_transport()
    else:
        primary = _llm_transport()
        fallback = None
        if settings.llm_fallback_provider:
            fallback = _llm_transport(settings.llm_fallback_provider)

    return ChatSessionFactory(primary=primary, fallback=fallback, model=settings.model_chat)
