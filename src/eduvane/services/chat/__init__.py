"""채팅 세션/전송 계층

구성:
- ChatSession: canonical history 보유, 스트리밍 send, primary → fallback 전환
- HTTPChatTransport / LLMChatTransport: 채팅 요청 전송 구현
- ChatSessionFactory: 같은 전송 구성으로 세션 생성
"""

from .factory import ChatSessionFactory, get_chat_session_factory
from .session import ChatSession
from .transports import (
    BaseChatTransport,
    ChatRequest,
    ChatTurn,
    HTTPChatTransport,
    LLMChatTransport,
)

__all__ = [
    "BaseChatTransport",
    "ChatRequest",
    "ChatSession",
    "ChatSessionFactory",
    "ChatTurn",
    "HTTPChatTransport",
    "LLMChatTransport",
    "get_chat_session_factory",
]
