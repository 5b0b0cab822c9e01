"""채팅 전송(Transport) 계층

한 번의 채팅 요청 {model, instruction, history, message}를 원격으로 보내고
응답 텍스트 조각을 스트리밍합니다. 모든 실패는 TransportError로 통일합니다.

구현:
- HTTPChatTransport: 채팅 프록시 엔드포인트로 POST, 청크 단위 plain-text 스트림 수신 (httpx)
- LLMChatTransport: LLM SDK(BaseLLMService.stream_generate)로 직접 호출
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator, Literal

import httpx

from eduvane.errors import TransportError
from eduvane.services.llm.base import BaseLLMService, Message


@dataclass(frozen=True)
class ChatTurn:
    """대화 한 턴 (canonical history 항목)"""

    role: Literal["user", "model"]
    text: str


@dataclass(frozen=True)
class ChatRequest:
    """채팅 요청 (history에는 이번 message가 포함되지 않음)"""

    model: str
    instruction: str
    message: str
    history: tuple[ChatTurn, ...] = field(default_factory=tuple)


class BaseChatTransport(ABC):
    """채팅 전송 기본 추상 클래스"""

    name: str = "base"

    @abstractmethod
    def stream(self, request: ChatRequest) -> Iterator[str]:
        """요청을 보내고 응답 텍스트 조각을 yield

        Raises:
            TransportError: 연결 실패, 비정상 응답, 응답 본문 없음, 스트림 중단
        """
        pass

    def close(self) -> None:
        """보유한 연결 자원 해제 (기본: 없음)"""


class HTTPChatTransport(BaseChatTransport):
    """채팅 프록시(HTTP) 전송

    프록시는 전체 바이트 스트림을 구조 없는 plain text로 흘려보냅니다.
    """

    name = "http"

    def __init__(
        self,
        url: str,
        timeout: float = 60.0,
        client: httpx.Client | None = None,
    ):
        """
        Args:
            url: 채팅 엔드포인트 URL
            timeout: 요청 타임아웃 (초)
            client: 주입할 httpx.Client (테스트용, None이면 생성)
        """
        self.url = url
        self.timeout = timeout
        self.client = client or httpx.Client(timeout=timeout)

    @staticmethod
    def build_payload(request: ChatRequest) -> dict:
        """프록시 요청 본문 구성"""
        return {
            "model": request.model,
            "systemInstruction": request.instruction,
            "history": [
                {"role": turn.role, "parts": [{"text": turn.text}]} for turn in request.history
            ],
            "message": request.message,
        }

    def stream(self, request: ChatRequest) -> Iterator[str]:
        received = False
        try:
            with self.client.stream("POST", self.url, json=self.build_payload(request)) as response:
                if not response.is_success:
                    raise TransportError(f"Chat request failed: HTTP {response.status_code}")
                for chunk in response.iter_text():
                    if chunk:
                        received = True
                        yield chunk
        except httpx.HTTPError as e:
            raise TransportError(f"Chat proxy unreachable: {e}") from e

        if not received:
            raise TransportError("No response body")

    def close(self) -> None:
        self.client.close()


class LLMChatTransport(BaseChatTransport):
    """LLM SDK 직접 호출 전송"""

    name = "llm"

    def __init__(
        self,
        llm_service: BaseLLMService,
        model: str | None = None,
        temperature: float = 0.7,
    ):
        """
        Args:
            llm_service: LLM 서비스 인스턴스
            model: 요청 모델 대신 사용할 모델 (다른 제공자로 폴백할 때)
            temperature: 샘플링 온도
        """
        self.llm_service = llm_service
        self.model = model
        self.temperature = temperature

    @staticmethod
    def build_messages(request: ChatRequest) -> list[Message]:
        """LLM 메시지 구성 (model 역할은 assistant로 변환)"""
        messages = [Message(role="system", content=request.instruction)]
        for turn in request.history:
            role = "assistant" if turn.role == "model" else "user"
            messages.append(Message(role=role, content=turn.text))
        messages.append(Message(role="user", content=request.message))
        return messages

    def stream(self, request: ChatRequest) -> Iterator[str]:
        messages = self.build_messages(request)
        try:
            yield from self.llm_service.stream_generate(
                messages,
                model=self.model or request.model,
                temperature=self.temperature,
            )
        except TransportError:
            raise
        except Exception as e:
            # SDK별 예외(openai.APIError, anthropic.APIError 등)를 통일
            raise TransportError(f"LLM chat call failed ({self.llm_service.provider}): {e}") from e
