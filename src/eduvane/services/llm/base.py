"""LLM 서비스 기본 인터페이스

분석 파이프라인(perceive/interpret/reason)은 generate()를,
학습과제 채팅 폴백 전송은 stream_generate()를 사용합니다.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class Attachment:
    """업로드 파일 첨부 (base64 인코딩)"""

    data: str
    mime_type: str

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == "application/pdf"


@dataclass
class Message:
    """LLM 메시지 (role: system | user | assistant)"""

    role: str
    content: str
    attachments: list[Attachment] = field(default_factory=list)


@dataclass
class LLMResponse:
    """단발 호출 응답"""

    content: str
    model: str | None = None
    usage: dict | None = None
    metadata: dict | None = None


class BaseLLMService(ABC):
    """LLM 제공자 공통 인터페이스

    호출별 kwargs:
        model: 모델 오버라이드 (없으면 서비스 기본 모델)
        json_output: True이면 JSON 객체 하나만 출력하도록 요청
        temperature, max_tokens: 제공자에 그대로 전달
    """

    provider: str = "base"
    model: str | None = None

    @abstractmethod
    def generate(self, messages: list[Message], **kwargs) -> LLMResponse:
        """전체 응답을 한 번에 생성"""

    def stream_generate(self, messages: list[Message], **kwargs) -> Iterator[str]:
        """응답을 텍스트 조각 단위로 생성

        스트리밍을 지원하지 않는 제공자는 전체 응답을 한 조각으로 yield합니다.
        """
        yield self.generate(messages, **kwargs).content

    def chat(self, user_message: str, system_message: str | None = None, **kwargs) -> str:
        """시스템/사용자 메시지 한 쌍으로 단발 호출"""
        messages = [Message(role="user", content=user_message)]
        if system_message:
            messages.insert(0, Message(role="system", content=system_message))
        return self.generate(messages, **kwargs).content
