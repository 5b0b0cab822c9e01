"""Anthropic API LLM 구현"""

from typing import Iterator

from anthropic import Anthropic

from eduvane.settings import settings

from .base import Attachment, BaseLLMService, LLMResponse, Message

# Anthropic에는 JSON 모드가 없으므로 시스템 프롬프트에 지시를 덧붙임
JSON_ONLY_HINT = "\n\nRespond with a single JSON object only. Do not wrap it in markdown."


def _attachment_block(attachment: Attachment) -> dict:
    source = {"type": "base64", "media_type": attachment.mime_type, "data": attachment.data}
    if attachment.is_pdf:
        return {"type": "document", "source": source}
    return {"type": "image", "source": source}


def _to_anthropic_content(msg: Message) -> str | list[dict]:
    if not msg.attachments:
        return msg.content
    blocks = [_attachment_block(a) for a in msg.attachments]
    blocks.append({"type": "text", "text": msg.content})
    return blocks


class AnthropicLLM(BaseLLMService):
    """Anthropic API를 사용한 LLM 서비스"""

    provider = "anthropic"

    def __init__(self, api_key: str | None = None, model: str | None = None):
        """Anthropic 클라이언트 초기화

        Args:
            api_key: Anthropic API 키 (None이면 환경변수 사용)
            model: 모델명 (None이면 설정값 사용)
        """
        self.api_key = api_key or settings.anthropic_api_key
        self.model = model or settings.anthropic_model
        self.client = Anthropic(api_key=self.api_key)

    def _split_messages(self, messages: list[Message], json_output: bool) -> tuple[str | None, list[dict]]:
        """system 메시지 분리 및 role 변환"""
        system_message = None
        conversation_messages = []

        for msg in messages:
            if msg.role == "system":
                system_message = msg.content
            else:
                conversation_messages.append(
                    {"role": msg.role, "content": _to_anthropic_content(msg)}
                )

        if json_output:
            system_message = (system_message or "") + JSON_ONLY_HINT
        return system_message, conversation_messages

    def _request_kwargs(self, messages: list[Message], kwargs: dict) -> dict:
        json_output = kwargs.pop("json_output", False)
        system_message, conversation_messages = self._split_messages(messages, json_output)
        request = {
            "model": kwargs.pop("model", None) or self.model,
            "max_tokens": kwargs.pop("max_tokens", 4096),
            "messages": conversation_messages,
            **kwargs,
        }
        if system_message:
            request["system"] = system_message
        return request

    def generate(self, messages: list[Message], **kwargs) -> LLMResponse:
        """메시지를 기반으로 응답 생성

        Args:
            messages: 대화 메시지 리스트
            **kwargs: 추가 파라미터 (model, temperature, max_tokens, json_output 등)

        Returns:
            LLMResponse 객체
        """
        response = self.client.messages.create(**self._request_kwargs(messages, kwargs))

        # 응답 변환 (텍스트 블록만 연결)
        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        return LLMResponse(
            content=text,
            model=response.model,
            usage={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            },
            metadata={"provider": "anthropic", "stop_reason": response.stop_reason},
        )

    def stream_generate(self, messages: list[Message], **kwargs) -> Iterator[str]:
        """메시지를 기반으로 응답 생성 (스트리밍)

        Yields:
            응답 텍스트 조각(델타)
        """
        with self.client.messages.stream(**self._request_kwargs(messages, kwargs)) as stream:
            for text in stream.text_stream:
                if text:
                    yield text
