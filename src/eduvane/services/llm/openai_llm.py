"""OpenAI API LLM 구현

- generate(): Chat Completions (JSON 모드, 이미지/PDF 첨부)
- stream_generate(): Responses API 스트리밍 (학습과제 채팅)
"""

from typing import Iterator

from openai import OpenAI

from eduvane.settings import settings

from .base import Attachment, BaseLLMService, LLMResponse, Message


def _data_url(attachment: Attachment) -> str:
    return f"data:{attachment.mime_type};base64,{attachment.data}"


def _chat_content(msg: Message) -> str | list[dict]:
    """Chat Completions content (첨부가 있으면 멀티모달 파트 배열)"""
    if not msg.attachments:
        return msg.content

    parts: list[dict] = []
    for attachment in msg.attachments:
        if attachment.is_pdf:
            parts.append({
                "type": "file",
                "file": {"filename": "upload.pdf", "file_data": _data_url(attachment)},
            })
        else:
            parts.append({"type": "image_url", "image_url": {"url": _data_url(attachment)}})
    parts.append({"type": "text", "text": msg.content})
    return parts


def _response_content(msg: Message) -> str | list[dict]:
    """Responses API input content (첨부는 input_image / input_file 파트)"""
    if not msg.attachments:
        return msg.content

    parts: list[dict] = []
    for attachment in msg.attachments:
        if attachment.is_pdf:
            parts.append({"type": "input_file", "filename": "upload.pdf", "file_data": _data_url(attachment)})
        else:
            parts.append({"type": "input_image", "image_url": _data_url(attachment)})
    parts.append({"type": "input_text", "text": msg.content})
    return parts


class OpenAILLM(BaseLLMService):
    """OpenAI API를 사용한 LLM 서비스"""

    provider = "openai"

    def __init__(self, api_key: str | None = None, model: str | None = None):
        """OpenAI 클라이언트 초기화

        Args:
            api_key: OpenAI API 키 (None이면 환경변수 사용)
            model: 기본 모델명 (None이면 settings.openai_model)
        """
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_model
        self.client = OpenAI(api_key=self.api_key)

    def generate(self, messages: list[Message], **kwargs) -> LLMResponse:
        """구조화/멀티모달 단발 호출

        Args:
            messages: 대화 메시지 리스트
            **kwargs: model, temperature, max_tokens, json_output 등

        Returns:
            LLMResponse 객체
        """
        model = kwargs.pop("model", None) or self.model
        if kwargs.pop("json_output", False):
            kwargs["response_format"] = {"type": "json_object"}

        response = self.client.chat.completions.create(
            model=model,
            messages=[{"role": msg.role, "content": _chat_content(msg)} for msg in messages],
            **kwargs,
        )

        usage = response.usage
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=response.model,
            usage={
                "prompt_tokens": usage.prompt_tokens,
                "completion_tokens": usage.completion_tokens,
                "total_tokens": usage.total_tokens,
            },
            metadata={"provider": "openai"},
        )

    def _stream_request(self, messages: list[Message], kwargs: dict) -> dict:
        """Responses API 요청 구성 (system → instructions, 나머지 → input)"""
        system_parts = [msg.content for msg in messages if msg.role == "system"]
        conversation = [
            {"role": msg.role, "content": _response_content(msg)}
            for msg in messages
            if msg.role != "system"
        ]

        request = {"model": kwargs.get("model") or self.model, "input": conversation}
        if system_parts:
            request["instructions"] = "\n\n".join(system_parts)
        if kwargs.get("temperature") is not None:
            request["temperature"] = kwargs["temperature"]
        max_tokens = kwargs.get("max_output_tokens") or kwargs.get("max_tokens")
        if max_tokens:
            request["max_output_tokens"] = max_tokens
        return request

    def stream_generate(self, messages: list[Message], **kwargs) -> Iterator[str]:
        """Responses API 스트리밍 (텍스트 델타만 yield)"""
        with self.client.responses.stream(**self._stream_request(messages, kwargs)) as stream:
            for event in stream:
                if getattr(event, "type", None) != "response.output_text.delta":
                    continue
                if event.delta:
                    yield event.delta
