"""분석 파이프라인 클라이언트 (AnalysisClient)

인식(perceive) → 해석(interpret) → 추론(reason) 세 단계의 원격 호출을
타입이 있는 요청/응답으로 감쌉니다. 호출 간 상태는 없습니다.
"""

import json
import logging
import re
from typing import TYPE_CHECKING

from eduvane.errors import EduvaneError, SchemaError, TransportError
from eduvane.models import AnalysisMode, AnalysisResult, InterpretationResult, UserRole
from eduvane.prompts import (
    INTERPRETATION_SYSTEM_PROMPT,
    INTERPRETATION_USER_TEMPLATE,
    PERCEPTION_SYSTEM_PROMPT,
    PERCEPTION_USER_PROMPT,
    REASONING_SYSTEM_PROMPT,
    REASONING_USER_TEMPLATE,
)
from eduvane.services.llm.base import Attachment, Message
from eduvane.settings import Settings, settings as default_settings

if TYPE_CHECKING:
    from eduvane.services.llm.base import BaseLLMService

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def parse_json_payload(text: str) -> dict:
    """LLM 응답에서 JSON 객체 파싱 (마크다운 코드펜스 제거)

    Raises:
        SchemaError: JSON 객체로 해석할 수 없을 때
    """
    cleaned = _FENCE_RE.sub("", (text or "").strip())
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        # 앞뒤에 설명 문장이 섞인 경우 가장 바깥 객체만 추출
        json_match = re.search(r"\{.*\}", cleaned, re.DOTALL)
        if not json_match:
            raise SchemaError("응답에서 JSON 객체를 찾지 못했습니다.")
        try:
            data = json.loads(json_match.group())
        except json.JSONDecodeError as e:
            raise SchemaError(f"JSON 파싱 실패: {e}") from e

    if not isinstance(data, dict):
        raise SchemaError(f"JSON 객체가 아닌 응답: {type(data).__name__}")
    return data


class AnalysisClient:
    """perceive / interpret / reason 원격 호출 래퍼"""

    def __init__(self, llm_service: "BaseLLMService", config: Settings | None = None):
        """
        Args:
            llm_service: LLM 서비스 인스턴스
            config: 모델 라우팅 설정 (None이면 전역 settings)
        """
        self.llm_service = llm_service
        self.config = config or default_settings

    def _route_model(self, model: str) -> str | None:
        """단계별 모델은 OpenAI 모델명이므로 다른 제공자는 자체 기본 모델 사용"""
        return model if self.llm_service.provider == "openai" else None

    def _call(self, messages: list[Message], **kwargs) -> str:
        try:
            response = self.llm_service.generate(messages, **kwargs)
        except EduvaneError:
            raise
        except Exception as e:
            raise TransportError(f"{self.llm_service.provider} 호출 실패: {e}") from e
        return response.content or ""

    def perceive(self, encoded_file: str, mime_type: str) -> str:
        """업로드 파일에서 원문 텍스트/설명 추출

        PDF는 문서 처리에 맞는 모델을, 이미지는 비전 모델을 사용합니다.

        Raises:
            TransportError: 호출 실패
            SchemaError: 추출된 텍스트가 비어 있을 때
        """
        is_pdf = mime_type == "application/pdf"
        model = self.config.model_perception_pdf if is_pdf else self.config.model_perception
        messages = [
            Message(role="system", content=PERCEPTION_SYSTEM_PROMPT),
            Message(
                role="user",
                content=PERCEPTION_USER_PROMPT,
                attachments=[Attachment(data=encoded_file, mime_type=mime_type)],
            ),
        ]
        text = self._call(messages, model=self._route_model(model), temperature=0.1).strip()
        if not text:
            raise SchemaError("인식 단계에서 텍스트를 추출하지 못했습니다.")
        logger.info(f"인식 완료: {len(text)}자 (model={model})")
        return text

    def interpret(self, text: str) -> InterpretationResult:
        """추출 텍스트에서 과목/주제/의도/소유 맥락 분류

        Raises:
            TransportError: 호출 실패
            SchemaError: 응답이 스키마와 맞지 않을 때
        """
        messages = [
            Message(role="system", content=INTERPRETATION_SYSTEM_PROMPT),
            Message(role="user", content=INTERPRETATION_USER_TEMPLATE.format(text=text)),
        ]
        content = self._call(
            messages, model=self._route_model(self.config.model_interpretation), json_output=True
        )
        data = parse_json_payload(content)
        try:
            return InterpretationResult.model_validate(data)
        except ValueError as e:
            raise SchemaError(f"해석 응답 스키마 불일치: {e}") from e

    def build_reasoning_prompt(
        self,
        text: str,
        interpretation: InterpretationResult,
        instruction: str | None = None,
        history: str | None = None,
        role: UserRole | None = None,
    ) -> str:
        """역할/요청/맥락/원문 순서로 추론 프롬프트 구성"""
        student = interpretation.ownership.student
        return REASONING_USER_TEMPLATE.format(
            role=role.value if role else "Unknown",
            ownership_type=interpretation.ownership.type,
            student_name=(student.name if student and student.name else "Unknown"),
            student_class=(student.class_name if student and student.class_name else "Unknown"),
            intent=interpretation.intent,
            instruction=instruction or "None",
            subject=interpretation.subject,
            topic=interpretation.topic,
            history=history or "None",
            content=text,
        )

    def reason(
        self,
        encoded_file: str | None,
        mime_type: str | None,
        text: str,
        interpretation: InterpretationResult,
        mode: AnalysisMode,
        instruction: str | None = None,
        history: str | None = None,
        role: UserRole | None = None,
    ) -> AnalysisResult:
        """피드백/점수/인사이트 생성

        응답 전체가 JSON 객체가 아니면 실패하고, 개별 필드는 AnalysisResult 쪽에서
        보정합니다 (배열 누락 → 빈 리스트, 점수 누락 → placeholder).

        Raises:
            TransportError: 호출 실패
            SchemaError: 응답 전체를 파싱할 수 없을 때
        """
        model = (
            self.config.model_reasoning_fast
            if mode == "fast"
            else self.config.model_reasoning_deep
        )
        prompt = self.build_reasoning_prompt(text, interpretation, instruction, history, role)
        attachments = []
        if encoded_file and mime_type:
            attachments.append(Attachment(data=encoded_file, mime_type=mime_type))

        messages = [
            Message(role="system", content=REASONING_SYSTEM_PROMPT),
            Message(role="user", content=prompt, attachments=attachments),
        ]
        content = self._call(messages, model=self._route_model(model), json_output=True)
        data = parse_json_payload(content)
        logger.info(f"추론 완료 (mode={mode}, model={model})")
        return AnalysisResult.from_reasoning(data, interpretation, raw_text=text)
