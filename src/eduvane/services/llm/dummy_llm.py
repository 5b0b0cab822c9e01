"""더미 LLM 구현 (테스트/오프라인용)"""

import json
import re
import time
from typing import Iterator

from .base import BaseLLMService, LLMResponse, Message

# 해석/추론 단계 공용 구조화 응답 (각 단계는 필요한 필드만 사용)
DUMMY_STRUCTURED_RESPONSE = {
    "subject": "Mathematics",
    "topic": "Linear Equations",
    "difficulty": "medium",
    "intent": "both",
    "ownership": {"type": "student_direct"},
    "score": {"value": "7/10", "label": "Good", "reasoning": "Method is sound with one slip."},
    "feedback": [
        {"type": "strength", "text": "The equation is set up correctly.", "reference": "Line 1"},
        {"type": "gap", "text": "The sign flips when moving 3 across the equals sign.", "reference": "Line 2"},
    ],
    "insights": [
        {"title": "Sign handling", "description": "Sign changes across the equals sign.", "trend": "new"},
    ],
    "guidance": [
        {"step": "Rewrite each step, checking the sign of every moved term.", "rationale": "Isolates the slip."},
    ],
    "concept_stability": {"status": "stabilizing", "evidence": "Consistent setup across steps."},
    "teacher_insight": "",
}

DUMMY_PERCEPTION_TEXT = """[더미 인식 결과]
Name: Me
Solve: 2x + 3 = 11
2x = 11 + 3
2x = 14
x = 7
Layout: handwritten working on lined paper."""


class DummyLLM(BaseLLMService):
    """테스트용 더미 LLM 서비스"""

    provider = "dummy"

    def __init__(self, delay: float = 0.0):
        """
        Args:
            delay: 응답 시뮬레이션 지연 (초)
        """
        self.delay = delay
        self.model = "dummy-model"

    def generate(self, messages: list[Message], **kwargs) -> LLMResponse:
        """더미 응답 생성

        Args:
            messages: 대화 메시지 리스트
            **kwargs: 추가 파라미터 (json_output 외에는 무시됨)

        Returns:
            LLMResponse 객체
        """
        # 마지막 사용자 메시지 추출
        last_user = None
        for msg in reversed(messages):
            if msg.role == "user":
                last_user = msg
                break

        if kwargs.get("json_output"):
            response_text = json.dumps(DUMMY_STRUCTURED_RESPONSE)
        elif last_user is not None and last_user.attachments:
            response_text = DUMMY_PERCEPTION_TEXT
        else:
            user_message = last_user.content if last_user else ""
            response_text = (
                "[더미 응답 모드 - 실제 LLM 대신 테스트용 응답입니다]\n\n"
                f"Request: {user_message[:100]}\n\n"
                "1. Solve 3x - 4 = 11.\n"
                "2. Solve 5 - 2x = 9.\n"
                "3. Explain why the sign changes when a term moves across the equals sign."
            )

        # 응답 시뮬레이션을 위한 지연
        if self.delay:
            time.sleep(self.delay)

        return LLMResponse(
            content=response_text,
            model=kwargs.get("model") or self.model,
            usage={"prompt_tokens": 100, "completion_tokens": 150, "total_tokens": 250},
            metadata={"provider": "dummy"},
        )

    def stream_generate(self, messages: list[Message], **kwargs) -> Iterator[str]:
        """단어 단위로 나누어 스트리밍"""
        response = self.generate(messages, **kwargs)
        for piece in re.findall(r"\S+\s*", response.content):
            yield piece
