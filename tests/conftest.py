"""테스트 픽스처 및 설정"""

import io
import json
from pathlib import Path

import pytest
from dotenv import load_dotenv
from PIL import Image

from eduvane.errors import TransportError
from eduvane.models import InputFile
from eduvane.prompts import INTERPRETATION_SYSTEM_PROMPT
from eduvane.services.analysis import AnalysisClient
from eduvane.services.chat import BaseChatTransport, ChatSessionFactory
from eduvane.services.llm.base import BaseLLMService, LLMResponse
from eduvane.services.llm.dummy_llm import DummyLLM
from eduvane.services.orchestration import Orchestrator, ResponseVariantSelector
from eduvane.services.persistence import InMemoryPersistence

# 프로젝트 루트의 .env 파일 로드
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


INTERPRETATION_PAYLOAD = {
    "subject": "Mathematics",
    "topic": "Linear Equations",
    "difficulty": "easy",
    "intent": "solution",
    "ownership": {"type": "student_direct"},
}

REASONING_PAYLOAD = {
    "score": {"value": "8/10", "label": "Strong", "reasoning": "One arithmetic slip."},
    "feedback": [
        {"type": "strength", "text": "Correct setup."},
        {"type": "gap", "text": "Sign error on line 2."},
    ],
    "insights": [{"title": "Signs", "description": "Recurring sign slips.", "trend": "stable"}],
    "guidance": [{"step": "Check each moved term.", "rationale": "Catches sign slips."}],
    "concept_stability": {"status": "stabilizing", "evidence": "Setup is consistent."},
    "teacher_insight": "",
}


class FakeTransport(BaseChatTransport):
    """정해진 조각을 흘려보내는 채팅 전송

    fail_after가 주어지면 그 개수만큼 조각을 보낸 뒤 TransportError를 발생시킵니다.
    """

    def __init__(self, name: str, chunks=None, fail_after=None):
        self.name = name
        self.chunks = list(chunks if chunks is not None else ["ok"])
        self.fail_after = fail_after
        self.requests = []

    def stream(self, request):
        self.requests.append(request)
        for i, chunk in enumerate(self.chunks):
            if i == self.fail_after:
                raise TransportError(f"{self.name} down")
            yield chunk
        if self.fail_after is not None and self.fail_after >= len(self.chunks):
            raise TransportError(f"{self.name} down")


class ScriptedLLM(BaseLLMService):
    """단계별로 정해진 응답을 돌려주는 LLM (값이 예외면 발생시킴)"""

    provider = "openai"

    def __init__(self, perception="Solve 2x + 3 = 11\nx = 4", interpretation=None, reasoning=None):
        self.model = "gpt-test"
        self.perception = perception
        self.interpretation = json.dumps(INTERPRETATION_PAYLOAD) if interpretation is None else interpretation
        self.reasoning = json.dumps(REASONING_PAYLOAD) if reasoning is None else reasoning
        self.calls = []

    def generate(self, messages, **kwargs):
        system = messages[0].content
        if not kwargs.get("json_output"):
            stage = "perceive"
        elif system == INTERPRETATION_SYSTEM_PROMPT:
            stage = "interpret"
        else:
            stage = "reason"
        self.calls.append({"stage": stage, "messages": messages, **kwargs})

        value = getattr(self, {"perceive": "perception", "interpret": "interpretation",
                               "reason": "reasoning"}[stage])
        if isinstance(value, Exception):
            raise value
        return LLMResponse(content=value, model=kwargs.get("model") or self.model)

    def stages(self):
        return [call["stage"] for call in self.calls]


def first_choice(pool):
    """항상 첫 번째 변형을 고르는 선택 함수"""
    return pool[0]


@pytest.fixture
def dummy_llm_service():
    """더미 LLM 서비스 픽스처"""
    return DummyLLM()


@pytest.fixture
def scripted_llm():
    """단계별 응답이 고정된 LLM 픽스처"""
    return ScriptedLLM()


@pytest.fixture
def memory_persistence():
    """인메모리 저장소 픽스처"""
    return InMemoryPersistence()


@pytest.fixture
def selector():
    """결정적 응답 선택기 픽스처"""
    return ResponseVariantSelector(choose=first_choice)


@pytest.fixture
def sample_image():
    """샘플 이미지 픽스처"""
    return Image.new("RGB", (100, 100), color="white")


@pytest.fixture
def png_file(sample_image):
    """PNG 업로드 파일 픽스처"""
    buffer = io.BytesIO()
    sample_image.save(buffer, format="PNG")
    return InputFile(name="answer.png", mime_type="image/png", data=buffer.getvalue())


@pytest.fixture
def make_orchestrator(scripted_llm, memory_persistence, selector):
    """테스트용 Orchestrator 생성 함수 픽스처 (컨텍스트 주입은 즉시 실행)"""

    def _make(primary=None, fallback=None, llm=None, **kwargs):
        factory = ChatSessionFactory(
            primary=primary or FakeTransport("primary", ["Here ", "are ", "questions."]),
            fallback=fallback,
            model="gpt-test",
        )
        options = {
            "analysis_client": AnalysisClient(llm or scripted_llm),
            "chat_session_factory": factory,
            "persistence": memory_persistence,
            "selector": selector,
            "background": lambda fn: fn(),
        }
        options.update(kwargs)
        return Orchestrator(**options)

    return _make
