"""응답 변형 선택기 (ResponseVariantSelector)

(카테고리, 역할)마다 미리 작성된 2~3개 템플릿 중 하나를 고릅니다.
기본 선택은 random.choice이며, 테스트에서는 choose를 주입해 결정적으로 만듭니다.
"""

import random
from enum import Enum
from typing import Callable, Sequence

from eduvane.models import UserRole


class ResponseCategory(Enum):
    """응답 카테고리"""

    GREETING = "GREETING"
    CONTINUITY = "CONTINUITY"
    FOLLOW_UP_ANALYSIS = "FOLLOW_UP_ANALYSIS"
    FOLLOW_UP_TASK = "FOLLOW_UP_TASK"


UNSET = "UNSET"

ROLE_QUESTION = "are you a Teacher or a Student?"

# {name_suffix}: ", Ada" 또는 ""
VARIANTS: dict[ResponseCategory, dict[str, tuple[str, ...]]] = {
    ResponseCategory.GREETING: {
        UserRole.TEACHER.value: (
            "Hello{name_suffix}. As a teacher, I can help you grade efficiently, identify class-wide "
            "learning gaps, and generate targeted assessments.\n\n"
            "Upload a student submission to begin, or describe a topic you need questions for.",
            "Welcome{name_suffix}. I can review student work, surface recurring gaps across your class, "
            "and draft practice sets you can use right away.\n\n"
            "Upload a submission or tell me which topic you are preparing.",
            "Good to have you here{name_suffix}. Share a piece of student work and I will diagnose it, "
            "or ask me for questions on any topic you teach.",
        ),
        UserRole.STUDENT.value: (
            "Hi{name_suffix}. I'm here to help you strengthen your understanding. I can analyze your "
            "answers to spot mistakes or generate practice questions to help you prepare.\n\n"
            "Upload your work when you're ready.",
            "Hey{name_suffix}. Upload an answer and I will show you what is working and what to revisit, "
            "or ask me for practice questions on a topic.",
            "Welcome{name_suffix}. Let's work on your understanding together. Send me your work, "
            "or tell me what you'd like to practise.",
        ),
        UNSET: (
            "Nice to meet you{name_suffix}. I'm Eduvane, a smart classroom feedback engine.\n\n"
            "To help me align my feedback, " + ROLE_QUESTION,
            "Hello{name_suffix}. I'm Eduvane. I turn written work into clear learning feedback.\n\n"
            "Before we start, " + ROLE_QUESTION,
            "Hi{name_suffix}, I'm Eduvane. So I can pitch my feedback at the right level, " + ROLE_QUESTION,
        ),
    },
    ResponseCategory.CONTINUITY: {
        UserRole.TEACHER.value: (
            "I'm listening{name_suffix}. Would you like to review a submission or prepare questions for your class?",
            "Ready when you are{name_suffix}. Upload student work or name a topic to build an assessment.",
        ),
        UserRole.STUDENT.value: (
            "I'm listening{name_suffix}. What would you like to work on?",
            "Ready when you are{name_suffix}. Upload an answer or ask for practice questions.",
        ),
        UNSET: (
            "I'm listening{name_suffix}. You can upload an answer or tell me what you'd like to work on.",
            "Go ahead{name_suffix}. Upload some work or describe what you need help with.",
        ),
    },
    ResponseCategory.FOLLOW_UP_ANALYSIS: {
        UserRole.TEACHER.value: (
            "Analysis complete. I've highlighted the student's key gaps.\n\n"
            "Would you like to generate a practice set based on these errors?",
            "The diagnosis is ready. Shall I draft targeted questions for the gaps identified?",
        ),
        UserRole.STUDENT.value: (
            "I've analyzed your work. Check the feedback for tips.\n\n"
            "Want to try a few practice questions to improve this score?",
            "Your feedback is ready{name_suffix}. Would you like practice questions on the areas to revisit?",
        ),
        UNSET: (
            "Analysis complete. You can upload another answer for review,\n"
            "or I can generate practice questions focused on the areas identified.",
            "The feedback is ready. Upload more work, or ask me for practice on the gaps identified.",
        ),
    },
    ResponseCategory.FOLLOW_UP_TASK: {
        UserRole.TEACHER.value: (
            "You can copy these for your class. Would you like me to create an answer key?",
            "Would you like an answer key or a harder variant of this set?",
        ),
        UserRole.STUDENT.value: (
            "Try solving these. You can upload your answers here for me to check.",
            "Give these a go{name_suffix}. Upload your working when you're done and I'll review it.",
        ),
        UNSET: (
            "Try solving these. You can upload your answers here for me to check.",
            "Work through these when you're ready, then upload your answers for feedback.",
        ),
    },
}


def _role_key(role: UserRole | None) -> str:
    return role.value if role is not None else UNSET


class ResponseVariantSelector:
    """(카테고리, 역할, 이름) → 응답 문자열"""

    def __init__(
        self,
        choose: Callable[[Sequence[str]], str] = random.choice,
        variants: dict[ResponseCategory, dict[str, tuple[str, ...]]] = VARIANTS,
    ):
        """
        Args:
            choose: 후보 중 하나를 고르는 함수 (기본 random.choice)
            variants: 카테고리/역할별 템플릿 풀
        """
        self.choose = choose
        self.variants = variants

    def pool(self, category: ResponseCategory, role: UserRole | None) -> tuple[str, ...]:
        return self.variants[category][_role_key(role)]

    def get(
        self,
        category: ResponseCategory,
        role: UserRole | None = None,
        name: str | None = None,
    ) -> str:
        """템플릿 하나를 골라 이름(첫 토큰)을 채워 반환"""
        first_name = name.split()[0] if name and name.strip() else None
        template = self.choose(self.pool(category, role))
        return template.format(name_suffix=f", {first_name}" if first_name else "")


_default_selector = ResponseVariantSelector()


def get_varied_response(
    category: ResponseCategory,
    role: UserRole | None = None,
    name: str | None = None,
) -> str:
    """기본 선택기(random.choice)로 응답 변형 반환"""
    return _default_selector.get(category, role, name)
