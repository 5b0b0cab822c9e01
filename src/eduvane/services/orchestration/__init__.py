"""오케스트레이션 서비스

구성:
- identity: 자기소개 텍스트에서 이름/역할 추출
- intent_classifier: 규칙 테이블 기반 과제/대화 의도 분류
- responses: 카테고리/역할별 응답 변형 선택
- Orchestrator: 세션 상태 소유, 대화/분석/학습과제 라우팅
"""

from .identity import Identity, extract_identity, parse_simple_role
from .intent_classifier import (
    DEFAULT_RULES,
    IntentClassifier,
    IntentKind,
    IntentRules,
    is_conversational_intent,
    is_task_intent,
)
from .orchestrator import Orchestrator, run_in_thread
from .responses import ResponseCategory, ResponseVariantSelector, get_varied_response

__all__ = [
    "DEFAULT_RULES",
    "Identity",
    "IntentClassifier",
    "IntentKind",
    "IntentRules",
    "Orchestrator",
    "ResponseCategory",
    "ResponseVariantSelector",
    "extract_identity",
    "get_varied_response",
    "is_conversational_intent",
    "is_task_intent",
    "parse_simple_role",
    "run_in_thread",
]
