"""
Eduvane prompts module.

이 패키지는 분석 파이프라인 단계와 학습과제 채팅에 사용되는 LLM 프롬프트를 중앙 관리합니다.
프롬프트 본문은 설정으로 취급하며, 코드는 템플릿의 자리표시자만 채웁니다.
"""

from .perception import (
    PERCEPTION_SYSTEM_PROMPT,
    PERCEPTION_USER_PROMPT,
)

from .interpretation import (
    INTERPRETATION_SYSTEM_PROMPT,
    INTERPRETATION_USER_TEMPLATE,
)

from .reasoning import (
    REASONING_SYSTEM_PROMPT,
    REASONING_USER_TEMPLATE,
)

from .workspace import (
    CONTEXT_INJECTION_TEMPLATE,
    LEARNING_TASK_TEMPLATE,
    QUESTION_WORKSPACE_SYSTEM_PROMPT,
)

__all__ = [
    # 인식
    "PERCEPTION_SYSTEM_PROMPT",
    "PERCEPTION_USER_PROMPT",
    # 해석
    "INTERPRETATION_SYSTEM_PROMPT",
    "INTERPRETATION_USER_TEMPLATE",
    # 추론
    "REASONING_SYSTEM_PROMPT",
    "REASONING_USER_TEMPLATE",
    # 학습과제 채팅
    "QUESTION_WORKSPACE_SYSTEM_PROMPT",
    "LEARNING_TASK_TEMPLATE",
    "CONTEXT_INJECTION_TEMPLATE",
]
