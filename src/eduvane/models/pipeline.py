"""분석 파이프라인 단계 모델

파이프라인 각 단계(perceive/route/interpret/history/reason)의 실행 결과를
일관되게 기록하는 Pydantic 모델 정의.
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field
from typing_extensions import TypeAlias


# =============================================================================
# 기본 타입 정의
# =============================================================================

Stage: TypeAlias = Literal['perceive', 'route', 'interpret', 'history', 'reason']
"""파이프라인 처리 단계"""

AnalysisMode: TypeAlias = Literal['fast', 'deep']
"""추론 모드 (지연/비용 트레이드오프)"""

ErrorPolicy: TypeAlias = Literal['fail', 'default']
"""단계 실패 시 정책 (fail: 파이프라인 중단, default: 기본값으로 대체)"""


class StageOutcome(BaseModel):
    """단일 단계 실행 기록"""
    stage: Stage
    ok: bool = Field(default=True, description="단계 성공 여부")
    degraded: bool = Field(default=False, description="실패 후 기본값으로 대체되었는지")
    elapsed_ms: float = Field(default=0.0, description="단계 소요 시간 (ms)")
    error: Optional[str] = Field(default=None, description="실패 사유")


__all__ = [
    'Stage',
    'AnalysisMode',
    'ErrorPolicy',
    'StageOutcome',
]
