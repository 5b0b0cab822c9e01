"""분석 파이프라인

구성:
- AnalysisClient: perceive / interpret / reason 원격 호출
- StagePipeline: 단계별 실패 정책을 가진 순차 실행기
- format_analysis_context: 결과를 대화 세션 컨텍스트로 요약
"""

from .client import AnalysisClient, parse_json_payload
from .pipeline import (
    PERCEIVE_ERROR_MESSAGE,
    REASON_ERROR_MESSAGE,
    AnalysisContext,
    PipelineStage,
    StagePipeline,
    build_analysis_pipeline,
    select_mode,
)
from .summary import format_analysis_context

__all__ = [
    "AnalysisClient",
    "AnalysisContext",
    "PERCEIVE_ERROR_MESSAGE",
    "PipelineStage",
    "REASON_ERROR_MESSAGE",
    "StagePipeline",
    "build_analysis_pipeline",
    "format_analysis_context",
    "parse_json_payload",
    "select_mode",
]
