"""Eduvane 데이터 모델"""

from .events import AnalysisPhase, EventType, OrchestratorEvent
from .pipeline import AnalysisMode, ErrorPolicy, Stage, StageOutcome
from .session import InputFile, SessionState, UnifiedInput, UserProfile, UserRole
from .submission import (
    AnalysisResult,
    ConceptStability,
    FeedbackItem,
    GuidanceStep,
    Handwriting,
    Insight,
    InterpretationResult,
    OwnershipContext,
    Score,
    StudentInfo,
    Submission,
    SubmissionStatus,
)

__all__ = [
    # 이벤트
    "AnalysisPhase",
    "EventType",
    "OrchestratorEvent",
    # 파이프라인
    "AnalysisMode",
    "ErrorPolicy",
    "Stage",
    "StageOutcome",
    # 세션/입력
    "InputFile",
    "SessionState",
    "UnifiedInput",
    "UserProfile",
    "UserRole",
    # 제출물/분석 결과
    "AnalysisResult",
    "ConceptStability",
    "FeedbackItem",
    "GuidanceStep",
    "Handwriting",
    "Insight",
    "InterpretationResult",
    "OwnershipContext",
    "Score",
    "StudentInfo",
    "Submission",
    "SubmissionStatus",
]
