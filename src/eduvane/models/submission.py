"""제출물/분석 결과 데이터 모델

해석(Interpretation) 단계와 추론(Reasoning) 단계의 구조화 응답을
타입 안전하게 파싱하는 Pydantic 모델 정의.
"""
from __future__ import annotations

import logging
import time
import uuid
from enum import Enum
from typing import Any, List, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _coerce_items(value: Any, model: Type[TModel]) -> List[TModel]:
    """배열 필드 보정: 배열이 아니면 빈 리스트, 잘못된 항목은 제외"""
    if not isinstance(value, list):
        return []
    items: List[TModel] = []
    for raw in value:
        if isinstance(raw, model):
            items.append(raw)
            continue
        try:
            items.append(model.model_validate(raw))
        except ValidationError as e:
            logger.debug(f"{model.__name__} 항목 무시: {e.error_count()}개 오류")
    return items


def _coerce_optional(value: Any, model: Type[TModel]) -> Optional[TModel]:
    """선택 객체 필드 보정: 형식이 맞지 않으면 None"""
    if value is None or isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError:
        return None


# =============================================================================
# 해석(Interpretation) 단계 모델
# =============================================================================

class StudentInfo(BaseModel):
    """제출물에서 식별된 학생 정보"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: Optional[str] = None
    class_name: Optional[str] = Field(default=None, alias="class")
    confidence: Optional[Literal["high", "medium", "low"]] = None


class OwnershipContext(BaseModel):
    """제출물 소유 맥락 (2인칭/3인칭 서술 결정)"""
    model_config = ConfigDict(frozen=True)

    type: Literal["student_direct", "teacher_uploaded_student_work"] = "student_direct"
    student: Optional[StudentInfo] = None

    @field_validator("student", mode="before")
    @classmethod
    def _lenient_student(cls, value: Any) -> Any:
        return _coerce_optional(value, StudentInfo)


class InterpretationResult(BaseModel):
    """해석 단계 결과 (과목/주제/난이도/의도/소유 맥락)"""
    model_config = ConfigDict(frozen=True)

    subject: str
    topic: str
    difficulty: Optional[str] = None
    intent: Literal["solution", "explanation", "both"]
    ownership: OwnershipContext

    @classmethod
    def default(cls) -> "InterpretationResult":
        """해석 실패 시 사용하는 안전한 기본 맥락"""
        return cls(
            subject="General",
            topic="Unknown",
            intent="explanation",
            ownership=OwnershipContext(type="student_direct"),
        )


# =============================================================================
# 추론(Reasoning) 단계 모델
# =============================================================================

class Score(BaseModel):
    """점수"""
    model_config = ConfigDict(frozen=True)

    value: str = "-"
    label: str = "Pending"
    reasoning: str = "Analysis incomplete"

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        return str(value) if isinstance(value, (int, float)) else value


class FeedbackItem(BaseModel):
    """피드백 항목"""
    model_config = ConfigDict(frozen=True)

    type: Literal["strength", "gap", "neutral"]
    text: str
    reference: Optional[str] = None


class Insight(BaseModel):
    """종단(longitudinal) 인사이트"""
    model_config = ConfigDict(frozen=True)

    title: str
    description: str = ""
    trend: Literal["stable", "improving", "declining", "new"] = "new"


class GuidanceStep(BaseModel):
    """학습 가이드 단계"""
    model_config = ConfigDict(frozen=True)

    step: str
    rationale: Optional[str] = None


class Handwriting(BaseModel):
    """필체 평가"""
    model_config = ConfigDict(frozen=True)

    quality: Literal["excellent", "good", "fair", "poor", "illegible"]
    feedback: Optional[str] = None


class ConceptStability(BaseModel):
    """개념 안정성 신호"""
    model_config = ConfigDict(frozen=True)

    status: Literal["emerging", "unstable_pressure", "stabilizing", "robust", "unknown"]
    evidence: Optional[str] = None


class AnalysisResult(BaseModel):
    """추론 단계 최종 결과 (생성 후 불변, 식별자만 model_copy로 보충)"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: int = Field(default_factory=_now_ms)
    subject: str = "General"
    topic: str = "Unknown"
    score: Score = Field(default_factory=Score)
    feedback: List[FeedbackItem] = Field(default_factory=list)
    insights: List[Insight] = Field(default_factory=list)
    guidance: List[GuidanceStep] = Field(default_factory=list)
    handwriting: Optional[Handwriting] = None
    concept_stability: Optional[ConceptStability] = None
    teacher_insight: Optional[str] = None
    ownership: OwnershipContext = Field(default_factory=OwnershipContext)
    raw_text: str = ""

    @field_validator("score", mode="before")
    @classmethod
    def _lenient_score(cls, value: Any) -> Any:
        return _coerce_optional(value, Score) or Score()

    @field_validator("feedback", mode="before")
    @classmethod
    def _lenient_feedback(cls, value: Any) -> Any:
        return _coerce_items(value, FeedbackItem)

    @field_validator("insights", mode="before")
    @classmethod
    def _lenient_insights(cls, value: Any) -> Any:
        return _coerce_items(value, Insight)

    @field_validator("guidance", mode="before")
    @classmethod
    def _lenient_guidance(cls, value: Any) -> Any:
        return _coerce_items(value, GuidanceStep)

    @field_validator("handwriting", mode="before")
    @classmethod
    def _lenient_handwriting(cls, value: Any) -> Any:
        return _coerce_optional(value, Handwriting)

    @field_validator("concept_stability", mode="before")
    @classmethod
    def _lenient_stability(cls, value: Any) -> Any:
        return _coerce_optional(value, ConceptStability)

    @field_validator("teacher_insight", mode="before")
    @classmethod
    def _blank_insight(cls, value: Any) -> Any:
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()

    @classmethod
    def from_reasoning(
        cls,
        data: dict,
        interpretation: InterpretationResult,
        raw_text: str,
    ) -> "AnalysisResult":
        """추론 응답(JSON dict)과 해석 맥락으로 AnalysisResult 조립

        누락되거나 잘못된 배열 필드는 빈 리스트, 점수는 placeholder로 보정합니다.
        """
        return cls(
            subject=interpretation.subject,
            topic=interpretation.topic,
            score=data.get("score"),
            feedback=data.get("feedback"),
            insights=data.get("insights"),
            guidance=data.get("guidance"),
            handwriting=data.get("handwriting"),
            concept_stability=data.get("concept_stability"),
            teacher_insight=data.get("teacher_insight"),
            ownership=interpretation.ownership,
            raw_text=raw_text,
        )

    @property
    def gaps(self) -> List[FeedbackItem]:
        """학습 격차(gap) 피드백만 반환"""
        return [f for f in self.feedback if f.type == "gap"]


# =============================================================================
# 제출물(Submission)
# =============================================================================

class SubmissionStatus(Enum):
    """제출물 상태"""

    CREATED = "CREATED"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


_ALLOWED_TRANSITIONS = {
    SubmissionStatus.CREATED: {SubmissionStatus.PROCESSING},
    SubmissionStatus.PROCESSING: {SubmissionStatus.COMPLETED, SubmissionStatus.ERROR},
    SubmissionStatus.COMPLETED: set(),
    SubmissionStatus.ERROR: set(),
}


class Submission(BaseModel):
    """파일 업로드 한 건의 처리 기록 (상태는 단조 증가, 재사용 없음)"""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: int = Field(default_factory=_now_ms)
    status: SubmissionStatus = SubmissionStatus.CREATED
    file_name: str
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    status_history: List[SubmissionStatus] = Field(
        default_factory=lambda: [SubmissionStatus.CREATED]
    )

    def advance(self, status: SubmissionStatus) -> None:
        """상태 전이 (CREATED→PROCESSING→COMPLETED|ERROR 외에는 ValueError)"""
        if status not in _ALLOWED_TRANSITIONS[self.status]:
            raise ValueError(f"허용되지 않는 상태 전이: {self.status.value} → {status.value}")
        self.status = status
        self.status_history.append(status)

    def complete(self, result: AnalysisResult) -> None:
        self.advance(SubmissionStatus.COMPLETED)
        self.result = result

    def fail(self, message: str) -> None:
        self.advance(SubmissionStatus.ERROR)
        self.error = message
