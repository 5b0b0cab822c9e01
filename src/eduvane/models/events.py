"""오케스트레이터 이벤트 모델 (UI가 소비하는 턴 단위 이벤트 스트림)"""

from dataclasses import dataclass
from enum import Enum

from .submission import Submission


class EventType(Enum):
    """이벤트 유형"""

    STREAM_CHUNK = "STREAM_CHUNK"
    PHASE_UPDATE = "PHASE_UPDATE"
    SUBMISSION_COMPLETE = "SUBMISSION_COMPLETE"
    FOLLOW_UP = "FOLLOW_UP"
    TASK_COMPLETE = "TASK_COMPLETE"
    ERROR = "ERROR"


class AnalysisPhase(Enum):
    """분석 단계 표시"""

    PROCESSING = "PROCESSING"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"


@dataclass(frozen=True)
class OrchestratorEvent:
    """오케스트레이터 이벤트

    type에 따라 text / phase / submission / message 중 하나만 채워집니다.
    """

    type: EventType
    text: str | None = None
    phase: AnalysisPhase | None = None
    submission: Submission | None = None
    message: str | None = None

    @classmethod
    def chunk(cls, text: str) -> "OrchestratorEvent":
        return cls(EventType.STREAM_CHUNK, text=text)

    @classmethod
    def phase_update(cls, phase: AnalysisPhase) -> "OrchestratorEvent":
        return cls(EventType.PHASE_UPDATE, phase=phase)

    @classmethod
    def submission_complete(cls, submission: Submission) -> "OrchestratorEvent":
        return cls(EventType.SUBMISSION_COMPLETE, submission=submission)

    @classmethod
    def follow_up(cls, text: str) -> "OrchestratorEvent":
        return cls(EventType.FOLLOW_UP, text=text)

    @classmethod
    def task_complete(cls) -> "OrchestratorEvent":
        return cls(EventType.TASK_COMPLETE)

    @classmethod
    def error(cls, message: str) -> "OrchestratorEvent":
        return cls(EventType.ERROR, message=message)
