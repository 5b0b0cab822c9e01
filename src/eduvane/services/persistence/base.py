"""저장소 서비스 기본 인터페이스"""

from abc import ABC, abstractmethod
from datetime import datetime

from eduvane.models import Submission, SubmissionStatus, UserProfile


class BasePersistenceService(ABC):
    """사용자 프로필/제출물 저장소 기본 추상 클래스

    Orchestrator는 프로필과 최근 인사이트를 읽고, 완료된 제출물만 씁니다.
    """

    @abstractmethod
    def get_user_profile(self) -> UserProfile | None:
        """저장된 사용자 프로필 (없으면 None)"""
        pass

    @abstractmethod
    def save_user_profile(self, profile: UserProfile) -> None:
        """사용자 프로필 저장 (덮어쓰기)"""
        pass

    @abstractmethod
    def list_submissions(self) -> list[Submission]:
        """저장된 제출물 목록 (저장 순서)"""
        pass

    @abstractmethod
    def _append_submission(self, submission: Submission) -> None:
        pass

    def save_submission(self, submission: Submission) -> None:
        """완료된 제출물 저장

        Raises:
            ValueError: COMPLETED 상태가 아닌 제출물
        """
        if submission.status != SubmissionStatus.COMPLETED or submission.result is None:
            raise ValueError(f"완료되지 않은 제출물은 저장할 수 없습니다: {submission.status.value}")
        self._append_submission(submission)

    def get_recent_insights(self, subject: str, limit: int = 3) -> str:
        """같은 과목의 최근 제출물로 종단 인사이트 요약 생성

        Args:
            subject: 과목명 (대소문자 무시)
            limit: 요약에 포함할 최근 제출물 수

        Returns:
            자유 형식 요약 텍스트 (해당 과목 기록이 없으면 빈 문자열)
        """
        matches = [
            s for s in self.list_submissions()
            if s.result is not None and s.result.subject.lower() == subject.lower()
        ]
        if not matches:
            return ""

        lines = []
        for submission in sorted(matches, key=lambda s: s.timestamp)[-limit:]:
            result = submission.result
            date = datetime.fromtimestamp(submission.timestamp / 1000).strftime("%Y-%m-%d")
            gaps = ", ".join(f.text for f in result.gaps) or "none recorded"
            lines.append(
                f"- {date} {result.topic}: score {result.score.value} ({result.score.label}); gaps: {gaps}"
            )
        return "\n".join(lines)
