"""인메모리 저장소 (게스트/테스트용)"""

from eduvane.models import Submission, UserProfile

from .base import BasePersistenceService


class InMemoryPersistence(BasePersistenceService):
    """프로세스 메모리에만 저장하는 저장소"""

    def __init__(self, profile: UserProfile | None = None):
        self._profile = profile
        self._submissions: list[Submission] = []

    def get_user_profile(self) -> UserProfile | None:
        return self._profile

    def save_user_profile(self, profile: UserProfile) -> None:
        self._profile = profile

    def list_submissions(self) -> list[Submission]:
        return list(self._submissions)

    def _append_submission(self, submission: Submission) -> None:
        self._submissions.append(submission.model_copy(deep=True))
