"""JSON 파일 저장소

data_dir 아래에 두 파일을 사용합니다.
- profile.json: 사용자 프로필 ({"name": ..., "role": ...})
- submissions.json: 완료된 제출물 배열
"""

import json
import logging
from pathlib import Path

from eduvane.models import Submission, UserProfile

from .base import BasePersistenceService

logger = logging.getLogger(__name__)


class JsonFilePersistence(BasePersistenceService):
    """JSON 파일 기반 저장소"""

    PROFILE_FILE = "profile.json"
    SUBMISSIONS_FILE = "submissions.json"

    def __init__(self, data_dir: str | Path):
        """
        Args:
            data_dir: 저장 디렉토리 (없으면 첫 저장 시 생성)
        """
        self.data_dir = Path(data_dir)

    @property
    def profile_path(self) -> Path:
        return self.data_dir / self.PROFILE_FILE

    @property
    def submissions_path(self) -> Path:
        return self.data_dir / self.SUBMISSIONS_FILE

    def _read(self, path: Path):
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning(f"손상된 저장 파일 무시: {path} ({e})")
            return None

    def _write(self, path: Path, data) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(path)

    def get_user_profile(self) -> UserProfile | None:
        data = self._read(self.profile_path)
        if not isinstance(data, dict):
            return None
        return UserProfile.model_validate(data)

    def save_user_profile(self, profile: UserProfile) -> None:
        self._write(self.profile_path, profile.model_dump(mode="json"))

    def list_submissions(self) -> list[Submission]:
        data = self._read(self.submissions_path)
        if not isinstance(data, list):
            return []
        return [Submission.model_validate(item) for item in data]

    def _append_submission(self, submission: Submission) -> None:
        records = self._read(self.submissions_path)
        if not isinstance(records, list):
            records = []
        records.append(submission.model_dump(mode="json", by_alias=True))
        self._write(self.submissions_path, records)
        logger.info(f"제출물 저장: {submission.id} ({self.submissions_path})")
