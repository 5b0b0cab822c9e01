"""세션/입력 데이터 모델"""

import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class UserRole(Enum):
    """사용자 역할 (미지정은 None)"""

    TEACHER = "TEACHER"
    STUDENT = "STUDENT"


@dataclass
class SessionState:
    """대화 세션 상태 (Orchestrator 전용)

    불변식:
    - role_confirmed 이면 user_role 은 반드시 설정되어 있음
    - role_asked 는 역할 질문 하나가 대기 중일 때만 True
    """

    has_introduced_self: bool = False
    role_confirmed: bool = False
    user_role: UserRole | None = None
    user_name: str | None = None
    role_asked: bool = False
    initialized: bool = False

    def confirm_role(self, role: UserRole) -> None:
        """역할 확정 (질문 대기 상태 해제)"""
        self.user_role = role
        self.role_confirmed = True
        self.role_asked = False


@dataclass(frozen=True)
class InputFile:
    """업로드 파일 (바이너리 + 선언된 mime 타입 + 이름)"""

    name: str
    mime_type: str
    data: bytes

    @classmethod
    def from_path(cls, file_path: str | Path) -> "InputFile":
        """파일 경로에서 InputFile 생성 (mime 타입은 확장자로 추정)"""
        path = Path(file_path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            mime_type=mime_type or "application/octet-stream",
            data=path.read_bytes(),
        )

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == "application/pdf"


@dataclass(frozen=True)
class UnifiedInput:
    """사용자 한 턴의 입력 (파일 또는 텍스트, 파일이 우선)"""

    text: str | None = None
    file: InputFile | None = None

    def __post_init__(self):
        if self.file is None and not (self.text and self.text.strip()):
            raise ValueError("UnifiedInput에는 텍스트 또는 파일 중 하나가 필요합니다.")


class UserProfile(BaseModel):
    """저장된 사용자 프로필"""

    name: str | None = None
    role: UserRole | None = None
