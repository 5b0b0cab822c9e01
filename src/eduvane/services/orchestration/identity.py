"""자기소개 텍스트에서 이름/역할 추출 (순수 함수)"""

import re
from dataclasses import dataclass

from eduvane.models import UserRole

# 순서대로 시도, 첫 번째로 허용되는 캡처를 사용
NAME_PATTERNS = [
    re.compile(r"(?:^|\s)my\s+name\s+is\s+([a-zA-Z][a-zA-Z\s]*?)(?=$|[.!,])", re.IGNORECASE),
    re.compile(r"(?:^|\s)call\s+me\s+([a-zA-Z][a-zA-Z\s]*?)(?=$|[.!,])", re.IGNORECASE),
    re.compile(r"(?:^|\s)i['’]m\s+([a-zA-Z][a-zA-Z\s]*?)(?=$|[.!,])", re.IGNORECASE),
    re.compile(r"(?:^|\s)i\s+am\s+([a-zA-Z][a-zA-Z\s]*?)(?=$|[.!,])", re.IGNORECASE),
]

# 이름으로 오인하기 쉬운 캡처
NAME_DISALLOW = frozenset({
    "a teacher",
    "a student",
    "an educator",
    "a learner",
    "a pupil",
    "a professor",
    "an instructor",
    "teacher",
    "student",
    "ready",
    "here",
    "listening",
    "eduvane",
    "fine",
    "good",
    "ok",
    "okay",
    "back",
    "done",
    "not sure",
})

# 이름은 관사 등으로 시작하지 않음 ("I'm a bit lost")
NAME_DISALLOWED_FIRST_WORDS = frozenset({"a", "an", "the", "not", "so", "very", "just"})

TEACHER_ROLE_RE = re.compile(r"(?:^|\s)(?:teacher|educator|professor|instructor)\b", re.IGNORECASE)
STUDENT_ROLE_RE = re.compile(r"(?:^|\s)(?:student|learner|pupil)\b", re.IGNORECASE)


@dataclass(frozen=True)
class Identity:
    """추출된 신원 정보"""

    name: str | None = None
    role: UserRole | None = None

    @property
    def detected(self) -> bool:
        return self.name is not None or self.role is not None


def _title_case(name: str) -> str:
    return " ".join(token[:1].upper() + token[1:].lower() for token in name.split())


def extract_name(text: str) -> str | None:
    """자기소개 패턴에서 이름 추출 (금지 목록에 걸리면 None)"""
    t = text.strip()
    for pattern in NAME_PATTERNS:
        match = pattern.search(t)
        if not match:
            continue
        captured = " ".join(match.group(1).split())
        if not captured or captured.lower() in NAME_DISALLOW:
            continue
        if captured.split()[0].lower() not in NAME_DISALLOWED_FIRST_WORDS:
            return _title_case(captured)
    return None


def extract_role(text: str) -> UserRole | None:
    """역할 토큰 탐지 (teacher 계열이 우선)"""
    if TEACHER_ROLE_RE.search(text):
        return UserRole.TEACHER
    if STUDENT_ROLE_RE.search(text):
        return UserRole.STUDENT
    return None


def extract_identity(text: str) -> Identity:
    """이름과 역할을 독립적으로 추출

    Examples:
        >>> extract_identity("I'm Ada Lovelace, a teacher")
        Identity(name='Ada Lovelace', role=<UserRole.TEACHER: 'TEACHER'>)
    """
    return Identity(name=extract_name(text), role=extract_role(text))


def parse_simple_role(text: str) -> UserRole | None:
    """역할 질문에 대한 짧은 답변 해석 ("Teacher", "student here" 등)"""
    t = text.lower()
    if "teacher" in t or "educator" in t:
        return UserRole.TEACHER
    if "student" in t or "learner" in t:
        return UserRole.STUDENT
    return None
