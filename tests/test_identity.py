"""신원(이름/역할) 추출 테스트"""

import pytest

from eduvane.models import UserRole
from eduvane.services.orchestration.identity import (
    Identity,
    extract_identity,
    extract_name,
    parse_simple_role,
)


class TestExtractName:
    """이름 추출 테스트"""

    @pytest.mark.parametrize("text, expected", [
        ("My name is ada lovelace", "Ada Lovelace"),
        ("call me GRACE.", "Grace"),
        ("I'm john", "John"),
        ("I’m john smith!", "John Smith"),
        ("Hi, I am abdusobur sulaimon", "Abdusobur Sulaimon"),
    ])
    def test_self_introduction_patterns(self, text, expected):
        """자기소개 패턴에서 이름 추출 및 단어별 대문자화"""
        assert extract_name(text) == expected

    def test_capture_stops_at_terminator(self):
        """쉼표/마침표에서 캡처 종료"""
        assert extract_name("I'm Ada, a teacher") == "Ada"

    @pytest.mark.parametrize("text", [
        "I'm a teacher",
        "I am a student",
        "I'm ready",
        "I am here",
        "I'm listening.",
        "I am Eduvane",
        "I'm a bit lost",
    ])
    def test_disallowed_captures_rejected(self, text):
        """금지 목록에 있는 캡처는 이름으로 보지 않음"""
        assert extract_name(text) is None

    def test_my_name_is_wins_over_im(self):
        """'my name is' 패턴이 먼저 시도됨"""
        assert extract_name("I'm a teacher and my name is Bola") == "Bola"

    def test_no_pattern(self):
        """자기소개가 없으면 None"""
        assert extract_name("Generate a quiz on fractions") is None


class TestExtractIdentity:
    """extract_identity 테스트"""

    @pytest.mark.parametrize("text, role", [
        ("I'm a teacher", UserRole.TEACHER),
        ("As an educator I need help", UserRole.TEACHER),
        ("Professor here", UserRole.TEACHER),
        ("I am a student", UserRole.STUDENT),
        ("just a learner", UserRole.STUDENT),
        ("PUPIL", UserRole.STUDENT),
    ])
    def test_role_detection(self, text, role):
        """역할 토큰 탐지 (대소문자 무시)"""
        assert extract_identity(text).role == role

    @pytest.mark.parametrize("text", [
        "Generate a quiz for my students",
        "Make flashcards for the teachers lounge",
        "Explain pupillary reflexes",
    ])
    def test_role_word_must_be_whole(self, text):
        """복수형이나 다른 단어의 일부는 자기소개 역할로 보지 않음"""
        assert extract_identity(text).role is None

    def test_teacher_takes_precedence(self):
        """두 역할이 모두 있으면 teacher 우선"""
        assert extract_identity("I'm a teacher helping a student").role == UserRole.TEACHER

    def test_name_and_role_independent(self):
        """이름과 역할이 동시에 추출됨"""
        identity = extract_identity("My name is Ada, I'm a teacher")
        assert identity == Identity(name="Ada", role=UserRole.TEACHER)
        assert identity.detected is True

    def test_nothing_detected(self):
        """아무 신호가 없으면 detected=False"""
        identity = extract_identity("hello")
        assert identity == Identity()
        assert identity.detected is False

    def test_idempotent(self):
        """같은 입력은 항상 같은 결과"""
        text = "Call me Kemi, I am a pupil"
        assert extract_identity(text) == extract_identity(text)


class TestParseSimpleRole:
    """역할 질문 답변 해석 테스트"""

    @pytest.mark.parametrize("text, role", [
        ("Teacher", UserRole.TEACHER),
        ("educator!", UserRole.TEACHER),
        ("student here", UserRole.STUDENT),
        ("Learner", UserRole.STUDENT),
        ("not sure", None),
    ])
    def test_bare_answers(self, text, role):
        """짧은 답변에서 역할 해석"""
        assert parse_simple_role(text) == role
