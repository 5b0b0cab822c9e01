"""의도 분류기 테스트"""

import pytest

from eduvane.services.orchestration.intent_classifier import (
    IntentClassifier,
    IntentKind,
    IntentRules,
    is_conversational_intent,
    is_task_intent,
)


class TestTaskIntent:
    """과제 신호 테스트"""

    @pytest.mark.parametrize("text", [
        "Generate 5 questions on fractions",
        "Can you create a quiz?",
        "please analyze this paragraph",
        "Solve x^2 + 3 = 7",
        "grade my essay",
    ])
    def test_task_keywords(self, text):
        """과제 키워드 포함"""
        assert is_task_intent(text) is True

    @pytest.mark.parametrize("text", [
        "12 + 7",
        "3*4=12",
        "2^10",
    ])
    def test_implicit_math(self, text):
        """숫자와 연산자가 함께 있으면 수식으로 간주"""
        assert is_task_intent(text) is True

    @pytest.mark.parametrize("text", [
        "What is photosynthesis?",
        "How do I factor a quadratic",
        "Explain the water cycle",
        "why does ice float",
        "Find the area of a circle with radius r",
    ])
    def test_interrogative_task_verbs(self, text):
        """의문/과제 동사로 시작"""
        assert is_task_intent(text) is True

    @pytest.mark.parametrize("text", [
        "Hello",
        "hi 2",
        "thanks!",
        "who are you?",
        "What is Eduvane?",
        "what can you do",
        "I'm a teacher",
        "recheck",
        "",
    ])
    def test_not_task(self, text):
        """과제 신호가 없는 입력"""
        assert is_task_intent(text) is False

    @pytest.mark.parametrize("text", [
        "How are you supposed to factor quadratics?",
        "What is this poem about?",
        "What are you meant to do with the remainder?",
    ])
    def test_question_containing_meta_phrase(self, text):
        """메타 어구가 일부만 포함된 학습 질문은 과제"""
        classifier = IntentClassifier()
        assert classifier.is_task(text) is True
        assert classifier.classify(text) == IntentKind.TASK

    @pytest.mark.parametrize("text", ["What is this?", "so what is eduvane", "How are you?"])
    def test_whole_meta_question(self, text):
        """입력 전체가 메타 질문이면 과제 아님"""
        assert IntentClassifier().is_whole_meta_question(text) is True
        assert is_task_intent(text) is False

    def test_keyword_matches_at_word_start_only(self):
        """키워드는 단어 시작에서만 매칭"""
        assert is_task_intent("my checklist") is True
        assert is_task_intent("I rechecked it") is False


class TestConversationalIntent:
    """대화 신호 테스트"""

    @pytest.mark.parametrize("text", [
        "Hello",
        "hey there!",
        "Good morning.",
        "I am Ada",
        "I'm a student",
        "my name is Bola",
        "call me K",
        "ok",
        "Thank you!",
        "Cool",
        "Who are you?",
        "so what is eduvane",
    ])
    def test_conversational(self, text):
        """인사/자기소개/맞장구/메타 질문"""
        assert is_conversational_intent(text) is True

    @pytest.mark.parametrize("text", [
        "Generate a quiz",
        "photosynthesis",
        "ok so tell me about cells",
        "history",
    ])
    def test_not_conversational(self, text):
        """대화 신호가 없는 입력"""
        assert is_conversational_intent(text) is False

    def test_greeting_prefix_requires_word_boundary(self):
        """인사는 정확히 일치하거나 단어 단위 접두어여야 함"""
        assert is_conversational_intent("hi") is True
        assert is_conversational_intent("hippo") is False


class TestIntentClassifier:
    """IntentClassifier 테스트"""

    def test_classify_prefers_task(self):
        """두 신호가 모두 있으면 TASK"""
        classifier = IntentClassifier()
        text = "Hello, generate a quiz on fractions"
        assert classifier.is_conversational(text) is True
        assert classifier.classify(text) == IntentKind.TASK

    def test_classify_conversational_and_unknown(self):
        """대화 / 미분류"""
        classifier = IntentClassifier()
        assert classifier.classify("hello") == IntentKind.CONVERSATIONAL
        assert classifier.classify("photosynthesis") == IntentKind.UNKNOWN

    def test_custom_rules(self):
        """규칙 테이블 교체"""
        rules = IntentRules(task_keywords=("summarize",), min_math_length=10)
        classifier = IntentClassifier(rules)

        assert classifier.is_task("Summarize this") is True
        assert classifier.is_task("generate a quiz") is False
        assert classifier.is_task("1+1") is False

    def test_pure(self):
        """같은 입력은 항상 같은 결과"""
        classifier = IntentClassifier()
        for text in ["Hello", "Solve x^2 + 3 = 7", "who are you"]:
            assert classifier.classify(text) == classifier.classify(text)
