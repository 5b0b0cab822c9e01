"""의도 분류기 (IntentClassifier)

텍스트 입력을 과제(task) / 대화(conversational) 신호로 분류합니다.
규칙은 IntentRules 테이블로 분리되어 있어 독립적으로 테스트하고 교체할 수 있습니다.
두 신호가 모두 잡히면 Orchestrator는 과제 처리를 우선합니다.
"""

import re
from dataclasses import dataclass, field
from enum import Enum


class IntentKind(Enum):
    """분류 결과"""

    TASK = "task"
    CONVERSATIONAL = "conversational"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class IntentRules:
    """의도 분류 규칙 테이블"""

    # 과제 신호
    task_keywords: tuple[str, ...] = (
        "generate", "create", "make", "analyze", "check", "quiz", "test",
        "practice", "questions", "exam", "exercises", "grade", "assess", "solve",
    )
    task_verbs: tuple[str, ...] = ("what", "how", "calculate", "find", "explain", "why")
    math_operators: str = "+-*/=^×÷<>%"
    min_math_length: int = 3

    # 대화 신호
    greetings: tuple[str, ...] = (
        "hi", "hello", "hey", "greetings", "yo", "hiya", "sup", "howdy",
        "good morning", "good afternoon", "good evening",
    )
    identity_prefixes: tuple[str, ...] = ("i am ", "im ", "my name is ", "call me ")
    acknowledgements: tuple[str, ...] = (
        "ok", "okay", "thanks", "thank you", "cool", "nice", "great", "got it",
    )
    meta_questions: tuple[str, ...] = (
        "who are you", "what is eduvane", "what is this", "what can you do",
        "how are you", "what are you",
    )
    # 메타 질문 앞에 붙어도 무시하는 말머리 ("so what is eduvane")
    meta_lead_words: tuple[str, ...] = ("so", "hey", "and", "but")

    _keyword_re: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # 단어 시작 위치에서만 매칭 ("checklist"는 허용, "recheck"는 제외)
        pattern = r"\b(?:" + "|".join(re.escape(k) for k in self.task_keywords) + ")"
        object.__setattr__(self, "_keyword_re", re.compile(pattern, re.IGNORECASE))

    def has_task_keyword(self, text: str) -> bool:
        return bool(self._keyword_re.search(text))


DEFAULT_RULES = IntentRules()

_PUNCTUATION_RE = re.compile(r"[^\w\s]")


def _normalize(text: str) -> str:
    """소문자화 + 구두점 제거 + 공백 정리"""
    return " ".join(_PUNCTUATION_RE.sub("", text.lower()).split())


class IntentClassifier:
    """규칙 기반 의도 분류기 (순수, 상태 없음)"""

    def __init__(self, rules: IntentRules = DEFAULT_RULES):
        self.rules = rules

    def is_meta_question(self, text: str) -> bool:
        """메타 질문 어구 포함 여부 (대화 신호)"""
        t = text.strip().lower()
        return any(q in t for q in self.rules.meta_questions)

    def is_whole_meta_question(self, text: str) -> bool:
        """입력 전체가 메타 질문인지 (말머리는 무시)"""
        words = _normalize(text).split()
        while words and words[0] in self.rules.meta_lead_words:
            words = words[1:]
        return " ".join(words) in self.rules.meta_questions

    def is_implicit_math(self, text: str) -> bool:
        """숫자 + 연산자가 함께 있고 최소 길이 이상이면 수식으로 간주"""
        t = text.strip()
        if len(t) < self.rules.min_math_length:
            return False
        has_digit = any(ch.isdigit() for ch in t)
        has_operator = any(ch in self.rules.math_operators for ch in t)
        return has_digit and has_operator

    def starts_with_task_verb(self, text: str) -> bool:
        words = _normalize(text).split()
        if not words or words[0] not in self.rules.task_verbs:
            return False
        # "what is eduvane" 처럼 입력 전체가 메타 질문일 때만 과제 신호에서 제외
        return not self.is_whole_meta_question(text)

    def is_task(self, text: str) -> bool:
        """과제 신호 여부"""
        t = text.strip()
        if not t:
            return False
        return (
            self.rules.has_task_keyword(t)
            or self.is_implicit_math(t)
            or self.starts_with_task_verb(t)
        )

    def is_conversational(self, text: str) -> bool:
        """대화 신호 여부 (인사, 자기소개, 짧은 맞장구, 메타 질문)"""
        clean = _normalize(text)
        if not clean:
            return False
        rules = self.rules

        if any(clean == g or clean.startswith(g + " ") for g in rules.greetings):
            return True
        padded = clean + " "
        if any(padded.startswith(p) or f" {p}" in padded for p in rules.identity_prefixes):
            return True
        if clean in rules.acknowledgements:
            return True
        return self.is_meta_question(text)

    def classify(self, text: str) -> IntentKind:
        """단일 결과로 분류 (과제 우선)"""
        if self.is_task(text):
            return IntentKind.TASK
        if self.is_conversational(text):
            return IntentKind.CONVERSATIONAL
        return IntentKind.UNKNOWN


_default_classifier = IntentClassifier()


def is_task_intent(text: str) -> bool:
    """기본 규칙으로 과제 신호 판정"""
    return _default_classifier.is_task(text)


def is_conversational_intent(text: str) -> bool:
    """기본 규칙으로 대화 신호 판정"""
    return _default_classifier.is_conversational(text)
