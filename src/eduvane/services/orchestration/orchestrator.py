"""오케스트레이터 (Orchestrator)

세션 상태(역할/이름/확인 플래그)를 소유하고, 한 턴의 입력을 다음 중 하나로 라우팅합니다.

1. 대화 턴: 인사/자기소개/맞장구 → 응답 변형 하나 + TASK_COMPLETE (원격 호출 없음)
2. 파일 업로드: 분석 파이프라인 (perceive → interpret → reason → persist)
3. 텍스트 과제: 진행 중인 학습과제 채팅 세션으로 스트리밍

process_input()은 이벤트 이터레이터를 반환하며, 호출자는 다음 턴 전에 끝까지 소비해야 합니다.
세션당 동시에 하나의 턴만 처리한다고 가정합니다 (잠금 없음).
"""

import logging
import threading
from typing import TYPE_CHECKING, Callable, Iterator

from eduvane.errors import StageError
from eduvane.models import (
    AnalysisPhase,
    AnalysisResult,
    InputFile,
    OrchestratorEvent,
    SessionState,
    Submission,
    SubmissionStatus,
    UnifiedInput,
    UserProfile,
    UserRole,
)
from eduvane.prompts import LEARNING_TASK_TEMPLATE, QUESTION_WORKSPACE_SYSTEM_PROMPT
from eduvane.services.analysis import AnalysisContext, build_analysis_pipeline, format_analysis_context
from eduvane.settings import settings
from eduvane.utils.files import encode_file

from .identity import extract_identity, parse_simple_role
from .intent_classifier import IntentClassifier
from .responses import ResponseCategory, ResponseVariantSelector

if TYPE_CHECKING:
    from eduvane.services.analysis import AnalysisClient
    from eduvane.services.chat import ChatSession, ChatSessionFactory
    from eduvane.services.persistence import BasePersistenceService

logger = logging.getLogger(__name__)

TASK_ERROR_MESSAGE = "I encountered an issue processing that task."
ANALYSIS_ERROR_MESSAGE = "Analysis pipeline failed."

BackgroundRunner = Callable[[Callable[[], None]], None]


def run_in_thread(fn: Callable[[], None]) -> None:
    """데몬 스레드에서 실행 (결과를 기다리지 않음)"""
    threading.Thread(target=fn, name="eduvane-context-injection", daemon=True).start()


class Orchestrator:
    """의도 라우터 겸 파이프라인 조정자"""

    def __init__(
        self,
        analysis_client: "AnalysisClient",
        chat_session_factory: "ChatSessionFactory",
        persistence: "BasePersistenceService | None" = None,
        is_guest: bool = False,
        selector: ResponseVariantSelector | None = None,
        classifier: IntentClassifier | None = None,
        background: BackgroundRunner = run_in_thread,
        fast_path_threshold: int | None = None,
    ):
        """
        Args:
            analysis_client: perceive/interpret/reason 클라이언트
            chat_session_factory: 학습과제 채팅 세션 생성기
            persistence: 프로필/제출물 저장소 (None이면 저장하지 않음)
            is_guest: 게스트 세션 여부 (프로필 로드, 기록 조회, 저장 모두 생략)
            selector: 응답 변형 선택기 (테스트에서 결정적 선택 주입)
            classifier: 의도 분류기
            background: 컨텍스트 주입을 실행할 러너 (기본: 데몬 스레드)
            fast_path_threshold: fast/deep 추론 모드 경계 (None이면 설정값)
        """
        self.analysis_client = analysis_client
        self.chat_session_factory = chat_session_factory
        self.persistence = persistence
        self.is_guest = is_guest
        self.selector = selector or ResponseVariantSelector()
        self.classifier = classifier or IntentClassifier()
        self.background = background
        self.pipeline = build_analysis_pipeline(
            analysis_client,
            persistence,
            fast_path_threshold or settings.fast_path_threshold,
        )

        self.state = SessionState()
        self._chat_session: "ChatSession | None" = None

    # =========================================================================
    # 세션 수명주기
    # =========================================================================

    @property
    def chat_session(self) -> "ChatSession":
        """진행 중인 학습과제 채팅 세션 (최초 접근 시 생성)"""
        if self._chat_session is None:
            self._chat_session = self.chat_session_factory.create(QUESTION_WORKSPACE_SYSTEM_PROMPT)
        return self._chat_session

    def create_question_session(self) -> "ChatSession":
        """독립된 일회성 세션 생성 (진행 중인 세션 history와 공유하지 않음)"""
        return self.chat_session_factory.create(QUESTION_WORKSPACE_SYSTEM_PROMPT)

    def reset(self) -> None:
        """세션 상태 초기화 및 진행 중인 채팅 세션 폐기

        이미 진행 중인 원격 호출은 중단하지 않습니다.
        """
        self.state = SessionState()
        self._chat_session = None
        logger.info("세션 초기화")

    # =========================================================================
    # 턴 처리
    # =========================================================================

    def process_input(self, user_input: UnifiedInput) -> Iterator[OrchestratorEvent]:
        """한 턴의 입력을 처리하고 이벤트를 순서대로 yield

        Args:
            user_input: 파일 또는 텍스트 입력 (파일이 있으면 항상 분석 과제)

        Yields:
            OrchestratorEvent
        """
        self._initialize()

        if user_input.file is not None:
            self.state.has_introduced_self = True
            yield from self._run_analysis(user_input.file, user_input.text)
            return

        text = user_input.text
        handled = yield from self._handle_conversation(text)
        if handled:
            return

        self.state.has_introduced_self = True
        yield from self._run_learning_task(text)

    def _initialize(self) -> None:
        """첫 턴: 저장된 프로필로 역할/이름 초기화 (게스트 제외)"""
        state = self.state
        if state.initialized:
            return
        state.initialized = True

        if self.is_guest or self.persistence is None:
            return
        try:
            profile = self.persistence.get_user_profile()
        except (OSError, ValueError) as e:
            logger.warning(f"프로필 로드 실패: {e}")
            return
        if profile is None:
            return

        state.user_name = profile.name
        state.user_role = profile.role
        state.role_confirmed = profile.role is not None
        logger.info(f"프로필 로드: role={profile.role}, name={profile.name}")

    def _handle_conversation(self, text: str):
        """대화 턴 처리 (처리했으면 True 반환, 과제면 False)"""
        state = self.state

        # 역할 질문은 다음 텍스트 턴에서 해석 성공 여부와 관계없이 해제
        question_pending = state.role_asked
        state.role_asked = False

        is_task = self.classifier.is_task(text)
        is_conversational = self.classifier.is_conversational(text)
        identity = extract_identity(text)

        new_identity = identity.detected
        if identity.name:
            state.user_name = identity.name
        if identity.role:
            state.confirm_role(identity.role)

        if is_task or not (is_conversational or identity.detected or question_pending):
            if new_identity:
                self._remember_identity()
            return False

        if question_pending and not state.role_confirmed:
            answered = parse_simple_role(text)
            if answered is not None:
                state.confirm_role(answered)
                new_identity = True

        if new_identity:
            self._remember_identity()

        if not state.has_introduced_self or new_identity:
            state.has_introduced_self = True
            reply = self._greeting(question_pending)
        else:
            reply = self.selector.get(ResponseCategory.CONTINUITY, state.user_role, state.user_name)

        yield OrchestratorEvent.chunk(reply)
        yield OrchestratorEvent.task_complete()
        return True

    def _greeting(self, question_pending: bool) -> str:
        state = self.state
        if state.user_role is not None:
            return self.selector.get(ResponseCategory.GREETING, state.user_role, state.user_name)

        # 역할 미지정: 직전 턴이 역할 질문이었다면 다시 묻지 않음
        if question_pending:
            return self.selector.get(ResponseCategory.CONTINUITY, None, state.user_name)
        state.role_asked = True
        return self.selector.get(ResponseCategory.GREETING, None, state.user_name)

    def _remember_identity(self) -> None:
        """새 이름/역할을 프로필로 저장 (best-effort)"""
        if self.is_guest or self.persistence is None:
            return
        profile = UserProfile(name=self.state.user_name, role=self.state.user_role)
        try:
            self.persistence.save_user_profile(profile)
        except OSError as e:
            logger.warning(f"프로필 저장 실패: {e}")

    # =========================================================================
    # 분석 파이프라인 (파일 업로드)
    # =========================================================================

    def _run_analysis(self, file: InputFile, instruction: str | None) -> Iterator[OrchestratorEvent]:
        submission = Submission(file_name=file.name)
        submission.advance(SubmissionStatus.PROCESSING)
        yield OrchestratorEvent.phase_update(AnalysisPhase.PROCESSING)
        logger.info(f"분석 시작: submission={submission.id}, file={file.name}")

        try:
            encoded, mime_type = encode_file(file)
            context = AnalysisContext(
                encoded_file=encoded,
                mime_type=mime_type,
                instruction=instruction,
                role=self.state.user_role,
                is_guest=self.is_guest,
            )
            self.pipeline.run(context)
            result = context.result.model_copy(update={"id": submission.id})
            submission.complete(result)
        except StageError as e:
            yield from self._fail_submission(submission, e.message)
            return
        except Exception as e:
            logger.exception(f"분석 실패: submission={submission.id}")
            yield from self._fail_submission(submission, str(e) or ANALYSIS_ERROR_MESSAGE)
            return

        if not self.is_guest and self.persistence is not None:
            try:
                self.persistence.save_submission(submission)
            except (OSError, ValueError) as e:
                logger.warning(f"제출물 저장 실패: submission={submission.id} ({e})")

        yield OrchestratorEvent.submission_complete(submission)
        yield OrchestratorEvent.phase_update(AnalysisPhase.COMPLETE)

        session = self.chat_session
        self.background(lambda: self._inject_analysis_context(session, result))

        yield OrchestratorEvent.follow_up(self._analysis_follow_up(result))

    def _fail_submission(self, submission: Submission, message: str) -> Iterator[OrchestratorEvent]:
        submission.fail(message)
        yield OrchestratorEvent.error(message)
        yield OrchestratorEvent.phase_update(AnalysisPhase.ERROR)

    def _analysis_follow_up(self, result: AnalysisResult) -> str:
        state = self.state
        variant = self.selector.get(
            ResponseCategory.FOLLOW_UP_ANALYSIS, state.user_role, state.user_name
        )
        if state.role_confirmed and state.user_role == UserRole.TEACHER and result.teacher_insight:
            return f"{result.teacher_insight}\n\n{variant}"
        return variant

    @staticmethod
    def _inject_analysis_context(session: "ChatSession", result: AnalysisResult) -> None:
        """분석 결과 요약을 채팅 세션 history에 주입 (실패는 로그만 남김)"""
        try:
            session.send_message(format_analysis_context(result))
            logger.debug(f"컨텍스트 주입 완료: result={result.id}")
        except Exception as e:
            logger.warning(f"컨텍스트 주입 실패: result={result.id} ({e})")

    # =========================================================================
    # 학습과제 채팅 (텍스트 과제)
    # =========================================================================

    def _run_learning_task(self, text: str) -> Iterator[OrchestratorEvent]:
        state = self.state
        role = state.user_role.value if state.user_role else "Ambiguous"
        message = LEARNING_TASK_TEMPLATE.format(role=role, message=text)

        try:
            for chunk in self.chat_session.send_message_stream(message):
                if chunk:
                    yield OrchestratorEvent.chunk(chunk)
        except Exception:
            logger.exception("학습과제 처리 실패")
            yield OrchestratorEvent.error(TASK_ERROR_MESSAGE)
            yield OrchestratorEvent.phase_update(AnalysisPhase.ERROR)
            return

        yield OrchestratorEvent.task_complete()
        yield OrchestratorEvent.follow_up(
            self.selector.get(ResponseCategory.FOLLOW_UP_TASK, state.user_role, state.user_name)
        )
