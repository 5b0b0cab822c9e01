"""분석 파이프라인 (chain-of-stages runner)

perceive → route → interpret → history → reason 순서로 단계를 실행합니다.
각 단계는 실패 정책을 한 번만 선언합니다.

- fail: 단계 실패 시 StageError로 파이프라인 중단 (사용자 메시지 포함)
- default: 경고 로그 후 기본값으로 대체하고 계속 진행

ConfigurationError는 정책과 무관하게 그대로 전파됩니다.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from eduvane.errors import ConfigurationError, StageError
from eduvane.models import (
    AnalysisMode,
    AnalysisResult,
    ErrorPolicy,
    InterpretationResult,
    Stage,
    StageOutcome,
    UserRole,
)

if TYPE_CHECKING:
    from eduvane.services.persistence.base import BasePersistenceService

    from .client import AnalysisClient

logger = logging.getLogger(__name__)

PERCEIVE_ERROR_MESSAGE = "Unable to read the document."
REASON_ERROR_MESSAGE = "Eduvane could not complete the diagnosis."


@dataclass
class AnalysisContext:
    """단계 간에 전달되는 분석 컨텍스트 (각 단계가 자신의 출력 필드를 채움)"""

    encoded_file: str
    mime_type: str
    instruction: str | None = None
    role: UserRole | None = None
    is_guest: bool = False

    # 단계 출력
    text: str = ""
    mode: AnalysisMode | None = None
    interpretation: InterpretationResult | None = None
    subject_resolved: bool = False
    history: str = ""
    result: AnalysisResult | None = None
    outcomes: list[StageOutcome] = field(default_factory=list)


StageFn = Callable[[AnalysisContext], None]


@dataclass(frozen=True)
class PipelineStage:
    """파이프라인 단계 정의"""

    name: Stage
    run: StageFn
    on_error: ErrorPolicy = "fail"
    default: StageFn | None = None
    error_message: str | None = None
    skip: Callable[[AnalysisContext], bool] | None = None


class StagePipeline:
    """단계 리스트를 순서대로 실행하는 러너"""

    def __init__(self, stages: list[PipelineStage]):
        self.stages = stages

    def run(self, context: AnalysisContext) -> AnalysisContext:
        """모든 단계 실행

        Raises:
            StageError: fail 정책 단계가 실패했을 때
            ConfigurationError: 설정 오류 (항상 그대로 전파)
        """
        for stage in self.stages:
            if stage.skip is not None and stage.skip(context):
                logger.debug(f"[{stage.name}] 건너뜀")
                continue

            started = time.perf_counter()
            try:
                stage.run(context)
            except ConfigurationError:
                context.outcomes.append(
                    StageOutcome(stage=stage.name, ok=False, error="configuration",
                                 elapsed_ms=_elapsed_ms(started))
                )
                raise
            except Exception as e:
                if stage.on_error == "default":
                    logger.warning(f"[{stage.name}] 실패, 기본값으로 대체: {e}")
                    if stage.default is not None:
                        stage.default(context)
                    context.outcomes.append(
                        StageOutcome(stage=stage.name, ok=False, degraded=True,
                                     elapsed_ms=_elapsed_ms(started), error=str(e))
                    )
                    continue

                logger.exception(f"[{stage.name}] 실패, 파이프라인 중단")
                context.outcomes.append(
                    StageOutcome(stage=stage.name, ok=False,
                                 elapsed_ms=_elapsed_ms(started), error=str(e))
                )
                raise StageError(stage.name, stage.error_message or str(e)) from e

            context.outcomes.append(
                StageOutcome(stage=stage.name, elapsed_ms=_elapsed_ms(started))
            )
        return context


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def select_mode(text: str, threshold: int) -> AnalysisMode:
    """추출 텍스트 길이로 추론 모드 선택 (threshold 미만이면 fast)"""
    return "fast" if len(text) < threshold else "deep"


def build_analysis_pipeline(
    client: "AnalysisClient",
    persistence: "BasePersistenceService | None" = None,
    fast_path_threshold: int = 800,
) -> StagePipeline:
    """표준 분석 파이프라인 구성

    Args:
        client: perceive/interpret/reason 호출 클라이언트
        persistence: 종단 인사이트 조회용 저장소 (None이면 history 단계 생략)
        fast_path_threshold: fast/deep 모드 경계 (문자 수)
    """

    def perceive(ctx: AnalysisContext) -> None:
        ctx.text = client.perceive(ctx.encoded_file, ctx.mime_type)

    def route(ctx: AnalysisContext) -> None:
        ctx.mode = select_mode(ctx.text, fast_path_threshold)
        logger.info(f"추론 모드: {ctx.mode} ({len(ctx.text)}자)")

    def interpret(ctx: AnalysisContext) -> None:
        ctx.interpretation = client.interpret(ctx.text)
        ctx.subject_resolved = bool(ctx.interpretation.subject)

    def interpret_default(ctx: AnalysisContext) -> None:
        ctx.interpretation = InterpretationResult.default()
        ctx.subject_resolved = False

    def history(ctx: AnalysisContext) -> None:
        ctx.history = persistence.get_recent_insights(ctx.interpretation.subject)

    def history_default(ctx: AnalysisContext) -> None:
        ctx.history = ""

    def skip_history(ctx: AnalysisContext) -> bool:
        return persistence is None or ctx.is_guest or not ctx.subject_resolved

    def reason(ctx: AnalysisContext) -> None:
        ctx.result = client.reason(
            encoded_file=ctx.encoded_file,
            mime_type=ctx.mime_type,
            text=ctx.text,
            interpretation=ctx.interpretation,
            mode=ctx.mode,
            instruction=ctx.instruction,
            history=ctx.history,
            role=ctx.role,
        )

    return StagePipeline([
        PipelineStage("perceive", perceive, on_error="fail",
                      error_message=PERCEIVE_ERROR_MESSAGE),
        PipelineStage("route", route, on_error="fail"),
        PipelineStage("interpret", interpret, on_error="default",
                      default=interpret_default),
        PipelineStage("history", history, on_error="default",
                      default=history_default, skip=skip_history),
        PipelineStage("reason", reason, on_error="fail",
                      error_message=REASON_ERROR_MESSAGE),
    ])
