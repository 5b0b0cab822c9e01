"""분석 결과 요약 (대화 세션 컨텍스트 주입용)"""

from eduvane.models import AnalysisResult
from eduvane.prompts import CONTEXT_INJECTION_TEMPLATE


def format_analysis_context(result: AnalysisResult) -> str:
    """분석 결과를 학습과제 채팅 세션에 주입할 텍스트로 변환"""
    stability = result.concept_stability
    observations = "\n".join(f"- {f.type.upper()}: {f.text}" for f in result.feedback)
    insights = "\n".join(f"- {i.title}: {i.trend}" for i in result.insights)

    return CONTEXT_INJECTION_TEMPLATE.format(
        subject=result.subject,
        topic=result.topic,
        ownership=result.ownership.type,
        observations=observations or "- None",
        gaps=", ".join(f.text for f in result.gaps) or "None",
        stability=stability.status if stability else "Unknown",
        evidence=(stability.evidence if stability and stability.evidence else "No specific evidence"),
        insights=insights or "- None",
        teacher_insight=result.teacher_insight or "None",
    )
