"""애플리케이션 설정 관리"""

from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env 파일 로드
load_dotenv()

# 프로젝트 루트 디렉토리
ROOT_DIR = Path(__file__).resolve().parent.parent.parent

LLMProvider = Literal["openai", "anthropic", "dummy"]


class Settings(BaseSettings):
    """애플리케이션 설정"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM 설정
    llm_provider: LLMProvider = Field(
        default="openai", description="LLM 제공자 (openai | anthropic | dummy)"
    )
    llm_fallback_provider: LLMProvider | None = Field(
        default=None, description="채팅 폴백 전송에 사용할 LLM 제공자 (선택)"
    )
    openai_api_key: str | None = Field(default=None, description="OpenAI API 키")
    anthropic_api_key: str | None = Field(default=None, description="Anthropic API 키")

    # 모델 설정 (제공자 기본값)
    openai_model: str = Field(default="gpt-4o", description="OpenAI 기본 모델명")
    anthropic_model: str = Field(
        default="claude-3-5-sonnet-20241022", description="Anthropic 기본 모델명"
    )

    # 단계별 모델 설정
    model_perception: str = Field(default="gpt-4o", description="이미지 인식(Perception) 모델")
    model_perception_pdf: str = Field(default="gpt-4.1", description="PDF 인식(Perception) 모델")
    model_interpretation: str = Field(default="gpt-4o-mini", description="해석(Interpretation) 모델")
    model_reasoning_fast: str = Field(default="gpt-4o-mini", description="추론 fast 모드 모델")
    model_reasoning_deep: str = Field(default="gpt-4.1", description="추론 deep 모드 모델")
    model_chat: str = Field(default="gpt-4o-mini", description="대화/학습과제 모델")

    # 채팅 프록시 설정
    chat_proxy_url: str | None = Field(
        default=None, description="채팅 프록시 엔드포인트 (예: http://localhost:3000/api/chat)"
    )
    chat_proxy_timeout: float = Field(default=60.0, description="채팅 프록시 타임아웃 (초)")

    # 분석 파이프라인 설정
    fast_path_threshold: int = Field(
        default=800, description="이 길이 미만의 추출 텍스트는 fast 모드로 분석"
    )
    max_image_edge: int = Field(default=2048, description="업로드 이미지 최대 변 길이 (px)")

    # 저장소 설정
    persistence_backend: Literal["memory", "json"] = Field(
        default="json", description="저장소 백엔드 (memory | json)"
    )
    data_dir: Path = Field(default=ROOT_DIR / "data", description="JSON 저장소 디렉토리")

    # 앱 설정
    app_debug: bool = Field(default=False, description="디버그 모드")
    log_level: str = Field(default="INFO", description="로그 레벨")
    max_upload_size_mb: int = Field(default=10, description="최대 업로드 크기 (MB)")


# 전역 설정 인스턴스
settings = Settings()


def validate_settings() -> dict[str, str]:
    """설정 유효성 검사 및 경고 메시지 반환"""
    warnings = {}

    # LLM 설정 검증
    for key, provider in (("llm", settings.llm_provider), ("llm_fallback", settings.llm_fallback_provider)):
        if provider == "openai" and not settings.openai_api_key:
            warnings[key] = "OpenAI API 사용을 위해서는 OPENAI_API_KEY가 필요합니다."
        elif provider == "anthropic" and not settings.anthropic_api_key:
            warnings[key] = "Anthropic API 사용을 위해서는 ANTHROPIC_API_KEY가 필요합니다."

    # 채팅 전송 검증
    if not settings.chat_proxy_url and not settings.llm_fallback_provider:
        warnings["chat"] = (
            "CHAT_PROXY_URL과 LLM_FALLBACK_PROVIDER가 모두 비어 있어 "
            "채팅 폴백 전송 없이 동작합니다."
        )

    # 저장소 검증
    if settings.persistence_backend == "json" and settings.data_dir.exists() and not settings.data_dir.is_dir():
        warnings["persistence"] = f"DATA_DIR이 디렉토리가 아닙니다: {settings.data_dir}"

    return warnings
