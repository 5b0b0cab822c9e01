"""설정/런타임 테스트"""

import logging

from eduvane import runtime
from eduvane.settings import Settings, settings, validate_settings


def test_defaults(monkeypatch):
    """환경 변수가 없을 때 기본값"""
    for name in ("FAST_PATH_THRESHOLD", "LLM_PROVIDER", "PERSISTENCE_BACKEND"):
        monkeypatch.delenv(name, raising=False)

    defaults = Settings(_env_file=None)

    assert defaults.fast_path_threshold == 800
    assert defaults.llm_provider == "openai"
    assert defaults.persistence_backend == "json"


def test_env_override(monkeypatch):
    monkeypatch.setenv("FAST_PATH_THRESHOLD", "1200")
    monkeypatch.setenv("CHAT_PROXY_URL", "http://localhost:3000/api/chat")

    overridden = Settings(_env_file=None)

    assert overridden.fast_path_threshold == 1200
    assert overridden.chat_proxy_url == "http://localhost:3000/api/chat"


def test_validate_settings_missing_key(monkeypatch):
    """API 키 누락과 폴백 부재 경고"""
    monkeypatch.setattr(settings, "llm_provider", "anthropic")
    monkeypatch.setattr(settings, "anthropic_api_key", None)
    monkeypatch.setattr(settings, "llm_fallback_provider", None)
    monkeypatch.setattr(settings, "chat_proxy_url", None)

    warnings = validate_settings()

    assert "ANTHROPIC_API_KEY" in warnings["llm"]
    assert "chat" in warnings


def test_validate_settings_clean(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "llm_provider", "dummy")
    monkeypatch.setattr(settings, "llm_fallback_provider", "dummy")
    monkeypatch.setattr(settings, "chat_proxy_url", None)
    monkeypatch.setattr(settings, "data_dir", tmp_path)

    assert validate_settings() == {}


def test_setup_logging_from_yaml(tmp_path, monkeypatch):
    """YAML 설정 파일로 로깅 구성"""
    config = tmp_path / "config" / "logging.yml"
    config.parent.mkdir()
    config.write_text(
        "version: 1\n"
        "disable_existing_loggers: false\n"
        "loggers:\n"
        "  eduvane.test_logging:\n"
        "    level: DEBUG\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(runtime, "get_project_root", lambda: str(tmp_path))

    runtime.setup_logging()

    assert logging.getLogger("eduvane.test_logging").level == logging.DEBUG


def test_setup_logging_invalid_yaml(tmp_path, monkeypatch, caplog):
    """형식 오류가 있으면 기본 설정으로 대체"""
    config = tmp_path / "config" / "logging.yml"
    config.parent.mkdir()
    config.write_text("version: [unclosed\n", encoding="utf-8")
    monkeypatch.setattr(runtime, "get_project_root", lambda: str(tmp_path))

    with caplog.at_level(logging.WARNING, logger="eduvane.runtime"):
        runtime.setup_logging()

    assert "로깅 설정 로드 실패" in caplog.text
