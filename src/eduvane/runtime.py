"""
공통 런타임 유틸리티

- setup_logging(): config/logging.yml 로깅 설정을 불러오고, 없으면 기본 로깅으로 대체
"""
from __future__ import annotations

import logging
import logging.config
import os

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from eduvane.settings import ROOT_DIR, settings


def get_project_root() -> str:
    """프로젝트 루트의 절대 경로를 반환합니다(src의 상위 디렉터리)."""
    return str(ROOT_DIR)


def setup_logging(config_rel_path: str = os.path.join("config", "logging.yml")) -> None:
    """로깅 설정을 초기화합니다.

    - 프로젝트 루트 기준 `config/logging.yml` 파일이 있으면 이를 로드해 로깅을 구성합니다.
    - 없거나 형식 오류가 있으면 기본 로깅 설정으로 대체합니다.

    Args:
        config_rel_path: 프로젝트 루트 기준 로깅 YAML 파일의 상대 경로.
    """
    cfg_path = os.path.join(get_project_root(), config_rel_path)
    if os.path.exists(cfg_path):
        try:
            yaml = YAML(typ="safe")
            with open(cfg_path, "r", encoding="utf-8") as f:
                data = yaml.load(f) or {}
            if isinstance(data, dict) and data:
                logging.config.dictConfig(data)
                return
        except (OSError, YAMLError, ValueError) as e:
            # 기본 로깅 설정으로 폴백
            logging.basicConfig(level=settings.log_level.upper())
            logging.getLogger(__name__).warning(f"로깅 설정 로드 실패, 기본 설정 사용: {e}")
            return
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
