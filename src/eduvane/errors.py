"""Eduvane 예외 계층

- ConfigurationError: 자격 증명/제공자 설정 누락 (치명적, 재시도 없음)
- TransportError: 원격 호출 실패 (연결 불가, 비정상 상태 코드, 응답 본문 없음)
- SchemaError: 구조화 응답(JSON) 파싱 실패
- StageError: 분석 파이프라인 단계 실패 (사용자에게 보여줄 메시지 포함)
"""


class EduvaneError(Exception):
    """Eduvane 기본 예외"""


class ConfigurationError(EduvaneError):
    """설정 오류 (API 키 누락, 지원하지 않는 제공자 등)"""


class TransportError(EduvaneError):
    """원격 전송 실패"""


class SchemaError(EduvaneError):
    """구조화 응답 파싱 실패"""


class StageError(EduvaneError):
    """파이프라인 단계 실패

    Attributes:
        stage: 실패한 단계명 (perceive, reason 등)
        message: 사용자에게 노출 가능한 메시지
    """

    def __init__(self, stage: str, message: str):
        super().__init__(message)
        self.stage = stage
        self.message = message
