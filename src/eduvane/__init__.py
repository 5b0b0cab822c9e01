"""Eduvane - 교실 피드백 엔진

사용자 입력(텍스트/파일)을 의도에 따라 대화 응답, 분석 파이프라인
(perceive → interpret → reason → persist), 학습과제 채팅으로 라우팅합니다.
"""

__version__ = "0.1.0"
