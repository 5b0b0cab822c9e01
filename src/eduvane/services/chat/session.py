"""채팅 세션 - canonical history 관리 및 primary/fallback 전송 전환

한 번의 논리적 send마다 (user, model) 턴 쌍을 정확히 한 번 history에 추가합니다.

1. user 턴을 즉시(낙관적으로) history에 추가
2. primary 전송 시도: 방금 추가한 user 턴을 제외한 history 스냅샷 + 지시문 + 모델
3. primary 실패(연결 불가, 비정상 응답, 본문 없음, 스트림 도중 중단) → 같은 스냅샷으로 fallback 시도
   (스트림 도중 중단이면 이미 전달된 조각 뒤에 fallback 응답 전체가 이어지며, history에는 fallback 응답만 남음)
4. 성공한 경로의 누적 텍스트를 model 턴으로 추가
5. 둘 다 실패하면 TransportError 전파 (history에는 user 턴만 남음)
"""

import logging
from typing import Iterator

from eduvane.errors import TransportError
from eduvane.settings import settings

from .transports import BaseChatTransport, ChatRequest, ChatTurn

logger = logging.getLogger(__name__)


class ChatSession:
    """하나의 시스템 지시문에 묶인 대화 세션"""

    def __init__(
        self,
        system_instruction: str,
        primary: BaseChatTransport,
        fallback: BaseChatTransport | None = None,
        model: str | None = None,
    ):
        """
        Args:
            system_instruction: 세션 시스템 지시문
            primary: 1차 전송
            fallback: 2차 전송 (None이면 폴백 없음)
            model: 대상 모델 식별자 (None이면 settings.model_chat)
        """
        self.system_instruction = system_instruction
        self.primary = primary
        self.fallback = fallback
        self.model = model or settings.model_chat
        self._history: list[ChatTurn] = []

    @property
    def history(self) -> tuple[ChatTurn, ...]:
        """canonical history 스냅샷 (읽기 전용)"""
        return tuple(self._history)

    def send_message_stream(self, message: str) -> Iterator[str]:
        """메시지 전송 (스트리밍)

        user 턴은 호출 즉시 history에 추가되고, 반환된 이터레이터를 소비하는 동안
        원격 호출이 진행됩니다.

        Args:
            message: 사용자 메시지

        Returns:
            응답 텍스트 조각 이터레이터

        Raises:
            TransportError: primary/fallback 모두 실패 (이터레이터 소비 중 발생)
        """
        prior = tuple(self._history)
        self._history.append(ChatTurn(role="user", text=message))
        request = ChatRequest(
            model=self.model,
            instruction=self.system_instruction,
            message=message,
            history=prior,
        )
        return self._stream(request)

    def send_message(self, message: str) -> str:
        """메시지 전송 (논-스트리밍) - 스트리밍 경로의 결과를 모아서 반환"""
        return "".join(self.send_message_stream(message))

    def _stream(self, request: ChatRequest) -> Iterator[str]:
        streamed: list[str] = []
        try:
            full_text = yield from self._attempt(self.primary, request, streamed)
        except TransportError as primary_error:
            if self.fallback is None:
                logger.error(f"채팅 전송 실패 (폴백 없음): {primary_error}")
                raise
            if streamed:
                # 이미 전달된 조각은 회수할 수 없음: fallback 응답이 그 뒤에 처음부터 이어짐
                logger.warning(
                    f"primary 전송({self.primary.name}) 스트림 도중 실패, 전달된 {len(streamed)}개 조각 이후 "
                    f"fallback({self.fallback.name}) 응답을 처음부터 이어서 전송: {primary_error}"
                )
            else:
                logger.warning(
                    f"primary 전송({self.primary.name}) 실패, fallback({self.fallback.name})으로 재시도: "
                    f"{primary_error}"
                )
            try:
                full_text = yield from self._attempt(self.fallback, request, [])
            except TransportError as fallback_error:
                logger.error(f"fallback 전송도 실패: {fallback_error}")
                raise TransportError(
                    f"Chat failed on both transports: {primary_error}; {fallback_error}"
                ) from fallback_error

        self._history.append(ChatTurn(role="model", text=full_text))

    @staticmethod
    def _attempt(transport: BaseChatTransport, request: ChatRequest, chunks: list[str]):
        """단일 전송 시도: 조각을 그대로 흘려보내며 chunks에 누적하고 합친 텍스트를 반환"""
        for chunk in transport.stream(request):
            chunks.append(chunk)
            yield chunk
        return "".join(chunks)
