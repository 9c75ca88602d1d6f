"""
목적: 중계 계층 공통 추상체를 정의한다.
설명: 출력 싱크, 백엔드 연결/커넥터, 시계, 중계 실행 인터페이스를 Protocol로 제공한다.
디자인 패턴: 포트-어댑터(Port/Protocol)
참조: src/relay_bot/shared/relay/services/streaming_relay.py, src/relay_bot/integrations/slack/output_sink.py, src/relay_bot/integrations/backend/websocket_connector.py
"""

from __future__ import annotations

from typing import Any, Awaitable, Protocol, TypeVar

from relay_bot.shared.relay.models import MessageHandle, RelayEvent

T = TypeVar("T")


class OutputSinkPort(Protocol):
    """채팅 출력 채널 포트.

    실패 시 `BaseAppException`을 발생시키며, 플랫폼 속도 제한은
    `OUTPUT_RATE_LIMITED` 코드와 `metadata["retry_after"]`로 알린다.
    """

    async def post(self, text: str) -> MessageHandle:
        """새 메시지를 게시하고 식별자를 반환한다."""

    async def update(self, handle: MessageHandle, text: str) -> None:
        """기존 메시지의 내용을 교체한다."""


class BackendConnectionPort(Protocol):
    """백엔드 스트리밍 연결 포트."""

    async def receive(self) -> RelayEvent:
        """다음 생명주기 이벤트(프레임/종료/실패)를 반환한다."""

    async def send(self, payload: str) -> None:
        """텍스트 프레임을 전송한다."""

    async def close(self) -> None:
        """연결을 닫는다. 이미 닫혀 있으면 아무 것도 하지 않는다."""


class BackendConnectorPort(Protocol):
    """백엔드 연결 생성 포트."""

    async def connect(self, url: str) -> BackendConnectionPort:
        """주어진 주소로 연결을 연다."""


class ClockPort(Protocol):
    """시간 측정/대기 포트."""

    def now(self) -> float:
        """단조 증가 시각(초)을 반환한다."""

    async def sleep(self, seconds: float) -> None:
        """지정 시간만큼 대기한다."""

    async def wait_for(self, awaitable: Awaitable[T], timeout: float) -> T:
        """awaitable을 timeout초까지 기다린다. 초과하면 취소하고 `asyncio.TimeoutError`를 발생시킨다."""


class RelayPort(Protocol):
    """요청 1건을 백엔드로 중계하는 포트."""

    async def relay(self, request_text: str, sink: OutputSinkPort) -> Any:
        """요청을 중계하고 세션 종료까지 대기한다."""
