"""
목적: WebSocket 백엔드 어댑터의 이벤트 변환을 검증한다.
설명: 수신 프레임/close 프레임/연결 유실 변환, error 프레임 뒤 1011 종료 시 중계 결과, 전송 실패 변환, 잘못된 주소 연결 실패를 확인한다.
디자인 패턴: 어댑터 단위 테스트 + 테스트 더블
참조: src/relay_bot/integrations/backend/websocket_connector.py
"""

from __future__ import annotations

import asyncio
from typing import Any, List, Optional

import pytest
from websockets.exceptions import ConnectionClosedError, ConnectionClosedOK
from websockets.frames import Close

from relay_bot.integrations.backend import WebSocketBackendConnection, WebSocketBackendConnector
from relay_bot.shared.config import DEFAULT_ACK_MARKER
from relay_bot.shared.const import ErrorCode
from relay_bot.shared.exceptions import BaseAppException
from relay_bot.shared.relay.const import RelayMessages
from relay_bot.shared.relay.models import ConnectionClosed, ConnectionFailed, FrameReceived, SessionState
from relay_bot.shared.relay.services import StreamingRelay

from relay_fakes import FakeClock, FakeSink, ack, backend_error, quiet_logger


class _FakeWebSocket:
    def __init__(self, incoming: Optional[List[Any]] = None, send_error: Optional[Exception] = None) -> None:
        self._incoming = list(incoming or [])
        self._send_error = send_error
        self.sent: List[str] = []
        self.closed = False

    async def recv(self) -> Any:
        item = self._incoming.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def send(self, payload: str) -> None:
        if self._send_error is not None:
            raise self._send_error
        self.sent.append(payload)

    async def close(self) -> None:
        self.closed = True


class _StaticConnector:
    def __init__(self, connection: WebSocketBackendConnection) -> None:
        self._connection = connection

    async def connect(self, url: str) -> WebSocketBackendConnection:
        return self._connection


def _connection(websocket: _FakeWebSocket) -> WebSocketBackendConnection:
    return WebSocketBackendConnection(websocket, "ws://backend/ws/s1", logger=quiet_logger())


def test_receive_maps_frames_and_clean_close() -> None:
    """텍스트 프레임은 FrameReceived로, 정상 종료는 ConnectionClosed로 변환해야 한다."""

    websocket = _FakeWebSocket(['{"type": "stream_complete"}', ConnectionClosedOK(Close(1000, "bye"), None)])
    connection = _connection(websocket)

    async def scenario() -> list:
        return [await connection.receive(), await connection.receive()]

    first, second = asyncio.run(scenario())

    assert first == FrameReceived(raw='{"type": "stream_complete"}')
    assert isinstance(second, ConnectionClosed)
    assert (second.code, second.reason) == (1000, "bye")


def test_receive_maps_error_close_frame_to_closed() -> None:
    """상대가 보낸 close 프레임은 1011이나 4xxx 코드여도 ConnectionClosed로 변환해야 한다."""

    websocket = _FakeWebSocket(
        [
            ConnectionClosedError(Close(1011, "internal error"), None),
            ConnectionClosedError(Close(4000, "session ended"), None),
        ]
    )
    connection = _connection(websocket)

    async def scenario() -> list:
        return [await connection.receive(), await connection.receive()]

    first, second = asyncio.run(scenario())

    assert first == ConnectionClosed(code=1011, reason="internal error")
    assert second == ConnectionClosed(code=4000, reason="session ended")


def test_receive_maps_lost_connection_to_failure() -> None:
    """close 프레임 없이 끊긴 연결은 RELAY_TRANSPORT_FAILED를 담은 ConnectionFailed로 변환해야 한다."""

    connection = _connection(_FakeWebSocket([ConnectionClosedError(None, None)]))

    event = asyncio.run(connection.receive())

    assert isinstance(event, ConnectionFailed)
    assert isinstance(event.error, BaseAppException)
    assert event.error.code == ErrorCode.RELAY_TRANSPORT_FAILED


def test_relay_keeps_backend_error_when_backend_closes_with_1011() -> None:
    """error 프레임 뒤 1011로 닫히면 에러 표시를 유지한 채 정상 반환해야 한다."""

    websocket = _FakeWebSocket(
        [
            ack().raw,
            backend_error("backend down").raw,
            ConnectionClosedError(Close(1011, "internal error"), None),
        ]
    )
    connector = _StaticConnector(_connection(websocket))
    clock = FakeClock()
    sink = FakeSink(clock=clock)
    relay = StreamingRelay(
        connector=connector,
        backend_base_url="ws://backend/ws",
        ack_marker=DEFAULT_ACK_MARKER,
        clock=clock,
        logger=quiet_logger(),
    )

    snapshot = asyncio.run(relay.relay("status", sink))

    assert snapshot.state is SessionState.CLOSED
    assert sink.last_text == RelayMessages.backend_error("backend down")
    assert websocket.closed is True


def test_send_failure_is_transport_error() -> None:
    """전송 실패는 RELAY_TRANSPORT_FAILED 예외로 변환해야 한다."""

    connection = _connection(_FakeWebSocket(send_error=ConnectionClosedError(None, None)))

    with pytest.raises(BaseAppException) as excinfo:
        asyncio.run(connection.send('{"type": "chat", "content": "hi"}'))

    assert excinfo.value.code == ErrorCode.RELAY_TRANSPORT_FAILED


def test_close_delegates_to_websocket() -> None:
    """close는 하위 WebSocket을 닫아야 한다."""

    websocket = _FakeWebSocket()
    asyncio.run(_connection(websocket).close())
    assert websocket.closed is True


def test_connect_with_invalid_uri_is_transport_error() -> None:
    """잘못된 주소로 연결하면 RELAY_TRANSPORT_FAILED 예외가 발생해야 한다."""

    connector = WebSocketBackendConnector(connect_timeout_seconds=1.0, logger=quiet_logger())

    with pytest.raises(BaseAppException) as excinfo:
        asyncio.run(connector.connect("not-a-websocket-uri"))

    assert excinfo.value.code == ErrorCode.RELAY_TRANSPORT_FAILED
