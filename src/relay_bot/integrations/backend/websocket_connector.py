"""
목적: 백엔드 WebSocket 연결 어댑터를 제공한다.
설명: `websockets` 비동기 클라이언트로 세션별 연결을 열고, 수신 결과를 중계 생명주기 이벤트로 변환한다.
디자인 패턴: 어댑터
참조: src/relay_bot/shared/relay/interface/ports.py, src/relay_bot/shared/relay/models/event.py
"""

from __future__ import annotations

from typing import Optional

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, WebSocketException

from relay_bot.shared.const import ErrorCode
from relay_bot.shared.exceptions import BaseAppException, ExceptionDetail
from relay_bot.shared.logging import Logger, create_default_logger
from relay_bot.shared.relay.models import ConnectionClosed as ConnectionClosedEvent
from relay_bot.shared.relay.models import ConnectionFailed, FrameReceived, RelayEvent


class WebSocketBackendConnection:
    """세션 1건에 속한 백엔드 WebSocket 연결.

    상대가 보낸 close 프레임이 있으면 종료 코드와 무관하게 `ConnectionClosed` 이벤트로 변환한다.
    close 프레임 없이 끊긴 연결과 네트워크/프로토콜 오류만 `ConnectionFailed` 이벤트로 변환한다.
    """

    def __init__(self, websocket: ClientConnection, url: str, logger: Optional[Logger] = None) -> None:
        self._websocket = websocket
        self._url = url
        self._logger = logger or create_default_logger("WebSocketBackendConnection")

    async def receive(self) -> RelayEvent:
        try:
            raw = await self._websocket.recv()
        except ConnectionClosedOK as closed:
            return ConnectionClosedEvent(**_close_info(closed))
        except ConnectionClosed as closed:
            if closed.rcvd is not None:
                self._logger.info(f"backend.ws.closed: {_close_info(closed)}")
                return ConnectionClosedEvent(**_close_info(closed))
            self._logger.warning(f"backend.ws.connection_lost: {_close_info(closed)}")
            return ConnectionFailed(error=_transport_error("백엔드 연결이 비정상 종료되었습니다.", closed))
        except (OSError, WebSocketException) as error:
            return ConnectionFailed(error=_transport_error("백엔드 수신 중 오류가 발생했습니다.", error))
        self._logger.debug(f"backend.ws.frame: size={len(raw)}")
        return FrameReceived(raw=raw)

    async def send(self, payload: str) -> None:
        try:
            await self._websocket.send(payload)
        except (OSError, WebSocketException) as error:
            raise _transport_error("백엔드로 요청을 전송할 수 없습니다.", error) from error

    async def close(self) -> None:
        await self._websocket.close()


class WebSocketBackendConnector:
    """백엔드 WebSocket 연결 생성기.

    Args:
        connect_timeout_seconds: 핸드셰이크 완료까지 기다릴 시간(초).
        ping_interval_seconds: keepalive ping 간격(초). None이면 끈다.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        connect_timeout_seconds: float = 10.0,
        ping_interval_seconds: Optional[float] = 20.0,
        logger: Optional[Logger] = None,
    ) -> None:
        self._connect_timeout = connect_timeout_seconds
        self._ping_interval = ping_interval_seconds
        self._logger = logger or create_default_logger("WebSocketBackendConnector")

    async def connect(self, url: str) -> WebSocketBackendConnection:
        """연결을 열고 어댑터를 반환한다.

        Raises:
            BaseAppException: 주소 오류, 핸드셰이크 실패, 네트워크 오류, 시간 초과(RELAY_TRANSPORT_FAILED).
        """

        try:
            websocket = await connect(
                url,
                open_timeout=self._connect_timeout,
                ping_interval=self._ping_interval,
            )
        except (OSError, TimeoutError, WebSocketException) as error:
            self._logger.error(f"backend.ws.connect_failed: error={error!r}")
            raise _transport_error("백엔드 연결을 열 수 없습니다.", error) from error
        self._logger.info("backend.ws.connected")
        return WebSocketBackendConnection(websocket, url, logger=self._logger)


def _close_info(closed: ConnectionClosed) -> dict:
    frame = closed.rcvd
    if frame is None:
        return {"code": None, "reason": ""}
    return {"code": frame.code, "reason": frame.reason}


def _transport_error(message: str, error: BaseException) -> BaseAppException:
    detail = ExceptionDetail(code=ErrorCode.RELAY_TRANSPORT_FAILED, cause=repr(error))
    return BaseAppException(message, detail, original=error)
