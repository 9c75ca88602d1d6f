"""
목적: 요청 단위 스트리밍 중계 실행기를 제공한다.
설명: 세션 ID 생성, 백엔드 연결 수립, 이벤트 수신 루프, 시계 기준 시간 초과 강제 종료를 담당하고 이벤트 해석은 RelaySession에 위임한다.
디자인 패턴: 서비스 레이어 + 템플릿 메서드
참조: src/relay_bot/shared/relay/services/relay_session.py, src/relay_bot/shared/relay/interface/ports.py
"""

from __future__ import annotations

import asyncio
from typing import Optional

from relay_bot.shared.const import ErrorCode
from relay_bot.shared.exceptions import BaseAppException, ExceptionDetail
from relay_bot.shared.logging import LogContext, Logger, create_default_logger
from relay_bot.shared.relay.const import RelayDefaults
from relay_bot.shared.relay.interface import (
    BackendConnectionPort,
    BackendConnectorPort,
    ClockPort,
    OutputSinkPort,
)
from relay_bot.shared.relay.models import (
    ConnectionFailed,
    ConnectionOpened,
    RelayEvent,
    SessionSnapshot,
    SessionTimedOut,
)
from relay_bot.shared.relay.services.output_projector import OutputProjector
from relay_bot.shared.relay.services.relay_session import RelaySession
from relay_bot.shared.relay.utils import MonotonicClock, build_backend_url, generate_session_id


class StreamingRelay:
    """스트리밍 중계 실행기.

    요청마다 새 세션 ID, 새 연결, 새 출력 투영기를 만들며 세션 사이에 공유하는 상태는 없다.
    연결 종료와 시간 초과는 정상 반환하고, 전송 계층 오류만 `RELAY_TRANSPORT_FAILED`로 전파한다.

    Args:
        connector: 백엔드 연결 생성기.
        backend_base_url: 백엔드 기본 주소. 세션 ID가 경로로 붙는다.
        ack_marker: 확인 응답 표식.
        session_timeout_seconds: 연결 시점부터 강제 종료까지의 시간(초).
        update_interval_seconds: 출력 메시지 갱신 최소 간격(초).
        default_retry_after_seconds: Retry-After 누락 시 대기 시간(초).
        clock: 출력 스로틀과 세션 제한 시간에 쓰는 시계.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        connector: BackendConnectorPort,
        backend_base_url: str,
        ack_marker: str,
        session_timeout_seconds: float = RelayDefaults.SESSION_TIMEOUT_SECONDS,
        update_interval_seconds: float = RelayDefaults.UPDATE_INTERVAL_SECONDS,
        default_retry_after_seconds: int = RelayDefaults.DEFAULT_RETRY_AFTER_SECONDS,
        clock: Optional[ClockPort] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._connector = connector
        self._backend_base_url = backend_base_url
        self._ack_marker = ack_marker
        self._session_timeout = float(session_timeout_seconds)
        self._update_interval = float(update_interval_seconds)
        self._default_retry_after = int(default_retry_after_seconds)
        self._clock = clock or MonotonicClock()
        self._logger = logger or create_default_logger("StreamingRelay")

    async def relay(self, request_text: str, sink: OutputSinkPort) -> SessionSnapshot:
        """요청 1건을 중계하고 연결이 닫힐 때까지 기다린다.

        Returns:
            종료 시점의 세션 스냅샷.

        Raises:
            BaseAppException: 연결 수립 또는 연결 중 전송 계층 오류(RELAY_TRANSPORT_FAILED).
        """

        session_id = generate_session_id()
        logger = self._logger.with_context(LogContext(request_id=session_id))
        url = build_backend_url(self._backend_base_url, session_id)
        logger.info(f"relay.connect: session_id={session_id}")
        connection = await self._open(url, session_id)

        session = RelaySession(
            session_id=session_id,
            request_text=request_text,
            connection=connection,
            projector=OutputProjector(
                sink=sink,
                interval_seconds=self._update_interval,
                default_retry_after_seconds=self._default_retry_after,
                clock=self._clock,
                logger=logger,
            ),
            ack_marker=self._ack_marker,
            logger=logger,
        )
        deadline = self._clock.now() + self._session_timeout
        try:
            await session.handle(ConnectionOpened())
            while not session.is_terminal:
                remaining = deadline - self._clock.now()
                if remaining <= 0:
                    logger.warning(f"relay.timeout: session_id={session_id}, seconds={self._session_timeout}")
                    await self._close_quietly(connection, logger)
                    await session.handle(SessionTimedOut())
                    break
                event = await self._next_event(connection, remaining)
                if event is not None:
                    await session.handle(event)
        finally:
            await self._close_quietly(connection, logger)

        snapshot = session.snapshot()
        logger.info(f"relay.finished: session_id={session_id}, state={snapshot.state.value}")
        if session.failure is not None:
            raise session.failure
        return snapshot

    async def _open(self, url: str, session_id: str) -> BackendConnectionPort:
        try:
            return await self._connector.connect(url)
        except BaseAppException:
            raise
        except Exception as error:
            detail = ExceptionDetail(
                code=ErrorCode.RELAY_TRANSPORT_FAILED,
                cause=repr(error),
                metadata={"session_id": session_id},
            )
            raise BaseAppException("백엔드 연결을 열 수 없습니다.", detail, original=error) from error

    async def _next_event(self, connection: BackendConnectionPort, timeout: float) -> Optional[RelayEvent]:
        try:
            return await self._clock.wait_for(connection.receive(), timeout)
        except asyncio.TimeoutError:
            return None
        except BaseAppException as error:
            return ConnectionFailed(error=error)

    async def _close_quietly(self, connection: BackendConnectionPort, logger: Logger) -> None:
        try:
            await connection.close()
        except Exception as error:  # noqa: BLE001 - 종료 실패는 결과에 영향을 주지 않는다
            logger.warning(f"relay.close_failed: error={error!r}")
